"""Structured logging for the audit tools.

Console output goes through rich on stderr and is quiet unless ``-v`` is
given. With a log directory, every event is also appended to
``{log_dir}/audit.jsonl`` so audit runs can be compared later.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger, Processor

AUDIT_LOG_NAME = "audit.jsonl"

_VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}

_file_handler: logging.FileHandler | None = None


class JSONLFileHandler(logging.FileHandler):
    """Append one JSON object per log record.

    structlog hands its event dict over as ``record.msg``; its keys become
    top-level fields next to ``timestamp``, ``level`` and ``logger``.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry: dict[str, Any] = {
                "timestamp": datetime.now(UTC).isoformat(),
                "level": record.levelname,
                "logger": record.name,
            }
            if isinstance(record.msg, dict):
                context = {
                    k: v for k, v in record.msg.items() if k not in ("level", "timestamp")
                }
                entry["message"] = context.pop("event", "")
                entry.update(context)
            else:
                entry["message"] = record.getMessage()

            if self.stream:
                self.stream.write(json.dumps(entry, ensure_ascii=False, default=str) + "\n")
                self.stream.flush()
        except Exception:
            self.handleError(record)


def _console_handler(verbosity: int) -> RichHandler:
    return RichHandler(
        console=Console(stderr=True),
        level=_VERBOSITY_LEVELS.get(verbosity, logging.DEBUG),
        show_time=verbosity >= 1,
        show_path=verbosity >= 2,
        markup=False,
        rich_tracebacks=True,
    )


def configure_logging(verbosity: int = 0, log_dir: Path | None = None) -> None:
    """Set up console and optional JSONL logging.

    Calling it again replaces the previous setup and closes any open log file.

    Args:
        verbosity: 0 shows warnings, 1 adds info, 2 or more adds debug.
        log_dir: Directory for ``audit.jsonl``. Created if missing.
    """
    global _file_handler

    close_file_logging()

    handlers: list[logging.Handler] = [_console_handler(verbosity)]
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        _file_handler = JSONLFileHandler(log_dir / AUDIT_LOG_NAME, mode="a", encoding="utf-8")
        _file_handler.setLevel(logging.DEBUG)
        handlers.append(_file_handler)

    # The file records everything; the console handler filters on its own level.
    root_level = logging.DEBUG if verbosity > 0 or log_dir is not None else logging.WARNING
    logging.basicConfig(level=root_level, format="%(message)s", handlers=handlers, force=True)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Return a structlog logger, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()
    logger: FilteringBoundLogger = structlog.get_logger(name)
    return logger


def get_logs_dir() -> Path | None:
    """Directory of the open ``audit.jsonl``, or None when file logging is off."""
    if _file_handler is None:
        return None
    return Path(_file_handler.baseFilename).parent


def close_file_logging() -> None:
    """Close ``audit.jsonl`` if it is open."""
    global _file_handler
    if _file_handler is not None:
        _file_handler.close()
        _file_handler = None
