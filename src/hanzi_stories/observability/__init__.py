"""Observability module for Hanzi Stories.

Provides structured logging for the audit and roster tools.
"""

from hanzi_stories.observability.logging import (
    close_file_logging,
    configure_logging,
    get_logger,
    get_logs_dir,
)

__all__ = [
    "close_file_logging",
    "configure_logging",
    "get_logger",
    "get_logs_dir",
]
