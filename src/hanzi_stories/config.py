"""Tool configuration loading.

Settings come from an optional ``hanzi-stories.yaml``::

    stories_path: data/hanzi-stories.opml
    frequency_path: data/hanzi-frequency.json
    frequency_max: 2000
    log_dir: logs

Relative paths are resolved against the config file's directory.
Environment variables ``HANZI_STORIES_FILE`` and ``HANZI_FREQUENCY_FILE``
take precedence over the file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

from hanzi_stories.observability.logging import get_logger

log = get_logger(__name__)

CONFIG_FILENAME = "hanzi-stories.yaml"
DEFAULT_STORIES_PATH = Path("data/hanzi-stories.opml")
DEFAULT_FREQUENCY_PATH = Path("data/hanzi-frequency.json")


@dataclass
class AuditConfig:
    """Paths and limits for the audit tools.

    Attributes:
        stories_path: OPML export of the stories outline.
        frequency_path: JSON frequency list.
        frequency_max: Default rank limit for the missing-characters check.
        log_dir: Directory for JSONL logs, or None to log to console only.
    """

    stories_path: Path = DEFAULT_STORIES_PATH
    frequency_path: Path = DEFAULT_FREQUENCY_PATH
    frequency_max: int | None = None
    log_dir: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> AuditConfig:
        """Create config from dictionary.

        Args:
            data: Parsed YAML mapping.
            base_dir: Directory relative paths are resolved against.

        Returns:
            AuditConfig instance.
        """

        def resolve(value: Any) -> Path | None:
            if value is None:
                return None
            path = Path(str(value))
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path
            return path

        frequency_max = data.get("frequency_max")
        return cls(
            stories_path=resolve(data.get("stories_path")) or DEFAULT_STORIES_PATH,
            frequency_path=resolve(data.get("frequency_path")) or DEFAULT_FREQUENCY_PATH,
            frequency_max=int(frequency_max) if frequency_max is not None else None,
            log_dir=resolve(data.get("log_dir")),
        )

    def with_env_overrides(self) -> AuditConfig:
        """Apply ``HANZI_STORIES_FILE`` / ``HANZI_FREQUENCY_FILE`` if set."""
        stories = os.getenv("HANZI_STORIES_FILE")
        frequency = os.getenv("HANZI_FREQUENCY_FILE")
        return AuditConfig(
            stories_path=Path(stories) if stories else self.stories_path,
            frequency_path=Path(frequency) if frequency else self.frequency_path,
            frequency_max=self.frequency_max,
            log_dir=self.log_dir,
        )


class AuditConfigError(Exception):
    """Raised when the configuration file cannot be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load config at {path}: {reason}")


def load_audit_config(config_path: Path | None = None) -> AuditConfig:
    """Load configuration, falling back to defaults when no file exists.

    Args:
        config_path: Explicit config file. Defaults to ``./hanzi-stories.yaml``;
            a missing default file is not an error.

    Returns:
        AuditConfig with environment overrides applied.

    Raises:
        AuditConfigError: If an explicit file is missing or any file is invalid.
    """
    explicit = config_path is not None
    path = config_path if config_path is not None else Path(CONFIG_FILENAME)

    if not path.exists():
        if explicit:
            raise AuditConfigError(path, "File not found")
        return AuditConfig().with_env_overrides()

    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise AuditConfigError(path, "Expected a mapping at the top level")

        config = AuditConfig.from_dict(dict(data), base_dir=path.parent)
    except Exception as e:
        if isinstance(e, AuditConfigError):
            raise
        raise AuditConfigError(path, str(e)) from e

    log.debug("config_loaded", path=str(path))
    return config.with_env_overrides()
