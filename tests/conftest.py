"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

HANZI_ENV_VARS = ("HANZI_STORIES_FILE", "HANZI_FREQUENCY_FILE", "HANZI_STORIES_CONFIG")


@pytest.fixture(autouse=True)
def isolate_hanzi_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's shell or .env settings out of test runs."""
    for var in HANZI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fixtures_path() -> Path:
    """Return the directory holding sample outline and frequency files."""
    return Path(__file__).parent / "fixtures"
