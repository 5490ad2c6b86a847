"""End-to-end checks against the sample outline export."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from hanzi_stories.cli import app
from hanzi_stories.frequency import find_missing_characters, load_frequency_list
from hanzi_stories.outline import load_opml
from hanzi_stories.stories import audit_stories, load_all_entries

if TYPE_CHECKING:
    from pathlib import Path

    from hanzi_stories.outline import OutlineNode

runner = CliRunner()


@pytest.fixture
def outline(fixtures_path: Path) -> OutlineNode:
    return load_opml(fixtures_path / "hanzi-stories.opml")


def test_audit_sample_outline(outline: OutlineNode) -> None:
    report = audit_stories(outline)

    assert report.entries_checked == 9
    assert [(v.path, v.character, v.rule_id) for v in report.violations] == [
        ("ma/1", "嘛", "breakdown"),
        ("ma/3", "马", "old_west_opening"),
        ("zhong/4", "中", "movie_set_cardinality"),
        ("hei", None, "tone_level"),
    ]
    assert report.summary == "4 violation(s) in 3 of 9 story entries"


def test_roster_reads_every_entry(outline: OutlineNode) -> None:
    characters = [entry.character for entry in load_all_entries(outline)]

    assert characters == ["的", "了", "举", "妈", "嘛", "马", "重", "中", "轮", "黑"]


def test_missing_characters(outline: OutlineNode, fixtures_path: Path) -> None:
    frequencies = load_frequency_list(fixtures_path / "hanzi-frequency.json")

    missing = find_missing_characters(load_all_entries(outline), frequencies, 8)

    assert [(entry.hanzi, entry.frequency) for entry in missing] == [
        ("一", 2),
        ("是", 3),
        ("不", 6),
    ]


def test_cli_audit(fixtures_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    log_dir = tmp_path / "logs"

    result = runner.invoke(
        app, ["--log-dir", str(log_dir), "audit", str(fixtures_path / "hanzi-stories.opml")]
    )

    assert result.exit_code == 1
    assert "ma/1/嘛: must have hanzi breakdown" in result.stdout
    assert (log_dir / "audit.jsonl").exists()
