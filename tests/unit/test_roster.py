"""Tests for the flattened character roster."""

from __future__ import annotations

from hanzi_stories.outline.nodes import OutlineNode
from hanzi_stories.stories.roster import RosterEntry, load_all_entries, roster_characters
from tests.fixtures.story_fixtures import (
    SKIPPED,
    entry,
    group,
    make_outline,
    make_valid_outline,
    tone,
)


def test_roster_of_valid_outline() -> None:
    roster = load_all_entries(make_valid_outline())

    assert roster[0] == RosterEntry(character="的", path="(no pronunciation)", translation="of")
    assert roster[1] == RosterEntry(character="妈", path="ma/1", translation="mother")
    assert [e.character for e in roster] == ["的", "妈", "轮", "举", "重", "牛"]
    assert roster_characters(roster) == {"的", "妈", "轮", "举", "重", "牛"}


def test_malformed_entries_still_listed() -> None:
    outline = make_outline(
        group(
            "ma",
            tone(
                "1",
                entry("妈妈:ma1|mom"),
                entry("马 no colon at all"),
                entry(": orphan | x"),
            ),
        ),
        group("hei", tone("x", entry("嘿: hei1 | hey"))),
    )
    roster = load_all_entries(outline)

    assert roster == [
        RosterEntry(character="妈妈", path="ma/1", translation="mom"),
        RosterEntry(character="马 no colon at all", path="ma/1", translation=""),
        RosterEntry(character="嘿", path="hei/x", translation="hey"),
    ]


def test_translation_is_second_segment_only() -> None:
    outline = make_outline(root_entries=(entry("重: zhong4,chong2 | heavy,repeat | 🎬"),))
    assert load_all_entries(outline)[0].translation == "heavy,repeat"


def test_mislabeled_anchor_still_read() -> None:
    outline = make_outline(anchor="no pinyin", root_entries=(entry("的: de | of"),))
    assert [e.character for e in load_all_entries(outline)] == ["的"]


def test_short_root_gives_empty_roster() -> None:
    assert load_all_entries(OutlineNode("字 HANZI", SKIPPED)) == []
