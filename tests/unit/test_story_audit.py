"""Tests for the outline walk and the full story audit."""

from __future__ import annotations

import pytest

from hanzi_stories.outline.nodes import OutlineNode
from hanzi_stories.stories.audit import audit_entry, audit_stories
from hanzi_stories.stories.errors import MissingAnchorError
from hanzi_stories.stories.navigator import iter_story_entries
from hanzi_stories.stories.parser import parse_story_entry
from hanzi_stories.stories.validation_types import AuditReport
from tests.fixtures.story_fixtures import (
    SKIPPED,
    entry,
    group,
    make_outline,
    make_valid_outline,
    tone,
)


class TestNavigator:
    def test_yields_entries_in_document_order(self) -> None:
        report = AuditReport()
        paths = [path for path, _ in iter_story_entries(make_valid_outline(), report)]

        assert paths == ["(no pronunciation)", "ma/1", "lun/2", "ju/3", "zhong/4", "niu/2"]
        assert report.violations == []

    def test_tongue_marker_ignored(self) -> None:
        outline = make_outline(group("ei", OutlineNode.of("👅", "ignored child")))
        report = AuditReport()
        assert list(iter_story_entries(outline, report)) == []
        assert report.violations == []

    def test_bad_tone_level_skips_subtree_only(self) -> None:
        outline = make_outline(
            group(
                "ma",
                tone("6", entry("马: ma6 | horse", "line")),
                tone("3", entry("马: ma3 | horse", "🧩 a + b", "line")),
            ),
        )
        report = AuditReport()
        found = list(iter_story_entries(outline, report))

        assert [path for path, _ in found] == ["ma/3"]
        assert len(report.violations) == 1
        violation = report.violations[0]
        assert violation.rule_id == "tone_level"
        assert violation.path == "ma"
        assert violation.character is None

    def test_missing_anchor(self) -> None:
        outline = make_outline(anchor="(pronunciation)")
        with pytest.raises(MissingAnchorError) as exc_info:
            list(iter_story_entries(outline, AuditReport()))
        assert exc_info.value.found == "(pronunciation)"

    def test_anchor_label_may_carry_extra_text(self) -> None:
        outline = make_outline(
            anchor="(no pronunciation) legacy",
            root_entries=(entry("的: de | of"),),
        )
        found = list(iter_story_entries(outline, AuditReport()))
        assert [path for path, _ in found] == ["(no pronunciation)"]

    def test_root_too_short(self) -> None:
        outline = OutlineNode("字 HANZI", SKIPPED)
        with pytest.raises(MissingAnchorError) as exc_info:
            list(iter_story_entries(outline, AuditReport()))
        assert exc_info.value.found is None
        assert exc_info.value.child_count == 2


class TestScenarios:
    def test_scenario_a_plain_entry(self) -> None:
        node = entry("妈: ma1 | mother", "🧩 female + horse", "A mother rides a horse.")
        assert audit_entry(node, "ma/1") == []

        record = parse_story_entry(node, "ma/1")
        assert record.breakdown == ("female", "horse")
        assert record.tags == frozenset()

    def test_scenario_b_root_exemption(self) -> None:
        assert audit_entry(entry("的: de | of"), "(no pronunciation)") == []

    def test_scenario_c_missing_breakdown(self) -> None:
        violations = audit_entry(entry("嘿: hei1 | hey", "Hey there."), "hei/1")
        assert len(violations) == 1
        assert violations[0].rule_id == "breakdown"
        assert "must have hanzi breakdown" in violations[0].message

    def test_scenario_d_movie_set_required(self) -> None:
        node = entry("重: zhong4,chong2 | heavy,repeat", "🧩 a + b", "line")
        violations = audit_entry(node, "zhong/4")
        assert len(violations) == 1
        assert "multiple pinyin syllables require the movie-set tag" in violations[0].message

    def test_scenario_e_pouring_rain_ineligible(self) -> None:
        node = entry("妈: ma1 | mother | 🌧", "🧩 female + horse", "Pouring rain on a horse.")
        violations = audit_entry(node, "ma/1")
        assert len(violations) == 1
        assert violations[0].rule_id == "pouring_rain_syllable"
        assert "must have an eligible pinyin syllable" in violations[0].message

    def test_variation_selector_entry_passes(self) -> None:
        node = entry("葛\U000e0100: ge3 | kudzu", "🧩 grass + hook", "line")
        assert audit_entry(node, "ge/3") == []

    def test_scenario_f_wheel(self) -> None:
        assert audit_entry(entry("轮: lun2 | wheel | 🎡", "Wheel party!"), "lun/2") == []


class TestAuditStories:
    def test_clean_outline_passes(self) -> None:
        report = audit_stories(make_valid_outline())

        assert report.passed
        assert report.entries_checked == 6
        assert report.summary == "All 6 story entries passed"

    def test_empty_outline_is_not_a_pass(self) -> None:
        report = audit_stories(make_outline())

        assert not report.passed
        assert not report.has_failures
        assert report.summary == "No story entries checked"

    def test_failures_are_isolated_per_entry(self) -> None:
        outline = make_outline(
            group(
                "hei",
                tone(
                    "1",
                    entry("嘿: hei1 | hey", "Hey there."),
                    entry("黑: hei1 | black", "🧩 window + fire", "Soot on the window."),
                    entry("嗨: hei2 | hi", "🧩 mouth + sea", "line"),
                ),
            ),
            group("ma", tone("x")),
            root_entries=(entry("的: de"),),
        )
        report = audit_stories(outline)

        assert report.entries_checked == 4
        assert report.entries_failed == 3
        assert [(v.path, v.character, v.rule_id) for v in report.violations] == [
            ("(no pronunciation)", "的", "segments"),
            ("hei/1", "嘿", "breakdown"),
            ("hei/1", "嗨", "first_syllable"),
            ("ma", None, "tone_level"),
        ]
        assert report.summary == "4 violation(s) in 3 of 4 story entries"
        assert [v.character for v in report.by_rule("breakdown")] == ["嘿"]

    def test_every_bad_pronunciation_reported(self) -> None:
        outline = make_outline(
            group("zhong", tone("4", entry("重: ZHONG4,chong9 | heavy,again | 🎬", "line"))),
        )
        report = audit_stories(outline)

        assert report.entries_failed == 1
        assert [v.rule_id for v in report.violations] == [
            "pronunciation_format",
            "pronunciation_format",
        ]

    def test_missing_anchor_is_recorded_then_raised(self) -> None:
        report = AuditReport()
        with pytest.raises(MissingAnchorError):
            audit_stories(make_outline(anchor="(pinyin)"), report)

        assert report.aborted
        assert not report.passed
        assert report.violations[0].rule_id == "no_pronunciation_anchor"
        assert report.summary.startswith("Audit aborted")

    def test_violation_format(self) -> None:
        outline = make_outline(group("hei", tone("1", entry("嘿: hei1 | hey", "Hey there."))))
        report = audit_stories(outline)
        assert report.violations[0].format() == "hei/1/嘿: must have hanzi breakdown"
