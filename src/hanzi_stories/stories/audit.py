"""Audit the stories outline.

Walks every story entry, parses it and runs the content rules. Failures
are isolated per entry: the first failing rule ends that entry's checks
and the walk moves on. Only a missing ``(no pronunciation)`` anchor stops
the whole audit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hanzi_stories.observability.logging import get_logger
from hanzi_stories.stories.errors import MissingAnchorError, StoryRuleError
from hanzi_stories.stories.navigator import iter_story_entries
from hanzi_stories.stories.parser import parse_story_entry
from hanzi_stories.stories.rules import check_story_record
from hanzi_stories.stories.validation_types import AuditReport, Violation

if TYPE_CHECKING:
    from hanzi_stories.outline.nodes import OutlineNode

log = get_logger(__name__)


def audit_entry(node: OutlineNode, path: str) -> list[Violation]:
    """Parse and check one story entry.

    Returns:
        The violations of the first failing rule, or an empty list.
    """
    try:
        record = parse_story_entry(node, path)
    except StoryRuleError as e:
        return list(e.violations)

    violation = check_story_record(record)
    return [violation] if violation is not None else []


def audit_stories(root: OutlineNode, report: AuditReport | None = None) -> AuditReport:
    """Audit every story entry below ``root``.

    Args:
        root: The pronunciation-list node of the stories outline.
        report: Collector to append to. A new one is created if omitted.

    Returns:
        The report with every violation in document order.

    Raises:
        MissingAnchorError: If no entries can be located. The failure is
            recorded in ``report`` before raising.
    """
    report = report if report is not None else AuditReport()

    try:
        for path, node in iter_story_entries(root, report):
            report.entries_checked += 1
            violations = audit_entry(node, path)
            if not violations:
                continue
            report.entries_failed += 1
            for violation in violations:
                report.add(violation)
                log.info(
                    "story_rule_failed",
                    path=violation.path,
                    character=violation.character,
                    rule=violation.rule_id,
                    message=violation.message,
                )
    except MissingAnchorError as e:
        report.aborted = True
        report.add(Violation("", None, "no_pronunciation_anchor", str(e)))
        log.error("audit_aborted", reason=str(e))
        raise

    if report.passed:
        log.info("audit_clean", entries=report.entries_checked)
    else:
        log.info(
            "audit_complete",
            entries=report.entries_checked,
            failed=report.entries_failed,
            violations=len(report.violations),
        )
    return report
