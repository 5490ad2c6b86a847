"""Violation and report types shared by the story audit modules."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Violation:
    """A single failed rule.

    Attributes:
        path: Position of the offending node, e.g. ``"ju/2"`` or
            ``"(no pronunciation)"``. Empty for document-level failures.
        character: The hanzi, when the entry got far enough to parse it.
        rule_id: Identifier of the failed rule.
        message: Human-readable description of the failure.
    """

    path: str
    character: str | None
    rule_id: str
    message: str

    def format(self) -> str:
        """Render as ``"{path}/{character}: {message}"``."""
        location = self.path
        if self.character is not None:
            location = f"{location}/{self.character}" if location else self.character
        return f"{location}: {self.message}" if location else self.message


@dataclass
class AuditReport:
    """Ordered collection of violations from one audit run.

    Attributes:
        violations: Violations in the order they were found.
        entries_checked: Number of story entries that reached the parser.
        entries_failed: Number of story entries with at least one violation.
        aborted: True when the document structure stopped the walk early.
    """

    violations: list[Violation] = field(default_factory=list)
    entries_checked: int = 0
    entries_failed: int = 0
    aborted: bool = False

    def add(self, violation: Violation) -> None:
        self.violations.append(violation)

    @property
    def has_failures(self) -> bool:
        """True if any violation was recorded."""
        return bool(self.violations)

    @property
    def passed(self) -> bool:
        """True only for a clean run that actually checked something."""
        return not self.aborted and not self.violations and self.entries_checked > 0

    def by_rule(self, rule_id: str) -> list[Violation]:
        return [v for v in self.violations if v.rule_id == rule_id]

    @property
    def summary(self) -> str:
        """Human-readable summary of the run."""
        if self.aborted:
            return "Audit aborted: document structure is invalid"
        if self.entries_checked == 0 and not self.violations:
            return "No story entries checked"
        if not self.violations:
            return f"All {self.entries_checked} story entries passed"
        return (
            f"{len(self.violations)} violation(s) in {self.entries_failed} of "
            f"{self.entries_checked} story entries"
        )
