"""Error types raised while walking and parsing the stories outline."""

from __future__ import annotations

from dataclasses import dataclass, field

from hanzi_stories.stories.validation_types import Violation


class StoryAuditError(Exception):
    """Base class for story audit failures."""


@dataclass
class MissingAnchorError(StoryAuditError):
    """Raised when the root has no ``(no pronunciation)`` group at its anchor slot.

    No story entry can be located without the anchor, so this aborts the
    whole audit.

    Attributes:
        found: Label found at the anchor slot, or None if the slot is missing.
        child_count: Number of children under the root.
    """

    found: str | None
    child_count: int

    def __post_init__(self) -> None:
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.found is None:
            return (
                f'Root has {self.child_count} children; expected "(no pronunciation)" '
                "as the third one"
            )
        return f'Third root child "{self.found}" does not contain "(no pronunciation)"'


@dataclass
class StoryRuleError(StoryAuditError):
    """Raised by the entry parser when a parse rule fails.

    Attributes:
        violations: One or more violations of the same rule, in order.
    """

    violations: list[Violation] = field(default_factory=list)

    def __post_init__(self) -> None:
        first = self.violations[0].format() if self.violations else "story rule failed"
        if len(self.violations) > 1:
            first += f" (+{len(self.violations) - 1} more)"
        super().__init__(first)

    @property
    def rule_id(self) -> str:
        return self.violations[0].rule_id if self.violations else ""
