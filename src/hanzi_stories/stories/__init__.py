"""Story outline parsing, auditing and flattening."""

from hanzi_stories.stories.audit import audit_entry, audit_stories
from hanzi_stories.stories.errors import MissingAnchorError, StoryAuditError, StoryRuleError
from hanzi_stories.stories.navigator import iter_story_entries
from hanzi_stories.stories.parser import format_header, parse_story_entry
from hanzi_stories.stories.record import Setting, StoryRecord
from hanzi_stories.stories.roster import RosterEntry, load_all_entries, roster_characters
from hanzi_stories.stories.rules import RULES, check_story_record
from hanzi_stories.stories.validation_types import AuditReport, Violation

__all__ = [
    "RULES",
    "AuditReport",
    "MissingAnchorError",
    "RosterEntry",
    "Setting",
    "StoryAuditError",
    "StoryRecord",
    "StoryRuleError",
    "Violation",
    "audit_entry",
    "audit_stories",
    "check_story_record",
    "format_header",
    "iter_story_entries",
    "load_all_entries",
    "parse_story_entry",
    "roster_characters",
]
