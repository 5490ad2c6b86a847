"""Flatten the stories outline into a character roster.

Same walk as the audit, without the rules. Malformed entries are kept
as best as they can be read so callers always get a full roster.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hanzi_stories.observability.logging import get_logger
from hanzi_stories.stories.markers import ANCHOR_INDEX, NO_PRONUNCIATION, TONGUE_MARKER

if TYPE_CHECKING:
    from collections.abc import Iterable

    from hanzi_stories.outline.nodes import OutlineNode

log = get_logger(__name__)


@dataclass(frozen=True)
class RosterEntry:
    """A character and where it lives in the outline."""

    character: str
    path: str
    translation: str


def _roster_entry(node: OutlineNode, path: str) -> RosterEntry | None:
    character, _, rest = node.text.partition(":")
    character = character.strip()
    if not character:
        log.warning("roster_entry_skipped", path=path, text=node.text)
        return None
    segments = rest.split("|")
    translation = segments[1].strip() if len(segments) > 1 else ""
    return RosterEntry(character=character, path=path, translation=translation)


def _collect(nodes: Iterable[OutlineNode], path: str) -> list[RosterEntry]:
    entries = (_roster_entry(node, path) for node in nodes)
    return [entry for entry in entries if entry is not None]


def load_all_entries(root: OutlineNode) -> list[RosterEntry]:
    """Return every story entry as a :class:`RosterEntry`, in document order.

    Never raises on malformed content. A mislabeled anchor is logged and
    its children are still read; a root too short to have an anchor gives
    an empty roster.
    """
    if len(root.children) <= ANCHOR_INDEX:
        log.warning("roster_anchor_missing", children=len(root.children))
        return []

    anchor = root.children[ANCHOR_INDEX]
    if NO_PRONUNCIATION not in anchor.text:
        log.warning("roster_anchor_mislabeled", label=anchor.text)

    roster = _collect(anchor.children, NO_PRONUNCIATION)
    for group in root.children[ANCHOR_INDEX + 1 :]:
        for tone_node in group.children:
            if tone_node.text == TONGUE_MARKER:
                continue
            roster.extend(_collect(tone_node.children, f"{group.text}/{tone_node.text}"))

    log.debug("roster_loaded", entries=len(roster))
    return roster


def roster_characters(roster: Iterable[RosterEntry]) -> set[str]:
    return {entry.character for entry in roster}
