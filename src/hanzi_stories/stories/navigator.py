"""Locate story entries in the stories outline.

Outline layout::

    root
    ├── (skipped)
    ├── (skipped)
    ├── (no pronunciation)          <- story entries directly below
    ├── ma                          <- pronunciation group
    │   ├── 👅                      <- ignored
    │   ├── 1                       <- tone group, story entries below
    │   └── 3
    └── ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hanzi_stories.observability.logging import get_logger
from hanzi_stories.stories.errors import MissingAnchorError
from hanzi_stories.stories.markers import (
    ANCHOR_INDEX,
    NO_PRONUNCIATION,
    TONE_LABELS,
    TONGUE_MARKER,
)
from hanzi_stories.stories.validation_types import Violation

if TYPE_CHECKING:
    from collections.abc import Iterator

    from hanzi_stories.outline.nodes import OutlineNode
    from hanzi_stories.stories.validation_types import AuditReport

log = get_logger(__name__)


def find_anchor(root: OutlineNode) -> OutlineNode:
    """Return the ``(no pronunciation)`` group at its fixed position.

    Raises:
        MissingAnchorError: If the root is too short or the slot is mislabeled.
    """
    if len(root.children) <= ANCHOR_INDEX:
        raise MissingAnchorError(found=None, child_count=len(root.children))
    anchor = root.children[ANCHOR_INDEX]
    if NO_PRONUNCIATION not in anchor.text:
        raise MissingAnchorError(found=anchor.text, child_count=len(root.children))
    return anchor


def pronunciation_groups(root: OutlineNode) -> tuple[OutlineNode, ...]:
    """Pronunciation groups are every root child after the anchor."""
    return root.children[ANCHOR_INDEX + 1 :]


def iter_story_entries(
    root: OutlineNode,
    report: AuditReport,
) -> Iterator[tuple[str, OutlineNode]]:
    """Yield ``(path, entry_node)`` for every story entry in document order.

    A pronunciation group child that is neither the tongue marker nor a
    tone digit is recorded in ``report`` and its subtree skipped.

    Raises:
        MissingAnchorError: If the ``(no pronunciation)`` anchor is missing.
    """
    anchor = find_anchor(root)
    for entry in anchor.children:
        yield NO_PRONUNCIATION, entry

    for group in pronunciation_groups(root):
        syllable = group.text
        for tone_node in group.children:
            if tone_node.text == TONGUE_MARKER:
                continue
            if tone_node.text not in TONE_LABELS:
                violation = Violation(
                    path=syllable,
                    character=None,
                    rule_id="tone_level",
                    message=(
                        f'"{tone_node.text}" is neither a tone level (1-5) '
                        f'nor "{TONGUE_MARKER}"'
                    ),
                )
                report.add(violation)
                log.info("tone_level_invalid", path=syllable, label=tone_node.text)
                continue
            path = f"{syllable}/{tone_node.text}"
            for entry in tone_node.children:
                yield path, entry
