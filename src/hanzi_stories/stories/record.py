"""Parsed story entry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from hanzi_stories.stories.markers import NO_PRONUNCIATION, strip_tone


class Setting(Enum):
    """Mutually exclusive story settings."""

    NONE = "none"
    MOVIE_SET = "movie set"
    OLD_WEST = "old west"
    SCI_FI = "sci-fi"
    POLICE_DRAMA = "police drama"


@dataclass(frozen=True)
class StoryRecord:
    """One story entry, parsed from an outline node and its children.

    Attributes:
        path: Position of the entry, e.g. ``"ma/1"`` or ``"(no pronunciation)"``.
        character: The hanzi being described.
        pronunciations: Pinyin tokens (with optional tone digit) or the
            ``(no pronunciation)`` sentinel.
        translations: One translation per pronunciation.
        tags: Genre markers found in the header's tag segment.
        tag_text: The tag segment exactly as written (trimmed), or None.
        settings: Every setting marker found. Valid entries have at most one.
        is_wheel: Wheel story flag.
        is_pouring_rain: Pouring-rain story flag.
        breakdown_text: Text of the breakdown child after its marker, or None.
        story_lines: Narrative lines, verbatim.
        notes: Note lines with the marker removed.
    """

    path: str
    character: str
    pronunciations: tuple[str, ...]
    translations: tuple[str, ...]
    tags: frozenset[str] = frozenset()
    tag_text: str | None = None
    settings: frozenset[Setting] = frozenset()
    is_wheel: bool = False
    is_pouring_rain: bool = False
    breakdown_text: str | None = None
    story_lines: tuple[str, ...] = field(default_factory=tuple)
    notes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_root(self) -> bool:
        """True for legacy entries under the ``(no pronunciation)`` group."""
        return self.path == NO_PRONUNCIATION

    @property
    def setting(self) -> Setting | None:
        """The single story setting, ``Setting.NONE`` without one.

        None when the header carries conflicting setting markers; the
        ``setting_exclusive`` rule reports those.
        """
        if not self.settings:
            return Setting.NONE
        if len(self.settings) > 1:
            return None
        return next(iter(self.settings))

    @property
    def is_movie_set(self) -> bool:
        return Setting.MOVIE_SET in self.settings

    @property
    def breakdown(self) -> tuple[str, ...] | None:
        """Breakdown elements split on ``+``, or None without a breakdown."""
        if self.breakdown_text is None:
            return None
        return tuple(part.strip() for part in self.breakdown_text.split("+"))

    @property
    def first_syllable(self) -> str:
        """First pronunciation with its tone digit removed."""
        return strip_tone(self.pronunciations[0]) if self.pronunciations else ""
