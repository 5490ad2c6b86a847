"""Story entry parsing.

Turns a story-entry outline node into a :class:`StoryRecord`. Each parse
step doubles as a rule: the first one that fails raises
:class:`StoryRuleError` and nothing after it runs.

Header template::

    {hanzi}: {pinyin}[,{pinyin}...] | {translation}[,{translation}...] [| {tags}]

Children of the entry are, in order, an optional ``🧩`` breakdown (first
child only), story lines, and ``📌`` notes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hanzi_stories.stories.errors import StoryRuleError
from hanzi_stories.stories.markers import (
    BREAKDOWN_MARKER,
    HEADER_PATTERN,
    MOVIE_SET_TAG,
    NO_PRONUNCIATION,
    NOTE_MARKER,
    OLD_WEST_TAG,
    PINYIN_PATTERN,
    POLICE_DRAMA_TAG,
    POURING_RAIN_TAG,
    SCI_FI_TAG,
    SINGLE_GRAPHEME,
    WHEEL_TAG,
)
from hanzi_stories.stories.record import Setting, StoryRecord
from hanzi_stories.stories.validation_types import Violation

if TYPE_CHECKING:
    from hanzi_stories.outline.nodes import OutlineNode

__all__ = [
    "SETTING_TAGS",
    "format_header",
    "parse_story_entry",
]

SETTING_TAGS: dict[str, Setting] = {
    MOVIE_SET_TAG: Setting.MOVIE_SET,
    OLD_WEST_TAG: Setting.OLD_WEST,
    SCI_FI_TAG: Setting.SCI_FI,
    POLICE_DRAMA_TAG: Setting.POLICE_DRAMA,
}


def _fail(path: str, character: str | None, rule_id: str, message: str) -> StoryRuleError:
    return StoryRuleError([Violation(path, character, rule_id, message)])


def _split_list(segment: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in segment.split(","))


def _scan_tags(tag_text: str | None) -> tuple[frozenset[str], frozenset[Setting], bool, bool]:
    if not tag_text:
        return frozenset(), frozenset(), False, False
    markers = (*SETTING_TAGS, WHEEL_TAG, POURING_RAIN_TAG)
    tags = frozenset(m for m in markers if m in tag_text)
    settings = frozenset(SETTING_TAGS[m] for m in tags if m in SETTING_TAGS)
    return tags, settings, WHEEL_TAG in tags, POURING_RAIN_TAG in tags


def parse_story_entry(node: OutlineNode, path: str) -> StoryRecord:
    """Parse one story-entry node.

    Args:
        node: The story entry; its label is the header, its children the body.
        path: Position of the entry, e.g. ``"ma/1"``.

    Returns:
        The parsed record.

    Raises:
        StoryRuleError: On the first failing parse rule. A malformed
            pronunciation list reports every bad token at once.
    """
    text = node.text
    is_root = path == NO_PRONUNCIATION

    if not HEADER_PATTERN.match(text):
        message = f'entry "{text}" must begin with character, colon, single space'
        raise _fail(path, None, "header_format", message)

    character, rest = text.split(":", 1)
    if not SINGLE_GRAPHEME.fullmatch(character):
        message = f'hanzi "{character}" is not a single character'
        raise _fail(path, character, "single_character", message)

    segments = [segment.strip() for segment in rest.split("|", 2)]
    if len(segments) < 2:
        message = 'must have pronunciation and translation separated by "|"'
        raise _fail(path, character, "segments", message)
    tag_text = (segments[2] if len(segments) > 2 else "") or None

    # Every malformed token is reported, not just the first.
    pronunciations = _split_list(segments[0])
    bad_tokens = [
        Violation(
            path,
            character,
            "pronunciation_format",
            f'pinyin and tone "{token}" does not match expected pattern',
        )
        for token in pronunciations
        if token != NO_PRONUNCIATION and not PINYIN_PATTERN.match(token)
    ]
    if bad_tokens:
        raise StoryRuleError(bad_tokens)

    translations = _split_list(segments[1])
    if len(pronunciations) != len(translations):
        message = (
            f"{len(pronunciations)} pinyin syllable(s) but {len(translations)} translation(s)"
        )
        raise _fail(path, character, "count_match", message)

    if not is_root:
        path_syllable = path.replace("/", "")
        if pronunciations[0] != path_syllable:
            message = f'first pinyin "{pronunciations[0]}" does not match path "{path_syllable}"'
            raise _fail(path, character, "first_syllable", message)

    tags, settings, is_wheel, is_pouring_rain = _scan_tags(tag_text)

    has_movie_set = Setting.MOVIE_SET in settings
    if len(pronunciations) > 1 and not has_movie_set:
        message = "multiple pinyin syllables require the movie-set tag"
        raise _fail(path, character, "movie_set_cardinality", message)
    if has_movie_set and len(pronunciations) <= 1:
        message = "movie-set tag requires multiple pinyin syllables"
        raise _fail(path, character, "movie_set_cardinality", message)

    breakdown_text: str | None = None
    story_lines: list[str] = []
    notes: list[str] = []
    for index, child in enumerate(node.children):
        if child.children:
            raise _fail(path, character, "grandchild_nodes", "must not have grandchild nodes")
        if child.text.startswith(BREAKDOWN_MARKER):
            if breakdown_text is not None:
                message = "must have at most one hanzi breakdown"
                raise _fail(path, character, "breakdown_position", message)
            if index != 0:
                message = "hanzi breakdown must be the first child"
                raise _fail(path, character, "breakdown_position", message)
            breakdown_text = child.text[len(BREAKDOWN_MARKER) :].strip()
        elif child.text.startswith(NOTE_MARKER):
            notes.append(child.text[len(NOTE_MARKER) :].strip())
        else:
            story_lines.append(child.text)

    if not node.children and not is_root:
        raise _fail(path, character, "has_children", "must have child nodes")

    return StoryRecord(
        path=path,
        character=character,
        pronunciations=pronunciations,
        translations=translations,
        tags=tags,
        tag_text=tag_text,
        settings=settings,
        is_wheel=is_wheel,
        is_pouring_rain=is_pouring_rain,
        breakdown_text=breakdown_text,
        story_lines=tuple(story_lines),
        notes=tuple(notes),
    )


def format_header(record: StoryRecord) -> str:
    """Serialize a record's header back to outline label form."""
    pronunciations = ",".join(record.pronunciations)
    translations = ",".join(record.translations)
    header = f"{record.character}: {pronunciations} | {translations}"
    if record.tag_text:
        header += f" | {record.tag_text}"
    return header
