"""Content rules for parsed story records.

Each rule is a pure function of a :class:`StoryRecord` returning a failure
message or None. :data:`RULES` fixes the evaluation order and
:func:`check_story_record` stops at the first failure.
"""

from __future__ import annotations

from collections.abc import Callable

from hanzi_stories.stories.markers import POURING_RAIN_GRANDFATHERED, POURING_RAIN_SYLLABLES
from hanzi_stories.stories.record import Setting, StoryRecord
from hanzi_stories.stories.validation_types import Violation

__all__ = [
    "RULES",
    "Rule",
    "check_story_record",
]

Rule = Callable[[StoryRecord], str | None]

MIN_MOVIE_SET_LINES = 4


def _first_line(record: StoryRecord) -> str:
    return record.story_lines[0] if record.story_lines else ""


def check_wheel_no_breakdown(record: StoryRecord) -> str | None:
    """Wheel stories take the place of a breakdown."""
    if record.is_wheel and record.breakdown_text is not None:
        return "wheel story must not have hanzi breakdown"
    return None


def check_breakdown(record: StoryRecord) -> str | None:
    """Non-wheel entries outside the root need a breakdown of 2+ elements."""
    if record.breakdown is None:
        if not record.is_wheel and not record.is_root:
            return "must have hanzi breakdown"
        return None
    if len(record.breakdown) < 2 or not all(record.breakdown):
        return f'hanzi breakdown "{record.breakdown_text}" must be elements joined by "+"'
    return None


def check_setting_exclusive(record: StoryRecord) -> str | None:
    if len(record.settings) > 1:
        names = ", ".join(sorted(s.value for s in record.settings))
        return f"may have only one story setting, found: {names}"
    return None


def check_story_lines(record: StoryRecord) -> str | None:
    if not record.story_lines and not record.is_root:
        return "must have at least one story line"
    return None


def check_wheel_mention(record: StoryRecord) -> str | None:
    if record.is_wheel and "wheel" not in _first_line(record).lower():
        return 'wheel story must mention "wheel" in its first story line'
    return None


def check_movie_set_lines(record: StoryRecord) -> str | None:
    if record.is_movie_set and len(record.story_lines) < MIN_MOVIE_SET_LINES:
        return (
            f"movie-set story must have at least {MIN_MOVIE_SET_LINES} story lines, "
            f"found {len(record.story_lines)}"
        )
    return None


def _opening_rule(setting: Setting, opening: str) -> Rule:
    def check(record: StoryRecord) -> str | None:
        if setting in record.settings and not _first_line(record).startswith(opening):
            return f'{setting.value} story must begin with "{opening}"'
        return None

    check.__name__ = f"check_{setting.name.lower()}_opening"
    return check


check_old_west_opening = _opening_rule(Setting.OLD_WEST, "(Old West")
check_sci_fi_opening = _opening_rule(Setting.SCI_FI, "(Sci-fi")
check_police_drama_opening = _opening_rule(Setting.POLICE_DRAMA, "(Police drama")


def check_pouring_rain_syllable(record: StoryRecord) -> str | None:
    if record.is_pouring_rain and record.first_syllable not in POURING_RAIN_SYLLABLES:
        return (
            "pouring-rain story must have an eligible pinyin syllable, "
            f'not "{record.first_syllable}"'
        )
    return None


def check_pouring_rain_tag(record: StoryRecord) -> str | None:
    syllable = record.first_syllable
    if (
        syllable in POURING_RAIN_SYLLABLES
        and syllable != POURING_RAIN_GRANDFATHERED
        and not record.is_pouring_rain
    ):
        return f'syllable "{syllable}" requires the pouring-rain tag'
    return None


def check_pouring_rain_mention(record: StoryRecord) -> str | None:
    if record.is_pouring_rain and not any(
        "pouring rain" in line.lower() for line in record.story_lines
    ):
        return 'pouring-rain story must mention "pouring rain"'
    return None


RULES: list[tuple[str, Rule]] = [
    ("wheel_no_breakdown", check_wheel_no_breakdown),
    ("breakdown", check_breakdown),
    ("setting_exclusive", check_setting_exclusive),
    ("story_lines", check_story_lines),
    ("wheel_mention", check_wheel_mention),
    ("movie_set_lines", check_movie_set_lines),
    ("old_west_opening", check_old_west_opening),
    ("sci_fi_opening", check_sci_fi_opening),
    ("police_drama_opening", check_police_drama_opening),
    ("pouring_rain_syllable", check_pouring_rain_syllable),
    ("pouring_rain_tag", check_pouring_rain_tag),
    ("pouring_rain_mention", check_pouring_rain_mention),
]


def check_story_record(record: StoryRecord) -> Violation | None:
    """Run :data:`RULES` in order and return the first violation, if any."""
    for rule_id, rule in RULES:
        message = rule(record)
        if message is not None:
            return Violation(record.path, record.character, rule_id, message)
    return None
