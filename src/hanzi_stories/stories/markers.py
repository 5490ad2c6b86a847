"""Fixed labels, markers and syllable sets used by the stories outline."""

from __future__ import annotations

import re

import regex

NO_PRONUNCIATION = "(no pronunciation)"

# Root children before the "(no pronunciation)" anchor are template leftovers.
ANCHOR_INDEX = 2

TONGUE_MARKER = "👅"
TONE_LABELS = frozenset({"1", "2", "3", "4", "5"})

BREAKDOWN_MARKER = "🧩"
NOTE_MARKER = "📌"

MOVIE_SET_TAG = "🎬"
WHEEL_TAG = "🎡"
POURING_RAIN_TAG = "🌧"
OLD_WEST_TAG = "🤠"
SCI_FI_TAG = "🚀"
POLICE_DRAMA_TAG = "🚔"

# Syllables that rhyme with 雨 (yǔ) and so belong to the pouring-rain category.
POURING_RAIN_SYLLABLES = frozenset({"ju", "qu", "xu", "yu", "lü", "nü"})
# Older yu stories predate the category and may stay untagged.
POURING_RAIN_GRANDFATHERED = "yu"

PINYIN_PATTERN = re.compile(r"^(ü|[a-z])+[1-5]?$")
HEADER_PATTERN = re.compile(r"^[^:]+: \S")
# One user-perceived character; a hanzi may carry a variation selector.
SINGLE_GRAPHEME = regex.compile(r"\X")

_TONE_SUFFIX = re.compile(r"[1-5]$")


def strip_tone(pinyin: str) -> str:
    """Drop a trailing tone digit: ``"ju3"`` -> ``"ju"``."""
    return _TONE_SUFFIX.sub("", pinyin)
