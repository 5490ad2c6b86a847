"""Character frequency list checks.

The frequency list is a JSON array indexed by rank, where slot 0 (and any
gaps) are ``null``::

    [null, {"hanzi": "的", "frequency": "1"}, {"hanzi": "一", "frequency": "2"}, ...]
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, Field, StringConstraints, ValidationError

from hanzi_stories.observability.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from hanzi_stories.stories.roster import RosterEntry

log = get_logger(__name__)

MAX_FREQUENCY_RANK = 9000


class FrequencyEntry(BaseModel):
    """One ranked character from the frequency list."""

    hanzi: Annotated[str, StringConstraints(min_length=1, max_length=1)] = Field(
        description="Single hanzi character"
    )
    frequency: int = Field(description="Frequency rank, 1 is most common", ge=1)


class FrequencyListError(Exception):
    """Raised when the frequency list can't be read or has invalid entries."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load frequency list at {path}: {reason}")


def load_frequency_list(path: Path) -> list[FrequencyEntry]:
    """Load and validate a frequency list.

    Returns:
        Entries in file order, ``null`` slots dropped.

    Raises:
        FrequencyListError: If the file is missing, not a JSON array, or
            holds an invalid entry.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise FrequencyListError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise FrequencyListError(path, f"invalid JSON ({e})") from e

    if not isinstance(data, list):
        raise FrequencyListError(path, "expected a JSON array")

    entries: list[FrequencyEntry] = []
    for index, item in enumerate(data):
        if item is None:
            continue
        try:
            entries.append(FrequencyEntry.model_validate(item))
        except ValidationError as e:
            raise FrequencyListError(path, f"entry {index}: {e}") from e

    log.debug("frequency_list_loaded", path=str(path), entries=len(entries))
    return entries


def find_missing_characters(
    roster: Iterable[RosterEntry],
    frequencies: Iterable[FrequencyEntry],
    frequency_max: int,
) -> list[FrequencyEntry]:
    """List frequent characters that have no story.

    Args:
        roster: Characters in the stories outline.
        frequencies: The frequency list.
        frequency_max: Only ranks up to this value are considered.

    Returns:
        Missing entries sorted by rank.

    Raises:
        ValueError: If ``frequency_max`` is outside 1..9000.
    """
    if not 1 <= frequency_max <= MAX_FREQUENCY_RANK:
        raise ValueError(
            f"frequency_max must be between 1 and {MAX_FREQUENCY_RANK}, got {frequency_max}"
        )

    known = {entry.character for entry in roster}
    missing = [
        entry
        for entry in frequencies
        if entry.frequency <= frequency_max and entry.hanzi not in known
    ]
    return sorted(missing, key=lambda entry: entry.frequency)
