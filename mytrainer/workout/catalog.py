"""Exercise catalog — the ordered list of exercises for one workout.

The catalog is edited while idle, then locked ("saved") for playback.
Once locked nothing can be added or removed until :meth:`reset`, which
wipes the list rather than re-opening stale entries for editing.

Invalid edits (empty name, bad index, locked catalog) are silent
no-ops: they return ``None`` / ``False`` and leave the list untouched.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Iterator

logger = logging.getLogger(__name__)


# ── constants ─────────────────────────────────────────────────────────────

MIN_DURATION = 10          # seconds
MAX_DURATION = 10 * 60
DURATION_STEP = 10
DEFAULT_DURATION = 60


def clamp_duration(seconds: int) -> int:
    """Clamp *seconds* into ``[MIN_DURATION, MAX_DURATION]``."""
    return max(MIN_DURATION, min(int(seconds), MAX_DURATION))


def snap_duration(seconds: float) -> int:
    """Round half-up to the nearest slider step, then clamp."""
    stepped = int(seconds / DURATION_STEP + 0.5) * DURATION_STEP
    return clamp_duration(stepped)


# ── entry ─────────────────────────────────────────────────────────────────


@dataclass
class ExerciseEntry:
    """One timed exercise in the catalog."""

    name: str
    duration: int
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    has_been_spoken: bool = False

    @property
    def spoken_instruction(self) -> str:
        return f"{self.name} for {self.duration} seconds"

    @property
    def display_text(self) -> str:
        return f"{self.name} - {self.duration} seconds"


# ── catalog ───────────────────────────────────────────────────────────────


class ExerciseCatalog:
    """Ordered, lockable list of :class:`ExerciseEntry`."""

    def __init__(self) -> None:
        self._entries: list[ExerciseEntry] = []
        self._locked: bool = False

    # ── read access ───────────────────────────────────────────────────

    @property
    def entries(self) -> tuple[ExerciseEntry, ...]:
        return tuple(self._entries)

    @property
    def is_locked(self) -> bool:
        return self._locked

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> ExerciseEntry:
        return self._entries[index]

    def __iter__(self) -> Iterator[ExerciseEntry]:
        return iter(list(self._entries))

    def total_duration(self) -> int:
        """Sum of all entry durations in seconds."""
        return sum(e.duration for e in self._entries)

    # ── editing ───────────────────────────────────────────────────────

    def add(self, name: str, duration_seconds: int) -> ExerciseEntry | None:
        """Append a new exercise.  Returns ``None`` when ignored."""
        name = (name or "").strip()
        if not name:
            logger.debug("add ignored: empty name")
            return None
        if self._locked:
            logger.debug("add ignored: catalog is locked")
            return None
        entry = ExerciseEntry(name=name, duration=clamp_duration(duration_seconds))
        self._entries.append(entry)
        return entry

    def remove(self, index: int) -> bool:
        """Remove the entry at *index*.  Returns ``False`` when ignored."""
        if self._locked:
            logger.debug("remove ignored: catalog is locked")
            return False
        if not 0 <= index < len(self._entries):
            logger.debug("remove ignored: index %s out of range", index)
            return False
        del self._entries[index]
        return True

    def lock(self) -> None:
        self._locked = True

    def reset(self) -> None:
        """Clear every entry and unlock."""
        self._entries.clear()
        self._locked = False
