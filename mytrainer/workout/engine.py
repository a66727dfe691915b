"""Workout playback state machine for MyTrainer.

States
------
IDLE        Catalog editable (or saved and waiting for Start).
RUNNING     Counting down through the saved exercises.
COMPLETED   Last exercise finished; waiting for the user to acknowledge.

Transitions
-----------
IDLE → RUNNING          (start, catalog saved and non-empty)
RUNNING → RUNNING       (tick; next exercise becomes current)
RUNNING → COMPLETED     (tick; last exercise reaches 0)
RUNNING → IDLE          (stop)
COMPLETED → IDLE        (acknowledge_completion; catalog cleared)

Every action that is not valid in the current state is a silent no-op.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..audio.announcer import Announcer, SilentAnnouncer
from .catalog import ExerciseCatalog, ExerciseEntry

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class PlaybackPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 1000
DEFAULT_LANGUAGE_TAG = "en-US"


@dataclass
class PlaybackState:
    running: bool = False
    current_index: int = 0
    exercise_remaining: int = 0
    total_remaining: int = 0


# ── controller ────────────────────────────────────────────────────────────


class SessionController(QObject):
    """Owns the exercise catalog and the playback state of one workout.

    Signals
    -------
    state_changed(phase: PlaybackPhase)
        Emitted on every phase transition.
    countdown(exercise_remaining: int, total_remaining: int)
        Emitted after each tick that leaves the workout running.
    exercise_started(index: int, entry: ExerciseEntry)
        Emitted whenever an exercise becomes current (and is announced).
    catalog_changed()
        Emitted when entries are added/removed or the lock flag changes.
    workout_completed(data: dict)
        Emitted exactly once when the last exercise reaches zero.  Keys:
        ``exercise_count``, ``total_seconds``, ``exercise_names``,
        ``start_time``, ``end_time``.
    """

    state_changed = pyqtSignal(object)
    countdown = pyqtSignal(int, int)
    exercise_started = pyqtSignal(int, object)
    catalog_changed = pyqtSignal()
    workout_completed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        announcer: Announcer | None = None,
        language_tag: str = DEFAULT_LANGUAGE_TAG,
    ) -> None:
        super().__init__(parent)

        self._announcer: Announcer = announcer or SilentAnnouncer()
        self._language_tag: str = language_tag

        self._catalog = ExerciseCatalog()
        self._phase: PlaybackPhase = PlaybackPhase.IDLE
        self._playback = PlaybackState()
        self._start_time: datetime | None = None

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self.tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def phase(self) -> PlaybackPhase:
        return self._phase

    @property
    def is_running(self) -> bool:
        return self._playback.running

    @property
    def current_index(self) -> int:
        return self._playback.current_index

    @property
    def exercise_remaining(self) -> int:
        """Seconds left in the current exercise."""
        return self._playback.exercise_remaining

    @property
    def total_remaining(self) -> int:
        """Seconds left across the whole workout."""
        return self._playback.total_remaining

    @property
    def display_remaining(self) -> int:
        """What the clock shows: the exercise countdown while running,
        the workout total otherwise."""
        if self._playback.running:
            return self._playback.exercise_remaining
        return self._playback.total_remaining

    @property
    def current_exercise(self) -> ExerciseEntry | None:
        idx = self._playback.current_index
        if 0 <= idx < len(self._catalog):
            return self._catalog[idx]
        return None

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current exercise."""
        entry = self.current_exercise
        if not self._playback.running or entry is None:
            return 0.0
        elapsed = entry.duration - self._playback.exercise_remaining
        return max(0.0, min(1.0, elapsed / entry.duration))

    @property
    def entries(self) -> tuple[ExerciseEntry, ...]:
        return self._catalog.entries

    @property
    def is_locked(self) -> bool:
        return self._catalog.is_locked

    @property
    def total_duration(self) -> int:
        return self._catalog.total_duration()

    @property
    def language_tag(self) -> str:
        return self._language_tag

    @language_tag.setter
    def language_tag(self, value: str) -> None:
        self._language_tag = value

    # ══════════════════════════════════════════════════════════════════
    #  CATALOG EDITING
    # ══════════════════════════════════════════════════════════════════

    def add_exercise(self, name: str, duration: int) -> ExerciseEntry | None:
        entry = self._catalog.add(name, duration)
        if entry is not None:
            self._sync_idle_totals()
            self.catalog_changed.emit()
        return entry

    def remove_exercise(self, index: int) -> bool:
        removed = self._catalog.remove(index)
        if removed:
            self._sync_idle_totals()
            self.catalog_changed.emit()
        return removed

    def lock_catalog(self) -> None:
        """The "Save" action: freeze the catalog for playback."""
        if self._catalog.is_locked:
            return
        self._catalog.lock()
        self._sync_idle_totals()
        self.catalog_changed.emit()

    # ══════════════════════════════════════════════════════════════════
    #  PLAYBACK CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin the workout.  Only valid from IDLE with a saved,
        non-empty catalog."""
        if self._phase != PlaybackPhase.IDLE:
            return
        if not self._catalog.is_locked or len(self._catalog) == 0:
            logger.debug("start ignored: catalog not saved or empty")
            return

        first = self._catalog[0]
        self._playback = PlaybackState(
            running=True,
            current_index=0,
            exercise_remaining=first.duration,
            total_remaining=self._catalog.total_duration(),
        )
        self._start_time = datetime.now()
        logger.info(
            "Workout started: %d exercises, %d s",
            len(self._catalog), self._playback.total_remaining,
        )
        self._announce_current()
        self._set_phase(PlaybackPhase.RUNNING)
        self._qt_timer.start()

    def tick(self) -> None:
        """Advance the countdown by one second.

        Driven by the internal 1 s timer; tests call it directly.
        """
        if self._phase != PlaybackPhase.RUNNING:
            return
        pb = self._playback
        if not 0 <= pb.current_index < len(self._catalog):
            self.stop()
            return

        if pb.exercise_remaining > 0:
            pb.exercise_remaining -= 1
            pb.total_remaining = max(0, pb.total_remaining - 1)

        if pb.exercise_remaining == 0:
            pb.current_index += 1
            if pb.current_index < len(self._catalog):
                pb.exercise_remaining = self._catalog[pb.current_index].duration
                self._announce_current()
            else:
                self._finish_workout()
                return

        self.countdown.emit(pb.exercise_remaining, pb.total_remaining)

    def stop(self) -> None:
        """Halt playback and rewind to the first exercise.

        Valid from any state.  Keeps the catalog; never counts as a
        completed workout.
        """
        was_running = self._playback.running
        self._halt()
        if self._phase == PlaybackPhase.RUNNING:
            self._set_phase(PlaybackPhase.IDLE)
        if was_running:
            logger.info("Workout stopped")
        self.countdown.emit(
            self._playback.exercise_remaining, self._playback.total_remaining,
        )

    def acknowledge_completion(self) -> None:
        """User dismissed the celebration: clear everything, back to IDLE."""
        if self._phase != PlaybackPhase.COMPLETED:
            return
        self._catalog.reset()
        self._playback = PlaybackState()
        self._start_time = None
        self.catalog_changed.emit()
        self._set_phase(PlaybackPhase.IDLE)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _announce_current(self) -> None:
        idx = self._playback.current_index
        entry = self._catalog[idx]
        # Spoken on every entry, even if it was spoken before.
        self._announcer.speak(entry.spoken_instruction, self._language_tag)
        entry.has_been_spoken = True
        logger.debug("Exercise %d: %s", idx, entry.spoken_instruction)
        self.exercise_started.emit(idx, entry)

    def _finish_workout(self) -> None:
        end_time = datetime.now()
        data = {
            "exercise_count": len(self._catalog),
            "total_seconds": self._catalog.total_duration(),
            "exercise_names": [e.name for e in self._catalog],
            "start_time": self._start_time,
            "end_time": end_time,
        }
        self._halt()
        self._set_phase(PlaybackPhase.COMPLETED)
        logger.info(
            "Workout completed: %d exercises, %d s",
            data["exercise_count"], data["total_seconds"],
        )
        self.workout_completed.emit(data)

    def _halt(self) -> None:
        self._qt_timer.stop()
        self._announcer.cancel_all()
        first = self._catalog[0].duration if len(self._catalog) else 0
        self._playback = PlaybackState(
            running=False,
            current_index=0,
            exercise_remaining=first,
            total_remaining=self._catalog.total_duration(),
        )

    def _sync_idle_totals(self) -> None:
        if self._playback.running:
            return
        first = self._catalog[0].duration if len(self._catalog) else 0
        self._playback.current_index = 0
        self._playback.exercise_remaining = first
        self._playback.total_remaining = self._catalog.total_duration()

    def _set_phase(self, phase: PlaybackPhase) -> None:
        self._phase = phase
        self.state_changed.emit(phase)
