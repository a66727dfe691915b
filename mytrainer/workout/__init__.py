"""Workout package."""

from .catalog import (
    ExerciseCatalog,
    ExerciseEntry,
    clamp_duration,
    snap_duration,
    MIN_DURATION,
    MAX_DURATION,
    DURATION_STEP,
    DEFAULT_DURATION,
)
from .engine import (
    SessionController,
    PlaybackPhase,
    PlaybackState,
    TICK_INTERVAL_MS,
    DEFAULT_LANGUAGE_TAG,
)

__all__ = [
    "ExerciseCatalog",
    "ExerciseEntry",
    "clamp_duration",
    "snap_duration",
    "MIN_DURATION",
    "MAX_DURATION",
    "DURATION_STEP",
    "DEFAULT_DURATION",
    "SessionController",
    "PlaybackPhase",
    "PlaybackState",
    "TICK_INTERVAL_MS",
    "DEFAULT_LANGUAGE_TAG",
]
