"""UI package."""

from .workout_widget import WorkoutWidget, format_clock
from .progress_ring import ProgressRing
from .celebration_popup import CelebrationPopup

__all__ = [
    "WorkoutWidget",
    "format_clock",
    "ProgressRing",
    "CelebrationPopup",
]
