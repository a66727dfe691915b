"""Audio package."""

from .announcer import Announcer, QtAnnouncer, SilentAnnouncer
from .sounds import SoundManager, SOUND_NAMES

__all__ = [
    "Announcer",
    "QtAnnouncer",
    "SilentAnnouncer",
    "SoundManager",
    "SOUND_NAMES",
]
