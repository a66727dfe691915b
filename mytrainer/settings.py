"""Application settings loaded from JSON.

Settings are read from:
    ~/Library/Application Support/MyTrainer/settings.json

or from the path in ``$MYTRAINER_SETTINGS``.  The app only ever reads
this file; workouts themselves are never saved.

Usage::

    settings = load_settings()
    voice.set_volume(settings.voice_volume)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path

logger = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "MyTrainer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"
SETTINGS_ENV_VAR = "MYTRAINER_SETTINGS"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── voice ─────────────────────────────────────────────────────────
    language_tag: str = "en-US"
    voice_enabled: bool = True
    voice_volume: int = 80                 # 0-100
    voice_rate: float = 0.0                # -1.0 .. 1.0

    # ── sound cues ────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100
    countdown_beeps: bool = True

    # ── workout ───────────────────────────────────────────────────────
    default_duration: int = 60             # seconds, slider start value

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "WARNING"

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 480
    window_height: int = 820

    def __post_init__(self) -> None:
        from .workout.catalog import snap_duration

        self.voice_volume = max(0, min(int(self.voice_volume), 100))
        self.sound_volume = max(0, min(int(self.sound_volume), 100))
        self.voice_rate = max(-1.0, min(float(self.voice_rate), 1.0))
        self.default_duration = snap_duration(self.default_duration)
        self.log_level = str(self.log_level).upper()


def settings_path() -> Path:
    override = os.environ.get(SETTINGS_ENV_VAR)
    return Path(override) if override else SETTINGS_PATH


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = settings_path()
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
    return Settings()
