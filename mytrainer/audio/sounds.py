"""Sound synthesis and playback using numpy + QSoundEffect.

All cues are generated programmatically as WAV files using sine-wave
synthesis with ADSR envelopes.  Files are cached to disk so subsequent
app launches are instant.

Sound names
-----------
- ``exercise_start``   — short ascending chime (3 notes)
- ``countdown``        — single soft tick for the last seconds of an exercise
- ``workout_complete`` — celebratory fanfare
- ``click``            — subtle button click
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "exercise_start",
    "countdown",
    "workout_complete",
    "click",
)

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit mono PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_chime() -> bytes:
    """Exercise start — 3 quick ascending notes (G4→C5→E5)."""
    parts: list[np.ndarray] = []
    for freq in (392.00, 523.25, 659.25):
        tone = _sine(freq, 0.11) * 0.6
        env = _make_envelope(len(tone), attack=100, decay=200, sustain_level=0.4, release=300)
        parts.append(tone * env)
        parts.append(_silence(0.03))
    parts.append(_silence(0.05))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_tick() -> bytes:
    """Countdown — one short 880 Hz blip."""
    tone = _sine(880.0, 0.06) * 0.4
    env = _make_envelope(len(tone), attack=40, decay=150, sustain_level=0.3, release=400)
    return _to_wav_bytes(np.concatenate([tone * env, _silence(0.04)]))


def _generate_fanfare() -> bytes:
    """Workout complete — G4→B4→D5→G5, last note held with an overtone."""
    notes = [392.00, 493.88, 587.33, 783.99]
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        if i == len(notes) - 1:
            combined = _sine(freq, 0.5) * 0.55 + _sine(freq * 2, 0.5) * 0.1
            env = _make_envelope(len(combined), attack=100, decay=400, sustain_level=0.5, release=800)
            parts.append(combined * env)
        else:
            tone = _sine(freq, 0.15) * 0.5
            env = _make_envelope(len(tone), attack=80, decay=200, sustain_level=0.4, release=250)
            parts.append(tone * env)
            parts.append(_silence(0.03))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_click() -> bytes:
    """Button click — very short high tick."""
    duration = 0.015
    n_samples = int(SAMPLE_RATE * duration)
    tick = _sine(1200.0, duration) * 0.2
    env = _make_envelope(n_samples, attack=20, decay=50, sustain_level=0.0, release=n_samples - 70)
    # Pad with silence so QSoundEffect doesn't clip
    return _to_wav_bytes(np.concatenate([tick * env, _silence(0.03)]))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "exercise_start": _generate_chime,
    "countdown": _generate_tick,
    "workout_complete": _generate_fanfare,
    "click": _generate_click,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


COUNTDOWN_SECONDS = 3


class SoundManager(QObject):
    """Plays the workout cues through ``QSoundEffect``.

    Each cue is synthesised into the cache directory the first time it is
    needed.  ``countdown_seconds`` is how many final seconds of an exercise
    tick; 0 turns the countdown off.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        countdown_seconds: int = COUNTDOWN_SECONDS,
    ) -> None:
        super().__init__(parent)
        self._cache = sounds_dir or SOUNDS_DIR
        self._cache.mkdir(parents=True, exist_ok=True)
        self._level = 70
        self._muted = False
        self.countdown_seconds = countdown_seconds
        self._effects = {name: self._effect_for(name) for name in SOUND_NAMES}

    @property
    def volume(self) -> int:
        return self._level

    @property
    def enabled(self) -> bool:
        return not self._muted

    def set_volume(self, level: int) -> None:
        self._level = max(0, min(int(level), 100))
        for effect in self._effects.values():
            effect.setVolume(self._level / 100.0)

    def set_enabled(self, enabled: bool) -> None:
        self._muted = not enabled

    def play(self, name: str) -> None:
        """Play a cue by name.  Unknown names and a muted manager are no-ops."""
        effect = self._effects.get(name)
        if effect is None or self._muted:
            return
        effect.play()

    def play_countdown(self, seconds_left: int) -> bool:
        """Tick if *seconds_left* falls inside the countdown window.

        Returns whether a tick was requested.
        """
        if not 0 < seconds_left <= self.countdown_seconds:
            return False
        self.play("countdown")
        return True

    def _effect_for(self, name: str) -> QSoundEffect:
        wav = self._cache / f"{name}.wav"
        if not wav.exists():
            wav.write_bytes(_GENERATORS[name]())
            logger.debug("Synthesised cue %s", wav)
        effect = QSoundEffect(self)
        effect.setSource(QUrl.fromLocalFile(str(wav)))
        effect.setVolume(self._level / 100.0)
        return effect
