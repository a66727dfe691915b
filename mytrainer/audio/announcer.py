"""Spoken exercise cues.

The workout engine only needs two things from a voice: ``speak`` and
``cancel_all``.  Both are fire-and-forget — nothing the engine does
depends on whether the speech actually played.

- :class:`QtAnnouncer` speaks through ``QTextToSpeech``.
- :class:`SilentAnnouncer` does nothing (voice disabled).
"""

from __future__ import annotations

import logging
from typing import Protocol

from PyQt6.QtCore import QLocale, QObject
from PyQt6.QtTextToSpeech import QTextToSpeech

logger = logging.getLogger(__name__)


class Announcer(Protocol):
    def speak(self, text: str, language_tag: str) -> None: ...

    def cancel_all(self) -> None: ...


class SilentAnnouncer:
    """Announcer that never makes a sound."""

    def speak(self, text: str, language_tag: str) -> None:
        pass

    def cancel_all(self) -> None:
        pass


class QtAnnouncer(QObject):
    """Text-to-speech announcer backed by Qt's platform speech engine.

    Usage::

        voice = QtAnnouncer(parent=self)
        voice.set_volume(80)
        voice.speak("Plank for 30 seconds", "en-US")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        engine: QTextToSpeech | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._locale_tag: str | None = None
        self._tts = engine if engine is not None else QTextToSpeech(self)
        self._tts.stateChanged.connect(self._on_state_changed)

    # ── public API ────────────────────────────────────────────────────

    def speak(self, text: str, language_tag: str) -> None:
        """Say *text* in *language_tag*.  No-op when disabled or blank."""
        if not self._enabled or not text:
            return
        if language_tag != self._locale_tag:
            self._tts.setLocale(QLocale(language_tag))
            self._locale_tag = language_tag
        self._tts.say(text)

    def cancel_all(self) -> None:
        """Cut off whatever is being spoken right now."""
        self._tts.stop(QTextToSpeech.BoundaryHint.Immediate)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if not enabled:
            self.cancel_all()

    def set_volume(self, level: int) -> None:
        """Set volume (0-100)."""
        self._tts.setVolume(max(0, min(level, 100)) / 100.0)

    def set_rate(self, rate: float) -> None:
        """Speech rate from -1.0 (slow) to 1.0 (fast); 0.0 is normal."""
        self._tts.setRate(max(-1.0, min(rate, 1.0)))

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _on_state_changed(self, state: QTextToSpeech.State) -> None:
        # Speech failures never reach the workout; the countdown
        # simply carries on silently.
        if state == QTextToSpeech.State.Error:
            logger.warning("Speech synthesis failed: %s", self._tts.errorString())
