"""Main application window for MyTrainer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QStatusBar

from .audio.announcer import Announcer, QtAnnouncer, SilentAnnouncer
from .audio.sounds import COUNTDOWN_SECONDS, SoundManager
from .settings import Settings, load_settings
from .ui.celebration_popup import CelebrationPopup
from .ui.styles import build_stylesheet
from .ui.workout_widget import WorkoutWidget
from .workout.catalog import ExerciseEntry
from .workout.engine import SessionController, PlaybackPhase

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        announcer: Announcer | None = None,
        sound_manager: SoundManager | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("\U0001F4AA MyTrainer")
        self.setMinimumSize(400, 640)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self.resize(self._settings.window_width, self._settings.window_height)

        # ── voice + sound ─────────────────────────────────────────────
        self._announcer = announcer or self._make_announcer()
        self._sound_manager = sound_manager or SoundManager(parent=self)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.sound_enabled)
        self._sound_manager.countdown_seconds = (
            COUNTDOWN_SECONDS if self._settings.countdown_beeps else 0
        )

        # ── controller ────────────────────────────────────────────────
        self._controller = SessionController(
            self,
            announcer=self._announcer,
            language_tag=self._settings.language_tag,
        )

        self.setStyleSheet(build_stylesheet())

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 12, 16, 12)

        self._workout_widget = WorkoutWidget(
            self._controller, central,
            default_duration=self._settings.default_duration,
        )
        layout.addWidget(self._workout_widget)

        # Celebration overlay (child of central so it covers the card)
        self._celebration = CelebrationPopup(self._controller, central)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Add exercises, then Save.")

        # ── wire signals ──────────────────────────────────────────────
        self._controller.state_changed.connect(self._on_state_changed)
        self._controller.exercise_started.connect(self._on_exercise_started)
        self._controller.countdown.connect(self._on_countdown)
        self._controller.workout_completed.connect(self._on_workout_completed)
        for btn in (self._workout_widget._add_btn, self._workout_widget._save_btn):
            btn.clicked.connect(lambda: self._sound_manager.play("click"))

        self._setup_shortcuts()

    # ══════════════════════════════════════════════════════════════════
    #  SETUP
    # ══════════════════════════════════════════════════════════════════

    def _make_announcer(self) -> Announcer:
        if not self._settings.voice_enabled:
            return SilentAnnouncer()
        voice = QtAnnouncer(parent=self)
        voice.set_volume(self._settings.voice_volume)
        voice.set_rate(self._settings.voice_rate)
        return voice

    def _setup_shortcuts(self) -> None:
        """Register Cmd+S for saving (Space/Esc handled via keyPressEvent)."""
        save = QAction("Save Workout", self)
        save.setShortcut(QKeySequence("Ctrl+S"))
        save.triggered.connect(self._controller.lock_catalog)
        self.addAction(save)

    @property
    def controller(self) -> SessionController:
        return self._controller

    # ══════════════════════════════════════════════════════════════════
    #  SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        """Space toggles Start / Stop once the workout is saved."""
        # No-op if the user is typing an exercise name
        if self._workout_widget._name_input.hasFocus():
            return
        if self._controller.is_running:
            self._controller.stop()
        else:
            self._controller.start()

    def _on_state_changed(self, phase: PlaybackPhase) -> None:
        if phase == PlaybackPhase.IDLE:
            if self._controller.is_locked:
                self._status_bar.showMessage("Ready. Press Start Workout.")
            else:
                self._status_bar.showMessage("Add exercises, then Save.")

    def _on_exercise_started(self, index: int, entry: ExerciseEntry) -> None:
        total = len(self._controller.entries)
        self._status_bar.showMessage(f"Now: {entry.name} ({index + 1} of {total})")
        self._sound_manager.play("exercise_start")

    def _on_countdown(self, exercise_remaining: int, total_remaining: int) -> None:
        if self._controller.is_running:
            self._sound_manager.play_countdown(exercise_remaining)

    def _on_workout_completed(self, data: dict) -> None:
        self._status_bar.showMessage("Workout complete!")
        self._sound_manager.play("workout_complete")

    # ══════════════════════════════════════════════════════════════════
    #  QT EVENTS
    # ══════════════════════════════════════════════════════════════════

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        if self._celebration.isVisible():
            self._celebration.setGeometry(self.centralWidget().rect())

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Handle Space (start/stop) and Escape (stop) globally."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._controller.stop()
            event.accept()
            return
        super().keyPressEvent(event)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._controller.stop()
        super().closeEvent(event)
