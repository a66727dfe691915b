"""Main workout card — catalog editor and playback display.

Layout (top → bottom):
    - "Current Workout" header (only once something is in the list)
    - ProgressRing (only once the workout is saved)
    - Exercise list, one row per entry with a delete button
    - Name input + duration slider (only while editable)
    - Add Exercise / Save row (only while editable)
    - Total duration label + Start / Stop (only once saved)
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QLineEdit, QSlider, QListWidget, QListWidgetItem,
    QFrame, QSizePolicy,
)

from ..workout.catalog import (
    ExerciseEntry, MIN_DURATION, MAX_DURATION, DURATION_STEP, DEFAULT_DURATION,
    snap_duration,
)
from ..workout.engine import SessionController, PlaybackPhase
from .progress_ring import ProgressRing
from .styles import PALETTE


PHASE_LABELS: dict[PlaybackPhase, str] = {
    PlaybackPhase.IDLE:      "READY",
    PlaybackPhase.RUNNING:   "GO",
    PlaybackPhase.COMPLETED: "DONE",
}


def format_clock(seconds: int) -> str:
    """Seconds as ``MM:SS``."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class _ExerciseRow(QWidget):
    """One list row: "<name> - <n> seconds" plus a trash button."""

    def __init__(self, entry: ExerciseEntry, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 4, 4)

        self.label = QLabel(entry.display_text, self)
        self.delete_btn = QPushButton("\U0001F5D1", self)
        self.delete_btn.setObjectName("deleteButton")
        self.delete_btn.setToolTip("Delete exercise")
        self.delete_btn.setCursor(Qt.CursorShape.PointingHandCursor)

        layout.addWidget(self.label, 1)
        layout.addWidget(self.delete_btn)

    def set_highlighted(self, on: bool) -> None:
        if on:
            self.label.setStyleSheet(
                f"background-color: {PALETTE['highlight']}; color: {PALETTE['bg']};"
                "border-radius: 8px; padding: 6px; font-weight: 700;"
            )
        else:
            self.label.setStyleSheet("background: transparent; padding: 6px;")


class WorkoutWidget(QWidget):
    """The single workout screen."""

    def __init__(
        self,
        controller: SessionController,
        parent: QWidget | None = None,
        *,
        default_duration: int = DEFAULT_DURATION,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._default_duration = snap_duration(default_duration)
        self._rows: list[_ExerciseRow] = []
        self._build_ui()
        self._connect_signals()
        self._rebuild_list()
        self._refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(20, 16, 20, 20)
        layout.setSpacing(14)

        self._header = QLabel("Current Workout", card)
        self._header.setObjectName("headerLabel")
        self._header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._header)

        # ── countdown ring ───────────────────────────────────────────
        ring_row = QHBoxLayout()
        ring_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self._ring.setFixedSize(240, 240)
        ring_row.addWidget(self._ring)
        layout.addLayout(ring_row)

        # ── exercise list ────────────────────────────────────────────
        self._list = QListWidget(card)
        self._list.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        layout.addWidget(self._list, 1)

        # ── editor ───────────────────────────────────────────────────
        self._name_input = QLineEdit(card)
        self._name_input.setPlaceholderText("Enter Exercise Name")
        self._name_input.setMaxLength(60)
        layout.addWidget(self._name_input)

        self._duration_caption = QLabel("Select duration", card)
        self._duration_caption.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._duration_caption)

        self._duration_label = QLabel("", card)
        self._duration_label.setObjectName("durationLabel")
        self._duration_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._duration_label)

        # Slider works in steps; value * DURATION_STEP = seconds
        self._slider = QSlider(Qt.Orientation.Horizontal, card)
        self._slider.setRange(MIN_DURATION // DURATION_STEP, MAX_DURATION // DURATION_STEP)
        self._slider.setSingleStep(1)
        self._slider.setPageStep(6)
        layout.addWidget(self._slider)

        edit_row = QHBoxLayout()
        edit_row.setSpacing(16)
        self._add_btn = QPushButton("Add Exercise", card)
        self._add_btn.setObjectName("secondaryButton")
        self._save_btn = QPushButton("Save", card)
        self._save_btn.setObjectName("primaryButton")
        edit_row.addWidget(self._add_btn)
        edit_row.addWidget(self._save_btn)
        layout.addLayout(edit_row)

        # ── playback ─────────────────────────────────────────────────
        self._total_label = QLabel("", card)
        self._total_label.setObjectName("totalLabel")
        self._total_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._total_label)

        self._start_btn = QPushButton("Start Workout", card)
        self._start_btn.setObjectName("primaryButton")
        self._stop_btn = QPushButton("Stop Workout", card)
        self._stop_btn.setObjectName("dangerButton")
        layout.addWidget(self._start_btn)
        layout.addWidget(self._stop_btn)

        self.reset_duration()

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._add_btn.clicked.connect(self.add_exercise)
        self._name_input.returnPressed.connect(self.add_exercise)
        self._save_btn.clicked.connect(self._controller.lock_catalog)
        self._start_btn.clicked.connect(self._controller.start)
        self._stop_btn.clicked.connect(self._controller.stop)
        self._slider.valueChanged.connect(self._on_slider_changed)

        self._controller.catalog_changed.connect(self._rebuild_list)
        self._controller.state_changed.connect(self._on_state_changed)
        self._controller.countdown.connect(self._on_countdown)
        self._controller.exercise_started.connect(self._on_exercise_started)

    # ── public helpers ────────────────────────────────────────────────────

    def duration(self) -> int:
        """Currently selected duration in seconds."""
        return self._slider.value() * DURATION_STEP

    def set_duration(self, seconds: int) -> None:
        self._slider.setValue(snap_duration(seconds) // DURATION_STEP)

    def reset_duration(self) -> None:
        self.set_duration(self._default_duration)
        self._on_slider_changed(self._slider.value())

    def add_exercise(self) -> None:
        """Add from the input fields; clears them on success."""
        entry = self._controller.add_exercise(self._name_input.text(), self.duration())
        if entry is not None:
            self._name_input.clear()
            self.reset_duration()

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_slider_changed(self, value: int) -> None:
        self._duration_label.setText(f"{value * DURATION_STEP} seconds")

    def _on_delete_clicked(self, entry: ExerciseEntry) -> None:
        for index, e in enumerate(self._controller.entries):
            if e.id == entry.id:
                self._controller.remove_exercise(index)
                return

    def _on_state_changed(self, phase: PlaybackPhase) -> None:
        self._ring.apply_phase(phase)
        self._refresh()

    def _on_countdown(self, exercise_remaining: int, total_remaining: int) -> None:
        self._refresh_clock()

    def _on_exercise_started(self, index: int, entry: ExerciseEntry) -> None:
        self._highlight(index)
        self._list.scrollToItem(self._list.item(index))
        self._refresh_clock()

    # ── refresh ───────────────────────────────────────────────────────────

    def _rebuild_list(self) -> None:
        self._list.clear()
        self._rows = []
        for entry in self._controller.entries:
            item = QListWidgetItem(self._list)
            row = _ExerciseRow(entry)
            row.delete_btn.clicked.connect(
                lambda _checked=False, e=entry: self._on_delete_clicked(e)
            )
            item.setSizeHint(row.sizeHint())
            self._list.setItemWidget(item, row)
            self._rows.append(row)
        self._refresh()

    def _refresh(self) -> None:
        c = self._controller
        has_entries = bool(c.entries)
        editable = not c.is_locked
        running = c.is_running

        self._header.setVisible(has_entries)
        self._ring.setVisible(c.is_locked)

        for widget in (
            self._name_input, self._duration_caption, self._duration_label,
            self._slider, self._add_btn, self._save_btn,
        ):
            widget.setVisible(editable)

        self._total_label.setVisible(c.is_locked)
        self._start_btn.setVisible(c.is_locked and not running)
        self._start_btn.setEnabled(c.phase == PlaybackPhase.IDLE and has_entries)
        self._stop_btn.setVisible(c.is_locked and running)

        for row in self._rows:
            row.delete_btn.setEnabled(editable)

        self._highlight(c.current_index if running else None)
        self._refresh_clock()

    def _refresh_clock(self) -> None:
        c = self._controller
        self._total_label.setText(f"Total Duration: {format_clock(c.total_remaining)}")
        self._ring.set_time_text(format_clock(c.display_remaining))
        self._ring.set_percent(c.percent_complete)
        current = c.current_exercise
        if c.is_running and current is not None:
            self._ring.set_label(current.name.upper())
        else:
            self._ring.set_label(PHASE_LABELS[c.phase])

    def _highlight(self, index: int | None) -> None:
        for i, row in enumerate(self._rows):
            row.set_highlighted(i == index)
