"""Full-window "Congratulations!" overlay shown when a workout completes.

Subscribes to ``SessionController.workout_completed``.  Confetti rains
down behind the card; the "Great" button acknowledges the workout,
which clears the catalog and returns the controller to IDLE.
"""

from __future__ import annotations

import random

from PyQt6.QtCore import Qt, QPointF, QRectF, QPropertyAnimation, QVariantAnimation, QEasingCurve
from PyQt6.QtGui import QPainter, QColor
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QFrame, QGraphicsOpacityEffect,
)

from ..workout.engine import SessionController
from .styles import PALETTE, CONFETTI_COLORS
from .workout_widget import format_clock


class _ConfettiPiece:
    __slots__ = ("x", "start_y", "size", "rotation", "spin", "color")

    def __init__(self, width: float) -> None:
        self.x = random.uniform(0, width)
        self.start_y = random.uniform(-200, 0)
        self.size = random.uniform(5, 15)
        self.rotation = random.uniform(0, 360)
        self.spin = random.uniform(-360, 360)
        self.color = QColor(random.choice(CONFETTI_COLORS))


class CelebrationPopup(QWidget):
    """Overlay celebrating a finished workout."""

    CONFETTI_COUNT = 200
    FALL_MS = 4000
    FADE_IN_MS = 300
    FADE_OUT_MS = 400

    def __init__(
        self,
        controller: SessionController,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._pieces: list[_ConfettiPiece] = []
        self._fall_progress: float = 0.0
        self.hide()

        self._build_ui()

        self._opacity = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(self._opacity)
        self._opacity.setOpacity(0.0)
        self._fade_anim = QPropertyAnimation(self._opacity, b"opacity", self)

        self._fall_anim = QVariantAnimation(self)
        self._fall_anim.setDuration(self.FALL_MS)
        self._fall_anim.setStartValue(0.0)
        self._fall_anim.setEndValue(1.0)
        self._fall_anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._fall_anim.valueChanged.connect(self._on_fall)

        self._controller.workout_completed.connect(self.show_celebration)

    # ── build ──────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(
            f"CelebrationPopup {{ background-color: {PALETTE['bg']}; }}"
        )
        outer = QVBoxLayout(self)
        outer.setAlignment(Qt.AlignmentFlag.AlignCenter)

        card = QFrame(self)
        card.setObjectName("card")
        card.setFixedWidth(320)
        outer.addWidget(card, 0, Qt.AlignmentFlag.AlignCenter)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(10)

        self._title = QLabel("Congratulations!", card)
        self._title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._title.setStyleSheet(
            f"font-size: 24px; font-weight: 700; color: {PALETTE['highlight']};"
            "background: transparent; border: none;"
        )
        layout.addWidget(self._title)

        self._message = QLabel("You completed your workout!", card)
        self._message.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message.setStyleSheet("background: transparent; border: none;")
        layout.addWidget(self._message)

        self._summary = QLabel("", card)
        self._summary.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._summary.setStyleSheet(
            f"font-size: 12px; color: {PALETTE['text_muted']};"
            "background: transparent; border: none;"
        )
        layout.addWidget(self._summary)

        self._great_btn = QPushButton("Great", card)
        self._great_btn.setObjectName("primaryButton")
        self._great_btn.clicked.connect(self._on_great)
        layout.addWidget(self._great_btn)

    # ── public API ─────────────────────────────────────────────────────

    def show_celebration(self, data: dict) -> None:
        """Display the celebration for a completed workout summary."""
        count = data.get("exercise_count", 0)
        noun = "exercise" if count == 1 else "exercises"
        self._summary.setText(
            f"{count} {noun} · {format_clock(data.get('total_seconds', 0))}"
        )

        if self.parentWidget() is not None:
            self.setGeometry(self.parentWidget().rect())
        self.show()
        self.raise_()

        self._spawn_confetti()
        self._fall_anim.stop()
        self._fall_anim.start()

        self._animate_opacity(0.0, 1.0, self.FADE_IN_MS, QEasingCurve.Type.OutCubic)

    @property
    def confetti_count(self) -> int:
        return len(self._pieces)

    # ── confetti ───────────────────────────────────────────────────────

    def _spawn_confetti(self) -> None:
        width = max(1, self.width())
        self._pieces = [_ConfettiPiece(width) for _ in range(self.CONFETTI_COUNT)]
        self._fall_progress = 0.0

    def _on_fall(self, value: object) -> None:
        self._fall_progress = float(value)  # type: ignore[arg-type]
        self.update()

    def paintEvent(self, event) -> None:  # type: ignore[override]
        super().paintEvent(event)
        if not self._pieces:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)
        t = self._fall_progress
        end_y = self.height() + 100
        for piece in self._pieces:
            y = piece.start_y + (end_y - piece.start_y) * t
            painter.save()
            painter.translate(QPointF(piece.x, y))
            painter.rotate(piece.rotation + piece.spin * t)
            painter.setBrush(piece.color)
            half = piece.size / 2
            painter.drawRect(QRectF(-half, -half, piece.size, piece.size))
            painter.restore()
        painter.end()

    # ── dismiss ────────────────────────────────────────────────────────

    def _on_great(self) -> None:
        self._controller.acknowledge_completion()
        self._animate_opacity(1.0, 0.0, self.FADE_OUT_MS, QEasingCurve.Type.InCubic)
        self._fade_anim.finished.connect(self._on_fade_done)

    def _animate_opacity(
        self, start: float, end: float, duration: int, curve: QEasingCurve.Type,
    ) -> None:
        self._fade_anim.stop()
        try:
            self._fade_anim.finished.disconnect()
        except TypeError:
            pass
        self._fade_anim.setDuration(duration)
        self._fade_anim.setStartValue(start)
        self._fade_anim.setEndValue(end)
        self._fade_anim.setEasingCurve(curve)
        self._fade_anim.start()

    def _on_fade_done(self) -> None:
        self.hide()
        self._fall_anim.stop()
        self._pieces.clear()
