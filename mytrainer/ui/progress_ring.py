"""Circular countdown ring rendered with QPainter.

- Fills clockwise as the current exercise progresses.
- Colour-coded by playback phase (running=coral, completed=green).
- Shows MM:SS in bold text at the centre plus the exercise name.
- Smooth animated transitions between phases.
"""

from __future__ import annotations

import math

from PyQt6.QtCore import Qt, QRectF, QTimer, QVariantAnimation, QEasingCurve
from PyQt6.QtGui import QPainter, QPen, QColor, QConicalGradient, QFont
from PyQt6.QtWidgets import QWidget

from ..workout.engine import PlaybackPhase
from .styles import PHASE_COLORS, PALETTE


def _lerp_color(c1: QColor, c2: QColor, t: float) -> QColor:
    """Linearly interpolate between two QColors."""
    t = max(0.0, min(1.0, t))
    return QColor(
        int(c1.red()   + (c2.red()   - c1.red())   * t),
        int(c1.green() + (c2.green() - c1.green()) * t),
        int(c1.blue()  + (c2.blue()  - c1.blue())  * t),
        int(c1.alpha() + (c2.alpha() - c1.alpha()) * t),
    )


class ProgressRing(QWidget):
    """Custom-painted circular countdown ring."""

    RING_THICKNESS = 12
    GLOW_EXTRA = 6

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(200, 200)

        self._percent: float = 0.0
        self._display_percent: float = 0.0
        self._time_text: str = "00:00"
        self._label: str = "READY"
        self._phase: PlaybackPhase = PlaybackPhase.IDLE

        self._primary_color = QColor(PHASE_COLORS[PlaybackPhase.IDLE][0])
        self._secondary_color = QColor(PHASE_COLORS[PlaybackPhase.IDLE][1])
        self._old_primary = QColor(self._primary_color)
        self._old_secondary = QColor(self._secondary_color)
        self._target_primary = QColor(self._primary_color)
        self._target_secondary = QColor(self._secondary_color)

        self._text_color = QColor(PALETTE["text"])

        # ── arc transition animation ───────────────────────────────────
        self._arc_anim = QVariantAnimation(self)
        self._arc_anim.setDuration(400)
        self._arc_anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._arc_anim.valueChanged.connect(self._on_arc_anim)

        # ── color transition animation ─────────────────────────────────
        self._color_anim = QVariantAnimation(self)
        self._color_anim.setDuration(500)
        self._color_anim.setStartValue(0.0)
        self._color_anim.setEndValue(1.0)
        self._color_anim.setEasingCurve(QEasingCurve.Type.InOutQuad)
        self._color_anim.valueChanged.connect(self._on_color_anim)

        # ── active glow pulse ──────────────────────────────────────────
        self._glow_phase: float = 0.0
        self._glow_timer = QTimer(self)
        self._glow_timer.setInterval(33)  # ~30 fps
        self._glow_timer.timeout.connect(self._on_glow_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    def set_percent(self, pct: float) -> None:
        """Update the arc fill (0..1). Smoothly animates."""
        self._percent = pct
        self._arc_anim.stop()
        self._arc_anim.setStartValue(self._display_percent)
        self._arc_anim.setEndValue(pct)
        self._arc_anim.start()

    def set_time_text(self, text: str) -> None:
        self._time_text = text
        self.update()

    def set_label(self, text: str) -> None:
        self._label = text
        self.update()

    @property
    def time_text(self) -> str:
        return self._time_text

    @property
    def label(self) -> str:
        return self._label

    def apply_phase(self, phase: PlaybackPhase) -> None:
        """Update colors and the glow for a new playback phase."""
        self._phase = phase
        primary_hex, secondary_hex = PHASE_COLORS[phase]

        self._old_primary = QColor(self._primary_color)
        self._old_secondary = QColor(self._secondary_color)
        self._target_primary = QColor(primary_hex)
        self._target_secondary = QColor(secondary_hex)
        self._color_anim.stop()
        self._color_anim.start()

        if phase == PlaybackPhase.RUNNING:
            if not self._glow_timer.isActive():
                self._glow_timer.start()
        else:
            self._glow_timer.stop()
            self._glow_phase = 0.0

    # ══════════════════════════════════════════════════════════════════
    #  ANIMATION SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _on_arc_anim(self, value: object) -> None:
        self._display_percent = float(value)  # type: ignore[arg-type]
        self.update()

    def _on_color_anim(self, value: object) -> None:
        t = float(value)  # type: ignore[arg-type]
        self._primary_color = _lerp_color(self._old_primary, self._target_primary, t)
        self._secondary_color = _lerp_color(self._old_secondary, self._target_secondary, t)
        self.update()

    def _on_glow_tick(self) -> None:
        self._glow_phase += 0.06
        if self._glow_phase > 2 * math.pi:
            self._glow_phase -= 2 * math.pi
        self.update()

    # ══════════════════════════════════════════════════════════════════
    #  PAINTING
    # ══════════════════════════════════════════════════════════════════

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        w, h = self.width(), self.height()
        cx, cy = w / 2, h / 2
        diameter = max(100, min(w, h) - 30)
        radius = diameter / 2
        thickness = self.RING_THICKNESS
        ring_rect = QRectF(cx - radius, cy - radius, diameter, diameter)

        # ── background track ─────────────────────────────────────────
        track_color = QColor(self._primary_color)
        track_color.setAlpha(35)
        track_pen = QPen(track_color, thickness, Qt.PenStyle.SolidLine)
        track_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(track_pen)
        painter.drawEllipse(ring_rect)

        # ── active arc ───────────────────────────────────────────────
        pct = self._display_percent
        if pct > 0.001:
            gradient = QConicalGradient(cx, cy, 90)
            gradient.setColorAt(0.0, self._primary_color)
            gradient.setColorAt(0.5, self._secondary_color)
            gradient.setColorAt(1.0, self._primary_color)

            arc_pen = QPen(gradient, thickness, Qt.PenStyle.SolidLine)
            arc_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(arc_pen)

            # Qt arcs: start at 12 o'clock (90*16), go clockwise (negative)
            start_angle = 90 * 16
            span_angle = -int(pct * 360 * 16)
            painter.drawArc(ring_rect, start_angle, span_angle)

            if self._glow_timer.isActive():
                glow_color = QColor(self._primary_color)
                glow_color.setAlpha(int(20 + 15 * math.sin(self._glow_phase)))
                glow_pen = QPen(glow_color, thickness + self.GLOW_EXTRA, Qt.PenStyle.SolidLine)
                glow_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
                painter.setPen(glow_pen)
                painter.drawArc(ring_rect, start_angle, span_angle)

        # ── centre text: time ────────────────────────────────────────
        time_font = QFont()
        time_font.setPixelSize(44)
        time_font.setWeight(QFont.Weight.Bold)
        painter.setFont(time_font)
        painter.setPen(self._text_color)
        time_rect = QRectF(ring_rect)
        time_rect.moveTop(time_rect.top() - 12)
        painter.drawText(time_rect, Qt.AlignmentFlag.AlignCenter, self._time_text)

        # ── centre text: exercise label ──────────────────────────────
        label_font = QFont()
        label_font.setPixelSize(13)
        label_font.setWeight(QFont.Weight.DemiBold)
        label_font.setLetterSpacing(QFont.SpacingType.AbsoluteSpacing, 2)
        painter.setFont(label_font)
        label_color = QColor(self._primary_color)
        label_color.setAlpha(220)
        painter.setPen(label_color)
        label_rect = QRectF(ring_rect)
        label_rect.moveTop(label_rect.top() + 30)
        painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, self._label)

        painter.end()
