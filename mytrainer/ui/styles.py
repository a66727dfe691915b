"""QSS stylesheet, palette, and phase colors for MyTrainer."""

from __future__ import annotations

from ..workout.engine import PlaybackPhase

# ── phase colors (ring gradient pairs) ──────────────────────────────────
#    Each phase maps to (primary, secondary) for the conical gradient.

PHASE_COLORS: dict[PlaybackPhase, tuple[str, str]] = {
    PlaybackPhase.RUNNING:   ("#FF6B6B", "#FFA07A"),   # warm coral
    PlaybackPhase.COMPLETED: ("#A6E3A1", "#4ECDC4"),   # fresh green
    PlaybackPhase.IDLE:      ("#4A4A5E", "#3A3A4E"),   # neutral dim
}

# ── palette ─────────────────────────────────────────────────────────────

PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "surface":      "#2A2A4A",
    "accent":       "#A6E3A1",
    "accent2":      "#89B4FA",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "highlight":    "#F9E2AF",
    "danger":       "#F38BA8",
    "border":       "#313154",
}

CONFETTI_COLORS: tuple[str, ...] = (
    "#F38BA8",  # red
    "#89B4FA",  # blue
    "#F9E2AF",  # yellow
    "#A6E3A1",  # green
    "#FAB387",  # orange
    "#CBA6F7",  # purple
)


# ── font resolution ───────────────────────────────────────────────────

_resolved_font: str | None = None


def resolve_font_family() -> str:
    """Pick the best available system font.  Must be called after
    QApplication is created (font database needs the app context)."""
    global _resolved_font
    if _resolved_font is None:
        from PyQt6.QtGui import QFontDatabase
        families = set(QFontDatabase.families())
        for candidate in ("SF Pro", ".AppleSystemUIFont", "Helvetica Neue"):
            if candidate in families:
                _resolved_font = candidate
                break
        else:
            _resolved_font = "Arial"
    return _resolved_font


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str] = PALETTE) -> str:
    p = palette
    font = resolve_font_family()
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "{font}", "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QMainWindow {{
        background-color: {p['bg']};
    }}

    /* ── buttons ─────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-size: 14px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
        border-color: {p['accent']};
    }}

    QPushButton:disabled {{
        color: {p['text_muted']};
        border-color: {p['bg_secondary']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#secondaryButton {{
        background-color: {p['surface']};
        color: {p['text']};
        border: 1px solid {p['border']};
        font-size: 15px;
        padding: 12px 24px;
        border-radius: 10px;
    }}

    QPushButton#dangerButton {{
        background-color: {p['danger']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#deleteButton {{
        background-color: transparent;
        color: {p['danger']};
        border: none;
        padding: 2px 8px;
        font-size: 16px;
    }}

    QPushButton#deleteButton:disabled {{
        color: {p['border']};
    }}

    /* ── line edit ───────────────────────────────── */
    QLineEdit {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 10px 14px;
        font-size: 14px;
    }}

    QLineEdit:focus {{
        border-color: {p['accent']};
    }}

    /* ── slider ──────────────────────────────────── */
    QSlider::groove:horizontal {{
        background-color: {p['border']};
        height: 4px;
        border-radius: 2px;
    }}

    QSlider::handle:horizontal {{
        background-color: {p['accent']};
        width: 18px;
        margin: -7px 0;
        border-radius: 9px;
    }}

    /* ── exercise list ───────────────────────────── */
    QListWidget {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 4px;
    }}

    QListWidget::item {{
        border-bottom: 1px solid {p['border']};
    }}

    /* ── frame / card ────────────────────────────── */
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
    }}

    /* ── labels ──────────────────────────────────── */
    QLabel#headerLabel {{
        font-size: 26px;
        font-weight: 700;
    }}

    QLabel#durationLabel {{
        font-size: 15px;
        font-weight: 700;
        color: {p['accent']};
    }}

    QLabel#totalLabel {{
        font-size: 15px;
        font-weight: 700;
    }}

    /* ── status bar ──────────────────────────────── */
    QStatusBar {{
        background-color: {p['bg']};
        color: {p['text_muted']};
        font-size: 12px;
        border-top: 1px solid {p['border']};
    }}
    """
