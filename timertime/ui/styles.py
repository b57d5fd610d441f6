"""QSS stylesheets and light/dark palettes for Timer Time."""

from __future__ import annotations

# ── palettes ─────────────────────────────────────────────────────────────

LIGHT_PALETTE: dict[str, str] = {
    "bg":           "#FFFFFF",
    "bg_secondary": "#F3EEFB",
    "surface":      "#E8DEF8",
    "accent":       "#6200EE",   # purple 500
    "accent2":      "#3700B3",   # purple 700
    "text":         "#1C1B1F",
    "text_muted":   "#6F6A78",
    "sand":         "#D9A441",
    "glass":        "#9A93A8",
    "border":       "#D6CFE2",
}

DARK_PALETTE: dict[str, str] = {
    "bg":           "#121212",
    "bg_secondary": "#1E1E24",
    "surface":      "#2A2A33",
    "accent":       "#BB86FC",   # purple 200
    "accent2":      "#03DAC5",   # teal 200
    "text":         "#E6E1E5",
    "text_muted":   "#938F99",
    "sand":         "#F2C46D",
    "glass":        "#6E6A78",
    "border":       "#33313B",
}


def get_palette(dark_mode: bool) -> dict[str, str]:
    return dict(DARK_PALETTE if dark_mode else LIGHT_PALETTE)


# ── font resolution ───────────────────────────────────────────────────

_resolved_font: str | None = None


def resolve_font_family() -> str:
    """Detect the best available sans-serif font.  Must be called after
    QApplication is created (font database needs the app context)."""
    global _resolved_font
    if _resolved_font is None:
        from PyQt6.QtGui import QFontDatabase
        families = set(QFontDatabase.families())
        for candidate in ("SF Pro", ".AppleSystemUIFont", "Roboto"):
            if candidate in families:
                _resolved_font = candidate
                break
        else:
            _resolved_font = "Helvetica Neue"
    return _resolved_font


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str]) -> str:
    p = palette
    font = resolve_font_family()
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "{font}", "Helvetica Neue", Arial, sans-serif;
        font-size: 14px;
    }}

    QMainWindow {{
        background-color: {p['bg']};
    }}

    /* ── duration + restart buttons ──────────────── */
    QPushButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        border-radius: 6px;
        min-height: 50px;
        font-size: 16px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton:pressed {{
        background-color: {p['accent2']};
    }}

    /* ── countdown text ──────────────────────────── */
    QLabel#countdownLabel {{
        font-size: 42px;
        font-weight: 700;
        padding: 10px;
    }}

    /* ── menu / status bar ───────────────────────── */
    QMenuBar {{
        background-color: {p['bg_secondary']};
    }}

    QStatusBar {{
        background-color: {p['bg_secondary']};
        color: {p['text_muted']};
        font-size: 12px;
    }}
    """
