"""Theme, color definitions, QSS stylesheet, and display formatting utilities."""

from __future__ import annotations

# ── Color palette, light theme with blue accents ──

COLORS = {
    "primary": "#2D7FF9",
    "primary_light": "#EAF2FE",
    "bg": "#FFFFFF",
    "panel_bg": "#FAFAFA",
    "border": "#E0E0E0",
    "text": "#1A1A1A",
    "text_muted": "#999999",
}

# ── Fonts ──

FONT_FAMILY = "-apple-system, 'SF Pro Text', 'Helvetica Neue', 'Segoe UI', Roboto, sans-serif"
MONO_FAMILY = "'SF Mono', Menlo, Consolas, 'Liberation Mono', monospace"

# ── QSS Stylesheet ──


def build_stylesheet() -> str:
    """Build the application-wide QSS stylesheet."""
    c = COLORS
    return f"""
/* ── Global ── */
QWidget {{
    font-family: {FONT_FAMILY};
    font-size: 13px;
    color: {c["text"]};
    background-color: {c["bg"]};
}}

/* ── Main window ── */
QMainWindow {{
    background-color: {c["bg"]};
}}

/* ── Status bar ── */
QStatusBar {{
    background-color: {c["panel_bg"]};
    border-top: 1px solid {c["border"]};
    font-size: 12px;
    color: {c["text_muted"]};
    padding: 4px 12px;
}}

/* ── Scroll bars ── */
QScrollBar:vertical {{
    background: transparent;
    width: 8px;
    margin: 0;
}}
QScrollBar::handle:vertical {{
    background: #D0D0D0;
    min-height: 30px;
    border-radius: 4px;
}}
QScrollBar::handle:vertical:hover {{
    background: #B0B0B0;
}}
QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {{
    height: 0;
}}

/* ── Source editor ── */
QPlainTextEdit {{
    font-family: {MONO_FAMILY};
    font-size: 13px;
    border: none;
    padding: 8px;
}}

/* ── Preview ── */
QTextBrowser {{
    background-color: {c["bg"]};
    border: none;
    padding: 8px;
}}

/* ── Tab bar ── */
QTabWidget::pane {{
    border: none;
    border-top: 1px solid {c["border"]};
}}
QTabBar::tab {{
    padding: 6px 16px;
    border: none;
    border-bottom: 2px solid transparent;
    color: {c["text_muted"]};
    font-size: 12px;
}}
QTabBar::tab:selected {{
    color: {c["primary"]};
    border-bottom-color: {c["primary"]};
}}
QTabBar::tab:hover:!selected {{
    color: {c["text"]};
}}

/* ── Menus ── */
QMenu::item:selected {{
    background-color: {c["primary_light"]};
    color: {c["text"]};
}}

/* ── Labels ── */
QLabel {{
    background-color: transparent;
}}
"""


# ── Format helpers ──


def format_timeout_ms(ms: int) -> str:
    """Format a timeout for the status bar.

    Examples: "250ms", "2s", "1.5s"
    """
    if ms < 1000:
        return f"{ms}ms"
    if ms % 1000 == 0:
        return f"{ms // 1000}s"
    return f"{ms / 1000:.1f}s"


def window_title(file_name: str) -> str:
    """Main window title for the given file name."""
    return f"{file_name or 'Untitled'} - Markdown Preview"
