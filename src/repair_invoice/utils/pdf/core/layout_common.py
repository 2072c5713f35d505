"""
Layout and style constants for PDF rendering.
Theme tokens are resolved into a PageStyle here; everything else is fixed geometry.
"""

from __future__ import annotations

from dataclasses import dataclass

from repair_invoice.core.models.theme import CornerStyle, HeaderStyle, NumeralStyle, ThemeTokens

# Page geometry (A4, points)
PAGE_W, PAGE_H = 595, 842
MARGIN = 36
FOOTER_Y = 40
CONTENT_BOTTOM = 60

# Header geometry
TOP_BAR_H = 96
BANNER_H = 112
SIDEBAR_W = 160
ADDENDUM_HEADER_H = 60

# Section geometry
SECTION_GAP = 12
COLUMN_GAP = 14
TABLE_HEADER_HEIGHT = 22
TABLE_ROW_HEIGHT = 22
TOTALS_W = 230

# Standard Type1 fonts registered by the builder: (regular, bold) resource names
FONT_FAMILIES = {
    "sans": ("/F1", "/F2"),
    "mono": ("/F3", "/F4"),
    "serif": ("/F5", "/F6"),
}
BASE_FONTS = {
    "/F1": "Helvetica",
    "/F2": "Helvetica-Bold",
    "/F3": "Courier",
    "/F4": "Courier-Bold",
    "/F5": "Times-Roman",
    "/F6": "Times-Bold",
}

# Fixed colors (RGB components in 0-1 space encoded as strings for PDF ops)
COLORS = {
    "dark": "0.12 0.16 0.22",
    "text": "0.20 0.25 0.33",
    "muted": "0.39 0.45 0.55",
    "border": "0.89 0.91 0.94",
    "light": "0.97 0.98 0.99",
    "white": "1 1 1",
}

STATUS_COLORS = {
    "paid": {"bg": "#dcfce7", "border": "#22c55e", "text": "#15803d"},
    "partial": {"bg": "#fef3c7", "border": "#f59e0b", "text": "#b45309"},
    "pending": {"bg": "#fee2e2", "border": "#ef4444", "text": "#dc2626"},
}


def hex_to_rgb(value: str) -> tuple[float, float, float]:
    text = str(value or "").lstrip("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    try:
        r, g, b = (int(text[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return 0.0, 0.0, 0.0
    return r / 255.0, g / 255.0, b / 255.0


def rgb(value: str, tint: float = 0.0) -> str:
    """PDF color operand string for a hex color, optionally mixed towards white."""
    channels = [c + (1.0 - c) * tint for c in hex_to_rgb(value)]
    return " ".join(f"{c:.3f}" for c in channels)


def color(name: str) -> str:
    return COLORS.get(name, "0 0 0")


@dataclass(frozen=True)
class PageStyle:
    primary: str
    accent: str
    accent_soft: str
    header_style: HeaderStyle
    corner_style: CornerStyle
    body_font: str
    bold_font: str
    num_font: str
    num_bold_font: str
    border_width: float
    radius: float

    @property
    def content_x(self) -> int:
        if self.header_style == HeaderStyle.SIDEBAR:
            return SIDEBAR_W + 24
        return MARGIN

    @property
    def content_w(self) -> int:
        if self.header_style == HeaderStyle.SIDEBAR:
            return PAGE_W - self.content_x - 30
        return PAGE_W - 2 * MARGIN


def resolve_style(tokens: ThemeTokens) -> PageStyle:
    text_family = FONT_FAMILIES["serif" if tokens.typeface == "serif" else "sans"]
    numeral_family = FONT_FAMILIES.get(NumeralStyle(tokens.numeral_style).value, FONT_FAMILIES["sans"])
    corners = CornerStyle(tokens.corner_style)
    return PageStyle(
        primary=rgb(tokens.primary_color),
        accent=rgb(tokens.secondary_color),
        accent_soft=rgb(tokens.secondary_color, tint=0.6),
        header_style=HeaderStyle(tokens.header_style),
        corner_style=corners,
        body_font=text_family[0],
        bold_font=text_family[1],
        num_font=numeral_family[0],
        num_bold_font=numeral_family[1],
        border_width=2.0 if corners == CornerStyle.THICK_BORDER else 0.8,
        radius=6.0 if corners == CornerStyle.ROUNDED else 0.0,
    )
