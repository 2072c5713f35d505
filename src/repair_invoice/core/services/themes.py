"""
Static catalogue of invoice themes.
Each theme is a ThemeInfo (what the picker shows) plus a ThemeTokens record
(what the layout engine varies). Declaration order is the picker order.
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple

from repair_invoice.core.models.theme import (
    SECTION_ORDER,
    CornerStyle,
    HeaderStyle,
    NumeralStyle,
    ThemeInfo,
    ThemeStyle,
    ThemeTokens,
)

logger = logging.getLogger(__name__)

DEFAULT_THEME_ID = "modern-minimalist"


def _theme(
    theme_id: str,
    name: str,
    description: str,
    primary: str,
    secondary: str,
    style: ThemeStyle,
    header: HeaderStyle,
    numerals: NumeralStyle,
    corners: CornerStyle,
    typeface: str = "sans",
) -> tuple[ThemeInfo, ThemeTokens]:
    info = ThemeInfo(
        id=theme_id,
        name=name,
        description=description,
        thumbnail=f"/templates/{theme_id}.png",
        primary_color=primary,
        secondary_color=secondary,
        style=style,
    )
    tokens = ThemeTokens(
        primary_color=primary,
        secondary_color=secondary,
        header_style=header,
        numeral_style=numerals,
        corner_style=corners,
        typeface=typeface,
    )
    return info, tokens


_DECLARED = [
    _theme(
        "modern-minimalist",
        "Modern Minimalist",
        "Clean design with emerald accents and plenty of whitespace",
        "#10b981",
        "#d1fae5",
        ThemeStyle.MINIMAL,
        HeaderStyle.TOP_BAR,
        NumeralStyle.SANS,
        CornerStyle.SQUARE,
    ),
    _theme(
        "corporate-pro",
        "Corporate Pro",
        "Professional royal blue theme with structured grid layout",
        "#2563eb",
        "#dbeafe",
        ThemeStyle.CLASSIC,
        HeaderStyle.TOP_BAR,
        NumeralStyle.SANS,
        CornerStyle.SQUARE,
    ),
    _theme(
        "creative-studio",
        "Creative Studio",
        "Unique violet sidebar layout ideal for agencies",
        "#8b5cf6",
        "#ede9fe",
        ThemeStyle.CREATIVE,
        HeaderStyle.SIDEBAR,
        NumeralStyle.SANS,
        CornerStyle.ROUNDED,
    ),
    _theme(
        "executive-suite",
        "Executive Suite",
        "Elegant serif fonts with slate and gold accents",
        "#475569",
        "#d97706",
        ThemeStyle.CLASSIC,
        HeaderStyle.BANNER,
        NumeralStyle.SERIF,
        CornerStyle.SQUARE,
        typeface="serif",
    ),
    _theme(
        "tech-forward",
        "Tech Forward",
        "Modern flat design with cyan accents and dark header",
        "#06b6d4",
        "#cffafe",
        ThemeStyle.MODERN,
        HeaderStyle.TOP_BAR,
        NumeralStyle.MONO,
        CornerStyle.SQUARE,
    ),
    _theme(
        "bold-impact",
        "Bold Impact",
        "High contrast red theme with thick borders and bold typography",
        "#dc2626",
        "#fee2e2",
        ThemeStyle.BOLD,
        HeaderStyle.TOP_BAR,
        NumeralStyle.SANS,
        CornerStyle.THICK_BORDER,
    ),
    _theme(
        "industrial-tech",
        "Industrial Tech",
        "Technical blueprint aesthetic with monospace fonts and orange accents",
        "#f97316",
        "#ffedd5",
        ThemeStyle.MODERN,
        HeaderStyle.TOP_BAR,
        NumeralStyle.MONO,
        CornerStyle.THICK_BORDER,
    ),
    _theme(
        "classic-professional",
        "Classic Professional",
        "Traditional navy invoice with outer border and serif headers",
        "#1e293b",
        "#f1f5f9",
        ThemeStyle.CLASSIC,
        HeaderStyle.BANNER,
        NumeralStyle.SERIF,
        CornerStyle.THICK_BORDER,
        typeface="serif",
    ),
    _theme(
        "retail-receipt",
        "Retail Receipt",
        "Compact teal receipt-style layout with centered header",
        "#14b8a6",
        "#ccfbf1",
        ThemeStyle.CREATIVE,
        HeaderStyle.BANNER,
        NumeralStyle.MONO,
        CornerStyle.SQUARE,
    ),
    _theme(
        "soft-elegance",
        "Soft Elegance",
        "Gentle rose theme with rounded corners and soft backgrounds",
        "#fb7185",
        "#ffe4e6",
        ThemeStyle.MINIMAL,
        HeaderStyle.SIDEBAR,
        NumeralStyle.SANS,
        CornerStyle.ROUNDED,
    ),
]

THEMES: Dict[str, ThemeInfo] = {info.id: info for info, _ in _DECLARED}
THEME_TOKENS: Dict[str, ThemeTokens] = {info.id: tokens for info, tokens in _DECLARED}

for _theme_id, _tokens in THEME_TOKENS.items():
    if _tokens.section_order != SECTION_ORDER:
        raise ValueError(f"Theme {_theme_id} must use the shared section order")
if DEFAULT_THEME_ID not in THEMES:
    raise ValueError(f"Default theme {DEFAULT_THEME_ID} is not registered")


def resolve_theme_id(theme_id: str | None) -> str:
    """Return a registered theme id; unknown, empty or missing ids map to the default."""
    if theme_id and theme_id in THEMES:
        return theme_id
    if theme_id:
        logger.debug("Unknown theme %r, using %s", theme_id, DEFAULT_THEME_ID)
    return DEFAULT_THEME_ID


def lookup(theme_id: str | None) -> ThemeInfo:
    return THEMES[resolve_theme_id(theme_id)]


def tokens_for(theme_id: str | None) -> ThemeTokens:
    return THEME_TOKENS[resolve_theme_id(theme_id)]


def list_all() -> Tuple[ThemeInfo, ...]:
    return tuple(THEMES.values())
