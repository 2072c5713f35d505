from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ThemeStyle(str, Enum):
    MINIMAL = "minimal"
    CLASSIC = "classic"
    BOLD = "bold"
    CREATIVE = "creative"
    MODERN = "modern"


class HeaderStyle(str, Enum):
    TOP_BAR = "top_bar"
    SIDEBAR = "sidebar"
    BANNER = "banner"


class NumeralStyle(str, Enum):
    SANS = "sans"
    MONO = "mono"
    SERIF = "serif"


class CornerStyle(str, Enum):
    SQUARE = "square"
    ROUNDED = "rounded"
    THICK_BORDER = "thick_border"


# Shared by every theme; the layout engine walks sections in this order.
SECTION_ORDER: Tuple[str, ...] = (
    "company_header",
    "invoice_meta",
    "bill_to",
    "delivery",
    "device",
    "line_items",
    "totals",
    "payment_status",
    "notes",
)


@dataclass(frozen=True)
class ThemeInfo:
    """Registry entry shown in the theme picker."""

    id: str
    name: str
    description: str
    thumbnail: str
    primary_color: str
    secondary_color: str
    style: ThemeStyle


@dataclass(frozen=True)
class ThemeTokens:
    """Everything the layout engine is allowed to vary between themes."""

    primary_color: str
    secondary_color: str
    header_style: HeaderStyle = HeaderStyle.TOP_BAR
    numeral_style: NumeralStyle = NumeralStyle.SANS
    corner_style: CornerStyle = CornerStyle.SQUARE
    typeface: str = "sans"  # sans / serif
    section_order: Tuple[str, ...] = SECTION_ORDER
