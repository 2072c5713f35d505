"""
Laid-out document produced by the renderer: pages of PDF content operators
plus the images placed on them. Serialized to bytes by the builder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from repair_invoice.utils.assets import ImageAsset
from repair_invoice.utils.pdf.core.builder import build_pdf_bytes
from repair_invoice.utils.pdf.core.layout_common import PAGE_H, PAGE_W
from repair_invoice.utils.pdf.core.totals import LineItem


@dataclass(frozen=True)
class PlacedImage:
    name: str  # XObject resource name, e.g. "/Im1"
    asset: ImageAsset
    slot: str  # "logo" or "photo"


@dataclass
class Block:
    """Output of one section renderer: operators, vertical space used, images placed."""

    ops: str
    height: float
    images: list[PlacedImage] = field(default_factory=list)


@dataclass(frozen=True)
class Page:
    kind: str  # "primary" or "addendum"
    sections: Tuple[str, ...]
    content: str
    images: Tuple[PlacedImage, ...] = ()
    line_items: Tuple[LineItem, ...] = ()

    def photo_count(self) -> int:
        return sum(1 for img in self.images if img.slot == "photo")


@dataclass(frozen=True)
class Document:
    pages: Tuple[Page, ...]
    page_size: Tuple[int, int] = (PAGE_W, PAGE_H)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def primary(self) -> Page:
        return self.pages[0]

    @property
    def addendum(self) -> Page | None:
        return self.pages[1] if len(self.pages) > 1 else None

    def to_pdf(self) -> bytes:
        return build_pdf_bytes(self.pages, page_size=self.page_size)
