"""
Second page: terms, device condition photos and a restated contact block.
Emitted only when the invoice carries terms or device photos.
"""

from __future__ import annotations

import logging
from typing import Sequence

from repair_invoice.core.models.invoice import CompanyInfo, InvoiceData
from repair_invoice.core.models.theme import HeaderStyle
from repair_invoice.utils.assets import ImageAsset
from repair_invoice.utils.pdf.core.document import Block, PlacedImage
from repair_invoice.utils.pdf.core.drawing import (
    _draw_box,
    _draw_image,
    _draw_rect,
    _draw_text,
    _draw_text_right,
    _fill,
    fit_box,
    fit_text,
    wrap_lines,
)
from repair_invoice.utils.pdf.core.layout_common import (
    ADDENDUM_HEADER_H,
    COLUMN_GAP,
    PAGE_H,
    PAGE_W,
    PageStyle,
    color,
)
from repair_invoice.utils.pdf.sections.company_header import company_name, render_sidebar_panel

logger = logging.getLogger(__name__)

MAX_ADDENDUM_PHOTOS = 4
PHOTO_COLUMNS = 2
PHOTO_CELL_H = 150
TERMS_LINE_H = 11
TERMS_SIZE = 8.5
SECTION_TITLE_H = 22


def needs_addendum(data: InvoiceData) -> bool:
    return data.has_terms or bool(data.device_images)


def select_photo_refs(data: InvoiceData) -> list[str]:
    refs = [ref for ref in data.device_images if ref]
    if len(refs) > MAX_ADDENDUM_PHOTOS:
        logger.debug(
            "Invoice %s: %d device photos supplied, keeping the first %d",
            data.invoice_number,
            len(refs),
            MAX_ADDENDUM_PHOTOS,
        )
    return refs[:MAX_ADDENDUM_PHOTOS]


def render_addendum_header(data: InvoiceData, style: PageStyle) -> Block:
    parts: list[str] = []
    if style.header_style == HeaderStyle.SIDEBAR:
        parts.append(render_sidebar_panel(data.company, style, with_details=False).ops)
        x, w = style.content_x, style.content_w
        band_y = PAGE_H - 36 - ADDENDUM_HEADER_H + 12
        parts.append(_draw_box(x, band_y, w, ADDENDUM_HEADER_H - 12, radius=style.radius, fill_color=style.primary))
        height = 36 + ADDENDUM_HEADER_H - 12
    else:
        x, w = 0, PAGE_W
        band_y = PAGE_H - ADDENDUM_HEADER_H
        parts.append(_fill(style.primary))
        parts.append(_draw_rect(0, band_y, PAGE_W, ADDENDUM_HEADER_H, stroke=False, fill=True))
        height = ADDENDUM_HEADER_H
    text_x = style.content_x + (12 if style.header_style == HeaderStyle.SIDEBAR else 0)
    parts.append(_fill(color("white")))
    parts.append(_draw_text(["Additional Information"], text_x, band_y + 20, style.bold_font, 16))
    right = x + w - (12 if style.header_style == HeaderStyle.SIDEBAR else 36)
    parts.append(_draw_text_right(f"#{data.invoice_number}", right, band_y + 20, style.num_font, 10))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=height)


def render_identity(data: InvoiceData, style: PageStyle, x: float, top: float, width: float) -> Block:
    line = fit_text(f"Invoice #{data.invoice_number} | {company_name(data.company)}", width, style.bold_font, 10)
    parts = [_fill(color("dark")), _draw_text([line], x, top - 12, style.bold_font, 10)]
    if data.invoice_date:
        parts.append(_fill(color("muted")))
        parts.append(_draw_text([f"Dated {data.invoice_date}"], x, top - 26, style.body_font, 8.5))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=30)


def build_terms_lines(text: str, width: float, font: str, max_lines: int | None = None) -> list[str]:
    return wrap_lines(text.strip(), width, font, TERMS_SIZE, max_lines=max_lines)


def render_terms(data: InvoiceData, style: PageStyle, x: float, top: float, width: float, max_height: float) -> Block | None:
    """Terms box; lines are capped only when the full text exceeds the space left on the page."""
    if not data.has_terms:
        return None
    max_lines = max(1, int((max_height - SECTION_TITLE_H - 12) // TERMS_LINE_H))
    lines = build_terms_lines(data.terms_and_conditions, width - 24, style.body_font, max_lines=max_lines)
    height = SECTION_TITLE_H + 12 + TERMS_LINE_H * len(lines)
    parts = [
        _draw_box(
            x,
            top - height,
            width,
            height,
            radius=style.radius,
            fill_color=color("light"),
            stroke_color=color("border"),
            border_width=style.border_width,
        )
    ]
    parts.append(_fill(style.primary))
    parts.append(_draw_text(["TERMS & CONDITIONS"], x + 12, top - 16, style.bold_font, 9))
    parts.append(_fill(color("text")))
    parts.append(_draw_text(lines, x + 12, top - SECTION_TITLE_H - 8, style.body_font, TERMS_SIZE, leading=TERMS_LINE_H))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=height)


def photos_height(count: int) -> float:
    if count <= 0:
        return 0.0
    rows = (count + PHOTO_COLUMNS - 1) // PHOTO_COLUMNS
    return SECTION_TITLE_H + rows * PHOTO_CELL_H + (rows - 1) * COLUMN_GAP


def render_photos(
    photos: Sequence[ImageAsset],
    style: PageStyle,
    x: float,
    top: float,
    width: float,
) -> Block | None:
    """2 x 2 grid of loaded photos, each contained in its cell with its aspect ratio kept."""
    photos = list(photos)[:MAX_ADDENDUM_PHOTOS]
    if not photos:
        return None
    parts = [_fill(style.primary), _draw_text(["DEVICE CONDITION PHOTOS"], x, top - 14, style.bold_font, 9)]
    images: list[PlacedImage] = []
    cell_w = (width - COLUMN_GAP * (PHOTO_COLUMNS - 1)) / PHOTO_COLUMNS
    for idx, asset in enumerate(photos):
        row, col = divmod(idx, PHOTO_COLUMNS)
        cell_x = x + col * (cell_w + COLUMN_GAP)
        cell_top = top - SECTION_TITLE_H - row * (PHOTO_CELL_H + COLUMN_GAP)
        parts.append(
            _draw_box(
                cell_x,
                cell_top - PHOTO_CELL_H,
                cell_w,
                PHOTO_CELL_H,
                radius=style.radius,
                fill_color=color("light"),
                stroke_color=color("border"),
                border_width=style.border_width,
            )
        )
        img_w, img_h = fit_box(asset.width, asset.height, cell_w - 12, PHOTO_CELL_H - 12)
        img_x = cell_x + (cell_w - img_w) / 2
        img_y = cell_top - PHOTO_CELL_H + (PHOTO_CELL_H - img_h) / 2
        name = f"/Im{idx + 1}"
        parts.append(_draw_image(name, img_x, img_y, img_w, img_h))
        images.append(PlacedImage(name=name, asset=asset, slot="photo"))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=photos_height(len(photos)), images=images)


def build_contact_lines(company: CompanyInfo) -> list[str]:
    lines = [company_name(company)]
    if company.address:
        lines.append(company.address)
    if company.phone:
        lines.append(f"Phone: {company.phone}")
    if company.email:
        lines.append(f"Email: {company.email}")
    if company.website:
        lines.append(f"Web: {company.website}")
    return lines


def contact_height(company: CompanyInfo) -> float:
    return 30 + 12 * len(build_contact_lines(company))


def render_contact(company: CompanyInfo, style: PageStyle, x: float, bottom: float, width: float) -> Block:
    """Contact block anchored at `bottom`."""
    lines = [fit_text(line, width - 24, style.body_font, 9) for line in build_contact_lines(company)]
    height = contact_height(company)
    top = bottom + height
    parts = [
        _draw_box(
            x,
            bottom,
            width,
            height,
            radius=style.radius,
            fill_color=style.accent_soft,
        )
    ]
    parts.append(_fill(style.primary))
    parts.append(_draw_text(["Contact Us"], x + 12, top - 16, style.bold_font, 10))
    parts.append(_fill(color("dark")))
    parts.append(_draw_text(lines, x + 12, top - 30, style.body_font, 9, leading=12))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=height)
