from __future__ import annotations

import logging
from typing import Callable, Optional

from repair_invoice.core.models.invoice import InvoiceData
from repair_invoice.core.models.theme import CornerStyle, ThemeTokens
from repair_invoice.utils.assets import ImageAsset, load_image_asset, try_load_image
from repair_invoice.utils.pdf.core.document import Block, Document, Page, PlacedImage
from repair_invoice.utils.pdf.core.drawing import (
    _draw_line,
    _draw_rect,
    _draw_text,
    _draw_text_right,
    _fill,
    _stroke,
    fit_text,
)
from repair_invoice.utils.pdf.core.layout_common import (
    COLUMN_GAP,
    CONTENT_BOTTOM,
    FOOTER_Y,
    PAGE_H,
    PAGE_W,
    SECTION_GAP,
    TOTALS_W,
    PageStyle,
    color,
    resolve_style,
)
from repair_invoice.utils.pdf.core.totals import build_line_items
from repair_invoice.utils.pdf.sections.addendum import (
    contact_height,
    needs_addendum,
    photos_height,
    render_addendum_header,
    render_contact,
    render_identity,
    render_photos,
    render_terms,
    select_photo_refs,
)
from repair_invoice.utils.pdf.sections.bill_to import render_bill_to
from repair_invoice.utils.pdf.sections.company_header import company_name, render_company_header
from repair_invoice.utils.pdf.sections.delivery import has_delivery, render_delivery
from repair_invoice.utils.pdf.sections.device import render_device
from repair_invoice.utils.pdf.sections.invoice_meta import render_invoice_meta
from repair_invoice.utils.pdf.sections.items_table import render_items_table
from repair_invoice.utils.pdf.sections.notes import LINE_H as NOTE_LINE_H, MAX_NOTE_LINES, render_notes
from repair_invoice.utils.pdf.sections.payment import render_payment_status
from repair_invoice.utils.pdf.sections.summary import render_totals
from repair_invoice.utils.qr import make_qr_matrix

logger = logging.getLogger(__name__)

AssetLoader = Callable[[str], ImageAsset]

# Sections rendered side by side in one row.
PAIRED_SECTIONS = (("bill_to", "delivery"), ("totals", "payment_status"))

FRAME_INSET = 14


def render_document(data: InvoiceData, tokens: ThemeTokens, asset_loader: Optional[AssetLoader] = None) -> Document:
    """
    Lay out an enriched invoice with the given theme tokens.
    Returns the primary page, plus the addendum page when the invoice has terms or photos.
    """
    loader = asset_loader or load_image_asset
    style = resolve_style(tokens)
    pages = [_render_primary(data, style, tokens.section_order, loader)]
    if needs_addendum(data):
        pages.append(_render_addendum(data, style, loader))
    logger.debug("Rendered invoice %s: %d page(s)", data.invoice_number, len(pages))
    return Document(pages=tuple(pages))


def _render_primary(data: InvoiceData, style: PageStyle, section_order, loader: AssetLoader) -> Page:
    x, width = style.content_x, style.content_w
    parts: list[str] = []
    images: list[PlacedImage] = []
    rendered: list[str] = []
    cursor = float(PAGE_H)

    def place(section_id: str, block: Block | None) -> None:
        nonlocal cursor
        if block is None:
            return
        parts.append(block.ops)
        images.extend(block.images)
        rendered.append(section_id)
        if block.height:
            cursor -= block.height + SECTION_GAP

    handled: set[str] = set()
    for section_id in section_order:
        if section_id in handled:
            continue
        for pair in PAIRED_SECTIONS:
            if section_id in pair:
                handled.update(pair)
        top = cursor
        if section_id == "company_header":
            logo = try_load_image(data.company.logo, loader)
            place(section_id, render_company_header(data, style, logo))
        elif section_id == "invoice_meta":
            place(section_id, render_invoice_meta(data, style, x, top, width))
        elif section_id in ("bill_to", "delivery"):
            _place_customer_row(data, style, x, top, width, place)
        elif section_id == "device":
            place(section_id, render_device(data, style, x, top, width))
        elif section_id == "line_items":
            place(section_id, render_items_table(build_line_items(data.costs), style, x, top, width))
        elif section_id in ("totals", "payment_status"):
            _place_totals_row(data, style, x, top, width, place)
        elif section_id == "notes":
            room = int((top - CONTENT_BOTTOM - 28) // NOTE_LINE_H)
            place(section_id, render_notes(data, style, x, top, width, max_lines=min(MAX_NOTE_LINES, room)))
        else:
            logger.debug("Ignoring unknown section %r", section_id)

    parts.append(_render_footer(data, style, f"{company_name(data.company)} - Thank you!"))
    parts.append(_render_frame(style))
    return Page(
        kind="primary",
        sections=tuple(rendered),
        content="".join(parts),
        images=tuple(images),
        line_items=tuple(build_line_items(data.costs)),
    )


def _place_customer_row(data, style, x, top, width, place) -> None:
    if not has_delivery(data):
        place("bill_to", render_bill_to(data, style, x, top, width))
        return
    col_w = (width - COLUMN_GAP) / 2
    right_x = x + col_w + COLUMN_GAP
    row_h = max(
        render_bill_to(data, style, x, top, col_w).height,
        render_delivery(data, style, right_x, top, col_w).height,
    )
    bill_to = render_bill_to(data, style, x, top, col_w, min_height=row_h)
    delivery = render_delivery(data, style, right_x, top, col_w, min_height=row_h)
    bill_to.ops += delivery.ops
    delivery.ops = ""
    delivery.height = 0
    place("bill_to", bill_to)
    place("delivery", delivery)


def _place_totals_row(data, style, x, top, width, place) -> None:
    totals_x = x + width - TOTALS_W
    status_w = width - TOTALS_W - COLUMN_GAP
    qr_matrix = make_qr_matrix(data.tracking_url) if data.tracking_url else None
    totals = render_totals(data, style, totals_x, top, TOTALS_W)
    status = render_payment_status(data, style, x, top, status_w, qr_matrix=qr_matrix)
    row_h = max(totals.height, status.height)
    totals.ops += status.ops
    totals.height = row_h
    status.ops = ""
    status.height = 0
    place("totals", totals)
    place("payment_status", status)


def _render_addendum(data: InvoiceData, style: PageStyle, loader: AssetLoader) -> Page:
    x, width = style.content_x, style.content_w
    parts: list[str] = []
    rendered: list[str] = []

    header = render_addendum_header(data, style)
    parts.append(header.ops)
    rendered.append("addendum_header")
    cursor = PAGE_H - header.height - SECTION_GAP

    identity = render_identity(data, style, x, cursor, width)
    parts.append(identity.ops)
    rendered.append("identity")
    cursor -= identity.height + SECTION_GAP

    photos = [asset for asset in (try_load_image(ref, loader) for ref in select_photo_refs(data)) if asset is not None]
    contact_h = contact_height(data.company)
    reserved = CONTENT_BOTTOM + contact_h + SECTION_GAP
    if photos:
        reserved += photos_height(len(photos)) + SECTION_GAP

    terms = render_terms(data, style, x, cursor, width, max_height=cursor - reserved)
    if terms is not None:
        parts.append(terms.ops)
        rendered.append("terms")
        cursor -= terms.height + SECTION_GAP

    photo_block = render_photos(photos, style, x, cursor, width)
    images: tuple[PlacedImage, ...] = ()
    if photo_block is not None:
        parts.append(photo_block.ops)
        images = tuple(photo_block.images)
        rendered.append("photos")

    parts.append(render_contact(data.company, style, x, CONTENT_BOTTOM, width).ops)
    rendered.append("contact")
    parts.append(_render_footer(data, style, "Page 2"))
    parts.append(_render_frame(style))
    return Page(kind="addendum", sections=tuple(rendered), content="".join(parts), images=images)


def _render_footer(data: InvoiceData, style: PageStyle, right_text: str) -> str:
    x, width = style.content_x, style.content_w
    parts = [
        _stroke(color("border"), 0.6),
        _draw_line(x, CONTENT_BOTTOM - 8, x + width, CONTENT_BOTTOM - 8),
        _fill(color("muted")),
        _draw_text([f"Invoice #{data.invoice_number}"], x, FOOTER_Y - 4, style.num_font, 8),
        _draw_text_right(fit_text(right_text, width / 2, style.body_font, 8), x + width, FOOTER_Y - 4, style.body_font, 8),
        "0 0 0 rg 0 0 0 RG\n",
    ]
    return "".join(parts)


def _render_frame(style: PageStyle) -> str:
    if style.corner_style != CornerStyle.THICK_BORDER:
        return ""
    return "".join(
        [
            "q ",
            _stroke(style.primary, style.border_width),
            _draw_rect(FRAME_INSET, FRAME_INSET, PAGE_W - 2 * FRAME_INSET, PAGE_H - 2 * FRAME_INSET, stroke=True, fill=False),
            "Q\n",
        ]
    )
