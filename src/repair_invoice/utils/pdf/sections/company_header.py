from __future__ import annotations

from repair_invoice.core.models.invoice import CompanyInfo, InvoiceData
from repair_invoice.core.models.theme import CornerStyle, HeaderStyle
from repair_invoice.utils.assets import ImageAsset
from repair_invoice.utils.pdf.core.document import Block, PlacedImage
from repair_invoice.utils.pdf.core.drawing import (
    _draw_image,
    _draw_rect,
    _draw_text,
    _draw_text_center,
    _draw_text_right,
    _fill,
    fit_box,
    fit_text,
    wrap_lines,
)
from repair_invoice.utils.pdf.core.layout_common import (
    BANNER_H,
    MARGIN,
    PAGE_H,
    PAGE_W,
    SIDEBAR_W,
    TOP_BAR_H,
    PageStyle,
    color,
)

STRIPE_H = 6


def build_company_lines(company: CompanyInfo) -> list[str]:
    lines = []
    if company.address:
        lines.append(company.address)
    contact = " | ".join(part for part in (company.phone, company.email) if part)
    if contact:
        lines.append(contact)
    if company.website:
        lines.append(company.website)
    if company.tax_id:
        lines.append(f"GST: {company.tax_id}")
    return lines


def company_name(company: CompanyInfo) -> str:
    return company.name or "N/A"


def _logo(logo: ImageAsset | None, name: str, x: float, top: float, max_w: float, max_h: float) -> tuple[str, list[PlacedImage], float]:
    if logo is None:
        return "", [], 0.0
    w, h = fit_box(logo.width, logo.height, max_w, max_h)
    ops = _draw_image(name, x, top - h, w, h)
    return ops, [PlacedImage(name=name, asset=logo, slot="logo")], w


def _render_top_bar(data: InvoiceData, style: PageStyle, logo: ImageAsset | None, logo_name: str) -> Block:
    parts: list[str] = []
    bar_y = PAGE_H - TOP_BAR_H
    parts.append(_fill(style.primary))
    parts.append(_draw_rect(0, bar_y, PAGE_W, TOP_BAR_H, stroke=False, fill=True))
    height = TOP_BAR_H
    if style.corner_style == CornerStyle.THICK_BORDER:
        parts.append(_fill(style.accent))
        parts.append(_draw_rect(0, bar_y - STRIPE_H, PAGE_W, STRIPE_H, stroke=False, fill=True))
        height += STRIPE_H

    logo_ops, images, logo_w = _logo(logo, logo_name, MARGIN, PAGE_H - 22, 52, 52)
    parts.append(logo_ops)
    text_x = MARGIN + (logo_w + 12 if logo_w else 0)
    text_w = PAGE_W - MARGIN - 170 - text_x

    parts.append(_fill(color("white")))
    parts.append(_draw_text([fit_text(company_name(data.company), text_w, style.bold_font, 18)], text_x, PAGE_H - 38, style.bold_font, 18))
    details = [fit_text(line, text_w, style.body_font, 8.5) for line in build_company_lines(data.company)][:3]
    parts.append(_draw_text(details, text_x, PAGE_H - 54, style.body_font, 8.5, leading=11))

    right = PAGE_W - MARGIN
    parts.append(_draw_text_right("INVOICE", right, PAGE_H - 44, style.bold_font, 22))
    parts.append(_draw_text_right(f"#{data.invoice_number}", right, PAGE_H - 62, style.num_font, 11))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=height, images=images)


def _render_banner(data: InvoiceData, style: PageStyle, logo: ImageAsset | None, logo_name: str) -> Block:
    parts: list[str] = []
    parts.append(_fill(style.primary))
    parts.append(_draw_rect(0, PAGE_H - 8, PAGE_W, 8, stroke=False, fill=True))

    logo_ops, images, _ = _logo(logo, logo_name, style.content_x, PAGE_H - 20, 48, 48)
    parts.append(logo_ops)

    center = style.content_x + style.content_w / 2
    text_w = style.content_w - 2 * 60
    parts.append(_fill(color("dark")))
    parts.append(_draw_text_center(fit_text(company_name(data.company), text_w, style.bold_font, 20), center, PAGE_H - 42, style.bold_font, 20))
    parts.append(_fill(color("muted")))
    y = PAGE_H - 58
    for line in build_company_lines(data.company)[:3]:
        parts.append(_draw_text_center(fit_text(line, text_w, style.body_font, 8.5), center, y, style.body_font, 8.5))
        y -= 11

    band_y = PAGE_H - BANNER_H
    parts.append(_fill(style.primary))
    parts.append(_draw_rect(style.content_x, band_y, style.content_w, 24, stroke=False, fill=True))
    parts.append(_fill(color("white")))
    parts.append(_draw_text_center(f"INVOICE  #{data.invoice_number}", center, band_y + 8, style.bold_font, 12))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=BANNER_H, images=images)


def render_sidebar_panel(company: CompanyInfo, style: PageStyle, logo: ImageAsset | None = None, logo_name: str = "/Im1", with_details: bool = True) -> Block:
    """Full-height colored panel on the left; the block uses no main-column space."""
    parts: list[str] = []
    parts.append(_fill(style.primary))
    parts.append(_draw_rect(0, 0, SIDEBAR_W, PAGE_H, stroke=False, fill=True))

    inner_w = SIDEBAR_W - 40
    top = PAGE_H - 36
    logo_ops, images, _ = _logo(logo, logo_name, 20, top, inner_w, 56)
    parts.append(logo_ops)
    if images:
        top -= fit_box(logo.width, logo.height, inner_w, 56)[1] + 16

    parts.append(_fill(color("white")))
    name_lines = wrap_lines(company_name(company), inner_w, style.bold_font, 14, max_lines=3)
    parts.append(_draw_text(name_lines, 20, top - 12, style.bold_font, 14, leading=16))
    top -= 12 + 16 * len(name_lines) + 6
    if with_details:
        details: list[str] = []
        for line in build_company_lines(company):
            details.extend(wrap_lines(line, inner_w, style.body_font, 8, max_lines=3))
        parts.append(_draw_text(details[:10], 20, top, style.body_font, 8, leading=10))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=0, images=images)


def _render_sidebar(data: InvoiceData, style: PageStyle, logo: ImageAsset | None, logo_name: str) -> Block:
    panel = render_sidebar_panel(data.company, style, logo, logo_name)
    parts = [panel.ops]
    parts.append(_fill(style.primary))
    parts.append(_draw_text(["INVOICE"], style.content_x, PAGE_H - MARGIN - 20, style.bold_font, 24))
    parts.append(_fill(color("muted")))
    parts.append(_draw_text([f"#{data.invoice_number}"], style.content_x, PAGE_H - MARGIN - 38, style.num_font, 11))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=MARGIN + 46, images=panel.images)


def render_company_header(data: InvoiceData, style: PageStyle, logo: ImageAsset | None = None, logo_name: str = "/Im1") -> Block:
    """Company identity block; placement follows the theme's header style."""
    if style.header_style == HeaderStyle.SIDEBAR:
        return _render_sidebar(data, style, logo, logo_name)
    if style.header_style == HeaderStyle.BANNER:
        return _render_banner(data, style, logo, logo_name)
    return _render_top_bar(data, style, logo, logo_name)
