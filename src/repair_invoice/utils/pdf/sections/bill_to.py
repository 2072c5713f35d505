from __future__ import annotations

from repair_invoice.core.models.invoice import CustomerInfo, InvoiceData
from repair_invoice.utils.pdf.core.document import Block
from repair_invoice.utils.pdf.core.drawing import _draw_box, _draw_text, _fill, fit_text, wrap_lines
from repair_invoice.utils.pdf.core.layout_common import PageStyle, color

LINE_H = 12


def build_customer_lines(customer: CustomerInfo, width: float, font: str, size: float = 9) -> list[str]:
    lines = [f"Phone: {customer.phone or 'N/A'}"]
    if customer.alternate_phone:
        lines.append(f"Alt: {customer.alternate_phone}")
    if customer.address:
        lines.extend(wrap_lines(customer.address, width, font, size, max_lines=2))
    if customer.email:
        lines.append(fit_text(customer.email, width, font, size))
    return lines


def render_bill_to(data: InvoiceData, style: PageStyle, x: float, top: float, width: float, min_height: float = 0) -> Block:
    inner_w = width - 24
    lines = build_customer_lines(data.customer, inner_w, style.body_font)
    height = max(min_height, 44 + LINE_H * len(lines))

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
    parts.append(_draw_text(["BILL TO"], x + 12, top - 16, style.bold_font, 8))
    parts.append(_fill(color("dark")))
    name = fit_text(data.customer.name or "Customer", inner_w, style.bold_font, 12)
    parts.append(_draw_text([name], x + 12, top - 32, style.bold_font, 12))
    parts.append(_fill(color("text")))
    parts.append(_draw_text(lines, x + 12, top - 46, style.body_font, 9, leading=LINE_H))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=height)
