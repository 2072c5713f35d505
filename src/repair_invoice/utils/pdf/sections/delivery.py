from __future__ import annotations

from repair_invoice.core.models.invoice import InvoiceData
from repair_invoice.utils.pdf.core.document import Block
from repair_invoice.utils.pdf.core.drawing import _draw_box, _draw_text, _fill, fit_text
from repair_invoice.utils.pdf.core.layout_common import PageStyle, color


def build_delivery_lines(data: InvoiceData) -> list[str]:
    lines = []
    if data.delivery_date:
        lines.append(f"Delivery Date: {data.delivery_date}")
    if data.warranty_period:
        lines.append(f"Warranty: {data.warranty_period}")
    return lines


def has_delivery(data: InvoiceData) -> bool:
    return bool(build_delivery_lines(data))


def render_delivery(data: InvoiceData, style: PageStyle, x: float, top: float, width: float, min_height: float = 0) -> Block:
    lines = [fit_text(line, width - 24, style.body_font, 9) for line in build_delivery_lines(data)]
    height = max(min_height, 30 + 14 * len(lines))
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
    parts.append(_draw_text(["SERVICE DETAILS"], x + 12, top - 16, style.bold_font, 8))
    parts.append(_fill(color("dark")))
    parts.append(_draw_text(lines, x + 12, top - 32, style.body_font, 9, leading=14))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=height)
