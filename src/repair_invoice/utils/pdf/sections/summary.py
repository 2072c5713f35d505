from __future__ import annotations

from repair_invoice.core.models.invoice import InvoiceData
from repair_invoice.utils.pdf.core.document import Block
from repair_invoice.utils.pdf.core.drawing import _draw_box, _draw_text, _draw_text_right, _fill
from repair_invoice.utils.pdf.core.layout_common import PageStyle, color
from repair_invoice.utils.pdf.core.totals import build_totals_lines

LINE_H = 16
TOTAL_BAND_H = 26


def render_totals(data: InvoiceData, style: PageStyle, x: float, top: float, width: float, min_height: float = 0) -> Block:
    """Totals box: plain rows, then the grand total on a primary band, then advance/balance rows."""
    lines = build_totals_lines(data)
    plain = [line for line in lines if line.kind != "total"]
    height = max(min_height, 16 + LINE_H * len(plain) + TOTAL_BAND_H)

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
    right = x + width - 12
    y = top - 18
    for line in lines:
        if line.kind == "total":
            band_y = y - TOTAL_BAND_H + 14
            parts.append(_draw_box(x + 4, band_y, width - 8, TOTAL_BAND_H, radius=style.radius, fill_color=style.primary))
            parts.append(_fill(color("white")))
            parts.append(_draw_text([line.label], x + 12, band_y + 9, style.bold_font, 11))
            parts.append(_draw_text_right(line.value, right, band_y + 9, style.num_bold_font, 11))
            y -= TOTAL_BAND_H + 4
            continue
        emphasis = line.kind in ("balance", "credit")
        font = style.bold_font if emphasis else style.body_font
        num_font = style.num_bold_font if emphasis else style.num_font
        parts.append(_fill(color("dark") if emphasis else color("text")))
        parts.append(_draw_text([line.label], x + 12, y, font, 9.5))
        parts.append(_draw_text_right(line.value, right, y, num_font, 9.5))
        y -= LINE_H
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=height)
