from __future__ import annotations

from typing import Sequence

from repair_invoice.utils.pdf.core.document import Block
from repair_invoice.utils.pdf.core.drawing import (
    _draw_box,
    _draw_rect,
    _draw_text,
    _draw_text_right,
    _fill,
    _stroke,
    _draw_line,
    fit_text,
)
from repair_invoice.utils.pdf.core.layout_common import TABLE_HEADER_HEIGHT, TABLE_ROW_HEIGHT, PageStyle, color
from repair_invoice.utils.pdf.core.totals import LineItem, format_currency

HEADERS = ("Description", "Qty", "Rate", "Amount")


def render_items_table(items: Sequence[LineItem], style: PageStyle, x: float, top: float, width: float) -> Block:
    """
    Render the line-items table (header + one row per chargeable item).
    An empty list renders a single placeholder row.
    """
    qty_right = x + width * 0.58
    rate_right = x + width * 0.79
    amount_right = x + width - 10
    desc_w = width * 0.58 - 60

    parts: list[str] = [_draw_box(x, top - TABLE_HEADER_HEIGHT, width, TABLE_HEADER_HEIGHT, radius=style.radius, fill_color=style.primary)]
    header_y = top - 15
    parts.append(_fill(color("white")))
    parts.append(_draw_text([HEADERS[0]], x + 10, header_y, style.bold_font, 9))
    parts.append(_draw_text_right(HEADERS[1], qty_right, header_y, style.bold_font, 9))
    parts.append(_draw_text_right(HEADERS[2], rate_right, header_y, style.bold_font, 9))
    parts.append(_draw_text_right(HEADERS[3], amount_right, header_y, style.bold_font, 9))

    row_top = top - TABLE_HEADER_HEIGHT
    if not items:
        parts.append(_fill(color("muted")))
        parts.append(_draw_text(["No chargeable items"], x + 10, row_top - 15, style.body_font, 9))
        row_top -= TABLE_ROW_HEIGHT

    for idx, item in enumerate(items):
        row_y = row_top - TABLE_ROW_HEIGHT
        if idx % 2 == 1:
            parts.append(_fill(style.accent_soft))
            parts.append(_draw_rect(x, row_y, width, TABLE_ROW_HEIGHT, stroke=False, fill=True))
        text_y = row_y + 8
        parts.append(_fill(color("dark")))
        parts.append(_draw_text([fit_text(item.description, desc_w, style.body_font, 9.5)], x + 10, text_y, style.body_font, 9.5))
        parts.append(_draw_text_right(str(item.quantity), qty_right, text_y, style.num_font, 9.5))
        parts.append(_draw_text_right(format_currency(item.rate), rate_right, text_y, style.num_font, 9.5))
        parts.append(_draw_text_right(format_currency(item.amount), amount_right, text_y, style.num_bold_font, 9.5))
        row_top = row_y

    parts.append(_stroke(color("border"), style.border_width))
    parts.append(_draw_line(x, row_top, x + width, row_top))
    parts.append("0 0 0 rg 0 0 0 RG\n")
    return Block(ops="".join(parts), height=top - row_top)
