from __future__ import annotations

from repair_invoice.core.models.invoice import InvoiceData
from repair_invoice.utils.pdf.core.document import Block
from repair_invoice.utils.pdf.core.drawing import _draw_box, _draw_text, _fill, wrap_lines
from repair_invoice.utils.pdf.core.layout_common import PageStyle, color

MAX_NOTE_LINES = 4
LINE_H = 11


def render_notes(data: InvoiceData, style: PageStyle, x: float, top: float, width: float, max_lines: int = MAX_NOTE_LINES) -> Block | None:
    if not (data.notes or "").strip() or max_lines < 1:
        return None
    lines = wrap_lines(data.notes, width - 24, style.body_font, 8.5, max_lines=max_lines)
    height = 28 + LINE_H * len(lines)
    parts = [
        _draw_box(
            x,
            top - height,
            width,
            height,
            radius=style.radius,
            fill_color=style.accent_soft,
        )
    ]
    parts.append(_fill(style.primary))
    parts.append(_draw_text(["NOTES"], x + 12, top - 14, style.bold_font, 8))
    parts.append(_fill(color("text")))
    parts.append(_draw_text(lines, x + 12, top - 27, style.body_font, 8.5, leading=LINE_H))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=height)
