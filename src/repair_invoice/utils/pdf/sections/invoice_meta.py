from __future__ import annotations

from repair_invoice.core.models.invoice import InvoiceData
from repair_invoice.utils.pdf.core.document import Block
from repair_invoice.utils.pdf.core.drawing import _draw_box, _draw_text, _fill, fit_text
from repair_invoice.utils.pdf.core.layout_common import PageStyle, color

META_H = 40


def build_meta_cells(data: InvoiceData) -> list[tuple[str, str]]:
    cells = [
        ("Invoice No.", data.invoice_number),
        ("Invoice Date", data.invoice_date or "N/A"),
    ]
    if data.due_date:
        cells.append(("Due Date", data.due_date))
    return cells


def render_invoice_meta(data: InvoiceData, style: PageStyle, x: float, top: float, width: float) -> Block:
    parts = [_draw_box(x, top - META_H, width, META_H, radius=style.radius, fill_color=style.accent_soft)]
    cells = build_meta_cells(data)
    cell_w = width / len(cells)
    for idx, (label, value) in enumerate(cells):
        cx = x + 12 + idx * cell_w
        parts.append(_fill(color("muted")))
        parts.append(_draw_text([label.upper()], cx, top - 15, style.bold_font, 7))
        parts.append(_fill(color("dark")))
        font = style.num_bold_font if idx == 0 else style.bold_font
        parts.append(_draw_text([fit_text(value, cell_w - 18, font, 10.5)], cx, top - 30, font, 10.5))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=META_H)
