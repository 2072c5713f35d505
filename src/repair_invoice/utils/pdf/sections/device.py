from __future__ import annotations

from repair_invoice.core.models.invoice import InvoiceData
from repair_invoice.utils.pdf.core.document import Block
from repair_invoice.utils.pdf.core.drawing import _draw_box, _draw_text, _fill, fit_text, wrap_lines
from repair_invoice.utils.pdf.core.layout_common import PageStyle, color

TITLE_H = 20
CELL_H = 28
COLUMNS = 4
NOTE_LINE_H = 11


def build_device_cells(data: InvoiceData) -> list[tuple[str, str]]:
    device = data.device
    cells = [
        ("Type", device.type or "N/A"),
        ("Brand", device.brand or "N/A"),
        ("Model", device.model or "N/A"),
    ]
    optional = (
        ("IMEI", device.imei),
        ("Serial No.", device.serial_number),
        ("Condition", device.condition),
        ("Accessories", device.accessories),
    )
    cells.extend((label, value) for label, value in optional if value)
    return cells


def build_issue_lines(data: InvoiceData, width: float, font: str, size: float = 8.5) -> list[str]:
    lines: list[str] = []
    for label, text in (("Problem", data.problem_description), ("Diagnosis", data.diagnosis)):
        if text:
            lines.extend(wrap_lines(f"{label}: {text}", width, font, size, max_lines=2))
    return lines


def render_device(data: InvoiceData, style: PageStyle, x: float, top: float, width: float) -> Block | None:
    if data.device is None:
        return None
    cells = build_device_cells(data)
    rows = (len(cells) + COLUMNS - 1) // COLUMNS
    issue_lines = build_issue_lines(data, width - 24, style.body_font)
    body_h = rows * CELL_H + (NOTE_LINE_H * len(issue_lines) + 6 if issue_lines else 0) + 6
    height = TITLE_H + body_h

    parts = [
        _draw_box(
            x,
            top - height,
            width,
            height,
            radius=style.radius,
            stroke_color=color("border"),
            border_width=style.border_width,
        ),
        _draw_box(x, top - TITLE_H, width, TITLE_H, radius=style.radius, fill_color=style.primary),
    ]
    parts.append(_fill(color("white")))
    parts.append(_draw_text(["DEVICE INFORMATION"], x + 12, top - 14, style.bold_font, 9))

    cell_w = width / COLUMNS
    for idx, (label, value) in enumerate(cells):
        row, col = divmod(idx, COLUMNS)
        cx = x + 12 + col * cell_w
        cy = top - TITLE_H - row * CELL_H
        parts.append(_fill(color("muted")))
        parts.append(_draw_text([label.upper()], cx, cy - 11, style.bold_font, 6.5))
        parts.append(_fill(color("dark")))
        font = style.num_font if label in ("IMEI", "Serial No.") else style.body_font
        parts.append(_draw_text([fit_text(value, cell_w - 16, font, 9)], cx, cy - 23, font, 9))

    if issue_lines:
        parts.append(_fill(color("text")))
        parts.append(_draw_text(issue_lines, x + 12, top - TITLE_H - rows * CELL_H - 12, style.body_font, 8.5, leading=NOTE_LINE_H))
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=height)
