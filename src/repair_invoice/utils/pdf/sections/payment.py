from __future__ import annotations

from repair_invoice.core.models.invoice import InvoiceData, PaymentStatus
from repair_invoice.utils.pdf.core.document import Block
from repair_invoice.utils.pdf.core.drawing import _draw_box, _draw_qr, _draw_text, _fill, fit_text, text_width
from repair_invoice.utils.pdf.core.layout_common import STATUS_COLORS, PageStyle, color, rgb
from repair_invoice.utils.pdf.core.totals import build_status_label

BADGE_H = 26
QR_SIDE = 72


def status_palette(data: InvoiceData) -> dict[str, str]:
    status = data.payment_status or PaymentStatus.PENDING
    return STATUS_COLORS[PaymentStatus(status).value]


def render_payment_status(
    data: InvoiceData,
    style: PageStyle,
    x: float,
    top: float,
    width: float,
    qr_matrix=None,
) -> Block:
    parts: list[str] = []
    parts.append(_fill(color("muted")))
    parts.append(_draw_text(["PAYMENT STATUS"], x, top - 10, style.bold_font, 8))

    palette = status_palette(data)
    label = fit_text(build_status_label(data), width - 24, style.bold_font, 9.5)
    badge_w = min(width, text_width(label, style.bold_font, 9.5) + 24)
    badge_top = top - 18
    parts.append(
        _draw_box(
            x,
            badge_top - BADGE_H,
            badge_w,
            BADGE_H,
            radius=max(style.radius, 4.0),
            fill_color=rgb(palette["bg"]),
            stroke_color=rgb(palette["border"]),
            border_width=1.2,
        )
    )
    parts.append(_fill(rgb(palette["text"])))
    parts.append(_draw_text([label], x + 12, badge_top - 17, style.bold_font, 9.5))
    height = 18 + BADGE_H

    if qr_matrix:
        modules = max(len(qr_matrix), len(qr_matrix[0]))
        scale = min(2.0, QR_SIDE / modules)
        qr_top = badge_top - BADGE_H - 12
        parts.append(_fill(color("dark")))
        parts.append(_draw_qr(qr_matrix, x, qr_top, scale))
        qr_h = modules * scale
        parts.append(_fill(color("muted")))
        parts.append(_draw_text(["Scan to track your repair"], x + qr_h + 10, qr_top - qr_h / 2, style.body_font, 8))
        height = 18 + BADGE_H + 12 + qr_h
    parts.append("0 0 0 rg\n")
    return Block(ops="".join(parts), height=height)
