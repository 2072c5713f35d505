"""
QR helper for the repair tracking link printed next to the payment status.
"""

from __future__ import annotations

from typing import Optional, Sequence

import qrcode


def make_qr_matrix(data: str) -> Optional[Sequence[Sequence[bool]]]:
    """Module matrix (True = dark) with a one-module quiet zone, or None for empty data."""
    if not data:
        return None
    qr = qrcode.QRCode(border=1, box_size=1, error_correction=qrcode.constants.ERROR_CORRECT_M)
    qr.add_data(data)
    qr.make(fit=True)
    return qr.get_matrix()
