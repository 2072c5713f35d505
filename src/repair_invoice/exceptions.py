"""
Exceptions raised by the invoice generator.
Soft conditions (missing optional fields, bad numbers, unknown themes, broken
assets) are recovered where they happen and never surface as exceptions.
"""

from __future__ import annotations


class InvoiceError(Exception):
    """Base exception for the invoice generator."""


class InvoiceDataError(InvoiceError):
    """Raised when an invoice payload is structurally malformed."""


class AssetUnavailableError(InvoiceError):
    """Raised by the asset loader when a logo or photo cannot be loaded."""

    def __init__(self, reference: str, reason: str = ""):
        self.reference = reference
        self.reason = reason
        super().__init__(f"Asset unavailable: {reference}" + (f" ({reason})" if reason else ""))


class InvoiceRenderError(InvoiceError):
    """Raised when a single invoice cannot be rendered."""

    def __init__(self, invoice_number: str | None, message: str):
        self.invoice_number = invoice_number
        label = invoice_number or "<unknown>"
        super().__init__(f"Invoice {label}: {message}")
