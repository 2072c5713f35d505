from __future__ import annotations

import math
from dataclasses import replace

from repair_invoice.core.models.invoice import CostBreakdown, InvoiceData, PaymentStatus


def safe_amount(value) -> float:
    """Coerce a cost/advance input to a non-negative float; anything invalid becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(numeric) or math.isinf(numeric) or numeric < 0:
        return 0.0
    return numeric


def _optional_amount(value) -> float | None:
    if value is None:
        return None
    return safe_amount(value)


def compute_costs(
    labor_cost=0.0,
    parts_cost=0.0,
    service_cost=0.0,
    *,
    subtotal=None,
    tax_rate=None,
    tax_amount=None,
    discount=None,
) -> CostBreakdown:
    """
    Build a fully populated CostBreakdown.
    Subtotal is derived from the three cost categories unless supplied; tax rate is a percentage.
    """
    labor = safe_amount(labor_cost)
    parts = safe_amount(parts_cost)
    service = safe_amount(service_cost)
    sub = safe_amount(subtotal) if subtotal is not None else labor + parts + service

    rate = _optional_amount(tax_rate)
    tax = _optional_amount(tax_amount)
    if tax is None and rate:
        tax = sub * rate / 100.0
    disc = _optional_amount(discount)

    if tax is None and disc is None:
        total = sub
    else:
        total = max(0.0, sub + (tax or 0.0) - (disc or 0.0))

    return CostBreakdown(
        labor_cost=labor,
        parts_cost=parts,
        service_cost=service,
        subtotal=sub,
        tax_rate=rate,
        tax_amount=tax,
        discount=disc,
        total=total,
    )


def compute_payment(total: float, advance_received=None) -> tuple[float, PaymentStatus]:
    """
    Return (balance_due, payment_status).
    Balance is not floored: a negative value is a credit owed to the customer.
    """
    total = safe_amount(total)
    advance = safe_amount(advance_received)
    balance_due = total - advance
    if total > 0 and advance >= total:
        status = PaymentStatus.PAID
    elif 0 < advance < total:
        status = PaymentStatus.PARTIAL
    else:
        status = PaymentStatus.PENDING
    return balance_due, status


class InvoiceCalculator:
    """Fills the derived financial fields of an InvoiceData exactly once."""

    def enrich(self, data: InvoiceData) -> InvoiceData:
        raw = data.costs
        costs = compute_costs(
            raw.labor_cost,
            raw.parts_cost,
            raw.service_cost,
            tax_rate=raw.tax_rate,
            tax_amount=raw.tax_amount,
            discount=raw.discount,
        )
        advance = _optional_amount(data.advance_received)
        balance_due, status = compute_payment(costs.total, advance)
        return replace(
            data,
            costs=costs,
            advance_received=advance,
            balance_due=balance_due,
            payment_status=status,
        )
