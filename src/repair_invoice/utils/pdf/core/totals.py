"""
Display helpers for amounts: the single currency formatter, the line-item rows
and the totals lines. Values are read from the enriched InvoiceData, never recomputed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from repair_invoice.core.models.invoice import CostBreakdown, InvoiceData, PaymentStatus

CURRENCY_PREFIX = "Rs. "


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(value) -> str:
    """'Rs. 1,23,456': Indian digit grouping, no decimals, half-up rounding."""
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        amount = Decimal(0)
    if not amount.is_finite():
        amount = Decimal(0)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 2)
        rounded = int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    return f"{CURRENCY_PREFIX}{sign}{_group_indian(str(abs(rounded)))}"


def format_rate(rate: float) -> str:
    if float(rate).is_integer():
        return str(int(rate))
    return f"{rate:.2f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class LineItem:
    description: str
    quantity: int
    rate: float
    amount: float


LINE_ITEM_LABELS = (
    ("labor_cost", "Labor / Service Charges"),
    ("parts_cost", "Parts & Components"),
    ("service_cost", "Service Fee"),
)


def build_line_items(costs: CostBreakdown) -> list[LineItem]:
    """One row per cost category, only for categories above zero."""
    items: list[LineItem] = []
    for attr, label in LINE_ITEM_LABELS:
        amount = float(getattr(costs, attr) or 0.0)
        if amount > 0:
            items.append(LineItem(description=label, quantity=1, rate=amount, amount=amount))
    return items


@dataclass(frozen=True)
class TotalsLine:
    kind: str  # subtotal / tax / discount / total / advance / balance / credit
    label: str
    value: str


def build_totals_lines(data: InvoiceData) -> list[TotalsLine]:
    costs = data.costs
    lines = [TotalsLine("subtotal", "Subtotal", format_currency(costs.subtotal))]
    if costs.tax_amount and costs.tax_amount > 0:
        label = f"Tax ({format_rate(costs.tax_rate)}%)" if costs.tax_rate else "Tax"
        lines.append(TotalsLine("tax", label, format_currency(costs.tax_amount)))
    if costs.discount and costs.discount > 0:
        lines.append(TotalsLine("discount", "Discount", f"- {format_currency(costs.discount)}"))
    lines.append(TotalsLine("total", "Grand Total", format_currency(costs.total)))
    if data.advance_received and data.advance_received > 0:
        lines.append(TotalsLine("advance", "Advance Received", f"- {format_currency(data.advance_received)}"))
        balance = data.balance_due or 0.0
        if balance < 0:
            lines.append(TotalsLine("credit", "Credit", format_currency(-balance)))
        else:
            lines.append(TotalsLine("balance", "Balance Due", format_currency(balance)))
    return lines


def build_status_label(data: InvoiceData) -> str:
    status = data.payment_status or PaymentStatus.PENDING
    balance = data.balance_due if data.balance_due is not None else data.costs.total
    if status == PaymentStatus.PAID:
        if balance < 0:
            return f"PAID IN FULL - Credit: {format_currency(-balance)}"
        return "PAID IN FULL"
    if status == PaymentStatus.PARTIAL:
        return f"PARTIAL - Balance: {format_currency(balance)}"
    if balance < 0:
        return f"PENDING - Credit: {format_currency(-balance)}"
    return f"PENDING - Due: {format_currency(balance)}"
