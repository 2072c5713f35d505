import pytest

from repair_invoice.core.calculations.invoice_calculator import InvoiceCalculator, compute_costs
from repair_invoice.utils.pdf.core.totals import (
    build_line_items,
    build_status_label,
    build_totals_lines,
    format_currency,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "Rs. 0"),
        (999, "Rs. 999"),
        (1000, "Rs. 1,000"),
        (123456, "Rs. 1,23,456"),
        (12345678, "Rs. 1,23,45,678"),
        (1234.5, "Rs. 1,235"),
        (0.49, "Rs. 0"),
        (-1500, "Rs. -1,500"),
        (None, "Rs. 0"),
    ],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_line_items_omit_zero_categories():
    items = build_line_items(compute_costs(0, 0, 500))
    assert [(i.description, i.quantity, i.amount) for i in items] == [("Service Fee", 1, 500.0)]


def test_line_items_keep_category_order():
    items = build_line_items(compute_costs(800, 2500, 200))
    assert [i.description for i in items] == ["Labor / Service Charges", "Parts & Components", "Service Fee"]


def test_totals_lines_for_partial_payment(sample_invoice):
    enriched = InvoiceCalculator().enrich(sample_invoice)
    lines = [(line.label, line.value) for line in build_totals_lines(enriched)]

    assert lines == [
        ("Subtotal", "Rs. 3,500"),
        ("Tax", "Rs. 630"),
        ("Grand Total", "Rs. 4,130"),
        ("Advance Received", "- Rs. 1,000"),
        ("Balance Due", "Rs. 3,130"),
    ]
    assert build_status_label(enriched) == "PARTIAL - Balance: Rs. 3,130"


def test_totals_lines_without_advance_skip_balance(sample_invoice):
    from dataclasses import replace

    enriched = InvoiceCalculator().enrich(replace(sample_invoice, advance_received=None))
    kinds = [line.kind for line in build_totals_lines(enriched)]

    assert "advance" not in kinds
    assert "balance" not in kinds
    assert build_status_label(enriched) == "PENDING - Due: Rs. 4,130"


def test_overpayment_is_labelled_as_credit(sample_invoice):
    from dataclasses import replace

    enriched = InvoiceCalculator().enrich(replace(sample_invoice, advance_received=5000))
    lines = build_totals_lines(enriched)

    assert lines[-1].label == "Credit"
    assert lines[-1].value == "Rs. 870"
    assert build_status_label(enriched) == "PAID IN FULL - Credit: Rs. 870"


def test_tax_rate_and_discount_lines(sample_invoice):
    from dataclasses import replace

    from repair_invoice.core.models.invoice import CostBreakdown

    raw = replace(sample_invoice, costs=CostBreakdown(labor_cost=1000, tax_rate=18, discount=100), advance_received=None)
    labels = [line.label for line in build_totals_lines(InvoiceCalculator().enrich(raw))]

    assert labels == ["Subtotal", "Tax (18%)", "Discount", "Grand Total"]


def test_format_currency_handles_amounts_beyond_default_precision():
    text = format_currency(compute_costs(1e30, 0, 0).total)

    assert text.startswith("Rs. 10,00,")
    assert text[len("Rs. "):].replace(",", "") == "1" + "0" * 30
