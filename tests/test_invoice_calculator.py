import math

import pytest

from repair_invoice.core.calculations.invoice_calculator import (
    InvoiceCalculator,
    compute_costs,
    compute_payment,
    safe_amount,
)
from repair_invoice.core.models.invoice import CostBreakdown, PaymentStatus


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 0.0),
        ("", 0.0),
        ("abc", 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        (-50, 0.0),
        (True, 0.0),
        ("1,250", 1250.0),
        (" 99.5 ", 99.5),
        (300, 300.0),
    ],
)
def test_safe_amount(value, expected):
    assert safe_amount(value) == expected


def test_compute_costs_partial_payment_example():
    costs = compute_costs(800, 2500, 200, tax_amount=630)
    balance, status = compute_payment(costs.total, 1000)

    assert costs.subtotal == 3500
    assert costs.total == 4130
    assert balance == 3130
    assert status == PaymentStatus.PARTIAL


def test_compute_costs_paid_example():
    costs = compute_costs(0, 0, 500)
    balance, status = compute_payment(costs.total, 500)

    assert costs.total == 500
    assert balance == 0
    assert status == PaymentStatus.PAID


def test_compute_costs_without_tax_or_discount_keeps_subtotal():
    costs = compute_costs(100, 200, 0)
    assert costs.total == 300
    assert costs.tax_amount is None
    assert costs.discount is None


def test_tax_rate_derives_tax_amount():
    costs = compute_costs(1000, 0, 0, tax_rate=18)
    assert math.isclose(costs.tax_amount, 180.0)
    assert math.isclose(costs.total, 1180.0)


def test_explicit_tax_amount_wins_over_rate():
    costs = compute_costs(1000, 0, 0, tax_rate=18, tax_amount=100)
    assert costs.tax_amount == 100
    assert costs.total == 1100


def test_discount_larger_than_total_clamps_to_zero():
    costs = compute_costs(100, 0, 0, discount=500)
    assert costs.total == 0.0


def test_explicit_subtotal_is_respected():
    costs = compute_costs(100, 100, 100, subtotal=250)
    assert costs.subtotal == 250
    assert costs.total == 250


def test_invalid_cost_inputs_become_zero():
    costs = compute_costs("x", None, float("nan"))
    assert costs.subtotal == 0
    assert costs.total == 0


@pytest.mark.parametrize(
    "total, advance, status",
    [
        (500, None, PaymentStatus.PENDING),
        (500, 0, PaymentStatus.PENDING),
        (500, 100, PaymentStatus.PARTIAL),
        (500, 500, PaymentStatus.PAID),
        (500, 800, PaymentStatus.PAID),
        (0, 0, PaymentStatus.PENDING),
        (0, 100, PaymentStatus.PENDING),
    ],
)
def test_compute_payment_status(total, advance, status):
    assert compute_payment(total, advance)[1] == status


def test_overpayment_leaves_negative_balance():
    balance, status = compute_payment(500, 800)
    assert balance == -300
    assert status == PaymentStatus.PAID


def test_enrich_fills_derived_fields(sample_invoice):
    enriched = InvoiceCalculator().enrich(sample_invoice)

    assert enriched.costs.subtotal == 3500
    assert enriched.costs.total == 4130
    assert enriched.balance_due == 3130
    assert enriched.payment_status == PaymentStatus.PARTIAL
    # input untouched
    assert sample_invoice.balance_due is None
    assert sample_invoice.costs.total == 0.0


def test_enrich_replaces_caller_supplied_derived_values(sample_invoice):
    from dataclasses import replace

    tampered = replace(
        sample_invoice,
        costs=CostBreakdown(labor_cost=100, subtotal=9999, total=9999),
        advance_received=None,
        balance_due=-1,
        payment_status=PaymentStatus.PAID,
    )
    enriched = InvoiceCalculator().enrich(tampered)

    assert enriched.costs.subtotal == 100
    assert enriched.costs.total == 100
    assert enriched.balance_due == 100
    assert enriched.payment_status == PaymentStatus.PENDING
    assert enriched.advance_received is None


def test_enrich_is_idempotent(sample_invoice):
    calc = InvoiceCalculator()
    once = calc.enrich(sample_invoice)
    assert calc.enrich(once) == once
