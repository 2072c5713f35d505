"""
Turn caller payloads (camelCase mappings, as stored by the job-record screens)
into InvoiceData. Structural problems raise InvoiceDataError; numbers are
coerced by the calculator rules and never fail.
"""

from __future__ import annotations

from typing import Any, Mapping

from repair_invoice.core.calculations.invoice_calculator import safe_amount
from repair_invoice.core.models.invoice import (
    CompanyInfo,
    CostBreakdown,
    CustomerInfo,
    DeviceInfo,
    InvoiceData,
)
from repair_invoice.exceptions import InvoiceDataError


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_text(value: Any) -> str | None:
    text = _text(value)
    return text or None


def _mapping(payload: Mapping, key: str, required: bool) -> Mapping | None:
    value = payload.get(key)
    if value is None:
        if required:
            raise InvoiceDataError(f"'{key}' is required")
        return None
    if not isinstance(value, Mapping):
        raise InvoiceDataError(f"'{key}' must be an object, got {type(value).__name__}")
    return value


def _optional_amount(value: Any) -> float | None:
    if value is None:
        return None
    return safe_amount(value)


def _parse_company(raw: Mapping) -> CompanyInfo:
    return CompanyInfo(
        name=_text(raw.get("name")),
        address=_text(raw.get("address")),
        phone=_text(raw.get("phone")),
        email=_optional_text(raw.get("email")),
        website=_optional_text(raw.get("website")),
        tax_id=_optional_text(raw.get("taxId") or raw.get("gstNumber")),
        logo=_optional_text(raw.get("logo") or raw.get("logoUrl")),
    )


def _parse_customer(raw: Mapping) -> CustomerInfo:
    name = raw.get("name")
    if name is not None and not isinstance(name, str):
        raise InvoiceDataError(f"customer name must be text, got {type(name).__name__}")
    return CustomerInfo(
        name=_text(name),
        phone=_text(raw.get("phone")),
        alternate_phone=_optional_text(raw.get("alternatePhone")),
        address=_optional_text(raw.get("address")),
        email=_optional_text(raw.get("email")),
    )


def _parse_device(raw: Mapping) -> DeviceInfo:
    images = raw.get("images") or []
    if not isinstance(images, (list, tuple)):
        raise InvoiceDataError("device images must be a list")
    refs: list[str] = []
    for item in images:
        # conditionImages entries are stored as {"url": ..., "publicId": ...}
        ref = item.get("url") if isinstance(item, Mapping) else item
        ref = _text(ref)
        if ref:
            refs.append(ref)
    return DeviceInfo(
        type=_text(raw.get("type")),
        brand=_text(raw.get("brand")),
        model=_text(raw.get("model")),
        imei=_optional_text(raw.get("imei")),
        serial_number=_optional_text(raw.get("serialNumber") or raw.get("serial")),
        condition=_optional_text(raw.get("condition")),
        accessories=_optional_text(raw.get("accessories")),
        images=tuple(refs),
    )


def _parse_costs(raw: Mapping | None) -> CostBreakdown:
    raw = raw or {}
    return CostBreakdown(
        labor_cost=safe_amount(raw.get("laborCost")),
        parts_cost=safe_amount(raw.get("partsCost")),
        service_cost=safe_amount(raw.get("serviceCost")),
        subtotal=safe_amount(raw.get("subtotal")),
        tax_rate=_optional_amount(raw.get("taxRate")),
        tax_amount=_optional_amount(raw.get("taxAmount")),
        discount=_optional_amount(raw.get("discount")),
        total=safe_amount(raw.get("total")),
    )


def parse_invoice_data(payload: Mapping) -> InvoiceData:
    """
    Build raw InvoiceData from a payload mapping.
    Derived fields (subtotal, total, balance, status) are left to the calculator.
    """
    if not isinstance(payload, Mapping):
        raise InvoiceDataError(f"invoice payload must be an object, got {type(payload).__name__}")
    invoice_number = _text(payload.get("invoiceNumber"))
    if not invoice_number:
        raise InvoiceDataError("'invoiceNumber' is required")

    company = _mapping(payload, "company", required=True)
    customer = _mapping(payload, "customer", required=True)
    device = _mapping(payload, "device", required=False)
    costs = _mapping(payload, "costs", required=False)

    return InvoiceData(
        invoice_number=invoice_number,
        invoice_date=_text(payload.get("invoiceDate")),
        due_date=_optional_text(payload.get("dueDate")),
        company=_parse_company(company),
        customer=_parse_customer(customer),
        device=_parse_device(device) if device is not None else None,
        costs=_parse_costs(costs),
        advance_received=_optional_amount(payload.get("advanceReceived")),
        delivery_date=_optional_text(payload.get("deliveryDate")),
        warranty_period=_optional_text(payload.get("warrantyPeriod")),
        terms_and_conditions=_optional_text(payload.get("termsAndConditions")),
        notes=_optional_text(payload.get("notes")),
        problem_description=_optional_text(payload.get("problemDescription")),
        diagnosis=_optional_text(payload.get("diagnosis")),
        tracking_url=_optional_text(payload.get("trackingUrl")),
    )
