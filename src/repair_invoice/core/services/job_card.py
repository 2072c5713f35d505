from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Mapping

from repair_invoice.core.calculations.invoice_calculator import safe_amount
from repair_invoice.core.models.invoice import (
    CompanyInfo,
    CostBreakdown,
    CustomerInfo,
    DeviceInfo,
    InvoiceData,
)
from repair_invoice.exceptions import InvoiceDataError

DEFAULT_COMPANY = {
    "name": "Mobile Service Center",
    "phone": "+91 98765 43210",
    "email": "info@mobileservice.com",
    "address": "123, Main Street, City - 600001",
}

PREDEFINED_TERMS = {
    "warranty_7": "7 days service warranty on repairs",
    "warranty_15": "15 days service warranty on repairs",
    "warranty_30": "30 days service warranty on repairs",
    "warranty_90": "90 days warranty on replaced parts",
    "no_physical_damage": "Warranty void if physical or water damage occurs",
    "no_refund": "No refund after service completion",
    "no_responsibility_data": "Not responsible for data loss during repair",
    "backup_advised": "Customer advised to backup data before service",
    "collect_7_days": "Device must be collected within 7 days of completion",
    "collect_15_days": "Device must be collected within 15 days of completion",
    "storage_charges": "Storage charges may apply for uncollected devices after 15 days",
    "no_original_parts": "Original parts may not be available; compatible parts may be used",
    "advance_required": "Advance payment required before starting repair",
    "full_payment": "Full payment required before device handover",
    "estimate_subject_change": "Estimate subject to change upon inspection",
    "customer_consent": "Customer consent required for additional repairs",
    "screen_replacement": "Screen replacement may affect touch ID/Face ID functionality",
    "software_issues": "Software issues may recur and are not covered under service warranty",
    "locked_device": "We are not responsible for unlocking locked devices (iCloud/FRP)",
    "receipt_mandatory": "Original receipt mandatory for warranty claims",
}


def build_terms_string(selected: Iterable[str] | None = None, custom: Iterable[str] | None = None) -> str:
    """Numbered terms, one per line: predefined ids first (unknown ids skipped), then custom text."""
    terms = [PREDEFINED_TERMS[t] for t in (selected or []) if t in PREDEFINED_TERMS]
    terms.extend(str(t).strip() for t in (custom or []) if str(t).strip())
    return "\n".join(f"{i}. {term}" for i, term in enumerate(terms, start=1))


def format_full_address(company: Mapping) -> str:
    parts = [company.get("address"), company.get("city"), company.get("state")]
    if company.get("pincode"):
        parts.append(f"- {company['pincode']}")
    return ", ".join(str(p) for p in parts if p)


def format_display_date(value) -> str:
    """'05 Mar 2025' style dates; unparseable strings are returned unchanged."""
    if isinstance(value, datetime):
        return value.strftime("%d %b %Y")
    if isinstance(value, date):
        return value.strftime("%d %b %Y")
    text = str(value).strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return text
    return parsed.strftime("%d %b %Y")


def _company_info(job_card: Mapping, company: Mapping | None) -> CompanyInfo:
    profile = company or job_card.get("companyInfo") or {}
    if not profile.get("name") and not profile.get("companyName"):
        profile = DEFAULT_COMPANY
    return CompanyInfo(
        name=str(profile.get("name") or profile.get("companyName")),
        address=format_full_address(profile),
        phone=str(profile.get("phone") or ""),
        email=profile.get("email") or None,
        website=profile.get("website") or None,
        tax_id=profile.get("gstNumber") or profile.get("taxId") or None,
        logo=profile.get("logoUrl") or None,
    )


def _terms(job_card: Mapping, company: Mapping | None) -> str | None:
    profile = company or job_card.get("companyInfo") or {}
    if profile.get("selectedTerms") or profile.get("customTerms"):
        return build_terms_string(profile.get("selectedTerms"), profile.get("customTerms")) or None
    return profile.get("termsAndConditions") or None


def job_card_to_invoice_data(job_card: Mapping, company: Mapping | None = None, today: date | None = None) -> InvoiceData:
    """
    Map a stored repair job record onto raw InvoiceData.
    Financial fields are raw; run the result through InvoiceCalculator.enrich before rendering.
    """
    record_id = str(job_card.get("id") or "").strip()
    if not record_id:
        raise InvoiceDataError("job card 'id' is required")

    created = job_card.get("createdAt") or today or date.today()
    estimate = job_card.get("costEstimate") or {}
    device_info = job_card.get("deviceInfo")
    device = None
    if device_info:
        images = [
            (img.get("url") if isinstance(img, Mapping) else img)
            for img in (job_card.get("conditionImages") or [])
        ]
        device = DeviceInfo(
            type=str(device_info.get("type") or ""),
            brand=str(device_info.get("brand") or ""),
            model=str(device_info.get("model") or ""),
            imei=job_card.get("imei") or None,
            condition=job_card.get("condition") or None,
            accessories=job_card.get("accessories") or None,
            images=tuple(str(i) for i in images if i),
        )

    delivery = job_card.get("deliveryDate")
    advance = job_card.get("advanceReceived")

    return InvoiceData(
        invoice_number=f"INV-{record_id[:8].upper()}",
        invoice_date=format_display_date(created),
        company=_company_info(job_card, company),
        customer=CustomerInfo(
            name=str(job_card.get("customerName") or "Customer"),
            phone=str(job_card.get("phone") or ""),
            alternate_phone=job_card.get("alternatePhone") or None,
            address=job_card.get("address") or None,
            email=job_card.get("email") or None,
        ),
        device=device,
        costs=CostBreakdown(
            labor_cost=safe_amount(estimate.get("laborCost")),
            parts_cost=safe_amount(estimate.get("partsCost")),
            service_cost=safe_amount(estimate.get("serviceCost")),
        ),
        advance_received=safe_amount(advance) if advance is not None else None,
        delivery_date=format_display_date(delivery) if delivery else None,
        warranty_period=job_card.get("warrantyPeriod") or None,
        terms_and_conditions=_terms(job_card, company),
        notes=job_card.get("notes") or None,
        problem_description=job_card.get("problemDescription") or None,
        diagnosis=job_card.get("technicianDiagnosis") or None,
        tracking_url=job_card.get("trackingUrl") or None,
    )
