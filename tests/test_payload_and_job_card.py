import pytest

from repair_invoice.core.services import job_card
from repair_invoice.core.services.payload import parse_invoice_data
from repair_invoice.exceptions import InvoiceDataError


def _payload(**overrides):
    payload = {
        "invoiceNumber": "INV-100",
        "invoiceDate": "01 Jan 2025",
        "company": {"name": "Shop", "address": "Street 1", "phone": "123", "gstNumber": "GST1", "logoUrl": "logo.png"},
        "customer": {"name": "Asha", "phone": "555"},
        "device": {
            "type": "Phone",
            "brand": "Apple",
            "model": "iPhone 12",
            "serial": "SN1",
            "images": ["a.jpg", {"url": "b.jpg", "publicId": "x"}, ""],
        },
        "costs": {"laborCost": "800", "partsCost": 2500, "serviceCost": None, "taxAmount": 630},
        "advanceReceived": 1000,
        "termsAndConditions": "1. No refund",
        "trackingUrl": "https://track.example/INV-100",
    }
    payload.update(overrides)
    return payload


def test_parse_invoice_data_maps_camel_case_fields():
    data = parse_invoice_data(_payload())

    assert data.invoice_number == "INV-100"
    assert data.company.tax_id == "GST1"
    assert data.company.logo == "logo.png"
    assert data.device.serial_number == "SN1"
    assert data.device.images == ("a.jpg", "b.jpg")
    assert data.costs.labor_cost == 800
    assert data.costs.service_cost == 0
    assert data.costs.tax_amount == 630
    assert data.advance_received == 1000
    assert data.tracking_url == "https://track.example/INV-100"
    assert data.has_terms


@pytest.mark.parametrize(
    "overrides",
    [
        {"invoiceNumber": ""},
        {"invoiceNumber": None},
        {"company": None},
        {"customer": "Asha"},
        {"customer": {"name": 42}},
        {"device": {"images": "a.jpg"}},
    ],
)
def test_parse_invoice_data_rejects_malformed_payloads(overrides):
    with pytest.raises(InvoiceDataError):
        parse_invoice_data(_payload(**overrides))


def test_parse_invoice_data_rejects_non_mapping():
    with pytest.raises(InvoiceDataError):
        parse_invoice_data(["not", "a", "mapping"])


def test_build_terms_string_numbers_predefined_then_custom():
    text = job_card.build_terms_string(["warranty_30", "unknown", "no_refund"], ["Bring your bill", "  "])
    assert text.splitlines() == [
        "1. 30 days service warranty on repairs",
        "2. No refund after service completion",
        "3. Bring your bill",
    ]


def test_format_full_address():
    company = {"address": "12 Main Rd", "city": "Chennai", "state": "TN", "pincode": "600001"}
    assert job_card.format_full_address(company) == "12 Main Rd, Chennai, TN, - 600001"


def test_format_display_date_keeps_unparseable_text():
    assert job_card.format_display_date("2025-03-05T10:00:00Z") == "05 Mar 2025"
    assert job_card.format_display_date("next week") == "next week"


def test_job_card_to_invoice_data(monkeypatch):
    class FakeDate(job_card.date):
        @classmethod
        def today(cls):
            return cls(2025, 3, 5)

    monkeypatch.setattr(job_card, "date", FakeDate)

    record = {
        "id": "a1b2c3d4e5f6",
        "customerName": "Ravi",
        "phone": "999",
        "deviceInfo": {"type": "Laptop", "brand": "Dell", "model": "XPS"},
        "imei": "",
        "conditionImages": [{"url": "front.jpg"}, "back.jpg"],
        "costEstimate": {"laborCost": 0, "partsCost": 0, "serviceCost": 500},
        "advanceReceived": 500,
        "technicianDiagnosis": "Fan replaced",
    }
    company = {"name": "Shop", "address": "Road 1", "city": "Pune", "selectedTerms": ["no_refund"]}

    data = job_card.job_card_to_invoice_data(record, company)

    assert data.invoice_number == "INV-A1B2C3D4"
    assert data.invoice_date == "05 Mar 2025"
    assert data.company.address == "Road 1, Pune"
    assert data.device.imei is None
    assert data.device.images == ("front.jpg", "back.jpg")
    assert data.costs.service_cost == 500
    assert data.diagnosis == "Fan replaced"
    assert data.terms_and_conditions == "1. No refund after service completion"


def test_job_card_without_company_uses_default_profile():
    data = job_card.job_card_to_invoice_data({"id": "xyz", "createdAt": "2025-01-02"})
    assert data.company.name == job_card.DEFAULT_COMPANY["name"]
    assert data.invoice_date == "02 Jan 2025"
    assert data.device is None
    assert data.customer.name == "Customer"


def test_job_card_requires_id():
    with pytest.raises(InvoiceDataError):
        job_card.job_card_to_invoice_data({"customerName": "Nobody"})
