import sys
from pathlib import Path

import pytest

# Ensure `src` is importable when running tests from repo root.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def isolated_preferences(tmp_path, monkeypatch):
    """Keep the saved theme preference out of the package data directory."""
    path = tmp_path / "preferences.json"
    monkeypatch.setenv("REPAIR_INVOICE_PREFERENCES", str(path))
    return path


@pytest.fixture
def company():
    from repair_invoice.core.models.invoice import CompanyInfo

    return CompanyInfo(
        name="FixIt Mobile Care",
        address="12 Park Street, Chennai - 600001",
        phone="+91 98765 43210",
        email="help@fixit.example",
        website="fixit.example",
        tax_id="33ABCDE1234F1Z5",
    )


@pytest.fixture
def sample_invoice(company):
    """Raw (not yet enriched) invoice with every optional section filled."""
    from repair_invoice.core.models.invoice import CostBreakdown, CustomerInfo, DeviceInfo, InvoiceData

    return InvoiceData(
        invoice_number="INV-1A2B3C4D",
        invoice_date="05 Mar 2025",
        due_date="12 Mar 2025",
        company=company,
        customer=CustomerInfo(
            name="Priya Raman",
            phone="+91 90000 11111",
            alternate_phone="+91 90000 22222",
            address="4 Lake View Road, Adyar",
            email="priya@example.com",
        ),
        device=DeviceInfo(
            type="Smartphone",
            brand="Samsung",
            model="Galaxy S21",
            imei="356789012345678",
            condition="Cracked screen",
            accessories="Charger",
        ),
        costs=CostBreakdown(labor_cost=800, parts_cost=2500, service_cost=200, tax_amount=630),
        advance_received=1000,
        delivery_date="08 Mar 2025",
        warranty_period="30 days",
        notes="Handle with care.",
        problem_description="Display flickers after a drop",
        diagnosis="Replace OLED panel",
    )


@pytest.fixture
def png_path(tmp_path):
    """A tiny real PNG written with Pillow."""
    from PIL import Image

    path = tmp_path / "photo.png"
    Image.new("RGB", (8, 6), (200, 30, 30)).save(path, format="PNG")
    return path


@pytest.fixture
def fake_loader():
    """Asset loader that never touches disk or network; references containing 'broken' fail."""
    import zlib

    from repair_invoice.exceptions import AssetUnavailableError
    from repair_invoice.utils.assets import ImageAsset

    calls = []

    def _load(reference):
        calls.append(reference)
        if "broken" in reference:
            raise AssetUnavailableError(reference, "cannot decode image")
        return ImageAsset(reference=reference, width=4, height=3, data=zlib.compress(b"\x80" * 36))

    _load.calls = calls
    return _load
