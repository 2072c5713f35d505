import re
from dataclasses import replace

import pytest

from repair_invoice.core.services import invoice as generator
from repair_invoice.exceptions import InvoiceRenderError
from repair_invoice.utils.pdf.exports.invoice import export_invoice_pdf


def _assert_valid_pdf(data: bytes, pages: int) -> None:
    assert data.startswith(b"%PDF-1.4")
    assert data.rstrip().endswith(b"%%EOF")
    startxref = int(data.split(b"startxref\n")[1].split(b"\n")[0])
    assert data[startxref : startxref + 4] == b"xref"
    assert f"/Count {pages}".encode("ascii") in data
    size = int(re.search(rb"/Size (\d+)", data).group(1))
    # every object offset in the xref table points at "<n> 0 obj"
    table = data[startxref:].split(b"\n")[2 : 2 + size]
    for obj_id, entry in enumerate(table[1:], start=1):
        offset = int(entry[:10])
        assert data[offset:].startswith(f"{obj_id} 0 obj".encode("ascii"))


def test_generate_invoice_returns_named_pdf(sample_invoice, fake_loader):
    artifact = generator.generate_invoice(sample_invoice, "corporate-pro", asset_loader=fake_loader)

    assert artifact.filename == "invoice-INV-1A2B3C4D.pdf"
    assert artifact.media_type == "application/pdf"
    assert artifact.theme_id == "corporate-pro"
    assert artifact.page_count == 1
    _assert_valid_pdf(artifact.content, 1)
    assert b"(INVOICE) Tj" in artifact.content


def test_generate_invoice_with_addendum_embeds_photos(sample_invoice, fake_loader):
    invoice = replace(
        sample_invoice,
        terms_and_conditions="1. No refund",
        device=replace(sample_invoice.device, images=("a.jpg", "b.jpg")),
    )
    artifact = generator.generate_invoice(invoice, asset_loader=fake_loader)

    assert artifact.page_count == 2
    _assert_valid_pdf(artifact.content, 2)
    assert artifact.content.count(b"/Subtype /Image") == 2


def test_generate_invoice_unknown_theme_uses_default(sample_invoice, fake_loader):
    artifact = generator.generate_invoice(sample_invoice, "no-such-theme", asset_loader=fake_loader)
    assert artifact.theme_id == "modern-minimalist"


def test_generate_invoice_accepts_payload_mapping(fake_loader):
    payload = {
        "invoiceNumber": "INV/2025 07",
        "invoiceDate": "01 Jan 2025",
        "company": {"name": "Shop"},
        "customer": {"name": "Asha"},
        "costs": {"serviceCost": 500},
        "advanceReceived": 500,
    }
    artifact = generator.generate_invoice(payload, asset_loader=fake_loader)
    assert artifact.filename == "invoice-INV-2025-07.pdf"


def test_generate_invoice_accepts_job_card_record(fake_loader):
    record = {"jobCard": {"id": "abcdef123456", "customerName": "Ravi", "createdAt": "2025-01-02"}, "company": {"name": "Shop"}}
    artifact = generator.generate_invoice(record, asset_loader=fake_loader)
    assert artifact.filename == "invoice-INV-ABCDEF12.pdf"


def test_generate_invoice_wraps_failures():
    with pytest.raises(InvoiceRenderError) as excinfo:
        generator.generate_invoice({"invoiceNumber": "INV-9", "company": {"name": "Shop"}})

    assert excinfo.value.invoice_number == "INV-9"
    assert "customer" in str(excinfo.value)
    assert excinfo.value.__cause__ is not None


def test_generate_invoices_isolates_failures(sample_invoice, fake_loader, caplog):
    records = [
        sample_invoice,
        {"invoiceNumber": "BROKEN"},
        replace(sample_invoice, invoice_number="INV-3"),
    ]

    results = generator.generate_invoices(records, "tech-forward", asset_loader=fake_loader, max_workers=3)

    assert [r.index for r in results] == [0, 1, 2]
    assert [r.ok for r in results] == [True, False, True]
    assert results[1].invoice_number == "BROKEN"
    assert isinstance(results[1].error, InvoiceRenderError)
    assert results[2].artifact.filename == "invoice-INV-3.pdf"
    assert "record 1 failed" in caplog.text


def test_generate_invoices_matches_single_render(sample_invoice, fake_loader):
    single = generator.generate_invoice(sample_invoice, asset_loader=fake_loader)
    bulk = generator.generate_invoices([sample_invoice] * 3, asset_loader=fake_loader)
    assert all(result.artifact == single for result in bulk)


def test_generate_invoices_empty():
    assert generator.generate_invoices([]) == []


def test_export_invoice_pdf_into_directory(tmp_path, sample_invoice, fake_loader):
    path = export_invoice_pdf(tmp_path, sample_invoice, asset_loader=fake_loader)

    assert path == tmp_path / "invoice-INV-1A2B3C4D.pdf"
    _assert_valid_pdf(path.read_bytes(), 1)


def test_export_invoice_pdf_to_explicit_file(tmp_path, sample_invoice, fake_loader):
    target = tmp_path / "out" / "custom.pdf"
    path = export_invoice_pdf(target, sample_invoice, "bold-impact", asset_loader=fake_loader)

    assert path == target
    assert target.read_bytes().startswith(b"%PDF")


def test_saved_theme_is_used_when_no_theme_given(sample_invoice, fake_loader):
    saved = "industrial-tech"

    assert generator.generate_invoice(sample_invoice, saved_theme_id=saved, asset_loader=fake_loader).theme_id == saved
    explicit = generator.generate_invoice(sample_invoice, "soft-elegance", saved_theme_id=saved, asset_loader=fake_loader)
    assert explicit.theme_id == "soft-elegance"
    bulk = generator.generate_invoices([sample_invoice], saved_theme_id=saved, asset_loader=fake_loader)
    assert bulk[0].artifact.theme_id == saved


def test_preferences_file_does_not_change_generator_theme(sample_invoice, fake_loader, isolated_preferences):
    from repair_invoice.core.services.preferences import save_theme_preference

    save_theme_preference("bold-impact", isolated_preferences)

    assert generator.generate_invoice(sample_invoice, asset_loader=fake_loader).theme_id == "modern-minimalist"
    bulk = generator.generate_invoices([sample_invoice], asset_loader=fake_loader)
    assert bulk[0].artifact.theme_id == "modern-minimalist"


def test_write_artifact_warns_before_replacing_a_file(tmp_path, sample_invoice, fake_loader, caplog):
    artifact = generator.generate_invoice(sample_invoice, asset_loader=fake_loader)
    generator.write_artifact(artifact, tmp_path)
    assert "Overwriting" not in caplog.text

    generator.write_artifact(artifact, tmp_path)

    assert "Overwriting existing file" in caplog.text
    assert "invoice-INV-1A2B3C4D.pdf" in caplog.text
