import json

from repair_invoice import app
from repair_invoice.core.services import preferences


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _payload(number):
    return {
        "invoiceNumber": number,
        "invoiceDate": "01 Jan 2025",
        "company": {"name": "Shop"},
        "customer": {"name": "Asha"},
        "costs": {"laborCost": 300},
    }


def test_render_writes_one_pdf_per_record(tmp_path, capsys):
    src = _write(tmp_path / "batch.json", [_payload("INV-1"), _payload("INV-2")])
    out = tmp_path / "out"

    code = app.main(["--preferences", str(tmp_path / "prefs.json"), "render", str(src), "-o", str(out)])

    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == ["invoice-INV-1.pdf", "invoice-INV-2.pdf"]
    assert capsys.readouterr().out.count("OK") == 2


def test_render_exits_nonzero_when_a_record_fails(tmp_path, capsys):
    src = _write(tmp_path / "batch.json", [_payload("INV-1"), {"invoiceNumber": "BAD"}])
    out = tmp_path / "out"

    code = app.main(["--preferences", str(tmp_path / "prefs.json"), "render", str(src), "-o", str(out)])

    assert code == 1
    assert [p.name for p in out.iterdir()] == ["invoice-INV-1.pdf"]
    assert "FAILED" in capsys.readouterr().out


def test_render_accepts_job_card_records(tmp_path):
    record = {"jobCard": {"id": "0f0f0f0f99", "customerName": "Ravi", "createdAt": "2025-01-02"}}
    src = _write(tmp_path / "job.json", record)

    code = app.main(["--preferences", str(tmp_path / "prefs.json"), "render", str(src), "-o", str(tmp_path)])

    assert code == 0
    assert (tmp_path / "invoice-INV-0F0F0F0F.pdf").exists()


def test_render_reports_unreadable_input(tmp_path, capsys):
    code = app.main(["render", str(tmp_path / "missing.json"), "-o", str(tmp_path)])
    assert code == 1
    assert "Cannot read input" in capsys.readouterr().err


def test_use_theme_and_themes_listing(tmp_path, capsys):
    prefs = tmp_path / "prefs.json"

    assert app.main(["--preferences", str(prefs), "use-theme", "retail-receipt"]) == 0
    assert preferences.load_theme_preference(prefs) == "retail-receipt"

    capsys.readouterr()
    assert app.main(["--preferences", str(prefs), "themes"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 10
    assert [line for line in lines if line.startswith("*")][0].split()[1] == "retail-receipt"


def test_use_theme_rejects_unknown_theme(tmp_path, capsys):
    code = app.main(["--preferences", str(tmp_path / "prefs.json"), "use-theme", "neon"])
    assert code == 1
    assert "Unknown theme" in capsys.readouterr().err


def test_render_keeps_records_whose_numbers_share_a_file_name(tmp_path, caplog):
    src = _write(tmp_path / "batch.json", [_payload("INV/1"), _payload("INV-1")])
    out = tmp_path / "out"

    code = app.main(["--preferences", str(tmp_path / "prefs.json"), "render", str(src), "-o", str(out)])

    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == ["invoice-INV-1-1.pdf", "invoice-INV-1.pdf"]
    assert "Duplicate output name for record 1" in caplog.text


def test_render_uses_saved_theme(tmp_path, caplog):
    import logging

    prefs = tmp_path / "prefs.json"
    preferences.save_theme_preference("retail-receipt", prefs)
    src = _write(tmp_path / "one.json", _payload("INV-7"))
    caplog.set_level(logging.INFO)

    assert app.main(["--preferences", str(prefs), "render", str(src), "-o", str(tmp_path / "out")]) == 0
    assert "with theme retail-receipt" in caplog.text
