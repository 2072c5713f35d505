"""
Generator entry point: enrich, pick the theme, render, package the artifact.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from repair_invoice.core.calculations.invoice_calculator import InvoiceCalculator
from repair_invoice.core.models.invoice import InvoiceData
from repair_invoice.core.services.job_card import job_card_to_invoice_data
from repair_invoice.core.services.payload import parse_invoice_data
from repair_invoice.core.services.themes import resolve_theme_id, tokens_for
from repair_invoice.exceptions import InvoiceRenderError
from repair_invoice.utils.pdf.renderers.pdf_renderer import AssetLoader, render_document

logger = logging.getLogger(__name__)

MEDIA_TYPE = "application/pdf"
FILE_EXTENSION = ".pdf"
_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9._-]+")

Record = Union[InvoiceData, Mapping[str, Any]]


@dataclass(frozen=True)
class InvoiceArtifact:
    filename: str
    content: bytes
    media_type: str
    theme_id: str
    page_count: int


@dataclass(frozen=True)
class BulkResult:
    index: int
    invoice_number: Optional[str]
    artifact: Optional[InvoiceArtifact] = None
    error: Optional[InvoiceRenderError] = None

    @property
    def ok(self) -> bool:
        return self.artifact is not None


def invoice_filename(invoice_number: str) -> str:
    safe = _UNSAFE_FILENAME.sub("-", str(invoice_number).strip()).strip("-.") or "unnamed"
    return f"invoice-{safe}{FILE_EXTENSION}"


def coerce_record(record: Record) -> InvoiceData:
    """
    Accept InvoiceData, an InvoiceData payload, or a {"jobCard": ..., "company": ...} record.
    """
    if isinstance(record, InvoiceData):
        return record
    if isinstance(record, Mapping) and "jobCard" in record:
        return job_card_to_invoice_data(record["jobCard"], record.get("company"))
    return parse_invoice_data(record)


def _record_label(record: Record) -> Optional[str]:
    if isinstance(record, InvoiceData):
        return record.invoice_number
    if isinstance(record, Mapping):
        if "jobCard" in record and isinstance(record["jobCard"], Mapping):
            job_id = str(record["jobCard"].get("id") or "")
            return f"INV-{job_id[:8].upper()}" if job_id else None
        return record.get("invoiceNumber") or None
    return None


def generate_invoice(
    data: Record,
    theme_id: Optional[str] = None,
    *,
    saved_theme_id: Optional[str] = None,
    calculator: Optional[InvoiceCalculator] = None,
    asset_loader: Optional[AssetLoader] = None,
) -> InvoiceArtifact:
    """
    Render one invoice. Without a theme id the caller's saved_theme_id is used;
    unknown ids fall back to the registry default.
    Any failure is raised as InvoiceRenderError with the original exception chained.
    """
    label = _record_label(data)
    try:
        invoice = coerce_record(data)
        label = invoice.invoice_number
        enriched = (calculator or InvoiceCalculator()).enrich(invoice)
        resolved = resolve_theme_id(theme_id or saved_theme_id)
        document = render_document(enriched, tokens_for(resolved), asset_loader=asset_loader)
        content = document.to_pdf()
    except InvoiceRenderError:
        raise
    except Exception as exc:
        raise InvoiceRenderError(label, str(exc) or exc.__class__.__name__) from exc
    logger.info("Generated %s (%s, %d page(s))", invoice_filename(label), resolved, document.page_count)
    return InvoiceArtifact(
        filename=invoice_filename(label),
        content=content,
        media_type=MEDIA_TYPE,
        theme_id=resolved,
        page_count=document.page_count,
    )


def generate_invoices(
    records: Iterable[Record],
    theme_id: Optional[str] = None,
    *,
    saved_theme_id: Optional[str] = None,
    max_workers: int = 4,
    calculator: Optional[InvoiceCalculator] = None,
    asset_loader: Optional[AssetLoader] = None,
) -> list[BulkResult]:
    """
    Render many records independently. Results come back in input order;
    a failing record is reported in its BulkResult and never stops the others.
    """
    records = list(records)
    theme_id = resolve_theme_id(theme_id or saved_theme_id)

    def _one(index: int, record: Record) -> BulkResult:
        try:
            artifact = generate_invoice(record, theme_id, calculator=calculator, asset_loader=asset_loader)
        except InvoiceRenderError as exc:
            logger.exception("Bulk render: record %d failed", index)
            return BulkResult(index=index, invoice_number=exc.invoice_number, error=exc)
        return BulkResult(index=index, invoice_number=_record_label(record) or None, artifact=artifact)

    if not records:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(records)))) as pool:
        return list(pool.map(_one, range(len(records)), records))


def write_artifact(artifact: InvoiceArtifact, path: Path) -> Path:
    """Write to `path`; a directory gets the artifact's own filename. Existing files are replaced."""
    path = Path(path)
    target = path / artifact.filename if path.is_dir() else path
    if target.exists():
        logger.warning("Overwriting existing file %s", target)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(artifact.content)
    return target
