from pathlib import Path
from typing import Optional

from repair_invoice.core.services.invoice import Record, generate_invoice, write_artifact


def export_invoice_pdf(path: Path, data: Record, theme_id: Optional[str] = None, **kwargs) -> Path:
    """
    Render one invoice and write it to `path` (a directory or a file path).
    Returns the written file.
    """
    artifact = generate_invoice(data, theme_id, **kwargs)
    return write_artifact(artifact, Path(path))
