"""
PDF object builder: assembles page content streams, the standard fonts and
image XObjects into a minimal PDF byte output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from repair_invoice.utils.pdf.core.layout_common import BASE_FONTS

if TYPE_CHECKING:
    from repair_invoice.utils.pdf.core.document import Page


def _font_objs(first_id: int) -> tuple[list[bytes], dict[str, int]]:
    objs: list[bytes] = []
    ids: dict[str, int] = {}
    for offset, (resource, base_font) in enumerate(BASE_FONTS.items()):
        obj_id = first_id + offset
        ids[resource] = obj_id
        objs.append(
            f"{obj_id} 0 obj << /Type /Font /Subtype /Type1 /BaseFont /{base_font} /Encoding /WinAnsiEncoding >> endobj\n".encode(
                "ascii"
            )
        )
    return objs, ids


def _image_obj(obj_id: int, width: int, height: int, data: bytes) -> bytes:
    return (
        f"{obj_id} 0 obj << /Type /XObject /Subtype /Image /Width {width} /Height {height} "
        f"/ColorSpace /DeviceRGB /BitsPerComponent 8 /Filter /FlateDecode /Length {len(data)} >> stream\n".encode("ascii")
        + data
        + b"\nendstream endobj\n"
    )


def build_pdf_bytes(pages: Sequence["Page"], page_size=(595, 842)) -> bytes:
    """
    Given laid-out pages, return ready-to-write PDF bytes.
    """
    font_objs, font_ids = _font_objs(3)
    next_obj_id = 3 + len(font_objs)
    font_ref = " ".join(f"{res} {obj_id} 0 R" for res, obj_id in font_ids.items())

    page_objs: list[bytes] = []
    pages_kids: list[int] = []

    for page in pages:
        xobjects: list[str] = []
        for placed in page.images:
            asset = placed.asset
            page_objs.append(_image_obj(next_obj_id, asset.width, asset.height, asset.data))
            xobjects.append(f"{placed.name} {next_obj_id} 0 R")
            next_obj_id += 1

        stream = page.content.encode("ascii", "ignore")
        content_id = next_obj_id
        page_id = next_obj_id + 1
        pages_kids.append(page_id)
        page_objs.append(
            f"{content_id} 0 obj << /Length {len(stream)} >> stream\n".encode("ascii") + stream + b"\nendstream endobj\n"
        )
        xobject_ref = f" /XObject << {' '.join(xobjects)} >>" if xobjects else ""
        page_objs.append(
            f"{page_id} 0 obj << /Type /Page /Parent 2 0 R /MediaBox [0 0 {page_size[0]} {page_size[1]}] /Contents {content_id} 0 R /Resources << /Font << {font_ref} >>{xobject_ref} >> >> endobj\n".encode(
                "ascii"
            )
        )
        next_obj_id += 2

    kids_ref = " ".join(f"{kid} 0 R" for kid in pages_kids)
    pages_obj = f"2 0 obj << /Type /Pages /Count {len(pages_kids)} /Kids [{kids_ref}] >> endobj\n".encode("ascii")
    catalog_obj = b"1 0 obj << /Type /Catalog /Pages 2 0 R >> endobj\n"

    objs = [catalog_obj, pages_obj] + font_objs + page_objs

    header = b"%PDF-1.4\n"
    offsets = [0]
    pdf_body = bytearray()
    current_offset = len(header)
    for obj in objs:
        offsets.append(current_offset)
        pdf_body += obj
        current_offset += len(obj)

    xref_entries = ["0000000000 65535 f \n"] + [_format_xref_entry(off) for off in offsets[1:]]
    xref = ("xref\n0 %d\n" % len(offsets)).encode("ascii") + "".join(xref_entries).encode("ascii")
    startxref = len(header) + len(pdf_body)
    trailer = f"trailer << /Size {len(offsets)} /Root 1 0 R >>\nstartxref\n{startxref}\n%%EOF\n".encode("ascii")

    return header + bytes(pdf_body) + xref + trailer


def _format_xref_entry(offset: int) -> str:
    return f"{offset:010d} 00000 n \n"
