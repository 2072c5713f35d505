from __future__ import annotations

import unicodedata
from textwrap import wrap
from typing import Iterable, Sequence

# Approximate glyph advance per point of font size for the standard Type1 fonts.
_WIDTH_FACTORS = {
    "/F1": 0.52,
    "/F2": 0.56,
    "/F3": 0.60,
    "/F4": 0.60,
    "/F5": 0.46,
    "/F6": 0.50,
}

# Bezier control point offset for quarter circles.
_KAPPA = 0.5523


def _normalize_ascii(text: str) -> str:
    """Remove diacritics to stay compatible with built-in PDF Type1 fonts."""
    normalized = unicodedata.normalize("NFKD", str(text))
    return normalized.encode("ascii", "ignore").decode("ascii")


def _escape_pdf_text(text: str) -> str:
    ascii_text = _normalize_ascii(text)
    return ascii_text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def text_width(text: str, font: str, size: float) -> float:
    return len(_normalize_ascii(text)) * size * _WIDTH_FACTORS.get(font, 0.52)


def fit_text(text: str, width: float, font: str, size: float) -> str:
    """Truncate a single line with '...' so it fits into width."""
    text = " ".join(str(text).split())
    if text_width(text, font, size) <= width:
        return text
    max_chars = max(1, int(width / (size * _WIDTH_FACTORS.get(font, 0.52))) - 3)
    return text[:max_chars].rstrip() + "..."


def wrap_lines(text: str, width: float, font: str, size: float, max_lines: int | None = None) -> list[str]:
    """Wrap text (keeping explicit line breaks) to width; the last kept line gets '...' when cut."""
    chars = max(8, int(width / (size * _WIDTH_FACTORS.get(font, 0.52))))
    lines: list[str] = []
    for paragraph in str(text or "").splitlines():
        lines.extend(wrap(_normalize_ascii(paragraph), chars) or [""])
    while lines and not lines[-1].strip():
        lines.pop()
    if max_lines is not None and len(lines) > max_lines:
        lines = lines[:max_lines]
        last = lines[-1] if lines else ""
        lines[-1] = last[: max(0, chars - 3)].rstrip() + "..."
    return lines


def _fill(color: str) -> str:
    return f"{color} rg "


def _stroke(color: str, width: float | None = None) -> str:
    op = f"{color} RG "
    if width is not None:
        op += f"{width:.2f} w "
    return op


def _draw_text(lines: Iterable[str], x: float, y: float, font: str, size: float, leading: float | None = None) -> str:
    out = []
    spacing = leading or (size + 2)
    for line in lines:
        safe = _escape_pdf_text(str(line))
        out.append(f"BT {font} {size:g} Tf {x:.2f} {y:.2f} Td ({safe}) Tj ET\n")
        y -= spacing
    return "".join(out)


def _draw_text_right(text: str, right_x: float, y: float, font: str, size: float) -> str:
    return _draw_text([text], right_x - text_width(text, font, size), y, font, size)


def _draw_text_center(text: str, center_x: float, y: float, font: str, size: float) -> str:
    return _draw_text([text], center_x - text_width(text, font, size) / 2, y, font, size)


def _draw_rect(x: float, y: float, w: float, h: float, stroke: bool = True, fill: bool = False) -> str:
    if fill and stroke:
        op = "B"
    elif fill:
        op = "f"
    else:
        op = "S"
    return f"{x:.2f} {y:.2f} {w:.2f} {h:.2f} re {op}\n"


def _draw_rounded_rect(x: float, y: float, w: float, h: float, r: float, stroke: bool = True, fill: bool = False) -> str:
    if r <= 0:
        return _draw_rect(x, y, w, h, stroke=stroke, fill=fill)
    r = min(r, w / 2, h / 2)
    k = r * _KAPPA
    x1, y1 = x + w, y + h
    path = [
        f"{x + r:.2f} {y:.2f} m",
        f"{x1 - r:.2f} {y:.2f} l",
        f"{x1 - r + k:.2f} {y:.2f} {x1:.2f} {y + r - k:.2f} {x1:.2f} {y + r:.2f} c",
        f"{x1:.2f} {y1 - r:.2f} l",
        f"{x1:.2f} {y1 - r + k:.2f} {x1 - r + k:.2f} {y1:.2f} {x1 - r:.2f} {y1:.2f} c",
        f"{x + r:.2f} {y1:.2f} l",
        f"{x + r - k:.2f} {y1:.2f} {x:.2f} {y1 - r + k:.2f} {x:.2f} {y1 - r:.2f} c",
        f"{x:.2f} {y + r:.2f} l",
        f"{x:.2f} {y + r - k:.2f} {x + r - k:.2f} {y:.2f} {x + r:.2f} {y:.2f} c",
    ]
    if fill and stroke:
        op = "b"
    elif fill:
        op = "f"
    else:
        op = "s"
    return " ".join(path) + f" {op}\n"


def _draw_line(x1: float, y1: float, x2: float, y2: float) -> str:
    return f"{x1:.2f} {y1:.2f} m {x2:.2f} {y2:.2f} l S\n"


def _draw_image(name: str, x: float, y: float, w: float, h: float) -> str:
    return f"q {w:.2f} 0 0 {h:.2f} {x:.2f} {y:.2f} cm {name} Do Q\n"


def _draw_qr(matrix: Sequence[Sequence[bool]] | None, x: float, y: float, size: float) -> str:
    if not matrix:
        return ""
    ops = []
    rows = len(matrix)
    cols = len(matrix[0]) if rows else 0
    for r in range(rows):
        for c in range(cols):
            if matrix[r][c]:
                px = x + c * size
                py = y - (r + 1) * size  # PDF y grows up
                ops.append(_draw_rect(px, py, size, size, stroke=False, fill=True))
    return "".join(ops)


def _draw_box(
    x: float,
    y: float,
    w: float,
    h: float,
    radius: float = 0.0,
    fill_color: str | None = None,
    stroke_color: str | None = None,
    border_width: float = 0.8,
) -> str:
    """Filled and/or stroked box honoring the theme's corner radius."""
    if fill_color is None and stroke_color is None:
        return ""
    ops = ["q "]
    if fill_color is not None:
        ops.append(_fill(fill_color))
    if stroke_color is not None:
        ops.append(_stroke(stroke_color, border_width))
    ops.append(_draw_rounded_rect(x, y, w, h, radius, stroke=stroke_color is not None, fill=fill_color is not None))
    ops.append("Q\n")
    return "".join(ops)


def fit_box(width: int, height: int, max_w: float, max_h: float) -> tuple[float, float]:
    """Scale (width, height) to fit inside max_w x max_h keeping the aspect ratio."""
    if width <= 0 or height <= 0:
        return 0.0, 0.0
    scale = min(max_w / width, max_h / height)
    return width * scale, height * scale
