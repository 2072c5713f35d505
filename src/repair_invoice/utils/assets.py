"""
Image asset loading for logos and device photos.
References may be local paths, data: URIs or http(s) URLs. Pillow decodes
them into flat RGB pixels ready to be embedded as PDF image XObjects.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import os
import zlib
from dataclasses import dataclass
from pathlib import Path

import requests
from PIL import Image

from repair_invoice.exceptions import AssetUnavailableError

logger = logging.getLogger(__name__)

ASSET_TIMEOUT_ENV = "REPAIR_INVOICE_ASSET_TIMEOUT"
DEFAULT_TIMEOUT = 10.0
MAX_PIXELS = 1000  # longest side after downscaling


@dataclass(frozen=True)
class ImageAsset:
    reference: str
    width: int
    height: int
    data: bytes  # zlib-compressed 8-bit RGB rows


def _timeout() -> float:
    try:
        return float(os.environ.get(ASSET_TIMEOUT_ENV, DEFAULT_TIMEOUT))
    except ValueError:
        return DEFAULT_TIMEOUT


def _read_reference(reference: str) -> bytes:
    if reference.startswith("data:"):
        header, _, payload = reference.partition(",")
        if ";base64" not in header:
            raise AssetUnavailableError(reference[:40], "only base64 data URIs are supported")
        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise AssetUnavailableError(reference[:40], str(exc)) from exc
    if reference.startswith(("http://", "https://")):
        try:
            response = requests.get(reference, timeout=_timeout())
            response.raise_for_status()
        except requests.RequestException as exc:
            raise AssetUnavailableError(reference, str(exc)) from exc
        return response.content
    path = Path(reference).expanduser()
    try:
        return path.read_bytes()
    except OSError as exc:
        raise AssetUnavailableError(reference, str(exc)) from exc


def _to_rgb(img: Image.Image) -> Image.Image:
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    return img.convert("RGB")


def load_image_asset(reference: str) -> ImageAsset:
    """Load and decode one image reference; raises AssetUnavailableError on any failure."""
    raw = _read_reference(reference)
    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            rgb_img = _to_rgb(img)
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise AssetUnavailableError(reference[:80], f"cannot decode image: {exc}") from exc
    rgb_img.thumbnail((MAX_PIXELS, MAX_PIXELS))
    width, height = rgb_img.size
    return ImageAsset(
        reference=reference,
        width=width,
        height=height,
        data=zlib.compress(rgb_img.tobytes()),
    )


def try_load_image(reference: str | None, loader=load_image_asset) -> ImageAsset | None:
    """Soft variant used by the renderer: unavailable assets are logged and skipped."""
    if not reference:
        return None
    try:
        return loader(reference)
    except AssetUnavailableError as exc:
        logger.warning("Skipping image: %s", exc)
        return None
