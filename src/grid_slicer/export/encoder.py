"""
Module: export.encoder

Purpose:
    Re-encode a cropped cell in the source image's format.

Key Functions:
    - resolve_format(): Pillow format the cells are written in
    - encode_image(): Encode to bytes
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Any, Dict, Optional

from PIL import Image

from grid_slicer.core.errors import EncodeError

logger = logging.getLogger(__name__)

FALLBACK_FORMAT = "PNG"

# Formats that cannot store an alpha channel
_OPAQUE_FORMATS = {"JPEG", "MPO"}
_LOSSY_FORMATS = {"JPEG", "MPO", "WEBP"}


def resolve_format(source_format: Optional[str]) -> str:
    """
    Pillow format name to encode with.

    Unknown or read-only formats fall back to PNG.

    Example:
        >>> resolve_format("jpeg")
        'JPEG'
        >>> resolve_format(None)
        'PNG'
    """
    if not source_format:
        return FALLBACK_FORMAT
    fmt = source_format.upper()
    Image.init()
    if fmt not in Image.SAVE:
        logger.debug(f"No encoder for {fmt}, falling back to {FALLBACK_FORMAT}")
        return FALLBACK_FORMAT
    return fmt


def encode_image(image: Image.Image, source_format: Optional[str], quality: int = 90) -> bytes:
    """
    Encode an image in the given format.

    Args:
        image: Cropped cell.
        source_format: Pillow format of the source image.
        quality: Quality for lossy formats.

    Returns:
        Encoded bytes.

    Raises:
        EncodeError: Encoder rejected the image.
    """
    fmt = resolve_format(source_format)
    params: Dict[str, Any] = {}
    if fmt in _LOSSY_FORMATS:
        params["quality"] = quality
    if fmt in _OPAQUE_FORMATS and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")

    buffer = BytesIO()
    try:
        image.save(buffer, format=fmt, **params)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to encode {image.width}x{image.height} {image.mode} image as {fmt}: {e}") from e
    return buffer.getvalue()
