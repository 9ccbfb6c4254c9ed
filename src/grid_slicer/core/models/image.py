"""
Module: image

Purpose:
    Provides SourceImage - the decoded raster a session slices, together
    with the original file name and format used to name and re-encode
    the exported cells.

Key Functions:
    - SourceImage.open(path): Decode an image file
    - SourceImage.from_bytes(data, filename): Decode in-memory file contents
    - SourceImage.rgba(): RGBA pixel array for detection

Dependencies:
    - PIL/Pillow: Decoding
    - numpy: Pixel buffer access

Used By:
    - detection.grid_detector
    - export.exporter
    - session.SlicerSession
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from grid_slicer.core.errors import DecodeError, RasterContextError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "png"


@dataclass(frozen=True)
class SourceImage:
    """
    Immutable decoded source raster.

    The core only reads ``image``; callers must not mutate it after
    constructing the SourceImage.

    Attributes:
        image: Decoded Pillow image (fully loaded)
        filename: Original file name, e.g. "sprites.png"
        format: Pillow format name, e.g. "PNG"; None when unknown

    Example:
        >>> src = SourceImage.open(Path("sheet.final.png"))
        >>> src.base_name, src.extension
        ('sheet', 'png')
    """

    image: Image.Image = field(compare=False, repr=False)
    filename: str
    format: Optional[str] = None

    @classmethod
    def open(cls, path: Union[str, Path]) -> "SourceImage":
        """
        Decode an image file.

        Raises:
            DecodeError: File missing, unreadable or not an image.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DecodeError(f"Failed to read image {path}: {e}") from e
        return cls.from_bytes(data, path.name)

    @classmethod
    def from_bytes(cls, data: bytes, filename: str) -> "SourceImage":
        """
        Decode image file contents.

        The image is fully loaded so later reads cannot fail lazily.

        Raises:
            DecodeError: Contents cannot be decoded.
        """
        try:
            image = Image.open(BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise DecodeError(f"Failed to decode image {filename!r}: {e}") from e
        logger.debug(f"Decoded {filename} ({image.format}, {image.width}x{image.height}, {image.mode})")
        return cls(image=image, filename=filename, format=image.format)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    @property
    def mime_type(self) -> str:
        """MIME type of the original format (image/png when unknown)."""
        if self.format:
            return Image.MIME.get(self.format.upper(), "image/png")
        return "image/png"

    @property
    def base_name(self) -> str:
        """File name up to its first dot."""
        return self.filename.split(".")[0]

    @property
    def extension(self) -> str:
        """Text after the last dot of the file name."""
        if "." not in self.filename:
            return DEFAULT_EXTENSION
        return self.filename.rsplit(".", 1)[1] or DEFAULT_EXTENSION

    def rgba(self) -> np.ndarray:
        """
        RGBA pixel buffer as a (height, width, 4) uint8 array.

        Raises:
            RasterContextError: Pixel data could not be converted.
        """
        try:
            converted = self.image if self.image.mode == "RGBA" else self.image.convert("RGBA")
            return np.asarray(converted, dtype=np.uint8)
        except (OSError, ValueError) as e:
            raise RasterContextError(f"Pixel data unavailable for {self.filename!r}: {e}") from e
