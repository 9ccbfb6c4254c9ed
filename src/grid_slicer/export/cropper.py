"""
Module: export.cropper

Purpose:
    Utilities for cropping cells from the source image and burning in
    their display ids.

Key Functions:
    - cell_size(): Shared crop size for a grid
    - cell_box(): Source rectangle of one cell
    - crop_cell(): Crop one cell (new copy, not a view)
    - burn_label(): Draw a centered, stroked display id

Dependencies:
    - PIL: Cropping and drawing
    - core.models: Cell

Used By:
    - export.exporter
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Tuple

from PIL import Image, ImageDraw, ImageFont

from grid_slicer.common.thresholds import ExportThresholds
from grid_slicer.core.errors import InvalidSettingsError, RasterContextError
from grid_slicer.core.models import Cell

logger = logging.getLogger(__name__)

LABEL_FONT = "DejaVuSans-Bold.ttf"
LABEL_FILL = "white"
LABEL_STROKE = "black"

Box = Tuple[int, int, int, int]


def cell_size(width: int, height: int, rows: int, cols: int) -> Tuple[int, int]:
    """
    Crop size shared by every cell: floor(W / cols) x floor(H / rows).

    Raises:
        InvalidSettingsError: Grid finer than the image.
    """
    cell_w = width // cols
    cell_h = height // rows
    if cell_w < 1 or cell_h < 1:
        raise InvalidSettingsError(
            f"{rows}x{cols} grid is finer than the {width}x{height} image"
        )
    return cell_w, cell_h


def cell_box(cell: Cell, width: int, height: int, rows: int, cols: int) -> Box:
    """
    Source rectangle (left, top, right, bottom) for a cell.

    Uses the structural (row, col), never the display id. The origin is
    floor(col * W / cols), floor(row * H / rows) so all boxes share one size
    and stay inside the image.

    Example:
        >>> cell_box(Cell(row=1, col=2), 300, 200, 2, 3)
        (200, 100, 300, 200)
    """
    if cell.row >= rows or cell.col >= cols:
        raise InvalidSettingsError(f"Cell {cell.id} is outside the {rows}x{cols} grid")
    cell_w, cell_h = cell_size(width, height, rows, cols)
    left = (cell.col * width) // cols
    top = (cell.row * height) // rows
    return (left, top, left + cell_w, top + cell_h)


def crop_cell(image: Image.Image, cell: Cell, rows: int, cols: int) -> Image.Image:
    """Crop a cell from the source image."""
    return image.crop(cell_box(cell, image.width, image.height, rows, cols))


@lru_cache(maxsize=16)
def _load_font(size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    try:
        return ImageFont.truetype(LABEL_FONT, size)
    except OSError:
        logger.debug(f"{LABEL_FONT} not found, using Pillow default font")
        return ImageFont.load_default(size=size)


def burn_label(image: Image.Image, text: str, font_size: int) -> Image.Image:
    """
    Draw text centered on the image, stroke first then fill.

    Returns a new image; palette and other modes are drawn in RGBA.

    Raises:
        RasterContextError: Drawing surface could not be created.
    """
    target = image.copy() if image.mode in ("RGB", "RGBA") else image.convert("RGBA")
    try:
        draw = ImageDraw.Draw(target)
        draw.text(
            (target.width / 2, target.height / 2),
            text,
            font=_load_font(max(1, int(round(font_size)))),
            fill=LABEL_FILL,
            anchor="mm",
            stroke_width=ExportThresholds().label_stroke_px,
            stroke_fill=LABEL_STROKE,
        )
    except (OSError, ValueError) as e:
        raise RasterContextError(f"Could not draw label {text!r}: {e}") from e
    return target
