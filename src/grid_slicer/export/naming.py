"""Output file naming for exported cells and archives."""

from __future__ import annotations

from grid_slicer.core.models import SourceImage


def slice_filename(source: SourceImage, display_id: int) -> str:
    """
    Per-cell file name: <base>_<displayId>.<ext>

    Example:
        >>> slice_filename(SourceImage.open("icons.png"), 7)
        'icons_7.png'
    """
    return f"{source.base_name}_{display_id}.{source.extension}"


def archive_filename(source: SourceImage, selected: bool = False) -> str:
    """Archive name: <base>_sliced.zip, or <base>_selected.zip for a chosen subset."""
    suffix = "selected" if selected else "sliced"
    return f"{source.base_name}_{suffix}.zip"
