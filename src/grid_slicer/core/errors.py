"""
Module: core.errors

Purpose:
    Exception hierarchy shared by every grid_slicer component. All errors
    are raised to the immediate caller; nothing in the package retries.

Key Classes:
    - SlicerError: Base class for all package errors
    - DecodeError: Source image cannot be decoded
    - RasterContextError: Pixel buffer / drawing surface unavailable
    - EncodeError: A cropped cell could not be encoded
    - InvalidSettingsError: Rejected rows/cols/sensitivity/order input
    - ExportCancelledError: Export stopped by the caller's cancel check

Used By:
    - core.models: Validation on construction
    - detection, ordering, export, session
"""


class SlicerError(Exception):
    """Base class for grid slicer failures."""
    pass


class DecodeError(SlicerError):
    """Source image could not be decoded."""
    pass


class RasterContextError(SlicerError):
    """Pixel data or a drawing surface could not be obtained."""
    pass


class EncodeError(SlicerError):
    """A cropped cell could not be encoded; the whole export is aborted."""
    pass


class InvalidSettingsError(SlicerError, ValueError):
    """Settings, sensitivity or cell order rejected at the boundary."""
    pass


class ExportCancelledError(SlicerError):
    """Export was cancelled between two cells."""
    pass
