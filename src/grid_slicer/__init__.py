"""Top-level package for Grid Slicer.

Provides subpackages:
- grid_slicer.core – models (settings, cells, presets, source image) and errors
- grid_slicer.detection – transparency-based grid detection
- grid_slicer.ordering – cell traversal orders and renumbering
- grid_slicer.history – linear undo/redo over settings and cells
- grid_slicer.export – cropping, encoding and archive packaging
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

    if pyproject.exists():
        try:
            content = pyproject.read_text()
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("grid-slicer")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
