import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import grid_slicer
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from grid_slicer.core.models import SourceImage


def build_grid_image(rows: int, cols: int, cell: int = 20, gap: int = 2) -> Image.Image:
    """Opaque cells separated by fully transparent gaps, no outer margin."""
    width = cols * cell + (cols - 1) * gap
    height = rows * cell + (rows - 1) * gap
    img = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    for r in range(rows):
        for c in range(cols):
            x = c * (cell + gap)
            y = r * (cell + gap)
            img.paste((200, 50, 50, 255), (x, y, x + cell, y + cell))
    return img


def build_colored_grid(rows: int, cols: int, cell_w: int = 20, cell_h: int = 20) -> Image.Image:
    """Contiguous cells, each filled with a color unique to its (row, col)."""
    img = Image.new("RGBA", (cols * cell_w, rows * cell_h))
    for r in range(rows):
        for c in range(cols):
            color = (r * 40 % 256, c * 40 % 256, (r * cols + c) * 7 % 256, 255)
            img.paste(color, (c * cell_w, r * cell_h, (c + 1) * cell_w, (r + 1) * cell_h))
    return img


def to_source(img: Image.Image, filename: str = "sheet.png", fmt: str = "PNG") -> SourceImage:
    """Round-trip an in-memory image through the encoder so format is set."""
    from io import BytesIO
    buffer = BytesIO()
    img.save(buffer, format=fmt)
    return SourceImage.from_bytes(buffer.getvalue(), filename)


# Common test fixtures
@pytest.fixture
def grid_image_factory():
    """Return a builder for transparent-gap grid images."""
    return build_grid_image


@pytest.fixture
def colored_grid_factory():
    """Return a builder for uniquely colored contiguous grids."""
    return build_colored_grid


@pytest.fixture
def source_factory():
    """Return a PIL image -> SourceImage converter."""
    return to_source


@pytest.fixture
def colored_source():
    """2x3 grid of uniquely colored 20x20 cells as a PNG SourceImage."""
    return to_source(build_colored_grid(2, 3), "sheet.png")


@pytest.fixture
def sample_image(tmp_path: Path):
    """Write a 3x4 transparent-gap grid PNG to disk."""
    img = build_grid_image(3, 4)
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
