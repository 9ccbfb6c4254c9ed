"""
Tests for the Export Pipeline

Covers archive and discrete modes, naming, selection, progress reporting,
cancellation and the all-or-nothing failure behavior.
"""

import zipfile
from io import BytesIO

import pytest
from PIL import Image, ImageChops

from grid_slicer.core.errors import EncodeError, ExportCancelledError, InvalidSettingsError
from grid_slicer.core.models import Cell, SlicerSettings, SortMode
from grid_slicer.export import (
    DirectorySink,
    ExportConfig,
    ExportMode,
    export_single,
    export_slices,
)
from grid_slicer.export.encoder import encode_image as real_encode
from grid_slicer.ordering import generate_cells

ARCHIVE = ExportConfig(mode=ExportMode.ARCHIVE)
DISCRETE = ExportConfig(mode=ExportMode.DISCRETE, discrete_delay_s=0)


@pytest.fixture
def settings():
    return SlicerSettings(rows=2, cols=3)


@pytest.fixture
def cells(settings):
    return generate_cells(settings.rows, settings.cols)


def _decode(data):
    img = Image.open(BytesIO(data))
    img.load()
    return img


def _zip_members(data):
    with zipfile.ZipFile(BytesIO(data)) as zf:
        return {name: zf.read(name) for name in zf.namelist()}


# ─────────────────────────────────────────────────────────────────────────────
# Archive mode
# ─────────────────────────────────────────────────────────────────────────────


class TestArchiveExport:
    """Archive mode packages every cell into one ZIP."""

    def test_archive_contains_one_file_per_cell(self, colored_source, settings, cells):
        result = export_slices(colored_source, settings, cells, ARCHIVE)

        assert result.archive.filename == "sheet_sliced.zip"
        assert result.archive.mime_type == "application/zip"
        members = _zip_members(result.archive.data)
        assert sorted(members) == sorted(f"sheet_{i}.png" for i in range(1, 7))

    def test_each_member_matches_its_source_region(self, colored_source, settings, cells):
        result = export_slices(colored_source, settings, cells, ARCHIVE)
        members = _zip_members(result.archive.data)

        for cell in cells:
            img = _decode(members[f"sheet_{cell.display_id}.png"])
            assert img.size == (20, 20)
            expected = colored_source.image.getpixel((cell.col * 20 + 5, cell.row * 20 + 5))
            assert img.getpixel((5, 5)) == expected

    def test_names_follow_display_ids_not_positions(self, colored_source, settings):
        cells = generate_cells(2, 3, start_id=10, sort_mode=SortMode.SNAKE_1)
        result = export_slices(colored_source, settings, cells, ARCHIVE)
        members = _zip_members(result.archive.data)

        # Cell (1, 0) is last in snake-1 order
        img = _decode(members["sheet_15.png"])
        assert img.getpixel((0, 0)) == colored_source.image.getpixel((0, 20))

    def test_sink_receives_only_the_archive(self, colored_source, settings, cells):
        received = []
        export_slices(colored_source, settings, cells, ARCHIVE, sink=received.append)
        assert [a.filename for a in received] == ["sheet_sliced.zip"]


# ─────────────────────────────────────────────────────────────────────────────
# Discrete mode
# ─────────────────────────────────────────────────────────────────────────────


class TestDiscreteExport:
    """Discrete mode hands each file off separately."""

    def test_files_equal_archive_members(self, colored_source, settings, cells):
        archived = export_slices(colored_source, settings, cells, ARCHIVE)
        discrete = export_slices(colored_source, settings, cells, DISCRETE)

        assert discrete.archive is None
        assert {a.filename: a.data for a in discrete.files} == _zip_members(archived.archive.data)

    def test_sink_receives_files_in_cell_order(self, colored_source, settings):
        cells = generate_cells(2, 3, sort_mode=SortMode.REVERSE)
        received = []
        export_slices(colored_source, settings, cells, DISCRETE, sink=received.append)
        assert [a.cell.id for a in received] == [c.id for c in cells]

    def test_delay_between_files(self, colored_source, settings, cells, monkeypatch):
        sleeps = []
        monkeypatch.setattr("grid_slicer.export.exporter.time.sleep", sleeps.append)
        config = ExportConfig(mode=ExportMode.DISCRETE, discrete_delay_s=0.1)

        export_slices(colored_source, settings, cells, config, sink=lambda a: None)

        assert sleeps == [0.1] * (len(cells) - 1)

    def test_directory_sink_writes_files(self, colored_source, settings, cells, tmp_path):
        sink = DirectorySink(tmp_path / "out")
        export_slices(colored_source, settings, cells, DISCRETE, sink=sink)

        assert sorted(p.name for p in sink.written) == sorted(f"sheet_{i}.png" for i in range(1, 7))
        assert all(p.exists() for p in sink.written)
        assert len(list((tmp_path / "out").iterdir())) == 6


# ─────────────────────────────────────────────────────────────────────────────
# Options
# ─────────────────────────────────────────────────────────────────────────────


class TestExportOptions:
    """Selection, labels, formats and progress."""

    def test_selection_keeps_list_order_and_renames_archive(self, colored_source, settings, cells):
        result = export_slices(colored_source, settings, cells, ARCHIVE, selection=["1-2", "0-0"])

        assert result.archive.filename == "sheet_selected.zip"
        assert [a.cell.id for a in result.files] == ["0-0", "1-2"]

    def test_selection_when_unknown_id_then_raises_error(self, colored_source, settings, cells):
        with pytest.raises(InvalidSettingsError, match="unknown"):
            export_slices(colored_source, settings, cells, ARCHIVE, selection=["5-5"])

    def test_selection_when_empty_then_raises_error(self, colored_source, settings, cells):
        with pytest.raises(InvalidSettingsError, match="Nothing to export"):
            export_slices(colored_source, settings, cells, ARCHIVE, selection=[])

    def test_labels_alter_pixels(self, colored_source, settings, cells):
        plain = export_slices(colored_source, settings, cells, DISCRETE)
        labelled = export_slices(
            colored_source,
            settings.with_changes(font_size=12),
            cells,
            ExportConfig(mode=ExportMode.DISCRETE, burn_labels=True, discrete_delay_s=0),
        )
        before = _decode(plain.files[0].data)
        after = _decode(labelled.files[0].data)
        assert before.size == after.size
        assert ImageChops.difference(before.convert("RGB"), after.convert("RGB")).getbbox() is not None

    def test_jpeg_source_exports_jpeg(self, colored_grid_factory, source_factory, settings, cells):
        src = source_factory(colored_grid_factory(2, 3).convert("RGB"), "photo.jpg", "JPEG")
        result = export_slices(src, settings, cells, DISCRETE)

        assert result.files[0].filename == "photo_1.jpg"
        assert result.files[0].mime_type == "image/jpeg"
        assert _decode(result.files[0].data).format == "JPEG"

    def test_progress_reports_each_cell(self, colored_source, settings, cells):
        calls = []
        export_slices(colored_source, settings, cells, ARCHIVE, progress=lambda p, t: calls.append((p, t)))
        assert calls == [(i, 6) for i in range(1, 7)]

    def test_export_single_returns_one_file(self, colored_source, settings):
        artifact = export_single(colored_source, settings, Cell(row=0, col=1, display_id=42))
        assert artifact.filename == "sheet_42.png"
        assert _decode(artifact.data).getpixel((0, 0)) == colored_source.image.getpixel((20, 0))


# ─────────────────────────────────────────────────────────────────────────────
# Failures
# ─────────────────────────────────────────────────────────────────────────────


class TestExportFailures:
    """Validation errors and aborted exports produce nothing."""

    def test_when_encode_fails_then_nothing_handed_off(self, colored_source, settings, cells, monkeypatch):
        calls = {"n": 0}

        def flaky_encode(image, fmt, quality=90):
            calls["n"] += 1
            if calls["n"] == 4:
                raise EncodeError("boom")
            return real_encode(image, fmt, quality=quality)

        monkeypatch.setattr("grid_slicer.export.exporter.encode_image", flaky_encode)
        received = []
        with pytest.raises(EncodeError, match="boom"):
            export_slices(colored_source, settings, cells, DISCRETE, sink=received.append)
        assert received == []

    def test_when_cancelled_then_raises_and_nothing_handed_off(self, colored_source, settings, cells):
        checks = {"n": 0}

        def cancel_on_third():
            checks["n"] += 1
            return checks["n"] == 3

        received = []
        with pytest.raises(ExportCancelledError, match="2/6"):
            export_slices(
                colored_source, settings, cells, ARCHIVE,
                sink=received.append, should_cancel=cancel_on_third,
            )
        assert received == []

    def test_when_cell_outside_grid_then_raises_error(self, colored_source, settings):
        cells = generate_cells(3, 3)
        with pytest.raises(InvalidSettingsError, match="outside"):
            export_slices(colored_source, settings, cells, ARCHIVE)

    def test_when_duplicate_display_ids_then_raises_error(self, colored_source, settings):
        cells = [Cell(0, 0, 1), Cell(0, 1, 1)]
        with pytest.raises(InvalidSettingsError, match="unique"):
            export_slices(colored_source, settings, cells, ARCHIVE)

    def test_when_grid_finer_than_image_then_raises_error(self, source_factory):
        src = source_factory(Image.new("RGBA", (3, 3)))
        settings = SlicerSettings(rows=4, cols=4)
        with pytest.raises(InvalidSettingsError, match="finer"):
            export_slices(src, settings, generate_cells(4, 4), ARCHIVE)
