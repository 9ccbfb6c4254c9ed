"""
Module: cli

Purpose:
    Command-line front end for detecting grids and slicing images.

    grid-slicer detect sheet.png --sensitivity 6
    grid-slicer slice sheet.png --rows 4 --cols 6 --sort snake-1 --out out/
    grid-slicer slice sheet.png --auto --mode discrete --labels

Key Functions:
    - main(): Entry point (returns exit status)
    - build_parser(): argparse parser
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from grid_slicer import __version__
from grid_slicer.common.thresholds import (
    DEFAULT_SENSITIVITY,
    MAX_SENSITIVITY,
    MIN_SENSITIVITY,
    ExportThresholds,
)
from grid_slicer.core.errors import SlicerError
from grid_slicer.core.models import SlicerSettings, SortMode, SourceImage
from grid_slicer.detection import detect_grid
from grid_slicer.export import DirectorySink, ExportConfig, ExportMode
from grid_slicer.session import SlicerSession

logger = logging.getLogger("grid_slicer")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-slicer",
        description="Slice an image into a numbered grid of cells",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    detect = sub.add_parser("detect", help="Print detected rows and columns")
    detect.add_argument("image", type=Path, help="Source image")
    _add_sensitivity(detect)

    slice_cmd = sub.add_parser("slice", help="Export one file per cell")
    slice_cmd.add_argument("image", type=Path, help="Source image")
    slice_cmd.add_argument("--rows", type=int, default=None, help="Grid rows")
    slice_cmd.add_argument("--cols", type=int, default=None, help="Grid columns")
    slice_cmd.add_argument("--auto", action="store_true", help="Detect rows/cols from transparency")
    _add_sensitivity(slice_cmd)
    slice_cmd.add_argument("--start-id", type=int, default=1, help="First display id (default 1)")
    slice_cmd.add_argument(
        "--sort",
        choices=[m.value for m in SortMode],
        default=SortMode.NORMAL.value,
        help="Traversal order for display ids",
    )
    slice_cmd.add_argument(
        "--order",
        type=str,
        default=None,
        help="Comma-separated cell ids (row-col) giving a manual export order",
    )
    slice_cmd.add_argument(
        "--select",
        type=str,
        default=None,
        help="Comma-separated cell ids to export instead of the whole grid",
    )
    slice_cmd.add_argument(
        "--mode",
        choices=[m.value for m in ExportMode],
        default=ExportMode.ARCHIVE.value,
        help="archive: one ZIP; discrete: one file per cell",
    )
    slice_cmd.add_argument("--labels", action="store_true", help="Burn display ids into the crops")
    slice_cmd.add_argument("--font-size", type=int, default=24, help="Label size in pixels")
    slice_cmd.add_argument(
        "--delay",
        type=float,
        default=ExportThresholds().discrete_delay_s,
        help="Seconds between discrete files",
    )
    slice_cmd.add_argument("--out", type=Path, default=Path("."), help="Output directory")

    return parser


def _add_sensitivity(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--sensitivity",
        type=int,
        default=DEFAULT_SENSITIVITY,
        help=f"Detection sensitivity {MIN_SENSITIVITY}-{MAX_SENSITIVITY} (default {DEFAULT_SENSITIVITY})",
    )


def _split_ids(value: Optional[str]) -> Optional[List[str]]:
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def _run_detect(args: argparse.Namespace) -> int:
    detection = detect_grid(SourceImage.open(args.image), args.sensitivity)
    print(f"{detection.rows} {detection.cols}")
    return 0


def _run_slice(args: argparse.Namespace) -> int:
    settings = SlicerSettings(
        rows=args.rows if args.rows is not None else 2,
        cols=args.cols if args.cols is not None else 2,
        start_id=args.start_id,
        font_size=args.font_size,
        sort_mode=args.sort,
    )
    session = SlicerSession(SourceImage.open(args.image), settings)

    if args.auto:
        detection = session.auto_detect(args.sensitivity)
        logger.info(f"Using detected grid {detection.rows}x{detection.cols}")

    order = _split_ids(args.order)
    if order is not None:
        session.reorder_cells(order)

    config = ExportConfig(
        mode=ExportMode(args.mode),
        burn_labels=args.labels,
        discrete_delay_s=args.delay,
    )
    sink = DirectorySink(args.out)

    def report(processed: int, total: int) -> None:
        logger.debug(f"Processed {processed}/{total}")

    result = session.export(config, selection=_split_ids(args.select), progress=report, sink=sink)
    for path in sink.written:
        print(path)
    logger.info(f"Exported {result.cell_count} cells")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    try:
        if args.command == "detect":
            return _run_detect(args)
        return _run_slice(args)
    except SlicerError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
