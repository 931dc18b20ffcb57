"""jigsawgrid command-line interface."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .errors import PuzzleConfigError
from .puzzle import PuzzleConfig, build_puzzle
from .render import DEFAULT_STROKE, DEFAULT_STROKE_WIDTH

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    defaults = PuzzleConfig()
    parser = argparse.ArgumentParser(
        prog="jigsawgrid",
        description="Generate a jigsaw puzzle outline as SVG on standard output",
    )
    parser.add_argument(
        "-W", "--width", type=float, default=defaults.width_mm,
        help=f"Puzzle width in mm (default: {defaults.width_mm:g})",
    )
    parser.add_argument(
        "-H", "--height", type=float, default=defaults.height_mm,
        help=f"Puzzle height in mm (default: {defaults.height_mm:g})",
    )
    parser.add_argument(
        "-c", "--cols", type=int, default=defaults.columns,
        help=f"Number of pieces across (default: {defaults.columns})",
    )
    parser.add_argument(
        "-r", "--rows", type=int, default=defaults.rows,
        help=f"Number of pieces from top to bottom (default: {defaults.rows})",
    )
    parser.add_argument(
        "--jitter", type=float, default=defaults.jitter_pct,
        help=f"Tab jitter in percent of piece size (default: {defaults.jitter_pct:g})",
    )
    parser.add_argument(
        "--vertex-jitter", type=float, default=defaults.vertex_jitter_pct,
        help="Interior vertex jitter in percent of piece size (default: 0)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    parser.add_argument("--stroke", default=DEFAULT_STROKE, help="Stroke colour")
    parser.add_argument(
        "--stroke-width", type=float, default=DEFAULT_STROKE_WIDTH, help="Stroke width in mm"
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (default: WARNING)"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    config = PuzzleConfig(
        width_mm=args.width,
        height_mm=args.height,
        columns=args.cols,
        rows=args.rows,
        jitter_pct=args.jitter,
        vertex_jitter_pct=args.vertex_jitter,
    )
    try:
        puzzle = build_puzzle(config, seed=args.seed)
    except PuzzleConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2)

    logger.info(
        "Generated %d pieces (%d edges), seed=%s", puzzle.piece_count, puzzle.edge_count, args.seed
    )
    print(puzzle.to_svg(stroke=args.stroke, stroke_width=args.stroke_width))


if __name__ == "__main__":
    main()
