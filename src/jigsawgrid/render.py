from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Iterable, Mapping, Optional
from xml.sax.saxutils import quoteattr

from .errors import SerializationError
from .models import Edge, Point, Tab, VertexIndex
from .transforms import place_tab

if TYPE_CHECKING:
    from .puzzle import Puzzle

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
DEFAULT_STROKE = "black"
DEFAULT_STROKE_WIDTH = 0.1


def format_number(value: float, precision: int = 3) -> str:
    """Fixed precision with trailing zeros trimmed; ``-0`` becomes ``0``."""
    if not math.isfinite(value):
        raise SerializationError(f"cannot serialise non-finite coordinate {value!r}")
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def _pt(point: Point) -> str:
    return f"{format_number(point.x)} {format_number(point.y)}"


def edge_path(start: Point, end: Point, tab: Optional[Tab] = None) -> str:
    """Path commands for one edge.

    *tab* must already be placed in world coordinates.  The segment
    endpoints are written from *start* and *end* directly.
    """
    if tab is None:
        return f"M {_pt(start)} L {_pt(end)}"
    return (
        f"M {_pt(start)} "
        f"C {_pt(tab.start_control)} {_pt(tab.left_nubbin_control)} {_pt(tab.nubbin_start)} "
        f"S {_pt(tab.right_nubbin_control)} {_pt(tab.nubbin_end)} "
        f"S {_pt(tab.end_control)} {_pt(end)}"
    )


def render_path_data(vertices: Mapping[VertexIndex, Point], edges: Iterable[Edge]) -> str:
    """Concatenate the commands of every edge, in iteration order."""
    commands: list[str] = []
    for edge in edges:
        try:
            start = vertices[edge.start]
            end = vertices[edge.end]
        except KeyError as exc:
            raise SerializationError(f"edge {edge.key} references missing vertex {exc}") from exc
        placed = place_tab(edge.tab, start, end) if edge.tab is not None else None
        commands.append(edge_path(start, end, placed))
    return " ".join(commands)


def render_svg(
    puzzle: "Puzzle",
    stroke: str = DEFAULT_STROKE,
    stroke_width: float = DEFAULT_STROKE_WIDTH,
) -> str:
    """Return a standalone SVG document for *puzzle*.

    The viewport is the puzzle size in millimetres and every edge goes into
    one unfilled, stroked path.
    """
    path_data = render_path_data(puzzle.vertices, puzzle.edges.values())
    width = format_number(puzzle.width_mm)
    height = format_number(puzzle.height_mm)
    document = (
        f'<svg xmlns="{SVG_NS}" version="1.1" '
        f'width="{width}mm" height="{height}mm" viewBox="0 0 {width} {height}">'
        f'<path fill="none" stroke={quoteattr(stroke)} stroke-width="{format_number(stroke_width)}" '
        f'd="{path_data}"/>'
        "</svg>"
    )
    logger.debug("rendered %d edges into %d characters", len(puzzle.edges), len(document))
    return document
