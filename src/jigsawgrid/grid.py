"""Rectangular vertex lattice and its index arithmetic."""

from __future__ import annotations

import math
import numbers
from typing import List, Tuple

from .errors import PuzzleConfigError
from .models import Point, VertexIndex


def check_dimensions(width_mm: float, height_mm: float, x_pieces: int, y_pieces: int) -> None:
    """Raise :class:`PuzzleConfigError` for sizes the lattice cannot use."""
    errors: list[str] = []
    for name, value in (("x_pieces", x_pieces), ("y_pieces", y_pieces)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            errors.append(f"{name} must be an integer, got {value!r}")
        elif value < 1:
            errors.append(f"{name} must be >= 1, got {value}")
    for name, value in (("width_mm", width_mm), ("height_mm", height_mm)):
        if (
            isinstance(value, bool)
            or not isinstance(value, numbers.Real)
            or not math.isfinite(value)
            or value <= 0
        ):
            errors.append(f"{name} must be a positive finite number, got {value!r}")
    if errors:
        raise PuzzleConfigError("; ".join(errors))


def vertex_count(x_pieces: int, y_pieces: int) -> int:
    if x_pieces < 1 or y_pieces < 1:
        raise PuzzleConfigError("piece counts must be >= 1")
    return (x_pieces + 1) * (y_pieces + 1)


def edge_count(x_pieces: int, y_pieces: int) -> int:
    """Vertical plus horizontal lattice edges, each counted once."""
    if x_pieces < 1 or y_pieces < 1:
        raise PuzzleConfigError("piece counts must be >= 1")
    return (x_pieces + 1) * y_pieces + x_pieces * (y_pieces + 1)


def piece_size(
    width_mm: float, height_mm: float, x_pieces: int, y_pieces: int
) -> Tuple[float, float]:
    check_dimensions(width_mm, height_mm, x_pieces, y_pieces)
    return width_mm / x_pieces, height_mm / y_pieces


def generate_vertices(
    width_mm: float, height_mm: float, x_pieces: int, y_pieces: int
) -> List[Tuple[VertexIndex, Point]]:
    """Return every lattice vertex in row-major order."""
    piece_width, piece_height = piece_size(width_mm, height_mm, x_pieces, y_pieces)
    vertices: List[Tuple[VertexIndex, Point]] = []
    for row in range(y_pieces + 1):
        for col in range(x_pieces + 1):
            vertices.append((VertexIndex(row, col), Point(col * piece_width, row * piece_height)))
    return vertices


def flat_index(index: VertexIndex, x_pieces: int) -> int:
    return index.row * (x_pieces + 1) + index.col


def index_from_flat(flat: int, x_pieces: int) -> VertexIndex:
    row, col = divmod(flat, x_pieces + 1)
    return VertexIndex(row, col)


def in_bounds(index: VertexIndex, x_pieces: int, y_pieces: int) -> bool:
    return 0 <= index.row <= y_pieces and 0 <= index.col <= x_pieces


def grid_neighbors(index: VertexIndex, x_pieces: int, y_pieces: int) -> List[VertexIndex]:
    """Lattice-adjacent vertices in the fixed order up, down, left, right."""
    candidates = (
        VertexIndex(index.row - 1, index.col),
        VertexIndex(index.row + 1, index.col),
        VertexIndex(index.row, index.col - 1),
        VertexIndex(index.row, index.col + 1),
    )
    return [c for c in candidates if in_bounds(c, x_pieces, y_pieces)]


def is_boundary(index: VertexIndex, x_pieces: int, y_pieces: int) -> bool:
    return index.row in (0, y_pieces) or index.col in (0, x_pieces)
