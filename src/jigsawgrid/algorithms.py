from __future__ import annotations

import logging
from collections import deque
from typing import Dict, List, Tuple

from .errors import InvariantViolation, PuzzleConfigError
from .grid import edge_count, grid_neighbors, is_boundary, vertex_count
from .models import VertexIndex, canonical_pair

logger = logging.getLogger(__name__)

EdgeKey = Tuple[VertexIndex, VertexIndex]


def build_edge_graph(x_pieces: int, y_pieces: int) -> Dict[EdgeKey, EdgeKey]:
    """Return every lattice edge exactly once, in breadth-first order from (0, 0).

    The frontier is a FIFO queue and neighbours are expanded up, down, left,
    right, so the order of the returned mapping is the same on every run.
    Keys and values are the canonical ``(lower, higher)`` vertex pair.
    """
    if x_pieces < 1 or y_pieces < 1:
        raise PuzzleConfigError(
            f"piece counts must be >= 1, got {x_pieces} x {y_pieces}"
        )

    start = VertexIndex(0, 0)
    visited: set[VertexIndex] = set()
    queued = {start}
    frontier = deque([start])
    edges: Dict[EdgeKey, EdgeKey] = {}

    while frontier:
        current = frontier.popleft()
        if current in visited:
            raise InvariantViolation(f"vertex {current} visited twice")
        for neighbor in grid_neighbors(current, x_pieces, y_pieces):
            if neighbor in visited:
                continue
            key = canonical_pair(current, neighbor)
            if key in edges:
                raise InvariantViolation(f"edge {key} emitted twice")
            edges[key] = key
            if neighbor not in queued:
                queued.add(neighbor)
                frontier.append(neighbor)
        visited.add(current)

    expected_vertices = vertex_count(x_pieces, y_pieces)
    if len(visited) != expected_vertices:
        raise InvariantViolation(
            f"visited {len(visited)} vertices, expected {expected_vertices}"
        )
    expected_edges = edge_count(x_pieces, y_pieces)
    if len(edges) != expected_edges:
        raise InvariantViolation(f"built {len(edges)} edges, expected {expected_edges}")

    logger.debug(
        "edge graph %dx%d: %d vertices, %d edges", x_pieces, y_pieces, len(visited), len(edges)
    )
    return edges


def is_border_edge(a: VertexIndex, b: VertexIndex, x_pieces: int, y_pieces: int) -> bool:
    """True when both endpoints sit on the outer rectangle."""
    return is_boundary(a, x_pieces, y_pieces) and is_boundary(b, x_pieces, y_pieces)


def piece_edge_keys(row: int, col: int) -> List[EdgeKey]:
    """Canonical keys of the four edges around piece (*row*, *col*).

    Order is top, right, bottom, left.
    """
    top_left = VertexIndex(row, col)
    top_right = VertexIndex(row, col + 1)
    bottom_left = VertexIndex(row + 1, col)
    bottom_right = VertexIndex(row + 1, col + 1)
    return [
        canonical_pair(top_left, top_right),
        canonical_pair(top_right, bottom_right),
        canonical_pair(bottom_left, bottom_right),
        canonical_pair(top_left, bottom_left),
    ]
