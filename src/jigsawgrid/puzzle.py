from __future__ import annotations

import logging
import math
import numbers
import random
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from .algorithms import EdgeKey, build_edge_graph, is_border_edge, piece_edge_keys
from .errors import InvariantViolation, PuzzleConfigError
from .grid import (
    check_dimensions,
    edge_count,
    generate_vertices,
    is_boundary,
    piece_size,
    vertex_count,
)
from .models import Edge, Point, Tab, VertexIndex
from .render import DEFAULT_STROKE, DEFAULT_STROKE_WIDTH, render_path_data, render_svg
from .shapes import DEFAULT_JITTER_PCT, jitter_from_pct, synthesize_edge_shape
from .transforms import place_tab

logger = logging.getLogger(__name__)

# Below half a piece, neighbouring vertices cannot pass each other.
MAX_VERTEX_JITTER_PCT = 50.0


@dataclass
class PuzzleConfig:
    """Everything needed to lay out a puzzle.

    Attributes
    ----------
    width_mm, height_mm : float
        Physical size of the puzzle.
    columns, rows : int
        Piece counts across and down.
    jitter_pct : float
        Tab control-point jitter, in percent of the edge length.
    vertex_jitter_pct : float
        Interior vertex jitter, in percent of the piece size, below
        :data:`MAX_VERTEX_JITTER_PCT`.  Boundary vertices never move.
    """

    width_mm: float = 300.0
    height_mm: float = 200.0
    columns: int = 15
    rows: int = 10
    jitter_pct: float = DEFAULT_JITTER_PCT
    vertex_jitter_pct: float = 0.0

    def validate(self) -> list[str]:
        errors: list[str] = []
        try:
            check_dimensions(self.width_mm, self.height_mm, self.columns, self.rows)
        except PuzzleConfigError as exc:
            errors.extend(str(exc).split("; "))
        for name in ("jitter_pct", "vertex_jitter_pct"):
            value = getattr(self, name)
            if (
                isinstance(value, bool)
                or not isinstance(value, numbers.Real)
                or not math.isfinite(value)
                or value < 0
            ):
                errors.append(f"{name} must be a finite number >= 0, got {value!r}")
            elif name == "vertex_jitter_pct" and value >= MAX_VERTEX_JITTER_PCT:
                errors.append(
                    f"vertex_jitter_pct must be < {MAX_VERTEX_JITTER_PCT:g}, got {value!r}"
                )
        return errors

    def check(self) -> None:
        errors = self.validate()
        if errors:
            raise PuzzleConfigError("; ".join(errors))


class Puzzle:
    """Vertices and edges of a generated jigsaw.

    Built once by :func:`build_puzzle` (or :meth:`builder`); the public API
    only reads it afterwards.
    """

    def __init__(
        self,
        width_mm: float,
        height_mm: float,
        x_pieces: int,
        y_pieces: int,
        vertices: Iterable[Tuple[VertexIndex, Point]],
        edges: Iterable[Edge],
        metadata: Optional[dict] = None,
    ) -> None:
        self.width_mm = width_mm
        self.height_mm = height_mm
        self.x_pieces = x_pieces
        self.y_pieces = y_pieces
        edge_map: dict[EdgeKey, Edge] = {}
        for edge in edges:
            if edge.key in edge_map:
                raise InvariantViolation(f"duplicate edge {edge.key}")
            edge_map[edge.key] = edge
        # Read-only views; a built puzzle is never mutated.
        self.vertices: Mapping[VertexIndex, Point] = MappingProxyType(dict(vertices))
        self.edges: Mapping[EdgeKey, Edge] = MappingProxyType(edge_map)
        self.metadata = metadata or {}

    @staticmethod
    def builder() -> "PuzzleBuilder":
        return PuzzleBuilder()

    # ── Counts ──────────────────────────────────────────────────────

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def piece_count(self) -> int:
        return self.x_pieces * self.y_pieces

    # ── Edge queries ────────────────────────────────────────────────

    def plain_edges(self) -> List[Edge]:
        return [e for e in self.edges.values() if e.is_plain]

    def tabbed_edges(self) -> List[Edge]:
        return [e for e in self.edges.values() if not e.is_plain]

    def edge_endpoints(self, edge: Edge) -> Tuple[Point, Point]:
        return self.vertices[edge.start], self.vertices[edge.end]

    def placed_tab(self, edge: Edge) -> Optional[Tab]:
        """The edge's tab in puzzle coordinates, or ``None`` for a plain edge."""
        if edge.tab is None:
            return None
        start, end = self.edge_endpoints(edge)
        return place_tab(edge.tab, start, end)

    def piece_edges(self, row: int, col: int) -> List[Edge]:
        """Top, right, bottom and left edges of one piece."""
        if not (0 <= row < self.y_pieces and 0 <= col < self.x_pieces):
            raise IndexError(f"piece ({row}, {col}) outside {self.x_pieces}x{self.y_pieces} grid")
        return [self.edges[key] for key in piece_edge_keys(row, col)]

    # ── Checks ──────────────────────────────────────────────────────

    def validate(self) -> list[str]:
        """Return a list of invariant violations; empty when consistent."""
        errors: list[str] = []
        expected_vertices = vertex_count(self.x_pieces, self.y_pieces)
        if self.vertex_count != expected_vertices:
            errors.append(f"{self.vertex_count} vertices, expected {expected_vertices}")
        expected_edges = edge_count(self.x_pieces, self.y_pieces)
        if self.edge_count != expected_edges:
            errors.append(f"{self.edge_count} edges, expected {expected_edges}")

        for key, edge in self.edges.items():
            if edge.start >= edge.end:
                errors.append(f"Edge {key} is not in canonical order")
            for index in (edge.start, edge.end):
                if index not in self.vertices:
                    errors.append(f"Edge {key} references missing vertex {index}")
            border = is_border_edge(edge.start, edge.end, self.x_pieces, self.y_pieces)
            if border and not edge.is_plain:
                errors.append(f"Edge {key} lies on the border but has a tab")
            if not border and edge.is_plain:
                errors.append(f"Edge {key} is interior but has no tab")
        return errors

    # ── Serialisation ───────────────────────────────────────────────

    def to_path_data(self) -> str:
        return render_path_data(self.vertices, self.edges.values())

    def to_svg(
        self, stroke: str = DEFAULT_STROKE, stroke_width: float = DEFAULT_STROKE_WIDTH
    ) -> str:
        return render_svg(self, stroke=stroke, stroke_width=stroke_width)


def build_puzzle(
    config: Optional[PuzzleConfig] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> Puzzle:
    """Generate a puzzle for *config*.

    Randomness comes from *rng* when given, else from ``random.Random(seed)``.
    Passing the same seed twice yields identical puzzles.
    """
    config = config or PuzzleConfig()
    config.check()
    if rng is None:
        rng = random.Random(seed)

    x_pieces, y_pieces = config.columns, config.rows
    vertices = generate_vertices(config.width_mm, config.height_mm, x_pieces, y_pieces)
    if config.vertex_jitter_pct > 0:
        vertices = _jitter_vertices(vertices, config, rng)

    jitter = jitter_from_pct(config.jitter_pct)
    edges: List[Edge] = []
    for start, end in build_edge_graph(x_pieces, y_pieces).values():
        border = is_border_edge(start, end, x_pieces, y_pieces)
        edges.append(Edge(start, end, synthesize_edge_shape(border, rng, jitter)))

    metadata = asdict(config)
    if seed is not None:
        metadata["seed"] = seed
    puzzle = Puzzle(
        config.width_mm,
        config.height_mm,
        x_pieces,
        y_pieces,
        vertices,
        edges,
        metadata,
    )

    errors = puzzle.validate()
    if errors:
        raise InvariantViolation("; ".join(errors))
    logger.debug(
        "built %dx%d puzzle: %d vertices, %d edges (%d tabbed)",
        x_pieces,
        y_pieces,
        puzzle.vertex_count,
        puzzle.edge_count,
        len(puzzle.tabbed_edges()),
    )
    return puzzle


def _jitter_vertices(
    vertices: List[Tuple[VertexIndex, Point]],
    config: PuzzleConfig,
    rng: random.Random,
) -> List[Tuple[VertexIndex, Point]]:
    piece_width, piece_height = piece_size(
        config.width_mm, config.height_mm, config.columns, config.rows
    )
    dx = piece_width * config.vertex_jitter_pct / 100.0
    dy = piece_height * config.vertex_jitter_pct / 100.0
    moved: List[Tuple[VertexIndex, Point]] = []
    for index, point in vertices:
        if is_boundary(index, config.columns, config.rows):
            moved.append((index, point))
        else:
            moved.append((index, point.perturb(rng, dx, dy)))
    return moved


class PuzzleBuilder:
    """Chained construction of a :class:`Puzzle`::

        Puzzle.builder().size(300, 200).pieces(15, 10).seed(7).build()
    """

    def __init__(self) -> None:
        self._config = PuzzleConfig()
        self._rng: Optional[random.Random] = None
        self._seed: Optional[int] = None

    def size(self, width_mm: float, height_mm: float) -> "PuzzleBuilder":
        self._config.width_mm = width_mm
        self._config.height_mm = height_mm
        return self

    def pieces(self, columns: int, rows: int) -> "PuzzleBuilder":
        self._config.columns = columns
        self._config.rows = rows
        return self

    def jitter_pct(self, pct: float) -> "PuzzleBuilder":
        self._config.jitter_pct = pct
        return self

    def vertex_jitter_pct(self, pct: float) -> "PuzzleBuilder":
        self._config.vertex_jitter_pct = pct
        return self

    def seed(self, seed: int) -> "PuzzleBuilder":
        self._seed = seed
        return self

    def rng(self, rng: random.Random) -> "PuzzleBuilder":
        self._rng = rng
        return self

    def build(self) -> Puzzle:
        return build_puzzle(self._config, rng=self._rng, seed=self._seed)
