"""jigsawgrid — vector outlines for rectangular jigsaw puzzles.

Public API is organised into layers:

- **Core** — value types, lattice, edge graph
- **Shapes** — tab template, synthesis and placement
- **Puzzle** — configuration, aggregate and builder
- **Rendering** — SVG path serialisation
"""

# ── Core ────────────────────────────────────────────────────────────
from .errors import JigsawError, PuzzleConfigError, InvariantViolation, SerializationError
from .models import Point, VertexIndex, Tab, Edge, canonical_pair
from .grid import (
    generate_vertices,
    flat_index,
    index_from_flat,
    grid_neighbors,
    is_boundary,
    piece_size,
    vertex_count,
    edge_count,
)
from .algorithms import build_edge_graph, is_border_edge, piece_edge_keys

# ── Shapes ──────────────────────────────────────────────────────────
from .shapes import TAB_TEMPLATE, synthesize_tab, synthesize_edge_shape, jitter_from_pct
from .transforms import segment_frame, place_point, place_points, place_tab

# ── Puzzle ──────────────────────────────────────────────────────────
from .puzzle import Puzzle, PuzzleBuilder, PuzzleConfig, build_puzzle

# ── Rendering ───────────────────────────────────────────────────────
from .render import edge_path, render_path_data, render_svg

__all__ = [
    # Core
    "JigsawError",
    "PuzzleConfigError",
    "InvariantViolation",
    "SerializationError",
    "Point",
    "VertexIndex",
    "Tab",
    "Edge",
    "canonical_pair",
    "generate_vertices",
    "flat_index",
    "index_from_flat",
    "grid_neighbors",
    "is_boundary",
    "piece_size",
    "vertex_count",
    "edge_count",
    "build_edge_graph",
    "is_border_edge",
    "piece_edge_keys",
    # Shapes
    "TAB_TEMPLATE",
    "synthesize_tab",
    "synthesize_edge_shape",
    "jitter_from_pct",
    "segment_frame",
    "place_point",
    "place_points",
    "place_tab",
    # Puzzle
    "Puzzle",
    "PuzzleBuilder",
    "PuzzleConfig",
    "build_puzzle",
    # Rendering
    "edge_path",
    "render_path_data",
    "render_svg",
]
