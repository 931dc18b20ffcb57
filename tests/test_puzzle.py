import random
import re
import xml.etree.ElementTree as ET

import pytest

from jigsawgrid.algorithms import is_border_edge
from jigsawgrid.errors import InvariantViolation, PuzzleConfigError
from jigsawgrid.models import Edge, Point, VertexIndex
from jigsawgrid.puzzle import Puzzle, PuzzleConfig, build_puzzle
from jigsawgrid.shapes import TAB_TEMPLATE
from jigsawgrid.transforms import place_tab

SVG = "{http://www.w3.org/2000/svg}"


def _path_data(document):
    root = ET.fromstring(document)
    return root, root.find(f"{SVG}path").attrib["d"]


class TestDefaultPuzzle:
    def test_counts(self):
        puzzle = Puzzle.builder().size(300, 200).pieces(15, 10).seed(1).build()
        assert puzzle.vertex_count == 176
        assert puzzle.edge_count == 325
        assert puzzle.piece_count == 150
        assert puzzle.validate() == []

    def test_svg_has_one_move_per_edge(self):
        puzzle = Puzzle.builder().size(300, 200).pieces(15, 10).seed(1).build()
        root, d = _path_data(puzzle.to_svg())
        assert root.attrib["viewBox"] == "0 0 300 200"
        assert len(re.findall(r"M ", d)) == 325
        assert d.count("L ") == len(puzzle.plain_edges())
        assert d.count("C ") == len(puzzle.tabbed_edges())

    def test_border_edges_plain_interior_edges_tabbed(self):
        puzzle = build_puzzle(PuzzleConfig(), seed=4)
        for edge in puzzle.edges.values():
            border = is_border_edge(edge.start, edge.end, 15, 10)
            assert edge.is_plain == border
        # 2 * (15 + 10) frame segments
        assert len(puzzle.plain_edges()) == 50


def test_single_piece_is_all_plain():
    puzzle = Puzzle.builder().size(50, 50).pieces(1, 1).build()
    assert puzzle.vertex_count == 4
    assert puzzle.edge_count == 4
    assert puzzle.tabbed_edges() == []
    _, d = _path_data(puzzle.to_svg())
    assert "C" not in d


@pytest.mark.parametrize("columns,rows", [(2, 2), (3, 5), (7, 1)])
def test_counts_for_various_sizes(columns, rows):
    puzzle = build_puzzle(PuzzleConfig(width_mm=90, height_mm=60, columns=columns, rows=rows))
    assert puzzle.vertex_count == (columns + 1) * (rows + 1)
    assert puzzle.edge_count == (columns + 1) * rows + columns * (rows + 1)
    assert puzzle.validate() == []


def test_zero_jitter_tabs_match_template():
    puzzle = build_puzzle(PuzzleConfig(jitter_pct=0), seed=8)
    assert puzzle.tabbed_edges()
    for edge in puzzle.tabbed_edges():
        template = TAB_TEMPLATE.mirror() if edge.tab.mirrored else TAB_TEMPLATE
        start, end = puzzle.edge_endpoints(edge)
        assert puzzle.placed_tab(edge) == place_tab(template, start, end)


def test_placed_tab_plain_edge_is_none():
    puzzle = build_puzzle(PuzzleConfig(columns=2, rows=2), seed=1)
    assert puzzle.placed_tab(puzzle.plain_edges()[0]) is None


def test_piece_edges():
    puzzle = build_puzzle(PuzzleConfig(columns=3, rows=3), seed=1)
    corner = puzzle.piece_edges(0, 0)
    assert [e.is_plain for e in corner] == [True, False, False, True]
    centre = puzzle.piece_edges(1, 1)
    assert not any(e.is_plain for e in centre)
    with pytest.raises(IndexError):
        puzzle.piece_edges(3, 0)


class TestConfigErrors:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"columns": 0},
            {"rows": 0},
            {"columns": -3},
            {"width_mm": 0},
            {"height_mm": -1},
            {"jitter_pct": -5},
            {"vertex_jitter_pct": float("nan")},
            {"vertex_jitter_pct": 50},
            {"vertex_jitter_pct": 1e6},
            {"jitter_pct": True},
            {"vertex_jitter_pct": "5"},
        ],
    )
    def test_rejected_before_generation(self, kwargs):
        with pytest.raises(PuzzleConfigError):
            build_puzzle(PuzzleConfig(**kwargs))

    def test_validate_lists_every_problem(self):
        errors = PuzzleConfig(columns=0, rows=0, jitter_pct=-1).validate()
        assert len(errors) == 3

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            Puzzle.builder().pieces(0, 4).build()


class TestVertexJitter:
    def test_boundary_vertices_never_move(self):
        puzzle = build_puzzle(PuzzleConfig(columns=4, rows=3, vertex_jitter_pct=20), seed=5)
        for index, point in puzzle.vertices.items():
            expected = Point(index.col * 75.0, index.row * (200.0 / 3))
            if index.row in (0, 3) or index.col in (0, 4):
                assert point == expected

    def test_interior_vertices_stay_within_bounds(self):
        puzzle = build_puzzle(PuzzleConfig(columns=4, rows=3, vertex_jitter_pct=20), seed=5)
        moved = 0
        for index, point in puzzle.vertices.items():
            if index.row in (0, 3) or index.col in (0, 4):
                continue
            assert abs(point.x - index.col * 75.0) <= 15.0
            assert abs(point.y - index.row * (200.0 / 3)) <= 200.0 / 3 * 0.2 + 1e-9
            moved += point != Point(index.col * 75.0, index.row * (200.0 / 3))
        assert moved > 0


def test_duplicate_edge_rejected():
    a, b = VertexIndex(0, 0), VertexIndex(0, 1)
    with pytest.raises(InvariantViolation):
        Puzzle(10, 10, 1, 1, [(a, Point(0, 0)), (b, Point(10, 0))], [Edge(a, b), Edge(a, b)])


def test_validate_reports_misclassified_edge():
    a, b = VertexIndex(0, 0), VertexIndex(0, 1)
    puzzle = Puzzle(10, 10, 1, 1, [(a, Point(0, 0)), (b, Point(10, 0))], [Edge(a, b, TAB_TEMPLATE)])
    errors = puzzle.validate()
    assert any("border" in e for e in errors)
    assert any("vertices" in e for e in errors)


def test_explicit_rng_is_used():
    rng = random.Random(12)
    first = Puzzle.builder().pieces(4, 4).rng(rng).build()
    second = Puzzle.builder().pieces(4, 4).rng(random.Random(12)).build()
    assert first.to_svg() == second.to_svg()


def test_metadata_records_settings():
    puzzle = build_puzzle(PuzzleConfig(columns=2, rows=2, jitter_pct=4), seed=99)
    assert puzzle.metadata["seed"] == 99
    assert puzzle.metadata["jitter_pct"] == 4


def test_numpy_scalar_jitter_accepted():
    np = pytest.importorskip("numpy")
    config = PuzzleConfig(columns=3, rows=3, jitter_pct=np.float32(5.0))
    assert config.validate() == []


@pytest.mark.parametrize("seed", range(10))
def test_max_vertex_jitter_keeps_lattice_order(seed):
    columns, rows = 6, 6
    puzzle = build_puzzle(
        PuzzleConfig(columns=columns, rows=rows, vertex_jitter_pct=49.9), seed=seed
    )
    v = puzzle.vertices
    for row in range(rows + 1):
        for col in range(columns):
            assert v[VertexIndex(row, col)].x < v[VertexIndex(row, col + 1)].x
    for row in range(rows):
        for col in range(columns + 1):
            assert v[VertexIndex(row, col)].y < v[VertexIndex(row + 1, col)].y


def test_built_puzzle_tables_are_read_only():
    puzzle = build_puzzle(PuzzleConfig(columns=2, rows=2), seed=1)
    with pytest.raises(TypeError):
        puzzle.vertices[VertexIndex(0, 0)] = Point(1.0, 1.0)
    with pytest.raises(TypeError):
        del puzzle.edges[next(iter(puzzle.edges))]
