from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def scale(self, sx: float, sy: float) -> "Point":
        return Point(self.x * sx, self.y * sy)

    def translate(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def rotate(self, radians: float) -> "Point":
        """Rotate counter-clockwise about the origin."""
        cos_a = math.cos(radians)
        sin_a = math.sin(radians)
        return Point(self.x * cos_a - self.y * sin_a, self.x * sin_a + self.y * cos_a)

    def mirror(self) -> "Point":
        """Reflect across the x-axis."""
        return Point(self.x, -self.y)

    def perturb(self, rng, dx: float, dy: float) -> "Point":
        """Offset by independent uniform draws in ``[-dx, dx]`` and ``[-dy, dy]``.

        *rng* is any object with a ``uniform(a, b)`` method, usually a
        :class:`random.Random`.  Both draws are taken even when the bound is
        zero so that the random stream advances the same way for every
        jitter setting.
        """
        return Point(self.x + rng.uniform(-dx, dx), self.y + rng.uniform(-dy, dy))

    def distance(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, order=True)
class VertexIndex:
    """Lattice position of a vertex; compares in row-major order."""

    row: int
    col: int


def canonical_pair(a: VertexIndex, b: VertexIndex) -> Tuple[VertexIndex, VertexIndex]:
    """Return ``(a, b)`` with the lower index first."""
    return (a, b) if a <= b else (b, a)


@dataclass(frozen=True)
class Tab:
    """Control points of an interlocking tab.

    In the canonical unit frame the edge runs from (0, 0) to (1, 0).  The
    three cubic segments of the tab are::

        (0,0)  start_control  left_nubbin_control  nubbin_start
               right_nubbin_control  nubbin_end          (smooth)
               end_control  (1,0)                        (smooth)

    *mirrored* records the polarity: ``False`` when the tab bulges to the
    side the template was drawn on, ``True`` once it has been reflected.
    """

    nubbin_start: Point
    nubbin_end: Point
    start_control: Point
    end_control: Point
    left_nubbin_control: Point
    right_nubbin_control: Point
    mirrored: bool = False

    def points(self) -> Tuple[Point, ...]:
        return (
            self.nubbin_start,
            self.nubbin_end,
            self.start_control,
            self.end_control,
            self.left_nubbin_control,
            self.right_nubbin_control,
        )

    def map(self, fn: Callable[[Point], Point]) -> "Tab":
        """Apply *fn* to every control point, keeping the polarity."""
        return Tab.from_points([fn(p) for p in self.points()], mirrored=self.mirrored)

    def mirror(self) -> "Tab":
        return Tab.from_points(
            [p.mirror() for p in self.points()], mirrored=not self.mirrored
        )

    @classmethod
    def from_points(cls, points, mirrored: bool = False) -> "Tab":
        """Inverse of :meth:`points`."""
        points = tuple(points)
        if len(points) != 6:
            raise ValueError(f"a tab has 6 control points, got {len(points)}")
        return cls(*points, mirrored=mirrored)


@dataclass(frozen=True)
class Edge:
    """One grid edge between two lattice vertices.

    ``start`` is always the lower index.  ``tab is None`` marks a plain
    (straight) edge.
    """

    start: VertexIndex
    end: VertexIndex
    tab: Optional[Tab] = None

    @property
    def key(self) -> Tuple[VertexIndex, VertexIndex]:
        return (self.start, self.end)

    @property
    def is_plain(self) -> bool:
        return self.tab is None

    @property
    def is_horizontal(self) -> bool:
        return self.start.row == self.end.row
