"""Place unit-frame geometry onto real edges.

A point ``p`` in the unit frame maps onto the segment ``start -> end`` as::

    p' = translate(rotate(scale(p, dist, dist), theta), start)

so (0, 0) lands on ``start`` and (1, 0) on ``end``.  Scaling is uniform by
the edge length; tabs on horizontal and vertical edges therefore differ in
size whenever the pieces are not square.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Tuple

import numpy as np

from .errors import InvariantViolation
from .models import Point, Tab


def segment_frame(start: Point, end: Point) -> Tuple[float, float]:
    """Return ``(theta, dist)`` for the segment *start* → *end*."""
    theta = math.atan2(end.y - start.y, end.x - start.x)
    dist = start.distance(end)
    return theta, dist


def place_point(p: Point, start: Point, end: Point) -> Point:
    theta, dist = segment_frame(start, end)
    if dist == 0.0:
        raise InvariantViolation(f"degenerate segment at {start}")
    return p.scale(dist, dist).rotate(theta).translate(start)


def placement_matrix(start: Point, end: Point) -> np.ndarray:
    """3x3 homogeneous matrix combining scale, rotation and translation."""
    theta, dist = segment_frame(start, end)
    if dist == 0.0:
        raise InvariantViolation(f"degenerate segment at {start}")
    cos_a = math.cos(theta) * dist
    sin_a = math.sin(theta) * dist
    return np.array(
        [
            [cos_a, -sin_a, start.x],
            [sin_a, cos_a, start.y],
            [0.0, 0.0, 1.0],
        ]
    )


def place_points(points: Iterable[Point], start: Point, end: Point) -> List[Point]:
    """Vectorised :func:`place_point` for a batch of points."""
    points = list(points)
    if not points:
        return []
    xy = np.array([[p.x, p.y, 1.0] for p in points], dtype=float)
    placed = xy @ placement_matrix(start, end).T
    return [Point(float(x), float(y)) for x, y, _ in placed]


def place_tab(tab: Tab, start: Point, end: Point) -> Tab:
    """Map all six control points of *tab* onto the real edge."""
    return Tab.from_points(place_points(tab.points(), start, end), mirrored=tab.mirrored)
