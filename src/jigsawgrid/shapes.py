"""Edge shape synthesis.

Interior edges get an interlocking tab built from :data:`TAB_TEMPLATE`,
a fixed set of control points in the unit frame where the edge runs from
(0, 0) to (1, 0).  Each tab is jittered and, on a coin flip, mirrored so it
bulges to the other side of its edge.  Border edges stay straight.
"""

from __future__ import annotations

from typing import Optional

from .errors import PuzzleConfigError
from .models import Point, Tab

TAB_TEMPLATE = Tab(
    nubbin_start=Point(0.4, 0.1),
    nubbin_end=Point(0.6, 0.1),
    start_control=Point(0.2, 0.0),
    end_control=Point(0.8, 0.0),
    left_nubbin_control=Point(0.5, -0.1),
    right_nubbin_control=Point(0.7, 0.3),
)

DEFAULT_JITTER_PCT = 10.0

# Neck points move half as far as the curve controls.
NECK_JITTER_FACTOR = 0.5


def jitter_from_pct(jitter_pct: float) -> float:
    """Convert a percentage of piece size into a unit-frame offset bound."""
    if jitter_pct < 0:
        raise PuzzleConfigError(f"jitter_pct must be >= 0, got {jitter_pct}")
    return jitter_pct / 100.0


def synthesize_tab(rng, jitter: float, template: Tab = TAB_TEMPLATE) -> Tab:
    """Return a randomised copy of *template*.

    Draw order is fixed: the polarity coin first, then two draws per control
    point in :meth:`Tab.points` order.
    """
    flip = rng.random() < 0.5
    neck = jitter * NECK_JITTER_FACTOR
    tab = Tab(
        nubbin_start=template.nubbin_start.perturb(rng, neck, neck),
        nubbin_end=template.nubbin_end.perturb(rng, neck, neck),
        start_control=template.start_control.perturb(rng, jitter, jitter),
        end_control=template.end_control.perturb(rng, jitter, jitter),
        left_nubbin_control=template.left_nubbin_control.perturb(rng, jitter, jitter),
        right_nubbin_control=template.right_nubbin_control.perturb(rng, jitter, jitter),
        mirrored=template.mirrored,
    )
    return tab.mirror() if flip else tab


def synthesize_edge_shape(border: bool, rng, jitter: float) -> Optional[Tab]:
    """Tab for an interior edge, ``None`` for a border edge.

    Border edges consume no randomness.
    """
    if border:
        return None
    return synthesize_tab(rng, jitter)
