# MIT License (see LICENSE)
"""
Support predicates: when does a body rest on the ground or on another body.

These are interval-overlap heuristics on axis-aligned footprints, not a
contact solver. Each test is a named function so the validator's traversal
does not depend on how "touching" is decided.

Key concepts:
- Ground plane is y = 0.
- A body is grounded when its bottom face is within eps of the ground.
- A rests on B when A's bottom is within eps of B's top and their
  footprints overlap on both x and z.
"""
from __future__ import annotations

from ..constants import SUPPORT_EPS
from ..types import Body


def intervals_overlap(a_min: float, a_max: float, b_min: float, b_max: float) -> bool:
    """Closed interval intersection: touching edges count as overlap."""
    return not (a_max < b_min or b_max < a_min)


def footprints_overlap(a: Body, b: Body) -> bool:
    """True if the x and z footprints of a and b both overlap."""
    ax0, ax1, az0, az1 = a.footprint
    bx0, bx1, bz0, bz1 = b.footprint
    return intervals_overlap(ax0, ax1, bx0, bx1) and intervals_overlap(az0, az1, bz0, bz1)


def is_grounded(body: Body, eps: float = SUPPORT_EPS) -> bool:
    """True if the body's bottom face lies on the ground plane (within eps)."""
    return abs(float(body.position[1]) - body.half_height) < eps


def vertically_adjacent(upper: Body, lower: Body, eps: float = SUPPORT_EPS) -> bool:
    """True if lower's top face is within eps of upper's bottom face."""
    return abs(upper.bottom - lower.top) < eps


def rests_on(upper: Body, lower: Body, eps: float = SUPPORT_EPS) -> bool:
    """True if upper is supported by lower."""
    return vertically_adjacent(upper, lower, eps) and footprints_overlap(upper, lower)
