# MIT License (see LICENSE)
"""
Aggregate quantities over a structure and its stress results.

Used for simulation summaries and for checking results in tests: the
counts and extrema here must agree with the per-body side table.
"""
from __future__ import annotations
from typing import Iterable, Sequence

from ..constants import GRAVITY
from ..types import Body


def failed_count(ratios_failed: Iterable[tuple[float, bool]]) -> int:
    """Number of (ratio, failed) pairs flagged as failed."""
    return sum(1 for _, failed in ratios_failed if failed)


def max_stress_ratio(ratios: Iterable[float]) -> float:
    """Largest stress ratio, 0.0 for an empty structure."""
    return max(ratios, default=0.0)


def mean_stress_ratio(ratios: Sequence[float]) -> float:
    """Average stress ratio, 0.0 for an empty structure."""
    if not ratios:
        return 0.0
    return sum(ratios) / len(ratios)


def total_mass(bodies: Iterable[Body]) -> float:
    """
    Total mass of a structure in kg.

    M = Σ ρ_i V_i
    """
    return sum(b.mass for b in bodies)


def total_weight(bodies: Iterable[Body], gravity: float = GRAVITY) -> float:
    """Total self-weight in N."""
    return total_mass(bodies) * gravity
