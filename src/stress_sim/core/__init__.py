# MIT License (see LICENSE)
"""
Core stress computations.

This subpackage provides:
    - Stress kernels: force classification, per-body stress, per-point field.
    - Deformation: visual scale factor from a stress ratio.
    - Invariants: aggregate counts and totals over a structure.

Typical usage:
    from stress_sim.core import evaluate_bodies

    samples = evaluate_bodies(bodies, force)
    worst = max(s.stress_ratio for s in samples)
"""
from .stress import (
    StressSample,
    classify_force,
    effective_force,
    evaluate_bodies,
    body_stress,
    point_stress,
    point_stress_field,
)
from .deformation import deformation_factor, deforms
from .invariants import (
    failed_count,
    max_stress_ratio,
    mean_stress_ratio,
    total_mass,
    total_weight,
)

__all__ = [
    # Stress
    "StressSample",
    "classify_force",
    "effective_force",
    "evaluate_bodies",
    "body_stress",
    "point_stress",
    "point_stress_field",
    # Deformation
    "deformation_factor",
    "deforms",
    # Invariants
    "failed_count",
    "max_stress_ratio",
    "mean_stress_ratio",
    "total_mass",
    "total_weight",
]
