# MIT License (see LICENSE)
"""
Heuristic stress propagation from a single force vector.

This is not a finite-element solve. For every body:

  1. d         = |c - o|                 (c: centroid, o: force origin)
  2. a         = ((c - o) / d) · f̂        (alignment, in [-1, 1])
  3. falloff   = 1 / max(1, d²)
  4. F_eff     = |F| · |a| · falloff · K  (K: FORCE_SCALE, Pa per force unit)
  5. type      = compression if a > 0.7, tension if a < -0.7, else shear
  6. ratio     = F_eff / limit(type)
  7. ratio    += m g / σ_c                (self-weight, skipped for FIXED)
  8. failed    = ratio >= 1

Bodies are independent given the force, so evaluate_bodies() computes the
whole set with numpy array operations in one pass.

The per-point field refines a body's ratio for coloring: points nearer the
force origin than the centroid are amplified, farther ones attenuated:

  m(P)  = clamp(2 - |P - o| / |c - o|, 0.5, 1.5)
  s(P)  = min(ratio · m(P), 2)
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Sequence

import numpy as np

from ..constants import (
    ALIGNMENT_THRESHOLD,
    FAILURE_RATIO,
    FORCE_SCALE,
    GRAVITY,
    MIN_CENTROID_DISTANCE,
    MIN_FALLOFF_DISTANCE,
    POINT_MULTIPLIER_MAX,
    POINT_MULTIPLIER_MIN,
    POINT_STRESS_CAP,
)
from ..materials import ForceType
from ..types import Body, BoundaryCondition, ForceDescriptor
from ..util import f64

logger = logging.getLogger(__name__)

# Column order of the per-body limit table; index = classification code.
_TYPE_ORDER = (ForceType.COMPRESSION, ForceType.TENSION, ForceType.SHEAR, ForceType.BENDING)
_CODE = {t: i for i, t in enumerate(_TYPE_ORDER)}


@dataclass(frozen=True)
class StressSample:
    """
    Stress result for one body.

    Attributes:
        stress_ratio: Load-to-strength ratio (>= 0, 1.0 = failure threshold).
        failed: stress_ratio >= 1.0.
        force_type: Governing load classification.
        alignment: Cosine between origin→centroid and the force direction.
        distance: Centroid distance from the force origin in meters.
        effective_force: Scaled load before division by the limit.
    """
    stress_ratio: float
    failed: bool
    force_type: ForceType
    alignment: float
    distance: float
    effective_force: float


def classify_force(alignment: float, threshold: float = ALIGNMENT_THRESHOLD) -> ForceType:
    """Compression when the force points at the body, tension when away, else shear."""
    if alignment > threshold:
        return ForceType.COMPRESSION
    if alignment < -threshold:
        return ForceType.TENSION
    return ForceType.SHEAR


def _alignment_and_distance(centroids: np.ndarray, force: ForceDescriptor) -> tuple[np.ndarray, np.ndarray]:
    offsets = centroids - force.origin
    distance = np.sqrt(np.einsum("ij,ij->i", offsets, offsets))
    with np.errstate(invalid="ignore", divide="ignore"):
        direction = np.where(distance[:, None] > 1e-12, offsets / distance[:, None], 0.0)
    return direction @ force.direction, distance


def effective_force(
    centroids: np.ndarray,
    force: ForceDescriptor,
    force_scale: float = FORCE_SCALE,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Scaled load reaching each centroid.

    Args:
        centroids: (N, 3) world positions.
        force: Applied force.
        force_scale: Unit conversion constant K.

    Returns:
        (effective, alignment, distance), each shape (N,).
    """
    centroids = f64(centroids).reshape(-1, 3)
    alignment, distance = _alignment_and_distance(centroids, force)
    falloff = 1.0 / np.maximum(MIN_FALLOFF_DISTANCE, distance * distance)
    effective = force.magnitude * np.abs(alignment) * falloff * force_scale
    return effective, alignment, distance


def evaluate_bodies(
    bodies: Sequence[Body],
    force: ForceDescriptor,
    *,
    force_scale: float = FORCE_SCALE,
    gravity: float = GRAVITY,
    alignment_threshold: float = ALIGNMENT_THRESHOLD,
    force_type: ForceType | None = None,
) -> list[StressSample]:
    """
    Stress ratio and failure flag for every body under one force.

    Args:
        bodies: Bodies to evaluate; only read.
        force: The active force.
        force_scale: Unit conversion constant K.
        gravity: Gravitational acceleration for the self-weight term.
        alignment_threshold: |alignment| above which a load is axial.
        force_type: Force every body to this classification (e.g. BENDING)
                    instead of classifying by alignment.

    Returns:
        One StressSample per body, in input order.
    """
    n = len(bodies)
    if n == 0:
        return []

    centroids = np.array([b.position for b in bodies], dtype=np.float64).reshape(n, 3)
    effective, alignment, distance = effective_force(centroids, force, force_scale)

    if force_type is None:
        codes = np.where(
            alignment > alignment_threshold, _CODE[ForceType.COMPRESSION],
            np.where(alignment < -alignment_threshold, _CODE[ForceType.TENSION], _CODE[ForceType.SHEAR]),
        )
    else:
        codes = np.full(n, _CODE[force_type])

    limits = np.array([[b.material.limit_for(t) for t in _TYPE_ORDER] for b in bodies], dtype=np.float64)
    limit = limits[np.arange(n), codes]
    ratio = effective / limit

    # Anchors carry no self-load.
    free = np.array([b.boundary is not BoundaryCondition.FIXED for b in bodies])
    self_load = np.array([b.mass * gravity / b.material.max_compression for b in bodies], dtype=np.float64)
    ratio = ratio + np.where(free, self_load, 0.0)

    bad = np.isnan(ratio)
    if bad.any():
        logger.warning("Non-finite stress for %d bodies treated as zero", int(bad.sum()))
        ratio = np.where(bad, 0.0, ratio)

    failed = ratio >= FAILURE_RATIO
    return [
        StressSample(
            stress_ratio=float(ratio[i]),
            failed=bool(failed[i]),
            force_type=_TYPE_ORDER[int(codes[i])],
            alignment=float(alignment[i]),
            distance=float(distance[i]),
            effective_force=float(effective[i]),
        )
        for i in range(n)
    ]


def body_stress(
    body: Body,
    force: ForceDescriptor,
    *,
    force_scale: float = FORCE_SCALE,
    gravity: float = GRAVITY,
    force_type: ForceType | None = None,
) -> StressSample:
    """Stress sample for a single body (see evaluate_bodies)."""
    return evaluate_bodies([body], force, force_scale=force_scale, gravity=gravity, force_type=force_type)[0]


def point_stress_field(
    points: np.ndarray,
    centroid: np.ndarray,
    stress_ratio: float,
    force_origin: np.ndarray,
) -> np.ndarray:
    """
    Per-point stress for points on one body.

    Args:
        points: (N, 3) world-space sample points.
        centroid: Body centroid.
        stress_ratio: The body's stress ratio.
        force_origin: Origin of the active force.

    Returns:
        (N,) stresses in [0, POINT_STRESS_CAP].
    """
    pts = f64(points).reshape(-1, 3)
    origin = f64(force_origin)
    d_points = np.linalg.norm(pts - origin, axis=1)
    d_center = float(np.linalg.norm(f64(centroid) - origin))
    if d_center > MIN_CENTROID_DISTANCE:
        local = d_points / d_center
    else:
        local = np.ones_like(d_points)
    multiplier = np.clip(2.0 - local, POINT_MULTIPLIER_MIN, POINT_MULTIPLIER_MAX)
    out = np.clip(stress_ratio * multiplier, 0.0, POINT_STRESS_CAP)
    return np.nan_to_num(out, nan=0.0)


def point_stress(point, centroid, stress_ratio: float, force_origin) -> float:
    """Stress at a single world-space point of a body."""
    return float(point_stress_field(f64(point).reshape(1, 3), centroid, stress_ratio, force_origin)[0])
