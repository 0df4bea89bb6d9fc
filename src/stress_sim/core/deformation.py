# MIT License (see LICENSE)
"""
Exaggerated visual deformation.

Not elastic displacement: a uniform scale that grows with the stress ratio
so that loaded bodies read as "swelling" in the overlay.

  factor = 1 + ratio * DEFORMATION_GAIN * scale_factor
"""
from __future__ import annotations
import math

from ..constants import DEFORMATION_GAIN
from ..types import Body, BoundaryCondition


def deformation_factor(stress_ratio: float, scale_factor: float) -> float:
    """Uniform scale multiplier for a stress ratio; 1.0 if the result is not finite."""
    factor = 1.0 + stress_ratio * DEFORMATION_GAIN * scale_factor
    return factor if math.isfinite(factor) else 1.0


def deforms(body: Body) -> bool:
    """Fixed bodies are anchors and never deform."""
    return body.boundary is not BoundaryCondition.FIXED
