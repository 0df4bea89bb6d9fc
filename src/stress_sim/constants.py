# MIT License (see LICENSE)
"""
Physical and heuristic constants used throughout the stress engine.

Physical values use SI units. The heuristic values are empirical choices made
for visual plausibility at room-to-building scale; they are not derived from
physics and are meant to be overridden through EngineConfig when a scene needs
a different calibration.
"""
from __future__ import annotations

# Standard gravitational acceleration, m/s².
GRAVITY: float = 9.81

# Unit conversion from scene "force units" at 1 m to Pascal-scale load.
# Chosen so that magnitudes in the 0.5-5 range give stress ratios around 0-2
# against the material limits in materials.py.
FORCE_SCALE: float = 1e8

# Distances below 1 m are treated as 1 m in the inverse-square falloff.
MIN_FALLOFF_DISTANCE: float = 1.0

# Vertical adjacency tolerance for the support test, in meters.
SUPPORT_EPS: float = 0.1

# |alignment| above this is axial (compression or tension), otherwise shear.
ALIGNMENT_THRESHOLD: float = 0.7

# stress_ratio >= FAILURE_RATIO marks a body as failed.
FAILURE_RATIO: float = 1.0

# Per-point field: centroid distances below this use a local ratio of 1.0.
MIN_CENTROID_DISTANCE: float = 0.01
POINT_MULTIPLIER_MIN: float = 0.5
POINT_MULTIPLIER_MAX: float = 1.5
POINT_STRESS_CAP: float = 2.0

# Visual scale gain: factor = 1 + ratio * DEFORMATION_GAIN * scale_factor.
DEFORMATION_GAIN: float = 0.1
DEFAULT_DEFORMATION_SCALE: float = 5.0

# Samples per rim when generating field points on a cylinder.
CYLINDER_RIM_SAMPLES: int = 8
