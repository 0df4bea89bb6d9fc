# MIT License (see LICENSE)
"""
Engine configuration.

EngineConfig groups the tunable constants of a run. Defaults come from
constants.py; from_env() lets a deployment recalibrate without code changes:

  STRESS_SIM_FORCE_SCALE        K, Pa per force unit at 1 m
  STRESS_SIM_GRAVITY            g, m/s²
  STRESS_SIM_SUPPORT_EPS        support adjacency tolerance, m
  STRESS_SIM_DEFORMATION_SCALE  visual exaggeration factor
"""
from __future__ import annotations
from dataclasses import dataclass

from .constants import (
    ALIGNMENT_THRESHOLD,
    DEFAULT_DEFORMATION_SCALE,
    FORCE_SCALE,
    GRAVITY,
    SUPPORT_EPS,
)
from .util import env_float


@dataclass(frozen=True)
class EngineConfig:
    """
    Tunable parameters of the stress engine.

    Attributes:
        force_scale: Unit conversion constant K applied to the effective force.
        gravity: Gravitational acceleration for the self-weight term.
        support_eps: Vertical tolerance of the support test.
        alignment_threshold: |alignment| above which a load is axial.
        deformation_scale: Exaggeration applied by run_simulation().
    """
    force_scale: float = FORCE_SCALE
    gravity: float = GRAVITY
    support_eps: float = SUPPORT_EPS
    alignment_threshold: float = ALIGNMENT_THRESHOLD
    deformation_scale: float = DEFAULT_DEFORMATION_SCALE

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Defaults overridden by STRESS_SIM_* environment variables."""
        return cls(
            force_scale=env_float("STRESS_SIM_FORCE_SCALE", FORCE_SCALE),
            gravity=env_float("STRESS_SIM_GRAVITY", GRAVITY),
            support_eps=env_float("STRESS_SIM_SUPPORT_EPS", SUPPORT_EPS),
            alignment_threshold=ALIGNMENT_THRESHOLD,
            deformation_scale=env_float("STRESS_SIM_DEFORMATION_SCALE", DEFAULT_DEFORMATION_SCALE),
        )
