# MIT License (see LICENSE)
"""
The stress engine: body registry and simulation runs.

StressEngine is the container the surrounding application talks to. It
manages:
- The registered bodies, keyed by the handle returned from add_body().
- A side table of per-body run state (stress ratio, failure, deformation,
  and the position/scale recorded at registration).
- The active force of the last run.

A run reads geometry and the force only; all writes go to the side table
and to the visual scale of each body. Support validation and repair are
available on the same registry, independently of any force.

Structure:
    - User creates a StressEngine.
    - User registers bodies via add_body().
    - Optionally validate() / fix_floating().
    - run_simulation(force) returns a SimulationResult.
    - reset_simulation() or clear_vectors() between runs.
"""
from __future__ import annotations
from contextlib import nullcontext
from dataclasses import dataclass, field
import logging

import numpy as np

from .coloring import Color, stress_color, stress_colors
from .config import EngineConfig
from .core.deformation import deformation_factor, deforms
from .core.invariants import failed_count, max_stress_ratio, mean_stress_ratio, total_mass
from .core.stress import evaluate_bodies, point_stress_field
from .materials import ForceType, MaterialKind, properties
from .profiler import Profiler
from .support.validator import ValidationResult, fix, validate
from .types import Body, BoundaryCondition, ForceDescriptor, boundary_condition
from .util import f64

logger = logging.getLogger(__name__)


@dataclass
class BodyState:
    """
    Mutable per-body run state, kept apart from geometry.

    Attributes:
        original_position: Position at registration (or after a support fix).
        original_scale: Scale at registration.
        stress_ratio: Result of the last run, 0.0 after reset.
        failed: stress_ratio >= 1.0.
        force_type: Classification of the last run, None after reset.
        deformation_factor: Current visual scale multiplier.
    """
    original_position: np.ndarray
    original_scale: np.ndarray
    stress_ratio: float = 0.0
    failed: bool = False
    force_type: ForceType | None = None
    deformation_factor: float = 1.0

    def reset(self) -> None:
        self.stress_ratio = 0.0
        self.failed = False
        self.force_type = None
        self.deformation_factor = 1.0


@dataclass(frozen=True)
class BodyResult:
    stress_ratio: float
    failed: bool
    force_type: ForceType


@dataclass(frozen=True)
class SimulationResult:
    """
    Outcome of one run.

    Attributes:
        total_bodies: Number of bodies evaluated.
        failed_count: Bodies with stress_ratio >= 1.0.
        max_stress_ratio: Largest ratio (0.0 for an empty engine).
        per_body: Body id -> BodyResult.
    """
    total_bodies: int
    failed_count: int
    max_stress_ratio: float
    per_body: dict[int, BodyResult] = field(default_factory=dict)


@dataclass
class StressEngine:
    """
    Heuristic structural stress simulation over a set of bodies.

    Attributes:
        config: Tunable constants (force scale, gravity, support tolerance...).
        profiler: Optional Profiler for phase timings.
        active_force: Force of the last run, None after clear_vectors().
        deformation_scale: Exaggeration used by run_simulation(); starts at
                           config.deformation_scale.
    """
    config: EngineConfig = field(default_factory=EngineConfig)
    profiler: Profiler | None = None
    active_force: ForceDescriptor | None = None

    # Internal state
    _bodies: dict[int, Body] = field(default_factory=dict, repr=False)
    _states: dict[int, BodyState] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self.deformation_scale = float(self.config.deformation_scale)
        self._next_id = 1

    def _section(self, name: str):
        return self.profiler.section(name) if self.profiler else nullcontext()

    # -- registry ------------------------------------------------------------

    def add_body(
        self,
        body: Body,
        material: MaterialKind | str | None = None,
        boundary: BoundaryCondition | str | None = None,
    ) -> int:
        """
        Register a body and record its current position and scale.

        Args:
            body: The body to add. Its id is overwritten.
            material: Optional material override.
            boundary: Optional boundary condition override.

        Returns:
            The assigned body id.
        """
        if material is not None:
            body.material = properties(material)
        if boundary is not None:
            body.boundary = boundary_condition(boundary)

        body.id = self._next_id
        self._next_id += 1
        self._bodies[body.id] = body
        self._states[body.id] = BodyState(
            original_position=body.position.copy(),
            original_scale=body.scale.copy(),
        )
        return body.id

    def add_bodies(self, bodies) -> list[int]:
        """Register several bodies; returns their ids in order."""
        return [self.add_body(b) for b in bodies]

    def remove_body(self, body_id: int) -> Body:
        """
        Deregister a body.

        Raises:
            KeyError: If no body has this id.
        """
        body = self._bodies.pop(body_id)
        del self._states[body_id]
        return body

    def get_body(self, body_id: int) -> Body:
        return self._bodies[body_id]

    def state(self, body_id: int) -> BodyState:
        return self._states[body_id]

    @property
    def bodies(self) -> list[Body]:
        """Registered bodies in registration order."""
        return list(self._bodies.values())

    def __len__(self) -> int:
        return len(self._bodies)

    # -- simulation ------------------------------------------------------------

    def run_simulation(
        self,
        force: ForceDescriptor,
        force_type: ForceType | None = None,
        deform: bool = True,
    ) -> SimulationResult:
        """
        Evaluate every registered body under one force.

        Stores the force as the active force, fills the side table and, unless
        deform is False, applies deformation with deformation_scale.

        Args:
            force: The applied force.
            force_type: Evaluate all bodies as this load type (e.g. BENDING)
                        instead of classifying by alignment.
            deform: Apply visual deformation after the run.

        Returns:
            SimulationResult with per-body ratios keyed by body id.
        """
        self.active_force = force
        bodies = self.bodies
        logger.info("Running stress simulation on %d bodies", len(bodies))

        with self._section("stress"):
            samples = evaluate_bodies(
                bodies,
                force,
                force_scale=self.config.force_scale,
                gravity=self.config.gravity,
                alignment_threshold=self.config.alignment_threshold,
                force_type=force_type,
            )

        per_body: dict[int, BodyResult] = {}
        for body, sample in zip(bodies, samples):
            st = self._states[body.id]
            st.stress_ratio = sample.stress_ratio
            st.failed = sample.failed
            st.force_type = sample.force_type
            per_body[body.id] = BodyResult(sample.stress_ratio, sample.failed, sample.force_type)
            logger.debug(
                "Body %d: %s | dist=%.2f align=%.2f force=%.0f | %s %.1f%% %s",
                body.id, body.material_info(), sample.distance, sample.alignment,
                sample.effective_force, sample.force_type.value,
                100.0 * sample.stress_ratio, "FAILED" if sample.failed else "safe",
            )

        if deform:
            self.apply_deformation()

        ratios = [r.stress_ratio for r in per_body.values()]
        result = SimulationResult(
            total_bodies=len(per_body),
            failed_count=failed_count((r.stress_ratio, r.failed) for r in per_body.values()),
            max_stress_ratio=max_stress_ratio(ratios),
            per_body=per_body,
        )
        logger.info("Simulation complete: %d/%d bodies failed", result.failed_count, result.total_bodies)
        return result

    def set_deformation_scale(self, scale: float) -> None:
        """Change the exaggeration used by later runs (does not re-deform)."""
        self.deformation_scale = float(scale)

    def apply_deformation(self, scale_factor: float | None = None) -> None:
        """
        Scale every non-fixed body by 1 + ratio * 0.1 * scale_factor.

        Scaling is relative to the scale recorded at registration, so
        repeated calls do not compound.
        """
        s = self.deformation_scale if scale_factor is None else float(scale_factor)
        with self._section("deformation"):
            for body_id, body in self._bodies.items():
                if not deforms(body):
                    continue
                st = self._states[body_id]
                st.deformation_factor = deformation_factor(st.stress_ratio, s)
                body.scale = st.original_scale * st.deformation_factor

    def reset_deformation(self) -> None:
        """Restore every body's recorded scale and position exactly."""
        for body_id, body in self._bodies.items():
            st = self._states[body_id]
            body.scale = st.original_scale.copy()
            body.position = st.original_position.copy()
            st.deformation_factor = 1.0

    def reset_simulation(self) -> None:
        """Zero all results and visual state; bodies stay registered."""
        self.reset_deformation()
        for st in self._states.values():
            st.reset()
        logger.info("Simulation reset")

    def clear_vectors(self) -> None:
        """Reset the simulation and forget the active force."""
        self.active_force = None
        self.reset_simulation()
        logger.info("Active force cleared")

    # -- visualization ---------------------------------------------------------

    def vertex_stresses(self, body_id: int, points=None) -> np.ndarray:
        """
        Per-point stress on a body, shape (N,).

        Args:
            body_id: Registered body.
            points: (N, 3) world points; defaults to body.sample_points().

        Without an active force every point gets the body's own ratio.
        """
        body = self._bodies[body_id]
        st = self._states[body_id]
        pts = body.sample_points() if points is None else f64(points).reshape(-1, 3)
        if self.active_force is None:
            return np.full(len(pts), st.stress_ratio, dtype=np.float64)
        return point_stress_field(pts, body.position, st.stress_ratio, self.active_force.origin)

    def point_stress(self, body_id: int, point) -> float:
        """Stress at one world point of a body."""
        return float(self.vertex_stresses(body_id, f64(point).reshape(1, 3))[0])

    def vertex_colors(self, body_id: int, points=None) -> np.ndarray:
        """Ramp colors of vertex_stresses(), shape (N, 3); all red if the body failed."""
        return stress_colors(self.vertex_stresses(body_id, points), self._states[body_id].failed)

    def body_color(self, body_id: int) -> Color:
        st = self._states[body_id]
        return stress_color(st.stress_ratio, st.failed)

    # -- summaries -------------------------------------------------------------

    def summary(self) -> dict[str, float]:
        """
        Current totals from the side table.

        Keys: total_bodies, failed_bodies, safe_bodies, max_stress_ratio,
        average_stress_ratio, total_mass.
        """
        ratios = [st.stress_ratio for st in self._states.values()]
        failed = failed_count((st.stress_ratio, st.failed) for st in self._states.values())
        return {
            "total_bodies": len(ratios),
            "failed_bodies": failed,
            "safe_bodies": len(ratios) - failed,
            "max_stress_ratio": max_stress_ratio(ratios),
            "average_stress_ratio": mean_stress_ratio(ratios),
            "total_mass": total_mass(self._bodies.values()),
        }

    def summary_text(self) -> str:
        s = self.summary()
        total = s["total_bodies"]
        pct = 100.0 * s["failed_bodies"] / total if total else 0.0
        return "\n".join([
            "Simulation Summary:",
            "-" * 24,
            f"Total bodies: {total}",
            f"Failed: {s['failed_bodies']} ({pct:.1f}%)",
            f"Average stress: {100.0 * s['average_stress_ratio']:.1f}%",
            f"Max stress: {100.0 * s['max_stress_ratio']:.1f}%",
            f"Safe: {s['safe_bodies']}",
            "",
            "Structure has failures!" if s["failed_bodies"] else "Structure is safe",
        ])

    # -- support graph -----------------------------------------------------------

    def validate(self) -> ValidationResult:
        """Validate registered bodies; issue indices refer to self.bodies order."""
        with self._section("validate"):
            return validate(self.bodies, self.config.support_eps)

    def fix_floating(self) -> list[int]:
        """
        Reposition floating registered bodies.

        The corrected y is written to each body and to its recorded original
        position, so reset_deformation() keeps the fix.

        Returns:
            Ids of moved bodies.
        """
        bodies = self.bodies
        with self._section("fix"):
            result = fix(bodies, self.config.support_eps)
        moved = []
        for i in result.moved:
            body = bodies[i]
            y = float(result.bodies[i].position[1])
            body.position[1] = y
            self._states[body.id].original_position[1] = y
            moved.append(body.id)
        return moved
