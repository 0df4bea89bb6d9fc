# MIT License (see LICENSE)
"""
Renderer adapters for the stress overlay.

The engine has no rendering dependency. A renderer receives, per body, the
geometry (with its deformed scale), the run state and the ramp color, and
draws however its backend likes.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TextIO
import sys

from ..coloring import Color, to_hex
from ..types import Body, Cuboid, Cylinder

if TYPE_CHECKING:
    from ..engine import BodyState, StressEngine


class RendererAdapter(ABC):
    """
    Abstract base class for stress overlay renderers.

    Usage:
        renderer.begin_frame(engine.summary())
        for body in engine.bodies:
            renderer.draw_body(body, engine.state(body.id), engine.body_color(body.id))
        renderer.end_frame()

    Or use the convenience method:
        renderer.render_engine(engine)
    """

    @abstractmethod
    def begin_frame(self, summary: dict[str, float]) -> None:
        """Begin a frame; summary is StressEngine.summary()."""
        ...

    @abstractmethod
    def draw_body(self, body: Body, state: "BodyState", color: Color) -> None:
        """Draw one body with its run state and base color."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def render_engine(self, engine: "StressEngine") -> None:
        """Render all registered bodies of an engine."""
        self.begin_frame(engine.summary())
        for body in engine.bodies:
            self.draw_body(body, engine.state(body.id), engine.body_color(body.id))
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Text renderer for development and testing.

    Output:
        === Stress overlay: 1/2 failed, max 134.2% ===
        [1] Cube 1.00x1.00x1.00 steel @ (0.00, 0.50, 0.00) 11.1% compression #32ff00
        [2] Cylinder r=0.25 h=2.00 concrete @ (0.00, 2.00, 0.00) 134.2% tension #ff0000 FAILED
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, summary: dict[str, float]) -> None:
        self.output.write(
            f"=== Stress overlay: {summary['failed_bodies']}/{summary['total_bodies']} failed, "
            f"max {100.0 * summary['max_stress_ratio']:.1f}% ===\n"
        )

    def draw_body(self, body: Body, state: "BodyState", color: Color) -> None:
        shape = body.shape
        if isinstance(shape, Cuboid):
            hx, hy, hz = shape.half_extents
            shape_str = f"Cube {2*hx:.2f}x{2*hy:.2f}x{2*hz:.2f}"
        elif isinstance(shape, Cylinder):
            shape_str = f"Cylinder r={shape.radius:.2f} h={2*shape.half_height:.2f}"
        else:
            shape_str = f"Shape({type(shape).__name__})"

        x, y, z = (float(v) for v in body.position)
        line = f"[{body.id}] {shape_str} {body.material.kind.value} @ ({x:.2f}, {y:.2f}, {z:.2f})"
        line += f" {100.0 * state.stress_ratio:.1f}%"
        if self.verbose:
            kind = state.force_type.value if state.force_type is not None else "-"
            line += f" {kind} {to_hex(color)}"
            if state.deformation_factor != 1.0:
                line += f" x{state.deformation_factor:.3f}"
        if state.failed:
            line += " FAILED"
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer (placeholder, benchmarks)."""

    def begin_frame(self, summary: dict[str, float]) -> None:
        pass

    def draw_body(self, body: Body, state: "BodyState", color: Color) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Records frames as plain data, including per-vertex colors.

    Vertex colors need the per-point field, so this renderer holds the
    engine while a frame is being recorded.

    Example:
        renderer = BufferedRenderer()
        engine.run_simulation(force)
        renderer.render_engine(engine)
        frame = renderer.frames[-1]
        frame["bodies"][0]["vertex_colors"]   # list of [r, g, b]
    """

    def __init__(self) -> None:
        self.frames: list[dict[str, Any]] = []
        self._current_frame: dict[str, Any] | None = None
        self._engine: "StressEngine" | None = None

    def render_engine(self, engine: "StressEngine") -> None:
        self._engine = engine
        try:
            super().render_engine(engine)
        finally:
            self._engine = None

    def begin_frame(self, summary: dict[str, float]) -> None:
        self._current_frame = {"summary": dict(summary), "bodies": []}

    def draw_body(self, body: Body, state: "BodyState", color: Color) -> None:
        if self._current_frame is None:
            return
        record = {
            "id": body.id,
            "position": body.position.tolist(),
            "scale": body.scale.tolist(),
            "stress_ratio": state.stress_ratio,
            "failed": state.failed,
            "color": list(color),
        }
        if self._engine is not None:
            record["vertices"] = body.sample_points().tolist()
            record["vertex_colors"] = self._engine.vertex_colors(body.id).tolist()
        self._current_frame["bodies"].append(record)

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
