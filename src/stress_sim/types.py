# MIT License (see LICENSE)
"""
Core type definitions for the structural stress engine.

Defines the fundamental data structures:
- Shape primitives (Cuboid, Cylinder), axis-aligned, y is "up".
- BoundaryCondition: how a body is anchored.
- Body: one rigid primitive with its material, boundary condition and
  derived volume/mass.
- ForceDescriptor: the single applied force of a simulation run.

Geometry is read-only during a stress run. Per-run results (stress ratio,
failure flag, deformation) live in the engine's side table, not on Body.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

import numpy as np

from .constants import CYLINDER_RIM_SAMPLES
from .materials import ForceType, MaterialKind, MaterialProperties, properties
from .util import f64, unit


# =============================================================================
# Shape Definitions
# =============================================================================

@dataclass(frozen=True)
class Cuboid:
    """
    Axis-aligned box defined by half-extents.

    The box center is at the body's position; full size is twice each
    half-extent.

    Attributes:
        half_extents: (hx, hy, hz) in meters.
    """
    half_extents: tuple[float, float, float]

    @classmethod
    def from_size(cls, width: float, height: float, depth: float) -> "Cuboid":
        """Build from full width (x), height (y) and depth (z)."""
        return cls((0.5 * width, 0.5 * height, 0.5 * depth))


@dataclass(frozen=True)
class Cylinder:
    """
    Upright cylinder, axis along y.

    Attributes:
        radius: Radius in meters.
        half_height: Half of the cylinder height in meters.
    """
    radius: float
    half_height: float

    @classmethod
    def from_size(cls, diameter: float, height: float) -> "Cylinder":
        """Build from full diameter and height."""
        return cls(radius=0.5 * diameter, half_height=0.5 * height)


# Union type for shape dispatch
Shape3D = Cuboid | Cylinder


class BoundaryCondition(str, Enum):
    """
    Support type of a body.

    FREE and PINNED bodies carry stress, self-weight and deformation.
    PINNED is reserved for rotational constraints and currently behaves
    like FREE. FIXED bodies are anchors: no deformation, no self-weight.
    """
    FREE = "free"
    PINNED = "pinned"
    FIXED = "fixed"


def boundary_condition(value: BoundaryCondition | str) -> BoundaryCondition:
    """Coerce a BoundaryCondition or its string name."""
    if isinstance(value, BoundaryCondition):
        return value
    try:
        return BoundaryCondition(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(b.value for b in BoundaryCondition)
        raise ValueError(f"Unknown boundary condition {value!r} (expected one of: {valid})") from None


# =============================================================================
# Body
# =============================================================================

@dataclass(eq=False)
class Body:
    """
    One rigid primitive participating in a structure.

    Attributes:
        shape: Geometry (Cuboid or Cylinder), centered on position.
        position: World-space centroid [x, y, z] in meters.
        material: Catalog material record, shared by reference.
        boundary: Boundary condition (default FREE).
        scale: Visual scale multiplier per axis. Only deformation touches it.
        id: Handle assigned by StressEngine.add_body(); -1 until registered.

    Note:
        position and scale are converted to float64 arrays on init.
    """
    shape: Shape3D
    position: np.ndarray | tuple[float, float, float] = (0.0, 0.0, 0.0)
    material: MaterialProperties = field(default_factory=lambda: properties(MaterialKind.STEEL))
    boundary: BoundaryCondition = BoundaryCondition.FREE
    scale: np.ndarray | tuple[float, float, float] = (1.0, 1.0, 1.0)
    id: int = -1

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.scale = f64(self.scale)
        if isinstance(self.material, (MaterialKind, str)):
            self.material = properties(self.material)
        self.boundary = boundary_condition(self.boundary)

    # -- geometry ------------------------------------------------------------

    @property
    def half_height(self) -> float:
        if isinstance(self.shape, Cuboid):
            return float(self.shape.half_extents[1])
        if isinstance(self.shape, Cylinder):
            return float(self.shape.half_height)
        raise TypeError(f"Unknown shape type: {type(self.shape)}")

    @property
    def horizontal_half_extents(self) -> tuple[float, float]:
        """Half-extents of the footprint on x and z."""
        if isinstance(self.shape, Cuboid):
            hx, _, hz = self.shape.half_extents
            return float(hx), float(hz)
        if isinstance(self.shape, Cylinder):
            r = float(self.shape.radius)
            return r, r
        raise TypeError(f"Unknown shape type: {type(self.shape)}")

    @property
    def bottom(self) -> float:
        """World y of the bottom face."""
        return float(self.position[1]) - self.half_height

    @property
    def top(self) -> float:
        """World y of the top face."""
        return float(self.position[1]) + self.half_height

    @property
    def footprint(self) -> tuple[float, float, float, float]:
        """
        Horizontal bounding rectangle (x_min, x_max, z_min, z_max).

        Cylinders use their bounding square.
        """
        hx, hz = self.horizontal_half_extents
        x, z = float(self.position[0]), float(self.position[2])
        return (x - hx, x + hx, z - hz, z + hz)

    @property
    def volume(self) -> float:
        """
        Volume in m³ used for mass; cylinders use their bounding box.

          Cuboid:   V = 8 hx hy hz
          Cylinder: V = (2r)² h  (bounding box, h = 2 * half_height)
        """
        if isinstance(self.shape, Cuboid):
            hx, hy, hz = self.shape.half_extents
            return 8.0 * hx * hy * hz
        if isinstance(self.shape, Cylinder):
            r = self.shape.radius
            return 4.0 * r * r * 2.0 * self.shape.half_height
        raise TypeError(f"Unknown shape type: {type(self.shape)}")

    @property
    def mass(self) -> float:
        """Mass in kg: density × volume."""
        return self.material.density * self.volume

    def sample_points(self) -> np.ndarray:
        """
        World-space points for sampling the per-point stress field, shape (N, 3).

        Cuboid: the 8 corners followed by the centroid.
        Cylinder: a ring on the bottom and top rims followed by the centroid.
        """
        c = self.position
        if isinstance(self.shape, Cuboid):
            hx, hy, hz = self.shape.half_extents
            signs = np.array(
                [[sx, sy, sz] for sx in (-1, 1) for sy in (-1, 1) for sz in (-1, 1)],
                dtype=np.float64,
            )
            corners = c + signs * np.array([hx, hy, hz], dtype=np.float64)
            return np.vstack([corners, c])
        if isinstance(self.shape, Cylinder):
            r, hh = self.shape.radius, self.shape.half_height
            theta = np.linspace(0.0, 2.0 * np.pi, CYLINDER_RIM_SAMPLES, endpoint=False)
            ring = np.stack([r * np.cos(theta), np.zeros_like(theta), r * np.sin(theta)], axis=1)
            bottom = c + ring - np.array([0.0, hh, 0.0])
            top = c + ring + np.array([0.0, hh, 0.0])
            return np.vstack([bottom, top, c])
        raise TypeError(f"Unknown shape type: {type(self.shape)}")

    def copy(self) -> "Body":
        """Independent copy sharing the (immutable) shape and material."""
        return replace(self, position=self.position.copy(), scale=self.scale.copy())

    def material_info(self) -> str:
        """One-line description, e.g. 'steel | 7850.00kg | free'."""
        return f"{self.material.kind.value} | {self.mass:.2f}kg | {self.boundary.value}"


# =============================================================================
# Force
# =============================================================================

@dataclass(frozen=True)
class ForceDescriptor:
    """
    The single applied force of a simulation run.

    Attributes:
        origin: Point of application [x, y, z] in meters.
        direction: Direction of the force; normalized on init. A zero
                   direction stays zero and produces shear-only, zero load.
        magnitude: Force magnitude in scene force units, >= 0.
        id: Optional identifier from the force-input collaborator.

    Raises:
        ValueError: If magnitude is negative or NaN.
    """
    origin: np.ndarray | tuple[float, float, float]
    direction: np.ndarray | tuple[float, float, float]
    magnitude: float
    id: int = -1

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", f64(self.origin))
        object.__setattr__(self, "direction", unit(f64(self.direction)))
        magnitude = float(self.magnitude)
        if not magnitude >= 0.0:
            raise ValueError(f"Force magnitude must be non-negative, got {magnitude!r}")
        object.__setattr__(self, "magnitude", magnitude)


__all__ = [
    "Cuboid",
    "Cylinder",
    "Shape3D",
    "BoundaryCondition",
    "boundary_condition",
    "ForceType",
    "Body",
    "ForceDescriptor",
]
