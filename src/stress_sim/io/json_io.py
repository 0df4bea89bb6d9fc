# MIT License (see LICENSE)
"""
JSON structure format and upstream geometry validation.

The geometry provider hands over structures as JSON. Invalid geometry is
rejected here, before it reaches the engine, so the engine never has to
guess what a NaN coordinate or a negative size should mean.

JSON Schema Overview:
---------------------
{
  "blocks": [
    {
      "type": "cube" | "cylinder",   # Required
      "pos": [x, y, z],              # Required, centroid in meters (y up)
      "size": [w, h, d],             # Required; cylinder: [diameter, height, diameter]
      "material": string,            # Optional: steel|concrete|wood|aluminum (default steel)
      "boundary": string             # Optional: free|pinned|fixed (default free)
    }
  ],
  "force": {                         # Optional
    "origin": [x, y, z],
    "direction": [x, y, z],          # Normalized on load
    "magnitude": float
  }
}
"""
from __future__ import annotations
import json
import math
from typing import TYPE_CHECKING, Any

import numpy as np

from ..coloring import to_hex
from ..types import Body, Cuboid, Cylinder, ForceDescriptor

if TYPE_CHECKING:
    from ..engine import SimulationResult, StressEngine


# Plausibility limits for provider geometry.
MIN_DIMENSION = 0.1
MAX_DIMENSION = 20.0
MAX_ASPECT_RATIO = 20.0
MAX_COORDINATE = 50.0
MAX_BLOCKS = 100
MAX_SPAN = 30.0


class GeometryError(ValueError):
    """
    Raised when provider geometry fails validation.

    Attributes:
        errors: One message per problem found.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "invalid geometry")


def _is_vec3(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and len(value) == 3


def _finite(values) -> bool:
    try:
        return all(math.isfinite(float(v)) for v in values)
    except (TypeError, ValueError):
        return False


def validate_block(block: dict[str, Any]) -> list[str]:
    """
    Check one block dict; returns a list of error messages (empty if valid).

    Checks shape type, vector arity, finite numbers, dimensions in
    [0.1, 20] m, height/base aspect ratio <= 20 and position within ±50 m.
    """
    errors: list[str] = []
    if block.get("type") not in ("cube", "cylinder"):
        errors.append('Block type must be "cube" or "cylinder"')

    pos = block.get("pos")
    size = block.get("size")
    if not _is_vec3(pos):
        errors.append("Block pos must be [x, y, z]")
        pos = None
    if not _is_vec3(size):
        errors.append("Block size must be [width, height, depth]")
        size = None

    if size is not None:
        if not _finite(size):
            errors.append("Size contains invalid numbers (NaN or Infinity)")
        else:
            w, h, d = (float(v) for v in size)
            if w <= 0 or h <= 0 or d <= 0:
                errors.append("All dimensions must be positive")
            elif min(w, h, d) < MIN_DIMENSION:
                errors.append(f"Dimensions too small (minimum {MIN_DIMENSION}m)")
            if max(w, h, d) > MAX_DIMENSION:
                errors.append(f"Dimensions too large (maximum {MAX_DIMENSION}m)")
            base = max(w, d)
            if base > 0 and h / base > MAX_ASPECT_RATIO:
                errors.append(f"Aspect ratio too extreme (height/base > {MAX_ASPECT_RATIO:g})")

    if pos is not None:
        if not _finite(pos):
            errors.append("Position contains invalid numbers (NaN or Infinity)")
        elif any(abs(float(v)) > MAX_COORDINATE for v in pos):
            errors.append(f"Position out of reasonable bounds (±{MAX_COORDINATE:g}m)")

    return errors


def validate_blocks(blocks: Any) -> list[str]:
    """
    Validate a whole block list; per-block messages are prefixed with the
    block index. Centroids may spread at most MAX_SPAN on each axis.
    """
    if not isinstance(blocks, list):
        return ["Structure must be a list of blocks"]
    if not blocks:
        return ["Structure must contain at least one block"]
    if len(blocks) > MAX_BLOCKS:
        return [f"Structure too complex (maximum {MAX_BLOCKS} blocks)"]

    errors: list[str] = []
    positions = []
    for i, block in enumerate(blocks):
        if not isinstance(block, dict):
            errors.append(f"Block {i}: must be an object")
            continue
        errors.extend(f"Block {i}: {e}" for e in validate_block(block))
        pos = block.get("pos")
        if _is_vec3(pos) and _finite(pos):
            positions.append([float(v) for v in pos])

    # Centroid spread only; a wide structure is likely disconnected.
    if positions:
        span = np.ptp(np.array(positions), axis=0)
        if (span > MAX_SPAN).any():
            errors.append(f"Structure spans too large an area (more than {MAX_SPAN:g}m on an axis)")
    return errors


def body_from_json(block: dict[str, Any]) -> Body:
    """
    Construct a Body from a block dict.

    Raises:
        GeometryError: If the block fails validate_block().
        ValueError: If material or boundary names are unknown.
    """
    errors = validate_block(block)
    if errors:
        raise GeometryError(errors)

    w, h, d = (float(v) for v in block["size"])
    if block["type"] == "cylinder":
        shape = Cylinder.from_size(w, h)
    else:
        shape = Cuboid.from_size(w, h, d)

    return Body(
        shape=shape,
        position=tuple(float(v) for v in block["pos"]),
        material=block.get("material", "steel"),
        boundary=block.get("boundary", "free"),
    )


def bodies_from_json(blocks: Any) -> list[Body]:
    """
    Construct all bodies of a block list.

    Raises:
        GeometryError: With every error found across the list.
    """
    errors = validate_blocks(blocks)
    if errors:
        raise GeometryError(errors)
    return [body_from_json(b) for b in blocks]


def body_to_json(body: Body) -> dict[str, Any]:
    """Serialize a Body to a block dict (inverse of body_from_json)."""
    shape = body.shape
    if isinstance(shape, Cylinder):
        diameter = 2.0 * shape.radius
        data = {"type": "cylinder", "size": [diameter, 2.0 * shape.half_height, diameter]}
    elif isinstance(shape, Cuboid):
        hx, hy, hz = shape.half_extents
        data = {"type": "cube", "size": [2.0 * hx, 2.0 * hy, 2.0 * hz]}
    else:
        raise TypeError(f"Unknown shape type: {type(shape)}")

    data["pos"] = _to_list(body.position)
    data["material"] = body.material.kind.value
    data["boundary"] = body.boundary.value
    return data


def force_from_json(data: dict[str, Any]) -> ForceDescriptor:
    """
    Construct a ForceDescriptor.

    Raises:
        ValueError: If origin/direction are not finite 3-vectors, the
                    magnitude is not a finite non-negative number, or the
                    direction is zero.
    """
    origin = data.get("origin")
    direction = data.get("direction")
    if not (_is_vec3(origin) and _finite(origin)):
        raise ValueError("Force origin must be a finite [x, y, z]")
    if not (_is_vec3(direction) and _finite(direction)):
        raise ValueError("Force direction must be a finite [x, y, z]")
    if not any(float(v) != 0.0 for v in direction):
        raise ValueError("Force direction must be non-zero")
    magnitude = data.get("magnitude")
    if not _finite([magnitude]) or float(magnitude) < 0.0:
        raise ValueError("Force magnitude must be a finite, non-negative number")
    return ForceDescriptor(
        origin=[float(v) for v in origin],
        direction=[float(v) for v in direction],
        magnitude=float(magnitude),
    )


def force_to_json(force: ForceDescriptor) -> dict[str, Any]:
    return {
        "origin": _to_list(force.origin),
        "direction": _to_list(force.direction),
        "magnitude": force.magnitude,
    }


def load_structure_raw(path: str) -> dict[str, Any]:
    """Load raw JSON data from a structure file."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_structure(path: str) -> tuple[list[Body], ForceDescriptor | None]:
    """
    Load bodies and the optional force from a structure file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        GeometryError: If the blocks fail validation.
        ValueError: If the force is malformed.
    """
    data = load_structure_raw(path)
    bodies = bodies_from_json(data.get("blocks"))
    force = force_from_json(data["force"]) if data.get("force") is not None else None
    return bodies, force


def structure_to_json(bodies: list[Body], force: ForceDescriptor | None = None) -> dict[str, Any]:
    result: dict[str, Any] = {"blocks": [body_to_json(b) for b in bodies]}
    if force is not None:
        result["force"] = force_to_json(force)
    return result


def save_structure(bodies: list[Body], path: str, force: ForceDescriptor | None = None, indent: int = 2) -> None:
    """Save bodies (and optionally a force) to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(structure_to_json(bodies, force), f, indent=indent)


def results_to_json(engine: "StressEngine", result: "SimulationResult") -> dict[str, Any]:
    """
    Renderer-facing view of a run: summary plus per-body ratio, flag,
    load type, color and deformation scale.
    """
    per_body = []
    for body_id, r in result.per_body.items():
        st = engine.state(body_id)
        per_body.append({
            "id": body_id,
            "stress_ratio": r.stress_ratio,
            "failed": r.failed,
            "force_type": r.force_type.value,
            "color": to_hex(engine.body_color(body_id)),
            "deformation": st.deformation_factor,
        })
    return {
        "total_bodies": result.total_bodies,
        "failed_bodies": result.failed_count,
        "max_stress_ratio": result.max_stress_ratio,
        "bodies": per_body,
    }


def _to_list(arr: Any) -> list[float]:
    """Helper: Convert numpy array or tuple to a clean list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return list(arr)
