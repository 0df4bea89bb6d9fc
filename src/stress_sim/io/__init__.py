# MIT License (see LICENSE)
"""
Input/Output utilities for structures.

This subpackage provides:
    - JSON structure format: blocks plus an optional force.
    - Upstream geometry validation (rejects NaN, non-positive or absurd sizes,
      over-wide structures).
    - Result export for renderers.

Typical usage:
    from stress_sim.io import load_structure

    bodies, force = load_structure("tower.json")
"""
from .json_io import (
    GeometryError,
    validate_block,
    validate_blocks,
    body_from_json,
    bodies_from_json,
    body_to_json,
    force_from_json,
    force_to_json,
    load_structure,
    load_structure_raw,
    save_structure,
    structure_to_json,
    results_to_json,
)

__all__ = [
    # Validation
    "GeometryError",
    "validate_block",
    "validate_blocks",
    # Loading
    "load_structure",
    "load_structure_raw",
    "body_from_json",
    "bodies_from_json",
    "force_from_json",
    # Saving
    "save_structure",
    "structure_to_json",
    "body_to_json",
    "force_to_json",
    "results_to_json",
]
