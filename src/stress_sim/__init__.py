# MIT License (see LICENSE)
"""
stress_sim - Heuristic structural stress and support-graph engine.

Given a structure of rigid boxes and cylinders and a single force vector,
this package produces a fast, deterministic stress assessment for a color /
deformation overlay, and checks that every body is actually supported.
It is not a finite-element solver.

Main entry points:
    - StressEngine: Body registry and simulation runs.
    - Body, Cuboid, Cylinder: Structure geometry.
    - ForceDescriptor: The applied force.
    - MaterialKind, properties: Material catalog.
    - validate, fix: Support-graph validation and repair.
    - stress_color: Stress ratio to RGB ramp.

Submodules:
    - core: Stress kernels, deformation, aggregate quantities.
    - support: Support predicates and the validator.
    - io: JSON structure format and upstream geometry validation.
    - renderer: Optional visualization adapters.

Example:
    from stress_sim import StressEngine, Body, Cuboid, ForceDescriptor

    engine = StressEngine()
    engine.add_body(Body(Cuboid((0.5, 0.5, 0.5)), position=(0, 0.5, 0)))
    result = engine.run_simulation(
        ForceDescriptor(origin=(0, 2, 0), direction=(0, -1, 0), magnitude=1.0)
    )
"""
from .engine import StressEngine, SimulationResult, BodyResult, BodyState
from .types import Body, Cuboid, Cylinder, BoundaryCondition, ForceDescriptor
from .materials import ForceType, MaterialKind, MaterialProperties, properties, all_materials
from .support import validate, fix, validation_report
from .coloring import Color, stress_color
from .config import EngineConfig
from .logging_config import setup_logging

__all__ = [
    # Engine
    "StressEngine",
    "SimulationResult",
    "BodyResult",
    "BodyState",
    "EngineConfig",
    # Geometry
    "Body",
    "Cuboid",
    "Cylinder",
    "BoundaryCondition",
    "ForceDescriptor",
    # Materials
    "ForceType",
    "MaterialKind",
    "MaterialProperties",
    "properties",
    "all_materials",
    # Support graph
    "validate",
    "fix",
    "validation_report",
    # Coloring
    "Color",
    "stress_color",
    # Logging
    "setup_logging",
]
