# MIT License (see LICENSE)
"""
Support-graph subsystem.

This subpackage provides:
    - Predicates: grounded / vertically adjacent / footprint overlap tests.
    - Validator: floating-body detection, support relations, reports.
    - Fix: sequential bottom-up repositioning of floating bodies.

Typical usage:
    from stress_sim.support import validate, fix

    result = validate(bodies)
    if not result.valid:
        bodies = fix(bodies).bodies
"""
from .predicates import (
    intervals_overlap,
    footprints_overlap,
    is_grounded,
    vertically_adjacent,
    rests_on,
)
from .validator import (
    SupportRelation,
    ValidationResult,
    FixResult,
    has_support,
    validate,
    fix,
    support_relations,
    support_surface,
    validation_report,
)

__all__ = [
    # Predicates
    "intervals_overlap",
    "footprints_overlap",
    "is_grounded",
    "vertically_adjacent",
    "rests_on",
    # Validator
    "SupportRelation",
    "ValidationResult",
    "FixResult",
    "has_support",
    "validate",
    "fix",
    "support_relations",
    "support_surface",
    "validation_report",
]
