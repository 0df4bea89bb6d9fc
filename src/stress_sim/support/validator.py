# MIT License (see LICENSE)
"""
Support-graph validation and repair.

The support graph is the "rests on" relation rooted at the ground plane. A
structure is valid when every body is grounded or rests on another body;
bodies with neither are floating and reported by index.

fix() repositions floating bodies in one sequential pass ordered by height:
each body may only come to rest on bodies already placed below it, so the
order of processing is part of the result. Never reorder or split this pass.

Nothing here raises on odd input. Empty structures are valid; negative or
non-finite coordinates simply fail the support tests.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Iterator, NamedTuple, Sequence

from ..constants import SUPPORT_EPS
from ..types import Body
from .predicates import footprints_overlap, is_grounded, rests_on

logger = logging.getLogger(__name__)


class SupportRelation(NamedTuple):
    """'body rests on support'; support is None for the ground."""
    body: int
    support: int | None


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validate().

    Attributes:
        valid: True when no body is floating.
        issues: Indices of floating bodies, ascending.
    """
    valid: bool
    issues: list[int] = field(default_factory=list)


@dataclass
class FixResult:
    """
    Outcome of fix().

    Behaves like the list of corrected bodies (iteration, len, indexing).

    Attributes:
        bodies: Corrected copies, in the same order as the input.
        moved: Indices of bodies whose y changed.
        consistent: False if re-validation still found floating bodies.
        issues: Indices still floating after the pass.
    """
    bodies: list[Body]
    moved: list[int] = field(default_factory=list)
    consistent: bool = True
    issues: list[int] = field(default_factory=list)

    def __iter__(self) -> Iterator[Body]:
        return iter(self.bodies)

    def __len__(self) -> int:
        return len(self.bodies)

    def __getitem__(self, i: int) -> Body:
        return self.bodies[i]


def has_support(body: Body, others: Sequence[Body], skip: int = -1, eps: float = SUPPORT_EPS) -> bool:
    """
    True if body is grounded or rests on one of others.

    Args:
        body: Body to test.
        others: Candidate supports.
        skip: Index in others to ignore (the body itself), -1 for none.
        eps: Vertical adjacency tolerance.
    """
    if is_grounded(body, eps):
        return True
    for j, other in enumerate(others):
        if j == skip:
            continue
        if rests_on(body, other, eps):
            return True
    return False


def validate(bodies: Sequence[Body], eps: float = SUPPORT_EPS) -> ValidationResult:
    """
    Find floating bodies.

    Args:
        bodies: All bodies of the structure.
        eps: Vertical adjacency tolerance in meters.

    Returns:
        ValidationResult with the indices of unsupported bodies.
    """
    issues = [i for i, b in enumerate(bodies) if not has_support(b, bodies, skip=i, eps=eps)]
    if issues:
        logger.warning("Structure validation failed: %d floating bodies %s", len(issues), issues)
    else:
        logger.info("Structure validation passed: %d bodies, none floating", len(bodies))
    return ValidationResult(valid=not issues, issues=issues)


def support_relations(bodies: Sequence[Body], eps: float = SUPPORT_EPS) -> list[SupportRelation]:
    """
    Every support fact in the structure, computed from current positions.

    A body can rest on the ground and on several bodies at once; each
    contributes one relation. Floating bodies contribute none.
    """
    out: list[SupportRelation] = []
    for i, b in enumerate(bodies):
        if is_grounded(b, eps):
            out.append(SupportRelation(i, None))
        for j, other in enumerate(bodies):
            if j != i and rests_on(b, other, eps):
                out.append(SupportRelation(i, j))
    return out


def support_surface(body: Body, placed: Sequence[Body]) -> float:
    """
    Highest top face among placed bodies under body's footprint.

    Returns 0.0 (the ground) when none overlap.
    """
    highest = 0.0
    for other in placed:
        if footprints_overlap(body, other):
            highest = max(highest, other.top)
    return highest


def fix(bodies: Sequence[Body], eps: float = SUPPORT_EPS) -> FixResult:
    """
    Drop floating bodies onto the nearest support below them.

    Bodies are processed bottom-up by current y (ties keep input order).
    A body that is neither grounded nor resting on an already placed body is
    moved so its bottom face sits on support_surface(). The input bodies are
    not modified.

    Args:
        bodies: Structure to repair.
        eps: Vertical adjacency tolerance in meters.

    Returns:
        FixResult with corrected copies in input order. If re-validation still
        finds floating bodies (e.g. degenerate geometry), consistent is False
        and a warning is logged; there is no retry.
    """
    fixed = [b.copy() for b in bodies]
    order = sorted(range(len(fixed)), key=lambda i: (float(fixed[i].position[1]), i))

    placed: list[Body] = []
    moved: list[int] = []
    for i in order:
        body = fixed[i]
        if not has_support(body, placed, eps=eps):
            new_y = support_surface(body, placed) + body.half_height
            if new_y != body.position[1]:
                logger.info("Fixed floating body %d: y %.3f -> %.3f", i, body.position[1], new_y)
                body.position[1] = new_y
                moved.append(i)
        placed.append(body)

    check = validate(fixed, eps)
    if not check.valid:
        logger.warning("Support fix left %d bodies unsupported: %s", len(check.issues), check.issues)
    return FixResult(bodies=fixed, moved=sorted(moved), consistent=check.valid, issues=check.issues)


def validation_report(bodies: Sequence[Body], eps: float = SUPPORT_EPS) -> str:
    """Human-readable validation summary."""
    result = validate(bodies, eps)
    rule = "-" * 24
    if result.valid:
        return "\n".join([
            "VALID STRUCTURE",
            rule,
            f"Total bodies: {len(bodies)}",
            "All bodies properly supported",
        ])
    lines = [
        "INVALID STRUCTURE",
        rule,
        f"Total bodies: {len(bodies)}",
        f"Floating bodies: {len(result.issues)}",
        "",
        "Issues:",
    ]
    for n, i in enumerate(result.issues, start=1):
        x, y, z = (float(v) for v in bodies[i].position)
        lines.append(f"{n}. Body {i} at ({x:.2f}, {y:.2f}, {z:.2f}) is floating")
    return "\n".join(lines)
