import numpy as np
import pytest
from stress_sim.support import (
    SupportRelation,
    fix,
    footprints_overlap,
    intervals_overlap,
    is_grounded,
    support_relations,
    validate,
    validation_report,
    vertically_adjacent,
)
from stress_sim.types import Body, Cuboid, Cylinder


def cube(x, y, z, size=1.0):
    return Body(Cuboid.from_size(size, size, size), position=(x, y, z))


def test_stacked_body_with_position_error():
    """
    Lower cube grounded, upper cube floating at y=5.
    validate flags it, fix drops it onto the lower cube, re-validate is clean.
    """
    bodies = [cube(0, 0.5, 0), cube(0, 5, 0)]

    result = validate(bodies)
    assert not result.valid
    assert result.issues == [1]

    fixed = fix(bodies)
    assert fixed.consistent
    assert fixed.moved == [1]
    assert fixed[1].position == pytest.approx([0.0, 1.5, 0.0])
    assert fixed[0].position == pytest.approx([0.0, 0.5, 0.0])

    assert validate(fixed.bodies).issues == []
    # input untouched
    assert bodies[1].position[1] == 5.0


def test_empty_structure_is_valid():
    assert validate([]).valid
    assert validate([]).issues == []
    assert len(fix([])) == 0


def test_grounded_tolerance():
    assert is_grounded(cube(0, 0.55, 0))
    assert not is_grounded(cube(0, 0.65, 0))


def test_adjacency_and_overlap_predicates():
    lower = cube(0, 0.5, 0)
    upper = cube(0.9, 1.55, 0)
    assert vertically_adjacent(upper, lower)
    assert footprints_overlap(upper, lower)
    # Touching edges count as overlap.
    assert intervals_overlap(0.0, 1.0, 1.0, 2.0)
    assert not intervals_overlap(0.0, 1.0, 1.01, 2.0)
    # Overlap needed on both x and z.
    side = cube(0.5, 1.5, 2.0)
    assert not footprints_overlap(side, lower)


def test_side_by_side_is_not_support():
    """Overlapping footprints are not enough: faces must be adjacent."""
    bodies = [cube(0, 0.5, 0), cube(0.2, 2.5, 0)]
    assert validate(bodies).issues == [1]


def test_fix_is_sequential_bottom_up():
    """Later bodies land on bodies already moved by the same pass."""
    bodies = [
        Body(Cuboid((1.0, 0.5, 1.0)), position=(0, 3, 0)),          # 0: floating slab
        Body(Cuboid((0.5, 0.5, 0.5)), position=(0.5, 7, 0.2)),      # 1: floating, over slab
        Body(Cuboid((0.5, 1.0, 0.5)), position=(5, 1, 5)),          # 2: grounded column
        Body(Cylinder(0.3, 0.5), position=(5, 2.7, 5)),             # 3: just off the column
        Body(Cuboid((0.5, 0.5, 0.5)), position=(-0.5, -2, 0)),      # 4: below ground
    ]
    fixed = fix(bodies)

    ys = [float(b.position[1]) for b in fixed]
    assert ys == pytest.approx([1.5, 2.5, 1.0, 2.5, 0.5])
    assert fixed.moved == [0, 1, 3, 4]
    assert fixed.consistent
    assert validate(fixed.bodies).valid


def test_fix_idempotent():
    bodies = [
        cube(0, 0.5, 0),
        cube(0.3, 4.0, 0.3),
        cube(0.6, 9.0, 0.0),
        cube(3.0, 2.2, 3.0, size=2.0),
        cube(3.5, 6.0, 3.5),
    ]
    once = fix(bodies)
    twice = fix(once.bodies)

    assert twice.moved == []
    for a, b in zip(once, twice):
        assert np.array_equal(a.position, b.position)
    assert validate(twice.bodies).valid


def test_fix_reports_inconsistency_without_raising():
    """Degenerate geometry cannot be repaired; fix says so instead of looping."""
    broken = Body(Cuboid((0.5, float("nan"), 0.5)), position=(0, 3, 0))
    result = fix([cube(0, 0.5, 0), broken])
    assert not result.consistent
    assert result.issues == [1]
    assert validate([broken]).issues == [0]


def test_support_relations():
    bodies = [cube(0, 0.5, 0), cube(2, 0.5, 0), Body(Cuboid((1.5, 0.25, 0.5)), position=(1, 1.25, 0))]
    rels = support_relations(bodies)
    assert SupportRelation(0, None) in rels
    assert SupportRelation(1, None) in rels
    # the beam rests on both cubes
    assert SupportRelation(2, 0) in rels
    assert SupportRelation(2, 1) in rels
    assert len(rels) == 4


def test_validation_report_lists_floating_bodies():
    report = validation_report([cube(0, 0.5, 0), cube(0, 5, 0)])
    assert report.startswith("INVALID STRUCTURE")
    assert "Floating bodies: 1" in report
    assert "Body 1 at (0.00, 5.00, 0.00) is floating" in report

    ok = validation_report([cube(0, 0.5, 0)])
    assert ok.startswith("VALID STRUCTURE")
