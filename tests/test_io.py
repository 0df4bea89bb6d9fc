import json

import pytest
from stress_sim import StressEngine
from stress_sim.io import (
    GeometryError,
    bodies_from_json,
    body_from_json,
    body_to_json,
    force_from_json,
    load_structure,
    results_to_json,
    save_structure,
    validate_block,
    validate_blocks,
)
from stress_sim.materials import MaterialKind
from stress_sim.types import BoundaryCondition, Cuboid, Cylinder


def block(**overrides):
    data = {"type": "cube", "pos": [0.0, 0.5, 0.0], "size": [1.0, 1.0, 1.0]}
    data.update(overrides)
    return data


def test_valid_block_has_no_errors():
    assert validate_block(block()) == []
    assert validate_block(block(type="cylinder", size=[0.5, 2.0, 0.5])) == []


@pytest.mark.parametrize(
    "overrides, fragment",
    [
        ({"type": "sphere"}, "type"),
        ({"pos": [0, 1]}, "pos"),
        ({"size": [1, float("nan"), 1]}, "NaN"),
        ({"size": [1, -1, 1]}, "positive"),
        ({"size": [0.05, 1, 1]}, "too small"),
        ({"size": [1, 25, 1]}, "too large"),
        ({"size": [0.2, 10, 0.2]}, "Aspect ratio"),
        ({"pos": [0, 0, 60]}, "out of reasonable bounds"),
        ({"pos": [0, float("inf"), 0]}, "NaN or Infinity"),
    ],
)
def test_invalid_blocks(overrides, fragment):
    errors = validate_block(block(**overrides))
    assert errors
    assert any(fragment in e for e in errors)


def test_block_list_limits():
    assert validate_blocks("nope") == ["Structure must be a list of blocks"]
    assert validate_blocks([]) == ["Structure must contain at least one block"]
    assert "maximum 100" in validate_blocks([block()] * 101)[0]
    assert validate_blocks([block(), block(type="x")])[0].startswith("Block 1:")


def test_structure_span_limit():
    """Centroids more than 30 m apart on any axis are rejected as a whole."""
    assert validate_blocks([block(pos=[-15, 0.5, 0]), block(pos=[15, 0.5, 0])]) == []

    errors = validate_blocks([block(pos=[-20, 0.5, 0]), block(pos=[20, 0.5, 0])])
    assert len(errors) == 1
    assert "spans too large an area" in errors[0]

    with pytest.raises(GeometryError):
        bodies_from_json([block(pos=[0, 0.5, -16]), block(pos=[0, 0.5, 16])])


def test_bodies_from_json_raises_with_all_errors():
    with pytest.raises(GeometryError) as info:
        bodies_from_json([block(type="x"), block(size=[1, 1, -1])])
    assert len(info.value.errors) == 2
    assert isinstance(info.value, ValueError)


def test_body_from_json():
    body = body_from_json(block(type="cylinder", size=[0.5, 2.0, 0.5], material="Wood", boundary="fixed"))
    assert isinstance(body.shape, Cylinder)
    assert body.shape.radius == pytest.approx(0.25)
    assert body.shape.half_height == pytest.approx(1.0)
    assert body.material.kind is MaterialKind.WOOD
    assert body.boundary is BoundaryCondition.FIXED

    default = body_from_json(block())
    assert isinstance(default.shape, Cuboid)
    assert default.material.kind is MaterialKind.STEEL
    assert default.boundary is BoundaryCondition.FREE


def test_unknown_material_in_json():
    with pytest.raises(ValueError):
        body_from_json(block(material="unobtainium"))


def test_body_to_json():
    data = body_to_json(body_from_json(block(type="cylinder", pos=[1, 2, 3], size=[0.5, 2.0, 0.5])))
    assert data == {
        "type": "cylinder",
        "size": [0.5, 2.0, 0.5],
        "pos": [1.0, 2.0, 3.0],
        "material": "steel",
        "boundary": "free",
    }


def test_force_from_json():
    f = force_from_json({"origin": [0, 2, 0], "direction": [0, -2, 0], "magnitude": 3})
    assert f.direction == pytest.approx([0.0, -1.0, 0.0])
    assert f.magnitude == 3.0

    with pytest.raises(ValueError):
        force_from_json({"origin": [0, 2, 0], "direction": [0, 0, 0], "magnitude": 1})
    with pytest.raises(ValueError):
        force_from_json({"origin": [0, 2, 0], "direction": [0, -1, 0], "magnitude": -1})
    with pytest.raises(ValueError):
        force_from_json({"origin": [0, "x", 0], "direction": [0, -1, 0], "magnitude": 1})


def test_save_and_load_structure(tmp_path):
    path = tmp_path / "tower.json"
    bodies = bodies_from_json([
        block(),
        block(type="cylinder", pos=[0, 2.0, 0], size=[0.5, 2.0, 0.5], material="concrete"),
    ])
    force = force_from_json({"origin": [0, 4, 0], "direction": [0, -1, 0], "magnitude": 2.0})
    save_structure(bodies, str(path), force=force)

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert [b["type"] for b in raw["blocks"]] == ["cube", "cylinder"]
    assert raw["force"]["magnitude"] == 2.0

    loaded, loaded_force = load_structure(str(path))
    assert [body_to_json(b) for b in loaded] == [body_to_json(b) for b in bodies]
    assert loaded_force.origin == pytest.approx(force.origin)


def test_load_structure_without_force(tmp_path):
    path = tmp_path / "one.json"
    path.write_text(json.dumps({"blocks": [block()]}), encoding="utf-8")
    bodies, force = load_structure(str(path))
    assert len(bodies) == 1
    assert force is None


def test_load_structure_rejects_bad_geometry(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"blocks": [block(size=[100, 1, 1])]}), encoding="utf-8")
    with pytest.raises(GeometryError):
        load_structure(str(path))


def test_results_to_json():
    engine = StressEngine()
    ids = engine.add_bodies(bodies_from_json([block(), block(pos=[0, 1.5, 0])]))
    force = force_from_json({"origin": [0, 2, 0], "direction": [0, -1, 0], "magnitude": 10})
    result = engine.run_simulation(force)

    data = results_to_json(engine, result)
    assert data["total_bodies"] == 2
    assert data["failed_bodies"] == result.failed_count
    assert [b["id"] for b in data["bodies"]] == ids
    first = data["bodies"][0]
    assert first["force_type"] == "compression"
    assert first["failed"] is True
    assert first["color"] == "#ff0000"
    assert first["deformation"] > 1.0
    json.dumps(data)
