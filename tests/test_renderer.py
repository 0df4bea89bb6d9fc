import io

from stress_sim import StressEngine, Body, Cuboid, Cylinder, ForceDescriptor
from stress_sim.renderer import BufferedRenderer, DebugRenderer, NullRenderer


def loaded_engine():
    engine = StressEngine()
    engine.add_body(Body(Cuboid.from_size(1, 1, 1), position=(0, 0.5, 0)))
    engine.add_body(Body(Cylinder.from_size(0.5, 2.0), position=(8, 1.0, 0), material="concrete"))
    engine.run_simulation(ForceDescriptor(origin=(0, 2, 0), direction=(0, -1, 0), magnitude=10.0))
    return engine


def test_debug_renderer_output():
    out = io.StringIO()
    DebugRenderer(output=out).render_engine(loaded_engine())
    lines = out.getvalue().splitlines()

    assert lines[0].startswith("=== Stress overlay: 1/2 failed, max ")
    assert lines[1].startswith("[1] Cube 1.00x1.00x1.00 steel @ (0.00, 0.50, 0.00)")
    assert "compression #ff0000" in lines[1]
    assert lines[1].endswith("FAILED")
    assert lines[2].startswith("[2] Cylinder r=0.25 h=2.00 concrete @ (8.00, 1.00, 0.00)")
    assert not lines[2].endswith("FAILED")


def test_debug_renderer_terse():
    out = io.StringIO()
    DebugRenderer(output=out, verbose=False).render_engine(loaded_engine())
    assert "#" not in out.getvalue()


def test_null_renderer_accepts_frames():
    NullRenderer().render_engine(loaded_engine())


def test_buffered_renderer_records_vertex_colors():
    engine = loaded_engine()
    renderer = BufferedRenderer()
    renderer.render_engine(engine)

    assert len(renderer.frames) == 1
    frame = renderer.frames[0]
    assert frame["summary"]["total_bodies"] == 2
    cube, cylinder = frame["bodies"]
    assert cube["failed"] is True
    assert len(cube["vertices"]) == 9
    assert cube["vertex_colors"] == [[1.0, 0.0, 0.0]] * 9
    assert len(cylinder["vertex_colors"]) == 17
    assert cylinder["scale"][0] > 1.0

    renderer.clear()
    assert renderer.frames == []
