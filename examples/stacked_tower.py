# examples/stacked_tower.py
import logging

from stress_sim import StressEngine, Body, Cuboid, Cylinder, ForceDescriptor, setup_logging
from stress_sim.renderer import DebugRenderer

setup_logging(logging.INFO)

engine = StressEngine()

# Concrete base, steel column, wooden cap.
engine.add_body(Body(Cuboid.from_size(2.0, 0.5, 2.0), position=(0.0, 0.25, 0.0)), material="concrete", boundary="fixed")
engine.add_body(Body(Cylinder.from_size(0.4, 2.0), position=(0.0, 1.5, 0.0)), material="steel")
engine.add_body(Body(Cuboid.from_size(1.0, 0.3, 1.0), position=(0.0, 2.65, 0.0)), material="wood")

report = engine.validate()
print("supported:", report.valid)

# Push down on the cap from just above it.
force = ForceDescriptor(origin=(0.0, 3.5, 0.0), direction=(0.0, -1.0, 0.0), magnitude=2.0)
result = engine.run_simulation(force)

DebugRenderer().render_engine(engine)
print(engine.summary_text())
print("failed:", result.failed_count, "of", result.total_bodies)
