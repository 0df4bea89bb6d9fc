# examples/load_json.py
"""
Load a structure file, run it and print the renderer-facing JSON.

Run:
  python examples/load_json.py path/to/structure.json
"""
import json
import sys

from stress_sim import StressEngine, ForceDescriptor
from stress_sim.io import GeometryError, load_structure, results_to_json

path = sys.argv[1] if len(sys.argv) > 1 else "structure.json"

try:
    bodies, force = load_structure(path)
except GeometryError as exc:
    for err in exc.errors:
        print("invalid:", err)
    sys.exit(1)

if force is None:
    top = max(b.top for b in bodies)
    force = ForceDescriptor(origin=(0.0, top + 1.0, 0.0), direction=(0.0, -1.0, 0.0), magnitude=1.0)

engine = StressEngine()
engine.add_bodies(bodies)
engine.fix_floating()
result = engine.run_simulation(force)
print(json.dumps(results_to_json(engine, result), indent=2))
