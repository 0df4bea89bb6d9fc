"""
Microbenchmark: time per stress run vs number of bodies.
Run:
  python benchmarks/bench_stress.py
"""
import time
import numpy as np
from stress_sim import StressEngine, Body, Cuboid, ForceDescriptor
from stress_sim.materials import all_materials
from stress_sim.profiler import Profiler


def run(n: int, runs: int = 200):
    prof = Profiler()
    engine = StressEngine(profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    materials = all_materials()

    # columns of unit cubes on a grid, with a little jitter
    side = int(np.ceil(np.sqrt(n / 4)))
    k = 0
    for iz in range(side):
        for ix in range(side):
            for level in range(4):
                if k >= n:
                    break
                x = 1.5 * ix + 0.05 * float(rng.normal())
                z = 1.5 * iz + 0.05 * float(rng.normal())
                body = Body(Cuboid((0.5, 0.5, 0.5)), position=(x, 0.5 + level, z))
                engine.add_body(body, material=materials[k % len(materials)])
                k += 1

    force = ForceDescriptor(origin=(0.0, 6.0, 0.0), direction=(0.3, -1.0, 0.2), magnitude=5.0)

    # warmup
    for _ in range(10):
        engine.run_simulation(force)

    t0 = time.perf_counter()
    for _ in range(runs):
        engine.run_simulation(force)
    t1 = time.perf_counter()

    engine.validate()
    engine.fix_floating()

    per_run = (t1 - t0) / runs
    return per_run, prof.stats.summary()


if __name__ == "__main__":
    for n in [10, 50, 100, 250, 500]:
        per_run, summary = run(n)
        print(f"N={n:4d}  run={1e3*per_run:8.3f} ms  runs/s={1/per_run:8.1f}")
        for k in ["stress", "deformation", "validate", "fix"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
