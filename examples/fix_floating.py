# examples/fix_floating.py
from stress_sim import Body, Cuboid, fix, validate, validation_report

bodies = [
    Body(Cuboid.from_size(1.0, 1.0, 1.0), position=(0.0, 0.5, 0.0)),
    Body(Cuboid.from_size(1.0, 1.0, 1.0), position=(0.2, 4.0, 0.0)),
    Body(Cuboid.from_size(1.0, 1.0, 1.0), position=(0.4, 9.0, 0.0)),
]

print(validation_report(bodies))

result = fix(bodies)
print("moved:", result.moved, "consistent:", result.consistent)
for b in result:
    print("  y =", round(float(b.position[1]), 3))

print(validation_report(result.bodies))
assert validate(result.bodies).valid
