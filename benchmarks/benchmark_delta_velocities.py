import time
import numpy as np

from gravity import Engine, Entity, EntityType


def build_engine(n, precision):
    rng = np.random.default_rng(0)
    engine = Engine(precision=precision)
    for i in range(n):
        e = Entity(EntityType.ASTEROID, 1.0, float(rng.uniform(1e20, 1e22)), f"rock-{i}")
        e.location = rng.uniform(-1e9, 1e9, size=3)
        engine.add_entity(e)
    return engine


if __name__ == "__main__":
    N = 200
    decimal_engine = build_engine(N, "decimal")
    float_engine = build_engine(N, "float")

    # warm up JIT
    float_engine.accumulate_delta_velocities(30.0)

    t0 = time.time()
    baseline = decimal_engine.accumulate_delta_velocities(30.0).copy()
    t1 = time.time()
    accelerated = float_engine.accumulate_delta_velocities(30.0).copy()
    t2 = time.time()

    assert np.allclose(baseline, accelerated, rtol=1e-9)
    print(f"Decimal : {t1 - t0:.3f}s")
    print(f"Float   : {t2 - t1:.3f}s")
    if t2 - t1 > 0:
        print(f"Speedup : {(t1 - t0) / (t2 - t1):.1f}x")
