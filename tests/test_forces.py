import math

import numpy as np
from hypothesis import given, settings, strategies as st, assume

from gravity import Engine, Entity, EntityType, G

EARTH_MASS = 5.972e24


def _body(mass, location, label="body"):
    e = Entity(EntityType.PLANET, 1.0, mass, label)
    e.location = location
    return e


def test_known_value_two_earths():
    a = _body(EARTH_MASS, [0.0, 0.0, 0.0], "a")
    b = _body(EARTH_MASS, [10.0, 0.0, 0.0], "b")
    engine = Engine()
    engine.add_entity(a)
    engine.add_entity(b)

    expected = G * EARTH_MASS * EARTH_MASS / 10.0 ** 2
    assert math.isclose(engine.force(a, b), expected, rel_tol=1e-9)

    # one substep of one second: |dv| = F / m * dt
    delta = engine.accumulate_delta_velocities(1.0)
    assert math.isclose(np.linalg.norm(delta[0]), expected / EARTH_MASS, rel_tol=1e-9)
    assert math.isclose(delta[0][0], expected / EARTH_MASS, rel_tol=1e-9)
    assert math.isclose(delta[1][0], -expected / EARTH_MASS, rel_tol=1e-9)


def test_float_precision_matches_decimal():
    locations = [[0.0, 0.0, 0.0], [1.5e8, 2.0e7, -3.0e6], [-4.0e7, 9.0e7, 1.0e7]]
    masses = [1.989e30, EARTH_MASS, 7.342e22]
    deltas = []
    for precision in ("decimal", "float"):
        engine = Engine(precision=precision)
        for i, (m, loc) in enumerate(zip(masses, locations)):
            engine.add_entity(_body(m, loc, f"b{i}"))
        deltas.append(engine.accumulate_delta_velocities(60.0).copy())
    assert np.allclose(deltas[0], deltas[1], rtol=1e-10, atol=0.0)


_mass = st.floats(1e10, 1e30, allow_nan=False, allow_infinity=False)
_coord = st.floats(-1e12, 1e12, allow_nan=False, allow_infinity=False)


@given(_mass, _mass, st.tuples(_coord, _coord, _coord), st.tuples(_coord, _coord, _coord))
@settings(max_examples=50)
def test_force_is_symmetric(m1, m2, p1, p2):
    assume(math.dist(p1, p2) > 1e-3)
    a = _body(m1, p1)
    b = _body(m2, p2)
    engine = Engine()
    assert engine.force(a, b) == engine.force(b, a)


def test_pair_accelerations_are_antiparallel():
    a = _body(3.0e24, [1.0e6, -2.0e6, 5.0e5], "a")
    b = _body(7.0e23, [-3.0e6, 4.0e6, 1.0e6], "b")
    engine = Engine()
    engine.add_entity(a)
    engine.add_entity(b)
    delta = engine.accumulate_delta_velocities(1.0)

    assert np.dot(delta[0], delta[1]) < 0
    cross = np.linalg.norm(np.cross(delta[0], delta[1]))
    assert cross <= 1e-12 * np.linalg.norm(delta[0]) * np.linalg.norm(delta[1])
    # equal and opposite forces: |dv_a| / |dv_b| = m_b / m_a
    ratio = np.linalg.norm(delta[0]) / np.linalg.norm(delta[1])
    assert math.isclose(ratio, b.mass / a.mass, rel_tol=1e-12)
    # a is pulled towards b
    towards_b = (b.location - a.location).as_array()
    assert np.dot(delta[0], towards_b) > 0
