import numpy as np
from hypothesis import given, strategies as st, settings

from gravity import Engine, Entity, EntityType, total_momentum


def _body(mass, location, velocity):
    e = Entity(EntityType.PLANET, 1.0, mass, "body")
    e.location = location
    e.velocity = velocity
    return e


def _momentum_scale(entities):
    return sum(e.mass * e.velocity.magnitude() for e in entities)


def test_two_body_momentum_conserved_over_many_ticks():
    engine = Engine()
    engine.add_entity(_body(1e24, [0.0, 0.0, 0.0], [0.0, 100.0, 0.0]))
    engine.add_entity(_body(2e24, [1e7, 0.0, 0.0], [0.0, -20.0, 5.0]))

    p0 = total_momentum(engine.entities)
    for _ in range(50):
        engine.tick()
    p1 = total_momentum(engine.entities)

    scale = _momentum_scale(engine.entities)
    assert engine.ticks == 50
    assert np.allclose(p0, p1, rtol=0.0, atol=1e-9 * scale)


def test_momentum_conserved_with_float_precision_and_tick_position_step():
    engine = Engine(precision="float", position_step="tick")
    engine.add_entity(_body(5.972e24, [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]))
    engine.add_entity(_body(7.342e22, [3.844e8, 0.0, 0.0], [0.0, 1022.0, 0.0]))

    p0 = total_momentum(engine.entities)
    for _ in range(100):
        engine.tick()
    p1 = total_momentum(engine.entities)

    scale = _momentum_scale(engine.entities)
    assert np.allclose(p0, p1, rtol=0.0, atol=1e-9 * scale)


@st.composite
def two_body_system(draw):
    """Two well separated bodies with moderate velocities."""
    m1 = draw(st.floats(1e22, 1e25))
    m2 = draw(st.floats(1e22, 1e25))
    separation = draw(st.floats(1e7, 1e9))
    v1 = [draw(st.floats(-1000, 1000)) for _ in range(3)]
    v2 = [draw(st.floats(-1000, 1000)) for _ in range(3)]
    return [
        _body(m1, [0.0, 0.0, 0.0], v1),
        _body(m2, [separation, 0.0, 0.0], v2),
    ]


@given(two_body_system())
@settings(max_examples=10, deadline=None)
def test_momentum_conservation_property(bodies):
    engine = Engine()
    for b in bodies:
        engine.add_entity(b)

    p0 = total_momentum(engine.entities)
    for _ in range(5):
        engine.tick()
    p1 = total_momentum(engine.entities)

    scale = max(_momentum_scale(engine.entities), 1.0)
    assert np.allclose(p0, p1, rtol=0.0, atol=1e-9 * scale)
