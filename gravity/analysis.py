"""Conserved quantities of a set of entities, for monitoring drift."""

import numpy as np

from .constants import G


def total_momentum(entities) -> np.ndarray:
    """Return the vector sum of ``mass * velocity``."""
    p = np.zeros(3, dtype=float)
    for e in entities:
        p += e.mass * e.velocity.as_array()
    return p


def system_energy(entities, g_constant=G):
    """Return total kinetic and potential energy.

    Coincident pairs are left out of the potential term.
    """
    kinetic = 0.0
    potential = 0.0
    for e in entities:
        v = e.velocity.as_array()
        kinetic += 0.5 * e.mass * np.dot(v, v)
    for i, ei in enumerate(entities):
        for ej in entities[i + 1:]:
            r = ei.location.distance_to(ej.location)
            if r == 0:
                continue
            potential -= g_constant * ei.mass * ej.mass / r
    return kinetic, potential, kinetic + potential


def center_of_mass(entities):
    """Return the centre of mass position and velocity.

    ``(None, None)`` when there are no entities or their total mass is zero.
    """
    if not entities:
        return None, None
    masses = np.array([e.mass for e in entities], dtype=float)
    total = masses.sum()
    if total == 0:
        return None, None
    positions = np.array([e.location.as_array() for e in entities])
    velocities = np.array([e.velocity.as_array() for e in entities])
    com = (masses[:, None] * positions).sum(axis=0) / total
    com_vel = (masses[:, None] * velocities).sum(axis=0) / total
    return com, com_vel
