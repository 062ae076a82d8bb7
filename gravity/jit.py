"""numba compiled kernels for the float64 precision mode."""

import numba as nb
import numpy as np


@nb.njit
def accumulate_delta_velocities_jit(positions, masses, dt, g_const, out):
    """Fill ``out`` with the delta-velocity of every body over ``dt``.

    ``positions`` is an ``(n, 3)`` array in metres and ``masses`` an ``(n,)``
    array in kilograms. Each row of ``out`` is reset before summing the pull
    of every other body; the mass of the accelerated body cancels out, so the
    acceleration is ``g_const * m_j / d / d``.

    Coincident bodies raise ``ZeroDivisionError``.
    """
    n = masses.shape[0]
    for i in range(n):
        out[i, 0] = 0.0
        out[i, 1] = 0.0
        out[i, 2] = 0.0
        for j in range(n):
            if j == i:
                continue
            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            dz = positions[j, 2] - positions[i, 2]
            dist = np.sqrt(dx * dx + dy * dy + dz * dz)
            acc = g_const * masses[j] / dist / dist
            factor = acc * dt / dist
            out[i, 0] += dx * factor
            out[i, 1] += dy * factor
            out[i, 2] += dz * factor
    return out
