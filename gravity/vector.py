"""Immutable three component vector used for positions and velocities."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Iterator

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """A 3-D vector of floats.

    Every operation returns a new vector; instances are never modified.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    ZERO: ClassVar["Vector3"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @staticmethod
    def from_array(values) -> "Vector3":
        """Build a vector from any sequence of three numbers."""
        v = np.asarray(values, dtype=float).reshape(-1)
        if v.size != 3:
            raise ValueError(f"expected 3 components, got {v.size}")
        return Vector3(v[0], v[1], v[2])

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def add(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, k: float) -> Vector3:
        return Vector3(self.x * k, self.y * k, self.z * k)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance_to(self, other: Vector3) -> float:
        return self.subtract(other).magnitude()

    def scale_to_magnitude(self, target: float) -> Vector3:
        """Return a vector parallel to this one with magnitude ``target``.

        The zero vector has no direction; scaling it raises
        ``ZeroDivisionError``.
        """
        return self.scale(target / self.magnitude())

    def __add__(self, other: Vector3) -> Vector3:
        return self.add(other)

    def __sub__(self, other: Vector3) -> Vector3:
        return self.subtract(other)

    def __mul__(self, k: float) -> Vector3:
        return self.scale(k)

    __rmul__ = __mul__

    def __neg__(self) -> Vector3:
        return self.scale(-1.0)

    def __abs__(self) -> float:
        return self.magnitude()

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __str__(self) -> str:
        return f"[x = {self.x}, y = {self.y}, z = {self.z}]"


Vector3.ZERO = Vector3(0.0, 0.0, 0.0)
