"""Physical bodies taking part in the simulation."""

from enum import Enum

from .vector import Vector3


class EntityType(Enum):
    """Kind of body. Not consulted by the integrator."""

    STAR = "star"
    PLANET = "planet"
    MOON = "moon"
    ASTEROID = "asteroid"
    SPACECRAFT = "spacecraft"


def _as_vector(value) -> Vector3:
    if isinstance(value, Vector3):
        return value
    return Vector3.from_array(value)


class Entity:
    """Point mass with a location and a velocity.

    Parameters
    ----------
    entity_type : EntityType
        Category tag, kept for collaborators such as renderers.
    radius : float
        Physical radius in metres. Unused by the force law.
    mass : float
        Mass in kilograms. Must be positive for the force law to make sense.
    label : str
        Free-form name.

    Location and velocity start at the origin and at rest; set them before
    the entity is handed to an :class:`~gravity.engine.Engine`.
    """

    def __init__(self, entity_type: EntityType, radius: float, mass: float, label: str):
        self._entity_type = entity_type
        self._radius = float(radius)
        self._mass = float(mass)
        self._label = label
        self._location = Vector3.ZERO
        self._velocity = Vector3.ZERO

    @property
    def entity_type(self) -> EntityType:
        return self._entity_type

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def label(self) -> str:
        return self._label

    @property
    def location(self) -> Vector3:
        return self._location

    @location.setter
    def location(self, value) -> None:
        self._location = _as_vector(value)

    @property
    def velocity(self) -> Vector3:
        return self._velocity

    @velocity.setter
    def velocity(self, value) -> None:
        self._velocity = _as_vector(value)

    @property
    def momentum(self) -> Vector3:
        return self._velocity.scale(self._mass)

    def __repr__(self):
        return f"{self._label}, Location: {self._location}, Velocity: {self._velocity}"
