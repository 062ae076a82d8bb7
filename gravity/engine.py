"""Adaptive timestep N-body gravity engine.

The engine advances every entity by a fixed tick duration per call to
:meth:`Engine.tick`. A tick is split into substeps: the delta-velocity of
every entity is computed from the exact pairwise sum of gravitational
accelerations and, as long as the largest delta-velocity exceeds
``max_delta_v``, the substep is halved and the sum recomputed. The halving
stops at ``min_delta_t`` whether or not the bound is met.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Context, Decimal, DivisionByZero, InvalidOperation, Overflow

import numpy as np

from . import constants as C
from .entity import Entity
from .errors import ConfigurationError, InvalidEntityStateError
from .jit import accumulate_delta_velocities_jit
from .vector import Vector3

logger = logging.getLogger(__name__)

_DECIMAL_CONTEXT = Context(
    prec=C.DECIMAL_PRECISION, traps=[InvalidOperation, DivisionByZero, Overflow]
)

_CONFIG_ALIASES = {
    "maxDeltaV": "max_delta_v",
    "minDeltaT": "min_delta_t",
    "tickSeconds": "tick_seconds",
    "progressPeriod": "progress_period",
    "positionStep": "position_step",
    "validateEntities": "validate_entities",
}
_CONFIG_KEYS = frozenset(
    (
        "max_delta_v",
        "min_delta_t",
        "tick_seconds",
        "precision",
        "position_step",
        "on_progress",
        "progress_period",
        "validate_entities",
    )
)


def _no_progress(elapsed_seconds, tick_index):
    pass


def _positive(name, value) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive finite number, got {value!r}")
    return value


@dataclass(frozen=True)
class TickStats:
    """What happened during one call to :meth:`Engine.tick`."""

    substeps: tuple
    halvings: int
    max_delta_v: float

    @property
    def duration(self) -> float:
        return math.fsum(self.substeps)


class Engine:
    """Owns the entities and integrates their motion.

    Parameters
    ----------
    max_delta_v : float
        Largest velocity change (m/s) any entity may receive in one substep
        before the substep is halved.
    min_delta_t : float
        Substep duration (s) below which no further halving happens.
    tick_seconds : float
        Simulated seconds advanced by one call to :meth:`tick`.
    precision : {"decimal", "float"}
        ``"decimal"`` divides by the distance in 34 digit decimal arithmetic,
        ``"float"`` runs the numba float64 kernel.
    position_step : {"substep", "tick"}
        Duration used to move entities after each substep. ``"tick"``
        reproduces the historical behaviour of moving by the whole tick after
        every substep.
    on_progress : callable, optional
        ``on_progress(elapsed_seconds, tick_index)`` called every
        ``progress_period`` completed ticks.
    progress_period : int
        Number of ticks between two progress notifications.
    validate_entities : bool
        Reject entities with a non-positive mass, non-finite state or a
        location already taken when they are added.
    """

    def __init__(
        self,
        max_delta_v: float = C.DEFAULT_MAX_DELTA_V,
        min_delta_t: float = C.DEFAULT_MIN_DELTA_T,
        tick_seconds: float = C.DEFAULT_TICK_SECONDS,
        *,
        precision: str = C.PRECISION_DECIMAL,
        position_step: str = C.POSITION_STEP_SUBSTEP,
        on_progress=None,
        progress_period: int = C.PROGRESS_PERIOD,
        validate_entities: bool = False,
    ):
        if precision not in C.PRECISION_MODES:
            raise ConfigurationError(f"unknown precision {precision!r}")
        if position_step not in C.POSITION_STEPS:
            raise ConfigurationError(f"unknown position_step {position_step!r}")
        self._max_delta_v = _positive("max_delta_v", max_delta_v)
        self._min_delta_t = _positive("min_delta_t", min_delta_t)
        self._tick_seconds = _positive("tick_seconds", tick_seconds)
        self._precision = precision
        self._position_step = position_step
        self._validate = validate_entities
        self._on_progress = _no_progress
        self._progress_period = C.PROGRESS_PERIOD
        self.set_progress_observer(on_progress, progress_period)

        self._entities = []
        self._delta = np.zeros((0, 3), dtype=np.float64)
        self._elapsed_time = 0.0
        self._ticks = 0
        self._last_tick = None

    @classmethod
    def from_config(cls, config) -> "Engine":
        """Create an engine from a mapping of option names to values.

        Both ``max_delta_v`` and ``maxDeltaV`` spellings are accepted.
        """
        options = {}
        for key, value in config.items():
            name = _CONFIG_ALIASES.get(key, key)
            if name not in _CONFIG_KEYS:
                raise ConfigurationError(f"unknown engine option {key!r}")
            options[name] = value
        return cls(**options)

    # ------------------------------------------------------------------
    @property
    def max_delta_v(self) -> float:
        return self._max_delta_v

    @property
    def min_delta_t(self) -> float:
        return self._min_delta_t

    @property
    def tick_seconds(self) -> float:
        return self._tick_seconds

    @tick_seconds.setter
    def tick_seconds(self, value: float) -> None:
        self._tick_seconds = _positive("tick_seconds", value)

    @property
    def precision(self) -> str:
        return self._precision

    @property
    def position_step(self) -> str:
        return self._position_step

    @property
    def entities(self) -> list:
        """The live entity list, in insertion order."""
        return self._entities

    @property
    def elapsed_time(self) -> float:
        return self._elapsed_time

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def last_tick(self):
        """:class:`TickStats` of the latest tick, ``None`` before the first."""
        return self._last_tick

    def set_progress_observer(self, callback, period=None) -> None:
        """Install ``callback(elapsed_seconds, tick_index)``; ``None`` disables it."""
        if period is not None:
            period = int(period)
            if period <= 0:
                raise ConfigurationError(f"progress_period must be positive, got {period}")
            self._progress_period = period
        self._on_progress = callback if callback is not None else _no_progress

    # ------------------------------------------------------------------
    def add_entity(self, entity: Entity) -> None:
        if self._validate:
            self._check_entity(entity)
        self._entities.append(entity)

    def _check_entity(self, entity):
        if not math.isfinite(entity.mass) or entity.mass <= 0:
            raise InvalidEntityStateError(
                f"{entity.label}: mass must be positive and finite, got {entity.mass}"
            )
        for name, vec in (("location", entity.location), ("velocity", entity.velocity)):
            if not all(math.isfinite(c) for c in vec):
                raise InvalidEntityStateError(f"{entity.label}: {name} is not finite: {vec}")
        for other in self._entities:
            if other is entity:
                raise InvalidEntityStateError(f"{entity.label}: already added")
            if other.location == entity.location:
                raise InvalidEntityStateError(
                    f"{entity.label}: shares its location with {other.label}"
                )

    # ------------------------------------------------------------------
    def force(self, a: Entity, b: Entity) -> float:
        """Magnitude of the gravitational attraction between ``a`` and ``b``."""
        distance = a.location.distance_to(b.location)
        if self._precision == C.PRECISION_FLOAT:
            return C.G * a.mass * b.mass / distance / distance
        ctx = _DECIMAL_CONTEXT
        d = Decimal(distance)
        f = ctx.multiply(Decimal(a.mass), Decimal(b.mass))
        f = ctx.divide(ctx.divide(f, d), d)
        return float(ctx.multiply(f, C.G_DECIMAL))

    def accumulate_delta_velocities(self, dt: float) -> np.ndarray:
        """Recompute the delta-velocity of every entity over ``dt`` seconds.

        Returns the engine's ``(n, 3)`` scratch buffer; row ``i`` belongs to
        ``entities[i]``. The buffer is overwritten by the next call.
        """
        n = len(self._entities)
        if self._delta.shape[0] != n:
            self._delta = np.zeros((n, 3), dtype=np.float64)
        else:
            self._delta.fill(0.0)
        if n < 2:
            return self._delta

        try:
            if self._precision == C.PRECISION_FLOAT:
                positions = np.array([e.location.as_array() for e in self._entities])
                masses = np.array([e.mass for e in self._entities], dtype=np.float64)
                accumulate_delta_velocities_jit(positions, masses, float(dt), C.G, self._delta)
            else:
                self._accumulate_decimal(dt)
        except ArithmeticError as exc:
            raise self._invalid_state() from exc
        return self._delta

    def _accumulate_decimal(self, dt):
        entities = self._entities
        for i, entity in enumerate(entities):
            delta_v = Vector3.ZERO
            for j, affector in enumerate(entities):
                if j == i:
                    continue
                acceleration = self.force(entity, affector) / entity.mass
                direction = affector.location.subtract(entity.location)
                delta_v = delta_v.add(direction.scale_to_magnitude(acceleration * dt))
            self._delta[i] = (delta_v.x, delta_v.y, delta_v.z)

    def _invalid_state(self) -> InvalidEntityStateError:
        entities = self._entities
        for i, a in enumerate(entities):
            for b in entities[i + 1:]:
                if a.location == b.location:
                    return InvalidEntityStateError(
                        f"{a.label} and {b.label} are both located at {a.location}"
                    )
        return InvalidEntityStateError("entity with zero mass or non-finite location")

    def max_delta_velocity(self) -> float:
        """Largest delta-velocity magnitude in the scratch buffer, 0 when empty."""
        if self._delta.shape[0] == 0:
            return 0.0
        return float(np.sqrt(np.einsum("ij,ij->i", self._delta, self._delta)).max())

    def delta_velocity(self, index: int) -> Vector3:
        """Delta-velocity last computed for ``entities[index]``."""
        return Vector3.from_array(self._delta[index])

    # ------------------------------------------------------------------
    def tick(self) -> None:
        """Advance the simulation by exactly :attr:`tick_seconds`."""
        tick_seconds = self._tick_seconds
        ticked = 0.0
        remaining = tick_seconds
        substeps = []
        halvings = 0
        worst = 0.0

        while ticked < tick_seconds:
            candidate = remaining
            self.accumulate_delta_velocities(candidate)
            max_dv = self.max_delta_velocity()
            while max_dv > self._max_delta_v and candidate > self._min_delta_t:
                candidate = max(candidate / 2, self._min_delta_t)
                halvings += 1
                self.accumulate_delta_velocities(candidate)
                max_dv = self.max_delta_velocity()

            if ticked + candidate == ticked:
                # substep lost in rounding against ticked; finish the tick instead
                candidate = remaining
                self.accumulate_delta_velocities(candidate)
                max_dv = self.max_delta_velocity()

            ticked += candidate
            remaining = tick_seconds - ticked
            if self._position_step == C.POSITION_STEP_TICK:
                self._apply(tick_seconds)
            else:
                self._apply(candidate)
            substeps.append(candidate)
            worst = max(worst, max_dv)

        self._elapsed_time += ticked
        self._ticks += 1
        self._last_tick = TickStats(tuple(substeps), halvings, worst)

        if halvings and logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "tick %d: %d substeps, %d halvings, max delta-v %.6g m/s",
                self._ticks, len(substeps), halvings, worst,
            )
            if worst > self._max_delta_v:
                logger.debug(
                    "tick %d: halving floor %g s reached above max delta-v %g m/s",
                    self._ticks, self._min_delta_t, self._max_delta_v,
                )

        if self._ticks % self._progress_period == 0:
            self._on_progress(self._elapsed_time, self._ticks)

    def _apply(self, step):
        for entity, dv in zip(self._entities, self._delta):
            entity.velocity = entity.velocity.add(Vector3(dv[0], dv[1], dv[2]))
            entity.location = entity.location.add(entity.velocity.scale(step))
