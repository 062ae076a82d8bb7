"""Adaptive timestep Newtonian N-body gravity engine."""

from importlib.metadata import PackageNotFoundError, version

from .vector import Vector3
from .entity import Entity, EntityType
from .engine import Engine, TickStats
from .errors import GravityError, ConfigurationError, InvalidEntityStateError
from .analysis import total_momentum, system_energy, center_of_mass
from .reporting import format_elapsed, log_progress
from .logging_config import setup_logging
from .constants import (
    G,
    DEFAULT_MAX_DELTA_V,
    DEFAULT_MIN_DELTA_T,
    DEFAULT_TICK_SECONDS,
)

try:
    __version__ = version("gravity-engine")
except PackageNotFoundError:
    # Fallback when package metadata is unavailable (e.g. running from source)
    __version__ = "0.0.0"

__all__ = [
    "Vector3",
    "Entity",
    "EntityType",
    "Engine",
    "TickStats",
    "GravityError",
    "ConfigurationError",
    "InvalidEntityStateError",
    "total_momentum",
    "system_energy",
    "center_of_mass",
    "format_elapsed",
    "log_progress",
    "setup_logging",
    "G",
    "DEFAULT_MAX_DELTA_V",
    "DEFAULT_MIN_DELTA_T",
    "DEFAULT_TICK_SECONDS",
    "__version__",
]
