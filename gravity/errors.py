"""Exceptions raised by the gravity engine."""


class GravityError(Exception):
    """Base class for errors raised by :mod:`gravity`."""


class ConfigurationError(GravityError, ValueError):
    """An engine option is missing, unknown or out of range."""


class InvalidEntityStateError(GravityError, ValueError):
    """An entity cannot take part in the force computation.

    Raised for coincident entities (the force law divides by their distance)
    and, when validation is enabled, for non-positive mass or non-finite
    coordinates.
    """
