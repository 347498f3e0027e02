# src/models/errors.py

"""Exception types raised by veggie_finder."""


class CatalogError(ValueError):
    """The catalog seed data is malformed."""


class DirectionsError(Exception):
    """Directions to a shop could not be produced."""


class LocationUnavailableError(DirectionsError):
    """The host offers no way to look up the caller's position."""
