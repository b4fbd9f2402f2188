"""Exceptions raised by the route optimization engine."""


class InvalidInputError(ValueError):
    """Raised when a waypoint, option or catalog entry is not well formed.

    Subclasses ``ValueError`` so the HTTP layer reports it as a client error.
    """
