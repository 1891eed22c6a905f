"""Exceptions raised by the clustering engine."""


class InvalidParameterError(ValueError):
    """Raised when ``eps``, ``min_pts`` or index settings are out of range."""
