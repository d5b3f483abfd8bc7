"""
Exception taxonomy for grid reference and datum conversions.

Invalid input values and projection-domain limits are reported with
separate exception types so callers can tell a malformed value from a
position the grid simply does not cover.
"""


class GridReferenceError(ValueError):
    """Base class for all coordinate conversion failures."""


class InvalidCoordinateError(GridReferenceError):
    """A value is outside its documented domain or a string is malformed."""


class NotDefinedOnUTMGridError(GridReferenceError):
    """The position, zone or band lies outside the UTM/MGRS grid."""


class ProjectionConvergenceError(GridReferenceError):
    """The inverse Transverse Mercator iteration did not converge."""
