"""
Common utilities and infrastructure for the grid reference library.

This package provides foundational components used across all modules:
- Projection constants and the ellipsoid/datum catalogs
- Unit registry for datum parameter conversion
- Exception types
- Default numerical settings
- Logging
"""

from common.constants import GridConstants, ELLIPSOID_CATALOG, DATUM_CATALOG
from common.units import ureg, Q_
from common.errors import (
    GridReferenceError,
    InvalidCoordinateError,
    NotDefinedOnUTMGridError,
    ProjectionConvergenceError,
)
from common.config import DEFAULT_CONFIG, get_config
from common.logging_config import get_logger

__all__ = [
    "GridConstants",
    "ELLIPSOID_CATALOG",
    "DATUM_CATALOG",
    "ureg",
    "Q_",
    "GridReferenceError",
    "InvalidCoordinateError",
    "NotDefinedOnUTMGridError",
    "ProjectionConvergenceError",
    "DEFAULT_CONFIG",
    "get_config",
    "get_logger",
]
