"""
Reference Ellipsoid Model.

An ellipsoid is fixed by its semi-major axis and either its semi-minor axis
or its first eccentricity squared; the missing value is derived. Instances
are immutable and each named ellipsoid is built once and shared by every
datum that refers to it.

References
----------
- Torge, W. (2001). Geodesy (3rd ed.). de Gruyter.
"""

import math
from dataclasses import dataclass
from typing import Optional

from common.constants import ELLIPSOID_CATALOG, EllipsoidDefinition
from common.errors import InvalidCoordinateError
from geospatial.registry import LazyRegistry


def _is_missing(value: Optional[float]) -> bool:
    return value is None or math.isnan(value)


@dataclass(frozen=True)
class Ellipsoid:
    """Parameters defining a reference ellipsoid.
    
    Attributes
    ----------
    name : str
        Identifier for the ellipsoid.
    a : float
        Semi-major axis (equatorial radius) in meters.
    b : float, optional
        Semi-minor axis (polar radius) in meters. Derived from ``e2`` if
        None or NaN.
    e2 : float, optional
        First eccentricity squared: e² = (a² - b²) / a². Derived from ``b``
        if None or NaN.
        
    Derived Parameters
    ------------------
    f : float
        Flattening: f = (a - b) / a
    ep2 : float
        Second eccentricity squared: e'² = (a² - b²) / b²
    
    Raises
    ------
    InvalidCoordinateError
        If both ``b`` and ``e2`` are missing, ``e2`` is outside [0, 1), or
        ``a > b > 0`` does not hold.
    """
    name: str
    a: float
    b: Optional[float] = None
    e2: Optional[float] = None
    
    def __post_init__(self):
        if _is_missing(self.b) and _is_missing(self.e2):
            raise InvalidCoordinateError(
                f"Ellipsoid {self.name}: at least one of the semi-minor axis "
                f"and the eccentricity squared must be defined"
            )
        
        if not _is_missing(self.e2) and not 0.0 <= self.e2 < 1.0:
            raise InvalidCoordinateError(
                f"Ellipsoid {self.name}: eccentricity squared {self.e2} out of range [0, 1)"
            )

        a_squared = self.a * self.a
        if _is_missing(self.b):
            object.__setattr__(self, "b", math.sqrt(a_squared * (1.0 - self.e2)))
        if _is_missing(self.e2):
            object.__setattr__(self, "e2", (a_squared - self.b * self.b) / a_squared)
        
        if not self.a > self.b > 0.0:
            raise InvalidCoordinateError(
                f"Ellipsoid {self.name}: axes must satisfy a > b > 0 "
                f"(a={self.a}, b={self.b})"
            )
    
    @property
    def f(self) -> float:
        """Flattening."""
        return (self.a - self.b) / self.a
    
    @property
    def ep2(self) -> float:
        """Second eccentricity squared."""
        return (self.a * self.a - self.b * self.b) / (self.b * self.b)
    
    @property
    def n(self) -> float:
        """Third flattening n = (a - b) / (a + b), used by the meridional arc series."""
        return (self.a - self.b) / (self.a + self.b)
    
    def __str__(self) -> str:
        return f"{self.name} [semi-major axis = {self.a}, semi-minor axis = {self.b}]"


def _build(key: str, definition: EllipsoidDefinition) -> Ellipsoid:
    return Ellipsoid(
        name=definition.name,
        a=definition.semi_major_axis,
        b=definition.semi_minor_axis,
        e2=definition.eccentricity_squared,
    )


ELLIPSOIDS: LazyRegistry[EllipsoidDefinition, Ellipsoid] = LazyRegistry(
    "ellipsoid", ELLIPSOID_CATALOG, _build
)


def get_ellipsoid(key: str) -> Ellipsoid:
    """Return the shared ellipsoid registered under ``key`` (e.g. ``"AIRY_1830"``)."""
    return ELLIPSOIDS.get(key)
