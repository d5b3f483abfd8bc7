"""
Geodesic Distance Calculations on a Reference Ellipsoid.

This module provides distance calculations between two positions using
geodesic (shortest path on ellipsoid) algorithms. These calculations are
valid for any distance, from meters to antipodal points.

Implementation
--------------
This module wraps the `pyproj` library, which uses the GeographicLib
algorithms by Charles Karney. A ``Geod`` is built once for every ellipsoid
distances are measured on.

References
----------
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy, 87(1), 43-55.
- GeographicLib: https://geographiclib.sourceforge.io/
"""

from dataclasses import dataclass
from functools import lru_cache

from pyproj import Geod

from common.units import metres_to
from geospatial.coordinate_models import WGS84_ELLIPSOID
from geospatial.ellipsoid import Ellipsoid


@lru_cache(maxsize=None)
def _geod_for(ellipsoid: Ellipsoid) -> Geod:
    return Geod(a=ellipsoid.a, b=ellipsoid.b)


@dataclass
class GeodesicResult:
    """Result of a geodesic calculation.

    Attributes
    ----------
    distance_m : float
        Geodesic (shortest path) distance in meters.
    azimuth_forward_deg : float
        Forward azimuth (direction from point 1 to point 2) in degrees,
        clockwise from north, in [0, 360).
    azimuth_back_deg : float
        Back azimuth (direction from point 2 to point 1) in degrees,
        clockwise from north, in [0, 360).
    """
    distance_m: float
    azimuth_forward_deg: float
    azimuth_back_deg: float


def geodesic_inverse(
    lat1_deg: float,
    lon1_deg: float,
    lat2_deg: float,
    lon2_deg: float,
    ellipsoid: Ellipsoid = WGS84_ELLIPSOID
) -> GeodesicResult:
    """Solve the inverse geodesic problem.

    Given two points, find the distance and azimuths between them.

    Parameters
    ----------
    lat1_deg, lon1_deg : float
        First point in degrees.
    lat2_deg, lon2_deg : float
        Second point in degrees.
    ellipsoid : Ellipsoid
        Ellipsoid both points are expressed on (default: WGS84).

    Returns
    -------
    GeodesicResult
        Distance in meters, forward and back azimuths in degrees.

    Examples
    --------
    >>> result = geodesic_inverse(40.7128, -74.0060, 51.5074, -0.1278)
    >>> print(f"Distance: {result.distance_m / 1000:.1f} km")
    Distance: 5570.2 km
    """
    az_forward, az_back, distance_m = _geod_for(ellipsoid).inv(
        lon1_deg, lat1_deg, lon2_deg, lat2_deg
    )

    return GeodesicResult(
        distance_m=float(distance_m),
        azimuth_forward_deg=float(az_forward % 360.0),
        azimuth_back_deg=float(az_back % 360.0)
    )


def geodesic_distance(
    lat1_deg: float,
    lon1_deg: float,
    lat2_deg: float,
    lon2_deg: float,
    ellipsoid: Ellipsoid = WGS84_ELLIPSOID
) -> float:
    """Geodesic distance in meters (convenience wrapper)."""
    return geodesic_inverse(lat1_deg, lon1_deg, lat2_deg, lon2_deg, ellipsoid).distance_m


def metres_to_miles(distance_m: float) -> float:
    """Convert a distance in meters to statute miles."""
    return metres_to(distance_m, "mile")
