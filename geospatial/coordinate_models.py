"""
Coordinate Models for Ellipsoidal Earth Geometry.

This module implements the conversion between geodetic coordinates
(latitude, longitude, ellipsoidal height) and Earth-Centered Earth-Fixed
(ECEF) Cartesian coordinates on an arbitrary reference ellipsoid, together
with the two principal radii of curvature used by the grid projections.

All angles in this module are in RADIANS and heights in METERS.

References
----------
- NIMA TR8350.2: WGS84 parameters
- Torge, W. (2001). Geodesy (3rd ed.). de Gruyter.
- Bowring, B.R. (1976). Transformation from spatial to geographical
  coordinates. Survey Review, 23(181), 323-327.
"""

from typing import Optional, Tuple
import numpy as np

from common.config import get_config
from geospatial.ellipsoid import Ellipsoid, get_ellipsoid


# WGS84 ellipsoid - the reference for this system
WGS84_ELLIPSOID = get_ellipsoid("WGS84")


def radius_of_curvature_meridian(
    latitude_rad: float,
    ellipsoid: Ellipsoid = WGS84_ELLIPSOID
) -> float:
    """Compute the radius of curvature in the meridian plane (ρ).
    
    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).
        
    Returns
    -------
    float
        Radius of curvature in meters.
        
    Notes
    -----
    ρ = a(1 - e²) / (1 - e² sin²φ)^(3/2)
    """
    sin_lat = np.sin(latitude_rad)
    denominator = (1 - ellipsoid.e2 * sin_lat**2) ** 1.5
    return ellipsoid.a * (1 - ellipsoid.e2) / denominator


def radius_of_curvature_prime_vertical(
    latitude_rad: float,
    ellipsoid: Ellipsoid = WGS84_ELLIPSOID
) -> float:
    """Compute the radius of curvature in the prime vertical (ν).
    
    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).
        
    Returns
    -------
    float
        Radius of curvature in meters.
        
    Notes
    -----
    ν = a / (1 - e² sin²φ)^(1/2)
    
    At the equator (φ=0): ν = a
    """
    sin_lat = np.sin(latitude_rad)
    denominator = np.sqrt(1 - ellipsoid.e2 * sin_lat**2)
    return ellipsoid.a / denominator


def geodetic_to_ecef(
    latitude_rad: float,
    longitude_rad: float,
    altitude_m: float = 0.0,
    ellipsoid: Ellipsoid = WGS84_ELLIPSOID
) -> Tuple[float, float, float]:
    """Convert geodetic coordinates to Earth-Centered Earth-Fixed (ECEF).
    
    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    longitude_rad : float
        Geodetic longitude in radians.
    altitude_m : float
        Height above ellipsoid in meters.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).
        
    Returns
    -------
    Tuple[float, float, float]
        (X, Y, Z) coordinates in meters in ECEF frame.
        
    Notes
    -----
    The ECEF frame has:
    - Origin at the ellipsoid centre
    - X-axis through the prime meridian (0° longitude) at equator
    - Y-axis through 90°E at equator
    - Z-axis through the North Pole
    """
    sin_lat = np.sin(latitude_rad)
    cos_lat = np.cos(latitude_rad)
    sin_lon = np.sin(longitude_rad)
    cos_lon = np.cos(longitude_rad)
    
    N = radius_of_curvature_prime_vertical(latitude_rad, ellipsoid)
    
    X = (N + altitude_m) * cos_lat * cos_lon
    Y = (N + altitude_m) * cos_lat * sin_lon
    Z = (N * (1 - ellipsoid.e2) + altitude_m) * sin_lat
    
    return float(X), float(Y), float(Z)


def _bowring_latitude(
    Z: float,
    p: float,
    theta: float,
    ellipsoid: Ellipsoid
) -> float:
    # φ = atan((Z + e'² b sin³θ) / (p - e² a cos³θ))
    return np.arctan2(
        Z + ellipsoid.ep2 * ellipsoid.b * np.sin(theta) ** 3,
        p - ellipsoid.e2 * ellipsoid.a * np.cos(theta) ** 3
    )


def ecef_to_geodetic(
    X: float,
    Y: float,
    Z: float,
    ellipsoid: Ellipsoid = WGS84_ELLIPSOID,
    max_refinements: Optional[int] = None,
    tolerance: Optional[float] = None
) -> Tuple[float, float, float]:
    """Convert ECEF coordinates to geodetic (latitude, longitude, altitude).
    
    Uses Bowring's closed-form solution as the first estimate, then
    re-evaluates it from the reduced latitude of the current estimate up
    to ``max_refinements`` times.
    
    Parameters
    ----------
    X, Y, Z : float
        ECEF coordinates in meters.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).
    max_refinements : int, optional
        Number of additional Bowring steps. 0 returns the single-pass
        closed-form result. Defaults to ``ecef.max_refinements``.
    tolerance : float, optional
        Stop refining once the latitude changes by less than this many
        radians. Defaults to ``ecef.tolerance_rad``.
        
    Returns
    -------
    Tuple[float, float, float]
        (latitude_rad, longitude_rad, altitude_m)
        
    Notes
    -----
    The single closed-form step is accurate to well under a millimetre for
    terrestrial heights; one refinement brings latitude to the limit of
    double precision.
    """
    if max_refinements is None:
        max_refinements = get_config("ecef", "max_refinements")
    if tolerance is None:
        tolerance = get_config("ecef", "tolerance_rad")
    
    a = ellipsoid.a
    b = ellipsoid.b
    
    longitude_rad = np.arctan2(Y, X)
    
    # Distance from Z-axis
    p = np.sqrt(X**2 + Y**2)
    
    # Handle polar singularity
    if p < 1e-10:
        latitude_rad = np.pi / 2 if Z >= 0 else -np.pi / 2
        altitude_m = np.abs(Z) - b
        return float(latitude_rad), float(longitude_rad), float(altitude_m)
    
    theta = np.arctan2(Z * a, p * b)
    latitude_rad = _bowring_latitude(Z, p, theta, ellipsoid)
    
    for _ in range(max_refinements):
        # Reduced latitude of the current estimate: tan β = (b/a) tan φ
        theta = np.arctan2(b * np.sin(latitude_rad), a * np.cos(latitude_rad))
        latitude_new = _bowring_latitude(Z, p, theta, ellipsoid)
        
        converged = np.abs(latitude_new - latitude_rad) < tolerance
        latitude_rad = latitude_new
        if converged:
            break
    
    sin_lat = np.sin(latitude_rad)
    cos_lat = np.cos(latitude_rad)
    
    # h = p cosφ + Z sinφ - a √(1 - e² sin²φ), valid at all latitudes
    altitude_m = p * cos_lat + Z * sin_lat - a * np.sqrt(1 - ellipsoid.e2 * sin_lat**2)
    
    return float(latitude_rad), float(longitude_rad), float(altitude_m)
