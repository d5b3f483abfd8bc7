"""
Geospatial Module: datums, grid projections and grid references.

All coordinate conversions in the library originate from this package.

This module provides:
- Reference ellipsoids and datums with the Helmert datum transform
- Geodetic <-> ECEF conversion
- A generalized Transverse Mercator projection
- British National Grid, Irish Grid, UTM and MGRS references
- Geodesic distance between positions
"""

from geospatial.ellipsoid import Ellipsoid, get_ellipsoid

from geospatial.datum import (
    Datum,
    get_datum,
    reference_datum,
    helmert_transform,
    transform_geodetic,
)

from geospatial.coordinate_models import (
    geodetic_to_ecef,
    ecef_to_geodetic,
    radius_of_curvature_meridian,
    radius_of_curvature_prime_vertical,
)

from geospatial.projections import TransverseMercatorGrid

from geospatial.positions import (
    CoordinateReference,
    CoordinateSystemKind,
    GeographicPosition,
    ECEFPosition,
)

from geospatial.national_grid import (
    BRITISH_NATIONAL_GRID,
    IRISH_GRID,
    OSGridReference,
    IrishGridReference,
)

from geospatial.utm import UTMReference, utm_latitude_band, utm_zone

from geospatial.mgrs import MGRSReference, Precision, LetteringScheme

from geospatial.distance_calculations import geodesic_inverse, geodesic_distance

__all__ = [
    # Ellipsoids and datums
    "Ellipsoid",
    "get_ellipsoid",
    "Datum",
    "get_datum",
    "reference_datum",
    "helmert_transform",
    "transform_geodetic",
    # Coordinate models
    "geodetic_to_ecef",
    "ecef_to_geodetic",
    "radius_of_curvature_meridian",
    "radius_of_curvature_prime_vertical",
    # Projections
    "TransverseMercatorGrid",
    "BRITISH_NATIONAL_GRID",
    "IRISH_GRID",
    # Positions and grid references
    "CoordinateReference",
    "CoordinateSystemKind",
    "GeographicPosition",
    "ECEFPosition",
    "OSGridReference",
    "IrishGridReference",
    "UTMReference",
    "utm_latitude_band",
    "utm_zone",
    "MGRSReference",
    "Precision",
    "LetteringScheme",
    # Distance calculations
    "geodesic_inverse",
    "geodesic_distance",
]
