"""
Geodetic Datums and the 7-parameter Helmert Transform.

A datum pairs a reference ellipsoid with the Helmert parameters that take a
position expressed in that datum to WGS84, the reference datum. Transforms
between two non-reference datums hop through WGS84; there is no direct
datum-to-datum composition.

Sign convention
---------------
Catalogued parameters are used as-is for datum -> WGS84. For WGS84 -> datum
every parameter (dx, dy, dz, ds, rx, ry, rz) is negated.

References
----------
- Ordnance Survey (2020). A Guide to Coordinate Systems in Great Britain,
  section 6.6 (Helmert datum transformation).
"""

from dataclasses import dataclass
from typing import Tuple, Union
import numpy as np

from common.constants import DATUM_CATALOG, REFERENCE_DATUM, DatumDefinition
from common.logging_config import get_logger
from common.units import arcseconds_to_radians, ppm_to_fraction
from geospatial.coordinate_models import ecef_to_geodetic, geodetic_to_ecef
from geospatial.ellipsoid import Ellipsoid, get_ellipsoid
from geospatial.registry import LazyRegistry

logger = get_logger(__name__)


@dataclass(frozen=True)
class Datum:
    """A named geodetic datum.
    
    Attributes
    ----------
    key : str
        Registry identifier, e.g. ``"OSGB36"``.
    name : str
        Full datum name.
    ellipsoid : Ellipsoid
        Shared reference ellipsoid.
    dx, dy, dz : float
        Translations to WGS84 in metres.
    ds : float
        Scale correction to WGS84 in ppm.
    rx, ry, rz : float
        Rotations to WGS84 in arc-seconds.
    """
    key: str
    name: str
    ellipsoid: Ellipsoid
    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0
    ds: float = 0.0
    rx: float = 0.0
    ry: float = 0.0
    rz: float = 0.0
    
    @property
    def is_reference(self) -> bool:
        """Whether this is the WGS84 reference datum."""
        return self.key == REFERENCE_DATUM
    
    def __str__(self) -> str:
        return (
            f"{self.name} {self.ellipsoid} dx={self.dx} dy={self.dy} dz={self.dz} "
            f"ds={self.ds} rx={self.rx} ry={self.ry} rz={self.rz}"
        )


def _build(key: str, definition: DatumDefinition) -> Datum:
    return Datum(
        key=key,
        name=definition.name,
        ellipsoid=get_ellipsoid(definition.ellipsoid),
        dx=definition.dx,
        dy=definition.dy,
        dz=definition.dz,
        ds=definition.ds,
        rx=definition.rx,
        ry=definition.ry,
        rz=definition.rz,
    )


DATUMS: LazyRegistry[DatumDefinition, Datum] = LazyRegistry("datum", DATUM_CATALOG, _build)


def get_datum(key: str) -> Datum:
    """Return the shared datum registered under ``key`` (e.g. ``"OSGB36"``)."""
    return DATUMS.get(key)


def reference_datum() -> Datum:
    """Return the WGS84 reference datum."""
    return DATUMS.get(REFERENCE_DATUM)


def resolve_datum(datum: Union[Datum, str]) -> Datum:
    """Accept either a Datum or its registry key."""
    if isinstance(datum, Datum):
        return datum
    return get_datum(datum)


def helmert_transform(
    X: float,
    Y: float,
    Z: float,
    datum: Datum,
    inverse: bool = False
) -> Tuple[float, float, float]:
    """Apply the 7-parameter similarity transform of ``datum``.
    
    Parameters
    ----------
    X, Y, Z : float
        Cartesian coordinates in meters.
    datum : Datum
        Datum whose parameters are applied.
    inverse : bool
        False: ``datum`` -> WGS84. True: WGS84 -> ``datum`` (all seven
        parameters negated).
        
    Returns
    -------
    Tuple[float, float, float]
        Transformed (X, Y, Z) in meters.
        
    Notes
    -----
    Small-angle position-vector form::
    
        | X' |   | dx |   | 1+s  -rz   ry  | | X |
        | Y' | = | dy | + |  rz  1+s  -rx  | | Y |
        | Z' |   | dz |   | -ry   rx  1+s  | | Z |
    """
    sign = -1.0 if inverse else 1.0
    
    translation = sign * np.array([datum.dx, datum.dy, datum.dz])
    s = sign * ppm_to_fraction(datum.ds)
    rx = sign * arcseconds_to_radians(datum.rx)
    ry = sign * arcseconds_to_radians(datum.ry)
    rz = sign * arcseconds_to_radians(datum.rz)
    
    rotation = np.array([
        [1 + s, -rz, ry],
        [rz, 1 + s, -rx],
        [-ry, rx, 1 + s],
    ])
    
    X_new, Y_new, Z_new = translation + rotation @ np.array([X, Y, Z])
    return float(X_new), float(Y_new), float(Z_new)


def transform_geodetic(
    latitude_deg: float,
    longitude_deg: float,
    height_m: float,
    source: Datum,
    target: Datum
) -> Tuple[float, float]:
    """Move a geodetic position from ``source`` to ``target``.
    
    Routes geographic -> ECEF (source ellipsoid) -> Helmert -> geographic
    (target ellipsoid). The height is used for the ECEF step but is not
    itself transformed.
    
    Returns
    -------
    Tuple[float, float]
        (latitude_deg, longitude_deg) on the target datum.
    """
    if source is target or (source.is_reference and target.is_reference):
        return latitude_deg, longitude_deg
    
    if not source.is_reference and not target.is_reference:
        logger.debug(f"Transforming {source.key} -> {target.key} via {REFERENCE_DATUM}")
        wgs84 = reference_datum()
        latitude_deg, longitude_deg = transform_geodetic(
            latitude_deg, longitude_deg, height_m, source, wgs84
        )
        return transform_geodetic(latitude_deg, longitude_deg, height_m, wgs84, target)
    
    if target.is_reference:
        parameters, inverse = source, False
    else:
        parameters, inverse = target, True
    
    X, Y, Z = geodetic_to_ecef(
        np.radians(latitude_deg), np.radians(longitude_deg), height_m, source.ellipsoid
    )
    X, Y, Z = helmert_transform(X, Y, Z, parameters, inverse=inverse)
    latitude_rad, longitude_rad, _ = ecef_to_geodetic(X, Y, Z, target.ellipsoid)
    
    return float(np.degrees(latitude_rad)), float(np.degrees(longitude_rad))
