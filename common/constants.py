"""
Geodetic Constants and Reference Catalogs.

This module provides the projection constants of the supported grid systems
and the static catalog of named ellipsoids and datums. All values are in SI
units (metres) except the Helmert rotations (arc-seconds) and scale (ppm),
which are kept in the units they are published in.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- Ordnance Survey (2020). A Guide to Coordinate Systems in Great Britain.
- Ordnance Survey Ireland. Irish Grid definition (Ireland 1965 datum).
- DMA TM 8358.1: Datums, Ellipsoids, Grids and Grid Reference Systems.
"""

from dataclasses import dataclass
from typing import Dict, Final, Optional


@dataclass(frozen=True)
class Constant:
    """A projection constant with provenance.
    
    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma). Zero for defined values.
    unit : str
        The unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


@dataclass(frozen=True)
class EllipsoidDefinition:
    """Catalog entry for a reference ellipsoid.
    
    Exactly one of ``semi_minor_axis`` and ``eccentricity_squared`` may be
    left as None; the other is derived when the ellipsoid is built.
    """
    name: str
    semi_major_axis: float
    semi_minor_axis: Optional[float] = None
    eccentricity_squared: Optional[float] = None


@dataclass(frozen=True)
class DatumDefinition:
    """Catalog entry for a geodetic datum.
    
    The seven Helmert parameters convert a position expressed in this datum
    to the WGS84 reference datum.
    
    Attributes
    ----------
    name : str
        Full datum name.
    ellipsoid : str
        Key of the reference ellipsoid in ``ELLIPSOID_CATALOG``.
    dx, dy, dz : float
        Translations in metres.
    ds : float
        Scale correction in parts per million.
    rx, ry, rz : float
        Rotations in arc-seconds.
    """
    name: str
    ellipsoid: str
    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0
    ds: float = 0.0
    rx: float = 0.0
    ry: float = 0.0
    rz: float = 0.0


class GridConstants:
    """Registry of projection constants for the supported grids.
    
    Universal Transverse Mercator
    -----------------------------
    Fixed scale factor and false offsets shared by all 60 zones.
    
    National Grids
    --------------
    Origin, scale factor and false origin of the British National Grid
    and the Irish Grid.
    """
    
    # =========================================================================
    # UTM
    # Reference: DMA TM 8358.2
    # =========================================================================
    
    UTM_SCALE_FACTOR: Final[Constant] = Constant(
        value=0.9996,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="DMA TM 8358.2",
        description="Scale factor on the central meridian of every UTM zone"
    )
    
    UTM_FALSE_EASTING: Final[Constant] = Constant(
        value=500_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="False easting of the central meridian"
    )
    
    UTM_FALSE_NORTHING_SOUTH: Final[Constant] = Constant(
        value=10_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="False northing applied south of the equator"
    )
    
    UTM_MIN_LATITUDE: Final[Constant] = Constant(
        value=-80.0,
        uncertainty=0.0,
        unit="degree",
        source="DMA TM 8358.2",
        description="Southern limit of the UTM grid"
    )
    
    UTM_MAX_LATITUDE: Final[Constant] = Constant(
        value=84.0,
        uncertainty=0.0,
        unit="degree",
        source="DMA TM 8358.2",
        description="Northern limit of the UTM grid"
    )
    
    # =========================================================================
    # British National Grid (OSGB36 / Airy 1830)
    # Reference: OS, A Guide to Coordinate Systems in Great Britain
    # =========================================================================
    
    OSGB_SCALE_FACTOR: Final[Constant] = Constant(
        value=0.9996012717,
        uncertainty=0.0,
        unit="dimensionless",
        source="Ordnance Survey",
        description="Scale factor on the central meridian of the National Grid"
    )
    
    OSGB_ORIGIN_LATITUDE: Final[Constant] = Constant(
        value=49.0,
        uncertainty=0.0,
        unit="degree",
        source="Ordnance Survey",
        description="Latitude of the true origin"
    )
    
    OSGB_ORIGIN_LONGITUDE: Final[Constant] = Constant(
        value=-2.0,
        uncertainty=0.0,
        unit="degree",
        source="Ordnance Survey",
        description="Longitude of the true origin (central meridian)"
    )
    
    OSGB_FALSE_EASTING: Final[Constant] = Constant(
        value=400_000.0,
        uncertainty=0.0,
        unit="m",
        source="Ordnance Survey",
        description="Easting of the true origin"
    )
    
    OSGB_FALSE_NORTHING: Final[Constant] = Constant(
        value=-100_000.0,
        uncertainty=0.0,
        unit="m",
        source="Ordnance Survey",
        description="Northing of the true origin"
    )
    
    # =========================================================================
    # Irish Grid (Ireland 1965 / Modified Airy)
    # =========================================================================
    
    IRISH_SCALE_FACTOR: Final[Constant] = Constant(
        value=1.000035,
        uncertainty=0.0,
        unit="dimensionless",
        source="Ordnance Survey Ireland",
        description="Scale factor on the central meridian of the Irish Grid"
    )
    
    IRISH_ORIGIN_LATITUDE: Final[Constant] = Constant(
        value=53.5,
        uncertainty=0.0,
        unit="degree",
        source="Ordnance Survey Ireland",
        description="Latitude of the true origin"
    )
    
    IRISH_ORIGIN_LONGITUDE: Final[Constant] = Constant(
        value=-8.0,
        uncertainty=0.0,
        unit="degree",
        source="Ordnance Survey Ireland",
        description="Longitude of the true origin (central meridian)"
    )
    
    IRISH_FALSE_EASTING: Final[Constant] = Constant(
        value=200_000.0,
        uncertainty=0.0,
        unit="m",
        source="Ordnance Survey Ireland",
        description="Easting of the true origin"
    )
    
    IRISH_FALSE_NORTHING: Final[Constant] = Constant(
        value=250_000.0,
        uncertainty=0.0,
        unit="m",
        source="Ordnance Survey Ireland",
        description="Northing of the true origin"
    )


# Key of the datum every Helmert transform is expressed against.
REFERENCE_DATUM: Final[str] = "WGS84"


ELLIPSOID_CATALOG: Final[Dict[str, EllipsoidDefinition]] = {
    "AIRY_1830": EllipsoidDefinition("Airy 1830", 6377563.396, 6356256.909),
    "AUSTRALIAN_NATIONAL_1966": EllipsoidDefinition(
        "Australian National 1966", 6378160.0, 6356774.719
    ),
    "BESSEL_1841": EllipsoidDefinition("Bessel 1841", 6377397.155, 6356078.9629),
    "CLARKE_1866": EllipsoidDefinition("Clarke 1866", 6378206.4, 6356583.8),
    "CLARKE_1880": EllipsoidDefinition("Clarke 1880", 6378249.145, 6356514.8696),
    "EVEREST": EllipsoidDefinition("Everest", 6377276.34518, 6356075.41511),
    "FISCHER_1960": EllipsoidDefinition("Fischer 1960", 6378166.0, 6356784.284),
    "FISCHER_1968": EllipsoidDefinition("Fischer 1968", 6378150.0, 6356768.337),
    "GRS67": EllipsoidDefinition("GRS67", 6378160.0, 6356774.51609),
    "GRS75": EllipsoidDefinition("GRS75", 6378140.0, 6356755.288),
    "GRS80": EllipsoidDefinition("GRS80", 6378137.0, 6356752.3141),
    "HAYFORD_1910": EllipsoidDefinition("Hayford 1910", 6378388.0, 6356911.946),
    "HELMERT_1906": EllipsoidDefinition("Helmert 1906", 6378200.0, 6356818.17),
    "HOUGH_1956": EllipsoidDefinition("Hough 1956", 6378270.0, 6356794.34),
    "IERS_1989": EllipsoidDefinition("IERS 1989", 6378136.0, 6356751.302),
    "INTERNATIONAL_1924": EllipsoidDefinition(
        "International 1924", 6378388.0, 6356911.9462
    ),
    "KRASSOVSKY_1940": EllipsoidDefinition("Krassovsky 1940", 6378245.0, 6356863.019),
    # Published with e² rather than b
    "MODIFIED_AIRY": EllipsoidDefinition(
        "Modified Airy", 6377340.189, eccentricity_squared=0.00667054015
    ),
    "MODIFIED_EVEREST": EllipsoidDefinition(
        "Modified Everest", 6377304.063, 6356103.039
    ),
    "NEW_INTERNATIONAL_1967": EllipsoidDefinition(
        "New International 1967", 6378157.5, 6356772.2
    ),
    "SOUTH_AMERICAN_1969": EllipsoidDefinition(
        "South American 1969", 6378160.0, 6356774.7192
    ),
    "WGS60": EllipsoidDefinition("WGS60", 6378165.0, 6356783.287),
    "WGS66": EllipsoidDefinition("WGS66", 6378145.0, 6356759.770),
    "WGS72": EllipsoidDefinition("WGS72", 6378135.0, 6356750.5),
    "WGS84": EllipsoidDefinition("WGS84", 6378137.0, 6356752.3142),
}


def _nad27(region: str, dx: float, dy: float, dz: float) -> DatumDefinition:
    return DatumDefinition(
        name=f"North American Datum 1927 (NAD27) - {region}",
        ellipsoid="CLARKE_1866",
        dx=dx, dy=dy, dz=dz,
    )


DATUM_CATALOG: Final[Dict[str, DatumDefinition]] = {
    "WGS84": DatumDefinition("World Geodetic System 1984 (WGS84)", "WGS84"),
    "ETRF89": DatumDefinition(
        "European Terrestrial Reference Frame (ETRF89)", "WGS84"
    ),
    "OSGB36": DatumDefinition(
        name="Ordnance Survey of Great Britain 1936 (OSGB36)",
        ellipsoid="AIRY_1830",
        dx=446.448, dy=-125.157, dz=542.06,
        ds=-20.4894,
        rx=0.1502, ry=0.2470, rz=0.8421,
    ),
    "IRELAND_1965": DatumDefinition(
        name="Ireland 1965",
        ellipsoid="MODIFIED_AIRY",
        dx=482.53, dy=-130.596, dz=564.557,
        ds=8.15,
        rx=-1.042, ry=-0.214, rz=-0.631,
    ),
    "NAD27_ALASKA": _nad27("Alaska", -5.0, 135.0, 172.0),
    "NAD27_ALBERTA_BRITISH_COLUMBIA": _nad27(
        "Alberta and British Columbia", -7.0, 162.0, 188.0
    ),
    "NAD27_ALEUTIAN_EAST": _nad27("Aleutian East", -2.0, 152.0, 149.0),
    "NAD27_ALEUTIAN_WEST": _nad27("Aleutian West", 2.0, 204.0, 105.0),
    "NAD27_BAHAMAS": _nad27("Bahamas", -4.0, 154.0, 178.0),
    "NAD27_CANADA": _nad27("Canada", -10.0, 158.0, 187.0),
    "NAD27_CANADA_EAST": _nad27("Canada East", -22.0, 160.0, 190.0),
    "NAD27_CANADA_MANITOBA_ONTARIO": _nad27(
        "Canada Manitoba/Ontario", -9.0, 157.0, 184.0
    ),
    "NAD27_CANADA_NW_TERRITORY": _nad27("Canada NW Territory", 4.0, 159.0, 188.0),
    "NAD27_CANADA_YUKON": _nad27("Canada Yukon", -7.0, 139.0, 181.0),
    "NAD27_CANAL_ZONE": _nad27("Canal Zone", 0.0, 125.0, 201.0),
    "NAD27_CARIBBEAN": _nad27("Caribbean", -3.0, 142.0, 183.0),
    "NAD27_CENTRAL_AMERICA": _nad27("Central America", 0.0, 125.0, 194.0),
    "NAD27_CONTIGUOUS_US": _nad27("Contiguous United States", -8.0, 160.0, 176.0),
    "NAD27_CUBA": _nad27("Cuba", -9.0, 152.0, 178.0),
    "NAD27_EASTERN_US": _nad27("Eastern US", -9.0, 161.0, 179.0),
    "NAD27_GREENLAND": _nad27("Greenland", 11.0, 114.0, 195.0),
    "NAD27_MEXICO": _nad27("Mexico", -12.0, 130.0, 190.0),
    "NAD27_SAN_SALVADOR": _nad27("San Salvador", 1.0, 140.0, 165.0),
    "NAD27_WESTERN_US": _nad27("Western US", -8.0, 159.0, 175.0),
}
