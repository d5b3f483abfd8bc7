"""
British National Grid and Irish Grid.

Both grids are instances of the generalized Transverse Mercator engine, each
tied to its own datum:

- National Grid: OSGB36 datum, Airy 1830 ellipsoid, true origin 49°N 2°W.
- Irish Grid: Ireland 1965 datum, Modified Airy ellipsoid, true origin
  53.5°N 8°W.

Positions on any other datum are moved onto the grid's datum before being
projected.

Six-figure references
---------------------
A six-figure reference names a 100 km square with letters and then gives
the easting and northing inside that square to the nearest 100 m. The
letters come from a 5 x 5 table of A..Z without I, read row by row from the
north-west corner.

References
----------
- Ordnance Survey (2020). A Guide to Coordinate Systems in Great Britain.
"""

import re
from dataclasses import dataclass
from typing import ClassVar, Tuple

from common.constants import GridConstants
from common.errors import InvalidCoordinateError
from geospatial.datum import Datum, get_datum
from geospatial.positions import CoordinateReference, CoordinateSystemKind, GeographicPosition
from geospatial.projections import TransverseMercatorGrid


BRITISH_NATIONAL_GRID = TransverseMercatorGrid(
    name="British National Grid",
    ellipsoid=get_datum("OSGB36").ellipsoid,
    scale_factor=GridConstants.OSGB_SCALE_FACTOR.value,
    origin_latitude=GridConstants.OSGB_ORIGIN_LATITUDE.value,
    origin_longitude=GridConstants.OSGB_ORIGIN_LONGITUDE.value,
    false_easting=GridConstants.OSGB_FALSE_EASTING.value,
    false_northing=GridConstants.OSGB_FALSE_NORTHING.value,
)

IRISH_GRID = TransverseMercatorGrid(
    name="Irish Grid",
    ellipsoid=get_datum("IRELAND_1965").ellipsoid,
    scale_factor=GridConstants.IRISH_SCALE_FACTOR.value,
    origin_latitude=GridConstants.IRISH_ORIGIN_LATITUDE.value,
    origin_longitude=GridConstants.IRISH_ORIGIN_LONGITUDE.value,
    false_easting=GridConstants.IRISH_FALSE_EASTING.value,
    false_northing=GridConstants.IRISH_FALSE_NORTHING.value,
)

_OS_SIX_FIGURE = re.compile(r"([HNOST])([A-HJ-Z])(\d{3})(\d{3})")
_IRISH_SIX_FIGURE = re.compile(r"([A-HJ-Z])(\d{3})(\d{3})")

# Offset of each OS 500 km square from the false origin
_OS_MAJOR_SQUARE_OFFSETS = {
    "S": (0.0, 0.0),
    "T": (500_000.0, 0.0),
    "N": (0.0, 500_000.0),
    "O": (500_000.0, 500_000.0),
    "H": (0.0, 1_000_000.0),
}


def _square_offset(letter: str) -> Tuple[float, float]:
    # 100 km square letter -> (easting, northing) of its south-west corner
    index = ord(letter)
    if index > ord("I"):
        index -= 1
    index -= ord("A")
    return (index % 5) * 100_000.0, (4 - index // 5) * 100_000.0


def _square_letter(column: int, row: int) -> str:
    # Inverse of _square_offset for a column/row within a 5 x 5 block
    index = ord("A") + (4 - row) * 5 + column
    if index >= ord("I"):
        index += 1
    return chr(index)


@dataclass(frozen=True)
class TransverseMercatorGridReference(CoordinateReference):
    """Easting and northing on a national Transverse Mercator grid.

    Subclasses fix the grid, its datum and its bounding box.

    Raises
    ------
    InvalidCoordinateError
        If the easting or northing is outside the grid's bounding box.
    """
    easting: float
    northing: float

    grid: ClassVar[TransverseMercatorGrid]
    datum_key: ClassVar[str]
    max_easting: ClassVar[float]
    max_northing: ClassVar[float]
    northing_limit_inclusive: ClassVar[bool] = False

    def __post_init__(self):
        if not 0.0 <= self.easting < self.max_easting:
            raise InvalidCoordinateError(
                f"{self.grid.name}: easting {self.easting} out of range "
                f"[0, {self.max_easting:.0f})"
            )
        if self.northing_limit_inclusive:
            northing_valid = 0.0 <= self.northing <= self.max_northing
            upper = f"{self.max_northing:.0f}]"
        else:
            northing_valid = 0.0 <= self.northing < self.max_northing
            upper = f"{self.max_northing:.0f})"
        if not northing_valid:
            raise InvalidCoordinateError(
                f"{self.grid.name}: northing {self.northing} out of range [0, {upper}"
            )

    @property
    def datum(self) -> Datum:
        return get_datum(self.datum_key)

    @classmethod
    def from_geographic(cls, position: CoordinateReference):
        """Project a position, moving it onto the grid's datum first."""
        geographic = position.to_geographic().to_datum(get_datum(cls.datum_key))
        easting, northing = cls.grid.to_projected(geographic.latitude, geographic.longitude)
        return cls(easting, northing)

    def to_geographic(self) -> GeographicPosition:
        latitude, longitude = self.grid.to_geodetic(self.easting, self.northing)
        return GeographicPosition(latitude, longitude, 0.0, self.datum)

    def __str__(self) -> str:
        return f"({self.easting}, {self.northing})"


@dataclass(frozen=True)
class OSGridReference(TransverseMercatorGridReference):
    """A reference on the British National Grid (OSGB36).

    Examples
    --------
    >>> OSGridReference.from_string("TG514131")
    OSGridReference(easting=651400.0, northing=313100.0)
    """
    grid: ClassVar[TransverseMercatorGrid] = BRITISH_NATIONAL_GRID
    datum_key: ClassVar[str] = "OSGB36"
    max_easting: ClassVar[float] = 800_000.0
    max_northing: ClassVar[float] = 1_400_000.0

    kind: ClassVar[CoordinateSystemKind] = CoordinateSystemKind.OS_GRID

    @classmethod
    def from_string(cls, reference: str) -> "OSGridReference":
        """Parse a six-figure reference such as ``"TG514131"``.

        The result is the south-west corner of the 100 m square.

        Raises
        ------
        InvalidCoordinateError
            If the string is not two valid square letters and six digits.
        """
        match = _OS_SIX_FIGURE.fullmatch(reference.strip().upper())
        if match is None:
            raise InvalidCoordinateError(
                f"Invalid OS six-figure grid reference '{reference}'"
            )
        major, minor, east_digits, north_digits = match.groups()

        major_east, major_north = _OS_MAJOR_SQUARE_OFFSETS[major]
        minor_east, minor_north = _square_offset(minor)

        easting = int(east_digits) * 100.0 + minor_east + major_east
        northing = int(north_digits) * 100.0 + minor_north + major_north
        return cls(easting, northing)

    def to_six_figure_string(self) -> str:
        """Format as a six-figure reference, truncated to 100 m."""
        hundred_km_e = int(self.easting // 100_000)
        hundred_km_n = int(self.northing // 100_000)

        if hundred_km_n < 5:
            major = "S" if hundred_km_e < 5 else "T"
        elif hundred_km_n < 10:
            major = "N" if hundred_km_e < 5 else "O"
        else:
            major = "H"
        minor = _square_letter(hundred_km_e % 5, hundred_km_n % 5)

        east_digits = int((self.easting - 100_000 * hundred_km_e) // 100)
        north_digits = int((self.northing - 100_000 * hundred_km_n) // 100)
        return f"{major}{minor}{east_digits:03d}{north_digits:03d}"


@dataclass(frozen=True)
class IrishGridReference(TransverseMercatorGridReference):
    """A reference on the Irish Grid (Ireland 1965).

    Examples
    --------
    >>> IrishGridReference.from_string("O155345")
    IrishGridReference(easting=315500.0, northing=234500.0)
    """
    grid: ClassVar[TransverseMercatorGrid] = IRISH_GRID
    datum_key: ClassVar[str] = "IRELAND_1965"
    max_easting: ClassVar[float] = 400_000.0
    max_northing: ClassVar[float] = 500_000.0
    northing_limit_inclusive: ClassVar[bool] = True

    kind: ClassVar[CoordinateSystemKind] = CoordinateSystemKind.IRISH_GRID

    @classmethod
    def from_string(cls, reference: str) -> "IrishGridReference":
        """Parse a six-figure reference such as ``"O155345"``.

        Raises
        ------
        InvalidCoordinateError
            If the string is not one square letter (not I) and six digits.
        """
        match = _IRISH_SIX_FIGURE.fullmatch(reference.strip().upper())
        if match is None:
            raise InvalidCoordinateError(
                f"Invalid Irish six-figure grid reference '{reference}'"
            )
        letter, east_digits, north_digits = match.groups()
        square_east, square_north = _square_offset(letter)

        return cls(
            int(east_digits) * 100.0 + square_east,
            int(north_digits) * 100.0 + square_north,
        )

    def to_six_figure_string(self) -> str:
        """Format as a six-figure reference, truncated to 100 m.

        Raises
        ------
        InvalidCoordinateError
            On the northern edge (northing 500000), which has no square letter.
        """
        hundred_km_e = int(self.easting // 100_000)
        hundred_km_n = int(self.northing // 100_000)
        if hundred_km_n > 4:
            raise InvalidCoordinateError(
                f"Irish Grid northing {self.northing} has no 100 km square letter"
            )
        letter = _square_letter(hundred_km_e, hundred_km_n)

        east_digits = int((self.easting - 100_000 * hundred_km_e) // 100)
        north_digits = int((self.northing - 100_000 * hundred_km_n) // 100)
        return f"{letter}{east_digits:03d}{north_digits:03d}"
