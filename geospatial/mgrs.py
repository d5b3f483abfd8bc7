"""
Military Grid Reference System.

An MGRS reference is a UTM reference with the easting and northing split
into a 100 km square identifier and the offset inside that square::

    31U DQ 48251 11932
    |   || |     +---- northing within the square
    |   || +---------- easting within the square
    |   |+------------ row letter (A..V, repeats every 2 000 000 m)
    |   +------------- column letter (A..Z, 8 letters per zone)
    +----------------- UTM zone and latitude band

Column letters cycle through three sets of eight (A-H, J-R, S-Z) in
consecutive zones. Row letters are offset by five in even-numbered sets.
The alternate (AL) lettering scheme, used with the Bessel 1841 and Clarke
ellipsoids, shifts every row letter by a further ten.

I and O are never used as square letters.
"""

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar, Dict, Optional

from common.errors import InvalidCoordinateError, NotDefinedOnUTMGridError
from common.logging_config import get_logger
from geospatial.datum import Datum, reference_datum
from geospatial.positions import CoordinateReference, CoordinateSystemKind, GeographicPosition
from geospatial.utm import LATITUDE_BANDS, UTMReference

logger = get_logger(__name__)

ROW_LETTERS = "ABCDEFGHJKLMNPQRSTUV"

# Column letters available in each of the three zone sets
_COLUMN_LETTERS = ("ABCDEFGH", "JKLMNPQR", "STUVWXYZ")

# Northing of the southern edge of each latitude band, in meters
_BAND_MIN_NORTHING: Dict[str, float] = {
    "C": 1_100_000.0,
    "D": 2_000_000.0,
    "E": 2_800_000.0,
    "F": 3_700_000.0,
    "G": 4_600_000.0,
    "H": 5_500_000.0,
    "J": 6_400_000.0,
    "K": 7_300_000.0,
    "L": 8_200_000.0,
    "M": 9_100_000.0,
    "N": 0.0,
    "P": 800_000.0,
    "Q": 1_700_000.0,
    "R": 2_600_000.0,
    "S": 3_500_000.0,
    "T": 4_400_000.0,
    "U": 5_300_000.0,
    "V": 6_200_000.0,
    "W": 7_000_000.0,
    "X": 7_900_000.0,
}

_MGRS_PATTERN = re.compile(r"(\d{1,2})([A-Z])([A-Z])([A-Z])(\d*)")

_ROW_CYCLE = 2_000_000.0
_SQUARE = 100_000.0


class Precision(IntEnum):
    """Size of the square an MGRS reference identifies, in meters."""
    ONE_METRE = 1
    TEN_METRES = 10
    HUNDRED_METRES = 100
    ONE_KILOMETRE = 1000
    TEN_KILOMETRES = 10000

    @property
    def digits(self) -> int:
        """Digits used for each of the easting and northing."""
        return 6 - len(str(self.value))


class LetteringScheme(Enum):
    """100 km square row lettering scheme."""
    AA = "AA"
    AL = "AL"


def set_number(zone: int) -> int:
    """Lettering set (1-6) used by a UTM zone."""
    return ((zone - 1) % 6) + 1


@dataclass(frozen=True)
class MGRSReference(CoordinateReference):
    """An MGRS grid reference.

    Attributes
    ----------
    zone : int
        UTM zone, 1 to 60.
    band : str
        UTM latitude band letter.
    column : str
        100 km square column letter.
    row : str
        100 km square row letter.
    easting, northing : int
        Offset within the 100 km square in meters, 0 to 99999.
    precision : Precision
        Size of the identified square.
    scheme : LetteringScheme
        Row lettering scheme.

    Raises
    ------
    NotDefinedOnUTMGridError
        If the zone or band is outside the UTM grid.
    InvalidCoordinateError
        If a square letter or offset is invalid.

    Examples
    --------
    >>> ref = MGRSReference.from_string("31U DQ 48251 11932")
    >>> print(ref.to_utm())
    31U 448251 5411932
    """
    zone: int
    band: str
    column: str
    row: str
    easting: int
    northing: int
    precision: Precision = Precision.ONE_METRE
    scheme: LetteringScheme = LetteringScheme.AA

    kind: ClassVar[CoordinateSystemKind] = CoordinateSystemKind.MGRS

    def __post_init__(self):
        if not 1 <= self.zone <= 60:
            raise NotDefinedOnUTMGridError(f"MGRS zone {self.zone} out of range [1, 60]")
        if len(self.band) != 1 or self.band not in LATITUDE_BANDS:
            raise NotDefinedOnUTMGridError(
                f"MGRS latitude band '{self.band}' is not one of {LATITUDE_BANDS}"
            )

        columns = _COLUMN_LETTERS[(set_number(self.zone) - 1) % 3]
        if len(self.column) != 1 or self.column not in columns:
            raise InvalidCoordinateError(
                f"MGRS column letter '{self.column}' is not valid in zone {self.zone} "
                f"(expected one of {columns})"
            )
        if len(self.row) != 1 or self.row not in ROW_LETTERS:
            raise InvalidCoordinateError(
                f"MGRS row letter '{self.row}' is not one of {ROW_LETTERS}"
            )

        if not 0 <= self.easting <= 99_999:
            raise InvalidCoordinateError(f"MGRS easting {self.easting} out of range [0, 99999]")
        if not 0 <= self.northing <= 99_999:
            raise InvalidCoordinateError(f"MGRS northing {self.northing} out of range [0, 99999]")
        object.__setattr__(self, "easting", int(self.easting))
        object.__setattr__(self, "northing", int(self.northing))

        try:
            object.__setattr__(self, "precision", Precision(self.precision))
        except ValueError as exc:
            raise InvalidCoordinateError(
                f"MGRS precision {self.precision} is not one of 1, 10, 100, 1000, 10000"
            ) from exc
        object.__setattr__(self, "scheme", LetteringScheme(self.scheme))

    @property
    def datum(self) -> Datum:
        return reference_datum()

    @classmethod
    def from_utm(
        cls,
        utm: UTMReference,
        scheme: LetteringScheme = LetteringScheme.AA
    ) -> "MGRSReference":
        """Encode a UTM reference at 1 m precision.

        Raises
        ------
        NotDefinedOnUTMGridError
            If the easting lies outside the eight 100 km columns of a zone.
        """
        set_no = set_number(utm.zone)

        square_e = int(utm.easting // _SQUARE)
        if not 1 <= square_e <= 8:
            raise NotDefinedOnUTMGridError(
                f"UTM easting {utm.easting} has no MGRS column letter"
            )
        column_id = square_e + 8 * ((set_no - 1) % 3)
        if column_id > 8:
            column_id += 1  # skip I
        if column_id > 14:
            column_id += 1  # skip O
        column = chr(column_id + 64)

        row_id = int((utm.northing % _ROW_CYCLE) // _SQUARE)
        if set_no % 2 == 0:
            row_id += 5
        if scheme is LetteringScheme.AL:
            row_id += 10
        row = ROW_LETTERS[row_id % 20]

        return cls(
            zone=utm.zone,
            band=utm.band,
            column=column,
            row=row,
            easting=int(utm.easting % _SQUARE),
            northing=int(utm.northing % _SQUARE),
            precision=Precision.ONE_METRE,
            scheme=scheme,
        )

    @classmethod
    def from_string(
        cls,
        reference: str,
        scheme: LetteringScheme = LetteringScheme.AA
    ) -> "MGRSReference":
        """Parse an MGRS string such as ``"31UDQ4825111932"``.

        Whitespace is ignored and letters may be lower case. The precision
        follows from the number of digits.

        Raises
        ------
        InvalidCoordinateError
            If the string is malformed or has an odd or out-of-range number
            of digits.
        """
        compact = "".join(reference.split()).upper()
        match = _MGRS_PATTERN.fullmatch(compact)
        if match is None:
            raise InvalidCoordinateError(f"Invalid MGRS reference '{reference}'")

        zone, band, column, row, digits = match.groups()
        if len(digits) % 2 != 0 or not 2 <= len(digits) <= 10:
            raise InvalidCoordinateError(
                f"MGRS reference '{reference}' must have an even number of "
                f"digits between 2 and 10, got {len(digits)}"
            )

        half = len(digits) // 2
        precision = Precision(10 ** (5 - half))
        return cls(
            zone=int(zone),
            band=band,
            column=column,
            row=row,
            easting=int(digits[:half]) * precision,
            northing=int(digits[half:]) * precision,
            precision=precision,
            scheme=scheme,
        )

    def to_utm(self) -> UTMReference:
        """Decode to the UTM reference of the square's south-west corner."""
        set_no = set_number(self.zone)

        column_index = ord(self.column) - ord("A")
        if column_index >= 15:
            column_index -= 1  # O
        if column_index >= 9:
            column_index -= 1  # I
        utm_easting = (self.easting + (column_index % 8 + 1) * _SQUARE) % 1_000_000.0

        if self.scheme is LetteringScheme.AA:
            false_northing = 0.0 if set_no % 2 == 1 else 1_500_000.0
        else:
            false_northing = 1_000_000.0 if set_no % 2 == 1 else 500_000.0

        row_index = ord(self.row) - ord("A")
        grid_northing = row_index * _SQUARE + false_northing
        if row_index > 14:
            grid_northing -= _SQUARE  # O
        if row_index > 8:
            grid_northing -= _SQUARE  # I
        if grid_northing >= _ROW_CYCLE:
            grid_northing -= _ROW_CYCLE

        # Pick the 2 000 000 m cycle that places the row inside the band
        min_northing = _BAND_MIN_NORTHING[self.band]
        grid_northing -= min_northing % _ROW_CYCLE
        if grid_northing < 0.0:
            grid_northing += _ROW_CYCLE
        utm_northing = min_northing + grid_northing + self.northing

        logger.debug(f"Decoded {self} to UTM {self.zone}{self.band} {utm_easting} {utm_northing}")
        return UTMReference(self.zone, self.band, utm_easting, utm_northing)

    def to_geographic(self) -> GeographicPosition:
        return self.to_utm().to_geographic()

    def to_string(self, precision: Optional[Precision] = None) -> str:
        """Format as a compact MGRS string, truncating to ``precision``."""
        precision = Precision(precision if precision is not None else self.precision)
        width = precision.digits
        easting = self.easting // precision
        northing = self.northing // precision
        return (
            f"{self.zone:02d}{self.band}{self.column}{self.row}"
            f"{easting:0{width}d}{northing:0{width}d}"
        )

    def __str__(self) -> str:
        return self.to_string()
