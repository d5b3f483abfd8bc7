"""
Universal Transverse Mercator.

Sixty 6° longitude zones, each a Transverse Mercator projection of the WGS84
ellipsoid about its own central meridian, combined with 8° latitude bands
lettered C to X (I and O are skipped; band X spans 12°).

The projection itself is the shared engine in ``geospatial.projections``
configured per zone:

    F0 = 0.9996, φ0 = 0, λ0 = 6·zone - 183, E0 = 500 000 m,
    N0 = 0 (northern hemisphere) or 10 000 000 m (southern hemisphere)

Zone exceptions
---------------
- South-west Norway (56°N to 64°N, 3°E to 12°E) is zone 32.
- Svalbard (72°N to 84°N) uses zones 31, 33, 35 and 37 only.

References
----------
- DMA TM 8358.2: The Universal Grids: UTM and UPS.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import ClassVar, Tuple

from common.constants import GridConstants
from common.errors import NotDefinedOnUTMGridError
from geospatial.datum import Datum, reference_datum
from geospatial.positions import CoordinateReference, CoordinateSystemKind, GeographicPosition
from geospatial.projections import TransverseMercatorGrid


LATITUDE_BANDS = "CDEFGHJKLMNPQRSTUVWX"

# Svalbard: (min longitude, max longitude, zone)
_SVALBARD_ZONES: Tuple[Tuple[float, float, int], ...] = (
    (0.0, 9.0, 31),
    (9.0, 21.0, 33),
    (21.0, 33.0, 35),
    (33.0, 42.0, 37),
)


def utm_latitude_band(latitude: float) -> str:
    """Return the UTM latitude band letter for a latitude in degrees.

    Returns ``'Z'`` for latitudes outside the UTM limits.

    Examples
    --------
    >>> utm_latitude_band(51.5)
    'U'
    """
    if 72.0 <= latitude <= 84.0:
        return "X"
    if -80.0 <= latitude < 72.0:
        return LATITUDE_BANDS[int((latitude + 80.0) // 8)]
    return "Z"


def _normalize_longitude(longitude: float) -> float:
    # Map into [-180, 180); 180 itself belongs to zone 1
    return (longitude + 180.0) % 360.0 - 180.0


def utm_zone(latitude: float, longitude: float) -> int:
    """Return the UTM zone number for a WGS84 position in degrees."""
    longitude = _normalize_longitude(longitude)
    zone = int((longitude + 180.0) // 6) + 1

    if 56.0 <= latitude < 64.0 and 3.0 <= longitude < 12.0:
        zone = 32

    if 72.0 <= latitude < 84.0:
        for west, east, svalbard_zone in _SVALBARD_ZONES:
            if west <= longitude < east:
                zone = svalbard_zone
                break

    return zone


def central_meridian(zone: int) -> float:
    """Longitude of the central meridian of ``zone`` in degrees."""
    return (zone - 1) * 6.0 - 180.0 + 3.0


@lru_cache(maxsize=None)
def utm_grid(zone: int, southern_hemisphere: bool) -> TransverseMercatorGrid:
    """Transverse Mercator grid for one UTM zone and hemisphere."""
    return TransverseMercatorGrid(
        name=f"UTM zone {zone}{'S' if southern_hemisphere else 'N'}",
        ellipsoid=reference_datum().ellipsoid,
        scale_factor=GridConstants.UTM_SCALE_FACTOR.value,
        origin_latitude=0.0,
        origin_longitude=central_meridian(zone),
        false_easting=GridConstants.UTM_FALSE_EASTING.value,
        false_northing=(
            GridConstants.UTM_FALSE_NORTHING_SOUTH.value if southern_hemisphere else 0.0
        ),
    )


def _format_metres(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class UTMReference(CoordinateReference):
    """A UTM grid reference. Always on the WGS84 datum.

    Attributes
    ----------
    zone : int
        Longitude zone, 1 to 60.
    band : str
        Latitude band letter, C to X excluding I and O.
    easting : float
        Easting in meters, 0 to 1 000 000.
    northing : float
        Northing in meters, 0 to 10 000 000.

    Raises
    ------
    NotDefinedOnUTMGridError
        If any component is outside the UTM grid.
    """
    zone: int
    band: str
    easting: float
    northing: float

    kind: ClassVar[CoordinateSystemKind] = CoordinateSystemKind.UTM

    def __post_init__(self):
        if not 1 <= self.zone <= 60:
            raise NotDefinedOnUTMGridError(f"UTM zone {self.zone} out of range [1, 60]")
        if len(self.band) != 1 or self.band not in LATITUDE_BANDS:
            raise NotDefinedOnUTMGridError(
                f"UTM latitude band '{self.band}' is not one of {LATITUDE_BANDS}"
            )
        if not 0.0 <= self.easting <= 1_000_000.0:
            raise NotDefinedOnUTMGridError(
                f"UTM easting {self.easting} out of range [0, 1000000]"
            )
        if not 0.0 <= self.northing <= 10_000_000.0:
            raise NotDefinedOnUTMGridError(
                f"UTM northing {self.northing} out of range [0, 10000000]"
            )

    @property
    def datum(self) -> Datum:
        return reference_datum()

    @property
    def southern_hemisphere(self) -> bool:
        return self.band < "N"

    @classmethod
    def from_geographic(cls, position: CoordinateReference) -> "UTMReference":
        """Project a position (moved to WGS84 first) onto its UTM zone.

        Raises
        ------
        NotDefinedOnUTMGridError
            If the latitude is outside [-80, 84].
        """
        geographic = position.to_geographic().to_wgs84()
        latitude = geographic.latitude
        longitude = _normalize_longitude(geographic.longitude)

        min_latitude = GridConstants.UTM_MIN_LATITUDE.value
        max_latitude = GridConstants.UTM_MAX_LATITUDE.value
        if not min_latitude <= latitude <= max_latitude:
            raise NotDefinedOnUTMGridError(
                f"Latitude {latitude} is outside the UTM grid "
                f"[{min_latitude:g}, {max_latitude:g}]"
            )

        zone = utm_zone(latitude, longitude)
        easting, northing = utm_grid(zone, latitude < 0.0).to_projected(latitude, longitude)
        return cls(zone, utm_latitude_band(latitude), easting, northing)

    def to_geographic(self) -> GeographicPosition:
        """Decode to a WGS84 position.

        Raises
        ------
        NotDefinedOnUTMGridError
            If the easting and northing lie off the zone's projection, so no
            latitude in [-90, 90] corresponds to them.
        """
        latitude, longitude = utm_grid(self.zone, self.southern_hemisphere).to_geodetic(
            self.easting, self.northing
        )
        if not -90.0 <= latitude <= 90.0:
            raise NotDefinedOnUTMGridError(
                f"UTM reference {self} does not correspond to a position on the "
                f"grid of zone {self.zone}"
            )
        if not -180.0 <= longitude <= 180.0:
            longitude = _normalize_longitude(longitude)
        return GeographicPosition(latitude, longitude, 0.0, self.datum)

    def __str__(self) -> str:
        return f"{self.zone}{self.band} {_format_metres(self.easting)} {_format_metres(self.northing)}"
