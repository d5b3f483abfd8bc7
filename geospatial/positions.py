"""
Position Value Types.

Every supported coordinate system is one variant of a closed set sharing the
``CoordinateReference`` contract: each carries a datum and can convert
itself to a ``GeographicPosition``. All variants are immutable; a datum
transform returns a new position instead of modifying the receiver.

Variants
--------
- GeographicPosition (this module)
- ECEFPosition (this module)
- OSGridReference, IrishGridReference (geospatial.national_grid)
- UTMReference (geospatial.utm)
- MGRSReference (geospatial.mgrs)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union
import numpy as np

from common.errors import InvalidCoordinateError
from geospatial.coordinate_models import ecef_to_geodetic, geodetic_to_ecef
from geospatial.datum import Datum, get_datum, reference_datum, resolve_datum, transform_geodetic
from geospatial.distance_calculations import geodesic_distance, metres_to_miles


class CoordinateSystemKind(Enum):
    """Tag identifying the coordinate system of a reference."""
    GEOGRAPHIC = "geographic"
    ECEF = "ecef"
    OS_GRID = "os_grid"
    IRISH_GRID = "irish_grid"
    UTM = "utm"
    MGRS = "mgrs"


class CoordinateReference(ABC):
    """A position expressed in one of the supported coordinate systems."""

    kind: ClassVar[CoordinateSystemKind]

    @abstractmethod
    def to_geographic(self) -> "GeographicPosition":
        """Convert to latitude/longitude on this reference's datum."""


@dataclass(frozen=True)
class GeographicPosition(CoordinateReference):
    """A geodetic latitude/longitude on a datum.

    Attributes
    ----------
    latitude : float
        Geodetic latitude in DEGREES. Range: [-90, 90].
    longitude : float
        Geodetic longitude in DEGREES. Range: [-180, 180].
    height : float
        Ellipsoidal height in METERS. Default is 0.
    datum : Datum or str
        Datum of the position (default WGS84). A registry key is resolved
        on construction.

    Raises
    ------
    InvalidCoordinateError
        If latitude or longitude is out of range.

    Examples
    --------
    >>> p = GeographicPosition(52.657570301933, 1.717921580645, datum="OSGB36")
    >>> print(p.to_os_grid().to_six_figure_string())
    TG514131
    """
    latitude: float
    longitude: float
    height: float = 0.0
    datum: Datum = field(default_factory=reference_datum)

    kind: ClassVar[CoordinateSystemKind] = CoordinateSystemKind.GEOGRAPHIC

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidCoordinateError(
                f"Latitude {self.latitude} out of range [-90, 90]"
            )
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidCoordinateError(
                f"Longitude {self.longitude} out of range [-180, 180]"
            )
        object.__setattr__(self, "datum", resolve_datum(self.datum))

    def to_geographic(self) -> "GeographicPosition":
        return self

    def to_datum(self, target: Union[Datum, str]) -> "GeographicPosition":
        """Return this position expressed on ``target``.

        The height is carried over unchanged.
        """
        target = resolve_datum(target)
        latitude, longitude = transform_geodetic(
            self.latitude, self.longitude, self.height, self.datum, target
        )
        return GeographicPosition(latitude, longitude, self.height, target)

    def to_wgs84(self) -> "GeographicPosition":
        return self.to_datum(reference_datum())

    def to_osgb36(self) -> "GeographicPosition":
        return self.to_datum(get_datum("OSGB36"))

    def to_ecef(self) -> "ECEFPosition":
        return ECEFPosition.from_geographic(self)

    def to_utm(self):
        """Convert to UTM (the position is moved to WGS84 first)."""
        from geospatial.utm import UTMReference
        return UTMReference.from_geographic(self)

    def to_mgrs(self):
        """Convert to MGRS via UTM."""
        from geospatial.mgrs import MGRSReference
        return MGRSReference.from_utm(self.to_utm())

    def to_os_grid(self):
        """Convert to the British National Grid (via OSGB36)."""
        from geospatial.national_grid import OSGridReference
        return OSGridReference.from_geographic(self)

    def to_irish_grid(self):
        """Convert to the Irish Grid (via Ireland 1965)."""
        from geospatial.national_grid import IrishGridReference
        return IrishGridReference.from_geographic(self)

    def distance(self, other: CoordinateReference) -> float:
        """Geodesic distance to ``other`` in kilometres.

        ``other`` is first expressed on this position's datum and the
        distance is measured on that datum's ellipsoid.
        """
        other = other.to_geographic().to_datum(self.datum)
        distance_m = geodesic_distance(
            self.latitude, self.longitude,
            other.latitude, other.longitude,
            self.datum.ellipsoid
        )
        return distance_m / 1000.0

    def distance_miles(self, other: CoordinateReference) -> float:
        """Geodesic distance to ``other`` in statute miles."""
        return metres_to_miles(self.distance(other) * 1000.0)

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"


@dataclass(frozen=True)
class ECEFPosition(CoordinateReference):
    """Earth-Centered Earth-Fixed Cartesian coordinates.

    The datum selects the ellipsoid used when converting to and from
    geodetic coordinates.
    """
    x: float
    y: float
    z: float
    datum: Datum = field(default_factory=reference_datum)

    kind: ClassVar[CoordinateSystemKind] = CoordinateSystemKind.ECEF

    def __post_init__(self):
        object.__setattr__(self, "datum", resolve_datum(self.datum))

    @classmethod
    def from_geographic(cls, position: GeographicPosition) -> "ECEFPosition":
        x, y, z = geodetic_to_ecef(
            np.radians(position.latitude),
            np.radians(position.longitude),
            position.height,
            position.datum.ellipsoid
        )
        return cls(x, y, z, position.datum)

    def to_geographic(self) -> GeographicPosition:
        latitude_rad, longitude_rad, height = ecef_to_geodetic(
            self.x, self.y, self.z, self.datum.ellipsoid
        )
        return GeographicPosition(
            float(np.degrees(latitude_rad)),
            float(np.degrees(longitude_rad)),
            height,
            self.datum
        )

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"
