"""
Shared fixtures for the grid reference tests.
"""

import pytest

from geospatial.datum import get_datum, reference_datum
from geospatial.positions import GeographicPosition
from geospatial.utm import UTMReference


@pytest.fixture
def wgs84():
    """The WGS84 reference datum."""
    return reference_datum()


@pytest.fixture
def osgb36():
    """The OSGB36 datum."""
    return get_datum("OSGB36")


@pytest.fixture
def ireland_1965():
    """The Ireland 1965 datum."""
    return get_datum("IRELAND_1965")


@pytest.fixture
def caister_water_tower(osgb36):
    """Ordnance Survey worked example point, on OSGB36."""
    return GeographicPosition(52.657570301933, 1.717921580645, datum=osgb36)


@pytest.fixture
def eiffel_tower_utm():
    """UTM reference of the Eiffel Tower."""
    return UTMReference(31, "U", 448251.0, 5411932.0)
