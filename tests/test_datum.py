"""
Test module for datums and the Helmert transform.
"""

import pytest

from common.constants import DATUM_CATALOG
from common.errors import InvalidCoordinateError
from geospatial.datum import (
    DATUMS,
    get_datum,
    helmert_transform,
    reference_datum,
    resolve_datum,
    transform_geodetic,
)
from geospatial.ellipsoid import get_ellipsoid


def test_reference_datum_is_wgs84(wgs84):
    """Test the reference datum has no transform parameters."""
    assert wgs84.is_reference
    assert (wgs84.dx, wgs84.dy, wgs84.dz) == (0.0, 0.0, 0.0)
    assert (wgs84.ds, wgs84.rx, wgs84.ry, wgs84.rz) == (0.0, 0.0, 0.0, 0.0)


def test_datums_share_ellipsoids(osgb36):
    """Test datums reference the registered ellipsoid instance."""
    assert osgb36.ellipsoid is get_ellipsoid("AIRY_1830")
    assert get_datum("NAD27_CONTIGUOUS_US").ellipsoid is get_datum("NAD27_ALASKA").ellipsoid


def test_catalog_builds_every_datum():
    """Test every catalog entry resolves."""
    for key in DATUM_CATALOG:
        assert get_datum(key).key == key
    assert len(DATUMS) == len(DATUM_CATALOG)


def test_resolve_datum(osgb36):
    """Test keys and instances both resolve to the shared datum."""
    assert resolve_datum("osgb36") is osgb36
    assert resolve_datum(osgb36) is osgb36
    with pytest.raises(InvalidCoordinateError):
        resolve_datum("NOWHERE_1900")


def test_helmert_identity_for_reference(wgs84):
    """Test the reference datum leaves coordinates unchanged."""
    point = (3874938.849, 116218.624, 5047168.208)
    assert helmert_transform(*point, wgs84) == pytest.approx(point)


def test_helmert_inverse_undoes_forward(osgb36):
    """Test the sign-flipped transform recovers the input to a few mm."""
    point = (3874938.849, 116218.624, 5047168.208)
    forward = helmert_transform(*point, osgb36)
    back = helmert_transform(*forward, osgb36, inverse=True)
    assert back == pytest.approx(point, abs=0.05)


def test_same_datum_is_noop(osgb36):
    """Test transforming onto the same datum returns the input."""
    assert transform_geodetic(52.0, -1.5, 10.0, osgb36, osgb36) == (52.0, -1.5)


def test_osgb36_to_wgs84(osgb36, wgs84):
    """Test the OS worked example point moves to its WGS84 position."""
    latitude, longitude = transform_geodetic(
        52.657570301933, 1.717921580645, 0.0, osgb36, wgs84
    )
    assert latitude == pytest.approx(52.658007833, abs=1e-4)
    assert longitude == pytest.approx(1.716073973, abs=1e-4)


def test_round_trip_through_wgs84(osgb36, wgs84):
    """Test OSGB36 -> WGS84 -> OSGB36 returns to the start."""
    latitude, longitude = transform_geodetic(54.5, -3.2, 100.0, osgb36, wgs84)
    latitude, longitude = transform_geodetic(latitude, longitude, 100.0, wgs84, osgb36)
    assert latitude == pytest.approx(54.5, abs=1e-6)
    assert longitude == pytest.approx(-3.2, abs=1e-6)


def test_non_reference_pair_hops_via_wgs84(osgb36, ireland_1965, wgs84):
    """Test a transform between two local datums equals the two-step route."""
    direct = transform_geodetic(54.0, -6.0, 0.0, osgb36, ireland_1965)
    via_wgs84 = transform_geodetic(
        *transform_geodetic(54.0, -6.0, 0.0, osgb36, wgs84), 0.0, wgs84, ireland_1965
    )
    assert direct == pytest.approx(via_wgs84, abs=1e-12)


def test_str_lists_parameters(osgb36):
    """Test the string form includes the ellipsoid and parameters."""
    text = str(osgb36)
    assert "Airy 1830" in text
    assert "dx=446.448" in text
    assert "rz=0.8421" in text
