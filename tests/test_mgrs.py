"""
Test module for MGRS encoding and decoding.
"""

import math

import pytest

from common.errors import InvalidCoordinateError, NotDefinedOnUTMGridError
from geospatial.mgrs import LetteringScheme, MGRSReference, Precision, set_number
from geospatial.positions import GeographicPosition
from geospatial.utm import UTMReference


def test_decode_eiffel_tower(eiffel_tower_utm):
    """Test the square letters and digits decode to the UTM reference."""
    ref = MGRSReference.from_string("31U DQ 48251 11932")
    assert ref.to_utm() == eiffel_tower_utm


def test_decode_to_geographic():
    """Test MGRS -> geographic via UTM."""
    position = MGRSReference.from_string("31UDQ4825111932").to_geographic()
    assert position.latitude == pytest.approx(48.8583, abs=1e-3)
    assert position.longitude == pytest.approx(2.2945, abs=1e-3)


def test_encode_eiffel_tower(eiffel_tower_utm):
    """Test UTM -> MGRS letters and digits."""
    ref = MGRSReference.from_utm(eiffel_tower_utm)
    assert (ref.zone, ref.band, ref.column, ref.row) == (31, "U", "D", "Q")
    assert (ref.easting, ref.northing) == (48251, 11932)
    assert ref.precision is Precision.ONE_METRE
    assert str(ref) == "31UDQ4825111932"


def test_digits_are_truncated():
    """Test fractional metres are dropped, not rounded."""
    ref = MGRSReference.from_utm(UTMReference(31, "U", 448251.9, 5411932.9))
    assert (ref.easting, ref.northing) == (48251, 11932)


@pytest.mark.parametrize("precision, text", [
    (Precision.ONE_METRE, "31UDQ4825111932"),
    (Precision.TEN_METRES, "31UDQ48251193"),
    (Precision.HUNDRED_METRES, "31UDQ482119"),
    (Precision.ONE_KILOMETRE, "31UDQ4811"),
    (Precision.TEN_KILOMETRES, "31UDQ41"),
])
def test_to_string_precision(eiffel_tower_utm, precision, text):
    """Test output at every precision."""
    assert MGRSReference.from_utm(eiffel_tower_utm).to_string(precision) == text


def test_parse_sets_precision():
    """Test the digit count determines the precision."""
    ref = MGRSReference.from_string("31udq482119")
    assert ref.precision is Precision.HUNDRED_METRES
    assert (ref.easting, ref.northing) == (48200, 11900)
    assert str(ref) == "31UDQ482119"


def test_zone_is_zero_padded():
    """Test single-digit zones are written with two digits."""
    ref = MGRSReference.from_string("4QFJ12345678")
    assert ref.zone == 4
    assert str(ref) == "04QFJ12345678"


@pytest.mark.parametrize("text", [
    "31UDQ",
    "31UDQ482511193",
    "31UDQ48251119321",
    "31UDQ4825111932A",
    "U31DQ48251193",
    "131UDQ4825111932",
])
def test_malformed_strings_raise(text):
    """Test malformed strings and bad digit counts are rejected."""
    with pytest.raises(InvalidCoordinateError):
        MGRSReference.from_string(text)


@pytest.mark.parametrize("text", ["61UDQ1234", "00UDQ1234", "31IDQ1234", "31ODQ1234", "31ADQ1234"])
def test_outside_utm_grid_raises(text):
    """Test zones and bands outside the grid are undefined, not malformed."""
    with pytest.raises(NotDefinedOnUTMGridError):
        MGRSReference.from_string(text)


@pytest.mark.parametrize("text", ["31UJQ1234", "32UAQ1234", "33UHQ1234", "31UDW1234", "31UDI1234", "31UIQ1234"])
def test_invalid_square_letters_raise(text):
    """Test column letters outside the zone's set and invalid row letters."""
    with pytest.raises(InvalidCoordinateError):
        MGRSReference.from_string(text)


def test_invalid_digits_raise():
    """Test offsets within the square are limited to 0..99999."""
    with pytest.raises(InvalidCoordinateError):
        MGRSReference(31, "U", "D", "Q", 100000, 0)
    with pytest.raises(InvalidCoordinateError):
        MGRSReference(31, "U", "D", "Q", 0, -1)


def test_invalid_precision_raises():
    """Test only the five supported precisions are accepted."""
    with pytest.raises(InvalidCoordinateError):
        MGRSReference(31, "U", "D", "Q", 0, 0, precision=5)


def test_column_outside_zone_raises():
    """Test a UTM easting in the zone margin has no column letter."""
    with pytest.raises(NotDefinedOnUTMGridError):
        MGRSReference.from_utm(UTMReference(31, "U", 50000.0, 5411932.0))


def test_set_numbers():
    """Test lettering sets cycle every six zones."""
    assert [set_number(zone) for zone in (1, 2, 6, 7, 31, 60)] == [1, 2, 6, 1, 1, 6]


@pytest.mark.parametrize("latitude, longitude", [
    (51.5, -0.12),
    (-33.8688, 151.2093),
    (40.71, -74.01),
    (35.68, 139.69),
    (-22.9, -43.2),
    (64.1, -21.9),
    (1.35, 103.82),
    (-1.29, 36.82),
    (-45.87, 170.5),
    (78.2, 15.6),
])
@pytest.mark.parametrize("scheme", [LetteringScheme.AA, LetteringScheme.AL])
def test_round_trip_through_utm(latitude, longitude, scheme):
    """Test UTM -> MGRS -> UTM recovers the truncated UTM reference."""
    utm = GeographicPosition(latitude, longitude).to_utm()
    decoded = MGRSReference.from_utm(utm, scheme).to_utm()

    assert (decoded.zone, decoded.band) == (utm.zone, utm.band)
    assert decoded.easting == math.floor(utm.easting)
    assert decoded.northing == math.floor(utm.northing)


def test_alternate_scheme_shifts_rows(eiffel_tower_utm):
    """Test the AL scheme moves the row letter by ten."""
    standard = MGRSReference.from_utm(eiffel_tower_utm)
    alternate = MGRSReference.from_utm(eiffel_tower_utm, LetteringScheme.AL)
    assert standard.row == "Q"
    assert alternate.row == "E"
    assert alternate.column == standard.column


def test_geographic_to_mgrs():
    """Test the convenience conversion from a position."""
    ref = GeographicPosition(48.8583, 2.2945).to_mgrs()
    assert (ref.zone, ref.band, ref.column, ref.row) == (31, "U", "D", "Q")
