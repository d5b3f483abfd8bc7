"""
Test module for British National Grid and Irish Grid references.
"""

import pytest

from common.errors import InvalidCoordinateError
from geospatial.national_grid import IrishGridReference, OSGridReference
from geospatial.positions import GeographicPosition


def test_from_geographic_worked_example(caister_water_tower):
    """Test an OSGB36 position projects to the OS worked example values."""
    ref = OSGridReference.from_geographic(caister_water_tower)
    assert ref.easting == pytest.approx(651409.903, abs=1e-3)
    assert ref.northing == pytest.approx(313177.270, abs=1e-3)
    assert ref.to_six_figure_string() == "TG514131"


def test_wgs84_input_is_moved_to_osgb36(wgs84):
    """Test a WGS84 position gives the same reference as its OSGB36 equivalent."""
    position = GeographicPosition(52.658007833, 1.716073973, datum=wgs84)
    ref = OSGridReference.from_geographic(position)
    assert ref == OSGridReference.from_geographic(position.to_osgb36())
    assert ref.easting == pytest.approx(651409.9, abs=10.0)
    assert ref.northing == pytest.approx(313177.3, abs=10.0)


def test_to_geographic_is_on_osgb36(osgb36):
    """Test the inverse returns an OSGB36 position."""
    position = OSGridReference(651409.903, 313177.270).to_geographic()
    assert position.datum is osgb36
    assert position.latitude == pytest.approx(52.657570301933, abs=1e-7)
    assert position.longitude == pytest.approx(1.717921580645, abs=1e-7)


@pytest.mark.parametrize("text, easting, northing", [
    ("TG514131", 651400.0, 313100.0),
    ("NN166712", 216600.0, 771200.0),
    ("HU396753", 439600.0, 1175300.0),
    ("SV000000", 0.0, 0.0),
    ("OV000000", 500000.0, 500000.0),
])
def test_os_six_figure_parse_and_format(text, easting, northing):
    """Test six-figure strings parse to the square corner and format back."""
    ref = OSGridReference.from_string(text)
    assert (ref.easting, ref.northing) == (easting, northing)
    assert ref.to_six_figure_string() == text


def test_os_parse_normalizes_case_and_whitespace():
    """Test lower case and surrounding spaces are accepted."""
    assert OSGridReference.from_string("  tg514131 ") == OSGridReference(651400.0, 313100.0)


@pytest.mark.parametrize("text", ["TI514131", "AG514131", "TG51413", "TG5141311", "T1514131", ""])
def test_os_parse_rejects_malformed(text):
    """Test malformed six-figure strings are rejected."""
    with pytest.raises(InvalidCoordinateError):
        OSGridReference.from_string(text)


@pytest.mark.parametrize("easting, northing", [
    (-1.0, 0.0),
    (800000.0, 0.0),
    (0.0, -0.1),
    (0.0, 1400000.0),
])
def test_os_bounds(easting, northing):
    """Test the National Grid bounding box is enforced."""
    with pytest.raises(InvalidCoordinateError):
        OSGridReference(easting, northing)


def test_irish_parse():
    """Test the Irish example reference decodes."""
    ref = IrishGridReference.from_string("O155345")
    assert (ref.easting, ref.northing) == (315500.0, 234500.0)
    assert ref.to_six_figure_string() == "O155345"


def test_irish_reference_is_in_dublin(ireland_1965):
    """Test O155345 lies in central Dublin."""
    position = IrishGridReference.from_string("O155345").to_geographic()
    assert position.datum is ireland_1965
    assert position.latitude == pytest.approx(53.35, abs=0.05)
    assert position.longitude == pytest.approx(-6.26, abs=0.05)


def test_irish_round_trip():
    """Test geographic -> Irish Grid -> geographic."""
    position = GeographicPosition(53.35, -6.26, datum="IRELAND_1965")
    back = position.to_irish_grid().to_geographic()
    assert back.latitude == pytest.approx(53.35, abs=1e-8)
    assert back.longitude == pytest.approx(-6.26, abs=1e-8)


@pytest.mark.parametrize("text", ["I155345", "O15534", "1155345", "OO155345"])
def test_irish_parse_rejects_malformed(text):
    """Test malformed Irish references are rejected."""
    with pytest.raises(InvalidCoordinateError):
        IrishGridReference.from_string(text)


def test_irish_bounds():
    """Test the Irish Grid box, closed on the northern edge."""
    IrishGridReference(0.0, 500000.0)
    with pytest.raises(InvalidCoordinateError):
        IrishGridReference(400000.0, 0.0)
    with pytest.raises(InvalidCoordinateError):
        IrishGridReference(0.0, 500000.1)


def test_irish_northern_edge_has_no_letter():
    """Test the northern edge cannot be written as a six-figure reference."""
    with pytest.raises(InvalidCoordinateError):
        IrishGridReference(1000.0, 500000.0).to_six_figure_string()


def test_str():
    """Test the (E, N) string form."""
    assert str(OSGridReference(651400.0, 313100.0)) == "(651400.0, 313100.0)"
