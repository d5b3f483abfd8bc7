"""
Test module for the Transverse Mercator engine.

PROJ (through pyproj) serves as an independent reference for the forward
projection.
"""

import logging

import pytest
from pyproj import Proj

from common.errors import ProjectionConvergenceError
from geospatial.national_grid import BRITISH_NATIONAL_GRID, IRISH_GRID
from geospatial.utm import utm_grid


def test_os_worked_example_forward():
    """Test the Ordnance Survey worked example projects exactly."""
    easting, northing = BRITISH_NATIONAL_GRID.to_projected(52.657570301933, 1.717921580645)
    assert easting == pytest.approx(651409.903, abs=1e-3)
    assert northing == pytest.approx(313177.270, abs=1e-3)


def test_os_worked_example_inverse():
    """Test the Ordnance Survey worked example inverts exactly."""
    latitude, longitude = BRITISH_NATIONAL_GRID.to_geodetic(651409.903, 313177.270)
    assert latitude == pytest.approx(52.657570301933, abs=1e-7)
    assert longitude == pytest.approx(1.717921580645, abs=1e-7)


def test_true_origin():
    """Test the true origin projects to the false origin."""
    easting, northing = BRITISH_NATIONAL_GRID.to_projected(49.0, -2.0)
    assert easting == pytest.approx(400000.0, abs=1e-6)
    assert northing == pytest.approx(-100000.0, abs=1e-6)


@pytest.mark.parametrize("grid, lat_deg, lon_deg", [
    (BRITISH_NATIONAL_GRID, 52.657570301933, 1.717921580645),
    (BRITISH_NATIONAL_GRID, 57.5, -5.0),
    (IRISH_GRID, 53.35, -6.26),
    (IRISH_GRID, 51.9, -9.5),
    (utm_grid(31, False), 48.8583, 2.2945),
    (utm_grid(56, True), -33.8688, 151.2093),
])
def test_forward_matches_proj(grid, lat_deg, lon_deg):
    """Test the series agrees with PROJ to the centimetre."""
    expected_e, expected_n = Proj(grid.proj4_string)(lon_deg, lat_deg)
    easting, northing = grid.to_projected(lat_deg, lon_deg)
    assert easting == pytest.approx(expected_e, abs=0.01)
    assert northing == pytest.approx(expected_n, abs=0.01)


@pytest.mark.parametrize("grid, lat_deg, lon_deg", [
    (BRITISH_NATIONAL_GRID, 50.1, -4.0),
    (BRITISH_NATIONAL_GRID, 60.2, -1.2),
    (IRISH_GRID, 55.2, -7.0),
    (utm_grid(31, False), 0.0, 0.5),
    (utm_grid(56, True), -79.5, 154.0),
    (utm_grid(32, False), 56.0, 3.0),
    (utm_grid(33, False), 72.0, 21.0),
    (utm_grid(35, False), 72.0, 33.0),
    (utm_grid(31, False), 10.0, 9.0),
])
def test_round_trip(grid, lat_deg, lon_deg):
    """Test forward then inverse returns the input."""
    latitude, longitude = grid.to_geodetic(*grid.to_projected(lat_deg, lon_deg))
    assert latitude == pytest.approx(lat_deg, abs=1e-8)
    assert longitude == pytest.approx(lon_deg, abs=1e-8)


def test_meridional_arc_zero_at_origin():
    """Test M vanishes at the origin latitude."""
    assert BRITISH_NATIONAL_GRID.meridional_arc(0.8552113334772214) == pytest.approx(0.0, abs=1e-6)


def test_iteration_cap_raises(caplog):
    """Test the footpoint iteration stops at the cap and logs a warning."""
    with caplog.at_level(logging.WARNING):
        with pytest.raises(ProjectionConvergenceError):
            BRITISH_NATIONAL_GRID.to_geodetic(400000.0, 1200000.0, max_iterations=0)
    assert "did not converge" in caplog.text


def test_proj4_string():
    """Test the PROJ.4 definition carries the grid parameters."""
    text = BRITISH_NATIONAL_GRID.proj4_string
    assert "+proj=tmerc" in text
    assert "+lat_0=49.0" in text
    assert "+lon_0=-2.0" in text
    assert "+k=0.9996012717" in text
    assert "+y_0=-100000.0" in text
