"""
Test module for the common infrastructure: units, config, errors, logging.
"""

import logging
import math

import pint
import pytest

from common.config import DEFAULT_CONFIG, get_config
from common.constants import GridConstants
from common.errors import (
    GridReferenceError,
    InvalidCoordinateError,
    NotDefinedOnUTMGridError,
    ProjectionConvergenceError,
)
from common.logging_config import get_logger
from common.units import Q_, angle_to_radians, arcseconds_to_radians, metres_to, ppm_to_fraction


def test_arcseconds_to_radians():
    """Test one degree of arc-seconds."""
    assert arcseconds_to_radians(3600.0) == pytest.approx(math.pi / 180.0)


def test_ppm_to_fraction():
    """Test the Helmert scale conversion."""
    assert ppm_to_fraction(-20.4894) == pytest.approx(-20.4894e-6)


def test_angle_with_units():
    """Test quantities carry their own unit."""
    assert angle_to_radians(Q_(90.0, "degree")) == pytest.approx(math.pi / 2)
    assert angle_to_radians(180.0) == pytest.approx(math.pi)


def test_angle_rejects_lengths():
    """Test dimensional mistakes raise."""
    with pytest.raises(pint.DimensionalityError):
        angle_to_radians(Q_(1.0, "meter"))


def test_lengths():
    """Test length conversions."""
    assert metres_to(1500.0, "km") == pytest.approx(1.5)


def test_config_defaults():
    """Test documented defaults."""
    assert get_config("projection", "arc_tolerance_m") == 1e-5
    assert get_config("projection", "max_iterations") == 100
    assert get_config("ecef", "max_refinements") == 2
    assert set(DEFAULT_CONFIG) == {"projection", "ecef", "logging"}


def test_config_unknown_key():
    """Test unknown settings raise KeyError."""
    with pytest.raises(KeyError):
        get_config("projection", "nope")


def test_error_hierarchy():
    """Test every error is a GridReferenceError and a ValueError."""
    for error in (InvalidCoordinateError, NotDefinedOnUTMGridError, ProjectionConvergenceError):
        assert issubclass(error, GridReferenceError)
        assert issubclass(error, ValueError)
    assert not issubclass(NotDefinedOnUTMGridError, InvalidCoordinateError)


def test_logger_has_single_handler():
    """Test repeated lookups do not stack handlers."""
    first = get_logger("geospatial.test")
    second = get_logger("geospatial.test", level=logging.DEBUG)
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.DEBUG


def test_grid_constants():
    """Test projection constants carry provenance."""
    assert GridConstants.UTM_SCALE_FACTOR.value == 0.9996
    assert GridConstants.OSGB_FALSE_NORTHING.value == -100000.0
    assert GridConstants.IRISH_SCALE_FACTOR.value == 1.000035
    assert GridConstants.UTM_MIN_LATITUDE.unit == "degree"
