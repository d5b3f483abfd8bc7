"""
Unit Registry for Geodetic Parameter Conversion.

This module provides a centralized unit system using the `pint` library.
Datum parameters are published in mixed units (metres, parts per million,
arc-seconds) and the transform code needs them as plain SI magnitudes; all
such conversions go through here so a unit mix-up raises instead of
silently scaling a rotation by 3600.

Example Usage
-------------
>>> from common.units import Q_, angle_to_radians
>>> angle_to_radians(Q_(0.1502, 'arcsecond'))
7.281...e-07
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity


def ensure_quantity(value: Union[float, pint.Quantity], default_unit: str) -> pint.Quantity:
    """Ensure a value is a pint Quantity, applying default unit if necessary.
    
    Parameters
    ----------
    value : float or pint.Quantity
        The value to convert.
    default_unit : str
        The unit to apply if value is a bare number.
        
    Returns
    -------
    pint.Quantity
        The value with units.
    """
    if isinstance(value, pint.Quantity):
        return value
    return ureg.Quantity(value, default_unit)


def angle_to_radians(value: Union[float, pint.Quantity], default_unit: str = "degree") -> float:
    """Convert an angle to a bare magnitude in radians.
    
    Raises
    ------
    pint.DimensionalityError
        If ``value`` carries a non-angular unit.
    """
    return float(ensure_quantity(value, default_unit).to(ureg.radian).magnitude)


def arcseconds_to_radians(value: float) -> float:
    """Convert a Helmert rotation from arc-seconds to radians."""
    return angle_to_radians(value, "arcsecond")


def ppm_to_fraction(value: float) -> float:
    """Convert a Helmert scale correction from parts per million to a fraction."""
    return float(ureg.Quantity(value, "ppm").to(ureg.dimensionless).magnitude)


def metres_to(value: float, unit: str) -> float:
    """Express a length in metres in another length unit, e.g. ``"km"``."""
    return float(ureg.Quantity(value, "meter").to(unit).magnitude)
