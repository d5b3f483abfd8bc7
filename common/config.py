# common/config.py

"""Default numerical settings for the conversion routines."""

import logging
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    # Inverse Transverse Mercator (footpoint latitude iteration)
    "projection": {
        "arc_tolerance_m": 1e-5,      # |N - N0 - M| stop criterion (0.01 mm)
        "max_iterations": 100,        # hard cap; raises if reached
    },

    # ECEF -> geographic (Bowring)
    "ecef": {
        "max_refinements": 2,         # 0 = single closed-form pass
        "tolerance_rad": 1e-14,
    },

    "logging": {
        "level": logging.INFO,
    },
}


def get_config(section: str, key: str) -> Any:
    """Look up a default setting.

    Raises:
        KeyError: if the section or key does not exist.
    """
    return DEFAULT_CONFIG[section][key]
