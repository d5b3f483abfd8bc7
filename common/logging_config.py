"""
Logging Configuration.

All modules obtain their logger through ``get_logger`` so records share one
format. Conversion routines log at DEBUG (registry construction, datum hops,
iteration counts) and WARNING (iteration cap reached); nothing is logged on
the normal fast path above DEBUG.
"""

import logging
import sys
from typing import Optional

from common.config import get_config


# Configure root logger for the package
def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a logger configured for the grid reference library.
    
    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int, optional
        Logging level. Defaults to the configured ``logging.level``.
        
    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    
    logger.setLevel(level if level is not None else get_config("logging", "level"))
    return logger
