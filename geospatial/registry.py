"""
Lazily populated, thread-safe registries of shared immutable instances.

Each named ellipsoid or datum is built on first lookup and the same object
is returned for every later lookup. Construction happens at most once per
key even when several threads race on first access.
"""

import threading
from typing import Callable, Dict, Generic, Iterator, Mapping, TypeVar

from common.errors import InvalidCoordinateError
from common.logging_config import get_logger

logger = get_logger(__name__)

D = TypeVar("D")
T = TypeVar("T")


class LazyRegistry(Generic[D, T]):
    """Registry mapping catalog keys to lazily constructed instances.
    
    Parameters
    ----------
    kind : str
        Human-readable name of the registered type, used in messages.
    catalog : Mapping[str, D]
        Static definitions keyed by identifier.
    factory : Callable[[str, D], T]
        Builds the instance for a key from its definition.
    """
    
    def __init__(self, kind: str, catalog: Mapping[str, D], factory: Callable[[str, D], T]):
        self._kind = kind
        self._catalog = catalog
        self._factory = factory
        self._instances: Dict[str, T] = {}
        self._lock = threading.Lock()
    
    def get(self, key: str) -> T:
        """Return the shared instance for ``key``, building it if needed.
        
        Raises
        ------
        InvalidCoordinateError
            If ``key`` is not in the catalog.
        """
        normalized = key.upper()
        instance = self._instances.get(normalized)
        if instance is not None:
            return instance
        
        if normalized not in self._catalog:
            raise InvalidCoordinateError(
                f"Unknown {self._kind} '{key}'. "
                f"Known: {', '.join(self.keys())}"
            )
        
        with self._lock:
            instance = self._instances.get(normalized)
            if instance is None:
                instance = self._factory(normalized, self._catalog[normalized])
                self._instances[normalized] = instance
                logger.debug(f"Constructed {self._kind} {normalized}")
        return instance
    
    def keys(self) -> Iterator[str]:
        """Catalog keys in sorted order."""
        return iter(sorted(self._catalog))
    
    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.upper() in self._catalog
    
    def __len__(self) -> int:
        return len(self._catalog)
