"""Reference-counted block cache handle.

Only the ownership contract lives here; the engine owns the actual cache
contents.
"""

from __future__ import annotations

import logging
import threading

from ..core.errors import CacheReleaseError

logger = logging.getLogger(__name__)


class Cache:
    """Shared block cache handle with explicit reference counting.

    Args:
        capacity: Cache capacity in bytes

    Invariants:
        - A new cache starts with exactly one reference, owned by its creator
        - Every ref() must be paired with exactly one unref()
        - Releasing a cache with no references left raises CacheReleaseError
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError(f"Invalid cache capacity: {capacity}")
        self._capacity = capacity
        self._refs = 1
        self._lock = threading.Lock()
        logger.debug(f"Created cache capacity={capacity}")

    def max_size(self) -> int:
        """Return the cache capacity in bytes."""
        return self._capacity

    @property
    def refs(self) -> int:
        with self._lock:
            return self._refs

    @property
    def released(self) -> bool:
        """True once the last reference has been dropped."""
        with self._lock:
            return self._refs == 0

    def ref(self) -> None:
        """Acquire one more reference."""
        with self._lock:
            if self._refs <= 0:
                raise CacheReleaseError("cannot ref a released cache")
            self._refs += 1
            logger.debug(f"Cache ref refs={self._refs}")

    def unref(self) -> None:
        """Release one reference."""
        with self._lock:
            if self._refs <= 0:
                raise CacheReleaseError(f"cache released too many times (refs={self._refs})")
            self._refs -= 1
            logger.debug(f"Cache unref refs={self._refs}")
            if self._refs == 0:
                logger.debug(f"Freed cache capacity={self._capacity}")

    def __repr__(self) -> str:
        return f"Cache(capacity={self._capacity}, refs={self._refs})"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.unref()
        return False
