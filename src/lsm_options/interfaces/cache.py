"""Protocol definition for the shared block cache handle."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheHandle(Protocol):
    """Reference-counted handle to a process-wide block cache."""

    def max_size(self) -> int:
        """Return the cache capacity in bytes."""
        ...

    def ref(self) -> None:
        """Acquire one more reference."""
        ...

    def unref(self) -> None:
        """Release one reference; the last release frees the cache."""
        ...
