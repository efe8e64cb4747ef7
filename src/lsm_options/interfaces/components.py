"""Protocol definitions for pluggable components.

Options only ever look at a component's ``name``; the remaining methods
describe what the storage engine expects from an implementation.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Named(Protocol):
    """Anything identified by a unique name."""

    name: str


@runtime_checkable
class Comparer(Protocol):
    """Defines the key ordering of a store."""

    name: str

    def compare(self, a: bytes, b: bytes) -> int:
        """Return negative, zero or positive as a sorts before, with or after b."""
        ...


@runtime_checkable
class Merger(Protocol):
    """Combines successive writes to one key."""

    name: str

    def merge(self, key: bytes, existing: bytes, value: bytes) -> bytes:
        """Return the merged value for key."""
        ...


@runtime_checkable
class Cleaner(Protocol):
    """Disposal policy for obsolete files."""

    name: str


@runtime_checkable
class FilterPolicy(Protocol):
    """Per-level table filter (e.g. a bloom filter)."""

    name: str


@runtime_checkable
class TablePropertyCollector(Protocol):
    """Collects user properties while a table is written."""

    name: str
