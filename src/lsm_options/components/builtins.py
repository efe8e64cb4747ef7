"""Built-in pluggable components.

These are installed by ensure_defaults and resolved by name when parsing
without any hooks.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BytewiseComparer:
    """Orders keys lexicographically by their raw bytes."""

    name: str = "leveldb.BytewiseComparator"

    def compare(self, a: bytes, b: bytes) -> int:
        return (a > b) - (a < b)


@dataclass(frozen=True)
class ConcatenateMerger:
    """Merges by appending the new value to the existing one."""

    name: str = "pebble.concatenate"

    def merge(self, key: bytes, existing: bytes, value: bytes) -> bytes:
        return existing + value


@dataclass(frozen=True)
class DeleteCleaner:
    """Deletes obsolete files."""

    name: str = "delete"


@dataclass(frozen=True)
class ArchiveCleaner:
    """Moves obsolete files to an archive directory instead of deleting them."""

    name: str = "archive"


DEFAULT_COMPARER = BytewiseComparer()
DEFAULT_MERGER = ConcatenateMerger()
DEFAULT_CLEANER = DeleteCleaner()

BUILTIN_COMPARERS = {DEFAULT_COMPARER.name: DEFAULT_COMPARER}
BUILTIN_MERGERS = {DEFAULT_MERGER.name: DEFAULT_MERGER}
BUILTIN_CLEANERS = {c.name: c for c in (DeleteCleaner(), ArchiveCleaner())}
