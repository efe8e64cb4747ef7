"""Common type definitions for LSM options.

Defines the enumerations rendered into options text and the pluggable
component reference used for comparers, mergers, cleaners and filters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..interfaces.components import Named


class Compression(Enum):
    """Block compression algorithms, valued by their options-text spelling."""

    DEFAULT = "Default"
    NONE = "NoCompression"
    SNAPPY = "Snappy"
    ZSTD = "ZSTD"


class FilterType(Enum):
    """Granularity at which a filter policy is applied."""

    BLOCK = "block"
    TABLE = "table"


class TableFormat(Enum):
    """On-disk sstable formats."""

    ROCKSDBV2 = "rocksdbv2"
    LEVELDB = "leveldb"  # readable, but never written by a store


@dataclass(frozen=True)
class Ref:
    """Reference to a pluggable component.

    A component is identified by its name alone. The resolved component is
    optional (names-only parsing leaves it None) and is excluded from
    equality and hashing.

    Attributes:
        name: Unique component name
        component: Resolved component, or None when only the name is known
    """

    name: str
    component: Any = field(default=None, compare=False, repr=False)

    @classmethod
    def of(cls, component: Named) -> Ref:
        """Build a reference from any object exposing a ``name``."""
        return cls(component.name, component)

    @property
    def resolved(self) -> bool:
        return self.component is not None

    def __str__(self) -> str:
        return self.name
