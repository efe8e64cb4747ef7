"""Protocols for the collaborators options refer to."""

from .cache import CacheHandle
from .components import Cleaner, Comparer, FilterPolicy, Merger, Named, TablePropertyCollector

__all__ = [
    "CacheHandle",
    "Cleaner",
    "Comparer",
    "FilterPolicy",
    "Merger",
    "Named",
    "TablePropertyCollector",
]
