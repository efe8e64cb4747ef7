"""Semantic validation of defaulted options."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.errors import InvalidOptionsError
from ..core.types import TableFormat

if TYPE_CHECKING:
    from ..core.options import Options


def violations(options: Options) -> list[str]:
    """Return a message for every invariant options break, in a fixed order."""
    found = []
    if options.l0_stop_writes_threshold < options.l0_compaction_threshold:
        found.append(
            f"L0StopWritesThreshold ({options.l0_stop_writes_threshold}) must be >= "
            f"L0CompactionThreshold ({options.l0_compaction_threshold})"
        )
    if options.mem_table_stop_writes_threshold < 2:
        found.append(
            f"MemTableStopWritesThreshold ({options.mem_table_stop_writes_threshold}) must be >= 2"
        )
    if options.table_format == TableFormat.LEVELDB:
        found.append("TableFormatLevelDB not supported for a writable store")
    return found


def validate(options: Options) -> None:
    """Raise InvalidOptionsError if options break any invariant."""
    found = violations(options)
    if found:
        raise InvalidOptionsError(found)
