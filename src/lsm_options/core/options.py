"""Options for an LSM store.

Defines all tunable parameters of the storage engine, per store and per
level, along with their built-in defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from ..components.builtins import DEFAULT_CLEANER, DEFAULT_COMPARER, DEFAULT_MERGER
from ..components.cache import Cache
from ..components.registry import ParseHooks
from ..components.serializer import serialize
from ..components.validator import validate
from ..interfaces.cache import CacheHandle
from .types import Compression, FilterType, Ref, TableFormat

logger = logging.getLogger(__name__)

NUM_LEVELS = 7

DEFAULT_BYTES_PER_SYNC = 512 << 10
DEFAULT_CACHE_SIZE = 8 << 20
DEFAULT_L0_COMPACTION_THRESHOLD = 4
DEFAULT_L0_STOP_WRITES_THRESHOLD = 12
DEFAULT_LBASE_MAX_BYTES = 64 << 20
DEFAULT_MAX_CONCURRENT_COMPACTIONS = 1
DEFAULT_MAX_MANIFEST_FILE_SIZE = 128 << 20
DEFAULT_MAX_OPEN_FILES = 1000
DEFAULT_MEM_TABLE_SIZE = 4 << 20
DEFAULT_MEM_TABLE_STOP_WRITES_THRESHOLD = 2
DEFAULT_MIN_COMPACTION_RATE = 4 << 20
DEFAULT_MIN_FLUSH_RATE = 1 << 20

DEFAULT_BLOCK_RESTART_INTERVAL = 16
DEFAULT_BLOCK_SIZE = 4096
DEFAULT_TARGET_FILE_SIZE = 2 << 20  # level 0; doubles per level


@dataclass
class LevelOptions:
    """Options for one level of the LSM tree.

    Zero values (0, None, Compression.DEFAULT) mean "unset" and are filled
    in by ensure_defaults.

    Attributes:
        block_restart_interval: Keys between restart points in a data block
        block_size: Target uncompressed data block size in bytes
        index_block_size: Target index block size; defaults to block_size
        compression: Block compression algorithm
        filter_policy: Table filter, or None for no filter
        filter_type: Granularity the filter policy is applied at
        target_file_size: Soft cap on compaction output file size in bytes
    """

    block_restart_interval: int = 0
    block_size: int = 0
    index_block_size: int = 0
    compression: Compression = Compression.DEFAULT
    filter_policy: Ref | None = None
    filter_type: FilterType | None = None
    target_file_size: int = 0

    def ensure_defaults(self, level: int) -> LevelOptions:
        """Fill unset fields for the level at the given index."""
        if self.block_restart_interval <= 0:
            self.block_restart_interval = DEFAULT_BLOCK_RESTART_INTERVAL
        if self.block_size <= 0:
            self.block_size = DEFAULT_BLOCK_SIZE
        if self.index_block_size <= 0:
            self.index_block_size = self.block_size
        if self.compression == Compression.DEFAULT:
            self.compression = Compression.SNAPPY
        if self.filter_type is None:
            self.filter_type = FilterType.TABLE
        if self.target_file_size <= 0:
            self.target_file_size = DEFAULT_TARGET_FILE_SIZE << level
        return self


@dataclass
class Options:
    """Configuration of an LSM store.

    Construct with any subset of fields, then call ensure_defaults() once
    before use. Unset fields hold zero values (0, "", None, []).

    Attributes:
        bytes_per_sync: Bytes written between background syncs of sstables
        cache: Shared block cache handle; the holder owns one reference
        cleaner: Obsolete file disposal policy
        comparer: Key ordering; must match the one the store was created with
        disable_wal: Whether writes skip the write-ahead log
        l0_compaction_threshold: L0 file count that triggers compaction
        l0_stop_writes_threshold: L0 file count that stalls writes
        lbase_max_bytes: Maximum bytes in the base level of the tree
        max_concurrent_compactions: Upper bound on parallel compactions
        max_manifest_file_size: Manifest size that triggers rotation
        max_open_files: Soft limit on open file descriptors
        mem_table_size: Memtable size before it is flushed
        mem_table_stop_writes_threshold: Queued memtables that stall writes
        min_compaction_rate: Floor for compaction throughput (bytes/sec)
        min_flush_rate: Floor for flush throughput (bytes/sec)
        merger: Merge operator; must match the one the store was created with
        table_property_collectors: Collectors run while writing tables
        wal_dir: Directory for the write-ahead log; empty means the store dir
        table_format: sstable format written by the store
        levels: Per-level options, index 0 first
    """

    bytes_per_sync: int = 0
    cache: CacheHandle | None = None
    cleaner: Ref | None = None
    comparer: Ref | None = None
    disable_wal: bool = False
    l0_compaction_threshold: int = 0
    l0_stop_writes_threshold: int = 0
    lbase_max_bytes: int = 0
    max_concurrent_compactions: int = 0
    max_manifest_file_size: int = 0
    max_open_files: int = 0
    mem_table_size: int = 0
    mem_table_stop_writes_threshold: int = 0
    min_compaction_rate: int = 0
    min_flush_rate: int = 0
    merger: Ref | None = None
    table_property_collectors: list[Ref] = field(default_factory=list)
    wal_dir: str = ""
    table_format: TableFormat | None = None
    levels: list[LevelOptions] = field(default_factory=list)

    def ensure_defaults(self) -> Options:
        """Fill every unset field with its default and return self.

        Fields set by the caller are left alone, so calling this again is a
        no-op. When no cache is set a new one is created and the caller
        becomes responsible for releasing it.
        """
        if self.bytes_per_sync <= 0:
            self.bytes_per_sync = DEFAULT_BYTES_PER_SYNC
        if self.cache is None:
            self.cache = Cache(DEFAULT_CACHE_SIZE)
            logger.info(f"Acquired default cache ({DEFAULT_CACHE_SIZE} bytes)")
        if self.cleaner is None:
            self.cleaner = Ref.of(DEFAULT_CLEANER)
        if self.comparer is None:
            self.comparer = Ref.of(DEFAULT_COMPARER)
        if self.l0_compaction_threshold <= 0:
            self.l0_compaction_threshold = DEFAULT_L0_COMPACTION_THRESHOLD
        if self.l0_stop_writes_threshold <= 0:
            self.l0_stop_writes_threshold = DEFAULT_L0_STOP_WRITES_THRESHOLD
        if self.lbase_max_bytes <= 0:
            self.lbase_max_bytes = DEFAULT_LBASE_MAX_BYTES
        if self.max_concurrent_compactions <= 0:
            self.max_concurrent_compactions = DEFAULT_MAX_CONCURRENT_COMPACTIONS
        if self.max_manifest_file_size <= 0:
            self.max_manifest_file_size = DEFAULT_MAX_MANIFEST_FILE_SIZE
        if self.max_open_files <= 0:
            self.max_open_files = DEFAULT_MAX_OPEN_FILES
        if self.mem_table_size <= 0:
            self.mem_table_size = DEFAULT_MEM_TABLE_SIZE
        if self.mem_table_stop_writes_threshold <= 0:
            self.mem_table_stop_writes_threshold = DEFAULT_MEM_TABLE_STOP_WRITES_THRESHOLD
        if self.min_compaction_rate <= 0:
            self.min_compaction_rate = DEFAULT_MIN_COMPACTION_RATE
        if self.min_flush_rate <= 0:
            self.min_flush_rate = DEFAULT_MIN_FLUSH_RATE
        if self.merger is None:
            self.merger = Ref.of(DEFAULT_MERGER)
        if self.table_format is None:
            self.table_format = TableFormat.ROCKSDBV2

        while len(self.levels) < NUM_LEVELS:
            self.levels.append(LevelOptions())
        for i, level in enumerate(self.levels):
            level.ensure_defaults(i)
        return self

    def level(self, level: int) -> LevelOptions:
        """Return options for a level.

        Levels past the configured ones are extrapolated from the last
        configured level, doubling the target file size per level.
        """
        if level < 0:
            raise ValueError(f"Invalid level: {level}")
        if level < len(self.levels):
            return self.levels[level]
        if not self.levels:
            return LevelOptions().ensure_defaults(level)
        last = self.levels[-1]
        return replace(last, target_file_size=last.target_file_size << (level - len(self.levels) + 1))

    def parse(self, text: str, hooks: ParseHooks | None = None) -> Options:
        """Apply options text on top of these options and return self.

        Nothing is modified if parsing fails.
        """
        from ..components.parser import parse_into

        return parse_into(self, text, hooks)

    def check(self, text: str) -> None:
        """Raise IncompatibleOptionsError if text names another comparer or merger."""
        from ..components.checker import check

        check(self, text)

    def validate(self) -> None:
        """Raise InvalidOptionsError listing every violated invariant."""
        validate(self)

    def __str__(self) -> str:
        return serialize(self)


def ensure_defaults(options: Options | None = None) -> Options:
    """Return options with defaults filled in; None yields all-default options."""
    if options is None:
        options = Options()
    return options.ensure_defaults()
