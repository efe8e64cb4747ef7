"""Unit tests for options serialization."""

from dataclasses import dataclass

import pytest

from lsm_options import LevelOptions, Options, Ref, ensure_defaults, serialize

EXPECTED_DEFAULT = """[Version]
  pebble_version=0.1

[Options]
  bytes_per_sync=524288
  cache_size=8388608
  cleaner=delete
  comparer=leveldb.BytewiseComparator
  disable_wal=false
  l0_compaction_threshold=4
  l0_stop_writes_threshold=12
  lbase_max_bytes=67108864
  max_concurrent_compactions=1
  max_manifest_file_size=134217728
  max_open_files=1000
  mem_table_size=4194304
  mem_table_stop_writes_threshold=2
  min_compaction_rate=4194304
  min_flush_rate=1048576
  merger=pebble.concatenate
  table_property_collectors=[]
  wal_dir=

[Level "0"]
  block_restart_interval=16
  block_size=4096
  compression=Snappy
  filter_policy=none
  filter_type=table
  index_block_size=4096
  target_file_size=2097152

[Level "1"]
  block_restart_interval=16
  block_size=4096
  compression=Snappy
  filter_policy=none
  filter_type=table
  index_block_size=4096
  target_file_size=4194304

[Level "2"]
  block_restart_interval=16
  block_size=4096
  compression=Snappy
  filter_policy=none
  filter_type=table
  index_block_size=4096
  target_file_size=8388608

[Level "3"]
  block_restart_interval=16
  block_size=4096
  compression=Snappy
  filter_policy=none
  filter_type=table
  index_block_size=4096
  target_file_size=16777216

[Level "4"]
  block_restart_interval=16
  block_size=4096
  compression=Snappy
  filter_policy=none
  filter_type=table
  index_block_size=4096
  target_file_size=33554432

[Level "5"]
  block_restart_interval=16
  block_size=4096
  compression=Snappy
  filter_policy=none
  filter_type=table
  index_block_size=4096
  target_file_size=67108864

[Level "6"]
  block_restart_interval=16
  block_size=4096
  compression=Snappy
  filter_policy=none
  filter_type=table
  index_block_size=4096
  target_file_size=134217728
"""


@dataclass(frozen=True)
class NamedFilter:
    name: str


@pytest.fixture
def opts():
    """Create fully defaulted options and release their cache afterwards."""
    o = ensure_defaults()
    yield o
    o.cache.unref()


def test_default_options_string(opts):
    """Test the exact canonical text of default options."""
    assert str(opts) == EXPECTED_DEFAULT
    assert serialize(opts) == EXPECTED_DEFAULT


def test_string_is_deterministic(opts):
    """Test that equal options always render identically."""
    other = ensure_defaults()
    try:
        assert str(other) == str(opts)
    finally:
        other.cache.unref()


def test_disable_wal_renders_true(opts):
    """Test boolean rendering."""
    opts.disable_wal = True
    assert "  disable_wal=true\n" in str(opts)


def test_wal_dir_and_collectors(opts):
    """Test rendering of the WAL dir and the property collector list."""
    opts.wal_dir = "/data/wal"
    opts.table_property_collectors = [Ref("keys-counter"), Ref("size-histogram")]

    text = str(opts)

    assert "  table_property_collectors=[keys-counter,size-histogram]\n" in text
    assert "  wal_dir=/data/wal\n" in text


def test_filter_policy_renders_name(opts):
    """Test that a configured filter policy renders by name."""
    opts.levels[2].filter_policy = Ref.of(NamedFilter("rocksdb.BuiltinBloomFilter"))

    text = str(opts)

    assert text.count("filter_policy=none") == 6
    assert "  filter_policy=rocksdb.BuiltinBloomFilter\n" in text


def test_global_key_order(opts):
    """Test that global keys keep their fixed, non-alphabetical order."""
    lines = str(opts).split("\n")
    start = lines.index("[Options]") + 1
    end = lines.index("", start)
    keys = [line.strip().split("=")[0] for line in lines[start:end]]

    assert keys[-3:] == ["merger", "table_property_collectors", "wal_dir"]
    assert keys != sorted(keys)


def test_undefaulted_options_render_empty_values():
    """Test that unset references and a missing cache render as empty/zero."""
    o = Options(levels=[LevelOptions()])

    text = str(o)

    assert "  cache_size=0\n" in text
    assert "  comparer=\n" in text
    assert "  merger=\n" in text
    assert "  filter_type=\n" in text
    assert "  compression=Default\n" in text
