"""Unit tests for built-in components and the component protocols."""

from dataclasses import dataclass

import pytest

from lsm_options import (
    DEFAULT_CLEANER,
    DEFAULT_COMPARER,
    DEFAULT_MERGER,
    ArchiveCleaner,
    Cache,
    ParseHooks,
    Ref,
    parse,
)
from lsm_options.interfaces import (
    CacheHandle,
    Cleaner,
    Comparer,
    FilterPolicy,
    Merger,
    Named,
    TablePropertyCollector,
)


def test_builtin_names():
    """Test the fixed names written into options text."""
    assert DEFAULT_COMPARER.name == "leveldb.BytewiseComparator"
    assert DEFAULT_MERGER.name == "pebble.concatenate"
    assert DEFAULT_CLEANER.name == "delete"
    assert ArchiveCleaner().name == "archive"


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (b"a", b"b", -1),
        (b"b", b"a", 1),
        (b"abc", b"abc", 0),
        (b"ab", b"abc", -1),
        (b"\xff", b"\x00\x00", 1),
    ],
)
def test_bytewise_comparer(a, b, expected):
    """Test lexicographic byte ordering."""
    assert DEFAULT_COMPARER.compare(a, b) == expected


def test_concatenate_merger():
    """Test that merging appends the new value."""
    assert DEFAULT_MERGER.merge(b"k", b"abc", b"def") == b"abcdef"


def test_builtins_satisfy_protocols():
    """Test that built-ins implement the component protocols."""
    assert isinstance(DEFAULT_COMPARER, Comparer)
    assert isinstance(DEFAULT_MERGER, Merger)
    assert isinstance(DEFAULT_CLEANER, Cleaner)
    assert isinstance(ArchiveCleaner(), Named)
    assert not isinstance(DEFAULT_CLEANER, Comparer)


@dataclass(frozen=True)
class BloomFilter:
    name: str = "bloom"


def test_parsed_components_satisfy_protocols():
    """Test that components resolved by hooks carry the protocol they were looked up for."""
    hooks = ParseHooks(
        new_filter_policy=lambda name: BloomFilter(name),
        new_table_property_collector=lambda name: BloomFilter(name),
    )

    o = parse('[Options]\n  table_property_collectors=[stats]\n[Level "0"]\n  filter_policy=bloom\n', hooks)

    assert isinstance(o.levels[0].filter_policy.component, FilterPolicy)
    assert isinstance(o.table_property_collectors[0].component, TablePropertyCollector)
    assert not isinstance(o.levels[0].filter_policy.component, Comparer)


def test_cache_satisfies_handle_protocol():
    """Test that Cache implements the cache handle protocol."""
    with Cache(1024) as cache:
        assert isinstance(cache, CacheHandle)


def test_ref_identity_is_name_only():
    """Test that references compare and hash by name alone."""
    a = Ref.of(DEFAULT_COMPARER)
    b = Ref("leveldb.BytewiseComparator")

    assert a == b
    assert hash(a) == hash(b)
    assert a.resolved and not b.resolved
    assert str(a) == "leveldb.BytewiseComparator"
    assert Ref("x") != Ref("y")
