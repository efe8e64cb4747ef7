"""Unit tests for the reference-counted cache handle."""

import threading

import pytest

from lsm_options import Cache, CacheReleaseError


def test_cache_starts_with_one_reference():
    """Test that the creator owns the first reference."""
    cache = Cache(1024)

    assert cache.max_size() == 1024
    assert cache.refs == 1
    assert not cache.released

    cache.unref()
    assert cache.released


def test_cache_ref_unref_pairs():
    """Test that each ref needs its own unref."""
    cache = Cache(1024)
    cache.ref()
    cache.ref()

    cache.unref()
    cache.unref()
    assert cache.refs == 1

    cache.unref()
    assert cache.released


def test_cache_double_release_raises():
    """Test that releasing more than acquired is an error."""
    cache = Cache(1024)
    cache.unref()

    with pytest.raises(CacheReleaseError):
        cache.unref()
    with pytest.raises(CacheReleaseError):
        cache.ref()


def test_cache_context_manager_releases():
    """Test that leaving a with-block releases one reference."""
    with Cache(2048) as cache:
        assert cache.refs == 1
    assert cache.released


def test_cache_context_manager_releases_on_error():
    """Test that the reference is released when the block raises."""
    cache = Cache(2048)
    with pytest.raises(RuntimeError):
        with cache:
            raise RuntimeError("boom")
    assert cache.released


def test_cache_rejects_negative_capacity():
    """Test capacity validation."""
    with pytest.raises(ValueError):
        Cache(-1)


def test_cache_concurrent_refs():
    """Test that concurrent ref/unref pairs keep the count consistent."""
    cache = Cache(1024)

    def worker():
        for _ in range(1000):
            cache.ref()
            cache.unref()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert cache.refs == 1
    cache.unref()
