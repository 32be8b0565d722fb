"""Pytest configuration and fixtures."""

from datetime import UTC, datetime

import pytest

from cache_common import FileCacheItemPool, FrozenClock, MemoryCacheItemPool, SimpleCache


@pytest.fixture
def clock():
    """Frozen clock at a fixed instant; tests move it with advance()."""
    return FrozenClock(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def cache_dir(tmp_path):
    """Root directory for file pools (not created up front)."""
    return tmp_path / "cache"


@pytest.fixture
def memory_pool(clock):
    return MemoryCacheItemPool(clock)


@pytest.fixture
def file_pool(cache_dir, clock):
    return FileCacheItemPool(cache_dir, clock)


@pytest.fixture(params=["memory", "file"])
def pool(request, clock, cache_dir):
    """Every backend, for tests of the shared pool contract."""
    if request.param == "memory":
        return MemoryCacheItemPool(clock)
    return FileCacheItemPool(cache_dir, clock)


@pytest.fixture
def cache(pool):
    return SimpleCache(pool)
