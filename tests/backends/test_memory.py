"""Tests for MemoryCacheItemPool."""

import threading

from cache_common import CacheItem, MemoryCacheItemPool, SimpleCache


def test_save_copies_value(memory_pool, clock):
    """Test mutating a value after saving it does not change the store."""
    value = ["a"]
    memory_pool.save(CacheItem("k", value, None, clock))

    value.append("b")

    assert memory_pool.get_item("k").get() == ["a"]


def test_fetch_returns_independent_items(memory_pool, clock):
    """Test two fetches of the same key never share state."""
    memory_pool.save(CacheItem("k", {"n": 1}, None, clock))

    first = memory_pool.get_item("k")
    second = memory_pool.get_item("k")
    first.get()["n"] = 99

    assert first is not second
    assert second.get() == {"n": 1}


def test_uncopyable_value_is_not_saved(memory_pool, clock):
    """Test a value that cannot be deep-copied makes save return False."""
    assert memory_pool.save(CacheItem("k", threading.Lock(), None, clock)) is False
    assert memory_pool.has_item("k") is False


def test_len_counts_stored_records(memory_pool, clock):
    """Test len() reflects saves, deletes and clear."""
    memory_pool.save(CacheItem("a", 1, None, clock))
    memory_pool.save(CacheItem("b", 2, None, clock))
    assert len(memory_pool) == 2

    memory_pool.delete_item("a")
    assert len(memory_pool) == 1

    memory_pool.clear()
    assert len(memory_pool) == 0


def test_pools_do_not_share_storage(clock):
    """Test each memory pool has its own records."""
    first = MemoryCacheItemPool(clock)
    second = MemoryCacheItemPool(clock)

    first.save(CacheItem("k", "v", None, clock))

    assert first.has_item("k") is True
    assert second.has_item("k") is False


def test_get_items_scenario(memory_pool):
    """Test get_items after storing two values through the facade."""
    cache = SimpleCache(memory_pool)
    cache.set("a", "1")
    cache.set("b", "2")

    items = memory_pool.get_items(["a", "b", "c"])

    assert {key: item.is_hit() for key, item in items.items()} == {"a": True, "b": True, "c": False}
    assert items["a"].get() == "1"
    assert items["b"].get() == "2"
    assert items["c"].get() is None
