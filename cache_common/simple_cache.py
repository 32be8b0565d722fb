"""Simple value-in/value-out cache on top of a cache item pool."""

import logging
from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any

from cache_common.core.keys import validate_key
from cache_common.core.pool import CacheItemPool

logger = logging.getLogger(__name__)

TTL = int | timedelta | None

_MISSING = object()


class SimpleCache:
    """Key/value cache facade over a ``CacheItemPool``.

    Hits and misses are translated into plain values and defaults, and TTLs
    into absolute expirations. The only exception that leaves this class is
    ``InvalidKeyError``; storage faults are reported as False or a default.

    Example:
        >>> cache = SimpleCache(MemoryCacheItemPool())
        >>> cache.set("token", "abc123", ttl=3600)
        True
        >>> cache.get("token")
        'abc123'
        >>> cache.get("missing", default="n/a")
        'n/a'
    """

    def __init__(self, pool: CacheItemPool) -> None:
        self._pool = pool

    @property
    def pool(self) -> CacheItemPool:
        return self._pool

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value for ``key``, or ``default`` on a miss."""
        item = self._pool.get_item(key)
        return item.get(default)

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        """Store ``value`` under ``key``.

        Args:
            key: Cache key
            value: Value to store
            ttl: Seconds or timedelta until expiration; None never expires

        Returns:
            The pool's save result
        """
        item = self._pool.get_item(key)
        item.set(value).expires_after(ttl)
        return self._pool.save(item)

    def delete(self, key: str) -> bool:
        return self._pool.delete_item(key)

    def clear(self) -> bool:
        return self._pool.clear()

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        """Return a mapping of each key to its value, or ``default`` on a miss."""
        items = self._pool.get_items(keys)
        return {key: item.get(default) for key, item in items.items()}

    def set_multiple(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: TTL = None,
    ) -> bool:
        """Stage every key/value pair and commit them as one batch.

        Every key is validated before anything is staged.

        Returns:
            The pool's commit result
        """
        pairs = list(values.items()) if isinstance(values, Mapping) else list(values)
        items = self._pool.get_items(key for key, _ in pairs)
        for key, value in pairs:
            item = items[key]
            item.set(value).expires_after(ttl)
            self._pool.save_deferred(item)
        return self._pool.commit()

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Delete every key.

        Returns:
            True only if every individual delete succeeded
        """
        keys = [validate_key(key, backend=self._pool.backend_name) for key in keys]
        results = [self._pool.delete_item(key) for key in keys]
        if not all(results):
            logger.warning(f"Failed to delete {results.count(False)} of {len(results)} keys")
        return all(results)

    def has(self, key: str) -> bool:
        return self._pool.has_item(key)

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __getitem__(self, key: str) -> Any:
        value = self._pool.get_item(key).get(_MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)
