"""Cache item pool contract shared by every storage backend."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from cache_common.core.clock import Clock, SystemClock
from cache_common.core.item import CacheItem
from cache_common.core.keys import validate_key

logger = logging.getLogger(__name__)


class CacheItemPool(ABC):
    """Abstract base class for cache item pools.

    This interface defines the contract that all storage backends must follow.
    The pool owns everything that does not depend on physical storage:

    - Key validation at every operation that takes a key
    - Hit/miss semantics, including the placeholder returned on a miss
    - The deferred-save queue and its batch commit
    - Turning backend I/O faults into False or a miss

    Backends implement four storage primitives: ``_load``, ``_store``,
    ``_remove`` and ``_purge``. They may raise ``OSError``; the pool logs it
    and reports a failure instead of propagating it.

    Example:
        >>> pool = MemoryCacheItemPool()
        >>> item = pool.get_item("answer").set(42).expires_after(300)
        >>> pool.save(item)
        True
        >>> pool.get_item("answer").get()
        42
    """

    backend_name = "unknown"

    def __init__(self, clock: Clock | None = None) -> None:
        """Initialize pool.

        Args:
            clock: Clock used for expiration checks (system clock by default)
        """
        self.clock = clock or SystemClock()
        self._deferred: dict[str, CacheItem] = {}

    # --- Storage primitives ---

    @abstractmethod
    def _load(self, key: str) -> CacheItem | None:
        """Return the stored item for ``key``, or None if there is no usable record.

        Expired records are returned as-is; the pool decides what a hit is.
        """
        pass

    @abstractmethod
    def _store(self, item: CacheItem) -> bool:
        """Persist ``item``, replacing any previous record for its key."""
        pass

    @abstractmethod
    def _remove(self, key: str) -> bool:
        """Remove the record for ``key``. A missing record is not a failure."""
        pass

    @abstractmethod
    def _purge(self) -> bool:
        """Remove every record held by this pool."""
        pass

    # --- Pool contract ---

    def get_item(self, key: str) -> CacheItem:
        """Return the item stored under ``key``, or a miss placeholder.

        Raises:
            InvalidKeyError: If the key is invalid
        """
        return self._fetch(self._validate(key))

    def get_items(self, keys: Iterable[str]) -> dict[str, CacheItem]:
        """Return items for ``keys`` in the caller's order.

        Every key is validated before any backend access. A backend fault on
        one key is reported as a miss for that key only.

        Raises:
            InvalidKeyError: If any key is invalid
        """
        validated = [self._validate(key) for key in keys]
        return {key: self._fetch(key) for key in validated}

    def has_item(self, key: str) -> bool:
        """Return True if a stored item exists for ``key`` and is a hit.

        Raises:
            InvalidKeyError: If the key is invalid
        """
        return self._fetch(self._validate(key)).is_hit()

    def save(self, item: CacheItem) -> bool:
        """Persist ``item`` if it is currently a hit.

        Returns:
            True if the item was written; False if it had already expired or
            the backend failed
        """
        if not item.is_hit():
            logger.debug(f"Refusing to save expired item: key={item.get_key()}")
            return False

        try:
            saved = self._store(item)
        except (OSError, ValidationError) as e:
            logger.warning(f"Failed to save item {item.get_key()!r} in {self.backend_name} pool: {e}")
            return False

        if saved:
            logger.debug(f"Saved item: key={item.get_key()}")
        return saved

    def save_deferred(self, item: CacheItem) -> bool:
        """Stage ``item`` until the next ``commit``. Replaces any staged item for the same key."""
        self._deferred[item.get_key()] = item
        return True

    def commit(self) -> bool:
        """Save every staged item and empty the queue.

        Returns:
            True only if every staged item was saved
        """
        staged, self._deferred = self._deferred, {}
        results = [self.save(item) for item in staged.values()]
        if staged:
            logger.debug(f"Committed {results.count(True)}/{len(results)} deferred items")
        return all(results)

    def deferred_keys(self) -> list[str]:
        """Return the keys currently staged by ``save_deferred``."""
        return list(self._deferred)

    def delete_item(self, key: str) -> bool:
        """Remove the item stored under ``key``.

        Returns:
            True if the key was absent or removed; False on a backend fault

        Raises:
            InvalidKeyError: If the key is invalid
        """
        return self._delete(self._validate(key))

    def delete_items(self, keys: Iterable[str]) -> bool:
        """Remove every key in ``keys``, continuing past individual failures.

        Raises:
            InvalidKeyError: If any key is invalid; nothing is deleted then
        """
        validated = [self._validate(key) for key in keys]
        results = [self._delete(key) for key in validated]
        return all(results)

    def clear(self) -> bool:
        """Drop the deferred queue and remove every stored item."""
        self._deferred.clear()
        try:
            cleared = self._purge()
        except OSError as e:
            logger.error(f"Failed to clear {self.backend_name} pool: {e}")
            return False

        logger.info(f"Cleared {self.backend_name} cache pool")
        return cleared

    # --- Helpers ---

    def _validate(self, key: Any) -> str:
        return validate_key(key, backend=self.backend_name)

    def _fetch(self, key: str) -> CacheItem:
        try:
            item = self._load(key)
        except OSError as e:
            logger.warning(f"Failed to read item {key!r} from {self.backend_name} pool: {e}")
            item = None

        if item is None:
            logger.debug(f"Cache miss: key={key}")
            return CacheItem.miss(key, self.clock)
        return item

    def _delete(self, key: str) -> bool:
        try:
            deleted = self._remove(key)
        except OSError as e:
            logger.warning(f"Failed to delete item {key!r} from {self.backend_name} pool: {e}")
            return False

        logger.debug(f"Deleted item: key={key}")
        return deleted

    def __enter__(self) -> "CacheItemPool":
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        """Commit staged items on a clean exit; discard them if the block raised."""
        if exc_type is None:
            self.commit()
        else:
            self._deferred.clear()
