"""In-process memory backend."""

import copy
import logging

from cache_common.core.clock import Clock
from cache_common.core.item import CacheItem
from cache_common.core.models import CacheRecord
from cache_common.core.pool import CacheItemPool

logger = logging.getLogger(__name__)


class MemoryCacheItemPool(CacheItemPool):
    """Cache pool that keeps records in a dict for the lifetime of the instance.

    Values are deep-copied on save and again on every fetch, so neither the
    caller that saved an item nor a caller holding a fetched item can change
    the stored copy.
    """

    backend_name = "memory"

    def __init__(self, clock: Clock | None = None) -> None:
        super().__init__(clock)
        self._records: dict[str, CacheRecord] = {}
        logger.info("MemoryCacheItemPool initialized")

    def __len__(self) -> int:
        return len(self._records)

    def _load(self, key: str) -> CacheItem | None:
        record = self._records.get(key)
        if record is None:
            return None
        return CacheItem(record.key, copy.deepcopy(record.value), record.expiration, self.clock)

    def _store(self, item: CacheItem) -> bool:
        record = item.to_record()
        try:
            record.value = copy.deepcopy(record.value)
        except (TypeError, copy.Error) as e:
            logger.warning(f"Cannot copy value for key {item.get_key()!r}: {e}")
            return False

        self._records[record.key] = record
        return True

    def _remove(self, key: str) -> bool:
        self._records.pop(key, None)
        return True

    def _purge(self) -> bool:
        self._records.clear()
        return True
