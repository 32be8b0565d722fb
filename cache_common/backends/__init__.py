"""Cache pool backend implementations."""

from cache_common.backends.file import FileCacheItemPool
from cache_common.backends.memory import MemoryCacheItemPool

__all__ = [
    "MemoryCacheItemPool",
    "FileCacheItemPool",
]
