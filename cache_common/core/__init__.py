"""Core abstractions and models."""

from cache_common.core.clock import Clock, FrozenClock, SystemClock
from cache_common.core.exceptions import CacheError, ConfigurationError, InvalidKeyError
from cache_common.core.item import CacheItem
from cache_common.core.keys import RESERVED_CHARACTERS, is_valid_key, validate_key
from cache_common.core.models import CacheRecord, FileCacheConfig
from cache_common.core.pool import CacheItemPool

__all__ = [
    # Clock
    "Clock",
    "SystemClock",
    "FrozenClock",
    # Exceptions
    "CacheError",
    "InvalidKeyError",
    "ConfigurationError",
    # Keys
    "RESERVED_CHARACTERS",
    "validate_key",
    "is_valid_key",
    # Models
    "CacheItem",
    "CacheRecord",
    "FileCacheConfig",
    # Pool
    "CacheItemPool",
]
