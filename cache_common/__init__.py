"""Cache Common - Shared cache item pool framework."""

from cache_common.backends import FileCacheItemPool, MemoryCacheItemPool
from cache_common.core import (
    RESERVED_CHARACTERS,
    CacheError,
    CacheItem,
    CacheItemPool,
    CacheRecord,
    Clock,
    ConfigurationError,
    FileCacheConfig,
    FrozenClock,
    InvalidKeyError,
    SystemClock,
    is_valid_key,
    validate_key,
)
from cache_common.simple_cache import SimpleCache

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core
    "CacheItem",
    "CacheItemPool",
    "CacheRecord",
    "FileCacheConfig",
    "Clock",
    "SystemClock",
    "FrozenClock",
    "RESERVED_CHARACTERS",
    "validate_key",
    "is_valid_key",
    # Exceptions
    "CacheError",
    "InvalidKeyError",
    "ConfigurationError",
    # Backends
    "MemoryCacheItemPool",
    "FileCacheItemPool",
    # Facade
    "SimpleCache",
]
