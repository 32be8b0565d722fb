"""Cache item: a key, a value and an optional expiration instant."""

from datetime import UTC, datetime, timedelta
from typing import Any

from cache_common.core.clock import Clock, SystemClock, ensure_aware
from cache_common.core.models import CacheRecord

# Expiration given to placeholder items so they can never be a hit.
MISS_EXPIRATION = datetime(1970, 1, 1, tzinfo=UTC)
LATEST_EXPIRATION = datetime.max.replace(tzinfo=UTC)
EARLIEST_EXPIRATION = datetime.min.replace(tzinfo=UTC)


class CacheItem:
    """A single cache entry.

    Items are mutable and fluent: ``set``, ``expires_at`` and ``expires_after``
    change the item in place and return the same instance. An item obtained
    from a pool is a detached draft; changes reach the store only when the
    item is passed back to ``save`` or ``save_deferred``.

    The constructor does not validate the key. Pools validate keys at their
    boundary, and backends rebuild stored items without checking them again.

    Example:
        >>> item = pool.get_item("greeting")
        >>> pool.save(item.set("hello").expires_after(60))
        True
    """

    def __init__(
        self,
        key: str,
        value: Any = None,
        expiration: datetime | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize item.

        Args:
            key: Cache key
            value: Cached payload
            expiration: Absolute expiration instant, None for never
            clock: Clock used to evaluate expiration (system clock by default)
        """
        self._key = key
        self._value = value
        self._expiration = ensure_aware(expiration) if expiration is not None else None
        self._clock = clock or SystemClock()

    @classmethod
    def miss(cls, key: str, clock: Clock | None = None) -> "CacheItem":
        """Build a placeholder item for a key with no usable stored value."""
        return cls(key, None, MISS_EXPIRATION, clock)

    @classmethod
    def from_record(cls, record: CacheRecord, clock: Clock | None = None) -> "CacheItem":
        """Rebuild an item from its serialized record."""
        return cls(record.key, record.value, record.expiration, clock)

    def to_record(self) -> CacheRecord:
        """Return the serialized form of this item."""
        return CacheRecord(key=self._key, value=self._value, expiration=self._expiration)

    @property
    def key(self) -> str:
        return self._key

    @property
    def expiration(self) -> datetime | None:
        return self._expiration

    @property
    def clock(self) -> Clock:
        return self._clock

    def get_key(self) -> str:
        """Return the item's key."""
        return self._key

    def get(self, default: Any = None) -> Any:
        """Return the value if the item is a hit, ``default`` otherwise."""
        return self._value if self.is_hit() else default

    def is_hit(self) -> bool:
        """Return True if the item has no expiration or has not expired yet.

        An item expiring exactly now is still a hit.
        """
        return self._expiration is None or self._clock.now() <= self._expiration

    def set(self, value: Any) -> "CacheItem":
        """Replace the value."""
        self._value = value
        return self

    def expires_at(self, expiration: datetime | None) -> "CacheItem":
        """Set the absolute expiration instant, or clear it with None."""
        self._expiration = ensure_aware(expiration) if expiration is not None else None
        return self

    def expires_after(self, ttl: int | timedelta | None) -> "CacheItem":
        """Expire ``ttl`` after the clock's current instant.

        Args:
            ttl: Whole seconds, a timedelta, or None to never expire
        """
        if ttl is None:
            return self.expires_at(None)
        if isinstance(ttl, bool) or not isinstance(ttl, (int, timedelta)):
            raise TypeError(f"ttl must be int, timedelta or None, got {type(ttl).__name__}")
        forward = ttl > 0 if isinstance(ttl, int) else ttl > timedelta(0)
        try:
            if isinstance(ttl, int):
                ttl = timedelta(seconds=ttl)
            expiration = self._clock.now() + ttl
        except OverflowError:
            # Clamp to the datetime range.
            expiration = LATEST_EXPIRATION if forward else EARLIEST_EXPIRATION
        return self.expires_at(expiration)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CacheItem):
            return NotImplemented
        return (
            self._key == other._key
            and self._value == other._value
            and self._expiration == other._expiration
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return (
            f"CacheItem(key={self._key!r}, value={self._value!r}, "
            f"expiration={self._expiration!r}, hit={self.is_hit()})"
        )
