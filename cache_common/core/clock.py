"""Clock abstractions used to evaluate item expiration."""

from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta


def ensure_aware(instant: datetime) -> datetime:
    """Return ``instant`` as a timezone-aware datetime, reading naive values as UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant


class Clock(ABC):
    """Source of the current instant.

    Pools and items never call ``datetime.now`` directly; they ask the clock
    they were built with, so expiration can be tested deterministically.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant as a timezone-aware datetime."""
        pass


class SystemClock(Clock):
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock(Clock):
    """Clock that only moves when told to.

    Example:
        >>> clock = FrozenClock(datetime(2024, 1, 1, tzinfo=UTC))
        >>> clock.advance(seconds=30)
        >>> clock.now()
        datetime.datetime(2024, 1, 1, 0, 0, 30, tzinfo=datetime.timezone.utc)
    """

    def __init__(self, instant: datetime | None = None) -> None:
        self._instant = ensure_aware(instant) if instant is not None else datetime.now(UTC)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        """Move the clock to ``instant``."""
        self._instant = ensure_aware(instant)

    def advance(self, delta: timedelta | None = None, *, seconds: float = 0) -> None:
        """Move the clock forward by ``delta`` plus ``seconds``."""
        self._instant = self._instant + (delta or timedelta()) + timedelta(seconds=seconds)
