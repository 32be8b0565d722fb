"""Custom exceptions for the cache framework."""


class CacheError(Exception):
    """Base exception for cache errors."""

    def __init__(self, message: str, backend: str = "unknown") -> None:
        """Initialize error.

        Args:
            message: Error message
            backend: Backend name
        """
        self.backend = backend
        super().__init__(f"[{backend}] {message}")


class InvalidKeyError(CacheError, ValueError):
    """Raised when a cache key is empty or contains a reserved character."""

    def __init__(self, key: object, reason: str, backend: str = "unknown") -> None:
        """Initialize error.

        Args:
            key: The rejected key
            reason: Why the key was rejected
            backend: Backend name
        """
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid cache key {key!r}: {reason}", backend=backend)


class ConfigurationError(CacheError):
    """Raised when a cache pool cannot be initialized."""

    pass
