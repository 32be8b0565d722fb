"""Cache key validation shared by items, pools and the simple cache facade."""

from typing import Any

from cache_common.core.exceptions import InvalidKeyError

# Backends may map keys onto file paths or structured namespaces,
# where these characters carry meaning.
RESERVED_CHARACTERS = frozenset("{}()/\\@:")


def validate_key(key: Any, backend: str = "unknown") -> str:
    """Check that ``key`` can be used as a cache key.

    Args:
        key: Candidate key
        backend: Backend name reported in the error

    Returns:
        The key, unchanged

    Raises:
        InvalidKeyError: If the key is not a string, is empty, or contains
            one of ``RESERVED_CHARACTERS``
    """
    if not isinstance(key, str):
        raise InvalidKeyError(key, f"expected str, got {type(key).__name__}", backend=backend)
    if not key:
        raise InvalidKeyError(key, "key must not be empty", backend=backend)
    reserved = sorted(RESERVED_CHARACTERS.intersection(key))
    if reserved:
        raise InvalidKeyError(
            key, f"reserved characters {''.join(reserved)!r} are not allowed", backend=backend
        )
    return key


def is_valid_key(key: Any) -> bool:
    """Return True if ``key`` passes :func:`validate_key`."""
    try:
        validate_key(key)
    except InvalidKeyError:
        return False
    return True
