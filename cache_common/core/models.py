"""Data models for cache records and backend configuration."""

import os
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cache_common.core.exceptions import ConfigurationError


class CacheRecord(BaseModel):
    """Serialized form of a cache item.

    A record carries everything needed to rebuild a ``CacheItem`` except the
    clock, which is supplied by the pool that loads it.

    Attributes:
        key: The cache key
        value: The cached payload (any picklable object)
        expiration: Absolute expiration instant, or None for no expiration
    """

    key: str = Field(..., description="The cache key")
    value: Any = Field(None, description="The cached payload")
    expiration: datetime | None = Field(None, description="Absolute expiration instant")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "key": "user.42.profile",
                "value": {"name": "Ada"},
                "expiration": "2024-01-01T00:00:00Z",
            }
        }
    )


class FileCacheConfig(BaseModel):
    """Configuration for the file backend."""

    directory: Path
    suffix: str = ".cache"

    @field_validator("suffix")
    @classmethod
    def _check_suffix(cls, suffix: str) -> str:
        if not suffix.startswith("."):
            raise ValueError("suffix must start with '.'")
        if "/" in suffix or "\\" in suffix:
            raise ValueError("suffix must not contain a path separator")
        return suffix

    @classmethod
    def from_env(cls, prefix: str = "CACHE_") -> "FileCacheConfig":
        """Build a config from ``{prefix}DIRECTORY`` and ``{prefix}SUFFIX``.

        Raises:
            ConfigurationError: If the directory variable is missing or the
                values do not validate
        """
        directory = os.environ.get(f"{prefix}DIRECTORY")
        if not directory:
            raise ConfigurationError(f"{prefix}DIRECTORY is not set", backend="file")

        data: dict[str, Any] = {"directory": directory}
        if os.environ.get(f"{prefix}SUFFIX"):
            data["suffix"] = os.environ[f"{prefix}SUFFIX"]
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "FileCacheConfig":
        """Load a config from a YAML mapping with ``directory`` and ``suffix`` keys.

        Raises:
            ConfigurationError: If the file cannot be read or does not validate
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Could not load cache config {path}: {e}", backend="file") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Cache config {path} must be a mapping", backend="file")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileCacheConfig":
        """Validate ``data`` into a config, raising ConfigurationError on failure."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid cache config: {e}", backend="file") from e
