"""Tests for cache data models and configuration."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from cache_common.core import CacheRecord, ConfigurationError, FileCacheConfig


def test_cache_record_defaults():
    """Test CacheRecord default values."""
    record = CacheRecord(key="itemKey")

    assert record.key == "itemKey"
    assert record.value is None
    assert record.expiration is None


def test_cache_record_keeps_arbitrary_values():
    """Test CacheRecord stores the value object as-is."""
    value = (1, "two", {3})
    record = CacheRecord.model_validate({"key": "k", "value": value, "expiration": None})

    assert record.value == value
    assert isinstance(record.value, tuple)


def test_file_cache_config_defaults(tmp_path):
    """Test FileCacheConfig default values."""
    config = FileCacheConfig(directory=tmp_path)

    assert config.directory == tmp_path
    assert config.suffix == ".cache"


def test_file_cache_config_coerces_directory():
    """Test the directory is coerced to a Path."""
    config = FileCacheConfig.from_dict({"directory": "/var/cache/app"})

    assert config.directory == Path("/var/cache/app")


@pytest.mark.parametrize("suffix", ["cache", ".ca/che", ".ca\\che"])
def test_file_cache_config_rejects_bad_suffix(tmp_path, suffix):
    """Test suffix validation."""
    with pytest.raises(ConfigurationError):
        FileCacheConfig.from_dict({"directory": tmp_path, "suffix": suffix})


def test_file_cache_config_from_env(tmp_path):
    """Test loading config from environment variables."""
    env = {"CACHE_DIRECTORY": str(tmp_path), "CACHE_SUFFIX": ".bin"}
    with patch.dict(os.environ, env, clear=True):
        config = FileCacheConfig.from_env()

    assert config.directory == tmp_path
    assert config.suffix == ".bin"


def test_file_cache_config_from_env_with_prefix(tmp_path):
    """Test a custom environment prefix."""
    with patch.dict(os.environ, {"MYAPP_CACHE_DIRECTORY": str(tmp_path)}, clear=True):
        config = FileCacheConfig.from_env(prefix="MYAPP_CACHE_")

    assert config.directory == tmp_path
    assert config.suffix == ".cache"


def test_file_cache_config_from_env_requires_directory():
    """Test a missing directory variable raises ConfigurationError."""
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ConfigurationError, match="CACHE_DIRECTORY"):
            FileCacheConfig.from_env()


def test_file_cache_config_from_yaml(tmp_path):
    """Test loading config from a YAML file."""
    config_path = tmp_path / "cache.yaml"
    config_path.write_text(f"directory: {tmp_path / 'data'}\nsuffix: .pkl\n")

    config = FileCacheConfig.from_yaml(config_path)

    assert config.directory == tmp_path / "data"
    assert config.suffix == ".pkl"


def test_file_cache_config_from_yaml_rejects_non_mapping(tmp_path):
    """Test a YAML document that is not a mapping is rejected."""
    config_path = tmp_path / "cache.yaml"
    config_path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigurationError, match="must be a mapping"):
        FileCacheConfig.from_yaml(config_path)


def test_file_cache_config_from_missing_yaml(tmp_path):
    """Test a missing YAML file raises ConfigurationError."""
    with pytest.raises(ConfigurationError):
        FileCacheConfig.from_yaml(tmp_path / "missing.yaml")
