"""Filesystem backend: one pickled record per key under a root directory."""

import logging
import os
import pickle
import tempfile
from pathlib import Path

from pydantic import ValidationError

from cache_common.core.clock import Clock
from cache_common.core.exceptions import ConfigurationError
from cache_common.core.item import CacheItem
from cache_common.core.models import CacheRecord, FileCacheConfig
from cache_common.core.pool import CacheItemPool

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".cache"

# pickle.load can fail in many ways on foreign or truncated content
_UNPICKLE_ERRORS = (
    pickle.UnpicklingError,
    EOFError,
    AttributeError,
    ImportError,
    IndexError,
    KeyError,
    TypeError,
    ValueError,
)


class FileCacheItemPool(CacheItemPool):
    """Cache pool that stores each item in its own file.

    The record for key ``K`` lives at ``directory / (K + suffix)``. A ``/`` in
    a key makes nested subdirectories. Key-taking operations reject ``/``, so
    nested keys only come from items that were built directly and saved.

    File content is a pickled ``{key, value, expiration}`` mapping. It is only
    meant to be read back by this backend.
    """

    backend_name = "file"

    def __init__(
        self,
        directory: Path | str,
        clock: Clock | None = None,
        suffix: str = DEFAULT_SUFFIX,
    ) -> None:
        """Initialize pool and create the root directory if needed.

        Args:
            directory: Root directory for this pool
            clock: Clock used for expiration checks
            suffix: File name suffix for records

        Raises:
            ConfigurationError: If the suffix is invalid or the directory
                cannot be created
        """
        super().__init__(clock)
        config = FileCacheConfig.from_dict({"directory": directory, "suffix": suffix})
        self._directory = config.directory
        self.suffix = config.suffix
        self._setup_directory()
        logger.info(f"FileCacheItemPool initialized at {self._directory}")

    @classmethod
    def from_config(cls, config: FileCacheConfig, clock: Clock | None = None) -> "FileCacheItemPool":
        """Build a pool from a validated config."""
        return cls(config.directory, clock=clock, suffix=config.suffix)

    @property
    def directory(self) -> Path:
        return self._directory

    def _setup_directory(self) -> None:
        """Creates the root directory if it doesn't exist."""
        if self._directory.exists() and not self._directory.is_dir():
            raise ConfigurationError(f"Cache path {self._directory} is not a directory", backend="file")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create cache directory {self._directory}: {e}")
            raise ConfigurationError(f"Could not create cache directory {self._directory}: {e}", backend="file") from e

    def _path_for(self, key: str) -> Path | None:
        """Map a key to its record file, or None if the path would leave the root."""
        path = self._directory / f"{key}{self.suffix}"
        try:
            resolved = path.resolve()
        except ValueError as e:
            logger.warning(f"Key {key!r} cannot be mapped to a file: {e}")
            return None
        if not resolved.is_relative_to(self._directory.resolve()):
            logger.warning(f"Key {key!r} resolves outside {self._directory}")
            return None
        return path

    # --- Storage primitives ---

    def _load(self, key: str) -> CacheItem | None:
        path = self._path_for(key)
        if path is None or not path.is_file():
            return None

        with open(path, "rb") as f:
            try:
                data = pickle.load(f)
            except _UNPICKLE_ERRORS as e:
                logger.warning(f"Corrupt cache file {path}: {e}")
                return None

        try:
            record = CacheRecord.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Unrecognized content in cache file {path}: {e}")
            return None

        if record.key != key:
            logger.warning(f"Cache file {path} holds key {record.key!r}, expected {key!r}")
            return None

        logger.debug(f"Loaded cache file: key={key}, file={path}")
        return CacheItem.from_record(record, self.clock)

    def _store(self, item: CacheItem) -> bool:
        path = self._path_for(item.get_key())
        if path is None:
            return False

        try:
            payload = pickle.dumps(dict(item.to_record()))
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            logger.warning(f"Cannot serialize value for key {item.get_key()!r}: {e}")
            return False

        path.parent.mkdir(parents=True, exist_ok=True)
        # One temp file per writer so concurrent saves of a key never share it.
        fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f"{path.name}.", suffix=".tmp")
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(temp_path, path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
        return True

    def _remove(self, key: str) -> bool:
        path = self._path_for(key)
        if path is None:
            return True

        path.unlink(missing_ok=True)
        self._prune_empty_parents(path)
        return True

    def _purge(self) -> bool:
        # Children before parents; the root itself is kept.
        for dirpath, dirnames, filenames in os.walk(self._directory, topdown=False):
            current = Path(dirpath)
            for name in filenames:
                (current / name).unlink()
            for name in dirnames:
                subdir = current / name
                if subdir.is_symlink():
                    subdir.unlink()
                else:
                    subdir.rmdir()

        self._directory.mkdir(parents=True, exist_ok=True)
        return True

    def _prune_empty_parents(self, path: Path) -> None:
        """Remove directories left empty by a delete, stopping at the root."""
        root = self._directory.resolve()
        parent = path.parent.resolve()
        while parent != root and parent.is_relative_to(root):
            try:
                parent.rmdir()
            except OSError:
                break  # not empty
            parent = parent.parent
