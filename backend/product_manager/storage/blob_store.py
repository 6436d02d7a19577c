"""Key-value blob stores that hold serialized product snapshots.

Three backends share one small interface:

- ``FileBlobStore`` keeps each key in ``<storage_dir>/<key>.json``
- ``RedisBlobStore`` keeps each key as a Redis string
- ``MemoryBlobStore`` keeps values in a dict (tests, throwaway runs)

Every backend refuses values larger than ``max_bytes`` and reports backend
failures as ``PersistenceError``.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Protocol

from redis import Redis
from redis.exceptions import RedisError

from product_manager.core.config import Settings
from product_manager.utils.redis_client import create_redis_client

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 5 * 1024 * 1024
_SAFE_KEY = re.compile(r"^[A-Za-z0-9._:-]+$")


class PersistenceError(RuntimeError):
    """Raised when a snapshot cannot be read from or written to the store."""


class BlobStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def ping(self) -> bool: ...


def _check_size(key: str, value: str, max_bytes: int) -> None:
    size = len(value.encode("utf-8"))
    if size > max_bytes:
        raise PersistenceError(
            f"Value for '{key}' is {size} bytes, above the {max_bytes} byte limit"
        )


class MemoryBlobStore:
    """Process-local store; contents vanish with the process."""

    def __init__(self, max_bytes: int = DEFAULT_MAX_BYTES):
        self._max_bytes = max_bytes
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        _check_size(key, value, self._max_bytes)
        self._data[key] = value

    def ping(self) -> bool:
        return True


class FileBlobStore:
    """Store each key as a UTF-8 file under a directory."""

    def __init__(self, directory: str | Path, max_bytes: int = DEFAULT_MAX_BYTES):
        self._directory = Path(directory).resolve()
        self._max_bytes = max_bytes

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise PersistenceError(f"Unsupported storage key: {key!r}")
        return self._directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to read '{key}'") from e

    def set(self, key: str, value: str) -> None:
        _check_size(key, value, self._max_bytes)
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            # Readers never see a half-written snapshot.
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to write '{key}'") from e

    def ping(self) -> bool:
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Storage directory unavailable: {e}")
            return False
        return os.access(self._directory, os.W_OK)


class RedisBlobStore:
    """Store each key as a Redis string under a common prefix."""

    def __init__(
        self,
        client: Redis,
        prefix: str = "",
        max_bytes: int = DEFAULT_MAX_BYTES,
    ):
        self._client = client
        self._prefix = prefix
        self._max_bytes = max_bytes

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> str | None:
        try:
            raw = self._client.get(self._key(key))
        except RedisError as e:
            logger.error(f"Failed to read '{key}' from Redis: {e}", exc_info=True)
            raise PersistenceError(f"Failed to read '{key}'") from e
        if raw is None:
            return None
        if isinstance(raw, bytes):
            return raw.decode("utf-8")
        return raw

    def set(self, key: str, value: str) -> None:
        _check_size(key, value, self._max_bytes)
        try:
            self._client.set(self._key(key), value)
        except RedisError as e:
            logger.error(f"Failed to write '{key}' to Redis: {e}", exc_info=True)
            raise PersistenceError(f"Failed to write '{key}'") from e

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False


def create_blob_store(settings: Settings) -> BlobStore:
    """Build the store selected by ``settings.storage_backend``."""
    backend = settings.storage_backend
    if backend == "memory":
        return MemoryBlobStore(max_bytes=settings.max_blob_bytes)
    if backend == "redis":
        client = create_redis_client(
            settings.redis_url, decode_responses=True, socket_connect_timeout=2
        )
        return RedisBlobStore(
            client,
            prefix=settings.redis_key_prefix,
            max_bytes=settings.max_blob_bytes,
        )
    if backend == "file":
        return FileBlobStore(settings.storage_dir, max_bytes=settings.max_blob_bytes)
    raise ValueError(f"Unknown storage backend: {backend}")
