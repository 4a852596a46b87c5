"""File-based cache backend implementation."""

import contextlib
import fcntl
import logging
import os
import tempfile
import time
from collections.abc import Callable, Iterable, Iterator, Mapping
from datetime import timedelta
from pathlib import Path
from typing import Any

from simplecache.core.entities.cache_entry import CacheEntry
from simplecache.core.entities.error_mode import ErrorMode
from simplecache.core.errors import CacheOperationError, SerializationError
from simplecache.core.interfaces.serializer import ISerializer
from simplecache.core.services.error_policy import ErrorPolicy
from simplecache.core.services.key_validator import STRICT_KEY_VALIDATOR
from simplecache.core.services.ttl_resolver import is_expired, resolve_expires_at
from simplecache.infrastructure.serializers.pickle import PickleSerializer
from simplecache.utils.hashing import key_digest

logger = logging.getLogger(__name__)

CACHE_SUFFIX = ".cache"
LOCK_SUFFIX = ".lock"
TEMP_SUFFIX = ".tmp"


def _is_same_file(path: Path, fd: int) -> bool:
    """Check that path still names the file open as fd."""
    try:
        current = os.stat(path)
    except FileNotFoundError:
        return False
    held = os.fstat(fd)
    return (current.st_dev, current.st_ino) == (held.st_dev, held.st_ino)


class FileCacheBackend:
    """Durable cache backend storing one file per key.

    Each key maps to ``<sha256(key)>.cache`` under the cache directory.
    Writes take an exclusive ``flock`` on a sibling ``.lock`` file and
    atomically replace the cache file, so concurrent writers of the
    same key serialize and readers never observe a partial write.
    The lock file only exists while a write is in progress. Reads are
    lock-free.

    Unreadable or corrupt cache files are treated as misses and
    removed; they are never reported as errors. Expired entries are
    removed lazily on access, or in bulk by ``gc()``.

    Requires a POSIX platform (``fcntl``).
    """

    def __init__(
        self,
        directory: str | os.PathLike[str],
        mode: ErrorMode | str = ErrorMode.THROW,
        serializer: ISerializer | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the file cache backend.

        Args:
            directory: Cache directory, created with parents if missing.
            mode: Error handling mode for storage faults.
            serializer: Value serializer. Defaults to PickleSerializer.
            clock: Wall-clock source returning epoch seconds.

        Raises:
            CacheOperationError: If the directory cannot be created or
                is not writable (regardless of mode).
        """
        self._directory = Path(directory)
        self._policy = ErrorPolicy(mode)
        self._serializer = serializer or PickleSerializer()
        self._clock = clock
        self._validator = STRICT_KEY_VALIDATOR

        self._initialize_directory()
        logger.info("File cache initialized at %s", self._directory)

    @property
    def directory(self) -> Path:
        """Return the cache directory."""
        return self._directory

    @property
    def mode(self) -> ErrorMode:
        """Return the current error mode."""
        return self._policy.mode

    def set_mode(self, mode: ErrorMode | str) -> None:
        """Set error handling mode at runtime.

        Args:
            mode: ErrorMode.THROW or ErrorMode.FAIL.
        """
        self._policy.mode = mode

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.
            default: Value returned on a miss.

        Returns:
            The cached value, or default if missing, expired or corrupt.
        """
        self._validator.validate(key)

        entry = self._load_entry(key)
        if entry is None:
            return default
        return entry.value

    def set(
        self,
        key: str,
        value: Any,
        ttl: int | timedelta | None = None,
    ) -> bool:
        """Store value with optional TTL.

        A TTL that resolves to now or earlier deletes the key instead.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Optional time-to-live.

        Returns:
            True on success, False on a write failure in FAIL mode.

        Raises:
            CacheOperationError: On a write failure in THROW mode.
        """
        self._validator.validate(key)

        now = self._clock()
        expires_at = resolve_expires_at(ttl, now)

        if is_expired(expires_at, now):
            return self.delete(key)

        path = self._path_for(key)

        try:
            payload = self._serializer.serialize(
                CacheEntry(value=value, expires_at=expires_at).to_dict()
            )
            self._write_atomic(path, payload)
        except (OSError, SerializationError) as e:
            return self._policy.handle(
                CacheOperationError(f"Failed to write cache file: {path}"),
                False,
                cause=e,
            )

        return True

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the file is gone afterwards (absent keys included),
            False on a removal failure in FAIL mode.

        Raises:
            CacheOperationError: On a removal failure in THROW mode.
        """
        self._validator.validate(key)

        path = self._path_for(key)

        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            return self._policy.handle(
                CacheOperationError(f"Failed to delete cache file: {path}"),
                False,
                cause=e,
            )

        return True

    def clear(self) -> bool:
        """Remove every file in the cache directory.

        Removal is best-effort: individual failures are logged and
        skipped. Lock and temp files of a write still in progress are
        left to that writer, which removes them itself.

        Returns:
            False if the directory cannot be listed, True otherwise.
        """
        try:
            paths = list(self._directory.iterdir())
        except OSError as e:
            logger.warning("Failed to list cache directory %s: %s", self._directory, e)
            return False

        for path in paths:
            if path.suffix not in (LOCK_SUFFIX, TEMP_SUFFIX) and path.is_file():
                self._discard(path)

        self._sweep_write_leftovers(paths)

        logger.debug("Cleared cache directory %s", self._directory)
        return True

    def has(self, key: str) -> bool:
        """Check if key exists in cache.

        Expired and corrupt files are removed as a side effect.

        Args:
            key: The cache key to check.

        Returns:
            True if a live entry exists for the key.
        """
        self._validator.validate(key)

        return self._load_entry(key) is not None

    def get_multiple(
        self,
        keys: Iterable[str],
        default: Any = None,
    ) -> dict[str, Any]:
        """Retrieve several values at once.

        Args:
            keys: Keys to retrieve. Duplicates are ignored.
            default: Value used for missing keys.

        Returns:
            Mapping of every requested key to its value or default.
        """
        key_list = self._validator.validate_keys(keys)

        return {key: self.get(key, default) for key in key_list}

    def set_multiple(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: int | timedelta | None = None,
    ) -> bool:
        """Store several values with the same TTL.

        Every key is validated before the first write. Writes are not
        rolled back: in THROW mode the first failure propagates and
        earlier keys stay written.

        Args:
            values: Mapping (or key/value pairs) to store.
            ttl: Optional time-to-live applied to every value.

        Returns:
            True if every value was stored.
        """
        items = self._validator.validate_items(values)

        success = True
        for key, value in items:
            success = self.set(key, value, ttl) and success

        return success

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Delete several keys at once.

        Args:
            keys: Keys to delete. Duplicates are ignored.

        Returns:
            True if every key is gone afterwards.
        """
        key_list = self._validator.validate_keys(keys)

        success = True
        for key in key_list:
            success = self.delete(key) and success

        return success

    def gc(self) -> int:
        """Garbage collection - remove expired and corrupt cache files.

        Also sweeps lock and temp files left behind by writers that
        died mid-write. Intended to be called periodically (cron,
        scheduler) or manually; no other operation calls it.

        Returns:
            Number of cache files deleted.
        """
        try:
            paths = list(self._directory.iterdir())
        except OSError as e:
            logger.warning("Failed to list cache directory %s: %s", self._directory, e)
            return 0

        self._sweep_write_leftovers(paths)

        now = self._clock()
        deleted = 0

        for path in paths:
            if path.suffix != CACHE_SUFFIX or not path.is_file():
                continue

            try:
                entry = self._read_entry(path)
            except FileNotFoundError:
                continue

            if entry is None or entry.is_expired(now):
                if self._discard(path):
                    deleted += 1

        logger.debug("Garbage collection removed %d cache files", deleted)
        return deleted

    def _load_entry(self, key: str) -> CacheEntry | None:
        """Load the live entry for a key, evicting corrupt or expired files.

        Args:
            key: A validated cache key.

        Returns:
            The entry, or None on a miss.
        """
        path = self._path_for(key)

        try:
            entry = self._read_entry(path)
        except FileNotFoundError:
            return None

        if entry is None:
            logger.warning("Removing corrupt cache file %s", path)
            self._discard(path)
            return None

        if entry.is_expired(self._clock()):
            self._discard(path)
            return None

        return entry

    def _read_entry(self, path: Path) -> CacheEntry | None:
        """Read and decode a cache file.

        Args:
            path: The cache file.

        Returns:
            The decoded entry, or None if the file is unreadable or corrupt.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise
        except OSError as e:
            logger.warning("Failed to read cache file %s: %s", path, e)
            return None

        try:
            return CacheEntry.from_dict(self._serializer.deserialize(data))
        except (SerializationError, ValueError):
            return None

    def _write_atomic(self, path: Path, payload: bytes) -> None:
        """Write payload to path under an exclusive per-key lock.

        The payload goes to a temp file in the cache directory which
        then replaces the cache file in one rename.

        Raises:
            OSError: If any filesystem step fails.
        """
        with self._key_lock(path.with_suffix(LOCK_SUFFIX)):
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory,
                prefix=f"{path.stem}.",
                suffix=TEMP_SUFFIX,
            )
            try:
                with os.fdopen(fd, "wb") as tmp_file:
                    tmp_file.write(payload)
                os.replace(tmp_name, path)
            finally:
                # Gone after a successful replace
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_name)

    @contextlib.contextmanager
    def _key_lock(self, lock_path: Path, blocking: bool = True) -> Iterator[bool]:
        """Hold the exclusive lock of one key.

        The lock file is removed before the lock is released, so it
        only exists while someone holds it. A waiter that acquires a
        lock file that was removed or replaced in the meantime retries
        on the current one.

        Args:
            lock_path: The key's ``.lock`` file.
            blocking: Wait for the lock instead of giving up.

        Yields:
            True while the lock is held, or False if ``blocking`` is
            False and another writer holds it.
        """
        flags = fcntl.LOCK_EX if blocking else fcntl.LOCK_EX | fcntl.LOCK_NB

        while True:
            with open(lock_path, "a") as lock_file:
                try:
                    fcntl.flock(lock_file.fileno(), flags)
                except BlockingIOError:
                    yield False
                    return

                if not _is_same_file(lock_path, lock_file.fileno()):
                    continue

                try:
                    yield True
                finally:
                    with contextlib.suppress(FileNotFoundError):
                        os.unlink(lock_path)
                return

    def _sweep_write_leftovers(self, paths: list[Path]) -> None:
        """Remove lock and temp files of writes that are no longer running.

        A key's leftovers are only touched while holding that key's
        lock, so an in-progress write is never disturbed.

        Args:
            paths: A listing of the cache directory.
        """
        digests = {
            path.name.split(".", 1)[0]
            for path in paths
            if path.suffix in (LOCK_SUFFIX, TEMP_SUFFIX)
        }

        for digest in digests:
            try:
                with self._key_lock(
                    self._directory / f"{digest}{LOCK_SUFFIX}", blocking=False
                ) as held:
                    if not held:
                        continue
                    for tmp_path in self._directory.glob(f"{digest}.*{TEMP_SUFFIX}"):
                        self._discard(tmp_path)
            except OSError as e:
                logger.warning("Failed to sweep leftovers of %s: %s", digest, e)

    def _discard(self, path: Path) -> bool:
        """Remove a file as housekeeping, logging instead of raising.

        Returns:
            True if the file no longer exists.
        """
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to remove cache file %s: %s", path, e)
            return False
        return True

    def _path_for(self, key: str) -> Path:
        """Return the cache file path for a key."""
        return self._directory / f"{key_digest(key)}{CACHE_SUFFIX}"

    def _initialize_directory(self) -> None:
        """Create the cache directory and check it is writable."""
        try:
            self._directory.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as e:
            raise CacheOperationError(
                f"Failed to create cache directory: {self._directory}"
            ) from e

        if not os.access(self._directory, os.W_OK):
            raise CacheOperationError(
                f"Cache directory is not writable: {self._directory}"
            )
