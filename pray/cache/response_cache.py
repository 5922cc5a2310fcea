"""
File-backed response cache.

Sandi Metz Principles:
- Single Responsibility: Expiring key -> bytes storage on disk
- Small methods: Each operation isolated
- Dependency Injection: Directory, TTL and clock injected
"""

import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Iterator, Optional

from pydantic import ValidationError as PydanticValidationError

from pray.config import PrayConfig
from pray.exceptions import CacheError, ConfigurationError
from pray.models.cache_entry import CacheEntry, CacheStats, utc_now
from pray.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TTL = timedelta(hours=24)
ENTRY_SUFFIX = ".json"


class ResponseCache:
    """
    Durable, expiring key -> bytes store scoped to a directory.

    One JSON envelope file per key. Expired or corrupt entries are
    removed when read. No locking: concurrent writers race and the
    last write wins, which is safe because cached values are
    re-derivations of the same remote fact.
    """

    def __init__(
        self,
        directory: Path | str,
        ttl: timedelta = DEFAULT_TTL,
        enabled: bool = True,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize cache.

        Args:
            directory: Cache directory (created on first write)
            ttl: Default time-to-live for set()
            enabled: When False, get() always misses and set() is a no-op
            clock: Current-time source (injectable for tests)
        """
        self._dir = Path(directory)
        self._ttl = ttl
        self._enabled = enabled
        self._clock = clock

    @property
    def directory(self) -> Path:
        """Get cache directory."""
        return self._dir

    @property
    def enabled(self) -> bool:
        """Check whether caching is enabled."""
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @property
    def default_ttl(self) -> timedelta:
        """Get default time-to-live."""
        return self._ttl

    def get(self, key: str) -> Optional[bytes]:
        """
        Get cached payload.

        Args:
            key: Cache key

        Returns:
            Payload if present and fresh, None otherwise
        """
        if not self._enabled:
            return None

        entry = self._read_entry(self._path(key))
        if entry is None:
            return None
        return entry.payload_bytes

    def set(self, key: str, payload: bytes, ttl: Optional[timedelta] = None) -> None:
        """
        Store payload, replacing any existing entry for key.

        Args:
            key: Cache key
            payload: Raw response body (UTF-8)
            ttl: Time-to-live (uses default if None)

        Raises:
            CacheError: If the entry cannot be encoded or written
        """
        if not self._enabled:
            return

        entry = self._build_entry(key, payload, self._ttl if ttl is None else ttl)
        self._write_atomic(self._path(key), entry.model_dump_json())

    def exists(self, key: str) -> bool:
        """Check if a fresh entry exists."""
        return self.get(key) is not None

    def delete(self, key: str) -> bool:
        """
        Delete one entry.

        Args:
            key: Cache key

        Returns:
            True if a file was removed
        """
        return self._remove(self._path(key))

    def clear(self) -> int:
        """
        Delete all entries. Missing directory is not an error.

        Returns:
            Number of entries removed
        """
        removed = sum(1 for path in self._entry_files() if self._remove(path))
        logger.info("Cache cleared", removed=removed, directory=str(self._dir))
        return removed

    def clean_expired(self) -> int:
        """
        Remove expired and corrupt entries.

        Returns:
            Number of entries removed
        """
        if not self._enabled:
            return 0

        removed = 0
        for path in self._entry_files():
            if path.exists() and self._read_entry(path) is None:
                removed += 1
        logger.info("Expired cache entries removed", removed=removed)
        return removed

    def stats(self) -> CacheStats:
        """
        Collect entry count and total size.

        Returns:
            Cache statistics
        """
        entries = 0
        total_bytes = 0
        for path in self._entry_files():
            try:
                total_bytes += path.stat().st_size
            except OSError:
                continue
            entries += 1
        return CacheStats(entries=entries, total_bytes=total_bytes)

    def _read_entry(self, path: Path) -> Optional[CacheEntry]:
        """Read an entry file, deleting it when corrupt or expired."""
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Unreadable cache entry", path=str(path), error=str(e))
            self._remove(path)
            return None

        try:
            entry = CacheEntry.model_validate_json(raw)
        except PydanticValidationError:
            logger.warning("Corrupt cache entry removed", path=str(path))
            self._remove(path)
            return None

        if entry.is_expired(self._clock()):
            logger.debug("Expired cache entry removed", key=entry.key)
            self._remove(path)
            return None

        return entry

    def _build_entry(self, key: str, payload: bytes, ttl: timedelta) -> CacheEntry:
        """Build an envelope for payload."""
        if ttl <= timedelta(0):
            raise CacheError(f"TTL must be positive, got {ttl}")
        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CacheError(f"Payload for {key} is not UTF-8") from e
        return CacheEntry.create(key, text, ttl, now=self._clock())

    def _write_atomic(self, path: Path, data: str) -> None:
        """Write via temp file and rename so readers never see partial files."""
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._dir, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(data)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise CacheError(f"Failed to write cache file {path.name}: {e}") from e

    def _entry_files(self) -> Iterator[Path]:
        """Iterate entry files (empty when directory is missing)."""
        if not self._dir.is_dir():
            return iter(())
        return (
            path
            for path in sorted(self._dir.iterdir())
            if path.is_file() and path.suffix == ENTRY_SUFFIX
        )

    def _remove(self, path: Path) -> bool:
        """Remove a file, ignoring a missing one."""
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise CacheError(f"Failed to remove cache file {path.name}: {e}") from e

    def _path(self, key: str) -> Path:
        """Get the entry file path for key."""
        if not key or os.sep in key or key.startswith("."):
            raise CacheError(f"Invalid cache key: {key!r}")
        return self._dir / f"{key}{ENTRY_SUFFIX}"


def create_response_cache(config: PrayConfig) -> ResponseCache:
    """
    Build the response cache described by configuration.

    Args:
        config: Core configuration (cache_dir, cache_enabled, prayer TTL)

    Returns:
        Response cache

    Raises:
        ConfigurationError: If cache_dir exists but is not a directory
    """
    directory = Path(config.cache_dir).expanduser()
    if directory.exists() and not directory.is_dir():
        raise ConfigurationError(f"cache_dir is not a directory: {directory}")

    return ResponseCache(
        directory,
        ttl=timedelta(seconds=config.prayer_cache_ttl_seconds),
        enabled=config.cache_enabled,
    )
