"""In-memory key-value cache with per-entry expiration.

The cache is an explicit object owned by its caller; there is no
module-level instance. Expired entries are dropped lazily when they are
read, or eagerly through purge_expired().
"""

import logging
import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(slots=True)
class _CacheEntry:
    value: Any
    expires_at: float


class TTLCache:
    """Bounded key-value store whose entries expire after a time-to-live.

    When the cache is full, expired entries are purged first and then the
    oldest inserted entry is evicted.

    Args:
        max_entries: Maximum number of entries held at once.
        default_ttl: Lifetime in seconds for entries set without a ttl.
        clock: Monotonic time source, replaceable in tests.
    """

    def __init__(
        self,
        max_entries: int = 1024,
        default_ttl: float = 300.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            msg = f"max_entries must be at least 1, got {max_entries}"
            raise ValueError(msg)
        if default_ttl <= 0:
            msg = f"default_ttl must be positive, got {default_ttl}"
            raise ValueError(msg)

        self._max_entries = max_entries
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: OrderedDict[Hashable, _CacheEntry] = OrderedDict()

    def set(self, key: Hashable, value: Any, ttl: float | None = None) -> None:
        """Store a value, replacing any existing entry for the key.

        Args:
            key: Cache key.
            value: Value to store.
            ttl: Lifetime in seconds. Defaults to the cache's default_ttl.

        Raises:
            ValueError: If ttl is not positive.
        """
        lifetime = self._default_ttl if ttl is None else ttl
        if lifetime <= 0:
            msg = f"ttl must be positive, got {lifetime}"
            raise ValueError(msg)

        self._entries.pop(key, None)
        if len(self._entries) >= self._max_entries:
            self._make_room()

        self._entries[key] = _CacheEntry(value=value, expires_at=self._clock() + lifetime)

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the value for key, or default if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return default

        if entry.expires_at <= self._clock():
            del self._entries[key]
            return default

        return entry.value

    def delete(self, key: Hashable) -> bool:
        """Remove an entry. Returns True if the key held an unexpired value."""
        entry = self._entries.pop(key, None)
        return entry is not None and entry.expires_at > self._clock()

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def purge_expired(self) -> int:
        """Drop all expired entries and return how many were removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def _make_room(self) -> None:
        if self.purge_expired():
            return
        key, _ = self._entries.popitem(last=False)
        logger.debug("Cache full, evicted oldest entry %r", key)

    def __contains__(self, key: object) -> bool:
        return self.get(key, _MISSING) is not _MISSING  # type: ignore[arg-type]

    def __len__(self) -> int:
        """Number of stored entries, including expired ones not yet purged."""
        return len(self._entries)
