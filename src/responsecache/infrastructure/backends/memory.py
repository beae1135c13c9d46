"""In-memory cache store implementation."""

import math
import threading
import time
from collections.abc import Callable, Iterable

from cachetools import TLRUCache  # type: ignore[import-untyped]
from graphql import ExecutionResult

from responsecache.core.entities.cache_entry import CacheEntry
from responsecache.core.entities.entity_ref import EntityRef
from responsecache.core.interfaces.serializer import ISerializer
from responsecache.infrastructure.serializers.json import JsonSerializer


def _entry_expiry(_key: str, entry: CacheEntry, _now: float) -> float:
    return math.inf if entry.expires_at is None else entry.expires_at


class _EntryCache(TLRUCache):
    """LRU cache with per-entry expiry that reports every removal."""

    def __init__(
        self,
        maxsize: int,
        timer: Callable[[], float],
        on_remove: Callable[[str], None],
    ) -> None:
        super().__init__(maxsize=maxsize, ttu=_entry_expiry, timer=timer)
        self._on_remove = on_remove

    def popitem(self) -> tuple[str, CacheEntry]:
        key, entry = super().popitem()
        self._on_remove(key)
        return key, entry

    def expire(self, time: float | None = None) -> list[tuple[str, CacheEntry]]:
        expired = super().expire(time)
        for key, _entry in expired:
            self._on_remove(key)
        return expired


class InMemoryCacheStore:
    """In-memory cache store with entity-tag invalidation.

    Suitable for single-process deployments. Uses cachetools for LRU
    eviction and per-entry expiry, plus a reverse index from entity tag
    to the keys of entries tagged with it, so invalidation never scans
    the whole cache. Expired entries are treated as absent and purged
    on access.

    Results are held serialized, so every ``get`` returns a fresh
    ``ExecutionResult`` and callers cannot alter a cached entry.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        timer: Callable[[], float] = time.monotonic,
        serializer: ISerializer | None = None,
    ) -> None:
        """Initialize the in-memory cache store.

        Args:
            maxsize: Maximum number of entries in the cache.
            timer: Clock used for expiry, in seconds.
            serializer: Serializer for result payloads. Defaults to JSON.
        """
        self._maxsize = maxsize
        self._timer = timer
        self._serializer = serializer or JsonSerializer()
        self._lock = threading.Lock()
        self._entries = _EntryCache(maxsize, timer, self._unindex)
        # Entity tag -> keys of entries tagged with it, and the reverse
        self._index: dict[str, set[str]] = {}
        self._key_tags: dict[str, frozenset[str]] = {}

    async def get(self, key: str) -> ExecutionResult | None:
        """Retrieve a cached result by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached result, or None if absent or expired.
        """
        with self._lock:
            self._entries.expire()
            entry = self._entries.get(key)
        if entry is None:
            return None
        return self._serializer.loads(entry.payload)

    async def set(
        self,
        key: str,
        payload: ExecutionResult,
        entities: Iterable[EntityRef],
        ttl: float,
    ) -> None:
        """Store a result tagged with entities.

        Args:
            key: The cache key.
            payload: The execution result to store.
            entities: Entities the entry is tagged with.
            ttl: Time-to-live in seconds. ``0`` stores nothing.

        Raises:
            SerializationError: If the result cannot be serialized.
        """
        if ttl <= 0:
            return
        data = self._serializer.dumps(payload)
        entry = CacheEntry.create(key, data, entities, ttl=ttl, now=self._timer())
        with self._lock:
            self._entries.expire()
            self._remove(key)
            self._entries[key] = entry
            self._key_tags[key] = entry.entity_keys
            for tag in entry.entity_keys:
                self._index.setdefault(tag, set()).add(key)

    async def invalidate(self, entities: Iterable[EntityRef]) -> None:
        """Remove every entry tagged with any of the given entities.

        Args:
            entities: Entities to invalidate.
        """
        with self._lock:
            self._entries.expire()
            for entity in entities:
                for key in list(self._index.get(entity.key, ())):
                    self._remove(key)

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()
            self._index.clear()
            self._key_tags.clear()

    def _remove(self, key: str) -> None:
        try:
            del self._entries[key]
        except KeyError:
            # Absent, or expired and deleted anyway
            pass
        self._unindex(key)

    def _unindex(self, key: str) -> None:
        for tag in self._key_tags.pop(key, ()):
            keys = self._index.get(tag)
            if keys is None:
                continue
            keys.discard(key)
            if not keys:
                del self._index[tag]

    def __len__(self) -> int:
        """Return the number of live entries in the cache."""
        with self._lock:
            self._entries.expire()
            return len(self._entries)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the cache."""
        return self._maxsize
