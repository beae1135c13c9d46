"""Cache entry entity."""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from responsecache.core.entities.entity_ref import EntityRef


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Holds a cached execution result together with the entities that
    contributed to it and the absolute time (in the owning store's
    clock) at which it stops being valid.
    """

    key: str
    payload: Any
    entities: frozenset[EntityRef] = frozenset()
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        """Check if the entry has expired at the given time.

        Args:
            now: Current time in the same clock as ``expires_at``.

        Returns:
            True if the entry has expired, False otherwise.
        """
        if self.expires_at is None:
            return False
        return now >= self.expires_at

    @property
    def entity_keys(self) -> frozenset[str]:
        """Return the tags this entry is indexed under."""
        return frozenset(entity.key for entity in self.entities)

    @classmethod
    def create(
        cls,
        key: str,
        payload: Any,
        entities: Iterable[EntityRef] = (),
        ttl: float = math.inf,
        now: float = 0.0,
    ) -> "CacheEntry":
        """Factory method to create a new cache entry.

        Args:
            key: The cache key.
            payload: The execution result to cache.
            entities: Entities the result is tagged with.
            ttl: Time-to-live in seconds. ``math.inf`` never expires.
            now: Current time in the owning store's clock.

        Returns:
            A new CacheEntry instance.
        """
        return cls(
            key=key,
            payload=payload,
            entities=frozenset(entities),
            expires_at=None if math.isinf(ttl) else now + ttl,
        )
