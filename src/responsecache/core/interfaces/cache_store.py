"""Cache store interface."""

from collections.abc import Iterable
from typing import Protocol

from graphql import ExecutionResult

from responsecache.core.entities.entity_ref import EntityRef


class ICacheStore(Protocol):
    """Contract for response cache storage.

    All methods are async so that in-memory and networked stores share
    one interface. ``get`` must be safe to call concurrently with
    ``set`` from independent requests.
    """

    async def get(self, key: str) -> ExecutionResult | None:
        """Retrieve a cached result by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached result, or None if absent or expired.
        """
        ...

    async def set(
        self,
        key: str,
        payload: ExecutionResult,
        entities: Iterable[EntityRef],
        ttl: float,
    ) -> None:
        """Store a result, replacing any entry under the same key.

        Args:
            key: The cache key.
            payload: The execution result to store.
            entities: Entities the entry is tagged with.
            ttl: Time-to-live in seconds; ``math.inf`` never expires.
        """
        ...

    async def invalidate(self, entities: Iterable[EntityRef]) -> None:
        """Remove every entry tagged with any of the given entities.

        Args:
            entities: Entities to invalidate. An empty iterable is a no-op.
        """
        ...
