"""Redis cache store implementation."""

import math
from collections.abc import Iterable

import redis.asyncio as redis
from graphql import ExecutionResult

from responsecache.core.entities.entity_ref import EntityRef
from responsecache.core.interfaces.serializer import ISerializer
from responsecache.infrastructure.serializers.json import JsonSerializer


class RedisCacheStore:
    """Redis cache store for distributed deployments.

    Each result is stored as JSON under ``{prefix}:{key}`` with a
    millisecond expiry. Every entity the result is tagged with owns a
    Redis set at ``{prefix}:entity:{Type}:{id}`` holding the entry keys,
    so invalidation only touches the entries of the given entities.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        key_prefix: str = "responsecache",
        serializer: ISerializer | None = None,
        client: redis.Redis | None = None,
    ) -> None:
        """Initialize the Redis cache store.

        Args:
            redis_url: Redis connection URL.
            key_prefix: Prefix for all Redis keys.
            serializer: Serializer for result payloads. Defaults to JSON.
            client: An existing client to use instead of connecting to
                ``redis_url``.
        """
        self._redis: redis.Redis = client if client is not None else redis.from_url(redis_url)  # type: ignore
        self._key_prefix = key_prefix
        self._serializer = serializer or JsonSerializer()

    async def get(self, key: str) -> ExecutionResult | None:
        """Retrieve a cached result by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached result, or None if not found or expired.

        Raises:
            SerializationError: If the stored payload cannot be decoded.
        """
        data = await self._redis.get(self._entry_key(key))
        if data is None:
            return None
        return self._serializer.loads(data)

    async def set(
        self,
        key: str,
        payload: ExecutionResult,
        entities: Iterable[EntityRef],
        ttl: float,
    ) -> None:
        """Store a result and add its key to each entity's set.

        Args:
            key: The cache key.
            payload: The execution result to store.
            entities: Entities the entry is tagged with.
            ttl: Time-to-live in seconds. ``0`` stores nothing and
                ``math.inf`` stores without expiry.
        """
        if ttl <= 0:
            return
        entry_key = self._entry_key(key)
        data = self._serializer.dumps(payload)

        async with self._redis.pipeline(transaction=True) as pipe:
            if math.isinf(ttl):
                pipe.set(entry_key, data)
            else:
                pipe.set(entry_key, data, px=max(1, round(ttl * 1000)))
            for entity in set(entities):
                pipe.sadd(self._entity_key(entity), entry_key)
            await pipe.execute()

    async def invalidate(self, entities: Iterable[EntityRef]) -> None:
        """Delete every entry tagged with any of the given entities.

        Args:
            entities: Entities to invalidate.
        """
        for entity in set(entities):
            entity_key = self._entity_key(entity)
            entry_keys = await self._redis.smembers(entity_key)
            await self._redis.delete(*entry_keys, entity_key)

    def _entry_key(self, key: str) -> str:
        return f"{self._key_prefix}:{key}"

    def _entity_key(self, entity: EntityRef) -> str:
        return f"{self._key_prefix}:entity:{entity.key}"

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()

    async def __aenter__(self) -> "RedisCacheStore":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
