"""Redis cache store for responsecache."""

from responsecache_redis.store import RedisCacheStore

__all__ = ["RedisCacheStore"]
