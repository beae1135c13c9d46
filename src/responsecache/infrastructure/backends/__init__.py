"""Cache store implementations."""

from responsecache.infrastructure.backends.memory import InMemoryCacheStore

__all__ = ["InMemoryCacheStore"]
