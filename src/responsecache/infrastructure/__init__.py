"""Infrastructure layer implementations for responsecache."""

from responsecache.infrastructure.backends import InMemoryCacheStore
from responsecache.infrastructure.key_builders import DefaultKeyBuilder
from responsecache.infrastructure.serializers import JsonSerializer, SerializationError

__all__ = [
    "InMemoryCacheStore",
    "DefaultKeyBuilder",
    "JsonSerializer",
    "SerializationError",
]
