"""Core interfaces (Protocol classes) for responsecache."""

from responsecache.core.interfaces.cache_store import ICacheStore
from responsecache.core.interfaces.key_builder import IKeyBuilder
from responsecache.core.interfaces.serializer import ISerializer
from responsecache.core.interfaces.validation_cache import IValidationCache

__all__ = [
    "ICacheStore",
    "IKeyBuilder",
    "ISerializer",
    "IValidationCache",
]
