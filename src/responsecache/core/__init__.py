"""Core domain layer for responsecache."""

from responsecache.core.entities import (
    CacheEntry,
    ConfigurationError,
    EntityRef,
    ExecutionRequest,
    PreparedDocument,
    ResponseCacheConfig,
)
from responsecache.core.interfaces import (
    ICacheStore,
    IKeyBuilder,
    ISerializer,
    IValidationCache,
)
from responsecache.core.services import ResponseCache, ValidationCache

__all__ = [
    # Entities
    "CacheEntry",
    "ConfigurationError",
    "EntityRef",
    "ExecutionRequest",
    "PreparedDocument",
    "ResponseCacheConfig",
    # Interfaces
    "ICacheStore",
    "IKeyBuilder",
    "ISerializer",
    "IValidationCache",
    # Services
    "ResponseCache",
    "ValidationCache",
]
