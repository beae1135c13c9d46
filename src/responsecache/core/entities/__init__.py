"""Domain entities for responsecache."""

from responsecache.core.entities.cache_config import (
    ConfigurationError,
    ResponseCacheConfig,
)
from responsecache.core.entities.cache_entry import CacheEntry
from responsecache.core.entities.entity_ref import EntityRef
from responsecache.core.entities.request import ExecutionRequest, PreparedDocument

__all__ = [
    "CacheEntry",
    "ConfigurationError",
    "EntityRef",
    "ExecutionRequest",
    "PreparedDocument",
    "ResponseCacheConfig",
]
