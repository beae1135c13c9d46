"""Domain services for responsecache."""

from responsecache.core.services.document import (
    TYPENAME_ALIAS,
    add_typename_to_document,
    prepare_document,
)
from responsecache.core.services.entity_extractor import EntityExtractor, ExtractionResult
from responsecache.core.services.response_cache import (
    EXTENSION_KEY,
    ResponseCache,
    ResponseCacheExecution,
    default_should_cache_result,
)
from responsecache.core.services.ttl_resolver import TtlResolver, collect_schema_coordinates
from responsecache.core.services.validation_cache import ValidationCache, get_schema_hash

__all__ = [
    "ResponseCache",
    "ResponseCacheExecution",
    "EXTENSION_KEY",
    "default_should_cache_result",
    # Document preparation
    "TYPENAME_ALIAS",
    "add_typename_to_document",
    "prepare_document",
    # Entity extraction
    "EntityExtractor",
    "ExtractionResult",
    # TTL resolution
    "TtlResolver",
    "collect_schema_coordinates",
    # Validation
    "ValidationCache",
    "get_schema_hash",
]
