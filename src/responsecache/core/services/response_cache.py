"""Response cache - orchestrates key building, lookup, storage and invalidation.

The response cache sits between an execution engine and its caller and
is driven through three hooks:

1. ``on_parse`` rewrites a parsed document so results carry typenames.
2. ``on_execute`` builds the cache key and probes the store. A hit is
   exposed as ``cached_result`` and the engine must not execute.
3. ``on_execute_done`` extracts entities from the executed result, then
   stores it (queries) or invalidates the entities (mutations).

Store and key builder failures propagate to the caller; they are never
reported as cache misses.
"""

import inspect
import logging
import math
from collections.abc import AsyncIterable, Iterable
from enum import Enum
from typing import Any

from graphql import ExecutionResult, OperationType

from responsecache.core.entities.cache_config import ResponseCacheConfig
from responsecache.core.entities.entity_ref import EntityRef
from responsecache.core.entities.request import ExecutionRequest, PreparedDocument
from responsecache.core.interfaces.cache_store import ICacheStore
from responsecache.core.services.document import (
    default_get_document_string,
    get_operation,
    is_mutation,
    prepare_document,
)
from responsecache.core.services.entity_extractor import EntityExtractor, ExtractionResult
from responsecache.core.services.ttl_resolver import TtlResolver, collect_schema_coordinates
from responsecache.infrastructure.backends.memory import InMemoryCacheStore
from responsecache.infrastructure.key_builders.default import DefaultKeyBuilder

logger = logging.getLogger(__name__)

EXTENSION_KEY = "responseCache"


def default_should_cache_result(cache_key: str, result: ExecutionResult) -> bool:
    """Reject results that carry errors.

    Args:
        cache_key: The key the result would be stored under.
        result: The processed execution result.

    Returns:
        True if the result may be stored.
    """
    if result.errors:
        logger.warning("Failed to cache due to errors (key=%s)", cache_key)
        return False
    return True


def with_cache_metadata(result: ExecutionResult, metadata: dict[str, Any]) -> ExecutionResult:
    """Return a copy of the result with cache metadata merged in.

    Existing extensions, including earlier ``responseCache`` values,
    are preserved; only the given metadata keys are overwritten.
    """
    extensions = dict(result.extensions or {})
    extensions[EXTENSION_KEY] = {**(extensions.get(EXTENSION_KEY) or {}), **metadata}
    return ExecutionResult(data=result.data, errors=result.errors, extensions=extensions)


def is_incremental_result(result: Any) -> bool:
    """Check for streamed results that cannot be cached as one tree."""
    return isinstance(result, AsyncIterable) or hasattr(result, "subsequent_results")


class ExecutionMode(Enum):
    """What the response cache does once execution finishes."""

    PASSTHROUGH = "passthrough"
    QUERY = "query"
    MUTATION = "mutation"


class ResponseCache:
    """Entity-aware response cache.

    Usage with graphql-core::

        cache = ResponseCache(ResponseCacheConfig(ttl=60))

        prepared = cache.on_parse(parse(source))
        execution = await cache.on_execute(
            ExecutionRequest(schema=schema, document=prepared)
        )
        if execution.cached_result is not None:
            return execution.cached_result
        result = await execute(schema, execution.document)
        return await execution.on_execute_done(result)
    """

    def __init__(self, config: ResponseCacheConfig | None = None) -> None:
        """Initialize the response cache.

        Args:
            config: Optional configuration. Uses defaults if not provided.
        """
        self._config = config or ResponseCacheConfig()
        self._store: ICacheStore = (
            self._config.cache if self._config.cache is not None else InMemoryCacheStore()
        )
        self._extractor = EntityExtractor(
            id_fields=self._config.id_fields,
            ignored_types=self._config.ignored_types,
        )
        self._ttl_resolver = TtlResolver(
            ttl=self._config.ttl,
            ttl_per_type=self._config.ttl_per_type,
            ttl_per_schema_coordinate=self._config.ttl_per_schema_coordinate,
        )
        self._build_key = (
            self._config.build_response_cache_key or DefaultKeyBuilder().build
        )
        self._get_document_string = (
            self._config.get_document_string or default_get_document_string
        )
        self._should_cache_result = (
            self._config.should_cache_result or default_should_cache_result
        )

        # Statistics
        self._hits = 0
        self._misses = 0

    @property
    def config(self) -> ResponseCacheConfig:
        """Get the response cache configuration."""
        return self._config

    @property
    def store(self) -> ICacheStore:
        """Get the cache store."""
        return self._store

    @property
    def extractor(self) -> EntityExtractor:
        return self._extractor

    @property
    def ttl_resolver(self) -> TtlResolver:
        return self._ttl_resolver

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, and total lookups.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "total": self._hits + self._misses,
        }

    def on_parse(self, document: Any) -> PreparedDocument:
        """Prepare a parsed document for execution.

        Args:
            document: The parsed document, or an already prepared one.

        Returns:
            The original document paired with the executable rewrite.
        """
        return prepare_document(document)

    async def on_execute(self, request: ExecutionRequest) -> "ResponseCacheExecution":
        """Decide how a request interacts with the cache before execution.

        Args:
            request: The execution arguments.

        Returns:
            Per-request state. If ``cached_result`` is set the engine must
            return it instead of executing.
        """
        prepared = prepare_document(request.document)
        operation = get_operation(prepared, request.operation_name)
        execution = ResponseCacheExecution(self, request, prepared)

        if is_mutation(operation):
            if self._config.invalidate_via_mutation:
                execution.mode = ExecutionMode.MUTATION
            return execution

        if operation is None or operation.operation != OperationType.QUERY:
            return execution

        if not self._is_enabled(request.context_value):
            return execution

        cache_key = await self.build_cache_key(request)
        execution.cache_key = cache_key

        cached = await self._store.get(cache_key)
        if cached is not None:
            self._hits += 1
            logger.debug("Response cache hit (key=%s)", cache_key)
            if self._config.include_extension_metadata:
                cached = with_cache_metadata(cached, {"hit": True})
            execution.cached_result = cached
            return execution

        self._misses += 1
        logger.debug("Response cache miss (key=%s)", cache_key)
        execution.mode = ExecutionMode.QUERY
        return execution

    async def build_cache_key(self, request: ExecutionRequest) -> str:
        """Build the cache key for a request.

        Args:
            request: The execution arguments.

        Returns:
            The key produced by the configured key builder.
        """
        session_id = self._config.session(request.context_value) if self._config.session else None
        key = self._build_key(
            document_string=self._get_document_string(request),
            variable_values=request.variable_values,
            operation_name=request.operation_name,
            session_id=session_id,
        )
        if inspect.isawaitable(key):
            key = await key
        return key

    async def invalidate(self, entities: Iterable[EntityRef]) -> None:
        """Remove every cached response tagged with any of the entities."""
        await self._store.invalidate(entities)

    def _is_enabled(self, context_value: Any) -> bool:
        if self._config.enabled is None:
            return True
        return self._config.enabled(context_value) is True

    async def _finish_query(
        self,
        execution: "ResponseCacheExecution",
        cache_key: str,
        result: ExecutionResult,
        extraction: ExtractionResult,
    ) -> ExecutionResult:
        include_metadata = self._config.include_extension_metadata

        if extraction.ignored_type_seen:
            logger.debug("Not caching response with ignored type (key=%s)", cache_key)
            return result

        if not self._should_cache_result(cache_key, result):
            if include_metadata:
                return with_cache_metadata(result, {"hit": False, "didCache": False})
            return result

        coordinates: set[str] = set()
        if self._ttl_resolver.has_coordinate_overrides():
            coordinates = collect_schema_coordinates(
                execution.request.schema, execution.prepared.original
            )
        ttl = self._ttl_resolver.resolve(extraction.types, coordinates)

        if ttl == 0:
            logger.debug("Not caching response with zero TTL (key=%s)", cache_key)
            if include_metadata:
                return with_cache_metadata(result, {"hit": False, "didCache": False})
            return result

        await self._store.set(cache_key, result, extraction.entities, ttl)
        logger.debug("Cached response (key=%s, ttl=%s)", cache_key, ttl)
        if include_metadata:
            # Infinity has no JSON form; report it as null
            reported_ttl = None if math.isinf(ttl) else ttl
            return with_cache_metadata(
                result, {"hit": False, "didCache": True, "ttl": reported_ttl}
            )
        return result

    async def _finish_mutation(
        self,
        result: ExecutionResult,
        extraction: ExtractionResult,
    ) -> ExecutionResult:
        await self._store.invalidate(extraction.entities)
        logger.debug("Invalidated %d entities after mutation", len(extraction.entities))
        if self._config.include_extension_metadata:
            return with_cache_metadata(
                result,
                {"invalidatedEntities": [entity.to_dict() for entity in extraction.entities]},
            )
        return result


class ResponseCacheExecution:
    """Response cache state for a single request."""

    def __init__(
        self,
        response_cache: ResponseCache,
        request: ExecutionRequest,
        prepared: PreparedDocument,
    ) -> None:
        self._response_cache = response_cache
        self.request = request
        self.prepared = prepared
        self.mode = ExecutionMode.PASSTHROUGH
        self.cache_key: str | None = None
        self.cached_result: ExecutionResult | None = None

    @property
    def document(self) -> Any:
        """The document the engine must execute.

        Requests the cache does not take part in run the caller's
        document, so their results never carry typename markers.
        """
        if self.mode is ExecutionMode.PASSTHROUGH:
            return self.prepared.original
        return self.prepared.executable

    async def on_execute_done(self, result: Any) -> Any:
        """Process an executed result.

        Args:
            result: The execution result produced by the engine.

        Returns:
            The result to hand to the caller, with typename markers
            stripped and cache metadata added when configured.
        """
        if self.cached_result is not None:
            return self.cached_result
        if self.mode is ExecutionMode.PASSTHROUGH:
            return result
        if is_incremental_result(result):
            logger.warning(
                "Incremental execution results are not supported by the response cache"
            )
            return result

        cache = self._response_cache
        extraction = cache.extractor.extract(
            self.request.schema,
            self.prepared.executable,
            result.data,
            self.request.operation_name,
        )
        processed = ExecutionResult(
            data=extraction.data,
            errors=result.errors,
            extensions=result.extensions,
        )

        if self.mode is ExecutionMode.MUTATION:
            return await cache._finish_mutation(processed, extraction)
        if self.cache_key is None:
            raise RuntimeError("Query execution finished without a cache key")
        return await cache._finish_query(self, self.cache_key, processed, extraction)
