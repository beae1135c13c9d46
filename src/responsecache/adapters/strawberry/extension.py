"""Strawberry extension for GraphQL response caching."""

from collections.abc import AsyncIterator, Iterator
from typing import Any

from strawberry.extensions import SchemaExtension

from responsecache.core.entities.request import ExecutionRequest, PreparedDocument
from responsecache.core.services.response_cache import (
    EXTENSION_KEY,
    ResponseCache,
    ResponseCacheExecution,
)


class _ResponseCacheExtension(SchemaExtension):
    response_cache: ResponseCache

    def __init__(self, *, execution_context: Any = None) -> None:
        if execution_context is not None:
            self.execution_context = execution_context
        self._prepared: PreparedDocument | None = None
        self._metadata: dict[str, Any] | None = None

    def on_parse(self) -> Iterator[None]:
        yield
        document = self.execution_context.graphql_document
        if document is not None:
            self._prepared = self.response_cache.on_parse(document)

    async def on_execute(self) -> AsyncIterator[None]:
        ctx = self.execution_context
        execution: ResponseCacheExecution | None = None

        if self._prepared is not None:
            execution = await self.response_cache.on_execute(
                ExecutionRequest(
                    schema=ctx.schema._schema,
                    document=self._prepared,
                    variable_values=ctx.variables,
                    operation_name=ctx.operation_name,
                    context_value=ctx.context,
                )
            )
            if execution.cached_result is not None:
                ctx.result = execution.cached_result
            else:
                ctx.graphql_document = execution.document

        yield

        if execution is None:
            return
        result = ctx.result
        if execution.cached_result is None and result is not None:
            processed = await execution.on_execute_done(result)
            if processed is not result:
                # Strawberry returns the object it executed, not ctx.result
                result.data = processed.data
                result.errors = processed.errors
                result.extensions = processed.extensions
        extensions = getattr(result, "extensions", None) or {}
        self._metadata = extensions.get(EXTENSION_KEY)

    def get_results(self) -> dict[str, Any]:
        # Strawberry rebuilds response extensions from extension results
        if not self._metadata:
            return {}
        return {EXTENSION_KEY: self._metadata}


def ResponseCacheExtension(response_cache: ResponseCache) -> type[SchemaExtension]:
    """Create a Strawberry schema extension bound to a response cache.

    Usage::

        import strawberry
        from responsecache import ResponseCache, ResponseCacheConfig
        from responsecache.adapters.strawberry import ResponseCacheExtension

        response_cache = ResponseCache(ResponseCacheConfig(ttl=60))

        schema = strawberry.Schema(
            query=Query,
            mutation=Mutation,
            extensions=[ResponseCacheExtension(response_cache)],
        )

    The extension uses async hooks, so the schema must be executed with
    ``await schema.execute(...)``.

    Args:
        response_cache: The response cache to use.

    Returns:
        A ``SchemaExtension`` subclass instantiated per request.
    """
    return type(
        "ResponseCacheExtension",
        (_ResponseCacheExtension,),
        {"response_cache": response_cache},
    )
