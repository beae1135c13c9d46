"""Caching executor for plain graphql-core."""

import inspect
from collections.abc import Collection
from typing import Any

from graphql import (
    ASTValidationRule,
    ExecutionResult,
    GraphQLError,
    GraphQLSchema,
    execute,
    parse,
    validate,
)

from responsecache.core.entities.request import ExecutionRequest
from responsecache.core.services.response_cache import ResponseCache
from responsecache.core.services.validation_cache import ValidationCache


class CachingExecutor:
    """Runs GraphQL requests through the response cache.

    Mirrors ``graphql.graphql``: syntax and validation errors are
    returned as a result without data instead of being raised.

    Usage::

        executor = CachingExecutor(
            schema,
            ResponseCache(ResponseCacheConfig(ttl=60)),
            validation_cache=ValidationCache(),
        )
        result = await executor.execute("{ user(id: 1) { id name } }")
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        response_cache: ResponseCache,
        validation_cache: ValidationCache | None = None,
        validation_rules: Collection[type[ASTValidationRule]] | None = None,
        root_value: Any = None,
    ) -> None:
        """Initialize the executor.

        Args:
            schema: The executable schema.
            response_cache: The response cache to run requests through.
            validation_cache: Optional cache for validation outcomes.
            validation_rules: Rules to validate with. Defaults to
                graphql-core's specified rules.
            root_value: Root value passed to resolvers.
        """
        self._schema = schema
        self._response_cache = response_cache
        self._validation_cache = validation_cache
        self._validation_rules = validation_rules
        self._root_value = root_value

    @property
    def schema(self) -> GraphQLSchema:
        return self._schema

    @property
    def response_cache(self) -> ResponseCache:
        return self._response_cache

    async def execute(
        self,
        source: str,
        variable_values: dict[str, Any] | None = None,
        operation_name: str | None = None,
        context_value: Any = None,
    ) -> Any:
        """Execute a GraphQL request.

        Args:
            source: The GraphQL document text.
            variable_values: Variables passed to the operation.
            operation_name: The operation to execute within the document.
            context_value: Context passed to resolvers and cache callbacks.

        Returns:
            The execution result, served from the cache when possible.
            Incremental results are returned as produced by graphql-core.
        """
        try:
            document = parse(source)
        except GraphQLError as error:
            return ExecutionResult(data=None, errors=[error])

        prepared = self._response_cache.on_parse(document)

        if self._validation_cache is not None:
            errors = self._validation_cache.validate(
                self._schema, prepared.original, self._validation_rules, source
            )
        else:
            errors = validate(self._schema, prepared.original, self._validation_rules)
        if errors:
            return ExecutionResult(data=None, errors=errors)

        execution = await self._response_cache.on_execute(
            ExecutionRequest(
                schema=self._schema,
                document=prepared,
                variable_values=variable_values,
                operation_name=operation_name,
                context_value=context_value,
            )
        )
        if execution.cached_result is not None:
            return execution.cached_result

        result = execute(
            self._schema,
            execution.document,
            root_value=self._root_value,
            context_value=context_value,
            variable_values=variable_values,
            operation_name=operation_name,
        )
        if inspect.isawaitable(result):
            result = await result
        return await execution.on_execute_done(result)
