"""Caching HTTP handler for Ariadne GraphQL."""

import logging
from typing import Any

from ariadne.asgi.handlers import GraphQLHTTPHandler
from graphql import GraphQLError, parse

from responsecache.core.entities.request import ExecutionRequest
from responsecache.core.services.response_cache import ResponseCache
from responsecache.utils.results import result_from_dict, result_to_dict

logger = logging.getLogger(__name__)


class CachingGraphQLHTTPHandler(GraphQLHTTPHandler):
    """HTTP handler that adds response caching to Ariadne.

    Parses the query itself so the response cache can prepare the
    document, then hands Ariadne the document to execute. Cached
    responses are returned without running Ariadne's execution at all;
    mutation responses invalidate the entities they return.
    """

    def __init__(self, response_cache: ResponseCache, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._response_cache = response_cache

    @property
    def response_cache(self) -> ResponseCache:
        return self._response_cache

    async def execute_graphql_query(
        self,
        request: Any,
        data: Any,
        *,
        context_value: Any = None,
        query_document: Any = None,
    ) -> tuple[bool, dict[str, Any]]:
        if not isinstance(data, dict) or not isinstance(data.get("query"), str):
            return await super().execute_graphql_query(
                request, data,
                context_value=context_value,
                query_document=query_document,
            )

        if query_document is None:
            try:
                query_document = parse(data["query"])
            except GraphQLError:
                # Ariadne reports the syntax error
                return await super().execute_graphql_query(
                    request, data, context_value=context_value
                )

        # Resolve context before cache lookup so session and enabled see it
        if context_value is None:
            context_value = await self.get_context_for_request(request, data)

        execution = await self._response_cache.on_execute(
            ExecutionRequest(
                schema=self.schema,
                document=self._response_cache.on_parse(query_document),
                variable_values=data.get("variables"),
                operation_name=data.get("operationName"),
                context_value=context_value,
            )
        )
        if execution.cached_result is not None:
            self._mark_cache_hit(request)
            return True, result_to_dict(execution.cached_result)

        success, response = await super().execute_graphql_query(
            request, data,
            context_value=context_value,
            query_document=execution.document,
        )

        # Responses without data failed validation and were never executed
        if not isinstance(response, dict) or "data" not in response:
            return success, response

        processed = await execution.on_execute_done(result_from_dict(response))
        response = {**response, "data": processed.data}
        if processed.extensions:
            response["extensions"] = processed.extensions
        return success, response

    def _mark_cache_hit(self, request: Any) -> None:
        if hasattr(request, "state"):
            request.state.cache_hit = True
