"""Caching GraphQL ASGI app for Ariadne."""

from typing import Any

from ariadne.asgi import GraphQL

from responsecache.adapters.ariadne.handler import CachingGraphQLHTTPHandler
from responsecache.core.services.response_cache import ResponseCache


class CachingGraphQL(GraphQL):
    """Drop-in replacement for Ariadne's GraphQL with response caching.

    Example::

        app = CachingGraphQL(
            schema,
            response_cache=ResponseCache(ResponseCacheConfig(ttl=60)),
            debug=True,
        )
    """

    def __init__(
        self,
        schema: Any,
        response_cache: ResponseCache,
        **kwargs: Any,
    ) -> None:
        http_handler = CachingGraphQLHTTPHandler(response_cache)
        super().__init__(schema, http_handler=http_handler, **kwargs)
        self._response_cache = response_cache

    @property
    def response_cache(self) -> ResponseCache:
        return self._response_cache

    @property
    def cache_stats(self) -> dict[str, int]:
        return self._response_cache.stats
