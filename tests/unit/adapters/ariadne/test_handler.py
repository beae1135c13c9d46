"""Unit tests for CachingGraphQLHTTPHandler."""

from unittest.mock import AsyncMock, MagicMock

import pytest

ariadne = pytest.importorskip("ariadne")

from responsecache import ResponseCache, ResponseCacheConfig  # noqa: E402
from responsecache.adapters.ariadne import (  # noqa: E402
    CachingGraphQL,
    CachingGraphQLHTTPHandler,
)

USER_QUERY = '{ user(id: "1") { id name } }'


def _make_handler(schema, database, **config) -> CachingGraphQLHTTPHandler:
    """Create a handler configured by the caching ASGI app."""
    app = CachingGraphQL(
        schema,
        response_cache=ResponseCache(ResponseCacheConfig(**config)),
        root_value=database.root_value(),
    )
    return app.http_handler


def _make_request() -> MagicMock:
    request = MagicMock()
    request.state = MagicMock()
    request.state.cache_hit = False
    return request


class TestCachingGraphQLHTTPHandler:
    """Tests for CachingGraphQLHTTPHandler."""

    @pytest.mark.asyncio
    async def test_miss_then_hit(self, schema, database) -> None:
        handler = _make_handler(schema, database)
        first_request = _make_request()
        second_request = _make_request()

        success, first = await handler.execute_graphql_query(
            first_request, {"query": USER_QUERY}
        )
        _, second = await handler.execute_graphql_query(
            second_request, {"query": USER_QUERY}
        )

        assert success is True
        assert first == {"data": {"user": {"id": "1", "name": "Ann"}}}
        assert second == first
        assert first_request.state.cache_hit is False
        assert second_request.state.cache_hit is True
        assert database.calls == 1

    @pytest.mark.asyncio
    async def test_mutation_invalidates(self, schema, database) -> None:
        handler = _make_handler(schema, database, include_extension_metadata=True)
        await handler.execute_graphql_query(_make_request(), {"query": USER_QUERY})

        _, mutation = await handler.execute_graphql_query(
            _make_request(),
            {"query": 'mutation { updateUser(id: "1", name: "Eve") { id } }'},
        )
        _, again = await handler.execute_graphql_query(_make_request(), {"query": USER_QUERY})

        assert mutation == {
            "data": {"updateUser": {"id": "1"}},
            "extensions": {
                "responseCache": {"invalidatedEntities": [{"typename": "User", "id": "1"}]}
            },
        }
        assert again["data"] == {"user": {"id": "1", "name": "Eve"}}
        assert again["extensions"]["responseCache"]["hit"] is False

    @pytest.mark.asyncio
    async def test_variables_and_operation_name(self, schema, database) -> None:
        handler = _make_handler(schema, database)
        data = {
            "query": "query A($id: ID!) { user(id: $id) { name } } query B { version }",
            "operationName": "A",
            "variables": {"id": "2"},
        }

        _, response = await handler.execute_graphql_query(_make_request(), data)

        assert response == {"data": {"user": {"name": "Bob"}}}

    @pytest.mark.asyncio
    async def test_syntax_error_is_reported(self, schema, database) -> None:
        handler = _make_handler(schema, database)

        success, response = await handler.execute_graphql_query(
            _make_request(), {"query": "{ user("}
        )

        assert success is False
        assert "Syntax Error" in response["errors"][0]["message"]

    @pytest.mark.asyncio
    async def test_validation_error_is_not_cached(self, schema, database) -> None:
        handler = _make_handler(schema, database)

        success, response = await handler.execute_graphql_query(
            _make_request(), {"query": "{ unknown }"}
        )

        assert success is False
        assert "data" not in response
        assert len(handler.response_cache.store) == 0

    @pytest.mark.asyncio
    async def test_session_uses_request_context(self, schema, database) -> None:
        session = MagicMock(return_value="s1")
        handler = _make_handler(schema, database, session=session)
        request = _make_request()

        await handler.execute_graphql_query(request, {"query": USER_QUERY})

        session.assert_called_once_with({"request": request})

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, schema, database) -> None:
        store = AsyncMock()
        store.get.side_effect = ConnectionError("down")
        handler = _make_handler(schema, database, cache=store)

        with pytest.raises(ConnectionError):
            await handler.execute_graphql_query(_make_request(), {"query": USER_QUERY})


class TestCachingGraphQL:
    """Tests for the CachingGraphQL app."""

    def test_wires_handler(self, schema) -> None:
        response_cache = ResponseCache()
        app = CachingGraphQL(schema, response_cache=response_cache)

        assert isinstance(app.http_handler, CachingGraphQLHTTPHandler)
        assert app.response_cache is response_cache
        assert app.cache_stats == {"hits": 0, "misses": 0, "total": 0}
