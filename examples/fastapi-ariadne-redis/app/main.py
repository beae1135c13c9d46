"""FastAPI + Ariadne + responsecache example."""

import logging
import os
from contextlib import asynccontextmanager
from typing import Any

from ariadne import make_executable_schema
from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.resolvers import resolvers
from app.schema import TYPE_DEFS

from responsecache import ResponseCache, ResponseCacheConfig
from responsecache.adapters.ariadne import CachingGraphQL
from responsecache_redis import RedisCacheStore

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379")
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

logging.basicConfig(level=logging.DEBUG if DEBUG else logging.INFO)

cache_store = RedisCacheStore(
    redis_url=REDIS_URL,
    key_prefix="responsecache:example",
)

response_cache = ResponseCache(
    ResponseCacheConfig(
        cache=cache_store,
        ttl=300,
        ttl_per_type={"Post": 60},
        ttl_per_schema_coordinate={"Query.me": 30, "Query.dbStats": 0},
        session=lambda context: context.get("current_user_id"),
        include_extension_metadata=DEBUG,
    )
)

schema = make_executable_schema(TYPE_DEFS, *resolvers)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await cache_store.close()


app = FastAPI(
    title="responsecache Example API",
    description="GraphQL API with entity-aware response caching",
    version="1.0.0",
    lifespan=lifespan,
)


class CacheHitMiddleware(BaseHTTPMiddleware):
    """Adds an X-Cache header to responses served from the cache."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        if getattr(request.state, "cache_hit", False):
            response.headers["X-Cache"] = "HIT"
        return response


app.add_middleware(CacheHitMiddleware)


def get_context_value(request: Request, data: Any = None) -> dict[str, Any]:
    auth = request.headers.get("Authorization", "")
    current_user_id = None
    if auth.startswith("Bearer user-"):
        current_user_id = auth.removeprefix("Bearer user-")

    return {
        "request": request,
        "current_user_id": current_user_id,
    }


graphql_app = CachingGraphQL(
    schema,
    response_cache=response_cache,
    debug=DEBUG,
    context_value=get_context_value,
)

app.mount("/graphql", graphql_app)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/cache/stats")
async def cache_stats():
    return {"stats": response_cache.stats}
