"""responsecache - entity-aware response caching for GraphQL.

A Python library that caches GraphQL execution results keyed by
document, variables and session, tags every cached result with the
entities it contains, and invalidates affected results when a mutation
returns one of those entities. Ships adapters for graphql-core, Ariadne
and Strawberry.

Example with Ariadne:
    from ariadne import make_executable_schema
    from responsecache import ResponseCache, ResponseCacheConfig
    from responsecache.adapters.ariadne import CachingGraphQL

    type_defs = '''
        type Query {
            user(id: ID!): User
        }

        type Mutation {
            updateUser(id: ID!, name: String!): User
        }

        type User {
            id: ID!
            name: String!
        }
    '''

    schema = make_executable_schema(type_defs, query, mutation)

    response_cache = ResponseCache(
        ResponseCacheConfig(
            ttl=300,
            ttl_per_type={"User": 60},
            session=lambda context: context.get("user_id"),
            include_extension_metadata=True,
        )
    )

    # Create ASGI app with caching
    app = CachingGraphQL(schema, response_cache=response_cache)

Invalidating entities changed outside GraphQL:
    from responsecache import EntityRef

    await response_cache.invalidate([EntityRef("User", "1")])
"""

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
from responsecache.core.services import (
    EXTENSION_KEY,
    EntityExtractor,
    ResponseCache,
    ResponseCacheExecution,
    TtlResolver,
    ValidationCache,
    default_should_cache_result,
    get_schema_hash,
)
from responsecache.infrastructure import (
    DefaultKeyBuilder,
    InMemoryCacheStore,
    JsonSerializer,
    SerializationError,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheEntry",
    "ConfigurationError",
    "EntityRef",
    "ExecutionRequest",
    "PreparedDocument",
    "ResponseCacheConfig",
    # Core interfaces
    "ICacheStore",
    "IKeyBuilder",
    "ISerializer",
    "IValidationCache",
    # Core services
    "EXTENSION_KEY",
    "EntityExtractor",
    "ResponseCache",
    "ResponseCacheExecution",
    "TtlResolver",
    "ValidationCache",
    "default_should_cache_result",
    "get_schema_hash",
    # Infrastructure implementations
    "DefaultKeyBuilder",
    "InMemoryCacheStore",
    "JsonSerializer",
    "SerializationError",
]
