"""Response cache configuration entity."""

import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from numbers import Real
from typing import TYPE_CHECKING, Any

from graphql import ExecutionResult

if TYPE_CHECKING:
    from responsecache.core.entities.request import ExecutionRequest
    from responsecache.core.interfaces.cache_store import ICacheStore

BuildResponseCacheKey = Callable[..., "str | Awaitable[str]"]
GetDocumentString = Callable[["ExecutionRequest"], str]
ShouldCacheResult = Callable[[str, ExecutionResult], bool]
SessionResolver = Callable[[Any], "str | None"]
EnabledPredicate = Callable[[Any], bool]


class ConfigurationError(ValueError):
    """Raised when the response cache is configured with invalid values."""


@dataclass
class ResponseCacheConfig:
    """Response cache configuration.

    TTLs are expressed in seconds. ``ttl`` applies when no per-type or
    per-coordinate override matched the response; overrides that match
    are folded with ``min`` so the most volatile part of a response
    decides its lifetime. A TTL of ``0`` disables storing.

    Per-coordinate overrides distinguish three states: a coordinate
    that is absent from the map, one mapped to ``None`` (explicitly no
    override, e.g. ``{"Query.__schema": None}`` to allow caching
    introspection) and one mapped to a number.

    Attributes:
        cache: Store for cached results. Defaults to an in-memory store.
        ttl: Global TTL in seconds. Defaults to no expiry.
        ttl_per_type: TTL overrides keyed by object type name.
        ttl_per_schema_coordinate: TTL overrides keyed by ``Type.field``.
        session: Returns a session id for the request context, or None
            for results shared by every caller.
        enabled: Returns False to bypass the cache for a request.
        ignored_types: Types whose results are never cached.
        id_fields: Field names identifying an entity.
        invalidate_via_mutation: Invalidate entities returned by mutations.
        build_response_cache_key: Custom key builder, sync or async.
        get_document_string: Reads the document text used in the key.
        include_extension_metadata: Report cache decisions in
            ``extensions["responseCache"]``.
        should_cache_result: Decides whether a result may be stored.
    """

    cache: "ICacheStore | None" = None
    ttl: float = math.inf
    ttl_per_type: dict[str, float] = field(default_factory=dict)
    ttl_per_schema_coordinate: dict[str, float | None] = field(default_factory=dict)
    session: SessionResolver | None = None
    enabled: EnabledPredicate | None = None
    ignored_types: list[str] = field(default_factory=list)
    id_fields: list[str] = field(default_factory=lambda: ["id"])
    invalidate_via_mutation: bool = True
    build_response_cache_key: BuildResponseCacheKey | None = None
    get_document_string: GetDocumentString | None = None
    include_extension_metadata: bool = False
    should_cache_result: ShouldCacheResult | None = None

    def __post_init__(self) -> None:
        """Validate TTL overlays and entity settings."""
        _check_ttl("ttl", self.ttl)

        for type_name, value in self.ttl_per_type.items():
            _check_ttl(f"ttl_per_type[{type_name!r}]", value)

        for coordinate, value in self.ttl_per_schema_coordinate.items():
            parent, _, field_name = coordinate.partition(".")
            if not parent or not field_name:
                raise ConfigurationError(
                    f"Invalid schema coordinate {coordinate!r}, "
                    "expected the form 'Type.field'"
                )
            if value is not None:
                _check_ttl(f"ttl_per_schema_coordinate[{coordinate!r}]", value)

        if not self.id_fields:
            raise ConfigurationError("id_fields must contain at least one field")
        for name in self.id_fields:
            if not isinstance(name, str) or not name:
                raise ConfigurationError(f"Invalid id field {name!r}")


def _check_ttl(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if math.isnan(value) or value < 0:
        raise ConfigurationError(f"{name} must be >= 0, got {value!r}")
