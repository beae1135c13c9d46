"""TTL resolution for cacheable responses.

Three overlays decide how long a response may live: a global TTL, TTLs
per object type found in the result, and TTLs per schema coordinate
selected by the document. Every override that matched is folded with
``min`` so that the most volatile part of a response bounds its
lifetime; the global TTL applies only when nothing matched.
"""

import math
from collections.abc import Iterable, Mapping

from graphql import (
    DocumentNode,
    FieldNode,
    GraphQLSchema,
    TypeInfo,
    TypeInfoVisitor,
    Visitor,
    visit,
)

# Introspection results are never cached unless explicitly overridden.
INTROSPECTION_COORDINATES: dict[str, float | None] = {"Query.__schema": 0}


class TtlResolver:
    """Computes the effective TTL of a response."""

    def __init__(
        self,
        ttl: float = math.inf,
        ttl_per_type: Mapping[str, float] | None = None,
        ttl_per_schema_coordinate: Mapping[str, float | None] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            ttl: Global TTL in seconds.
            ttl_per_type: Overrides keyed by object type name.
            ttl_per_schema_coordinate: Overrides keyed by ``Type.field``.
                A coordinate mapped to None is present but never applied.
        """
        self._ttl = ttl
        self._ttl_per_type = dict(ttl_per_type or {})
        self._ttl_per_schema_coordinate = {
            **INTROSPECTION_COORDINATES,
            **(ttl_per_schema_coordinate or {}),
        }

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def ttl_per_schema_coordinate(self) -> dict[str, float | None]:
        return dict(self._ttl_per_schema_coordinate)

    def has_coordinate_overrides(self) -> bool:
        """Check if any coordinate override could apply."""
        return any(value is not None for value in self._ttl_per_schema_coordinate.values())

    def resolve(
        self,
        types: Iterable[str] = (),
        coordinates: Iterable[str] = (),
    ) -> float:
        """Resolve the TTL for a response.

        Args:
            types: Object type names observed in the result.
            coordinates: Schema coordinates selected by the document.

        Returns:
            The minimum of all matching overrides, or the global TTL.
        """
        current: float | None = None

        for type_name in types:
            if type_name in self._ttl_per_type:
                current = _fold(current, self._ttl_per_type[type_name])

        for coordinate in coordinates:
            if coordinate not in self._ttl_per_schema_coordinate:
                continue
            override = self._ttl_per_schema_coordinate[coordinate]
            if override is None:
                continue
            current = _fold(current, override)

        return self._ttl if current is None else current


def _fold(current: float | None, override: float) -> float:
    if current is None:
        return override
    return min(current, override)


class _CoordinateCollector(Visitor):
    def __init__(self, type_info: TypeInfo, coordinates: set[str]) -> None:
        super().__init__()
        self._type_info = type_info
        self._coordinates = coordinates

    def enter_field(self, node: FieldNode, *_args: object) -> None:
        parent_type = self._type_info.get_parent_type()
        if parent_type is not None:
            self._coordinates.add(f"{parent_type.name}.{node.name.value}")


def collect_schema_coordinates(schema: GraphQLSchema, document: DocumentNode) -> set[str]:
    """Collect the ``Type.field`` coordinates a document selects.

    Args:
        schema: The schema used to resolve parent types.
        document: The document to inspect.

    Returns:
        The set of coordinates. Fields unknown to the schema are skipped.
    """
    coordinates: set[str] = set()
    type_info = TypeInfo(schema)
    visit(document, TypeInfoVisitor(type_info, _CoordinateCollector(type_info, coordinates)))
    return coordinates
