"""Per-request value objects passed through the execution hooks."""

from dataclasses import dataclass
from typing import Any

from graphql import DocumentNode, GraphQLSchema


@dataclass(frozen=True)
class PreparedDocument:
    """A parsed document paired with its executable rewrite.

    ``original`` is the document exactly as the caller sent it and is
    used for cache key derivation and schema coordinate collection.
    ``executable`` carries the injected typename markers and is the one
    the execution engine must run.
    """

    original: DocumentNode
    executable: DocumentNode


@dataclass
class ExecutionRequest:
    """Execution arguments seen by the response cache."""

    schema: GraphQLSchema
    document: DocumentNode | PreparedDocument
    variable_values: dict[str, Any] | None = None
    operation_name: str | None = None
    context_value: Any = None
