"""Key builder interface."""

from collections.abc import Awaitable
from typing import Any, Protocol


class IKeyBuilder(Protocol):
    """Contract for building response cache keys.

    Implementations may be sync or async; the response cache awaits
    the result when it is awaitable.
    """

    def build(
        self,
        document_string: str,
        variable_values: dict[str, Any] | None,
        operation_name: str | None = None,
        session_id: str | None = None,
    ) -> str | Awaitable[str]:
        """Build a deterministic cache key for a GraphQL request.

        Args:
            document_string: The document text as sent by the client.
            variable_values: Variables passed to the operation.
            operation_name: The operation to execute within the document.
            session_id: Session scope, or None for a shared entry.

        Returns:
            The cache key, or an awaitable resolving to it.
        """
        ...
