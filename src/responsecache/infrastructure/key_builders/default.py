"""Default key builder implementation."""

from typing import Any

from responsecache.utils.hashing import sha256_hex, stable_json

KEY_DELIMITER = "|"


class DefaultKeyBuilder:
    """Default key builder using a SHA-256 digest of the request identity.

    Creates deterministic cache keys from the document text, operation
    name, canonical JSON of the variables and the session id. Variables
    that differ only in key order produce the same key.
    """

    def __init__(self, delimiter: str = KEY_DELIMITER) -> None:
        """Initialize the key builder.

        Args:
            delimiter: Separator placed between the key components.
        """
        self._delimiter = delimiter

    async def build(
        self,
        document_string: str,
        variable_values: dict[str, Any] | None,
        operation_name: str | None = None,
        session_id: str | None = None,
    ) -> str:
        """Build a cache key for a GraphQL request.

        Args:
            document_string: The document text.
            variable_values: Variables passed to the operation.
            operation_name: Name of the operation (may be None).
            session_id: Session scope, or None for a shared entry.

        Returns:
            The hex digest identifying the request.
        """
        parts = [
            document_string,
            operation_name or "",
            stable_json(variable_values or {}),
            session_id or "",
        ]
        return sha256_hex(self._delimiter.join(parts))
