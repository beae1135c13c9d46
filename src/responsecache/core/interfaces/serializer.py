"""Result serializer interface."""

from typing import Protocol

from graphql import ExecutionResult


class ISerializer(Protocol):
    """Converts execution results to bytes for networked stores."""

    def dumps(self, result: ExecutionResult) -> bytes:
        """Encode a result.

        Raises:
            SerializationError: If the result cannot be encoded.
        """
        ...

    def loads(self, data: bytes) -> ExecutionResult:
        """Decode a result previously produced by ``dumps``.

        Raises:
            SerializationError: If the data cannot be decoded.
        """
        ...
