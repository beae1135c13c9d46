"""JSON result serializer."""

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from graphql import ExecutionResult

from responsecache.utils.results import result_from_dict, result_to_dict


class SerializationError(Exception):
    """Raised when a cached payload cannot be encoded or decoded."""


def _encode_scalar(obj: Any) -> Any:
    # Custom scalars left unserialized by a resolver
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return str(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class JsonSerializer:
    """Stores execution results in their GraphQL response form.

    A result is written as the compact JSON of ``result.formatted`` and
    read back into an ``ExecutionResult`` whose errors are rebuilt as
    ``GraphQLError`` instances. Dates and decimals are written as
    strings, which is how a GraphQL response carries them.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def dumps(self, result: ExecutionResult) -> bytes:
        """Encode a result as JSON bytes.

        Args:
            result: The execution result to encode.

        Returns:
            The encoded response.

        Raises:
            SerializationError: If the result holds a value JSON cannot encode.
        """
        try:
            text = json.dumps(
                result_to_dict(result), separators=(",", ":"), default=_encode_scalar
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize result: {e}") from e
        return text.encode(self._encoding)

    def loads(self, data: bytes) -> ExecutionResult:
        """Decode JSON bytes into a result.

        Raises:
            SerializationError: If the data is not an encoded response.
        """
        try:
            response = json.loads(data.decode(self._encoding))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SerializationError(f"Failed to deserialize result: {e}") from e
        if not isinstance(response, dict):
            raise SerializationError(
                f"Expected a response object, got {type(response).__name__}"
            )
        return result_from_dict(response)
