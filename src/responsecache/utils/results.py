"""Conversions between execution results and plain dictionaries."""

from typing import Any

from graphql import ExecutionResult, GraphQLError


def result_to_dict(result: ExecutionResult) -> dict[str, Any]:
    """Convert an execution result to its response dictionary.

    Args:
        result: The execution result.

    Returns:
        A dictionary with ``data`` and, when present, ``errors`` and
        ``extensions``.
    """
    return result.formatted  # type: ignore[return-value]


def result_from_dict(response: dict[str, Any]) -> ExecutionResult:
    """Rebuild an execution result from a response dictionary.

    Errors are restored as ``GraphQLError`` instances carrying their
    message, path and extensions. Source locations cannot be restored
    and are dropped.

    Args:
        response: A dictionary in GraphQL response shape.

    Returns:
        The equivalent execution result.
    """
    errors = response.get("errors")
    return ExecutionResult(
        data=response.get("data"),
        errors=[_error_from_dict(error) for error in errors] if errors else None,
        extensions=response.get("extensions"),
    )


def _error_from_dict(error: Any) -> GraphQLError:
    if isinstance(error, GraphQLError):
        return error
    if not isinstance(error, dict):
        return GraphQLError(str(error))
    return GraphQLError(
        error.get("message", ""),
        path=error.get("path"),
        extensions=error.get("extensions"),
    )
