"""Validation cache storage interface."""

from collections.abc import Sequence
from typing import Protocol

from graphql import GraphQLError


class IValidationCache(Protocol):
    """Contract for storing validation results by key."""

    def get(self, key: str) -> Sequence[GraphQLError] | None:
        """Return the recorded errors for a key, or None if unknown."""
        ...

    def __setitem__(self, key: str, value: Sequence[GraphQLError]) -> None:
        """Record the errors (possibly none) produced for a key."""
        ...
