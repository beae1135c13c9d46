"""Validation result caching.

Validating a document against a schema is pure, so its outcome can be
reused for every later request with the same schema, rule set and
document text. Errors are cached too: an invalid document stays invalid.
"""

import logging
import weakref
from collections.abc import Collection, Sequence

from cachetools import TTLCache  # type: ignore[import-untyped]
from graphql import (
    ASTValidationRule,
    DocumentNode,
    GraphQLError,
    GraphQLSchema,
    introspection_from_schema,
    print_ast,
    specified_rules,
    validate,
)

from responsecache.core.interfaces.validation_cache import IValidationCache
from responsecache.utils.hashing import hash_value

logger = logging.getLogger(__name__)

_schema_hashes: "weakref.WeakKeyDictionary[GraphQLSchema, str]" = weakref.WeakKeyDictionary()


def get_schema_hash(schema: GraphQLSchema) -> str:
    """Return a stable fingerprint of a schema's introspected shape.

    The fingerprint is memoized for the lifetime of the schema instance;
    the memo never keeps a schema alive.

    Args:
        schema: The schema to fingerprint.

    Returns:
        A SHA-256 hex digest.
    """
    schema_hash = _schema_hashes.get(schema)
    if schema_hash is None:
        schema_hash = hash_value(introspection_from_schema(schema)["__schema"])
        _schema_hashes[schema] = schema_hash
    return schema_hash


def get_rules_key(rules: Collection[type[ASTValidationRule]]) -> str:
    """Concatenate rule names in the order supplied."""
    return "".join(rule.__name__ for rule in rules)


class ValidationCache:
    """Caches the outcome of ``graphql.validate``.

    Usage::

        validation_cache = ValidationCache()
        errors = validation_cache.validate(schema, document)
    """

    def __init__(
        self,
        cache: IValidationCache | None = None,
        max_size: int = 1000,
        max_age: float = 3600.0,
    ) -> None:
        """Initialize the validation cache.

        Args:
            cache: Storage for validation results. Defaults to a bounded
                LRU cache whose entries expire after ``max_age``.
            max_size: Maximum number of entries in the default storage.
            max_age: Maximum age in seconds of a default storage entry.
        """
        self._cache: IValidationCache = (
            cache if cache is not None else TTLCache(maxsize=max_size, ttl=max_age)
        )

    @property
    def cache(self) -> IValidationCache:
        return self._cache

    def build_key(
        self,
        schema: GraphQLSchema,
        document_string: str,
        rules: Collection[type[ASTValidationRule]] | None = None,
    ) -> str:
        """Build the key a validation outcome is stored under.

        Args:
            schema: The schema validated against.
            document_string: The document text.
            rules: Applied rules, or None for graphql-core's specified rules.

        Returns:
            ``schemaHash|ruleNames|documentText``.
        """
        applied = specified_rules if rules is None else rules
        return "|".join((get_schema_hash(schema), get_rules_key(applied), document_string))

    def validate(
        self,
        schema: GraphQLSchema,
        document: DocumentNode,
        rules: Collection[type[ASTValidationRule]] | None = None,
        document_string: str | None = None,
    ) -> list[GraphQLError]:
        """Validate a document, reusing a cached outcome when available.

        Args:
            schema: The schema to validate against.
            document: The parsed document.
            rules: Rules to apply, or None for graphql-core's specified rules.
            document_string: The document text. Printed from the document
                if not supplied.

        Returns:
            The validation errors, empty if the document is valid.
        """
        if document_string is None:
            document_string = print_ast(document)
        key = self.build_key(schema, document_string, rules)

        cached: Sequence[GraphQLError] | None = self._cache.get(key)
        if cached is not None:
            logger.debug("Validation cache hit")
            return list(cached)

        logger.debug("Validation cache miss")
        errors = validate(schema, document, rules)
        self._cache[key] = list(errors)
        return list(errors)
