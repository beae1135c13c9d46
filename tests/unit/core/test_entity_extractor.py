"""Tests for EntityExtractor."""

from typing import Any

from graphql import GraphQLSchema, execute_sync, parse

from responsecache import EntityExtractor, EntityRef
from responsecache.core.services.document import TYPENAME_ALIAS, prepare_document
from responsecache.core.services.entity_extractor import ExtractionResult


def _extract(
    schema: GraphQLSchema,
    database: Any,
    source: str,
    **options: Any,
) -> ExtractionResult:
    prepared = prepare_document(parse(source))
    result = execute_sync(schema, prepared.executable, root_value=database.root_value())
    assert result.errors is None
    return EntityExtractor(**options).extract(schema, prepared.executable, result.data)


class TestEntityExtractor:
    """Tests for entity extraction."""

    def test_extracts_entity_and_strips_marker(self, schema, database) -> None:
        extraction = _extract(schema, database, '{ user(id: "1") { id name } }')

        assert extraction.entities == [EntityRef("User", "1")]
        assert extraction.data == {"user": {"id": "1", "name": "Ann"}}
        assert extraction.types == {"Query", "User"}
        assert extraction.ignored_type_seen is False

    def test_nested_lists_and_duplicates(self, schema, database) -> None:
        extraction = _extract(schema, database, "{ users { id friends { id } } }")

        assert extraction.entities == [EntityRef("User", "1"), EntityRef("User", "2")]

    def test_keeps_requested_typename(self, schema, database) -> None:
        extraction = _extract(schema, database, '{ user(id: "1") { __typename id } }')

        assert extraction.data == {"user": {"__typename": "User", "id": "1"}}
        assert extraction.entities == [EntityRef("User", "1")]

    def test_aliased_id_field(self, schema, database) -> None:
        """Test that the field name, not the response key, is matched."""
        extraction = _extract(schema, database, '{ user(id: "1") { key: id } }')

        assert extraction.entities == [EntityRef("User", "1")]
        assert extraction.data == {"user": {"key": "1"}}

    def test_fields_without_id_are_not_tagged(self, schema, database) -> None:
        extraction = _extract(schema, database, '{ user(id: "1") { name } }')

        assert extraction.entities == []
        assert "User" in extraction.types

    def test_abstract_types_use_runtime_type(self, schema, database) -> None:
        extraction = _extract(
            schema,
            database,
            """
            {
                search {
                    ... on User { id name }
                    ... on Post { id title author { id } }
                }
            }
            """,
        )

        assert set(extraction.entities) == {
            EntityRef("User", "1"),
            EntityRef("Post", "10"),
        }
        assert extraction.data == {
            "search": [
                {"id": "1", "name": "Ann"},
                {"id": "10", "title": "Hello", "author": {"id": "1"}},
            ]
        }

    def test_fragment_spread_on_interface(self, schema, database) -> None:
        extraction = _extract(
            schema,
            database,
            """
            { node(id: "10") { ...NodeFields } }
            fragment NodeFields on Node { id }
            """,
        )

        assert extraction.entities == [EntityRef("Post", "10")]
        assert extraction.data == {"node": {"id": "10"}}

    def test_custom_id_fields(self, schema, database) -> None:
        extraction = _extract(
            schema, database, '{ post(id: "10") { id title } }', id_fields=["title"]
        )

        assert extraction.entities == [EntityRef("Post", "Hello")]

    def test_ignored_type_is_contagious(self, schema, database) -> None:
        """Test that nothing below an ignored type is extracted."""
        extraction = _extract(
            schema,
            database,
            '{ user(id: "1") { id secret { id child { id } } } }',
            ignored_types=["Secret"],
        )

        assert extraction.entities == [EntityRef("User", "1")]
        assert "Secret" not in extraction.types
        assert "Child" not in extraction.types
        assert extraction.ignored_type_seen is True
        assert extraction.data == {
            "user": {"id": "1", "secret": {"id": "s1", "child": {"id": "c1"}}}
        }

    def test_ignoring_does_not_affect_siblings(self, schema, database) -> None:
        extraction = _extract(
            schema,
            database,
            '{ secret { id } user(id: "2") { id } }',
            ignored_types=["Secret"],
        )

        assert extraction.entities == [EntityRef("User", "2")]

    def test_null_and_missing_values(self, schema, database) -> None:
        extraction = _extract(schema, database, '{ user(id: "404") { id } }')

        assert extraction.entities == []
        assert extraction.data == {"user": None}

    def test_non_scalar_ids_are_skipped(self, schema) -> None:
        prepared = prepare_document(parse('{ user(id: "1") { id } }'))
        data = {
            TYPENAME_ALIAS: "Query",
            "user": {TYPENAME_ALIAS: "User", "id": {"nested": True}},
        }

        extraction = EntityExtractor().extract(schema, prepared.executable, data)

        assert extraction.entities == []
        assert extraction.data == {"user": {"id": {"nested": True}}}

    def test_numeric_ids_are_stringified(self, schema) -> None:
        prepared = prepare_document(parse('{ user(id: "1") { id } }'))
        data = {TYPENAME_ALIAS: "Query", "user": {TYPENAME_ALIAS: "User", "id": 7}}

        extraction = EntityExtractor().extract(schema, prepared.executable, data)

        assert extraction.entities == [EntityRef("User", "7")]

    def test_passes_through_without_data(self, schema) -> None:
        prepared = prepare_document(parse("{ version }"))

        extraction = EntityExtractor().extract(schema, prepared.executable, None)

        assert extraction.data is None
        assert extraction.entities == []
