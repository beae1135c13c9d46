"""Entity extraction from execution results.

Walks an executed result in lock-step with the selection sets of the
document that produced it. At every object it reads the runtime type
from the typename marker, records ``EntityRef`` values for configured id
fields, and notes the type for TTL resolution. The walk returns a copy
of the data with the injected markers removed; all other values are
passed through untouched.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLSchema,
    InlineFragmentNode,
    SelectionSetNode,
    get_operation_ast,
    is_abstract_type,
)

from responsecache.core.entities.entity_ref import EntityRef
from responsecache.core.services.document import TYPENAME_ALIAS, TYPENAME_FIELD


@dataclass
class ExtractionResult:
    """Outcome of walking one execution result.

    Attributes:
        data: The result data with typename markers stripped.
        entities: Entities found, in first-seen order without duplicates.
        types: Object types observed outside ignored subtrees.
        ignored_type_seen: True if any ignored type occurred.
    """

    data: Any = None
    entities: list[EntityRef] = field(default_factory=list)
    types: set[str] = field(default_factory=set)
    ignored_type_seen: bool = False

    def __post_init__(self) -> None:
        self._seen: set[EntityRef] = set(self.entities)

    def add_entity(self, entity: EntityRef) -> None:
        """Record an entity unless an equal one was already recorded."""
        if entity not in self._seen:
            self._seen.add(entity)
            self.entities.append(entity)


class EntityExtractor:
    """Collects entity references and observed types from results."""

    def __init__(
        self,
        id_fields: Iterable[str] = ("id",),
        ignored_types: Iterable[str] = (),
    ) -> None:
        """Initialize the extractor.

        Args:
            id_fields: Field names whose values identify an entity.
            ignored_types: Types excluded from extraction together with
                everything below them.
        """
        self._id_fields = frozenset(id_fields)
        self._ignored_types = frozenset(ignored_types)

    def extract(
        self,
        schema: GraphQLSchema,
        document: DocumentNode,
        data: Any,
        operation_name: str | None = None,
    ) -> ExtractionResult:
        """Walk result data against the document that produced it.

        Args:
            schema: The schema the document was executed against.
            document: The executed document, including typename markers.
            data: The ``data`` member of the execution result.
            operation_name: The executed operation's name.

        Returns:
            The extraction result. Never raises for unexpected shapes;
            anything that cannot be interpreted is passed through.
        """
        result = ExtractionResult()
        operation = get_operation_ast(document, operation_name)
        if operation is None or not isinstance(data, dict):
            result.data = data
            return result

        walk = _ResultWalk(
            schema, document, result, self._id_fields, self._ignored_types
        )
        result.data = walk.visit_object([operation.selection_set], data, ignored=False)
        return result


class _ResultWalk:
    """State for a single traversal over (selection sets, value) pairs."""

    def __init__(
        self,
        schema: GraphQLSchema,
        document: DocumentNode,
        result: ExtractionResult,
        id_fields: frozenset[str],
        ignored_types: frozenset[str],
    ) -> None:
        self._id_fields = id_fields
        self._ignored_types = ignored_types
        self._schema = schema
        self._result = result
        self._fragments = {
            definition.name.value: definition
            for definition in document.definitions
            if isinstance(definition, FragmentDefinitionNode)
        }

    def visit_value(
        self,
        selection_sets: Sequence[SelectionSetNode],
        value: Any,
        ignored: bool,
    ) -> Any:
        if not selection_sets or value is None:
            return value
        if isinstance(value, list):
            return [self.visit_value(selection_sets, item, ignored) for item in value]
        if isinstance(value, dict):
            return self.visit_object(selection_sets, value, ignored)
        return value

    def visit_object(
        self,
        selection_sets: Sequence[SelectionSetNode],
        value: dict[str, Any],
        ignored: bool,
    ) -> dict[str, Any]:
        type_name = value.get(TYPENAME_ALIAS, value.get(TYPENAME_FIELD))
        if not isinstance(type_name, str):
            type_name = None

        if type_name is not None and type_name in self._ignored_types:
            ignored = True
            self._result.ignored_type_seen = True
        if not ignored and type_name is not None:
            self._result.types.add(type_name)

        fields = self._collect_fields(selection_sets, type_name)
        visited: dict[str, Any] = {}
        for response_key, field_value in value.items():
            if response_key == TYPENAME_ALIAS:
                continue
            nodes = fields.get(response_key)
            if not nodes:
                visited[response_key] = field_value
                continue

            field_name = nodes[0].name.value
            if not ignored and type_name is not None and field_name in self._id_fields:
                self._record(type_name, field_value)

            sub_selections = [node.selection_set for node in nodes if node.selection_set]
            visited[response_key] = self.visit_value(sub_selections, field_value, ignored)
        return visited

    def _record(self, type_name: str, value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            return
        self._result.add_entity(EntityRef(typename=type_name, id=str(value)))

    def _collect_fields(
        self,
        selection_sets: Sequence[SelectionSetNode],
        type_name: str | None,
    ) -> dict[str, list[FieldNode]]:
        fields: dict[str, list[FieldNode]] = {}
        visited_fragments: set[str] = set()
        for selection_set in selection_sets:
            self._collect_into(selection_set, type_name, fields, visited_fragments)
        return fields

    def _collect_into(
        self,
        selection_set: SelectionSetNode,
        type_name: str | None,
        fields: dict[str, list[FieldNode]],
        visited_fragments: set[str],
    ) -> None:
        for selection in selection_set.selections:
            if isinstance(selection, FieldNode):
                response_key = selection.alias.value if selection.alias else selection.name.value
                fields.setdefault(response_key, []).append(selection)
            elif isinstance(selection, InlineFragmentNode):
                condition = selection.type_condition
                if condition is None or self._applies(condition.name.value, type_name):
                    self._collect_into(selection.selection_set, type_name, fields, visited_fragments)
            elif isinstance(selection, FragmentSpreadNode):
                name = selection.name.value
                fragment = self._fragments.get(name)
                if fragment is None or name in visited_fragments:
                    continue
                visited_fragments.add(name)
                if self._applies(fragment.type_condition.name.value, type_name):
                    self._collect_into(fragment.selection_set, type_name, fields, visited_fragments)

    def _applies(self, condition: str, type_name: str | None) -> bool:
        # Without a runtime type every fragment is considered; response
        # keys absent from the data are skipped anyway.
        if type_name is None or condition == type_name:
            return True
        condition_type = self._schema.get_type(condition)
        runtime_type = self._schema.get_type(type_name)
        if condition_type is None or runtime_type is None:
            return False
        if not is_abstract_type(condition_type):
            return False
        return self._schema.is_sub_type(condition_type, runtime_type)  # type: ignore[arg-type]
