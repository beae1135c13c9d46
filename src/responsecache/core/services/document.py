"""Document preparation for entity-aware caching.

Entity extraction needs the runtime type of every object in a result.
Rather than relying on callers to select ``__typename``, the document is
rewritten before execution so that every selection set carries an
aliased ``__typename`` field. The alias lets the extractor strip exactly
what was injected, leaving any ``__typename`` the caller asked for.
"""

from graphql import (
    DocumentNode,
    FieldNode,
    NameNode,
    OperationDefinitionNode,
    OperationType,
    SelectionSetNode,
    Visitor,
    get_operation_ast,
    print_ast,
    visit,
)

from responsecache.core.entities.request import ExecutionRequest, PreparedDocument

TYPENAME_FIELD = "__typename"
TYPENAME_ALIAS = "__responseCacheTypename"


class _TypenameInjector(Visitor):
    """Adds the typename marker to selection sets lacking ``__typename``."""

    def leave_selection_set(self, node: SelectionSetNode, *_args: object) -> SelectionSetNode | None:
        if has_typename_selection(node):
            return None
        return SelectionSetNode(
            selections=(_typename_marker(), *node.selections),
            loc=node.loc,
        )


def _typename_marker() -> FieldNode:
    return FieldNode(
        alias=NameNode(value=TYPENAME_ALIAS),
        name=NameNode(value=TYPENAME_FIELD),
        arguments=(),
        directives=(),
        selection_set=None,
    )


def has_typename_selection(node: SelectionSetNode) -> bool:
    """Check whether a selection set directly selects the runtime typename.

    Only unaliased ``__typename`` fields and the injected marker count;
    selections inside fragments are not inspected.
    """
    for selection in node.selections:
        if not isinstance(selection, FieldNode) or selection.name.value != TYPENAME_FIELD:
            continue
        if selection.alias is None or selection.alias.value == TYPENAME_ALIAS:
            return True
    return False


def add_typename_to_document(document: DocumentNode) -> DocumentNode:
    """Return a copy of the document with typename markers injected.

    Args:
        document: The parsed GraphQL document.

    Returns:
        The rewritten document. The input is never mutated.
    """
    return visit(document, _TypenameInjector())


def prepare_document(document: DocumentNode | PreparedDocument) -> PreparedDocument:
    """Pair a document with its executable rewrite.

    Already prepared documents are returned unchanged.
    """
    if isinstance(document, PreparedDocument):
        return document
    return PreparedDocument(
        original=document,
        executable=add_typename_to_document(document),
    )


def original_document(document: DocumentNode | PreparedDocument) -> DocumentNode:
    """Return the caller's document without injected markers."""
    if isinstance(document, PreparedDocument):
        return document.original
    return document


def get_operation(
    document: DocumentNode | PreparedDocument,
    operation_name: str | None = None,
) -> OperationDefinitionNode | None:
    """Return the operation selected by name, or None if ambiguous."""
    return get_operation_ast(original_document(document), operation_name)


def is_mutation(operation: OperationDefinitionNode | None) -> bool:
    return operation is not None and operation.operation == OperationType.MUTATION


def default_get_document_string(request: ExecutionRequest) -> str:
    """Print the caller's document as used for cache key derivation."""
    return print_ast(original_document(request.document))
