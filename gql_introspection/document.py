"""Schema document builder: turns the ``__schema`` object into a DocumentNode."""

from dataclasses import dataclass
from typing import Any, Optional

from graphql import (
    DocumentNode,
    OperationType,
    OperationTypeDefinitionNode,
    SchemaDefinitionNode,
)

from .definitions import decode_type_definition
from .errors import DuplicateFieldError, TypeMismatchError
from .presence import (
    DecodeContext,
    JsonObject,
    decode_list,
    json_type_name,
    require_field,
)
from .type_refs import named_type

ROOT_OPERATIONS = {
    "queryType": OperationType.QUERY,
    "mutationType": OperationType.MUTATION,
    "subscriptionType": OperationType.SUBSCRIPTION,
}

# Recognized, consumed and dropped.
IGNORED_KEYS = frozenset({"directives", "description"})


@dataclass(frozen=True)
class RootTypes:
    """Root operation type names of a schema; None where the root is absent."""

    query: Optional[str] = None
    mutation: Optional[str] = None
    subscription: Optional[str] = None


def decode_root_type(value: Any, key: str, ctx: DecodeContext) -> Optional[str]:
    """
    Extract a root type name from ``{"name": ...}`` or JSON null.

    Raises:
        MissingFieldError: If the object has no string ``name``
        TypeMismatchError: If the value is neither null nor an object
    """
    if value is None:
        return None
    if not isinstance(value, JsonObject):
        raise TypeMismatchError(key, "object or null", json_type_name(value), ctx.path)
    name = value.get("name")
    if not isinstance(name, str):
        name = None
    return require_field("name", name, ctx.child(key))


def decode_schema(value: Any, ctx: DecodeContext) -> DocumentNode:
    """
    Decode the ``__schema`` object into a document.

    The document holds every decoded type in source order, followed by a
    single schema definition naming the root operation types.

    Args:
        value: Raw ``__schema`` JSON object
        ctx: Context positioned at ``__schema``

    Returns:
        DocumentNode

    Raises:
        DuplicateFieldError: If a root type key appears more than once
        DecodeError: For any failure inside a type definition
    """
    if not isinstance(value, JsonObject):
        raise TypeMismatchError(ctx.name, "object", json_type_name(value), ctx.path)

    roots: dict[str, Optional[str]] = {}
    types: tuple = ()

    for key, item in value:
        if key in ROOT_OPERATIONS:
            if key in roots:
                raise DuplicateFieldError(key, ctx.path)
            roots[key] = decode_root_type(item, key, ctx)
        elif key == "types":
            if item is None:
                raise TypeMismatchError(key, "array", "null", ctx.path)
            types = decode_list(item, key, ctx, decode_type_definition)
        elif key in IGNORED_KEYS:
            continue
        else:
            ctx.unknown_key(key)

    schema_definition = SchemaDefinitionNode(
        description=None,
        directives=(),
        operation_types=tuple(
            OperationTypeDefinitionNode(operation=operation, type=named_type(roots[key]))
            for key, operation in ROOT_OPERATIONS.items()
            if roots.get(key) is not None
        ),
    )

    return DocumentNode(definitions=(*types, schema_definition))


def root_types(document: DocumentNode) -> RootTypes:
    """Read the root operation type names back out of a decoded document."""
    names: dict[str, str] = {}
    for definition in document.definitions:
        if isinstance(definition, SchemaDefinitionNode):
            for op in definition.operation_types:
                names[op.operation.value] = op.type.name.value
    return RootTypes(
        query=names.get("query"),
        mutation=names.get("mutation"),
        subscription=names.get("subscription"),
    )
