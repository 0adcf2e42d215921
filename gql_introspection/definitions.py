"""Decoding of ``__Type`` entries from the schema's ``types`` array.

Decoding runs in two phases. Every recognized key is first collected into a
``TypeDefinitionBag``; then the constructor registered for the type's ``kind``
checks that no structural key belonging to another kind was supplied and
builds the graphql-core definition node from the keys it owns.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from graphql import (
    EnumTypeDefinitionNode,
    EnumValueDefinitionNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    NamedTypeNode,
    NameNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    StringValueNode,
    TypeDefinitionNode,
    UnionTypeDefinitionNode,
)

from .errors import InvalidValueError
from .leaves import decode_enum_value, decode_field, decode_input_value, description_node
from .presence import (
    DecodeContext,
    decode_list,
    expect_optional_str,
    expect_str,
    iter_pairs,
    require_absent,
    require_field,
)
from .type_refs import decode_named_type

FIELDS = "fields"
INPUT_FIELDS = "inputFields"
INTERFACES = "interfaces"
ENUM_VALUES = "enumValues"
POSSIBLE_TYPES = "possibleTypes"


@dataclass(frozen=True)
class TypeDefinitionBag:
    """Everything collected from one ``__Type`` object, before kind dispatch.

    ``None`` means the key was absent or JSON null.
    """

    name: str
    description: Optional[StringValueNode]
    fields: Optional[tuple[FieldDefinitionNode, ...]] = None
    input_fields: Optional[tuple[InputValueDefinitionNode, ...]] = None
    interfaces: Optional[tuple[NamedTypeNode, ...]] = None
    enum_values: Optional[tuple[EnumValueDefinitionNode, ...]] = None
    possible_types: Optional[tuple[NamedTypeNode, ...]] = None

    def common(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "name": NameNode(value=self.name),
            "directives": (),
        }


def _forbid(bag: TypeDefinitionBag, kind: str, ctx: DecodeContext, *keys: str) -> None:
    by_key = {
        FIELDS: bag.fields,
        INPUT_FIELDS: bag.input_fields,
        INTERFACES: bag.interfaces,
        ENUM_VALUES: bag.enum_values,
        POSSIBLE_TYPES: bag.possible_types,
    }
    for key in keys:
        require_absent(key, by_key[key], kind, ctx)


def build_scalar(bag: TypeDefinitionBag, ctx: DecodeContext) -> ScalarTypeDefinitionNode:
    _forbid(bag, "SCALAR", ctx, FIELDS, INPUT_FIELDS, INTERFACES, POSSIBLE_TYPES)
    return ScalarTypeDefinitionNode(**bag.common())


def build_object(bag: TypeDefinitionBag, ctx: DecodeContext) -> ObjectTypeDefinitionNode:
    _forbid(bag, "OBJECT", ctx, INPUT_FIELDS, POSSIBLE_TYPES)
    return ObjectTypeDefinitionNode(
        **bag.common(),
        interfaces=bag.interfaces or (),
        fields=bag.fields or (),
    )


def build_interface(bag: TypeDefinitionBag, ctx: DecodeContext) -> InterfaceTypeDefinitionNode:
    # possibleTypes is tolerated here: introspection lists an interface's implementors.
    _forbid(bag, "INTERFACE", ctx, INPUT_FIELDS, INTERFACES)
    return InterfaceTypeDefinitionNode(
        **bag.common(),
        interfaces=(),
        fields=bag.fields or (),
    )


def build_union(bag: TypeDefinitionBag, ctx: DecodeContext) -> UnionTypeDefinitionNode:
    _forbid(bag, "UNION", ctx, FIELDS, INPUT_FIELDS, INTERFACES)
    return UnionTypeDefinitionNode(**bag.common(), types=bag.possible_types or ())


def build_enum(bag: TypeDefinitionBag, ctx: DecodeContext) -> EnumTypeDefinitionNode:
    _forbid(bag, "ENUM", ctx, FIELDS, INPUT_FIELDS, INTERFACES, POSSIBLE_TYPES)
    return EnumTypeDefinitionNode(**bag.common(), values=bag.enum_values or ())


def build_input_object(
    bag: TypeDefinitionBag, ctx: DecodeContext
) -> InputObjectTypeDefinitionNode:
    _forbid(bag, "INPUT_OBJECT", ctx, FIELDS, INTERFACES, POSSIBLE_TYPES)
    return InputObjectTypeDefinitionNode(**bag.common(), fields=bag.input_fields or ())


BUILDERS: dict[str, Callable[[TypeDefinitionBag, DecodeContext], TypeDefinitionNode]] = {
    "SCALAR": build_scalar,
    "OBJECT": build_object,
    "INTERFACE": build_interface,
    "UNION": build_union,
    "ENUM": build_enum,
    "INPUT_OBJECT": build_input_object,
}

TYPE_KINDS = tuple(BUILDERS)


def decode_type_definition(value: Any, ctx: DecodeContext) -> TypeDefinitionNode:
    """
    Decode one entry of ``__schema.types``.

    Args:
        value: Raw JSON object of the type
        ctx: Context positioned at the entry

    Returns:
        One of the six graphql-core type definition nodes

    Raises:
        MissingFieldError: If ``name`` or ``kind`` is absent
        InvalidValueError: If ``kind`` is not a type-definition kind
        ForbiddenFieldError: If a structural key the kind does not allow is present
    """
    kind = None
    name = None
    description = None
    collected: dict[str, Any] = {}

    for key, item in iter_pairs(value, ctx):
        if key == "kind":
            kind = expect_str(item, key, ctx)
        elif key == "name":
            name = expect_str(item, key, ctx)
        elif key == "description":
            description = expect_optional_str(item, key, ctx)
        elif key == FIELDS:
            collected["fields"] = decode_list(item, key, ctx, decode_field)
        elif key == INPUT_FIELDS:
            collected["input_fields"] = decode_list(item, key, ctx, decode_input_value)
        elif key == INTERFACES:
            collected["interfaces"] = decode_list(item, key, ctx, decode_named_type)
        elif key == ENUM_VALUES:
            collected["enum_values"] = decode_list(item, key, ctx, decode_enum_value)
        elif key == POSSIBLE_TYPES:
            collected["possible_types"] = decode_list(item, key, ctx, decode_named_type)
        else:
            ctx.unknown_key(key)

    # all types need a name, whatever their kind
    bag = TypeDefinitionBag(
        name=require_field("name", name, ctx),
        description=description_node(description),
        **collected,
    )

    kind = require_field("kind", kind, ctx)
    builder = BUILDERS.get(kind)
    if builder is None:
        raise InvalidValueError("kind", kind, TYPE_KINDS, ctx.path)
    return builder(bag, ctx)
