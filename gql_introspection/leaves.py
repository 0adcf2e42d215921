"""Decoders for fields, input values and enum values."""

from typing import Any, Optional

from graphql import (
    EnumValueDefinitionNode,
    FieldDefinitionNode,
    InputValueDefinitionNode,
    NameNode,
    StringValueNode,
)

from .presence import (
    DecodeContext,
    decode_list,
    expect_optional_str,
    expect_str,
    iter_pairs,
    require_field,
)
from .type_refs import decode_type_ref

# Read and dropped: deprecation metadata is not carried into the document.
DEPRECATION_KEYS = frozenset({"isDeprecated", "deprecationReason"})


def description_node(text: Optional[str]) -> Optional[StringValueNode]:
    """Wrap a description the way the SDL parser would (block string if multi-line)."""
    if text is None:
        return None
    return StringValueNode(value=text, block="\n" in text)


def decode_field(value: Any, ctx: DecodeContext) -> FieldDefinitionNode:
    """Decode an output field, including its arguments."""
    name = None
    description = None
    field_type = None
    arguments = None

    for key, item in iter_pairs(value, ctx):
        if key == "name":
            name = expect_str(item, key, ctx)
        elif key == "description":
            description = expect_optional_str(item, key, ctx)
        elif key == "type":
            if item is not None:
                field_type = decode_type_ref(item, ctx.child(key))
        elif key == "args":
            arguments = decode_list(item, key, ctx, decode_input_value)
        elif key in DEPRECATION_KEYS:
            continue
        else:
            ctx.unknown_key(key)

    return FieldDefinitionNode(
        description=description_node(description),
        name=NameNode(value=require_field("name", name, ctx)),
        directives=(),
        arguments=arguments or (),
        type=require_field("type", field_type, ctx),
    )


def decode_input_value(value: Any, ctx: DecodeContext) -> InputValueDefinitionNode:
    """
    Decode an argument or input-object field.

    ``defaultValue`` is read but never converted into a value literal, so the
    resulting node always has ``default_value=None``.
    """
    name = None
    description = None
    value_type = None

    for key, item in iter_pairs(value, ctx):
        if key == "name":
            name = expect_str(item, key, ctx)
        elif key == "description":
            description = expect_optional_str(item, key, ctx)
        elif key == "type":
            if item is not None:
                value_type = decode_type_ref(item, ctx.child(key))
        elif key == "defaultValue" or key in DEPRECATION_KEYS:
            continue
        else:
            ctx.unknown_key(key)

    value_type = require_field("type", value_type, ctx)

    return InputValueDefinitionNode(
        description=description_node(description),
        name=NameNode(value=require_field("name", name, ctx)),
        directives=(),
        type=value_type,
        default_value=None,
    )


def decode_enum_value(value: Any, ctx: DecodeContext) -> EnumValueDefinitionNode:
    name = None
    description = None

    for key, item in iter_pairs(value, ctx):
        if key == "name":
            name = expect_str(item, key, ctx)
        elif key == "description":
            description = expect_optional_str(item, key, ctx)
        elif key in DEPRECATION_KEYS:
            continue
        else:
            ctx.unknown_key(key)

    return EnumValueDefinitionNode(
        description=description_node(description),
        name=NameNode(value=require_field("name", name, ctx)),
        directives=(),
    )
