"""Type reference decoding: ``{"kind": ..., "name": ..., "ofType": ...}`` chains."""

from typing import Any

from graphql import (
    ListTypeNode,
    NamedTypeNode,
    NameNode,
    NonNullTypeNode,
    TypeNode,
    print_ast,
)

from .errors import NestingTooDeepError, UnexpectedWrapperError
from .presence import (
    DecodeContext,
    expect_optional_str,
    expect_str,
    iter_pairs,
    require_field,
)

LIST_KIND = "LIST"
NON_NULL_KIND = "NON_NULL"


def decode_type_ref(value: Any, ctx: DecodeContext, depth: int = 0) -> TypeNode:
    """
    Decode a type reference into a graphql-core type node.

    LIST and NON_NULL wrap their decoded ``ofType``; every other kind is a
    named type and only its ``name`` is kept.

    Args:
        value: Raw JSON object of the reference
        ctx: Context positioned at the reference
        depth: Number of wrappers already unwrapped above this one

    Returns:
        NamedTypeNode, ListTypeNode or NonNullTypeNode

    Raises:
        MissingFieldError: If ``kind``, or the ``ofType``/``name`` the kind needs, is absent
        NestingTooDeepError: If the ``ofType`` chain exceeds ``ctx.max_type_depth``
    """
    if depth > ctx.max_type_depth:
        raise NestingTooDeepError(ctx.max_type_depth, ctx.path)

    kind = None
    name = None
    of_type = None

    for key, item in iter_pairs(value, ctx):
        if key == "kind":
            kind = expect_str(item, key, ctx)
        elif key == "name":
            name = expect_optional_str(item, key, ctx)
        elif key == "ofType":
            if item is not None:
                of_type = decode_type_ref(item, ctx.child(key), depth + 1)
        else:
            ctx.unknown_key(key)

    kind = require_field("kind", kind, ctx)

    if kind == LIST_KIND:
        return ListTypeNode(type=require_field("ofType", of_type, ctx))
    if kind == NON_NULL_KIND:
        return NonNullTypeNode(type=require_field("ofType", of_type, ctx))
    return named_type(require_field("name", name, ctx))


def decode_named_type(value: Any, ctx: DecodeContext) -> NamedTypeNode:
    """Decode a reference that must name a type directly (interfaces, possible types)."""
    type_ref = decode_type_ref(value, ctx)
    if not isinstance(type_ref, NamedTypeNode):
        raise UnexpectedWrapperError(
            f"expected a named type, found {print_ast(type_ref)}", ctx.path
        )
    return type_ref


def named_type(name: str) -> NamedTypeNode:
    return NamedTypeNode(name=NameNode(value=name))
