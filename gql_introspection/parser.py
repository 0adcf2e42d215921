"""Introspection response parsing and schema building."""

import json
from dataclasses import dataclass, field
from typing import Union

from graphql import (
    DocumentNode,
    GraphQLError,
    GraphQLSchema,
    build_ast_schema,
    parse,
    validate,
)

from . import utils
from .document import decode_schema
from .errors import DuplicateFieldError, MalformedInputError, MissingFieldError
from .presence import DEFAULT_MAX_TYPE_DEPTH, DecodeContext, Diagnostic, JsonObject


@dataclass
class ParseResult:
    """Decoded document plus the unknown keys skipped along the way."""

    document: DocumentNode
    diagnostics: list[Diagnostic] = field(default_factory=list)


def load_json(text: Union[str, bytes]) -> object:
    """
    Parse JSON text, keeping objects as ordered ``JsonObject`` pair tuples.

    Raises:
        MalformedInputError: If the text is not valid JSON or nests too deeply to parse
    """
    try:
        return json.loads(text, object_pairs_hook=JsonObject)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedInputError(f"invalid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedInputError("JSON nested too deeply") from e


def parse_with_diagnostics(
    text: Union[str, bytes], max_type_depth: int = DEFAULT_MAX_TYPE_DEPTH
) -> ParseResult:
    """
    Parse an introspection response body of shape ``{"data": {"__schema": ...}}``.

    Args:
        text: Full response body (JSON)
        max_type_depth: Maximum number of nested list/non-null wrappers

    Returns:
        ParseResult with the document and collected diagnostics

    Raises:
        DecodeError: On the first problem found; no partial document is returned
    """
    ctx = DecodeContext(max_type_depth=max_type_depth)
    payload = load_json(text)

    if not isinstance(payload, JsonObject):
        raise MalformedInputError("introspection response must be a JSON object")

    _reject_duplicate(payload, "data", ctx)
    data = payload.get("data")
    if data is None:
        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            raise MalformedInputError(f"introspection errors: {_error_messages(errors)}")
        raise MissingFieldError("data")
    if not isinstance(data, JsonObject):
        raise MalformedInputError("`data` must be a JSON object", "data")

    for key in payload.keys():
        if key not in ("data", "errors"):
            ctx.unknown_key(key)

    data_ctx = ctx.child("data")
    _reject_duplicate(data, "__schema", data_ctx)
    schema = data.get("__schema")
    if schema is None:
        raise MissingFieldError("__schema", data_ctx.path)
    if not isinstance(schema, JsonObject):
        raise MalformedInputError("`__schema` must be a JSON object", data_ctx.path)

    for key in data.keys():
        if key != "__schema":
            data_ctx.unknown_key(key)

    document = decode_schema(schema, data_ctx.child("__schema"))
    return ParseResult(document=document, diagnostics=ctx.diagnostics)


def parse_introspection(
    text: Union[str, bytes], max_type_depth: int = DEFAULT_MAX_TYPE_DEPTH
) -> DocumentNode:
    """Parse an introspection response body into a schema DocumentNode."""
    return parse_with_diagnostics(text, max_type_depth).document


def parse_file(path: str, max_type_depth: int = DEFAULT_MAX_TYPE_DEPTH) -> ParseResult:
    """Read an introspection response from disk and parse it."""
    return parse_with_diagnostics(utils.read_text(path), max_type_depth)


def _reject_duplicate(obj: JsonObject, key: str, ctx: DecodeContext) -> None:
    if obj.keys().count(key) > 1:
        raise DuplicateFieldError(key, ctx.path)


def _error_messages(errors: list) -> str:
    messages = []
    for error in errors:
        message = error.get("message") if isinstance(error, JsonObject) else None
        messages.append(message if isinstance(message, str) else str(error))
    return "; ".join(messages)


def build_schema(document: DocumentNode) -> GraphQLSchema:
    """
    Build an executable GraphQL schema from a decoded document.

    Args:
        document: Document produced by parse_introspection

    Returns:
        GraphQLSchema object
    """
    return build_ast_schema(document, assume_valid_sdl=True)


def parse_query(source: str) -> DocumentNode:
    """
    Parse GraphQL query string into AST.

    Raises:
        GraphQLError: If query is syntactically invalid
    """
    return parse(source)


def validate_query(doc: DocumentNode, schema: GraphQLSchema) -> list[GraphQLError]:
    """
    Validate query against schema.

    Returns:
        List of validation errors (empty if valid)
    """
    return validate(schema, doc)
