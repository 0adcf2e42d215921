"""Tests for type definition decoding and per-kind key validation."""

import pytest
from graphql import (
    EnumTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    UnionTypeDefinitionNode,
)

from gql_introspection.definitions import TYPE_KINDS, decode_type_definition
from gql_introspection.errors import (
    ForbiddenFieldError,
    InvalidValueError,
    MissingFieldError,
    TypeMismatchError,
    UnexpectedWrapperError,
)
from gql_introspection.type_refs import named_type
from tests.helpers import as_json, field, input_value, named_ref, non_null

STRUCTURES = {
    "fields": [field("id", non_null(named_ref("ID"))), field("name", named_ref("String"))],
    "inputFields": [input_value("name", named_ref("String")), input_value("limit", named_ref("Int"), 10)],
    "interfaces": [named_ref("Node", "INTERFACE"), named_ref("Entity", "INTERFACE")],
    "enumValues": [{"name": "ADMIN"}, {"name": "MEMBER"}],
    "possibleTypes": [named_ref("User", "OBJECT"), named_ref("Group", "OBJECT")],
}

PERMITTED = {
    "SCALAR": [],
    "OBJECT": ["fields", "interfaces"],
    "INTERFACE": ["fields"],
    "UNION": ["possibleTypes"],
    "ENUM": ["enumValues"],
    "INPUT_OBJECT": ["inputFields"],
}

FORBIDDEN = {
    "SCALAR": ["fields", "inputFields", "interfaces", "possibleTypes"],
    "OBJECT": ["inputFields", "possibleTypes"],
    "INTERFACE": ["inputFields", "interfaces"],
    "UNION": ["fields", "inputFields", "interfaces"],
    "ENUM": ["fields", "inputFields", "interfaces", "possibleTypes"],
    "INPUT_OBJECT": ["fields", "interfaces", "possibleTypes"],
}

NODE_CLASSES = {
    "SCALAR": ScalarTypeDefinitionNode,
    "OBJECT": ObjectTypeDefinitionNode,
    "INTERFACE": InterfaceTypeDefinitionNode,
    "UNION": UnionTypeDefinitionNode,
    "ENUM": EnumTypeDefinitionNode,
    "INPUT_OBJECT": InputObjectTypeDefinitionNode,
}


def type_object(kind: str, keys: list[str], name: str = "Thing") -> dict:
    obj = {"kind": kind, "name": name, "description": f"The {name} type"}
    for key in keys:
        obj[key] = STRUCTURES[key]
    return obj


def names(nodes) -> list[str]:
    return [n.name.value for n in nodes]


class TestPermittedKeys:
    """Each kind decodes with exactly its permitted keys."""

    def test_kind_table_is_complete(self):
        assert set(TYPE_KINDS) == set(PERMITTED) == set(FORBIDDEN)

    @pytest.mark.parametrize("kind", TYPE_KINDS)
    def test_decodes_to_matching_node(self, ctx, kind):
        result = decode_type_definition(as_json(type_object(kind, PERMITTED[kind])), ctx)

        assert isinstance(result, NODE_CLASSES[kind])
        assert result.name.value == "Thing"
        assert result.description.value == "The Thing type"
        assert result.directives == ()

    def test_object(self, ctx):
        result = decode_type_definition(as_json(type_object("OBJECT", ["fields", "interfaces"])), ctx)

        assert names(result.fields) == ["id", "name"]
        assert result.interfaces == (named_type("Node"), named_type("Entity"))

    def test_interface(self, ctx):
        result = decode_type_definition(as_json(type_object("INTERFACE", ["fields"])), ctx)

        assert names(result.fields) == ["id", "name"]
        assert result.interfaces == ()

    def test_interface_tolerates_possible_types(self, ctx):
        raw = type_object("INTERFACE", ["fields", "possibleTypes"])

        result = decode_type_definition(as_json(raw), ctx)

        assert isinstance(result, InterfaceTypeDefinitionNode)
        assert not hasattr(result, "types")

    def test_union(self, ctx):
        result = decode_type_definition(as_json(type_object("UNION", ["possibleTypes"])), ctx)

        assert result.types == (named_type("User"), named_type("Group"))

    def test_enum(self, ctx):
        result = decode_type_definition(as_json(type_object("ENUM", ["enumValues"])), ctx)

        assert names(result.values) == ["ADMIN", "MEMBER"]

    def test_input_object(self, ctx):
        result = decode_type_definition(as_json(type_object("INPUT_OBJECT", ["inputFields"])), ctx)

        assert names(result.fields) == ["name", "limit"]
        assert all(f.default_value is None for f in result.fields)

    @pytest.mark.parametrize("kind", ["OBJECT", "INTERFACE", "UNION", "ENUM", "INPUT_OBJECT"])
    def test_absent_structures_default_to_empty(self, ctx, kind):
        result = decode_type_definition(as_json({"kind": kind, "name": "Empty"}), ctx)

        for attr in ("fields", "interfaces", "types", "values"):
            if hasattr(result, attr):
                assert getattr(result, attr) == ()

    @pytest.mark.parametrize("kind", TYPE_KINDS)
    def test_null_structures_are_absent(self, ctx, kind):
        raw = {"kind": kind, "name": "Thing"}
        raw.update({key: None for key in STRUCTURES})

        assert isinstance(decode_type_definition(as_json(raw), ctx), NODE_CLASSES[kind])

    def test_description_optional(self, ctx):
        result = decode_type_definition(as_json({"kind": "SCALAR", "name": "Date"}), ctx)

        assert result.description is None


class TestForbiddenKeys:
    """Each kind rejects another kind's structural keys."""

    @pytest.mark.parametrize(
        "kind,key", [(kind, key) for kind, keys in FORBIDDEN.items() for key in keys]
    )
    def test_forbidden_key(self, ctx, kind, key):
        raw = type_object(kind, PERMITTED[kind] + [key])

        with pytest.raises(ForbiddenFieldError) as exc_info:
            decode_type_definition(as_json(raw), ctx)

        assert exc_info.value.key == key
        assert exc_info.value.kind == kind
        assert f"`{key}`" in str(exc_info.value)

    def test_empty_array_counts_as_present(self, ctx):
        raw = {"kind": "INTERFACE", "name": "Node", "fields": [], "interfaces": []}

        with pytest.raises(ForbiddenFieldError) as exc_info:
            decode_type_definition(as_json(raw), ctx)

        assert exc_info.value.key == "interfaces"


class TestInvalidDefinitions:
    """Missing, malformed and unknown keys."""

    def test_missing_name(self, ctx):
        raw = {"kind": "OBJECT", "fields": STRUCTURES["fields"]}

        with pytest.raises(MissingFieldError) as exc_info:
            decode_type_definition(as_json(raw), ctx)

        assert exc_info.value.key == "name"

    def test_name_checked_before_kind(self, ctx):
        with pytest.raises(MissingFieldError) as exc_info:
            decode_type_definition(as_json({"description": "nothing"}), ctx)

        assert exc_info.value.key == "name"

    def test_missing_kind(self, ctx):
        with pytest.raises(MissingFieldError) as exc_info:
            decode_type_definition(as_json({"name": "Thing"}), ctx)

        assert exc_info.value.key == "kind"

    @pytest.mark.parametrize("kind", ["LIST", "NON_NULL", "object", "DIRECTIVE"])
    def test_unknown_kind(self, ctx, kind):
        with pytest.raises(InvalidValueError) as exc_info:
            decode_type_definition(as_json({"kind": kind, "name": "Thing"}), ctx)

        assert exc_info.value.value == kind
        assert exc_info.value.expected == TYPE_KINDS

    def test_kind_must_be_string(self, ctx):
        with pytest.raises(TypeMismatchError):
            decode_type_definition(as_json({"kind": ["OBJECT"], "name": "Thing"}), ctx)

    def test_fields_must_be_array(self, ctx):
        with pytest.raises(TypeMismatchError) as exc_info:
            decode_type_definition(as_json({"kind": "OBJECT", "name": "T", "fields": {}}), ctx)

        assert exc_info.value.key == "fields"

    def test_wrapped_interface_is_rejected(self, ctx):
        raw = {"kind": "OBJECT", "name": "User", "interfaces": [non_null(named_ref("Node", "INTERFACE"))]}

        with pytest.raises(UnexpectedWrapperError):
            decode_type_definition(as_json(raw), ctx)

    def test_extensions_are_tolerated(self, ctx):
        raw = type_object("OBJECT", ["fields", "interfaces"])
        raw["extensions"] = {"owner": "team-a", "cost": {"weight": 2}}

        result = decode_type_definition(as_json(raw), ctx)

        assert isinstance(result, ObjectTypeDefinitionNode)
        assert names(result.fields) == ["id", "name"]
        assert [(d.key, d.path) for d in ctx.diagnostics] == [("extensions", "")]

    def test_newer_introspection_keys_are_tolerated(self, ctx):
        raw = {"kind": "SCALAR", "name": "URL", "specifiedByURL": "https://example.com", "isOneOf": None}

        decode_type_definition(as_json(raw), ctx)

        assert [d.key for d in ctx.diagnostics] == ["specifiedByURL", "isOneOf"]

    def test_nested_error_path(self, ctx):
        raw = {"kind": "OBJECT", "name": "User", "fields": [field("id", named_ref("ID")), {"name": "broken"}]}

        with pytest.raises(MissingFieldError) as exc_info:
            decode_type_definition(as_json(raw), ctx.child("types").item(4))

        assert exc_info.value.key == "type"
        assert exc_info.value.path == "types[4].fields[1]"
