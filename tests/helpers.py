"""Builders for introspection JSON used across the test modules."""

import json

from gql_introspection.parser import load_json


def as_json(value):
    """Round-trip a Python literal through the decoder's JSON loader."""
    return load_json(json.dumps(value))


def envelope(schema: dict) -> str:
    """Wrap a ``__schema`` object in a full introspection response body."""
    return json.dumps({"data": {"__schema": schema}})


def named_ref(name: str, kind: str = "SCALAR") -> dict:
    return {"kind": kind, "name": name, "ofType": None}


def non_null(of_type: dict) -> dict:
    return {"kind": "NON_NULL", "name": None, "ofType": of_type}


def list_of(of_type: dict) -> dict:
    return {"kind": "LIST", "name": None, "ofType": of_type}


def field(name: str, type_ref: dict, args: list = None) -> dict:
    return {
        "name": name,
        "description": None,
        "args": args or [],
        "type": type_ref,
        "isDeprecated": False,
        "deprecationReason": None,
    }


def input_value(name: str, type_ref: dict, default_value=None) -> dict:
    return {"name": name, "description": None, "type": type_ref, "defaultValue": default_value}
