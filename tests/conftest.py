"""Shared fixtures for decoder tests."""

from pathlib import Path

import pytest

from gql_introspection.presence import DecodeContext

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def introspection_path() -> Path:
    return FIXTURES / "introspection.json"


@pytest.fixture
def introspection_text(introspection_path) -> str:
    return introspection_path.read_text(encoding="utf-8")


@pytest.fixture
def ctx() -> DecodeContext:
    return DecodeContext()
