"""Utility functions shared by the loader, report and CLI."""

import hashlib
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator
from urllib.parse import urlparse

from graphql import (
    DocumentNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    TypeDefinitionNode,
    TypeNode,
    get_introspection_query,
)

# Standard GraphQL introspection query
INTROSPECTION_QUERY = get_introspection_query(descriptions=True)


# File system utilities
def ensure_dir(path: str) -> None:
    """Ensure directory exists, creating it if necessary."""
    Path(path).mkdir(parents=True, exist_ok=True)


def exists(path: str) -> bool:
    """Check if file exists."""
    return Path(path).exists()


def dirname(path: str) -> str:
    """Get directory name from path."""
    return str(Path(path).parent)


def join(*parts: str) -> str:
    """Join path components."""
    return str(Path(*parts))


def expand_path(path: str) -> str:
    """Expand ~ in path."""
    return str(Path(path).expanduser())


# File I/O
def read_text(path: str) -> str:
    """Read text file."""
    return Path(path).read_text(encoding="utf-8")


def write_text(path: str, text: str) -> None:
    """Write text file."""
    Path(path).write_text(text, encoding="utf-8")


def to_json(data: Any) -> str:
    """Convert data to JSON string."""
    return json.dumps(data, indent=2)


# Hashing & timestamps
def now_iso() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


def sha256(text: str) -> str:
    """Calculate a short SHA-256 hash of text."""
    return hashlib.sha256(text.encode()).hexdigest()[:16]


def sanitize_host(url: str) -> str:
    """Extract sanitized hostname from URL for use in filenames."""
    if url.startswith("file://"):
        return "file"
    parsed = urlparse(url)
    host = parsed.netloc or parsed.path
    # Remove port, replace special chars
    host = host.split(":")[0]
    return host.replace("/", "_").replace(":", "_")


# GraphQL AST helpers
def unwrap_type(type_node: TypeNode) -> NamedTypeNode:
    """Unwrap non-null/list wrappers to get the named type."""
    while isinstance(type_node, (NonNullTypeNode, ListTypeNode)):
        type_node = type_node.type
    return type_node


def iter_type_definitions(doc: DocumentNode) -> Iterator[TypeDefinitionNode]:
    """Iterate over the type definitions of a document, skipping the schema definition."""
    for definition in doc.definitions:
        if isinstance(definition, TypeDefinitionNode):
            yield definition


def iter_type_references(definition: TypeDefinitionNode) -> Iterator[NamedTypeNode]:
    """Yield every named type a definition refers to (fields, arguments, members)."""
    for field_node in getattr(definition, "fields", None) or ():
        yield unwrap_type(field_node.type)
        for arg in getattr(field_node, "arguments", None) or ():
            yield unwrap_type(arg.type)
    yield from getattr(definition, "interfaces", None) or ()
    yield from getattr(definition, "types", None) or ()


# HTTP response helpers
def safe_json_response(response, context: str = "GraphQL introspection") -> Any:
    """
    Safely parse JSON from HTTP response with helpful error messages.

    Args:
        response: requests.Response object
        context: Description of what operation failed

    Returns:
        Parsed JSON

    Raises:
        RuntimeError: If response is not valid JSON, with detailed diagnostic info
    """
    try:
        return response.json()
    except ValueError as e:
        body_preview = response.text[:300]
        if len(response.text) > 300:
            body_preview += "..."

        error_parts = [
            f"{context} failed - server returned non-JSON response",
            "",
            f"  URL: {response.url}",
            f"  Status: {response.status_code}",
            f"  Content-Type: {response.headers.get('Content-Type', 'unknown')}",
            "",
            "  Response preview:",
            f"  {body_preview}",
            "",
            "  Suggestions:",
            "  - Verify the URL points to the GraphQL endpoint itself",
            "  - Authentication may be required - try adding --token YOUR_TOKEN",
            "  - Check that introspection is enabled on the server",
            "",
            f"  Original JSON error: {e}",
        ]
        raise RuntimeError("\n".join(error_parts))
