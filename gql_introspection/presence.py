"""Field-presence helpers shared by every decoder.

Decoders walk a JSON object's key/value pairs once, collect the keys they know
into local variables and hand everything else to ``DecodeContext.unknown_key``.
The helpers here turn "required", "must be absent" and "wrong JSON shape" into
the matching ``DecodeError``.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterator, Optional, TypeVar

from .errors import ForbiddenFieldError, MissingFieldError, TypeMismatchError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_TYPE_DEPTH = 32


class JsonObject(tuple):
    """A decoded JSON object that keeps every ``(key, value)`` pair in source order.

    ``json.loads(..., object_pairs_hook=JsonObject)`` produces these instead of
    dicts so that repeated keys are still visible to the decoders.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of the last occurrence of ``key``."""
        for k, v in reversed(self):
            if k == key:
                return v
        return default

    def keys(self) -> list[str]:
        return [k for k, _ in self]


def json_type_name(value: Any) -> str:
    """Name a decoded JSON value the way JSON would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, JsonObject):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


@dataclass(frozen=True)
class Diagnostic:
    """An unrecognized key that was skipped during decoding."""

    path: str
    key: str

    def __str__(self) -> str:
        return f"ignored unknown key '{self.key}' at {self.path or '<root>'}"


@dataclass(frozen=True)
class DecodeContext:
    """Per-call decoding state: current JSON path, diagnostics sink and limits.

    Child contexts share the parent's diagnostics list, so one ``parse`` call
    collects every diagnostic in source order.
    """

    path: str = ""
    diagnostics: list[Diagnostic] = field(default_factory=list)
    max_type_depth: int = DEFAULT_MAX_TYPE_DEPTH

    def child(self, key: str) -> "DecodeContext":
        return replace(self, path=f"{self.path}.{key}" if self.path else key)

    def item(self, index: int) -> "DecodeContext":
        return replace(self, path=f"{self.path}[{index}]")

    @property
    def name(self) -> str:
        """Last segment of the path, used to name the value being decoded."""
        return self.path.rsplit(".", 1)[-1]

    def unknown_key(self, key: str) -> None:
        """Record a key no decoder recognizes; its value is skipped."""
        diagnostic = Diagnostic(path=self.path, key=key)
        self.diagnostics.append(diagnostic)
        logger.debug("Unknown/unsupported key '%s' at %s", key, self.path or "<root>")


def iter_pairs(value: Any, ctx: DecodeContext) -> Iterator[tuple[str, Any]]:
    """Iterate an object's pairs, failing if ``value`` is not a JSON object."""
    if not isinstance(value, JsonObject):
        raise TypeMismatchError(ctx.name, "object", json_type_name(value), ctx.path)
    return iter(value)


def expect_str(value: Any, key: str, ctx: DecodeContext) -> str:
    if not isinstance(value, str):
        raise TypeMismatchError(key, "string", json_type_name(value), ctx.path)
    return value


def expect_optional_str(value: Any, key: str, ctx: DecodeContext) -> Optional[str]:
    if value is None:
        return None
    return expect_str(value, key, ctx)


def decode_list(
    value: Any,
    key: str,
    ctx: DecodeContext,
    decode_item: Callable[[Any, DecodeContext], T],
) -> Optional[tuple[T, ...]]:
    """
    Decode an array value item by item, in source order.

    Args:
        value: Raw JSON value of ``key``
        key: Key the array was found under
        ctx: Context of the object that holds ``key``
        decode_item: Decoder applied to each element

    Returns:
        Tuple of decoded items, or None when the value is JSON null
    """
    if value is None:
        return None
    if not isinstance(value, list):
        raise TypeMismatchError(key, "array", json_type_name(value), ctx.path)
    list_ctx = ctx.child(key)
    return tuple(decode_item(item, list_ctx.item(i)) for i, item in enumerate(value))


def require_field(key: str, value: Optional[T], ctx: DecodeContext) -> T:
    """Return ``value``, or raise MissingFieldError if it was never supplied."""
    if value is None:
        raise MissingFieldError(key, ctx.path)
    return value


def require_absent(key: str, value: Optional[Any], kind: str, ctx: DecodeContext) -> None:
    """Raise ForbiddenFieldError if ``key`` was supplied for a kind that forbids it."""
    if value is not None:
        raise ForbiddenFieldError(key, kind, ctx.path)
