"""Decode errors raised while converting introspection JSON."""

from typing import Any


class DecodeError(ValueError):
    """Base class for every introspection decode failure."""

    def __init__(self, message: str, path: str = ""):
        self.message = message
        self.path = path
        super().__init__(f"{message} (at {path})" if path else message)


class MalformedInputError(DecodeError):
    """Input is not JSON, or the response envelope has the wrong shape."""


class MissingFieldError(DecodeError):
    def __init__(self, key: str, path: str = ""):
        self.key = key
        super().__init__(f"missing field `{key}`", path)


class DuplicateFieldError(DecodeError):
    def __init__(self, key: str, path: str = ""):
        self.key = key
        super().__init__(f"duplicate field `{key}`", path)


class ForbiddenFieldError(DecodeError):
    """A structural key was supplied that the type's kind does not allow."""

    def __init__(self, key: str, kind: str, path: str = ""):
        self.key = key
        self.kind = kind
        super().__init__(f"field `{key}` is not allowed on {kind} types", path)


class InvalidValueError(DecodeError):
    """A string outside a fixed set of allowed values."""

    def __init__(self, key: str, value: Any, expected: tuple[str, ...], path: str = ""):
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(
            f"invalid value {value!r} for `{key}`, expected one of {', '.join(expected)}", path
        )


class TypeMismatchError(DecodeError):
    """A JSON value of the wrong shape (object, array, string...)."""

    def __init__(self, key: str, expected: str, found: str, path: str = ""):
        self.key = key
        self.expected = expected
        self.found = found
        super().__init__(f"invalid type for `{key}`: expected {expected}, found {found}", path)


class UnexpectedWrapperError(DecodeError):
    """A list or non-null reference where only a named type may appear."""


class NestingTooDeepError(DecodeError):
    def __init__(self, limit: int, path: str = ""):
        self.limit = limit
        super().__init__(f"type reference nested deeper than {limit} levels", path)
