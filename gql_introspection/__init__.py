"""Convert GraphQL introspection results into graphql-core schema documents."""

from .document import RootTypes, root_types
from .errors import (
    DecodeError,
    DuplicateFieldError,
    ForbiddenFieldError,
    InvalidValueError,
    MalformedInputError,
    MissingFieldError,
    NestingTooDeepError,
    TypeMismatchError,
    UnexpectedWrapperError,
)
from .parser import ParseResult, build_schema, parse_file, parse_with_diagnostics
from .parser import parse_introspection as parse
from .presence import Diagnostic

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "Diagnostic",
    "DuplicateFieldError",
    "ForbiddenFieldError",
    "InvalidValueError",
    "MalformedInputError",
    "MissingFieldError",
    "NestingTooDeepError",
    "ParseResult",
    "RootTypes",
    "TypeMismatchError",
    "UnexpectedWrapperError",
    "build_schema",
    "parse",
    "parse_file",
    "parse_with_diagnostics",
    "root_types",
]
