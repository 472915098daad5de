"""envbind - Bind environment variables onto typed dataclass configuration records"""

from envbind.core.binder import bind
from envbind.core.coercion import FieldKind
from envbind.core.directives import Directives, FieldDescriptor, describe, env_field
from envbind.core.errors import (
    CoercionError,
    EnvBindError,
    InvalidRootError,
    MissingDirectiveError,
    RequiredValueMissingError,
    UnsupportedKindError,
    ValidationError,
    format_error,
)

__version__ = "0.1.0"

__all__ = [
    "bind",
    "env_field",
    "describe",
    "Directives",
    "FieldDescriptor",
    "FieldKind",
    "EnvBindError",
    "InvalidRootError",
    "MissingDirectiveError",
    "RequiredValueMissingError",
    "CoercionError",
    "ValidationError",
    "UnsupportedKindError",
    "format_error",
    "__version__",
]
