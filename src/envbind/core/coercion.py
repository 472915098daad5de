"""
String-to-typed-value coercion for bound fields.

Supported kinds form a closed set (see FieldKind). Adding a kind means adding an
enum member, a parser in _PARSERS and a rule in validation._CHECKS, with its exact
grammar and failure condition defined up front.
"""

import re
from enum import Enum
from typing import Any

from envbind.core.errors import CoercionError, UnsupportedKindError

# Signed 64-bit bounds
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)


class FieldKind(Enum):
    """
    Scalar kinds a field can be bound to.

    - INTEGER: declared ``int``; base-10, optional sign, no surrounding whitespace
    - TEXT: declared ``str``; taken verbatim
    """

    INTEGER = "int"
    TEXT = "str"


_KINDS_BY_TYPE: dict[type, FieldKind] = {
    int: FieldKind.INTEGER,
    str: FieldKind.TEXT,
}


def kind_for(annotation: Any) -> FieldKind | None:
    """
    Map a declared annotation to its FieldKind.

    Matching is by exact type, so ``bool`` (an ``int`` subclass) is not an integer.

    Returns:
        The FieldKind, or None when the annotation has no coercion rule
    """
    if not isinstance(annotation, type):
        return None
    return _KINDS_BY_TYPE.get(annotation)


def kind_name(annotation: Any) -> str:
    """Human-readable name of a declared annotation, e.g. 'bool' or 'list[str]'."""
    if isinstance(annotation, type) and not getattr(annotation, "__args__", None):
        return annotation.__name__
    return str(annotation).replace("typing.", "")


def _parse_integer(text: str) -> int:
    if not _INTEGER_RE.fullmatch(text):
        raise CoercionError(text, FieldKind.INTEGER.value, "invalid syntax")
    value = int(text, 10)
    if not INT_MIN <= value <= INT_MAX:
        raise CoercionError(text, FieldKind.INTEGER.value, "value out of range")
    return value


def _parse_text(text: str) -> str:
    return text


_PARSERS = {
    FieldKind.INTEGER: _parse_integer,
    FieldKind.TEXT: _parse_text,
}


def coerce(text: str, kind: FieldKind | None, declared: str) -> Any:
    """
    Convert a bind candidate into the field's declared kind.

    Args:
        text: Bind candidate (environment value or default literal)
        kind: Resolved kind, None when the declared type is unsupported
        declared: Declared type name, reported for unsupported kinds

    Returns:
        The converted value

    Raises:
        UnsupportedKindError: If kind is None
        CoercionError: If text does not match the kind's grammar
    """
    if kind is None:
        raise UnsupportedKindError(declared)
    return _PARSERS[kind](text)
