"""Post-assignment semantic checks, one rule per FieldKind."""

from collections.abc import Callable
from typing import Any

from envbind.core.coercion import FieldKind
from envbind.core.errors import ValidationError


def _check_integer(value: int) -> None:
    if value <= 0:
        raise ValidationError("must be positive")


def _check_text(value: str) -> None:
    if value == "":
        raise ValidationError("must not be empty")


_CHECKS: dict[FieldKind, Callable[[Any], None]] = {
    FieldKind.INTEGER: _check_integer,
    FieldKind.TEXT: _check_text,
}


def validate(value: Any, kind: FieldKind | None) -> None:
    """
    Validate a freshly assigned value.

    Kinds without a registered rule always pass.

    Raises:
        ValidationError: If the value breaks its kind's rule
    """
    check = _CHECKS.get(kind) if kind is not None else None
    if check is not None:
        check(value)
