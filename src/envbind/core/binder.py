"""
Field walker: binds environment variables onto a dataclass record in place.

For each field, in declaration order:
- No env directive: recurse into a nested record, or fail for a scalar
- Resolve the bind candidate (environment -> default -> skip)
- Coerce the candidate into the declared kind and assign it
- Validate the freshly assigned value

The first failure aborts the walk. Fields bound before it stay bound.
"""

import dataclasses
import os
from collections.abc import Mapping
from typing import Any, TypeVar

import structlog

from envbind.core.coercion import coerce
from envbind.core.directives import FieldDescriptor, describe
from envbind.core.errors import EnvBindError, InvalidRootError, MissingDirectiveError
from envbind.core.resolver import Origin, resolve_value
from envbind.core.validation import validate

logger = structlog.get_logger()

R = TypeVar("R")


def _check_root(record: Any) -> None:
    """Reject anything that is not an instance of a non-frozen dataclass."""
    if isinstance(record, type) or not dataclasses.is_dataclass(record):
        raise InvalidRootError(_type_label(record))
    if type(record).__dataclass_params__.frozen:
        raise InvalidRootError("frozen " + _type_label(record))


def _type_label(value: Any) -> str:
    if isinstance(value, type):
        return f"type[{value.__qualname__}]"
    return type(value).__qualname__


def _is_nested_record(descriptor: FieldDescriptor, current: Any) -> bool:
    return descriptor.is_record or (dataclasses.is_dataclass(current) and not isinstance(current, type))


def _bind_field(record: Any, descriptor: FieldDescriptor, environ: Mapping[str, str]) -> None:
    directives = descriptor.directives

    if not directives.source:
        current = getattr(record, descriptor.name)
        if _is_nested_record(descriptor, current):
            _walk(current, environ)
            return
        raise MissingDirectiveError(descriptor.name)

    resolution = resolve_value(directives, environ)
    if resolution.origin is Origin.SKIPPED:
        logger.debug("env_field_skipped", field=descriptor.name, source=directives.source)
        return

    value = coerce(resolution.candidate, descriptor.kind, descriptor.kind_name)
    setattr(record, descriptor.name, value)
    validate(value, descriptor.kind)

    logger.debug(
        "env_field_bound",
        field=descriptor.name,
        source=directives.source,
        origin=resolution.origin.value,
    )


def _walk(record: Any, environ: Mapping[str, str]) -> None:
    _check_root(record)
    descriptors = describe(type(record))
    for descriptor in descriptors:
        try:
            _bind_field(record, descriptor, environ)
        except EnvBindError as e:
            raise e.add_field(descriptor.name)
    logger.debug("env_record_bound", record=type(record).__qualname__, field_count=len(descriptors))


def bind(record: R, environ: Mapping[str, str] | None = None) -> R:
    """
    Populate a dataclass record from environment variables, in place.

    Args:
        record: Instance of a non-frozen dataclass whose fields carry env directives
        environ: Mapping to read variables from (defaults to os.environ)

    Returns:
        The same record, for chaining

    Raises:
        InvalidRootError: If record is not a mutable dataclass instance
        MissingDirectiveError: If a scalar field has no env directive
        RequiredValueMissingError: If a required variable is absent or empty
        CoercionError: If a value cannot be parsed into the field's type
        ValidationError: If a parsed value fails its check
        UnsupportedKindError: If a field's type has no coercion rule

    Examples:
        >>> @dataclass
        ... class Settings:
        ...     port: int = env_field("PORT", default=8080, initial=0)
        >>> bind(Settings(), {"PORT": "9000"}).port
        9000
    """
    env = os.environ if environ is None else environ
    try:
        _walk(record, env)
    except EnvBindError as e:
        logger.debug("env_bind_failed", record=_type_label(record), error=str(e))
        raise
    return record
