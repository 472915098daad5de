"""
Per-field directives and the cached field descriptor table.

Directives live in ``dataclasses.field(metadata=...)`` under three string keys:

- ``env``: name of the source environment variable
- ``required``: the literal ``"true"`` marks the variable as required
- ``default``: literal used when the variable is absent or empty

A missing key means the directive is not set. ``env_field()`` builds the metadata.
"""

import builtins
import dataclasses
import logging
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, get_type_hints

from envbind.core.coercion import FieldKind, kind_for, kind_name

logger = logging.getLogger(__name__)

ENV_KEY = "env"
REQUIRED_KEY = "required"
DEFAULT_KEY = "default"


@dataclass(frozen=True)
class Directives:
    """
    Directives read from one field.

    Attributes:
        source: Environment variable name (None if not set)
        required: True only when the required directive is the literal "true"
        default: Default literal (None if not set)
    """

    source: str | None = None
    required: bool = False
    default: str | None = None

    @classmethod
    def from_metadata(cls, metadata: Any) -> "Directives":
        """Read the three directives from a field's metadata mapping."""
        source = metadata.get(ENV_KEY)
        default = metadata.get(DEFAULT_KEY)
        return cls(
            source=str(source) if source is not None else None,
            required=metadata.get(REQUIRED_KEY) == "true",
            default=str(default) if default is not None else None,
        )


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Read-only view of a record field used during traversal.

    Attributes:
        name: Attribute name on the record
        annotation: Declared type (resolved where possible)
        kind: Scalar kind, None for nested records and unsupported types
        kind_name: Printable declared type, e.g. 'int' or 'bool'
        is_record: Whether the declared type is itself a dataclass
        directives: The field's directives
    """

    name: str
    annotation: Any
    kind: FieldKind | None
    kind_name: str
    is_record: bool
    directives: Directives


def env_field(
    source: str | None = None,
    *,
    required: bool = False,
    default: Any = None,
    initial: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    metadata: dict[str, Any] | None = None,
) -> Any:
    """
    Declare a dataclass field bound to an environment variable.

    ``default`` is the env directive, not the dataclass default. The value the
    attribute holds before binding (and keeps when binding skips it) is set with
    ``initial`` or ``default_factory``.

    Args:
        source: Environment variable name; omit only for nested records
        required: Fail when the variable is absent or empty, even if a default is set
        default: Literal used when the variable is absent or empty (stored as str)
        initial: Dataclass default for the attribute
        default_factory: Dataclass default factory, e.g. the nested record type
        metadata: Extra metadata merged with the directives

    Returns:
        A dataclasses.Field carrying the directives in its metadata

    Examples:
        >>> @dataclass
        ... class Settings:
        ...     port: int = env_field("PORT", default=8080, initial=0)
        ...     db: Database = env_field(default_factory=Database)
    """
    merged = dict(metadata or {})
    if source is not None:
        merged[ENV_KEY] = source
    if required:
        merged[REQUIRED_KEY] = "true"
    if default is not None:
        merged[DEFAULT_KEY] = str(default)
    return dataclasses.field(default=initial, default_factory=default_factory, metadata=merged)


def _resolve_annotations(record_type: type) -> dict[str, Any]:
    """
    Resolve string annotations where possible.

    Local classes referenced from postponed annotations cannot be resolved by
    get_type_hints(). In that case each field is resolved on its own against the
    record's module globals and builtins, and only the fields that still fail keep
    their raw ``Field.type`` string.
    """
    try:
        return get_type_hints(record_type)
    except NameError as e:
        logger.debug(f"Could not resolve annotations on {record_type.__qualname__}: {e}, resolving per field")

    module = sys.modules.get(record_type.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    globalns.setdefault("__builtins__", builtins)
    localns = dict(vars(record_type))

    hints: dict[str, Any] = {}
    for f in dataclasses.fields(record_type):
        if not isinstance(f.type, str):
            hints[f.name] = f.type
            continue
        try:
            hints[f.name] = eval(f.type, globalns, localns)  # noqa: S307
        except NameError as e:
            logger.debug(f"Keeping unresolved annotation {f.type!r} on {record_type.__qualname__}.{f.name}: {e}")
            hints[f.name] = f.type
    return hints


@lru_cache(maxsize=None)
def describe(record_type: type) -> tuple[FieldDescriptor, ...]:
    """
    Build the descriptor table of a dataclass type, in declaration order.

    Cached per type; descriptors are immutable.

    Args:
        record_type: A dataclass type

    Returns:
        One FieldDescriptor per dataclass field
    """
    hints = _resolve_annotations(record_type)
    descriptors = []
    for f in dataclasses.fields(record_type):
        annotation = hints.get(f.name, f.type)
        descriptors.append(
            FieldDescriptor(
                name=f.name,
                annotation=annotation,
                kind=kind_for(annotation),
                kind_name=kind_name(annotation),
                is_record=isinstance(annotation, type) and dataclasses.is_dataclass(annotation),
                directives=Directives.from_metadata(f.metadata),
            )
        )
    return tuple(descriptors)
