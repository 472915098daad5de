"""
Precedence policy: environment value, then default literal, then skip.

The required flag is checked before the default is consulted, so a default
never masks a required variable that is absent or empty.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from envbind.core.directives import Directives
from envbind.core.errors import RequiredValueMissingError


class Origin(Enum):
    """Where a field's bind candidate came from."""

    ENVIRONMENT = "environment"
    DEFAULT = "default"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of the precedence policy for one field.

    Attributes:
        origin: Which branch of the policy was taken
        candidate: String to coerce (None when skipped)
    """

    origin: Origin
    candidate: str | None = None


SKIP = Resolution(Origin.SKIPPED)


def resolve_value(directives: Directives, environ: Mapping[str, str]) -> Resolution:
    """
    Pick the bind candidate for a field that has a source directive.

    Absent and empty variables are treated the same.

    Args:
        directives: The field's directives (source must be set)
        environ: Environment mapping to look the source up in

    Returns:
        Resolution with origin ENVIRONMENT or DEFAULT and a candidate, or SKIP

    Raises:
        RequiredValueMissingError: If the variable is required and has no value
    """
    value = environ.get(directives.source, "")
    if value:
        return Resolution(Origin.ENVIRONMENT, value)
    if directives.required:
        raise RequiredValueMissingError(directives.source)
    if directives.default:
        return Resolution(Origin.DEFAULT, directives.default)
    return SKIP
