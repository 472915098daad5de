"""
Typed errors raised while binding environment variables onto a record.

Every error carries a structured payload plus an owned chain of field names
(``path``) that grows as the error climbs out of nested records. Messages are
composed by plain concatenation, never by re-formatting an earlier message.
"""


class EnvBindError(Exception):
    """Base class for every binding failure."""

    def __init__(self, detail: str):
        self.detail = detail
        self.path: tuple[str, ...] = ()
        super().__init__(detail)

    def add_field(self, name: str) -> "EnvBindError":
        """Prepend the enclosing field name to the context chain and return self."""
        self.path = (name, *self.path)
        return self

    @property
    def field_path(self) -> str:
        """Dotted path of the failing field, empty for root-level errors."""
        return ".".join(self.path)

    def __str__(self) -> str:
        if not self.path:
            return self.detail
        return "field " + self.field_path + ": " + self.detail


class InvalidRootError(EnvBindError):
    """Raised when bind() receives something other than a mutable dataclass instance."""

    def __init__(self, actual_type: str):
        self.actual_type = actual_type
        super().__init__("expected instance of a mutable dataclass, got " + actual_type)


class MissingDirectiveError(EnvBindError):
    """Raised when a scalar field declares no env directive."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__("no env directive on field " + field_name)


class RequiredValueMissingError(EnvBindError):
    """Raised when a required variable is absent or empty."""

    def __init__(self, source: str):
        self.source = source
        super().__init__("required environment variable " + source + " is empty")


class CoercionError(EnvBindError):
    """Raised when the bind candidate cannot be parsed into the declared kind."""

    def __init__(self, text: str, kind: str, reason: str):
        self.text = text
        self.kind = kind
        self.reason = reason
        super().__init__("cannot parse " + repr(text) + " as " + kind + ": " + reason)


class ValidationError(EnvBindError):
    """Raised when a freshly assigned value fails its semantic check."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class UnsupportedKindError(EnvBindError):
    """Raised when a field's declared type has no coercion rule."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__("unsupported field type: " + kind)


def format_error(e: BaseException) -> str:
    """Return a short, uniform operator-facing message like 'RequiredValueMissingError: detail'."""
    name = e.__class__.__name__
    msg = str(e).strip()
    return f"{name}: {msg}" if msg else name
