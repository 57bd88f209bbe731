"""Exceptions raised by parsing, validation, mapping and legacy conversion."""

from __future__ import annotations


class SchemaError(Exception):
    """Base class for predschema errors."""


class PayloadParseError(SchemaError):
    """Raw bytes do not parse into the expected structural shape. Not retried."""


class LegacyConversionError(SchemaError):
    """A legacy envelope cannot be converted (payload is not a JSON object)."""


class UnknownVenueError(SchemaError, KeyError):
    """No venue mapper is registered for the requested venue id."""

    def __str__(self) -> str:
        return f"no mapper registered for venue {self.args[0]!r}"


class ValidationError(SchemaError):
    """A parseable record violates a schema rule.

    ``field`` is the wire name of the offending field; ``context`` lists the
    enclosing sections from the outermost, so ``path`` addresses the field
    from the record that was validated (e.g. ``series_data.financial.score``).
    """

    def __init__(self, field: str, message: str, context: tuple[str, ...] = ()) -> None:
        self.field = field
        self.message = message
        self.context = context
        super().__init__(str(self))

    @property
    def path(self) -> str:
        return ".".join((*self.context, self.field))

    def within(self, section: str) -> ValidationError:
        """Return a copy of this error nested one level deeper, under section."""
        return ValidationError(self.field, self.message, (section, *self.context))

    def __str__(self) -> str:
        return f"validation error in field '{self.path}': {self.message}"

    def __repr__(self) -> str:
        return f"ValidationError(field={self.field!r}, message={self.message!r}, path={self.path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (self.field, self.message, self.context) == (other.field, other.message, other.context)

    def __hash__(self) -> int:
        return hash((self.field, self.message, self.context))
