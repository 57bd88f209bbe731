"""Lenient field coercion for venue-native records.

Venue APIs evolve independently of the mappers, so every helper here degrades
to None instead of raising when a value has an unexpected type or format.
"""

from __future__ import annotations

import json
import math
import re
from datetime import datetime
from typing import Any

import structlog
from pydantic import JsonValue, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

log = structlog.get_logger(__name__)

_RFC3339 = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:[Zz]|[+-]\d{2}:\d{2})\Z"
)
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")
_JSON_VALUE: TypeAdapter[Any] = TypeAdapter(JsonValue)
# Marks a pass-through value with no JSON form (None is a valid JSON value).
_DROP = object()


def pick(raw: dict[str, Any], *keys: str) -> Any:
    """Value of the first key present with a non-None value (camelCase / snake_case variants)."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def opt_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def opt_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def opt_int(value: Any) -> int | None:
    f = opt_float(value)
    if f is None or not f.is_integer():
        return None
    return int(f)


def opt_bool(value: Any) -> bool | None:
    """True/False for booleans (or "true"/"false" strings); None when the venue did not say."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return None


def str_list(value: Any) -> list[str] | None:
    """Ordered list of strings; also accepts a JSON-encoded list (Gamma sends some lists as strings)."""
    if isinstance(value, str):
        try:
            value = json.loads(value) if value else []
        except json.JSONDecodeError:
            return None
    if not isinstance(value, list):
        return None
    out = [str(v) for v in value if v is not None and v != ""]
    return out or None


def parse_rfc3339(value: Any, field: str = "", venue: str = "") -> datetime | None:
    """Parse an RFC 3339 timestamp; None for missing, malformed or offset-less values.

    Only the RFC 3339 profile is accepted (full date, ``T``, full time, ``Z`` or
    ``+hh:mm``); other ISO 8601 forms such as week dates or basic format are not.
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not _RFC3339.match(value):
        log.debug("timestamp_unparseable", venue=venue, field=field, value=repr(value))
        return None
    try:
        # datetime holds microseconds; RFC 3339 allows any fraction length
        return datetime.fromisoformat(_EXCESS_FRACTION.sub(r"\1", value.upper()))
    except ValueError:
        log.debug("timestamp_unparseable", venue=venue, field=field, value=value)
        return None


def json_value(value: Any, field: str = "", venue: str = "") -> Any:
    """value as a JSON-compatible Python value, or _DROP when it has no JSON form.

    Datetimes, Decimals and similar become their JSON encodings (strings).
    """
    try:
        return _JSON_VALUE.validate_python(to_jsonable_python(value))
    except (PydanticSerializationError, PydanticValidationError):
        log.debug("extra_metadata_dropped", venue=venue, field=field, type=type(value).__name__)
        return _DROP


def extra_subset(raw: dict[str, Any], keys: tuple[str, ...], venue: str = "") -> dict[str, Any] | None:
    """Pass-through of venue-specific keys that exist in raw, coerced to JSON values."""
    extra = {}
    for key in keys:
        if key not in raw:
            continue
        value = json_value(raw[key], key, venue)
        if value is not _DROP:
            extra[key] = value
    return extra or None


def non_empty(**values: Any) -> dict[str, Any]:
    """Keyword arguments with None values dropped (for building optional sections)."""
    return {k: v for k, v in values.items() if v is not None}
