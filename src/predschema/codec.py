"""JSON marshal / unmarshal for the canonical discovery types."""

from __future__ import annotations

import json
from typing import Any, TypeVar

import pydantic

from predschema.errors import PayloadParseError
from predschema.models.common import SchemaModel
from predschema.models.metadata import EventMetadata, SeriesMetadata
from predschema.models.payloads import EventDiscoveryPayload, SeriesDiscoveryPayload

M = TypeVar("M", bound=SchemaModel)


def to_dict(model: SchemaModel) -> dict[str, Any]:
    """JSON-ready dict: wire names, RFC 3339 timestamps, absent optionals omitted."""
    return model.model_dump(mode="json", by_alias=True)


def marshal(model: SchemaModel) -> bytes:
    return json.dumps(to_dict(model), separators=(",", ":")).encode()


def unmarshal(data: bytes | str, model_cls: type[M]) -> M:
    """Parse JSON into model_cls. Any parse or shape failure raises PayloadParseError."""
    try:
        return model_cls.model_validate_json(data)
    except pydantic.ValidationError as e:
        raise PayloadParseError(f"failed to unmarshal {model_cls.__name__}: {e}") from e


def from_dict(raw: Any, model_cls: type[M]) -> M:
    """Build model_cls from already-decoded JSON (e.g. one element of a list)."""
    try:
        return model_cls.model_validate(raw)
    except pydantic.ValidationError as e:
        raise PayloadParseError(f"failed to unmarshal {model_cls.__name__}: {e}") from e


def unmarshal_event_metadata(data: bytes | str) -> EventMetadata:
    return unmarshal(data, EventMetadata)


def unmarshal_series_metadata(data: bytes | str) -> SeriesMetadata:
    return unmarshal(data, SeriesMetadata)


def unmarshal_event_payload(data: bytes | str) -> EventDiscoveryPayload:
    return unmarshal(data, EventDiscoveryPayload)


def unmarshal_series_payload(data: bytes | str) -> SeriesDiscoveryPayload:
    return unmarshal(data, SeriesDiscoveryPayload)
