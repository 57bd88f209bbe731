"""Validator - gate between canonical records and published payloads.

validate() and the validate_* entry points raise the first ValidationError
found; collect_errors() runs the same rules in the same order and returns
every violation.
"""

from __future__ import annotations

from typing import Any

from predschema.codec import unmarshal_event_payload, unmarshal_series_payload
from predschema.errors import ValidationError
from predschema.models.common import Contract, Financial, SettlementSource
from predschema.models.metadata import EventMetadata, SeriesMetadata
from predschema.models.payloads import DiscoveryMeta, EventDiscoveryPayload, SeriesDiscoveryPayload
from predschema.validation.consistency import check_relationships, relationship_errors
from predschema.validation.rules import (
    CENTS_EPSILON,
    Rules,
    contract_errors,
    discovery_meta_errors,
    event_metadata_errors,
    event_payload_errors,
    financial_errors,
    is_valid_cents_precision,
    is_zero_time,
    rules_for,
    series_metadata_errors,
    series_payload_errors,
    settlement_source_errors,
)

__all__ = [
    "CENTS_EPSILON",
    "ValidationError",
    "validate",
    "collect_errors",
    "is_valid",
    "validate_event_metadata",
    "validate_series_metadata",
    "validate_event_payload",
    "validate_series_payload",
    "validate_event_payload_json",
    "validate_series_payload_json",
    "validate_discovery_meta",
    "validate_financial",
    "validate_contract",
    "validate_settlement_source",
    "check_relationships",
    "relationship_errors",
    "is_valid_cents_precision",
    "is_zero_time",
]


def _raise_first(errors: Rules) -> None:
    for err in errors:
        raise err


def validate(record: Any) -> None:
    """Validate any canonical record or payload; raise the first ValidationError."""
    _raise_first(rules_for(record))


def collect_errors(record: Any) -> list[ValidationError]:
    """Every violation of record, in rule order. Empty list means valid."""
    return list(rules_for(record))


def is_valid(record: Any) -> bool:
    return next(rules_for(record), None) is None


def validate_event_metadata(metadata: EventMetadata) -> None:
    _raise_first(event_metadata_errors(metadata))


def validate_series_metadata(metadata: SeriesMetadata) -> None:
    _raise_first(series_metadata_errors(metadata))


def validate_event_payload(payload: EventDiscoveryPayload) -> None:
    _raise_first(event_payload_errors(payload))


def validate_series_payload(payload: SeriesDiscoveryPayload) -> None:
    _raise_first(series_payload_errors(payload))


def validate_event_payload_json(data: bytes | str) -> EventDiscoveryPayload:
    """Parse and validate an event discovery message. Returns the parsed payload."""
    payload = unmarshal_event_payload(data)
    validate_event_payload(payload)
    return payload


def validate_series_payload_json(data: bytes | str) -> SeriesDiscoveryPayload:
    payload = unmarshal_series_payload(data)
    validate_series_payload(payload)
    return payload


def validate_discovery_meta(meta: DiscoveryMeta) -> None:
    _raise_first(discovery_meta_errors(meta))


def validate_financial(data: Financial) -> None:
    _raise_first(financial_errors(data))


def validate_contract(data: Contract) -> None:
    _raise_first(contract_errors(data))


def validate_settlement_source(source: SettlementSource) -> None:
    _raise_first(settlement_source_errors(source))
