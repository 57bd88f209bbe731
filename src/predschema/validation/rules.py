"""Ordered rule sets for discovery records and payloads.

Each rule set is a generator yielding ValidationErrors in check order. Taking
the first element gives fail-fast validation; exhausting it gives the full
report. Nested errors are re-yielded with the enclosing section prepended.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Callable, Iterator

from predschema.errors import ValidationError
from predschema.models.common import Contract, Financial, SeriesData, SettlementSource
from predschema.models.enums import Currency, DiscoveryKind, is_valid_event_type, is_valid_venue
from predschema.models.metadata import DiscoveryRecord, EventMetadata, SeriesMetadata
from predschema.models.payloads import DiscoveryMeta, EventDiscoveryPayload, SeriesDiscoveryPayload

CENTS_EPSILON = 1e-10

# Zero instant written by producers that serialize an unset time.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_USD_FIELDS = ("volume_24h_usd", "volume_total_usd", "liquidity_total_usd")
_CONTRACT_COUNT_FIELDS = ("volume_24h_contracts", "volume_total_contracts")

Rules = Iterator[ValidationError]


def is_valid_cents_precision(value: float) -> bool:
    """True if value is a whole number of cents (within CENTS_EPSILON)."""
    if not math.isfinite(value):
        return False
    rounded = round(value * 100) / 100
    return abs(value - rounded) < CENTS_EPSILON


def is_zero_time(ts: datetime | None) -> bool:
    if ts is None:
        return True
    if ts.tzinfo is None:
        return ts == datetime.min
    return ts == ZERO_TIME


def _nested(section: str, errors: Rules) -> Rules:
    for err in errors:
        yield err.within(section)


def _record_errors(record: DiscoveryRecord, expected: DiscoveryKind) -> Rules:
    if record.kind != expected:
        yield ValidationError("kind", f"must be '{expected}' for {expected} metadata")
    if not is_valid_venue(record.venue_id):
        yield ValidationError("venue_id", "invalid venue ID")
    if not record.event_id:
        yield ValidationError("event_id", "required field is empty")
    if not record.title:
        yield ValidationError("title", "required field is empty")
    if record.active is None:
        yield ValidationError("active", "required field is missing")
    if record.closed is None:
        yield ValidationError("closed", "required field is missing")
    if is_zero_time(record.discovered_at):
        yield ValidationError("discovered_at", "required field is zero")
    if is_zero_time(record.last_seen):
        yield ValidationError("last_seen", "required field is zero")


def event_metadata_errors(record: EventMetadata) -> Rules:
    yield from _record_errors(record, DiscoveryKind.EVENT)


def series_metadata_errors(record: SeriesMetadata) -> Rules:
    yield from _record_errors(record, DiscoveryKind.SERIES)
    series_data = getattr(record, "series_data", None)
    if series_data is not None:
        yield from _nested("series_data", series_data_errors(series_data))


def series_data_errors(data: SeriesData) -> Rules:
    if data.financial is not None:
        yield from _nested("financial", financial_errors(data.financial))
    if data.contract is not None:
        yield from _nested("contract", contract_errors(data.contract))


def financial_errors(data: Financial) -> Rules:
    for name in _USD_FIELDS:
        value = getattr(data, name)
        if value is None:
            continue
        if value < 0:
            yield ValidationError(name, "must be >= 0")
        elif not is_valid_cents_precision(value):
            yield ValidationError(name, "must be a multiple of 0.01")
    for name in _CONTRACT_COUNT_FIELDS:
        value = getattr(data, name)
        if value is not None and value < 0:
            yield ValidationError(name, "must be >= 0")
    if data.score is not None:
        if not math.isfinite(data.score):
            yield ValidationError("score", "must be a finite number")
        elif data.score < 0:
            yield ValidationError("score", "must be >= 0")
    if data.currency is not None and data.currency != Currency.USD:
        yield ValidationError("currency", f"must be '{Currency.USD}'")


def settlement_source_errors(source: SettlementSource) -> Rules:
    if not source.name:
        yield ValidationError("name", "required field is empty")


def contract_errors(data: Contract) -> Rules:
    for i, source in enumerate(data.settlement_sources or []):
        yield from _nested(f"settlement_sources[{i}]", settlement_source_errors(source))


def discovery_meta_errors(meta: DiscoveryMeta) -> Rules:
    if not meta.batch_id:
        yield ValidationError("batch_id", "required field is empty")
    if meta.batch_sequence < 1:
        yield ValidationError("batch_sequence", "must be >= 1")
    if meta.batch_total_count < 1:
        yield ValidationError("batch_total_count", "must be >= 1")
    if not meta.discovery_run_id:
        yield ValidationError("discovery_run_id", "required field is empty")


def _payload_errors(
    payload: EventDiscoveryPayload | SeriesDiscoveryPayload,
    record_rules: Callable[[Any], Rules],
) -> Rules:
    yield from _nested("event", record_rules(payload.event))
    if not payload.event_id:
        yield ValidationError("event_id", "required field is empty")
    if not is_valid_event_type(payload.event_type):
        yield ValidationError("event_type", "invalid event type")
    if is_zero_time(payload.timestamp):
        yield ValidationError("timestamp", "required field is zero")
    if not is_valid_venue(payload.venue_id):
        yield ValidationError("venue_id", "invalid venue ID")
    elif payload.venue_id != payload.event.venue_id:
        yield ValidationError("venue_id", "must equal the embedded record's venue_id")
    if payload.discovery_meta is not None:
        yield from _nested("discovery_meta", discovery_meta_errors(payload.discovery_meta))


def event_payload_errors(payload: EventDiscoveryPayload) -> Rules:
    yield from _payload_errors(payload, event_metadata_errors)


def series_payload_errors(payload: SeriesDiscoveryPayload) -> Rules:
    yield from _payload_errors(payload, series_metadata_errors)


RULES: dict[type, Callable[[Any], Rules]] = {
    EventMetadata: event_metadata_errors,
    SeriesMetadata: series_metadata_errors,
    EventDiscoveryPayload: event_payload_errors,
    SeriesDiscoveryPayload: series_payload_errors,
    DiscoveryMeta: discovery_meta_errors,
    SeriesData: series_data_errors,
    Financial: financial_errors,
    Contract: contract_errors,
    SettlementSource: settlement_source_errors,
}


def rules_for(record: Any) -> Rules:
    """Rule generator for record, chosen by its type."""
    for cls in type(record).__mro__:
        rule = RULES.get(cls)
        if rule is not None:
            return rule(record)
    raise TypeError(f"no validation rules for {type(record).__name__}")
