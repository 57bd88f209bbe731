"""Canonical discovery schema (Pydantic) - metadata records, payloads, raw envelopes."""

from predschema.models.common import (
    Contract,
    Creators,
    Financial,
    Relationships,
    SchemaModel,
    SeriesData,
    SettlementSource,
    Status,
    Timestamps,
)
from predschema.models.enums import Currency, DiscoveryKind, EventType, Stream, VenueID
from predschema.models.legacy import RawEnvelope, RawEnvelopeV0, new_raw_envelope
from predschema.models.metadata import DiscoveryRecord, EventMetadata, SeriesMetadata
from predschema.models.payloads import (
    DiscoveryMeta,
    DiscoveryPayload,
    EventDiscoveryPayload,
    SeriesDiscoveryPayload,
)

__all__ = [
    "SchemaModel",
    "DiscoveryKind",
    "EventType",
    "VenueID",
    "Currency",
    "Stream",
    "Relationships",
    "Financial",
    "Status",
    "Contract",
    "SettlementSource",
    "Timestamps",
    "Creators",
    "SeriesData",
    "DiscoveryRecord",
    "EventMetadata",
    "SeriesMetadata",
    "DiscoveryMeta",
    "DiscoveryPayload",
    "EventDiscoveryPayload",
    "SeriesDiscoveryPayload",
    "RawEnvelope",
    "RawEnvelopeV0",
    "new_raw_envelope",
]
