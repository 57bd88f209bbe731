"""Raw venue envelope (raw.v0) and the legacy RawEnvelope compatibility shape.

The legacy shape predates the typed envelope: same JSON field names, an untyped
payload and a free-form stream. Conversion to raw.v0 is a field-for-field copy
plus one check that the payload is a JSON object.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar

from pydantic import ConfigDict, Field

from predschema.errors import LegacyConversionError
from predschema.models.common import SchemaModel

RAW_V0_SCHEMA = "raw.v0"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_epoch_ms(ts: datetime) -> int:
    """Milliseconds since the epoch; naive datetimes are taken as UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return (ts - _EPOCH) // timedelta(milliseconds=1)


class RawEnvelopeV0(SchemaModel):
    """Raw venue data envelope from connectors."""

    model_config = ConfigDict(populate_by_name=True)

    schema_id: str = Field(RAW_V0_SCHEMA, alias="schema")
    venue_id: str
    stream: str
    instrument_native: str = ""
    partition_key: str = ""
    ts_event_ms: int = 0
    ts_ingest_ms: int = 0
    is_historical: bool | None = None
    backfill_ts_ms: int | None = None
    payload: dict[str, Any] = Field(default_factory=dict)


class RawEnvelope(SchemaModel):
    """Legacy envelope kept for older connector integrations."""

    model_config = ConfigDict(populate_by_name=True)

    always_emit: ClassVar[frozenset[str]] = frozenset({"payload"})

    schema_id: str = Field(RAW_V0_SCHEMA, alias="schema")
    venue_id: str = ""
    stream: str = ""
    instrument_native: str = ""
    partition_key: str = ""
    ts_event_ms: int = 0
    ts_ingest_ms: int = 0
    is_historical: bool | None = None
    backfill_ts_ms: int | None = None
    payload: Any = None

    def to_raw_envelope_v0(self) -> RawEnvelopeV0:
        """Convert to the typed raw.v0 envelope. The payload must be a JSON object."""
        if not isinstance(self.payload, dict):
            raise LegacyConversionError(
                f"legacy payload must be a JSON object, got {type(self.payload).__name__}"
            )
        return RawEnvelopeV0(
            schema_id=RAW_V0_SCHEMA,
            venue_id=self.venue_id,
            stream=self.stream,
            instrument_native=self.instrument_native,
            partition_key=self.partition_key,
            ts_event_ms=self.ts_event_ms,
            ts_ingest_ms=self.ts_ingest_ms,
            is_historical=self.is_historical,
            backfill_ts_ms=self.backfill_ts_ms,
            payload=self.payload,
        )

    @classmethod
    def from_raw_envelope_v0(cls, env: RawEnvelopeV0) -> RawEnvelope:
        return cls(
            schema_id=env.schema_id,
            venue_id=env.venue_id,
            stream=env.stream,
            instrument_native=env.instrument_native,
            partition_key=env.partition_key,
            ts_event_ms=env.ts_event_ms,
            ts_ingest_ms=env.ts_ingest_ms,
            is_historical=env.is_historical,
            backfill_ts_ms=env.backfill_ts_ms,
            payload=env.payload,
        )


def new_raw_envelope(
    venue_id: str,
    stream: str,
    instrument: str,
    event_ts: datetime,
    payload: Any,
    now: datetime | None = None,
) -> RawEnvelope:
    """Build a legacy envelope; partition_key is "<venue>:<instrument>", ingest time is now."""
    now = now or datetime.now(timezone.utc)
    return RawEnvelope(
        schema_id=RAW_V0_SCHEMA,
        venue_id=venue_id,
        stream=stream,
        instrument_native=instrument,
        partition_key=f"{venue_id}:{instrument}",
        ts_event_ms=to_epoch_ms(event_ts),
        ts_ingest_ms=to_epoch_ms(now),
        payload=payload,
    )
