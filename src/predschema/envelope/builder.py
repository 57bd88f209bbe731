"""Payload Envelope Builder - wraps canonical records into discovery payloads.

Structural assembly only: nothing here validates. Callers validate the
embedded record before or after wrapping.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Iterable

from predschema.models import (
    DiscoveryMeta,
    DiscoveryPayload,
    EventDiscoveryPayload,
    EventMetadata,
    SeriesDiscoveryPayload,
    SeriesMetadata,
)

DEFAULT_ID_PREFIX = "evt_"


def new_message_id(prefix: str = DEFAULT_ID_PREFIX) -> str:
    """Fresh discovery-message id. Unrelated to the record's domain event_id."""
    return f"{prefix}{uuid.uuid4().hex}"


def build_payload(
    record: EventMetadata | SeriesMetadata,
    event_type: str,
    message_id: str,
    discovery_meta: DiscoveryMeta | None = None,
    now: datetime | None = None,
) -> DiscoveryPayload:
    """Wrap record in the payload variant matching its type.

    timestamp is the build time; venue_id is copied from the record.
    """
    fields = dict(
        event_id=message_id,
        event_type=str(event_type),
        timestamp=now or datetime.now(timezone.utc),
        venue_id=record.venue_id,
        discovery_meta=discovery_meta,
    )
    if isinstance(record, SeriesMetadata):
        return SeriesDiscoveryPayload(event=record, **fields)
    if isinstance(record, EventMetadata):
        return EventDiscoveryPayload(event=record, **fields)
    raise TypeError(f"cannot build a discovery payload for {type(record).__name__}")


def build_batch(
    records: Iterable[EventMetadata | SeriesMetadata],
    event_type: str,
    discovery_run_id: str,
    batch_id: str | None = None,
    now: datetime | None = None,
    id_prefix: str = DEFAULT_ID_PREFIX,
) -> list[DiscoveryPayload]:
    """Wrap records as one batch: sequences 1..N, total N, shared batch_id and run id."""
    records = list(records)
    batch_id = batch_id or f"batch_{uuid.uuid4().hex}"
    now = now or datetime.now(timezone.utc)
    payloads = []
    for seq, record in enumerate(records, start=1):
        meta = DiscoveryMeta(
            batch_id=batch_id,
            batch_sequence=seq,
            batch_total_count=len(records),
            discovery_run_id=discovery_run_id,
        )
        payloads.append(build_payload(record, event_type, new_message_id(id_prefix), meta, now))
    return payloads
