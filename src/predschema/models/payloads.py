"""DiscoveryMeta and the event/series discovery payload envelopes."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from predschema.models.common import SchemaModel
from predschema.models.metadata import EventMetadata, SeriesMetadata


class DiscoveryMeta(SchemaModel):
    """Batch / run bookkeeping for one discovery message. Optional on payloads."""

    batch_id: str = ""
    batch_sequence: int = 0
    batch_total_count: int = 0
    discovery_run_id: str = ""


class EventDiscoveryPayload(SchemaModel):
    """Message emitted on the event_discovery stream.

    ``event_id`` here is the message id, not the embedded record's event_id.
    """

    event: EventMetadata = Field(default_factory=EventMetadata)
    event_id: str = ""
    event_type: str = ""
    timestamp: datetime | None = None
    venue_id: str = ""
    discovery_meta: DiscoveryMeta | None = None


class SeriesDiscoveryPayload(SchemaModel):
    """Message emitted on the series_discovery stream."""

    event: SeriesMetadata = Field(default_factory=SeriesMetadata)
    event_id: str = ""
    event_type: str = ""
    timestamp: datetime | None = None
    venue_id: str = ""
    discovery_meta: DiscoveryMeta | None = None


DiscoveryPayload = EventDiscoveryPayload | SeriesDiscoveryPayload
