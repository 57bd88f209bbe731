"""Raw discovery envelopes as published on the event_discovery / series_discovery streams."""

from __future__ import annotations

from typing import Any

from predschema.codec import to_dict
from predschema.models import DiscoveryPayload, SeriesDiscoveryPayload, Stream

RAW_EVENTS_SCHEMA = "raw.events.v0"
RAW_SERIES_SCHEMA = "raw.series.v0"


def stream_for(payload: DiscoveryPayload) -> Stream:
    if isinstance(payload, SeriesDiscoveryPayload):
        return Stream.SERIES_DISCOVERY
    return Stream.EVENT_DISCOVERY


def stream_message(payload: DiscoveryPayload, discovery_page: int | None = None) -> dict[str, Any]:
    """{"envelope": {...}, "payload": {...}} for the bus producer.

    The envelope repeats the payload's venue and timestamp; metadata carries the
    discovery timestamp and, for paginated venue listings, the page number.
    """
    body = to_dict(payload)
    metadata: dict[str, Any] = {"discovery_timestamp": body.get("timestamp")}
    if discovery_page is not None:
        metadata["discovery_page"] = discovery_page
    is_series = isinstance(payload, SeriesDiscoveryPayload)
    return {
        "envelope": {
            "schema": RAW_SERIES_SCHEMA if is_series else RAW_EVENTS_SCHEMA,
            "stream": stream_for(payload).value,
            "timestamp": body.get("timestamp"),
            "venue_id": payload.venue_id,
            "metadata": metadata,
        },
        "payload": body,
    }
