"""EventMetadata, SeriesMetadata - canonical discovery records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Self

from pydantic import JsonValue

from predschema.models.common import Relationships, SchemaModel, SeriesData


class DiscoveryRecord(SchemaModel):
    """Fields shared by event and series metadata.

    Required fields default to empty / None so that an incomplete record still
    parses; the validator is what rejects it. ``active`` and ``closed`` are
    tri-state: None means the venue never reported the flag.
    """

    always_emit: ClassVar[frozenset[str]] = frozenset({"active", "closed"})

    kind: str = ""
    venue_id: str = ""
    event_id: str = ""
    title: str = ""
    description: str | None = None
    category: str | None = None
    active: bool | None = None
    closed: bool | None = None
    tags: list[str] | None = None
    relationships: Relationships | None = None
    discovered_at: datetime | None = None
    last_seen: datetime | None = None
    extra_metadata: dict[str, JsonValue] | None = None

    @property
    def identity(self) -> tuple[str, str]:
        """Venue-scoped identity (venue_id, event_id)."""
        return (self.venue_id, self.event_id)

    def seen_again(self, now: datetime | None = None) -> Self:
        """Return a copy with last_seen moved to now (another sighting of the same record)."""
        return self.model_copy(update={"last_seen": now or datetime.now(timezone.utc)})


class EventMetadata(DiscoveryRecord):
    """One prediction market event at one venue."""

    start_date: datetime | None = None
    end_date: datetime | None = None
    parent_series_id: str | None = None
    parent_series_title: str | None = None


class SeriesMetadata(DiscoveryRecord):
    """A collection of related events at one venue (e.g. a recurring tournament)."""

    child_event_ids: list[str] | None = None
    series_data: SeriesData | None = None
