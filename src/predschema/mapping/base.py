"""Abstract venue mapper - one implementation per venue (Polymarket, Kalshi, ...)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

import pydantic

from predschema.errors import PayloadParseError
from predschema.models import DiscoveryKind, EventMetadata, SeriesMetadata


class VenueMapper(ABC):
    """Projects venue-native discovery records onto the canonical schema.

    Mappers are pure: no I/O, no shared state. The only venue-specific
    knowledge in the package lives in subclasses of this class.
    """

    venue_id: str = ""

    @abstractmethod
    def map_series(self, raw: dict[str, Any], now: datetime | None = None) -> SeriesMetadata:
        """Return canonical SeriesMetadata for one native series record."""
        ...

    @abstractmethod
    def map_event(self, raw: dict[str, Any], now: datetime | None = None) -> EventMetadata:
        """Return canonical EventMetadata for one native event record."""
        ...

    def map(
        self, kind: str, raw: dict[str, Any], now: datetime | None = None
    ) -> SeriesMetadata | EventMetadata:
        """Map one record of the given kind. A record the canonical types cannot hold
        raises PayloadParseError."""
        if kind == DiscoveryKind.SERIES:
            map_record = self.map_series
        elif kind == DiscoveryKind.EVENT:
            map_record = self.map_event
        else:
            raise ValueError(f"unknown discovery kind {kind!r}")
        try:
            return map_record(raw, now)
        except pydantic.ValidationError as e:
            raise PayloadParseError(f"cannot map {self.venue_id} {kind} record: {e}") from e

    @staticmethod
    def stamp(now: datetime | None) -> datetime:
        """Mapping-time clock used for discovered_at and last_seen."""
        return now or datetime.now(timezone.utc)
