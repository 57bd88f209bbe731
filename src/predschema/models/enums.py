"""Closed vocabularies of the discovery schema (kinds, event types, venues, currency, streams)."""

from __future__ import annotations

from enum import StrEnum


class DiscoveryKind(StrEnum):
    """Discriminator between event and series metadata."""

    EVENT = "event"
    SERIES = "series"


class EventType(StrEnum):
    """Type of a discovery message."""

    DISCOVERED = "discovered"
    UPDATED = "updated"
    EXPIRED = "expired"


class VenueID(StrEnum):
    """Supported prediction market venues. Extend by code change only."""

    POLYMARKET = "polymarket"
    KALSHI = "kalshi"


class Currency(StrEnum):
    USD = "USD"


class Stream(StrEnum):
    """Logical streams of the raw envelope, including the discovery streams."""

    ORDERBOOK = "orderbook"
    TRADES = "trades"
    STATUS = "status"
    EVENT_DISCOVERY = "event_discovery"
    SERIES_DISCOVERY = "series_discovery"
    CATEGORY_DISCOVERY = "category_discovery"


VALID_VENUES = frozenset(v.value for v in VenueID)
VALID_EVENT_TYPES = frozenset(t.value for t in EventType)


def is_valid_venue(venue_id: str | None) -> bool:
    return venue_id in VALID_VENUES


def is_valid_event_type(event_type: str | None) -> bool:
    return event_type in VALID_EVENT_TYPES
