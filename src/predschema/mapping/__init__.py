"""Venue mappers: venue-native discovery records -> canonical metadata.

Venues are a small closed set, so dispatch is a table keyed by VenueID rather
than a plugin registry. Adding a venue means adding a VenueMapper subclass and
an entry in MAPPERS.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from predschema.errors import UnknownVenueError
from predschema.mapping.base import VenueMapper
from predschema.mapping.kalshi import KalshiMapper
from predschema.mapping.polymarket import PolymarketMapper
from predschema.models import EventMetadata, SeriesMetadata, VenueID

MAPPERS: dict[str, VenueMapper] = {
    VenueID.POLYMARKET: PolymarketMapper(),
    VenueID.KALSHI: KalshiMapper(),
}

__all__ = [
    "MAPPERS",
    "VenueMapper",
    "PolymarketMapper",
    "KalshiMapper",
    "get_mapper",
    "map_to_canonical",
]


def get_mapper(venue_id: str) -> VenueMapper:
    try:
        return MAPPERS[venue_id]
    except KeyError:
        raise UnknownVenueError(venue_id) from None


def map_to_canonical(
    venue_id: str,
    kind: str,
    raw: dict[str, Any],
    now: datetime | None = None,
) -> SeriesMetadata | EventMetadata:
    """Map one native record of the given kind ("series" / "event") from venue_id."""
    return get_mapper(venue_id).map(kind, raw, now)
