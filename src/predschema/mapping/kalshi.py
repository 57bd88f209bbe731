"""Kalshi trade API series/event records -> canonical SeriesMetadata / EventMetadata."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from predschema.mapping.base import VenueMapper
from predschema.mapping.fields import (
    extra_subset,
    non_empty,
    opt_bool,
    opt_float,
    opt_int,
    opt_str,
    parse_rfc3339,
    pick,
    str_list,
)
from predschema.models import (
    Contract,
    Currency,
    DiscoveryKind,
    EventMetadata,
    Financial,
    Relationships,
    SeriesData,
    SeriesMetadata,
    SettlementSource,
    Timestamps,
    VenueID,
)

SERIES_EXTRA_KEYS = ("product_metadata",)
EVENT_EXTRA_KEYS = (
    "mutually_exclusive",
    "strike_date",
    "strike_period",
    "collateral_return_type",
    "available_on_brokers",
)

OPEN_STATUSES = frozenset({"open", "active"})
CLOSED_STATUSES = frozenset({"closed", "settled", "finalized", "determined"})


def _settlement_sources(value: Any) -> list[SettlementSource] | None:
    if not isinstance(value, list):
        return None
    sources = [
        SettlementSource(name=str(s.get("name") or ""), url=opt_str(s.get("url")))
        for s in value
        if isinstance(s, dict)
    ]
    return sources or None


def _contract(raw: dict[str, Any]) -> Contract | None:
    values = non_empty(
        contract_url=opt_str(raw.get("contract_url")),
        contract_terms_url=opt_str(raw.get("contract_terms_url")),
        fee_type=opt_str(raw.get("fee_type")),
        fee_multiplier=opt_float(raw.get("fee_multiplier")),
        additional_prohibitions=str_list(raw.get("additional_prohibitions")),
        settlement_sources=_settlement_sources(raw.get("settlement_sources")),
    )
    return Contract(**values) if values else None


def _financial(raw: dict[str, Any]) -> Financial | None:
    values = non_empty(
        volume_24h_contracts=opt_int(raw.get("volume_24h")),
        volume_total_contracts=opt_int(raw.get("volume")),
    )
    if not values:
        return None
    return Financial(currency=opt_str(raw.get("currency")) or Currency.USD.value, **values)


def _timestamps(raw: dict[str, Any]) -> Timestamps | None:
    venue = VenueID.KALSHI.value
    values = non_empty(
        created_at=parse_rfc3339(raw.get("created_at"), "created_at", venue),
        # newer series responses report last_updated_ts instead of updated_at
        updated_at=parse_rfc3339(pick(raw, "updated_at", "last_updated_ts"), "updated_at", venue),
    )
    return Timestamps(**values) if values else None


def _event_flags(raw: dict[str, Any]) -> tuple[bool | None, bool | None]:
    """active/closed as reported, else derived from the event or market statuses."""
    active = opt_bool(raw.get("active"))
    closed = opt_bool(raw.get("closed"))
    if active is not None and closed is not None:
        return active, closed
    statuses = []
    if raw.get("status"):
        statuses = [str(raw["status"]).lower()]
    elif isinstance(raw.get("markets"), list):
        statuses = [
            str(m["status"]).lower() for m in raw["markets"] if isinstance(m, dict) and m.get("status")
        ]
    if not statuses:
        return active, closed
    if active is None:
        active = any(s in OPEN_STATUSES for s in statuses)
    if closed is None:
        closed = all(s in CLOSED_STATUSES for s in statuses)
    return active, closed


def _market_tickers(markets: Any) -> list[str] | None:
    if not isinstance(markets, list):
        return None
    tickers = [str(m["ticker"]) for m in markets if isinstance(m, dict) and m.get("ticker")]
    return tickers or None


class KalshiMapper(VenueMapper):
    """Kalshi /series and /events records."""

    venue_id = VenueID.KALSHI.value

    def map_series(self, raw: dict[str, Any], now: datetime | None = None) -> SeriesMetadata:
        now = self.stamp(now)
        ticker = opt_str(raw.get("ticker"))
        series_data = SeriesData(
            ticker=ticker,
            recurrence=opt_str(raw.get("frequency")),
            financial=_financial(raw),
            contract=_contract(raw),
            timestamps=_timestamps(raw),
        )
        return SeriesMetadata(
            kind=DiscoveryKind.SERIES.value,
            venue_id=self.venue_id,
            event_id=ticker or "",
            title=str(raw.get("title") or ""),
            description=opt_str(raw.get("description")),
            category=opt_str(raw.get("category")),
            active=opt_bool(raw.get("active")),
            closed=opt_bool(raw.get("closed")),
            tags=str_list(raw.get("tags")),
            discovered_at=now,
            last_seen=now,
            series_data=series_data,
            extra_metadata=extra_subset(raw, SERIES_EXTRA_KEYS, self.venue_id),
        )

    def map_event(self, raw: dict[str, Any], now: datetime | None = None) -> EventMetadata:
        now = self.stamp(now)
        series_ticker = opt_str(raw.get("series_ticker"))
        market_tickers = _market_tickers(raw.get("markets"))
        relationships = None
        if series_ticker or market_tickers:
            relationships = Relationships(series_id=series_ticker, instrument_ids=market_tickers)
        active, closed = _event_flags(raw)
        return EventMetadata(
            kind=DiscoveryKind.EVENT.value,
            venue_id=self.venue_id,
            event_id=str(raw.get("event_ticker") or ""),
            title=str(raw.get("title") or ""),
            description=opt_str(raw.get("sub_title")),
            category=opt_str(raw.get("category")),
            active=active,
            closed=closed,
            parent_series_id=series_ticker,
            tags=str_list(raw.get("tags")),
            relationships=relationships,
            discovered_at=now,
            last_seen=now,
            extra_metadata=extra_subset(raw, EVENT_EXTRA_KEYS, self.venue_id),
        )
