"""Polymarket Gamma API series/event records -> canonical SeriesMetadata / EventMetadata."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from predschema.mapping.base import VenueMapper
from predschema.mapping.fields import (
    extra_subset,
    non_empty,
    opt_bool,
    opt_float,
    opt_str,
    parse_rfc3339,
    pick,
    str_list,
)
from predschema.models import (
    Creators,
    Currency,
    DiscoveryKind,
    EventMetadata,
    Financial,
    Relationships,
    SeriesData,
    SeriesMetadata,
    Status,
    Timestamps,
    VenueID,
)

# Gamma fields with no canonical home, passed through as extra_metadata.
SERIES_EXTRA_KEYS = ("pythTokenID", "cgAssetName", "templateVariables", "startDate")
EVENT_EXTRA_KEYS = (
    "slug",
    "ticker",
    "image",
    "negRisk",
    "enableOrderBook",
    "volume",
    "volume24hr",
    "liquidity",
    "createdAt",
    "updatedAt",
)


def _financial(raw: dict[str, Any]) -> Financial | None:
    values = non_empty(
        volume_24h_usd=opt_float(pick(raw, "volume24hr", "volume_24hr")),
        volume_total_usd=opt_float(raw.get("volume")),
        liquidity_total_usd=opt_float(raw.get("liquidity")),
        score=opt_float(raw.get("score")),
    )
    if not values:
        return None
    return Financial(currency=opt_str(raw.get("currency")) or Currency.USD.value, **values)


def _status(raw: dict[str, Any]) -> Status | None:
    values = non_empty(
        archived=opt_bool(raw.get("archived")),
        is_new=opt_bool(raw.get("new")),
        featured=opt_bool(raw.get("featured")),
        restricted=opt_bool(raw.get("restricted")),
        is_template=opt_bool(pick(raw, "isTemplate", "is_template")),
        competitive=opt_str(raw.get("competitive")),
        comments_enabled=opt_bool(pick(raw, "commentsEnabled", "comments_enabled")),
    )
    return Status(**values) if values else None


def _timestamps(raw: dict[str, Any]) -> Timestamps | None:
    venue = VenueID.POLYMARKET.value
    values = non_empty(
        published_at=parse_rfc3339(pick(raw, "publishedAt", "published_at"), "published_at", venue),
        created_at=parse_rfc3339(pick(raw, "createdAt", "created_at"), "created_at", venue),
        updated_at=parse_rfc3339(pick(raw, "updatedAt", "updated_at"), "updated_at", venue),
    )
    return Timestamps(**values) if values else None


def _creators(raw: dict[str, Any]) -> Creators | None:
    values = non_empty(
        created_by=opt_str(pick(raw, "createdBy", "created_by")),
        updated_by=opt_str(pick(raw, "updatedBy", "updated_by")),
    )
    return Creators(**values) if values else None


def _ids(items: Any) -> list[str] | None:
    """ids of nested Gamma objects (events of a series), in venue order."""
    if not isinstance(items, list):
        return None
    ids = [str(it["id"]) for it in items if isinstance(it, dict) and it.get("id") is not None]
    return ids or None


def _tag_labels(tags: Any) -> list[str] | None:
    """Gamma tags are objects ({id, label, slug}); older payloads send plain strings."""
    if not isinstance(tags, list):
        return None
    labels = []
    for tag in tags:
        if isinstance(tag, dict):
            label = tag.get("label") or tag.get("slug")
            if label:
                labels.append(str(label))
        elif isinstance(tag, str) and tag:
            labels.append(tag)
    return labels or None


def _instrument_ids(markets: Any) -> list[str] | None:
    """CLOB token ids of every market in the event (one per outcome side)."""
    if not isinstance(markets, list):
        return None
    token_ids: list[str] = []
    for m in markets:
        if isinstance(m, dict):
            token_ids.extend(str_list(pick(m, "clobTokenIds", "clob_token_ids")) or [])
    return token_ids or None


class PolymarketMapper(VenueMapper):
    """Gamma /series and /events records."""

    venue_id = VenueID.POLYMARKET.value

    def map_series(self, raw: dict[str, Any], now: datetime | None = None) -> SeriesMetadata:
        now = self.stamp(now)
        child_ids = _ids(raw.get("events"))
        series_data = SeriesData(
            ticker=opt_str(raw.get("ticker")),
            slug=opt_str(raw.get("slug")),
            subtitle=opt_str(raw.get("subtitle")),
            series_type=opt_str(pick(raw, "seriesType", "series_type")),
            recurrence=opt_str(raw.get("recurrence")),
            image_url=opt_str(raw.get("image")),
            icon_url=opt_str(raw.get("icon")),
            layout=opt_str(raw.get("layout")),
            financial=_financial(raw),
            status=_status(raw),
            timestamps=_timestamps(raw),
            creators=_creators(raw),
        )
        return SeriesMetadata(
            kind=DiscoveryKind.SERIES.value,
            venue_id=self.venue_id,
            event_id=str(raw.get("id") or ""),
            title=str(raw.get("title") or ""),
            description=opt_str(raw.get("description")),
            category=opt_str(raw.get("category")),
            active=opt_bool(raw.get("active")),
            closed=opt_bool(raw.get("closed")),
            tags=_tag_labels(raw.get("tags")),
            child_event_ids=child_ids,
            relationships=Relationships(event_ids=list(child_ids)) if child_ids else None,
            discovered_at=now,
            last_seen=now,
            series_data=series_data,
            extra_metadata=extra_subset(raw, SERIES_EXTRA_KEYS, self.venue_id),
        )

    def map_event(self, raw: dict[str, Any], now: datetime | None = None) -> EventMetadata:
        now = self.stamp(now)
        parents = raw.get("series")
        parent = parents[0] if isinstance(parents, list) and parents and isinstance(parents[0], dict) else {}
        parent_id = opt_str(parent.get("id"))
        instrument_ids = _instrument_ids(raw.get("markets"))
        relationships = None
        if parent_id or instrument_ids:
            relationships = Relationships(series_id=parent_id, instrument_ids=instrument_ids)
        return EventMetadata(
            kind=DiscoveryKind.EVENT.value,
            venue_id=self.venue_id,
            event_id=str(raw.get("id") or ""),
            title=str(raw.get("title") or ""),
            description=opt_str(raw.get("description")),
            category=opt_str(raw.get("category")),
            active=opt_bool(raw.get("active")),
            closed=opt_bool(raw.get("closed")),
            start_date=parse_rfc3339(pick(raw, "startDate", "start_date"), "start_date", self.venue_id),
            end_date=parse_rfc3339(pick(raw, "endDate", "end_date"), "end_date", self.venue_id),
            parent_series_id=parent_id,
            parent_series_title=opt_str(parent.get("title")),
            tags=_tag_labels(raw.get("tags")),
            relationships=relationships,
            discovered_at=now,
            last_seen=now,
            extra_metadata=extra_subset(raw, EVENT_EXTRA_KEYS, self.venue_id),
        )
