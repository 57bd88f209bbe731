"""Shared venue-native records and canonical fixtures."""

from datetime import datetime, timezone

import pytest

from predschema.models import (
    Contract,
    EventMetadata,
    Financial,
    Relationships,
    SeriesData,
    SeriesMetadata,
    SettlementSource,
)

NOW = datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def polymarket_series_raw():
    return {
        "id": "10244",
        "title": "Concacaf",
        "ticker": "CONCACAF",
        "slug": "concacaf",
        "seriesType": "single",
        "recurrence": "daily",
        "volume24hr": 125000.50,
        "volume": 2500000.75,
        "active": True,
        "closed": False,
        "archived": False,
        "new": False,
        "featured": True,
        "created_at": "2025-09-03T03:07:56Z",
        "updated_at": "2025-11-03T21:01:11Z",
        "events": [{"id": "58871"}, {"id": "58872"}],
        "tags": [{"id": "1", "label": "Sports", "slug": "sports"}, {"id": "2", "label": "Soccer"}],
        "cgAssetName": "concacaf",
    }


@pytest.fixture
def polymarket_event_raw():
    return {
        "id": "58871",
        "title": "Panama vs. Jamaica",
        "description": "Concacaf qualifier, 90 minutes plus stoppage time.",
        "category": "Sports",
        "active": True,
        "closed": False,
        "startDate": "2025-11-13T23:00:00Z",
        "endDate": "2025-11-14T01:00:00Z",
        "negRisk": True,
        "volume": 15012.33,
        "series": [{"id": "10244", "title": "Concacaf"}],
        "markets": [
            {"id": "m1", "clobTokenIds": '["111", "222"]'},
            {"id": "m2", "clobTokenIds": ["333", "444"]},
        ],
        "tags": [{"label": "Soccer"}],
    }


@pytest.fixture
def kalshi_series_raw():
    return {
        "ticker": "PRES24",
        "title": "Presidential Election 2024",
        "category": "Politics",
        "frequency": "one_off",
        "tags": ["Elections", "US"],
        "active": True,
        "closed": False,
        "contract_url": "https://kalshi.com/contracts/PRES24.pdf",
        "fee_type": "quadratic",
        "fee_multiplier": 1,
        "additional_prohibitions": ["Candidates may not trade."],
        "settlement_sources": [{"name": "AP", "url": "https://ap.org"}],
        "product_metadata": {"scope": "national"},
    }


@pytest.fixture
def kalshi_event_raw():
    return {
        "event_ticker": "PRES24-DJT",
        "series_ticker": "PRES24",
        "title": "Who will win the 2024 presidential election?",
        "sub_title": "Nov 5, 2024",
        "category": "Politics",
        "mutually_exclusive": True,
        "markets": [
            {"ticker": "PRES24-DJT-Y", "status": "settled"},
            {"ticker": "PRES24-KH-Y", "status": "finalized"},
        ],
    }


@pytest.fixture
def valid_event():
    return EventMetadata(
        kind="event",
        venue_id="polymarket",
        event_id="58871",
        title="Panama vs. Jamaica",
        active=True,
        closed=False,
        discovered_at=NOW,
        last_seen=NOW,
    )


@pytest.fixture
def valid_series():
    return SeriesMetadata(
        kind="series",
        venue_id="kalshi",
        event_id="PRES24",
        title="Presidential Election 2024",
        active=True,
        closed=False,
        child_event_ids=["PRES24-DJT"],
        relationships=Relationships(event_ids=["PRES24-DJT"]),
        discovered_at=NOW,
        last_seen=NOW,
        series_data=SeriesData(
            ticker="PRES24",
            financial=Financial(volume_24h_usd=10.25, currency="USD"),
            contract=Contract(settlement_sources=[SettlementSource(name="AP", url="https://ap.org")]),
        ),
    )
