"""Payload builder and stream envelope tests."""

import pytest

from predschema.envelope import build_batch, build_payload, new_message_id, stream_for, stream_message
from predschema.models import (
    DiscoveryMeta,
    EventDiscoveryPayload,
    Financial,
    SeriesDiscoveryPayload,
    Stream,
)
from predschema.validation import collect_errors, validate


def test_build_payload_event(valid_event, now):
    payload = build_payload(valid_event, "discovered", "evt_abc", now=now)
    assert isinstance(payload, EventDiscoveryPayload)
    assert payload.event == valid_event
    assert payload.event_id == "evt_abc"
    assert payload.venue_id == valid_event.venue_id
    assert payload.timestamp == now
    assert payload.discovery_meta is None
    validate(payload)


def test_build_payload_series(valid_series, now):
    meta = DiscoveryMeta(batch_id="b", batch_sequence=1, batch_total_count=1, discovery_run_id="r")
    payload = build_payload(valid_series, "updated", "evt_def", meta, now)
    assert isinstance(payload, SeriesDiscoveryPayload)
    assert payload.discovery_meta == meta
    validate(payload)


def test_build_payload_does_not_validate(valid_event, now):
    bad = valid_event.model_copy(update={"title": ""})
    payload = build_payload(bad, "bogus", "", now=now)
    assert [e.path for e in collect_errors(payload)] == ["event.title", "event_id", "event_type"]


def test_build_payload_rejects_other_types(now):
    with pytest.raises(TypeError):
        build_payload(Financial(), "discovered", "evt_x", now=now)


def test_new_message_id_unique():
    ids = {new_message_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(i.startswith("evt_") for i in ids)
    assert new_message_id("msg-").startswith("msg-")


def test_build_batch_sequences(valid_event, valid_series, now):
    records = [valid_event, valid_series, valid_event.model_copy(update={"event_id": "58872"})]
    payloads = build_batch(records, "discovered", "run-1", batch_id="batch-1", now=now)
    assert [p.discovery_meta.batch_sequence for p in payloads] == [1, 2, 3]
    assert {p.discovery_meta.batch_total_count for p in payloads} == {3}
    assert {p.discovery_meta.batch_id for p in payloads} == {"batch-1"}
    assert {p.discovery_meta.discovery_run_id for p in payloads} == {"run-1"}
    assert len({p.event_id for p in payloads}) == 3
    assert isinstance(payloads[1], SeriesDiscoveryPayload)
    for p in payloads:
        validate(p)


def test_build_batch_generates_batch_id(valid_event, now):
    payloads = build_batch([valid_event], "discovered", "run-1", now=now, id_prefix="x_")
    assert payloads[0].discovery_meta.batch_id.startswith("batch_")
    assert payloads[0].event_id.startswith("x_")


def test_build_batch_empty():
    assert build_batch([], "discovered", "run-1") == []


def test_stream_message_event(valid_event, now):
    payload = build_payload(valid_event, "discovered", "evt_1", now=now)
    msg = stream_message(payload, discovery_page=3)
    env = msg["envelope"]
    assert env["schema"] == "raw.events.v0"
    assert env["stream"] == "event_discovery"
    assert env["venue_id"] == "polymarket"
    assert env["timestamp"] == msg["payload"]["timestamp"]
    assert env["metadata"] == {"discovery_timestamp": env["timestamp"], "discovery_page": 3}
    assert msg["payload"]["event"]["event_id"] == "58871"
    assert stream_for(payload) is Stream.EVENT_DISCOVERY


def test_stream_message_series(valid_series, now):
    payload = build_payload(valid_series, "discovered", "evt_2", now=now)
    msg = stream_message(payload)
    assert msg["envelope"]["schema"] == "raw.series.v0"
    assert msg["envelope"]["stream"] == "series_discovery"
    assert "discovery_page" not in msg["envelope"]["metadata"]
