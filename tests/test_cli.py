"""CLI tests (Typer CliRunner)."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import predschema.cli.app as cli_app
from predschema.cli.app import app

runner = CliRunner()

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli_app, "configure_logging", lambda settings: None)


def _json_lines(output):
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return str(path)


def test_map_polymarket_series(tmp_path, polymarket_series_raw):
    path = _write(tmp_path, "series.json", polymarket_series_raw)
    result = runner.invoke(app, ["map", path, "--venue", "polymarket", "--kind", "series"])
    assert result.exit_code == 0, result.output
    [record] = _json_lines(result.stdout)
    assert record["event_id"] == "10244"
    assert record["series_data"]["financial"]["volume_24h_usd"] == 125000.5


def test_map_array(tmp_path, kalshi_event_raw):
    path = _write(tmp_path, "events.json", [kalshi_event_raw, dict(kalshi_event_raw, event_ticker="E2")])
    result = runner.invoke(app, ["map", path, "-v", "kalshi", "-k", "event"])
    assert result.exit_code == 0, result.output
    assert [r["event_id"] for r in _json_lines(result.stdout)] == ["PRES24-DJT", "E2"]


def test_map_unknown_venue(tmp_path, kalshi_event_raw):
    path = _write(tmp_path, "e.json", kalshi_event_raw)
    result = runner.invoke(app, ["map", path, "--venue", "betfair", "--kind", "event"])
    assert result.exit_code == 1
    assert "betfair" in result.output


def test_map_malformed_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    result = runner.invoke(app, ["map", str(path), "--venue", "kalshi"])
    assert result.exit_code == 1
    assert "Malformed JSON" in result.output


def test_validate_ok(tmp_path, valid_event):
    path = _write(tmp_path, "event.json", valid_event.model_dump(mode="json"))
    result = runner.invoke(app, ["validate", path, "--kind", "event"])
    assert result.exit_code == 0, result.output
    assert "OK 58871" in result.output


def test_validate_reports_all_errors(tmp_path, valid_series):
    data = valid_series.model_dump(mode="json")
    data["title"] = ""
    data["series_data"]["financial"]["volume_24h_usd"] = 123.456
    path = _write(tmp_path, "series.json", [data])
    result = runner.invoke(app, ["validate", path, "--kind", "series", "--all"])
    assert result.exit_code == 1
    assert "INVALID PRES24" in result.output
    assert "title: required field is empty" in result.output
    assert "series_data.financial.volume_24h_usd: must be a multiple of 0.01" in result.output


def test_validate_first_error_only(tmp_path, valid_series):
    data = valid_series.model_dump(mode="json")
    data["title"] = ""
    data["active"] = None
    path = _write(tmp_path, "series.json", data)
    result = runner.invoke(app, ["validate", path, "--kind", "series"])
    assert result.exit_code == 1
    assert "title:" in result.output
    assert "active:" not in result.output


def test_validate_parse_failure(tmp_path):
    path = _write(tmp_path, "p.json", {"event": "not an object"})
    result = runner.invoke(app, ["validate", path, "--kind", "event-payload"])
    assert result.exit_code == 1
    assert "INVALID #0" in result.output


def test_validate_unknown_kind(tmp_path):
    path = _write(tmp_path, "x.json", {})
    result = runner.invoke(app, ["validate", path, "--kind", "category"])
    assert result.exit_code == 1


def test_validate_dev_profile_checks_relationships(tmp_path, valid_series):
    data = valid_series.model_dump(mode="json")
    data["child_event_ids"] = ["OTHER"]
    path = _write(tmp_path, "series.json", data)
    assert runner.invoke(app, ["validate", path, "--kind", "series"]).exit_code == 0
    result = runner.invoke(
        app, ["--config-dir", str(CONFIG_DIR), "--profile", "dev", "validate", path, "--kind", "series"]
    )
    assert result.exit_code == 1
    assert "child_event_ids" in result.output


def test_discover_prints_stream_messages(tmp_path, polymarket_series_raw):
    bad = dict(polymarket_series_raw, id="10245", title="")
    path = _write(tmp_path, "series.json", [polymarket_series_raw, bad])
    result = runner.invoke(
        app,
        ["discover", path, "--venue", "polymarket", "--kind", "series", "--run-id", "run-9", "--page", "2"],
    )
    assert result.exit_code == 0, result.output
    [msg] = _json_lines(result.stdout)
    assert msg["envelope"]["stream"] == "series_discovery"
    assert msg["envelope"]["metadata"]["discovery_page"] == 2
    assert msg["payload"]["event_type"] == "discovered"
    assert msg["payload"]["discovery_meta"]["discovery_run_id"] == "run-9"
    assert "1 published, 1 rejected" in result.output


def test_discover_bad_event_type(tmp_path, kalshi_event_raw):
    path = _write(tmp_path, "e.json", kalshi_event_raw)
    result = runner.invoke(app, ["discover", path, "-v", "kalshi", "-k", "event", "-t", "created"])
    assert result.exit_code == 1


def test_legacy_roundtrip(tmp_path):
    legacy = {
        "schema": "raw.v0",
        "venue_id": "kalshi",
        "stream": "trades",
        "instrument_native": "PRES24-DJT-Y",
        "partition_key": "kalshi:PRES24-DJT-Y",
        "ts_event_ms": 1,
        "ts_ingest_ms": 2,
        "payload": {"price": 55},
    }
    result = runner.invoke(app, ["legacy", "to-v0", _write(tmp_path, "legacy.json", legacy)])
    assert result.exit_code == 0, result.output
    [v0] = _json_lines(result.stdout)
    assert v0 == legacy
    result = runner.invoke(app, ["legacy", "from-v0", _write(tmp_path, "v0.json", v0)])
    assert result.exit_code == 0, result.output
    assert _json_lines(result.stdout) == [legacy]


def test_legacy_non_object_payload(tmp_path):
    path = _write(tmp_path, "legacy.json", {"venue_id": "kalshi", "stream": "trades", "payload": [1]})
    result = runner.invoke(app, ["legacy", "to-v0", path])
    assert result.exit_code == 1
    assert "JSON object" in result.output
