"""Validate command: check canonical records or discovery payloads from a JSON file."""

from __future__ import annotations

from pathlib import Path

import typer

from predschema.cli.inputs import as_records, load_json
from predschema.codec import from_dict
from predschema.errors import PayloadParseError, ValidationError
from predschema.models import (
    EventDiscoveryPayload,
    EventMetadata,
    SeriesDiscoveryPayload,
    SeriesMetadata,
)
from predschema.validation import check_relationships, collect_errors, validate

MODEL_KINDS = {
    "event": EventMetadata,
    "series": SeriesMetadata,
    "event-payload": EventDiscoveryPayload,
    "series-payload": SeriesDiscoveryPayload,
}


def _label(obj, index: int) -> str:
    return getattr(obj, "event_id", "") or f"#{index}"


def validate_records(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="JSON file with one object or an array of them"),
    kind: str = typer.Option(
        "event", "--kind", "-k", help="event, series, event-payload or series-payload"
    ),
    all_errors: bool = typer.Option(
        False, "--all", help="Report every violation per record instead of the first"
    ),
) -> None:
    """Validate each object; prints one line per record and exits 1 if any fails."""
    model_cls = MODEL_KINDS.get(kind)
    if model_cls is None:
        typer.echo(f"Unknown kind: {kind}. Choose from: {', '.join(MODEL_KINDS)}", err=True)
        raise typer.Exit(1)
    settings = ctx.obj["settings"]
    failed = 0
    for i, raw in enumerate(as_records(load_json(path))):
        try:
            obj = from_dict(raw, model_cls)
        except PayloadParseError as e:
            failed += 1
            typer.echo(f"INVALID #{i}: {e}")
            continue
        if all_errors:
            errors = collect_errors(obj)
        else:
            try:
                validate(obj)
                errors = []
            except ValidationError as e:
                errors = [e]
        if not errors and settings.check_relationships and kind in ("event", "series"):
            try:
                check_relationships(obj)
            except ValidationError as e:
                errors = [e]
        if errors:
            failed += 1
            typer.echo(f"INVALID {_label(obj, i)}")
            for err in errors:
                typer.echo(f"  {err.path}: {err.message}")
        else:
            typer.echo(f"OK {_label(obj, i)}")
    if failed:
        typer.echo(f"{failed} invalid record(s)", err=True)
        raise typer.Exit(1)
