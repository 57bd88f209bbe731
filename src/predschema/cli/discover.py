"""Discover command: one discovery run over a file of venue-native records."""

from __future__ import annotations

import uuid
from pathlib import Path

import typer

from predschema.cli.inputs import as_records, dump, load_json
from predschema.envelope import stream_message
from predschema.errors import SchemaError
from predschema.models import DiscoveryKind
from predschema.models.enums import is_valid_event_type
from predschema.pipeline import run_discovery


def discover(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="JSON file with venue-native records"),
    venue: str = typer.Option(..., "--venue", "-v", help="Venue id (polymarket, kalshi)"),
    kind: str = typer.Option(DiscoveryKind.SERIES.value, "--kind", "-k", help="series or event"),
    run_id: str | None = typer.Option(
        None, "--run-id", "-r", help="Discovery run id (default: generated)"
    ),
    event_type: str | None = typer.Option(
        None, "--event-type", "-t", help="discovered, updated or expired (default from config)"
    ),
    page: int | None = typer.Option(
        None, "--page", help="Venue listing page number to stamp into envelope metadata"
    ),
) -> None:
    """Map, validate and batch records; print stream messages as JSON lines."""
    settings = ctx.obj["settings"]
    if kind not in (DiscoveryKind.SERIES, DiscoveryKind.EVENT):
        typer.echo(f"Unknown kind: {kind}. Choose from: series, event", err=True)
        raise typer.Exit(1)
    event_type = event_type or settings.default_event_type
    if not is_valid_event_type(event_type):
        typer.echo(f"Unknown event type: {event_type}", err=True)
        raise typer.Exit(1)
    run_id = run_id or f"run_{uuid.uuid4().hex}"
    records = [r for r in as_records(load_json(path)) if isinstance(r, dict)]
    try:
        result = run_discovery(venue, kind, records, event_type, run_id, settings=settings)
    except SchemaError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    for payload in result.payloads:
        typer.echo(dump(stream_message(payload, discovery_page=page)))
    typer.echo(
        f"Run {run_id}: {result.accepted_count} published, {result.rejected_count} rejected",
        err=True,
    )
    for _raw, err in result.rejected:
        typer.echo(f"  rejected: {err}", err=True)
