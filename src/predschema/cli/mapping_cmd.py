"""Map command: venue-native JSON -> canonical metadata JSON."""

from __future__ import annotations

from pathlib import Path

import typer

from predschema.cli.inputs import as_records, dump, load_json
from predschema.codec import to_dict
from predschema.errors import SchemaError
from predschema.mapping import map_to_canonical
from predschema.models import DiscoveryKind


def map_records(
    path: Path = typer.Argument(..., help="JSON file with one native record or an array of them"),
    venue: str = typer.Option(..., "--venue", "-v", help="Venue id (polymarket, kalshi)"),
    kind: str = typer.Option(DiscoveryKind.SERIES.value, "--kind", "-k", help="series or event"),
) -> None:
    """Map venue-native series/event records and print canonical JSON, one per line."""
    if kind not in (DiscoveryKind.SERIES, DiscoveryKind.EVENT):
        typer.echo(f"Unknown kind: {kind}. Choose from: series, event", err=True)
        raise typer.Exit(1)
    records = as_records(load_json(path))
    try:
        for raw in records:
            if not isinstance(raw, dict):
                typer.echo(f"Skipping non-object record: {raw!r}", err=True)
                continue
            typer.echo(dump(to_dict(map_to_canonical(venue, kind, raw))))
    except SchemaError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
