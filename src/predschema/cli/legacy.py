"""Legacy envelope conversion: RawEnvelope <-> raw.v0."""

from __future__ import annotations

from pathlib import Path

import typer

from predschema.cli.inputs import dump, load_json
from predschema.codec import from_dict, to_dict
from predschema.errors import SchemaError
from predschema.models import RawEnvelope, RawEnvelopeV0

app = typer.Typer(help="Convert between legacy RawEnvelope and raw.v0 envelopes")


@app.command("to-v0")
def to_v0(
    path: Path = typer.Argument(..., help="JSON file with a legacy envelope"),
) -> None:
    """Convert a legacy envelope to raw.v0 (payload must be a JSON object)."""
    try:
        env = from_dict(load_json(path), RawEnvelope)
        typer.echo(dump(to_dict(env.to_raw_envelope_v0())))
    except SchemaError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)


@app.command("from-v0")
def from_v0(
    path: Path = typer.Argument(..., help="JSON file with a raw.v0 envelope"),
) -> None:
    """Convert a raw.v0 envelope back to the legacy shape."""
    try:
        env = from_dict(load_json(path), RawEnvelopeV0)
        typer.echo(dump(to_dict(RawEnvelope.from_raw_envelope_v0(env))))
    except SchemaError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
