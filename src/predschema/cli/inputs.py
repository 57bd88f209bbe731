"""Reading JSON input files for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer


def load_json(path: Path) -> Any:
    """Decode a JSON file; exits with status 1 on unreadable or malformed input."""
    try:
        with open(path, "rb") as f:
            return json.load(f)
    except OSError as e:
        typer.echo(f"Cannot read {path}: {e}", err=True)
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        typer.echo(f"Malformed JSON in {path}: {e}", err=True)
        raise typer.Exit(1)


def as_records(data: Any) -> list[Any]:
    """A file holds either one record (object) or many (array)."""
    return data if isinstance(data, list) else [data]


def dump(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False)
