"""Root CLI app - entry point and command registration."""

from pathlib import Path

import typer

from predschema.config import get_settings
from predschema.config.settings import configure_logging

app = typer.Typer(
    name="predschema",
    help="PredSchema - Canonical prediction-market discovery schema: map, validate, publish.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config_dir: Path | None = typer.Option(
        None, "--config-dir", "-C", help="Config directory (default: ./config or package config)"
    ),
    profile: str | None = typer.Option(
        None, "--profile", "-p", help="Config profile (e.g. dev) to overlay on default.toml"
    ),
) -> None:
    """Configure logging and store options in context."""
    settings = get_settings(profile, config_dir)
    configure_logging(settings)
    ctx.obj = {"settings": settings, "config_dir": config_dir, "profile": profile}


# Subcommands registered from other modules
from predschema.cli import discover, legacy, mapping_cmd, validate_cmd  # noqa: E402

app.command("map")(mapping_cmd.map_records)
app.command("validate")(validate_cmd.validate_records)
app.command("discover")(discover.discover)
app.add_typer(legacy.app, name="legacy")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
