# ==============================================================================
# Amplitude Adapter CLI
# ==============================================================================
"""
Command-line interface for the Amplitude destination adapter.

Usage:
    amplitude-adapter --help
    amplitude-adapter replay events.jsonl
    amplitude-adapter replay events.jsonl --settings amplitude.json --json
    amplitude-adapter config show
    amplitude-adapter version
"""

import os
from importlib.metadata import PackageNotFoundError, version
from typing import Annotated

import typer

if "COLUMNS" not in os.environ:
    os.environ["COLUMNS"] = "115"

from amplitude_adapter.cli.config import config_show
from amplitude_adapter.cli.replay import replay
from amplitude_adapter.cli.shared import configure_logging
from amplitude_adapter.utils.config import get_settings

app = typer.Typer(
    name="amplitude-adapter",
    help="Amplitude destination adapter CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log every vendor call (DEBUG)")
    ] = False,
) -> None:
    """Amplitude destination adapter CLI"""
    settings = get_settings()
    level = "DEBUG" if verbose or settings.debug else settings.log_level
    configure_logging(level)


app.command("replay")(replay)

config_app = typer.Typer(
    help="Configuration management",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")
config_app.command("show")(config_show)


# Distributions the adapter reads events and settings with
VERSION_REPORT = ("amplitude-adapter", "pydantic", "pydantic-settings", "typer")


@app.command("version")
def show_version() -> None:
    """Show adapter and library versions."""
    for name in VERSION_REPORT:
        try:
            print(f"{name} {version(name)}")
        except PackageNotFoundError:
            print(f"{name} (not installed)")


if __name__ == "__main__":
    app()
