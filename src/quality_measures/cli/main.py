"""Main CLI application for quality-measures."""

import sys

import typer
from loguru import logger

from .. import __version__
from .commands.compute import compute
from .commands.config import init_config, metrics
from .output import console

app = typer.Typer(
    name="quality-measures",
    help="Aggregate code quality measures over a component tree",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.command("compute")(compute)
app.command("metrics")(metrics)
app.command("init-config")(init_config)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"quality-measures version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose debug output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """📊 Quality Measures - bottom-up code quality metrics."""
    # Suppress DEBUG logs unless --verbose
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


if __name__ == "__main__":
    app()
