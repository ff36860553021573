"""Config commands: inspect the metric catalog and write a default config."""

from pathlib import Path

import typer
from loguru import logger

from ...config.defaults import DEFAULT_CONFIG_FILENAME
from ...config.settings import EngineConfig
from ...core.exceptions import QualityMeasuresError
from ...reporters.console import ConsoleReporter
from ..output import console, print_error, print_info, print_json, print_success
from ._common import resolve_config


def metrics(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Metric configuration file (defaults to ./quality-measures.yaml)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output the catalog in JSON format",
    ),
) -> None:
    """List the metric catalog."""
    try:
        catalog = resolve_config(config_path).build_catalog()
    except QualityMeasuresError as e:
        logger.error(f"Invalid metric catalog: {e}")
        print_error(str(e))
        raise typer.Exit(1)

    if json_output:
        print_json(catalog.to_dict())
    else:
        ConsoleReporter(console).print_catalog(catalog)


def init_config(
    path: Path = typer.Argument(
        Path(DEFAULT_CONFIG_FILENAME),
        help="Where to write the configuration",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing configuration file",
    ),
) -> None:
    """Write the default metric configuration to a YAML file."""
    if path.exists() and not force:
        print_info(f"{path} already exists. Use --force to overwrite.")
        raise typer.Exit(1)

    EngineConfig().save(path)
    print_success(f"Configuration written to {path}")
