"""Compute command: aggregate the measures of an analysis snapshot."""

from pathlib import Path

import typer
from loguru import logger

from ...core.engine import AggregationEngine
from ...core.exceptions import QualityMeasuresError
from ...reporters.console import ConsoleReporter, measures_to_dict
from ...snapshot import AnalysisSnapshot
from ..output import console, print_error, print_json
from ._common import resolve_config


def compute(
    snapshot_path: Path = typer.Argument(
        ...,
        help="Snapshot file (YAML or JSON) with the component tree and raw measures",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
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
        help="Output measures in JSON format",
    ),
    show_summary: bool = typer.Option(
        True,
        "--summary/--no-summary",
        help="Show counts of derived measures",
    ),
) -> None:
    """📈 Aggregate measures bottom-up and compute densities.

    [bold cyan]Examples:[/bold cyan]

    [green]Show the measure table:[/green]
        $ quality-measures compute snapshot.yaml

    [green]Export to JSON:[/green]
        $ quality-measures compute snapshot.yaml --json > measures.json
    """
    try:
        config = resolve_config(config_path)
        catalog = config.build_catalog()
        snapshot = AnalysisSnapshot.load(
            snapshot_path, catalog, strict=config.fail_on_missing_metric
        )

        summary = AggregationEngine(snapshot.tree, catalog, snapshot.store).execute()

        if json_output:
            print_json(
                {
                    "summary": summary.to_dict(),
                    "components": measures_to_dict(snapshot.store),
                }
            )
            return

        reporter = ConsoleReporter(console)
        if show_summary:
            reporter.print_summary(summary)
        reporter.print_measures(snapshot.store, catalog)

    except QualityMeasuresError as e:
        logger.error(f"Measure computation failed: {e}")
        print_error(str(e))
        raise typer.Exit(1)
