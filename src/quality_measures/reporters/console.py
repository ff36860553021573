"""Console reporter for measure aggregation results."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

from ..core.metric import DensityForm

if TYPE_CHECKING:
    from ..core.engine import ComputationSummary
    from ..core.measure import MeasureStore
    from ..core.metric import MetricCatalog

console = Console()

TYPE_STYLES = {
    "PROJECT": "bold blue",
    "MODULE": "cyan",
    "DIRECTORY": "yellow",
    "FILE": "white",
}


def _format_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:.1f}"
    return f"{value:,}"


def measures_to_dict(store: MeasureStore) -> list[dict[str, Any]]:
    """Flatten the store into JSON-friendly rows, parents first.

    Each row lists every value of the component and, separately, the keys
    derived during the run.
    """
    rows = []
    for component in store.tree.pre_order():
        rows.append(
            {
                "ref": component.ref,
                "type": component.type.value,
                "key": component.key,
                "measures": store.measures(component.ref),
                "derived": sorted(store.new_measures(component.ref)),
            }
        )
    return rows


class ConsoleReporter:
    """Console reporter for displaying measures in the terminal."""

    def __init__(self, output: Console | None = None) -> None:
        self.console = output or console

    def print_measures(self, store: MeasureStore, catalog: MetricCatalog) -> None:
        """Print one row per component with a column per metric.

        Derived values are highlighted in green.

        Args:
            store: Measure store after aggregation
            catalog: Catalog providing the column order
        """
        tree = store.tree
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Component", style="bold")
        table.add_column("Type", width=10)
        for metric in catalog:
            table.add_column(metric.name or metric.key, justify="right")

        for component in tree.pre_order():
            indent = "  " * tree.depth_of(component.ref)
            label = component.key or str(component.ref)
            derived = store.new_measures(component.ref)
            cells = []
            for metric in catalog:
                value = store.get(component.ref, metric.key)
                text = _format_value(value)
                cells.append(f"[green]{text}[/green]" if metric.key in derived else text)

            style = TYPE_STYLES.get(component.type.value, "white")
            table.add_row(
                f"{indent}{label}",
                f"[{style}]{component.type.value}[/{style}]",
                *cells,
            )

        self.console.print(table)
        self.console.print()

    def print_summary(self, summary: ComputationSummary) -> None:
        """Print counts of written measures.

        Args:
            summary: Engine run summary
        """
        self.console.print("[bold blue]📈 Measure Aggregation[/bold blue]")
        self.console.print("━" * 60)
        self.console.print(f"  Components: {summary.components_visited}")
        self.console.print(f"  Measures written: {summary.measures_written}")
        for key, count in sorted(summary.aggregated.items()):
            self.console.print(f"    [cyan]{key}[/cyan] aggregated on {count}")
        for key, count in sorted(summary.densities.items()):
            self.console.print(f"    [cyan]{key}[/cyan] computed on {count}")
        for key, count in sorted(summary.kept_raw.items()):
            self.console.print(f"    [dim]{key} kept from upstream on {count}[/dim]")
        self.console.print()

    def print_catalog(self, catalog: MetricCatalog) -> None:
        """Print the metric catalog.

        Args:
            catalog: Catalog to display
        """
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Key", style="bold")
        table.add_column("Name")
        table.add_column("Kind")
        table.add_column("Rule")

        for metric in catalog:
            if metric.is_density:
                numerator, denominator = metric.inputs
                if metric.form is DensityForm.ADDITIVE:
                    rule = f"{numerator} / ({numerator} + {denominator}) × 100"
                else:
                    rule = f"({numerator} - {denominator}) / {numerator} × 100"
            else:
                rule = "sum of children" if metric.aggregate else "raw"
            table.add_row(metric.key, metric.name, metric.kind.value, rule)

        self.console.print(table)
