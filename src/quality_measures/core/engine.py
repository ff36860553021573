"""Bottom-up aggregation of COUNT measures and computation of densities.

The engine walks the component tree once, children before parents. For
every component it first sums the aggregatable COUNT metrics of its direct
children, then evaluates each DENSITY metric from the component's own
counters. Results are written to the measure store, which rejects any
second value for the same (component, metric) pair.

Example:
    tree = ComponentTree.from_dict(...)
    store = MeasureStore(tree).seed({3: {"ncloc": 100, "comment_lines": 25}})
    summary = AggregationEngine(tree, default_catalog(), store).execute()
    store.get(3, "comment_lines_density")  # 20.0
"""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from .component import Component, ComponentTree
from .exceptions import UnknownComponentError
from .measure import MeasureStore
from .metric import Metric, MetricCatalog, Number


@dataclass
class ComputationSummary:
    """Outcome of one engine run.

    Attributes:
        components_visited: Number of components processed
        aggregated: Count of aggregate values written, per metric key
        densities: Count of density values written, per metric key
        kept_raw: Count of aggregates left to upstream values, per metric key
        duration_ms: Wall time of the run
    """

    components_visited: int = 0
    aggregated: Counter[str] = field(default_factory=Counter)
    densities: Counter[str] = field(default_factory=Counter)
    kept_raw: Counter[str] = field(default_factory=Counter)
    duration_ms: float = 0.0

    @property
    def measures_written(self) -> int:
        return sum(self.aggregated.values()) + sum(self.densities.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "components_visited": self.components_visited,
            "measures_written": self.measures_written,
            "aggregated": dict(self.aggregated),
            "densities": dict(self.densities),
            "kept_raw": dict(self.kept_raw),
            "duration_ms": round(self.duration_ms, 2),
        }


class AggregationEngine:
    """Derives aggregate and density measures over a component tree.

    Args:
        tree: Component hierarchy (read-only)
        catalog: Metric definitions (read-only)
        store: Measure store for this run, pre-seeded with raw measures
    """

    def __init__(
        self, tree: ComponentTree, catalog: MetricCatalog, store: MeasureStore
    ) -> None:
        if store.tree is not tree:
            raise UnknownComponentError(
                "Measure store was created for a different component tree"
            )
        self.tree = tree
        self.catalog = catalog
        self.store = store

    def execute(self) -> ComputationSummary:
        """Run the aggregation pass.

        Returns:
            Summary of the values written

        Raises:
            DuplicateMeasureError: If a derived value would replace an
                existing one (e.g. the engine already ran on this store)
        """
        start = time.perf_counter()
        summary = ComputationSummary()
        aggregatable = self.catalog.aggregatable()
        densities = self.catalog.densities()

        logger.debug(
            f"Aggregating {len(aggregatable)} metric(s) and computing "
            f"{len(densities)} density metric(s) over {len(self.tree)} components"
        )

        for component in self.tree.post_order():
            if not component.is_leaf:
                for metric in aggregatable:
                    self._aggregate(component, metric, summary)
            for metric in densities:
                self._compute_density(component, metric, summary)
            summary.components_visited += 1

        summary.duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"Measure aggregation complete: {summary.measures_written} measure(s) "
            f"written on {summary.components_visited} component(s) "
            f"in {summary.duration_ms:.1f}ms"
        )
        return summary

    def _aggregate(
        self, component: Component, metric: Metric, summary: ComputationSummary
    ) -> None:
        if self.store.is_raw(component.ref, metric.key):
            # Upstream already supplied this aggregate
            summary.kept_raw[metric.key] += 1
            return

        total = aggregate_values(
            [self.store.get(child, metric.key) for child in component.children]
        )
        if total is None:
            return

        self.store.put(component.ref, metric.key, total)
        summary.aggregated[metric.key] += 1

    def _compute_density(
        self, component: Component, metric: Metric, summary: ComputationSummary
    ) -> None:
        numerator_key, denominator_key = metric.inputs
        numerator = self.store.get(component.ref, numerator_key)
        denominator = self.store.get(component.ref, denominator_key)
        if numerator is None or denominator is None:
            return

        value = self.catalog.compute_density(metric.key, numerator, denominator)
        if value is None:
            logger.debug(
                f"Skipping {metric.key} on component {component.ref}: "
                "zero denominator"
            )
            return

        self.store.put(component.ref, metric.key, value)
        summary.densities[metric.key] += 1


def compute_measures(
    tree: ComponentTree, catalog: MetricCatalog, store: MeasureStore
) -> ComputationSummary:
    """Run a single aggregation pass over ``store``."""
    return AggregationEngine(tree, catalog, store).execute()


def aggregate_values(values: list[Number | None]) -> Number | None:
    """Sum present values; None when every value is absent."""
    present = [value for value in values if value is not None]
    return sum(present) if present else None
