"""Core model: component tree, metric catalog, measure store and engine."""

from .component import Component, ComponentTree, ComponentTreeBuilder, ComponentType
from .engine import AggregationEngine, ComputationSummary, compute_measures
from .exceptions import (
    CatalogError,
    ComponentTreeError,
    ConfigError,
    DuplicateMeasureError,
    MalformedCatalogError,
    MeasureError,
    QualityMeasuresError,
    UnknownComponentError,
)
from .measure import Measure, MeasureStore
from .metric import (
    CoreMetrics,
    DensityForm,
    Metric,
    MetricCatalog,
    MetricKind,
    default_catalog,
    round_density,
)

__all__ = [
    "Component",
    "ComponentTree",
    "ComponentTreeBuilder",
    "ComponentType",
    "AggregationEngine",
    "ComputationSummary",
    "compute_measures",
    "Measure",
    "MeasureStore",
    "CoreMetrics",
    "DensityForm",
    "Metric",
    "MetricCatalog",
    "MetricKind",
    "default_catalog",
    "round_density",
    "QualityMeasuresError",
    "MeasureError",
    "DuplicateMeasureError",
    "UnknownComponentError",
    "CatalogError",
    "MalformedCatalogError",
    "ComponentTreeError",
    "ConfigError",
]
