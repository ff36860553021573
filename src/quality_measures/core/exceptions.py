"""Typed exception hierarchy for quality-measures.

Hierarchy
---------
QualityMeasuresError (base)
├── MeasureError            – measure store failures
│   ├── DuplicateMeasureError  – write-once violation for a (component, metric) pair
│   └── UnknownComponentError  – measure addressed to a ref outside the tree
├── CatalogError            – metric catalog errors
│   └── MalformedCatalogError  – invalid metric definitions, raised at load time
├── ComponentTreeError      – invalid component hierarchy
└── ConfigError             – unreadable or malformed configuration / snapshot

Missing input measures and zero denominators are not errors: the engine
simply writes nothing for them.
"""

from typing import Any


class QualityMeasuresError(Exception):
    """Base exception for quality-measures."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


# ── Measure store ───────────────────────────────────────────────────────


class MeasureError(QualityMeasuresError):
    """Measure store errors."""

    pass


class DuplicateMeasureError(MeasureError):
    """A value already exists for the (component, metric) pair.

    Indicates duplicate processing or a metric dependency cycle. Fatal to
    the computation run.
    """

    pass


class UnknownComponentError(MeasureError):
    """Component reference is not part of the tree."""

    pass


# ── Metric catalog ──────────────────────────────────────────────────────


class CatalogError(QualityMeasuresError):
    """Metric catalog errors."""

    pass


class MalformedCatalogError(CatalogError):
    """Metric definitions are inconsistent (unknown inputs, duplicates, ...)."""

    pass


# ── Component tree ──────────────────────────────────────────────────────


class ComponentTreeError(QualityMeasuresError):
    """Component hierarchy is not a valid single-rooted tree."""

    pass


# ── Configuration ───────────────────────────────────────────────────────


class ConfigError(QualityMeasuresError):
    """Configuration / input file errors."""

    pass
