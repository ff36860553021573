"""Metric catalog: metric kinds, density formulas and the core metrics."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, cast

from .exceptions import MalformedCatalogError

Number = int | float

# (primary input, secondary input) -> unrounded percentage, or None when the
# denominator is zero
DensityFunction = Callable[[Number, Number], Decimal | None]

_ONE_DECIMAL = Decimal("0.1")
_HUNDRED = Decimal(100)


class MetricKind(str, Enum):
    """Whether a metric is a raw counter or a ratio derived from two counters."""

    COUNT = "COUNT"
    DENSITY = "DENSITY"


class DensityForm(str, Enum):
    """Combination rule of a DENSITY metric.

    ADDITIVE:    numerator / (numerator + denominator) * 100
                 e.g. comment_lines over (ncloc + comment_lines)
    SUBTRACTIVE: (numerator - denominator) / numerator * 100
                 e.g. documented share of public_api
    """

    ADDITIVE = "ADDITIVE"
    SUBTRACTIVE = "SUBTRACTIVE"


def _decimal(value: Number) -> Decimal:
    return Decimal(str(value)) if isinstance(value, float) else Decimal(value)


def _additive(numerator: Number, denominator: Number) -> Decimal | None:
    total = _decimal(numerator) + _decimal(denominator)
    if total == 0:
        return None
    return _decimal(numerator) / total * _HUNDRED


def _subtractive(numerator: Number, subtracted: Number) -> Decimal | None:
    base = _decimal(numerator)
    if base == 0:
        return None
    return (base - _decimal(subtracted)) / base * _HUNDRED


_DENSITY_FUNCTIONS: dict[DensityForm, DensityFunction] = {
    DensityForm.ADDITIVE: _additive,
    DensityForm.SUBTRACTIVE: _subtractive,
}


def round_density(value: Decimal | Number) -> float:
    """Round half-up to one decimal place.

    Args:
        value: Exact (or float) density value

    Returns:
        Rounded value, e.g. 66.66 -> 66.7, 12.25 -> 12.3
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return float(value.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Metric:
    """Metric definition.

    Attributes:
        key: Unique metric key (e.g. "comment_lines")
        kind: COUNT or DENSITY
        name: Human readable name
        aggregate: COUNT only - sum children's values into each parent
        form: DENSITY only - combination rule
        numerator: DENSITY only - key of the first COUNT input
        denominator: DENSITY only - key of the second COUNT input
    """

    key: str
    kind: MetricKind
    name: str = ""
    aggregate: bool = False
    form: DensityForm | None = None
    numerator: str | None = None
    denominator: str | None = None

    @property
    def is_density(self) -> bool:
        return self.kind is MetricKind.DENSITY

    @property
    def inputs(self) -> tuple[str, str]:
        """Keys of the two COUNT inputs of a DENSITY metric."""
        if not self.is_density:
            raise MalformedCatalogError(f"Metric '{self.key}' is not a density")
        return (self.numerator or "", self.denominator or "")

    @classmethod
    def count(cls, key: str, name: str = "", aggregate: bool = False) -> Metric:
        return cls(key=key, kind=MetricKind.COUNT, name=name, aggregate=aggregate)

    @classmethod
    def density(
        cls,
        key: str,
        form: DensityForm,
        numerator: str,
        denominator: str,
        name: str = "",
    ) -> Metric:
        return cls(
            key=key,
            kind=MetricKind.DENSITY,
            name=name,
            form=form,
            numerator=numerator,
            denominator=denominator,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Metric:
        """Create a metric from a config mapping.

        Raises:
            MalformedCatalogError: If the mapping is not a valid definition
        """
        key = data.get("key")
        if not key or not isinstance(key, str):
            raise MalformedCatalogError(
                "Metric definition requires a string 'key'", {"metric": dict(data)}
            )
        try:
            kind = MetricKind(str(data.get("kind", "COUNT")).upper())
            form = data.get("form")
            form = DensityForm(str(form).upper()) if form is not None else None
        except ValueError as e:
            raise MalformedCatalogError(
                f"Invalid metric definition '{key}': {e}", {"metric": key}
            ) from e

        return cls(
            key=key,
            kind=kind,
            name=data.get("name", ""),
            aggregate=bool(data.get("aggregate", False)),
            form=form,
            numerator=data.get("numerator"),
            denominator=data.get("denominator"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"key": self.key, "kind": self.kind.value}
        if self.name:
            data["name"] = self.name
        if self.is_density:
            data["form"] = self.form.value if self.form else None
            data["numerator"] = self.numerator
            data["denominator"] = self.denominator
        else:
            data["aggregate"] = self.aggregate
        return data


class MetricCatalog:
    """Read-only registry of metric definitions.

    Validates on construction so an inconsistent catalog fails before any
    tree traversal begins. Each density formula is resolved once here.
    """

    def __init__(self, metrics: Iterable[Metric]) -> None:
        self._metrics: dict[str, Metric] = {}
        for metric in metrics:
            if metric.key in self._metrics:
                raise MalformedCatalogError(
                    f"Duplicate metric key: '{metric.key}'", {"metric": metric.key}
                )
            self._metrics[metric.key] = metric

        self._density_functions: dict[str, DensityFunction] = {}
        for metric in self._metrics.values():
            self._validate(metric)
            if metric.is_density:
                form = cast(DensityForm, metric.form)
                self._density_functions[metric.key] = _DENSITY_FUNCTIONS[form]

    def _validate(self, metric: Metric) -> None:
        if not metric.is_density:
            if metric.form or metric.numerator or metric.denominator:
                raise MalformedCatalogError(
                    f"COUNT metric '{metric.key}' cannot declare density inputs",
                    {"metric": metric.key},
                )
            return

        if metric.aggregate:
            raise MalformedCatalogError(
                f"DENSITY metric '{metric.key}' cannot be aggregated",
                {"metric": metric.key},
            )
        if metric.form is None:
            raise MalformedCatalogError(
                f"DENSITY metric '{metric.key}' has no combination form",
                {"metric": metric.key},
            )
        for role, input_key in (
            ("numerator", metric.numerator),
            ("denominator", metric.denominator),
        ):
            source = self._metrics.get(input_key) if input_key else None
            if source is None or source.kind is not MetricKind.COUNT:
                raise MalformedCatalogError(
                    f"DENSITY metric '{metric.key}' {role} '{input_key}' "
                    "is not a known COUNT metric",
                    {"metric": metric.key, role: input_key},
                )

    def get(self, key: str) -> Metric:
        try:
            return self._metrics[key]
        except KeyError:
            raise MalformedCatalogError(
                f"Unknown metric key: '{key}'", {"metric": key}
            ) from None

    def __contains__(self, key: object) -> bool:
        return key in self._metrics

    def __iter__(self) -> Iterator[Metric]:
        return iter(self._metrics.values())

    def __len__(self) -> int:
        return len(self._metrics)

    def keys(self) -> list[str]:
        return list(self._metrics)

    def aggregatable(self) -> list[Metric]:
        """COUNT metrics summed bottom-up, in declaration order."""
        return [m for m in self._metrics.values() if m.aggregate]

    def densities(self) -> list[Metric]:
        return [m for m in self._metrics.values() if m.is_density]

    def compute_density(
        self, key: str, numerator: Number, denominator: Number
    ) -> float | None:
        """Evaluate a density metric and round it to one decimal.

        Returns:
            Rounded percentage, or None when the denominator is zero
        """
        if key not in self._density_functions:
            self.get(key)
            raise MalformedCatalogError(f"Metric '{key}' is not a density")
        exact = self._density_functions[key](numerator, denominator)
        return round_density(exact) if exact is not None else None

    @classmethod
    def from_dict(cls, data: Iterable[Mapping[str, Any]]) -> MetricCatalog:
        return cls(Metric.from_dict(item) for item in data)

    def to_dict(self) -> list[dict[str, Any]]:
        return [metric.to_dict() for metric in self._metrics.values()]


class CoreMetrics:
    """Keys and definitions of the built-in metrics."""

    NCLOC_KEY = "ncloc"
    COMMENT_LINES_KEY = "comment_lines"
    COMMENT_LINES_DENSITY_KEY = "comment_lines_density"
    PUBLIC_API_KEY = "public_api"
    PUBLIC_UNDOCUMENTED_API_KEY = "public_undocumented_api"
    PUBLIC_DOCUMENTED_API_DENSITY_KEY = "public_documented_api_density"

    NCLOC = Metric.count(NCLOC_KEY, name="Lines of code")
    COMMENT_LINES = Metric.count(
        COMMENT_LINES_KEY, name="Comment lines", aggregate=True
    )
    COMMENT_LINES_DENSITY = Metric.density(
        COMMENT_LINES_DENSITY_KEY,
        DensityForm.ADDITIVE,
        numerator=COMMENT_LINES_KEY,
        denominator=NCLOC_KEY,
        name="Comments (%)",
    )
    PUBLIC_API = Metric.count(PUBLIC_API_KEY, name="Public API", aggregate=True)
    PUBLIC_UNDOCUMENTED_API = Metric.count(
        PUBLIC_UNDOCUMENTED_API_KEY, name="Public undocumented API", aggregate=True
    )
    PUBLIC_DOCUMENTED_API_DENSITY = Metric.density(
        PUBLIC_DOCUMENTED_API_DENSITY_KEY,
        DensityForm.SUBTRACTIVE,
        numerator=PUBLIC_API_KEY,
        denominator=PUBLIC_UNDOCUMENTED_API_KEY,
        name="Public documented API (%)",
    )

    @classmethod
    def all(cls) -> list[Metric]:
        return [
            cls.NCLOC,
            cls.COMMENT_LINES,
            cls.COMMENT_LINES_DENSITY,
            cls.PUBLIC_API,
            cls.PUBLIC_UNDOCUMENTED_API,
            cls.PUBLIC_DOCUMENTED_API_DENSITY,
        ]


def default_catalog() -> MetricCatalog:
    """Catalog of the built-in comment and documentation metrics."""
    return MetricCatalog(CoreMetrics.all())
