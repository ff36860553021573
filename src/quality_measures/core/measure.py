"""Write-once measure store for one computation run."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from .component import ComponentTree
from .exceptions import DuplicateMeasureError, MeasureError, UnknownComponentError
from .metric import Number


@dataclass(frozen=True)
class Measure:
    """A single (component, metric) value."""

    ref: int
    metric_key: str
    value: Number


class MeasureStore:
    """Measures of one analysis run, keyed by (component ref, metric key).

    Each pair holds at most one value. Values arrive two ways:

    - ``add_raw``: supplied by upstream analysis steps before aggregation
    - ``put``: derived by the aggregation engine

    Neither path can replace an existing value; there is no update or delete.
    """

    def __init__(self, tree: ComponentTree) -> None:
        self._tree = tree
        self._values: dict[int, dict[str, Number]] = {}
        self._raw: set[tuple[int, str]] = set()
        self._order: list[tuple[int, str]] = []

    @property
    def tree(self) -> ComponentTree:
        return self._tree

    def _check_ref(self, ref: int) -> None:
        if ref not in self._tree:
            raise UnknownComponentError(
                f"Component {ref} is not part of the tree", {"ref": ref}
            )

    def _store(self, ref: int, metric_key: str, value: Number) -> None:
        self._check_ref(ref)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MeasureError(
                f"Measure value for {metric_key} on component {ref} must be numeric, "
                f"got {value!r}",
                {"ref": ref, "metric": metric_key},
            )
        values = self._values.setdefault(ref, {})
        if metric_key in values:
            raise DuplicateMeasureError(
                f"Measure {metric_key} already exists on component {ref} "
                f"(existing={values[metric_key]!r}, new={value!r})",
                {"ref": ref, "metric": metric_key},
            )
        values[metric_key] = value
        self._order.append((ref, metric_key))

    def add_raw(self, ref: int, metric_key: str, value: Number) -> None:
        """Seed a value produced by an upstream analysis step."""
        self._store(ref, metric_key, value)
        self._raw.add((ref, metric_key))

    def put(self, ref: int, metric_key: str, value: Number) -> None:
        """Record a derived value.

        Raises:
            DuplicateMeasureError: If the pair already holds a value
        """
        self._store(ref, metric_key, value)
        logger.debug(f"Measure {metric_key}={value} written on component {ref}")

    def get(self, ref: int, metric_key: str) -> Number | None:
        """Return the value for the pair, or None when absent."""
        self._check_ref(ref)
        return self._values.get(ref, {}).get(metric_key)

    def has(self, ref: int, metric_key: str) -> bool:
        return self.get(ref, metric_key) is not None

    def is_raw(self, ref: int, metric_key: str) -> bool:
        """True when the value was supplied upstream rather than derived."""
        return (ref, metric_key) in self._raw

    def measures(self, ref: int) -> dict[str, Number]:
        """All values of a component (raw and derived)."""
        self._check_ref(ref)
        return dict(self._values.get(ref, {}))

    def new_measures(self, ref: int) -> dict[str, Number]:
        """Values derived by ``put`` on a component."""
        return {
            key: value
            for key, value in self.measures(ref).items()
            if (ref, key) not in self._raw
        }

    def __iter__(self) -> Iterator[Measure]:
        for ref, metric_key in self._order:
            yield Measure(ref, metric_key, self._values[ref][metric_key])

    def __len__(self) -> int:
        return len(self._order)

    def seed(self, measures: Mapping[Any, Mapping[str, Number]]) -> MeasureStore:
        """Bulk ``add_raw`` from ``{ref: {metric_key: value}}``."""
        for ref, values in measures.items():
            try:
                component_ref = int(ref)
            except (TypeError, ValueError):
                raise UnknownComponentError(
                    f"Invalid component ref: {ref!r}", {"ref": ref}
                ) from None
            for metric_key, value in (values or {}).items():
                self.add_raw(component_ref, metric_key, value)
        return self

    def to_dict(self) -> dict[int, dict[str, Number]]:
        return {
            component.ref: self.measures(component.ref)
            for component in self._tree.pre_order()
            if self._values.get(component.ref)
        }
