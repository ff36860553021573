"""Analysis snapshot: a component tree plus the raw measures of upstream steps.

Snapshot files are YAML or JSON documents:

    tree:
      ref: 1
      type: PROJECT
      children:
        - ref: 12
          type: DIRECTORY
          children:
            - {ref: 121, type: FILE}
    measures:
      121: {ncloc: 100, comment_lines: 25}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from .core.component import ComponentTree
from .core.exceptions import ConfigError, MalformedCatalogError
from .core.measure import MeasureStore
from .core.metric import MetricCatalog


@dataclass
class AnalysisSnapshot:
    """Tree and seeded measure store ready for aggregation."""

    tree: ComponentTree
    store: MeasureStore

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        catalog: MetricCatalog,
        strict: bool = True,
    ) -> AnalysisSnapshot:
        """Build a snapshot from a parsed document.

        Args:
            data: Mapping with "tree" and optional "measures"
            catalog: Catalog used to validate measure keys
            strict: Raise on unknown metric keys instead of dropping them

        Returns:
            AnalysisSnapshot with raw measures seeded
        """
        if not isinstance(data, dict) or "tree" not in data:
            raise ConfigError("Snapshot must be a mapping with a 'tree' entry")

        tree = ComponentTree.from_dict(data["tree"])
        store = MeasureStore(tree)

        measures = data.get("measures") or {}
        if not isinstance(measures, dict):
            raise ConfigError("Snapshot 'measures' must map refs to metric values")

        seeded: dict[Any, dict[str, Any]] = {}
        for ref, values in measures.items():
            if values is None:
                values = {}
            if not isinstance(values, dict):
                raise ConfigError(
                    f"Snapshot measures of component {ref} must map metric keys "
                    "to values",
                    {"ref": ref},
                )
            kept = {}
            for metric_key, value in values.items():
                if metric_key not in catalog:
                    if strict:
                        raise MalformedCatalogError(
                            f"Snapshot measure '{metric_key}' on component {ref} "
                            "is not a known metric",
                            {"ref": ref, "metric": metric_key},
                        )
                    logger.warning(
                        f"Dropping unknown metric '{metric_key}' on component {ref}"
                    )
                    continue
                kept[metric_key] = value
            seeded[ref] = kept
        store.seed(seeded)

        logger.debug(f"Snapshot loaded: {len(tree)} components, {len(store)} measures")
        return cls(tree=tree, store=store)

    @classmethod
    def load(
        cls, path: Path, catalog: MetricCatalog, strict: bool = True
    ) -> AnalysisSnapshot:
        """Read a YAML or JSON snapshot file.

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        try:
            text = path.read_text(encoding="utf-8")
            if path.suffix.lower() == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(
                f"Failed to read snapshot {path}: {e}", {"path": str(path)}
            ) from e

        return cls.from_dict(data, catalog, strict=strict)
