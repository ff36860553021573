"""Engine configuration loaded from YAML."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from ..core.exceptions import ConfigError
from ..core.metric import MetricCatalog
from .defaults import DEFAULT_METRICS


def _default_metrics() -> list[dict[str, Any]]:
    return copy.deepcopy(DEFAULT_METRICS)


@dataclass
class EngineConfig:
    """Complete engine configuration.

    Attributes:
        metrics: Metric definitions, in evaluation order
        fail_on_missing_metric: Reject snapshot measures whose metric key is
            not in the catalog (otherwise they are dropped with a warning)
    """

    metrics: list[dict[str, Any]] = field(default_factory=_default_metrics)
    fail_on_missing_metric: bool = True

    @classmethod
    def load(cls, path: Path) -> EngineConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            EngineConfig instance (defaults when the file does not exist)

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        if not path.exists():
            logger.debug(f"No configuration at {path}, using defaults")
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(
                f"Failed to read configuration {path}: {e}", {"path": str(path)}
            ) from e

        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration {path} must be a mapping", {"path": str(path)}
            )

        logger.debug(f"Loaded configuration from {path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EngineConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            EngineConfig instance
        """
        metrics = data.get("metrics")
        if metrics is not None and not isinstance(metrics, list):
            raise ConfigError("'metrics' must be a list of metric definitions")

        return cls(
            metrics=list(metrics) if metrics else _default_metrics(),
            fail_on_missing_metric=data.get("fail_on_missing_metric", True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "metrics": self.metrics,
            "fail_on_missing_metric": self.fail_on_missing_metric,
        }

    def save(self, path: Path) -> None:
        """Save configuration to YAML file.

        Args:
            path: Path to save configuration
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def build_catalog(self) -> MetricCatalog:
        """Validate the metric definitions into a catalog.

        Raises:
            MalformedCatalogError: If a definition is inconsistent
        """
        return MetricCatalog.from_dict(self.metrics)
