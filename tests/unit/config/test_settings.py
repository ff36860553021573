"""Tests for the YAML engine configuration."""

import pytest
import yaml

from quality_measures.config.defaults import DEFAULT_METRICS
from quality_measures.config.settings import EngineConfig
from quality_measures.core.exceptions import ConfigError, MalformedCatalogError
from quality_measures.core.metric import default_catalog


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_defaults(self):
        config = EngineConfig()
        assert config.metrics == DEFAULT_METRICS
        assert config.fail_on_missing_metric is True
        assert list(config.build_catalog()) == list(default_catalog())

    def test_default_metrics_are_copied(self):
        """Test mutating one config leaves the module defaults alone."""
        config = EngineConfig()
        config.metrics[0]["name"] = "changed"
        assert DEFAULT_METRICS[0]["name"] != "changed"

    def test_load_missing_file_returns_defaults(self, tmp_path):
        config = EngineConfig.load(tmp_path / "missing.yaml")
        assert config.metrics == DEFAULT_METRICS

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "quality-measures.yaml"
        EngineConfig(fail_on_missing_metric=False).save(path)

        loaded = EngineConfig.load(path)

        assert loaded.fail_on_missing_metric is False
        assert loaded.metrics == DEFAULT_METRICS

    def test_load_custom_metrics(self, tmp_path):
        path = tmp_path / "quality-measures.yaml"
        path.write_text(
            yaml.dump(
                {
                    "metrics": [
                        {"key": "tests", "aggregate": True},
                        {"key": "skipped_tests", "aggregate": True},
                        {
                            "key": "skipped_density",
                            "kind": "DENSITY",
                            "form": "ADDITIVE",
                            "numerator": "skipped_tests",
                            "denominator": "tests",
                        },
                    ]
                }
            )
        )

        catalog = EngineConfig.load(path).build_catalog()

        assert catalog.keys() == ["tests", "skipped_tests", "skipped_density"]

    def test_empty_file_returns_defaults(self, tmp_path):
        path = tmp_path / "quality-measures.yaml"
        path.write_text("")
        assert EngineConfig.load(path).metrics == DEFAULT_METRICS

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "quality-measures.yaml"
        path.write_text("metrics: [unclosed")
        with pytest.raises(ConfigError, match="Failed to read configuration"):
            EngineConfig.load(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "quality-measures.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="must be a mapping"):
            EngineConfig.load(path)

    def test_metrics_not_a_list(self):
        with pytest.raises(ConfigError, match="must be a list"):
            EngineConfig.from_dict({"metrics": {"key": "ncloc"}})

    def test_malformed_catalog_fails_at_build(self):
        config = EngineConfig.from_dict(
            {
                "metrics": [
                    {
                        "key": "comment_lines_density",
                        "kind": "DENSITY",
                        "form": "ADDITIVE",
                        "numerator": "comment_lines",
                        "denominator": "ncloc",
                    }
                ]
            }
        )
        with pytest.raises(MalformedCatalogError):
            config.build_catalog()
