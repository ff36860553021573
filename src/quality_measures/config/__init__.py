"""Configuration for quality-measures."""

from .defaults import DEFAULT_CONFIG_FILENAME, DEFAULT_METRICS
from .settings import EngineConfig

__all__ = ["DEFAULT_CONFIG_FILENAME", "DEFAULT_METRICS", "EngineConfig"]
