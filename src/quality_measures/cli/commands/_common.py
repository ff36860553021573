"""Helpers shared by CLI commands."""

from pathlib import Path

from loguru import logger

from ...config.defaults import DEFAULT_CONFIG_FILENAME
from ...config.settings import EngineConfig


def resolve_config(config_path: Path | None) -> EngineConfig:
    """Load the explicit config file, or the default one from the cwd."""
    path = config_path or Path.cwd() / DEFAULT_CONFIG_FILENAME
    logger.debug(f"Using configuration {path}")
    return EngineConfig.load(path)
