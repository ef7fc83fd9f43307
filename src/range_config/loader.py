"""Configuration loader with validation and singleton access."""

import logging
import yaml
from pathlib import Path
from typing import Optional

from .models import AppConfig

logger = logging.getLogger(__name__)

# Global config singleton
_config: Optional[AppConfig] = None


def load_config(config_path: str | Path) -> AppConfig:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to config.yaml file

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config validation fails
        yaml.YAMLError: If YAML parsing fails
    """
    global _config

    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from: {config_path}")

    with open(config_path, 'r') as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        raw_config = {}

    try:
        _config = AppConfig(**raw_config)
    except Exception as e:
        logger.error(f"Configuration validation failed: {e}")
        raise ValueError(f"Invalid configuration: {e}") from e

    logger.info("Configuration loaded successfully:")
    logger.info(f"  Curve min gap: {_config.curve.bounds.min_gap:,.0f}")
    logger.info(f"  Curve APR domain: [{_config.curve.bounds.min_apr}, {_config.curve.bounds.max_apr}]")
    logger.info(f"  Sample steps: {_config.curve.sample_steps}")
    logger.info(f"  Min zoom: {_config.curve.min_zoom}")
    logger.info(f"  Max total allocation: {_config.allocation.max_total_percentage}%")
    logger.info(f"  Derive allocated value: {_config.allocation.derive_allocated_value}")

    return _config


def get_config() -> AppConfig:
    """
    Get the current configuration.

    Falls back to the model defaults when no file has been loaded, so the
    curve and allocation operations work without any setup.
    """
    global _config

    if _config is None:
        logger.debug("No configuration loaded, using defaults")
        _config = AppConfig()
    return _config


def reset_config() -> None:
    """Drop the loaded configuration so the next get_config() returns defaults."""
    global _config
    _config = None
