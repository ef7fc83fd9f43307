"""Configuration, logging and session context for the range order core."""

from .models import (
    AppConfig,
    CurveBounds,
    CurveConfig,
    AllocationConfig,
    LoggingConfig,
)
from .loader import load_config, get_config, reset_config
from .context import set_current_session, get_current_session, clear_current_session
from .logger import AppLogger, StructuredFormatter, configure_root_logger

__version__ = "1.0.0"

__all__ = [
    "AppConfig",
    "CurveBounds",
    "CurveConfig",
    "AllocationConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "reset_config",
    "set_current_session",
    "get_current_session",
    "clear_current_session",
    "AppLogger",
    "StructuredFormatter",
    "configure_root_logger",
    "__version__",
]
