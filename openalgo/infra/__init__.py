"""Infrastructure utilities for configuration and logging."""

from .config import OpenAlgoConfig, config_from_env, load_config
from .logging import JsonFormatter, configure_logging

__all__ = [
    "OpenAlgoConfig",
    "config_from_env",
    "load_config",
    "JsonFormatter",
    "configure_logging",
]
