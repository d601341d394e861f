"""Configuration management for httpr"""

from httpr.config.schema import (
    HttprConfig,
    FailureCycleConfig,
    ResponseConfig,
    LoggingConfig,
)
from httpr.config.loader import load_config, validate_config_file, create_example_config

__all__ = [
    "HttprConfig",
    "FailureCycleConfig",
    "ResponseConfig",
    "LoggingConfig",
    "load_config",
    "validate_config_file",
    "create_example_config",
]
