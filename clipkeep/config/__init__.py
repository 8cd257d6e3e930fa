"""Configuration loading and validation."""

from clipkeep.config.loader import load_config
from clipkeep.config.schema import (
    AnalysisConfig,
    CaptureConfig,
    Config,
    LoggingConfig,
    StorageConfig,
)

__all__ = [
    "AnalysisConfig",
    "CaptureConfig",
    "Config",
    "LoggingConfig",
    "StorageConfig",
    "load_config",
]
