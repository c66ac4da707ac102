"""Config module exports."""

from apexlogs.config.loader import load_config
from apexlogs.config.models import (
    ApexLogsConfig,
    ExportConfig,
    HttpConfig,
    LoggingConfig,
    StateConfig,
)

__all__ = [
    "load_config",
    "ApexLogsConfig",
    "ExportConfig",
    "HttpConfig",
    "LoggingConfig",
    "StateConfig",
]
