"""Core module exports."""

from apexlogs.core.errors import (
    ApexLogsError,
    ConfigError,
    ErrorCode,
    InternalError,
    ProjectError,
    TransportError,
    ValidationError,
    WriteError,
)
from apexlogs.core.logging import configure_logging, get_logger
from apexlogs.core.progress import export_progress, status

__all__ = [
    # Errors
    "ApexLogsError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "ProjectError",
    "TransportError",
    "ValidationError",
    "WriteError",
    # Logging
    "configure_logging",
    "get_logger",
    # Progress
    "export_progress",
    "status",
]
