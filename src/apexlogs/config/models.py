"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (APEXLOGS__SECTION__KEY)
3. Project YAML (.apexlogs/config.yaml)
4. Global YAML (~/.config/apexlogs/config.yaml)
5. Built-in defaults (this file)

Examples:
    APEXLOGS__LOGGING__LEVEL=DEBUG
    APEXLOGS__EXPORT__CONCURRENCY=8
    APEXLOGS__HTTP__TIMEOUT_SEC=60
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from apexlogs.config.constants import (
    CONCURRENCY_DEFAULT,
    LIMIT_DEFAULT,
    OUTPUT_DIR_DEFAULT,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_STATE_PATH = Path("~/.config/apexlogs/state.yaml").expanduser()


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        APEXLOGS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every downloaded body.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ExportConfig(BaseModel):
    """Catalog and export defaults.

    Env vars:
        APEXLOGS__EXPORT__OUTPUT_DIR: Artifact directory
        APEXLOGS__EXPORT__CONCURRENCY: Parallel body downloads
        APEXLOGS__EXPORT__LIMIT: Logs requested per catalog query
    """

    output_dir: str = Field(
        default=OUTPUT_DIR_DEFAULT,
        description="Directory artifacts are written to. Relative paths resolve "
        "against the working directory.",
    )
    concurrency: int = Field(
        default=CONCURRENCY_DEFAULT,
        description="Parallel body downloads. Values below 1 behave as 1.",
    )
    limit: int = Field(
        default=LIMIT_DEFAULT,
        description="Logs requested per catalog query. Clamped to 1-200.",
    )


class HttpConfig(BaseModel):
    """Tooling API transport configuration.

    Env vars:
        APEXLOGS__HTTP__TIMEOUT_SEC: Per-request timeout
    """

    timeout_sec: float = Field(
        default=30.0,
        description="Per-request timeout. Large log bodies may need more.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class StateConfig(BaseModel):
    """Durable state (prefetch toggle) location.

    Env vars:
        APEXLOGS__STATE__PATH: State file path
    """

    path: str = Field(
        default=str(DEFAULT_STATE_PATH),
        description="YAML file holding persisted toggles.",
    )


class ApexLogsConfig(BaseModel):
    """Root configuration for apexlogs."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    state: StateConfig = Field(default_factory=StateConfig)
