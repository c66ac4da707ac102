"""apexlogs error types with typed error codes.

Error code ranges:
- 1xxx: Validation
- 2xxx: Config
- 3xxx: Transport
- 4xxx: Write / storage
- 5xxx: Project
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Validation (1xxx)
    INVALID_START_TIME = 1001

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Transport (3xxx)
    TRANSPORT_REQUEST_FAILED = 3001
    TRANSPORT_DECODE_FAILED = 3002

    # Write (4xxx)
    WRITE_FAILED = 4001

    # Project (5xxx)
    PROJECT_NOT_FOUND = 5001
    PROJECT_INVALID = 5002
    PROJECT_MISSING_API_VERSION = 5003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class ApexLogsError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'WRITE_FAILED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ValidationError(ApexLogsError):
    """Local input that cannot be interpreted. Never retried."""

    @classmethod
    def invalid_start_time(cls, value: str) -> "ValidationError":
        return cls(
            code=ErrorCode.INVALID_START_TIME,
            message="Invalid StartTime",
            details={"value": value},
        )


class TransportError(ApexLogsError):
    """Remote query or body fetch failure."""

    @classmethod
    def request_failed(cls, url: str, reason: str, status_code: int | None = None) -> "TransportError":
        details: dict[str, Any] = {"url": url, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        return cls(
            code=ErrorCode.TRANSPORT_REQUEST_FAILED,
            message=f"request failed: {reason}",
            retryable=True,
            details=details,
        )

    @classmethod
    def decode_failed(cls, url: str) -> "TransportError":
        return cls(
            code=ErrorCode.TRANSPORT_DECODE_FAILED,
            message="response decode failed",
            details={"url": url},
        )


class WriteError(ApexLogsError):
    """Filesystem failure while writing an artifact."""

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "WriteError":
        return cls(
            code=ErrorCode.WRITE_FAILED,
            message=f"Failed to write {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ConfigError(ApexLogsError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ProjectError(ApexLogsError):
    """sfdx-project.json discovery and parsing errors."""

    @classmethod
    def not_found(cls, start: str) -> "ProjectError":
        return cls(
            code=ErrorCode.PROJECT_NOT_FOUND,
            message="sfdx-project.json not found. Run inside a valid SFDX project.",
            details={"start": start},
        )

    @classmethod
    def invalid(cls, path: str, reason: str) -> "ProjectError":
        return cls(
            code=ErrorCode.PROJECT_INVALID,
            message=f"Invalid sfdx-project.json: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def missing_api_version(cls, path: str) -> "ProjectError":
        return cls(
            code=ErrorCode.PROJECT_MISSING_API_VERSION,
            message="sfdx-project.json is missing sourceApiVersion.",
            details={"path": path},
        )


class InternalError(ApexLogsError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
