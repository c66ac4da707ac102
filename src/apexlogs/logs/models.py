"""Log catalog and export data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from apexlogs.core.errors import ApexLogsError


@dataclass(frozen=True, slots=True)
class LogDescriptor:
    """Metadata for one remote debug log.

    ``id`` is unique within an org. ``start_time`` is kept exactly as the
    remote sent it; normalization happens at export time.
    """

    id: str
    start_time: str
    length: int
    owner_name: str = ""
    operation: str = ""
    application: str = ""
    status: str = ""
    request: str = ""
    duration_ms: int = 0

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> LogDescriptor:
        """Build a descriptor from a tooling API ``ApexLog`` record."""
        user = record.get("LogUser") or {}
        owner = user.get("Name") or user.get("Username") or ""
        return cls(
            id=str(record["Id"]),
            start_time=str(record.get("StartTime") or ""),
            length=max(0, int(record.get("LogLength") or 0)),
            owner_name=str(owner),
            operation=str(record.get("Operation") or ""),
            application=str(record.get("Application") or ""),
            status=str(record.get("Status") or ""),
            request=str(record.get("Request") or ""),
            duration_ms=int(record.get("DurationMilliseconds") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "startTime": self.start_time,
            "length": self.length,
            "owner": self.owner_name,
            "operation": self.operation,
            "application": self.application,
            "status": self.status,
            "request": self.request,
            "durationMs": self.duration_ms,
        }


@dataclass(frozen=True, slots=True)
class ExportRequest:
    """One descriptor bound for one target directory."""

    descriptor: LogDescriptor
    target_dir: Path
    concurrency: int = 1


@dataclass(frozen=True, slots=True)
class SavedArtifact:
    id: str
    path: Path
    size: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "file": str(self.path), "size": self.size}


@dataclass(frozen=True, slots=True)
class ExportFailure:
    """A descriptor that could not be exported, and why."""

    descriptor: LogDescriptor
    reason: str
    error: str

    @classmethod
    def from_error(cls, descriptor: LogDescriptor, exc: ApexLogsError) -> ExportFailure:
        return cls(descriptor=descriptor, reason=exc.message, error=exc.error_name)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.descriptor.id, "error": self.error, "message": self.reason}


@dataclass
class ExportResult:
    """Aggregate outcome of an export.

    Item failures land in ``failed``; the export itself never raises for them.
    """

    saved: list[SavedArtifact] = field(default_factory=list)
    failed: list[ExportFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.saved)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "saved": [s.to_dict() for s in self.saved],
            "errors": [f.to_dict() for f in self.failed],
        }
