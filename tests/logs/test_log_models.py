"""Tests for the log data model."""

import dataclasses
from pathlib import Path

import pytest

from apexlogs.core.errors import TransportError
from apexlogs.logs.models import ExportFailure, ExportResult, LogDescriptor, SavedArtifact


class TestLogDescriptor:
    """LogDescriptor construction."""

    def test_from_record(self) -> None:
        record = {
            "Id": "07Lxx0000000001",
            "StartTime": "2024-01-02T03:04:05.000+0000",
            "LogLength": 1234,
            "LogUser": {"Name": "Jane Doe"},
            "Operation": "/apex/Page",
            "Application": "Browser",
            "Status": "Success",
            "Request": "Api",
            "DurationMilliseconds": 42,
        }

        d = LogDescriptor.from_record(record)

        assert d.id == "07Lxx0000000001"
        assert d.start_time == "2024-01-02T03:04:05.000+0000"
        assert d.length == 1234
        assert d.owner_name == "Jane Doe"
        assert d.operation == "/apex/Page"
        assert d.duration_ms == 42

    def test_from_record_username_fallback(self) -> None:
        d = LogDescriptor.from_record({"Id": "1", "StartTime": "x", "LogLength": 0, "LogUser": {"Username": "u@x"}})
        assert d.owner_name == "u@x"

    def test_from_record_missing_user(self) -> None:
        d = LogDescriptor.from_record({"Id": "1", "StartTime": "x", "LogLength": 5, "LogUser": None})
        assert d.owner_name == ""

    def test_immutable(self) -> None:
        d = LogDescriptor(id="1", start_time="x", length=0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            d.id = "2"  # type: ignore[misc]


class TestExportResult:
    """ExportResult aggregation."""

    def test_empty_is_ok(self) -> None:
        result = ExportResult()
        assert result.ok
        assert result.succeeded == 0

    def test_to_dict(self) -> None:
        d = LogDescriptor(id="07L2", start_time="x", length=0)
        result = ExportResult(
            saved=[SavedArtifact(id="07L1", path=Path("out/a.log"), size=3)],
            failed=[ExportFailure.from_error(d, TransportError.request_failed("u", "timeout"))],
        )

        assert result.to_dict() == {
            "ok": False,
            "saved": [{"id": "07L1", "file": str(Path("out/a.log")), "size": 3}],
            "errors": [{"id": "07L2", "error": "TRANSPORT_REQUEST_FAILED", "message": "request failed: timeout"}],
        }
        assert not result.ok
