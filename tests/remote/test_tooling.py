"""Tests for the Tooling REST API client."""

from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from apexlogs.core.errors import ErrorCode, TransportError
from apexlogs.remote.tooling import (
    ToolingClient,
    build_body_url,
    build_logs_query,
    build_query_url,
)

INSTANCE = "https://example.my.salesforce.com/"


def _client(handler: httpx.MockTransport) -> ToolingClient:
    return ToolingClient(INSTANCE, "token-123", "60.0", transport=handler)


class TestQueryBuilders:
    """SOQL and URL construction."""

    def test_query_clamps_limit(self) -> None:
        assert build_logs_query(500).endswith("LIMIT 200")
        assert build_logs_query(0).endswith("LIMIT 1")

    def test_query_orders_newest_first(self) -> None:
        soql = build_logs_query(10)
        assert "FROM ApexLog" in soql
        assert "ORDER BY StartTime DESC, Id DESC" in soql

    def test_query_url_encodes_soql(self) -> None:
        url = build_query_url(INSTANCE, "60.0", "SELECT Id FROM ApexLog")
        assert url == "https://example.my.salesforce.com/services/data/v60.0/tooling/query?q=SELECT%20Id%20FROM%20ApexLog"

    def test_body_url(self) -> None:
        url = build_body_url(INSTANCE, "60.0", "07L1")
        assert url == "https://example.my.salesforce.com/services/data/v60.0/tooling/sobjects/ApexLog/07L1/Body"


class TestToolingClient:
    """HTTP behavior against a mock transport."""

    def test_query_logs_maps_records(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "records": [
                        {
                            "Id": "07L2",
                            "StartTime": "2024-01-02T03:04:06.000+0000",
                            "LogLength": 20,
                            "LogUser": {"Name": "Jane Doe"},
                        },
                        {"Id": "07L1", "StartTime": "2024-01-02T03:04:05.000+0000", "LogLength": 10},
                    ]
                },
            )

        with _client(httpx.MockTransport(handler)) as client:
            logs = client.query_logs(250)

        assert [d.id for d in logs] == ["07L2", "07L1"]
        assert logs[0].owner_name == "Jane Doe"
        assert logs[1].owner_name == ""
        request = seen[0]
        assert request.headers["Authorization"] == "Bearer token-123"
        soql = parse_qs(urlparse(str(request.url)).query)["q"][0]
        assert soql.endswith("LIMIT 200")

    def test_fetch_body_returns_bytes(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/services/data/v60.0/tooling/sobjects/ApexLog/07L1/Body"
            return httpx.Response(200, content=b"59.0 APEX_CODE,DEBUG\n")

        with _client(httpx.MockTransport(handler)) as client:
            assert client.fetch_body("07L1") == b"59.0 APEX_CODE,DEBUG\n"

    def test_error_status_raises_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json=[{"errorCode": "INVALID_SESSION_ID"}])

        with _client(httpx.MockTransport(handler)) as client, pytest.raises(TransportError) as exc_info:
            client.query_logs(10)

        assert exc_info.value.code == ErrorCode.TRANSPORT_REQUEST_FAILED
        assert exc_info.value.details["status_code"] == 401

    def test_network_error_raises_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _client(httpx.MockTransport(handler)) as client, pytest.raises(TransportError) as exc_info:
            client.fetch_body("07L1")

        assert "connection refused" in exc_info.value.message

    def test_bad_json_raises_decode_failed(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>maintenance</html>")

        with _client(httpx.MockTransport(handler)) as client, pytest.raises(TransportError) as exc_info:
            client.query_logs(10)

        assert exc_info.value.code == ErrorCode.TRANSPORT_DECODE_FAILED

    def test_missing_records_raises_decode_failed(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"done": True})

        with _client(httpx.MockTransport(handler)) as client, pytest.raises(TransportError) as exc_info:
            client.query_logs(10)

        assert exc_info.value.code == ErrorCode.TRANSPORT_DECODE_FAILED
