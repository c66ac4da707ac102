"""Salesforce Tooling REST API client for ApexLog records.

Takes an already-issued access token; obtaining one is the host's job.
Requests are made once. Callers that want retries wrap the client.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx
import structlog

from apexlogs.core.errors import TransportError
from apexlogs.logs.limits import clamp_limit
from apexlogs.logs.models import LogDescriptor

logger = structlog.get_logger()

USER_AGENT = "apexlogs/0.1.0"


def build_logs_query(limit: int) -> str:
    return (
        "SELECT Id, StartTime, Operation, Application, DurationMilliseconds, "
        "Status, Request, LogLength, LogUser.Name FROM ApexLog "
        f"ORDER BY StartTime DESC, Id DESC LIMIT {clamp_limit(limit)}"
    )


def build_query_url(instance_url: str, api_version: str, soql: str) -> str:
    base = instance_url.rstrip("/")
    return f"{base}/services/data/v{api_version}/tooling/query?q={quote(soql, safe='')}"


def build_body_url(instance_url: str, api_version: str, log_id: str) -> str:
    base = instance_url.rstrip("/")
    return f"{base}/services/data/v{api_version}/tooling/sobjects/ApexLog/{quote(log_id, safe='')}/Body"


class ToolingClient:
    """``LogsApiClient`` over httpx.

    One ``httpx.Client`` is shared across export worker threads; httpx
    clients are thread-safe.
    """

    def __init__(
        self,
        instance_url: str,
        access_token: str,
        api_version: str,
        *,
        timeout_sec: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.instance_url = instance_url
        self.api_version = api_version
        self._http = httpx.Client(
            headers={
                "Authorization": f"Bearer {access_token}",
                "User-Agent": USER_AGENT,
            },
            timeout=timeout_sec,
            transport=transport,
        )

    def __enter__(self) -> ToolingClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _get(self, url: str) -> httpx.Response:
        try:
            response = self._http.get(url)
        except httpx.HTTPError as e:
            raise TransportError.request_failed(url, str(e)) from e
        if not response.is_success:
            reason = f"{response.status_code} {response.reason_phrase}".strip()
            raise TransportError.request_failed(url, reason, response.status_code)
        return response

    def query_logs(self, page_size: int) -> list[LogDescriptor]:
        url = build_query_url(self.instance_url, self.api_version, build_logs_query(page_size))
        response = self._get(url)
        try:
            payload: dict[str, Any] = response.json()
            records = payload["records"]
            descriptors = [LogDescriptor.from_record(r) for r in records]
        except (ValueError, KeyError, TypeError) as e:
            raise TransportError.decode_failed(url) from e
        logger.debug("tooling_query_done", count=len(descriptors))
        return descriptors

    def fetch_body(self, log_id: str) -> bytes:
        response = self._get(build_body_url(self.instance_url, self.api_version, log_id))
        return response.content
