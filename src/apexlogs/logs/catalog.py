"""Catalog of available logs, read through a remote API client."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import structlog

from apexlogs.logs.limits import clamp_limit
from apexlogs.logs.models import LogDescriptor

logger = structlog.get_logger()


class LogsApiClient(Protocol):
    """Remote capabilities the pipeline depends on.

    Both calls may be slow and may raise ``TransportError``; callers do not
    retry them.
    """

    def query_logs(self, page_size: int) -> Sequence[LogDescriptor]: ...

    def fetch_body(self, log_id: str) -> bytes: ...


def catalog(client: LogsApiClient, page_size: int) -> list[LogDescriptor]:
    """Query one page of logs, in the order the remote returns them.

    Transport failures propagate unchanged; there are no partial results.
    """
    effective = clamp_limit(page_size)
    descriptors = list(client.query_logs(effective))
    logger.info(
        "catalog_queried",
        requested=page_size,
        page_size=effective,
        count=len(descriptors),
    )
    return descriptors
