"""Concurrent download of log bodies into artifact files.

A fixed pool of worker threads shares one cursor over the descriptor list.
Each worker claims the next index under a lock, exports that log, and loops
until the list is exhausted. ``export_all`` returns once every worker has
exited. Per-log failures are collected, never raised, so one bad log cannot
stop its siblings. Exceptions outside the error taxonomy are recorded as
internal errors for that log.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import structlog

from apexlogs.core.errors import ApexLogsError, InternalError, WriteError
from apexlogs.logs.catalog import LogsApiClient
from apexlogs.logs.models import (
    ExportFailure,
    ExportRequest,
    ExportResult,
    LogDescriptor,
    SavedArtifact,
)
from apexlogs.logs.naming import build_log_filename
from apexlogs.logs.timefmt import format_start_time_utc

logger = structlog.get_logger()


class _Cursor:
    """Shared index handing out each position exactly once."""

    def __init__(self, size: int) -> None:
        self._size = size
        self._next = 0
        self._lock = threading.Lock()

    def claim(self) -> int | None:
        with self._lock:
            if self._next >= self._size:
                return None
            index = self._next
            self._next += 1
            return index


def run_with_concurrency[T](
    items: Sequence[T],
    concurrency: int,
    fn: Callable[[T], None],
) -> None:
    """Call ``fn`` once per item with at most ``concurrency`` calls in flight.

    Items run in no particular order. Returns after every worker has exited.
    An exception from ``fn`` ends that worker and is re-raised here once
    the others finish, so ``fn`` should handle its own item errors.
    """
    if not items:
        return
    workers = min(max(1, concurrency), len(items))
    cursor = _Cursor(len(items))

    def worker() -> None:
        while (index := cursor.claim()) is not None:
            fn(items[index])

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="apexlogs-export") as pool:
        futures = [pool.submit(worker) for _ in range(workers)]
    for future in futures:
        future.result()


def _write_artifact(path: Path, body: bytes) -> None:
    try:
        path.write_bytes(body)
    except OSError as e:
        raise WriteError.write_failed(str(path), str(e)) from e


def export_one(client: LogsApiClient, descriptor: LogDescriptor, target_dir: Path) -> SavedArtifact:
    """Fetch one log body and write it to its artifact path.

    The name is computed before the fetch, so an unparseable start time
    costs no network round trip.

    Raises:
        ValidationError: Start time cannot be parsed.
        TransportError: The body fetch failed.
        WriteError: The artifact could not be written.
    """
    start = format_start_time_utc(descriptor.start_time)
    path = target_dir / build_log_filename(start, descriptor.owner_name, descriptor.id)
    body = client.fetch_body(descriptor.id)
    _write_artifact(path, body)
    return SavedArtifact(id=descriptor.id, path=path, size=len(body))


def export_all(
    client: LogsApiClient,
    descriptors: Sequence[LogDescriptor],
    target_dir: Path,
    concurrency: int,
    *,
    on_progress: Callable[[LogDescriptor], None] | None = None,
) -> ExportResult:
    """Export every descriptor's body into ``target_dir``.

    Existing artifacts with the same name are overwritten. ``on_progress`` is
    called from the worker thread after each attempt, successful or not.

    Raises:
        WriteError: ``target_dir`` cannot be created.
    """
    result = ExportResult()
    if not descriptors:
        return result

    target_dir = Path(target_dir)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteError.write_failed(str(target_dir), str(e)) from e

    lock = threading.Lock()
    requests = [ExportRequest(d, target_dir, concurrency) for d in descriptors]

    def export(request: ExportRequest) -> None:
        descriptor = request.descriptor
        try:
            saved = export_one(client, descriptor, request.target_dir)
        except ApexLogsError as e:
            logger.warning("log_export_failed", log_id=descriptor.id, error=e.error_name, reason=e.message)
            with lock:
                result.failed.append(ExportFailure.from_error(descriptor, e))
        except Exception as e:
            logger.exception("log_export_crashed", log_id=descriptor.id)
            error = InternalError.unexpected(str(e) or type(e).__name__, type=type(e).__name__)
            with lock:
                result.failed.append(ExportFailure.from_error(descriptor, error))
        else:
            logger.debug("log_exported", log_id=descriptor.id, file=str(saved.path), size=saved.size)
            with lock:
                result.saved.append(saved)
        if on_progress is not None:
            on_progress(descriptor)

    run_with_concurrency(requests, concurrency, export)

    logger.info(
        "export_completed",
        target_dir=str(target_dir),
        total=len(descriptors),
        succeeded=result.succeeded,
        failed=len(result.failed),
    )
    return result
