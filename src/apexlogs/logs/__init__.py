"""Debug log catalog, export and prefetch."""

from apexlogs.logs.catalog import LogsApiClient, catalog
from apexlogs.logs.export import export_all, export_one, run_with_concurrency
from apexlogs.logs.limits import clamp_limit
from apexlogs.logs.models import (
    ExportFailure,
    ExportRequest,
    ExportResult,
    LogDescriptor,
    SavedArtifact,
)
from apexlogs.logs.naming import build_log_filename, sanitize_owner
from apexlogs.logs.prefetch import (
    KeyValueStore,
    MemoryStateStore,
    PrefetchState,
    PrefetchStateStore,
    YamlStateStore,
)
from apexlogs.logs.service import LogService
from apexlogs.logs.timefmt import format_start_time_utc

__all__ = [
    "ExportFailure",
    "ExportRequest",
    "ExportResult",
    "KeyValueStore",
    "LogDescriptor",
    "LogService",
    "LogsApiClient",
    "MemoryStateStore",
    "PrefetchState",
    "PrefetchStateStore",
    "SavedArtifact",
    "YamlStateStore",
    "build_log_filename",
    "catalog",
    "clamp_limit",
    "export_all",
    "export_one",
    "format_start_time_utc",
    "run_with_concurrency",
    "sanitize_owner",
]
