"""Entry point for hosts (CLI, editor extension) driving the pipeline."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import structlog

from apexlogs.config.models import ApexLogsConfig
from apexlogs.core.errors import WriteError
from apexlogs.logs import catalog as catalog_ops
from apexlogs.logs import export as export_ops
from apexlogs.logs.catalog import LogsApiClient
from apexlogs.logs.models import ExportResult, LogDescriptor, SavedArtifact
from apexlogs.logs.prefetch import PrefetchStateStore

logger = structlog.get_logger()


class LogService:
    """Catalog, export and prefetch operations bound to one API client.

    The prefetch flag is read from the store once, on first use, and then
    cached for the life of the service.
    """

    def __init__(
        self,
        client: LogsApiClient,
        prefetch: PrefetchStateStore,
        config: ApexLogsConfig | None = None,
    ) -> None:
        self._client = client
        self._prefetch = prefetch
        self._config = config or ApexLogsConfig()
        self._prefetch_enabled: bool | None = None

    @property
    def default_target_dir(self) -> Path:
        return Path(self._config.export.output_dir)

    def catalog(self, page_size: int | None = None) -> list[LogDescriptor]:
        if page_size is None:
            page_size = self._config.export.limit
        return catalog_ops.catalog(self._client, page_size)

    def export_all(
        self,
        descriptors: Sequence[LogDescriptor],
        target_dir: Path | None = None,
        concurrency: int | None = None,
        *,
        on_progress: Callable[[LogDescriptor], None] | None = None,
    ) -> ExportResult:
        return export_ops.export_all(
            self._client,
            descriptors,
            target_dir or self.default_target_dir,
            self._config.export.concurrency if concurrency is None else concurrency,
            on_progress=on_progress,
        )

    def download(self, descriptor: LogDescriptor, target_dir: Path | None = None) -> SavedArtifact:
        """Export a single log on demand. Item errors are raised.

        Raises:
            WriteError: The target directory or the artifact cannot be written.
        """
        target = Path(target_dir or self.default_target_dir)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError.write_failed(str(target), str(e)) from e
        return export_ops.export_one(self._client, descriptor, target)

    def get_prefetch_enabled(self) -> bool:
        if self._prefetch_enabled is None:
            self._prefetch_enabled = self._prefetch.restore()
        return self._prefetch_enabled

    def set_prefetch_enabled(self, enabled: bool) -> None:
        self._prefetch_enabled = bool(enabled)
        self._prefetch.persist(self._prefetch_enabled)
        logger.info("prefetch_toggled", enabled=self._prefetch_enabled)

    def refresh(
        self,
        page_size: int | None = None,
        target_dir: Path | None = None,
    ) -> tuple[list[LogDescriptor], ExportResult | None]:
        """List the catalog and, when prefetch is on, export it right away."""
        descriptors = self.catalog(page_size)
        if not self.get_prefetch_enabled():
            return descriptors, None
        logger.debug("prefetch_started", count=len(descriptors))
        return descriptors, self.export_all(descriptors, target_dir)
