"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides an in-memory stand-in for the tooling API client.
"""

import sys
import threading
import time
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from apexlogs.core.errors import TransportError  # noqa: E402
from apexlogs.logs.models import LogDescriptor  # noqa: E402


class FakeLogsClient:
    """Records every call and tracks peak concurrent body fetches."""

    def __init__(
        self,
        descriptors: Iterable[LogDescriptor] = (),
        bodies: dict[str, bytes] | None = None,
        failing: Iterable[str] = (),
        delay: float = 0.0,
    ) -> None:
        self.descriptors = list(descriptors)
        self.bodies = bodies or {}
        self.failing = set(failing)
        self.delay = delay
        self.queries: list[int] = []
        self.fetched: list[str] = []
        self.max_in_flight = 0
        self._in_flight = 0
        self._lock = threading.Lock()

    def query_logs(self, page_size: int) -> list[LogDescriptor]:
        self.queries.append(page_size)
        return self.descriptors[:page_size]

    def fetch_body(self, log_id: str) -> bytes:
        with self._lock:
            self._in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self._in_flight)
            self.fetched.append(log_id)
        try:
            if self.delay:
                time.sleep(self.delay)
            if log_id in self.failing:
                raise TransportError.request_failed(f"https://example.test/{log_id}", "503 Service Unavailable", 503)
            return self.bodies.get(log_id, f"body of {log_id}\n".encode())
        finally:
            with self._lock:
                self._in_flight -= 1

    def close(self) -> None:
        pass

    def __enter__(self) -> "FakeLogsClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def make_descriptor(index: int, owner: str = "user@example.com") -> LogDescriptor:
    return LogDescriptor(
        id=f"07Lxx00000000{index:02d}",
        start_time=f"2024-01-02T03:04:{index % 60:02d}.000+0000",
        length=100 + index,
        owner_name=owner,
    )


@pytest.fixture
def descriptors() -> list[LogDescriptor]:
    return [make_descriptor(i) for i in range(1, 4)]


@pytest.fixture
def fake_client() -> Callable[..., FakeLogsClient]:
    """Factory for FakeLogsClient instances."""
    return FakeLogsClient


@pytest.fixture
def descriptor_factory() -> Callable[..., LogDescriptor]:
    return make_descriptor
