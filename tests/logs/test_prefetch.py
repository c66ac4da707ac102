"""Tests for the persisted prefetch toggle."""

from pathlib import Path
from typing import Any

import pytest

from apexlogs.config.constants import PREFETCH_LOG_BODIES_KEY
from apexlogs.logs.prefetch import (
    MemoryStateStore,
    PrefetchState,
    PrefetchStateStore,
    YamlStateStore,
)


class _BrokenStore:
    def get(self, key: str) -> Any | None:
        raise OSError("storage unavailable")

    def set(self, key: str, value: Any) -> None:
        raise OSError("read-only")


class TestPrefetchStateStore:
    """restore/persist contract."""

    def test_fresh_store_restores_false(self) -> None:
        assert PrefetchStateStore(MemoryStateStore()).restore() is False

    def test_persist_then_restore(self) -> None:
        store = PrefetchStateStore(MemoryStateStore())

        store.persist(True)
        assert store.restore() is True

        store.persist(False)
        assert store.restore() is False

    def test_get_failure_reads_as_false(self) -> None:
        assert PrefetchStateStore(_BrokenStore()).restore() is False

    def test_set_failure_swallowed(self) -> None:
        PrefetchStateStore(_BrokenStore()).persist(True)

    def test_uses_prefetch_key(self) -> None:
        backing = MemoryStateStore()
        PrefetchStateStore(backing).persist(True)
        assert backing.get(PREFETCH_LOG_BODIES_KEY) is True

    @pytest.mark.parametrize(("stored", "expected"), [(1, True), ("yes", True), (0, False), ("", False)])
    def test_stored_values_coerced_to_bool(self, stored: Any, expected: bool) -> None:
        backing = MemoryStateStore({PREFETCH_LOG_BODIES_KEY: stored})
        assert PrefetchStateStore(backing).restore() is expected

    def test_state(self) -> None:
        store = PrefetchStateStore(MemoryStateStore())
        assert store.state() is PrefetchState.DISABLED
        store.persist(True)
        assert store.state() is PrefetchState.ENABLED


class TestYamlStateStore:
    """File-backed durable store."""

    def test_missing_file_reads_none(self, tmp_path: Path) -> None:
        assert YamlStateStore(tmp_path / "state.yaml").get("anything") is None

    def test_survives_new_instance(self, tmp_path: Path) -> None:
        """Values persist across store instances (process restarts)."""
        path = tmp_path / "nested" / "state.yaml"
        PrefetchStateStore(YamlStateStore(path)).persist(True)

        assert PrefetchStateStore(YamlStateStore(path)).restore() is True
        assert path.read_text().startswith("# AUTO-GENERATED")

    def test_preserves_other_keys(self, tmp_path: Path) -> None:
        store = YamlStateStore(tmp_path / "state.yaml")
        store.set("other", "value")
        store.set(PREFETCH_LOG_BODIES_KEY, True)

        assert store.get("other") == "value"
        assert store.get(PREFETCH_LOG_BODIES_KEY) is True

    def test_corrupt_file_restores_false(self, tmp_path: Path) -> None:
        path = tmp_path / "state.yaml"
        path.write_text("key: [unclosed")

        assert PrefetchStateStore(YamlStateStore(path)).restore() is False

    def test_non_mapping_file_restores_false(self, tmp_path: Path) -> None:
        path = tmp_path / "state.yaml"
        path.write_text("- a\n- b\n")

        assert PrefetchStateStore(YamlStateStore(path)).restore() is False

    def test_unwritable_location_swallowed(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        store = PrefetchStateStore(YamlStateStore(blocker / "state.yaml"))

        store.persist(True)

        assert store.restore() is False
        assert not list(tmp_path.glob(".state-*"))
