"""Tests for CLI progress helpers."""

import threading

from apexlogs.core.progress import export_progress, is_console_suppressed, pluralize, suppress_console_logs


class TestSuppression:
    def test_suppression_visible_from_other_threads(self) -> None:
        """Worker threads see the suppression flag set by the main thread."""
        seen: list[bool] = []

        with suppress_console_logs():
            t = threading.Thread(target=lambda: seen.append(is_console_suppressed()))
            t.start()
            t.join()

        assert seen == [True]
        assert not is_console_suppressed()


class TestPluralize:
    def test_singular(self) -> None:
        assert pluralize(1, "log") == "1 log"

    def test_plural(self) -> None:
        assert pluralize(3, "log") == "3 logs"
        assert pluralize(0, "entry", "entries") == "0 entries"


class TestExportProgress:
    def test_non_tty_yields_noop(self) -> None:
        """Under pytest stderr is not a TTY, so advance is a no-op."""
        with export_progress(10) as advance:
            advance()
            advance()
