"""Tests for themelayers.workers base and snapshot workers."""

from pathlib import Path

import pytest

from conftest import THEME_ID, create_base_theme, create_update_110, write_text
from themelayers.workers.base_worker import BaseWorker
from themelayers.workers.snapshot_worker import SnapshotBuildWorker


class TestBaseWorker:
    """Tests for the BaseWorker class."""

    def test_base_worker_creation(self):
        worker = BaseWorker()
        assert worker._cancel_event.is_set() is False

    def test_base_worker_cancel(self):
        """Test cancel sets the event and the _is_cancelled property."""
        worker = BaseWorker()
        assert worker._is_cancelled is False
        worker.cancel()
        assert worker._is_cancelled is True

    def test_base_worker_signals_exist(self):
        worker = BaseWorker()
        for name in ("started", "progress", "finished", "error", "cancelled"):
            assert hasattr(worker, name)

    def test_base_worker_run_not_implemented(self):
        worker = BaseWorker()
        with pytest.raises(NotImplementedError):
            worker.run()


class TestSnapshotBuildWorker:
    """Tests for the SnapshotBuildWorker class."""

    @pytest.fixture
    def collected(self):
        return {"started": 0, "progress": [], "finished": [], "error": [], "cancelled": 0}

    def _connect(self, worker, collected):
        def on_started():
            collected["started"] += 1

        def on_cancelled():
            collected["cancelled"] += 1

        worker.started.connect(on_started)
        worker.progress.connect(lambda current, total, theme_id: collected["progress"].append((current, total, theme_id)))
        worker.finished.connect(collected["finished"].append)
        worker.error.connect(collected["error"].append)
        worker.cancelled.connect(on_cancelled)

    def test_builds_each_theme(self, themes_root: Path, layered_theme: Path, collected):
        create_base_theme(themes_root / "plain")
        worker = SnapshotBuildWorker(themes_root, [THEME_ID, "plain"])
        self._connect(worker, collected)

        worker.run()

        assert collected["started"] == 1
        assert collected["progress"] == [(1, 2, THEME_ID), (2, 2, "plain")]
        assert collected["error"] == []
        [results] = collected["finished"]
        assert results[THEME_ID].version == "1.2.0"
        assert results["plain"] is None
        assert (layered_theme / "latest" / "theme.json").is_file()

    def test_reports_validation_error(self, themes_root: Path, base_theme: Path, collected):
        write_text(base_theme / "updates" / "1.1.0" / "layout.liquid", "x")
        worker = SnapshotBuildWorker(str(themes_root), [THEME_ID])
        self._connect(worker, collected)

        worker.run()

        assert collected["finished"] == []
        [message] = collected["error"]
        assert "missing theme.json" in message
        assert "1.1.0" in message

    def test_cancel_before_run(self, themes_root: Path, base_theme: Path, collected):
        create_update_110(base_theme)
        worker = SnapshotBuildWorker(themes_root, [THEME_ID])
        self._connect(worker, collected)
        worker.cancel()

        worker.run()

        assert collected["cancelled"] == 1
        assert collected["finished"] == []
        assert collected["progress"] == []
        assert not (base_theme / "latest").exists()
