"""Worker for rebuilding theme snapshots off the UI thread."""

from __future__ import annotations

from pathlib import Path

from themelayers.core.store import ThemeStore
from themelayers.workers.base_worker import BaseWorker


class SnapshotBuildWorker(BaseWorker):
    """Rebuilds ``latest/`` for each requested theme in a background thread.

    Cancellation is checked between themes; a build that has started runs
    to completion. ``finished`` carries a dict of theme id to SnapshotResult
    (None for themes without updates).
    """

    def __init__(self, themes_root: str | Path, theme_ids: list[str]) -> None:
        super().__init__()
        self._themes_root = Path(themes_root)
        self._theme_ids = list(theme_ids)

    def run(self) -> None:
        self.started.emit()
        try:
            store = ThemeStore(self._themes_root)
            results = {}
            total = len(self._theme_ids)
            for index, theme_id in enumerate(self._theme_ids, start=1):
                if self._is_cancelled:
                    self.cancelled.emit()
                    return
                self.progress.emit(index, total, theme_id)
                results[theme_id] = store.build_latest_snapshot(theme_id)
            self.finished.emit(results)
        except Exception as e:
            self._fail(e)
