"""Qt worker base with the signals shared by background theme jobs."""

from __future__ import annotations

from threading import Event

from PySide6.QtCore import QObject, Signal

from themelayers.errors import format_error_for_user


class BaseWorker(QObject):
    """Base class for workers moved onto a QThread.

    Usage:
        worker = SnapshotBuildWorker(themes_root, ["arch"])
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        thread.finished.connect(thread.deleteLater)
        thread.start()
    """

    started = Signal()
    progress = Signal(int, int, str)    # current, total, theme id
    finished = Signal(object)           # job result
    error = Signal(str)                 # user-facing message
    cancelled = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._cancel_event = Event()

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def _is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def _fail(self, exc: Exception) -> None:
        self.error.emit(format_error_for_user(exc))

    def run(self) -> None:
        """Override in subclass. Called when the thread starts."""
        raise NotImplementedError
