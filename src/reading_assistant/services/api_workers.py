"""Async workers for non-blocking backend calls using Qt threading."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Set

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

logger = logging.getLogger(__name__)

ResultCallback = Callable[[Any], None]
ErrorCallback = Callable[[BaseException], None]


class WorkerSignals(QObject):
    """
    Signals for communicating results from worker threads.

    QRunnable doesn't inherit from QObject, so we need a separate
    QObject to hold the signals.
    """
    finished = Signal()
    error = Signal(object)  # the exception raised by the call
    result = Signal(object)


class ApiCallWorker(QRunnable):
    """
    Worker that runs one blocking backend call in a background thread.

    Uses Qt's thread pool for efficient thread management.
    Emits ``result`` with the return value or ``error`` with the exception.
    """

    def __init__(self, fn: Callable[[], Any]):
        super().__init__()
        self.fn = fn
        self.signals = WorkerSignals()
        self.setAutoDelete(True)

    @Slot()
    def run(self):
        """Execute the call in background thread."""
        try:
            value = self.fn()
            self.signals.result.emit(value)
        except Exception as e:
            # Services raise typed errors; anything else is still reported, never lost
            self.signals.error.emit(e)
        finally:
            self.signals.finished.emit()


class TaskRunner(ABC):
    """Runs a backend call off the UI thread and reports back on the UI thread."""

    @abstractmethod
    def submit(self, fn: Callable[[], Any], on_result: ResultCallback, on_error: ErrorCallback) -> None:
        """Schedule ``fn``; exactly one of the callbacks is invoked afterwards."""
        pass


class _TaskRequest(QObject):
    """Helper living in the UI thread so worker signals are delivered there (queued)."""

    def __init__(self, on_result: ResultCallback, on_error: ErrorCallback, owner: "ThreadPoolTaskRunner"):
        super().__init__()
        self._on_result = on_result
        self._on_error = on_error
        self._owner = owner

    @Slot(object)
    def handle_result(self, value):
        self._on_result(value)

    @Slot(object)
    def handle_error(self, error):
        self._on_error(error)

    @Slot()
    def handle_finished(self):
        self._owner._release(self)


class ThreadPoolTaskRunner(TaskRunner):
    """TaskRunner backed by the global QThreadPool."""

    def __init__(self, thread_pool: QThreadPool = None):
        self.thread_pool = thread_pool or QThreadPool.globalInstance()
        logger.debug("Thread pool max threads: %s", self.thread_pool.maxThreadCount())

        # Keep references to helper objects so they don't get garbage collected
        # while workers are running in background threads
        self._active: Set[_TaskRequest] = set()

    def submit(self, fn, on_result, on_error) -> None:
        request = _TaskRequest(on_result, on_error, self)
        self._active.add(request)

        worker = ApiCallWorker(fn)
        worker.signals.result.connect(request.handle_result)
        worker.signals.error.connect(request.handle_error)
        worker.signals.finished.connect(request.handle_finished)
        self.thread_pool.start(worker)

    @property
    def active_count(self) -> int:
        return len(self._active)

    def _release(self, request: _TaskRequest) -> None:
        self._active.discard(request)
