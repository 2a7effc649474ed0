"""Background task running a callable on a QThread, with cancellation and cleanup."""

import logging
from typing import Any, Callable, Optional, Tuple

from PyQt6.QtCore import QThread, pyqtSignal

logger = logging.getLogger(__name__)

CANCEL_WAIT_MS = 100      # Wait time when cancelling previous task
CLEANUP_WAIT_MS = 200     # Wait time during widget close cleanup


class BackgroundTask(QThread):
    """
    Runs ``target`` off the GUI thread.

    Usage:
        task = BackgroundTask(target=fetch_defaults)
        task.result_ready.connect(on_success)
        task.error_occurred.connect(on_error)  # Receives Exception, not str
        task.start()

    Signals are emitted from the worker thread; slots on widgets run on the
    GUI thread through queued connections.
    """

    result_ready = pyqtSignal(object)
    error_occurred = pyqtSignal(Exception)

    def __init__(self, target: Callable[..., Any], args: Tuple = (),
                 kwargs: Optional[dict] = None, parent=None):
        super().__init__(parent)
        self._target = target
        self._args = args
        self._kwargs = kwargs or {}
        self.cancelled = False

    def run(self):
        try:
            result = self._target(*self._args, **self._kwargs)
            if not self.cancelled:
                self.result_ready.emit(result)
        except Exception as e:
            if not self.cancelled:
                self.error_occurred.emit(e)

    def cancel(self):
        """Cancel task; signals won't emit after this."""
        self.cancelled = True


class BackgroundTaskManager:
    """
    Keeps at most one live task for the owning widget.

    Starting a task cancels the previous one. Call ``cleanup`` from the
    owning widget's ``closeEvent``.
    """

    def __init__(self, owner=None):
        self._owner = owner
        self._current_task: Optional[BackgroundTask] = None

    @property
    def current_task(self) -> Optional[BackgroundTask]:
        return self._current_task

    def run(self, target: Callable[..., Any],
            on_success: Callable[[Any], None],
            on_error: Callable[[Exception], None],
            args: Tuple = (), kwargs: Optional[dict] = None) -> BackgroundTask:
        self._cancel_current(CANCEL_WAIT_MS)

        # Parented to the owner so a replaced task outlives its Python reference
        task = BackgroundTask(target=target, args=args, kwargs=kwargs, parent=self._owner)
        task.result_ready.connect(on_success)
        task.error_occurred.connect(on_error)
        self._current_task = task
        task.start()
        logger.debug(f"Started background task {getattr(target, '__name__', target)!r}")
        return task

    def cleanup(self):
        """Cancel and wait for the current task."""
        self._cancel_current(CLEANUP_WAIT_MS)
        self._current_task = None

    def _cancel_current(self, wait_ms: int) -> None:
        if self._current_task is not None and self._current_task.isRunning():
            self._current_task.cancel()
            self._current_task.wait(wait_ms)
