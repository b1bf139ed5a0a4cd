"""Background service that checks the alarms periodically."""

from __future__ import annotations

import logging
import os
import tempfile
import threading

from filelock import FileLock, Timeout

from qdesktop.alarm_clock import AlarmClock

logger = logging.getLogger(__name__)

DEFAULT_LOCK = os.path.join(tempfile.gettempdir(), "qdesktop_alarm_service.lock")
DEFAULT_INTERVAL = 2.0


class ServiceAlreadyRunning(RuntimeError):
    """Another alarm service holds the single-instance lock."""


class AlarmService:
    """Runs :meth:`AlarmClock.check_alarms` on a timer, one instance at a time."""

    def __init__(
        self,
        clock: AlarmClock | None = None,
        lock_path: str | os.PathLike | None = None,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        self.lock_path = os.fspath(lock_path) if lock_path is not None else DEFAULT_LOCK
        self.interval = interval
        self._lock = FileLock(self.lock_path, timeout=0)
        self._acquire_lock()
        self.clock = clock if clock is not None else AlarmClock()
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

    def _acquire_lock(self) -> None:
        try:
            self._lock.acquire()
        except Timeout:
            logger.debug("Service already running")
            raise ServiceAlreadyRunning(self.lock_path) from None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Reload the alarms and begin checking them in the background."""
        if self.running:
            return
        if not self._lock.is_locked:
            self._acquire_lock()
        self.clock.load_alarms()
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop_event,), daemon=True
        )
        self._thread.start()
        logger.debug("AlarmService started in background mode")

    def stop(self) -> None:
        """Stop checking and give up the single-instance lock."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        self._lock.release()

    def check(self) -> None:
        self.clock.check_alarms()

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            self.check()

    def __enter__(self) -> AlarmService:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()