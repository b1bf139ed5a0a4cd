"""CPU temperature polling from a hwmon sensor file."""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_SENSOR = "/sys/class/hwmon/hwmon0/temp1_input"
UNAVAILABLE = "N/A"
_READ_LIMIT = 10


def _to_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


def read_cpu_temp(path: str = DEFAULT_SENSOR) -> str:
    """Read a millidegree sensor file and format it as ``"12.34°C"``."""
    try:
        with open(path, "rb") as sensor:
            raw = sensor.read(_READ_LIMIT)
    except OSError:
        logger.warning("Failed to read file: %s", path)
        return UNAVAILABLE
    value = _to_float(raw.decode("utf-8", errors="replace").strip()) / 1000
    return f"{value:.2f}°C"


class SystemMonitor:
    """Keeps the latest CPU temperature and notifies listeners on change."""

    _instance: SystemMonitor | None = None
    _instance_lock = threading.Lock()

    def __init__(self, sensor_path: str = DEFAULT_SENSOR) -> None:
        self.sensor_path = sensor_path
        self.listeners: list[Callable[[str], None]] = []
        self._cpu_temp = ""
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

    @classmethod
    def instance(cls) -> SystemMonitor:
        """Return the process-wide monitor."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @property
    def cpu_temp(self) -> str:
        return self._cpu_temp

    def update(self) -> bool:
        """Re-read the sensor. Return whether the reading changed."""
        temp = read_cpu_temp(self.sensor_path)
        if temp == self._cpu_temp:
            return False
        self._cpu_temp = temp
        for listener in list(self.listeners):
            listener(temp)
        return True

    def start(self, interval: float = 1.0) -> None:
        """Poll the sensor every ``interval`` seconds in a background thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(interval, self._stop_event), daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop polling and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self, interval: float, stop_event: threading.Event) -> None:
        while not stop_event.wait(interval):
            self.update()