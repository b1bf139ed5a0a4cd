"""Buzzer control through a sysfs LED brightness file."""

from __future__ import annotations

import logging
import threading
from typing import BinaryIO

logger = logging.getLogger(__name__)

DEFAULT_DEVICE = "/sys/devices/platform/leds/leds/beep/brightness"


class Beep:
    """Reference-counted access to the buzzer device.

    The device file is opened on the first :meth:`acquire` and closed when
    the matching last :meth:`release` happens.
    """

    _instance: Beep | None = None
    _instance_lock = threading.Lock()

    def __init__(self, device_path: str = DEFAULT_DEVICE) -> None:
        self.device_path = device_path
        self._lock = threading.Lock()
        self._ref_count = 0
        self._device: BinaryIO | None = None

    @classmethod
    def instance(cls) -> Beep:
        """Return the process-wide buzzer bound to the default device."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def acquire(self) -> None:
        """Take a reference; the first one opens the device."""
        with self._lock:
            self._ref_count += 1
            if self._ref_count == 1:
                self._open_device()

    def release(self) -> None:
        """Drop a reference; the last one closes the device."""
        with self._lock:
            if self._ref_count == 0:
                raise RuntimeError("release() called without a matching acquire()")
            self._ref_count -= 1
            if self._ref_count == 0:
                self._close_device()

    def set_state(self, active: bool) -> bool:
        """Switch the buzzer on or off. Return whether the write succeeded."""
        with self._lock:
            if self._device is None:
                return False
            try:
                written = self._device.write(b"1" if active else b"0")
            except OSError:
                logger.warning("Failed to set beep state")
                return False
            if written != 1:
                logger.warning("Failed to set beep state")
                return False
            return True

    def is_open(self) -> bool:
        """Whether the device file is currently open."""
        return self._device is not None

    def __enter__(self) -> Beep:
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def _open_device(self) -> bool:
        try:
            self._device = open(self.device_path, "wb", buffering=0)
        except OSError:
            logger.error("Failed to open beep device %s", self.device_path)
            self._device = None
            return False
        return True

    def _close_device(self) -> None:
        if self._device is not None:
            self._device.close()
            self._device = None