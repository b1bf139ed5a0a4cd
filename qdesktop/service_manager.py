"""Starts and stops the background services together."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

logger = logging.getLogger(__name__)


class Service(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...


class ServiceManager:
    """Holds the services and starts or stops them in order."""

    def __init__(self, services: Iterable[Service] | None = None) -> None:
        if services is None:
            from qdesktop.alarm_service import AlarmService

            services = [AlarmService()]
        self.services: list[Service] = list(services)

    def start_all(self) -> None:
        logger.debug("Starting all services...")
        for service in self.services:
            service.start()

    def stop_all(self) -> None:
        logger.debug("Stopping all services...")
        for service in self.services:
            service.stop()