"""Command-line entry point: desktop mode or background service mode."""

from __future__ import annotations

import argparse
import logging
import threading

from qdesktop.alarm_clock import AlarmClock
from qdesktop.alarm_service import AlarmService, ServiceAlreadyRunning
from qdesktop.beep import Beep
from qdesktop.service_manager import ServiceManager
from qdesktop.system_monitor import DEFAULT_SENSOR, SystemMonitor

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qdesktop", allow_abbrev=False)
    parser.add_argument("-service", dest="service", action="store_true",
                        help="run only the background services")
    parser.add_argument("--data-dir", default=None, help="directory for alarms.json")
    parser.add_argument("--lock-file", default=None, help="single-instance lock file")
    parser.add_argument("--beep-device", default=None, help="buzzer brightness file")
    parser.add_argument("--sensor", default=DEFAULT_SENSOR, help="CPU temperature sensor file")
    parser.add_argument("--run-for", type=float, default=None,
                        help="stop after this many seconds")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse the command line; unknown arguments are ignored."""
    args, _unknown = _build_parser().parse_known_args(argv)
    return args


def _wait(run_for: float | None) -> None:
    done = threading.Event()
    try:
        if run_for is not None:
            done.wait(max(run_for, 0.0))
        else:
            while not done.wait(1.0):
                pass
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    beep = Beep(args.beep_device) if args.beep_device else Beep.instance()
    clock = AlarmClock(args.data_dir, beep)
    try:
        service = AlarmService(clock, args.lock_file)
    except ServiceAlreadyRunning:
        logger.info("Service already running, exiting...")
        clock.close()
        return -1

    manager = ServiceManager([service])
    monitor: SystemMonitor | None = None
    manager.start_all()
    if not args.service:
        monitor = SystemMonitor(args.sensor)
        monitor.listeners.append(lambda temp: logger.info("CPU temperature: %s", temp))
        monitor.start()
    try:
        _wait(args.run_for)
    finally:
        if monitor is not None:
            monitor.stop()
        manager.stop_all()
        clock.close()
    return 0