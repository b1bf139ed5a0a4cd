"""Alarm list with JSON persistence and minute-resolution triggering."""

from __future__ import annotations

import datetime as dt
import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from qdesktop.beep import Beep

logger = logging.getLogger(__name__)

ALARMS_FILE_NAME = "alarms.json"
NO_TIME = "--:--"
_TIME = re.compile(r"(\d{2}):(\d{2})")


def parse_time(text: str) -> dt.time | None:
    """Parse ``"hh:mm"``; return ``None`` when the text is not a valid time."""
    match = _TIME.fullmatch(text or "")
    if match is None:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return dt.time(hour, minute)


def format_time(value: dt.time | None) -> str:
    """Format a time as ``"hh:mm"``; an absent time gives an empty string."""
    if value is None:
        return ""
    return f"{value.hour:02d}:{value.minute:02d}"


def _default_data_dir() -> Path:
    base = os.environ.get("XDG_DATA_HOME") or os.path.join(Path.home(), ".local", "share")
    return Path(base) / "QDesktop"


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return False


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return round(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return 0


@dataclass
class Alarm:
    """One alarm; ``repeat_days`` holds weekdays with Monday as 0."""

    time: dt.time | None
    active: bool = True
    is_triggered: bool = False
    repeat_days: list = field(default_factory=list)
    label: str = ""

    def time_str(self) -> str:
        return format_time(self.time) if self.time is not None else NO_TIME

    def matches(self, moment: dt.datetime) -> bool:
        return (
            self.time is not None
            and self.time.hour == moment.hour
            and self.time.minute == moment.minute
        )


class AlarmClock:
    """Keeps the alarms, stores them on disk and sounds the buzzer."""

    def __init__(self, data_dir: str | os.PathLike | None = None, beep: Beep | None = None) -> None:
        self.data_dir = Path(data_dir) if data_dir is not None else _default_data_dir()
        self.beep = beep if beep is not None else Beep.instance()
        self.listeners: list[Callable[[], None]] = []
        self._alarms: list[Alarm] = []
        self._beeping = False
        self._closed = False
        self.load_alarms()
        self.beep.acquire()

    @property
    def alarms(self) -> list[Alarm]:
        return list(self._alarms)

    def _notify(self) -> None:
        for listener in list(self.listeners):
            listener()

    def alarms_file(self) -> Path:
        """Path of the alarms file; its directory is created if missing."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir / ALARMS_FILE_NAME

    def save_alarms(self) -> None:
        records = [
            {
                "time": format_time(alarm.time),
                "active": alarm.active,
                "repeatDays": list(alarm.repeat_days),
                "label": alarm.label,
                "isTriggered": alarm.is_triggered,
            }
            for alarm in self._alarms
        ]
        try:
            self.alarms_file().write_text(json.dumps(records, indent=4), encoding="utf-8")
        except OSError as error:
            logger.warning("Failed to save alarms: %s", error)

    def load_alarms(self) -> None:
        """Replace the alarms with those stored on disk, if the file is usable."""
        path = self.alarms_file()
        if not path.exists():
            return
        try:
            raw = path.read_bytes()
        except OSError:
            logger.debug("Failed to open alarms file")
            return
        try:
            document = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as error:
            logger.debug("JSON parse error: %s", error)
            return
        if not isinstance(document, list):
            return

        self._alarms = []
        for record in document:
            if not isinstance(record, dict):
                record = {}
            time = parse_time(_to_text(record.get("time")))
            if time is None:
                continue
            repeat_days = record.get("repeatDays")
            self._alarms.append(
                Alarm(
                    time=time,
                    active=_to_bool(record.get("active", True)),
                    is_triggered=_to_bool(record.get("isTriggered", False)),
                    repeat_days=list(repeat_days) if isinstance(repeat_days, list) else [],
                    label=_to_text(record.get("label")),
                )
            )
        self._notify()

    def add_alarm(self, time: str, repeat_days: list | None = None, label: str = "") -> Alarm:
        alarm = Alarm(
            time=parse_time(time),
            repeat_days=list(repeat_days or []),
            label=label,
        )
        self._alarms.append(alarm)
        self._notify()
        self.save_alarms()
        return alarm

    def remove_alarm(self, index: int) -> bool:
        """Remove the alarm at ``index``. Return whether one was removed."""
        if not 0 <= index < len(self._alarms):
            return False
        del self._alarms[index]
        self._notify()
        self.save_alarms()
        return True

    def toggle_alarm(self, index: int) -> bool:
        """Flip an alarm on or off. Return whether the index was valid."""
        if not 0 <= index < len(self._alarms):
            return False
        alarm = self._alarms[index]
        alarm.active = not alarm.active
        if not alarm.active:
            self.beep.set_state(False)
        self._notify()
        self.save_alarms()
        return True

    def check_alarms(self, now: dt.datetime | None = None) -> None:
        """Sound the alarms due at ``now`` and retire one-shot alarms that have rung."""
        now = now if now is not None else dt.datetime.now()
        weekday = now.weekday()
        for alarm in list(self._alarms):
            if not alarm.active:
                continue
            fire = False
            if not alarm.repeat_days:
                if alarm.matches(now):
                    fire = True
                    alarm.is_triggered = True
                elif alarm.is_triggered:
                    self.close_alarm(alarm)
                    alarm.is_triggered = False
            else:
                on_day = any(_to_int(day) == weekday for day in alarm.repeat_days)
                fire = on_day and alarm.matches(now)
            if fire:
                self.trigger_alarm(alarm)

    def trigger_alarm(self, alarm: Alarm) -> None:
        """Toggle the buzzer, so repeated checks make it pulse."""
        logger.debug("Alarm triggered: %s", alarm.label)
        self._beeping = not self._beeping
        self.beep.set_state(self._beeping)

    def close_alarm(self, alarm: Alarm) -> None:
        """Switch an alarm off, silence the buzzer and store the change."""
        alarm.active = False
        self.beep.set_state(False)
        self._notify()
        self.save_alarms()

    def close(self) -> None:
        """Silence the buzzer and give back the reference taken at creation."""
        if self._closed:
            return
        self._closed = True
        self.beep.set_state(False)
        self.beep.release()

    def __enter__(self) -> AlarmClock:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()