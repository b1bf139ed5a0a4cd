import datetime as dt
import json

import pytest

from qdesktop.alarm_clock import Alarm, AlarmClock, format_time, parse_time
from qdesktop.beep import Beep


@pytest.fixture
def device(tmp_path):
    return tmp_path / "brightness"


@pytest.fixture
def beep(device):
    return Beep(str(device))


@pytest.fixture
def clock(tmp_path, beep):
    with AlarmClock(tmp_path / "data", beep) as instance:
        yield instance


def last_state(device):
    return device.read_bytes()[-1:]


def test_parse_time_valid():
    assert parse_time("07:30") == dt.time(7, 30)


@pytest.mark.parametrize("text", ["7:30", "24:00", "12:60", "ab:cd", ""])
def test_parse_time_invalid(text):
    assert parse_time(text) is None


def test_format_time_round_trip():
    assert format_time(dt.time(7, 5)) == "07:05"
    assert parse_time(format_time(dt.time(23, 59))) == dt.time(23, 59)


def test_time_str_without_time():
    assert Alarm(time=None).time_str() == "--:--"


def test_add_alarm_persists(tmp_path, beep, clock):
    clock.add_alarm("06:45", [0, 4], "work")
    with AlarmClock(tmp_path / "data", beep) as other:
        assert [(a.time_str(), a.repeat_days, a.label, a.active) for a in other.alarms] == [
            ("06:45", [0, 4], "work", True)
        ]


def test_saved_record_keys(clock):
    clock.add_alarm("08:00", [], "x")
    records = json.loads(clock.alarms_file().read_text(encoding="utf-8"))
    assert set(records[0]) == {"time", "active", "repeatDays", "label", "isTriggered"}


def test_load_skips_invalid_times(tmp_path, beep):
    data = tmp_path / "d"
    data.mkdir()
    (data / "alarms.json").write_text(
        json.dumps([{"time": "bad"}, {"time": "09:15", "label": "ok"}]), encoding="utf-8"
    )
    with AlarmClock(data, beep) as loaded:
        assert [a.label for a in loaded.alarms] == ["ok"]


def test_load_ignores_malformed_json(tmp_path, beep):
    data = tmp_path / "d"
    data.mkdir()
    (data / "alarms.json").write_text("{not json", encoding="utf-8")
    with AlarmClock(data, beep) as loaded:
        assert loaded.alarms == []


def test_remove_alarm_bounds(clock):
    clock.add_alarm("08:00", [], "a")
    assert clock.remove_alarm(5) is False
    assert clock.remove_alarm(-1) is False
    assert len(clock.alarms) == 1
    assert clock.remove_alarm(0) is True
    assert clock.alarms == []


def test_toggle_alarm_silences_beep(clock, device):
    clock.add_alarm("08:00", [], "a")
    clock.beep.set_state(True)
    assert clock.toggle_alarm(0) is True
    assert clock.alarms[0].active is False
    assert last_state(device) == b"0"
    assert clock.toggle_alarm(3) is False


def test_once_alarm_triggers_then_closes(clock, device):
    alarm = clock.add_alarm("10:20", [], "once")
    clock.check_alarms(dt.datetime(2024, 3, 5, 10, 20, 30))
    assert alarm.is_triggered is True
    assert last_state(device) == b"1"
    clock.check_alarms(dt.datetime(2024, 3, 5, 10, 21, 0))
    assert alarm.active is False
    assert alarm.is_triggered is False
    assert last_state(device) == b"0"


def test_repeat_alarm_uses_weekday(clock, device):
    monday = dt.datetime(2024, 1, 1, 7, 0)
    assert monday.weekday() == 0
    clock.add_alarm("07:00", [1], "tuesday")
    clock.check_alarms(monday)
    assert device.read_bytes() == b""
    clock.add_alarm("07:00", [0], "monday")
    clock.check_alarms(monday)
    assert last_state(device) == b"1"


def test_inactive_alarm_does_not_fire(clock, device):
    clock.add_alarm("07:00", [], "off")
    assert clock.toggle_alarm(0) is True
    before = device.read_bytes()
    clock.check_alarms(dt.datetime(2024, 1, 1, 7, 0))
    assert clock.alarms[0].active is False
    assert clock.alarms[0].is_triggered is False
    assert device.read_bytes() == before


def test_listeners_notified(clock):
    calls = []
    clock.listeners.append(lambda: calls.append(len(clock.alarms)))
    clock.add_alarm("07:00", [], "a")
    clock.remove_alarm(0)
    assert calls == [1, 0]


def test_close_releases_beep(tmp_path, beep):
    instance = AlarmClock(tmp_path / "data", beep)
    assert beep.is_open() is True
    instance.close()
    assert beep.is_open() is False