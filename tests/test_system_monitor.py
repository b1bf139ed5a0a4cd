import time

import pytest

from qdesktop.system_monitor import SystemMonitor, read_cpu_temp


@pytest.fixture
def sensor(tmp_path):
    path = tmp_path / "temp1_input"
    path.write_text("50000\n")
    return path


def test_read_formats_degrees(sensor):
    assert read_cpu_temp(str(sensor)) == "50.00°C"


def test_missing_sensor_reads_as_unavailable(tmp_path):
    assert read_cpu_temp(str(tmp_path / "nope")) == "N/A"


def test_unparsable_reading_counts_as_zero(tmp_path):
    path = tmp_path / "temp"
    path.write_text("garbage")
    assert read_cpu_temp(str(path)) == "0.00°C"


def test_only_first_ten_bytes_are_read(tmp_path):
    long_path = tmp_path / "long"
    short_path = tmp_path / "short"
    long_path.write_text("12345678901234")
    short_path.write_text("1234567890")
    assert read_cpu_temp(str(long_path)) == read_cpu_temp(str(short_path))


def test_update_reports_changes_once(sensor):
    monitor = SystemMonitor(str(sensor))
    seen = []
    monitor.listeners.append(seen.append)
    assert monitor.cpu_temp == ""
    assert monitor.update() is True
    assert monitor.cpu_temp == read_cpu_temp(str(sensor))
    assert monitor.update() is False
    assert seen == [monitor.cpu_temp]


def test_update_picks_up_new_reading(sensor):
    monitor = SystemMonitor(str(sensor))
    monitor.update()
    before = monitor.cpu_temp
    sensor.write_text("61000\n")
    assert monitor.update() is True
    assert monitor.cpu_temp != before
    assert monitor.cpu_temp == read_cpu_temp(str(sensor))


def test_background_polling_updates_reading(sensor):
    monitor = SystemMonitor(str(sensor))
    monitor.start(0.01)
    try:
        deadline = time.monotonic() + 2.0
        while monitor.cpu_temp == "" and time.monotonic() < deadline:
            time.sleep(0.01)
    finally:
        monitor.stop()
    assert monitor.cpu_temp == read_cpu_temp(str(sensor))


def test_instance_is_shared():
    shared = SystemMonitor.instance()
    assert shared is SystemMonitor.instance()
    shared.update()
    reading = shared.cpu_temp
    assert reading == "N/A" or reading.endswith("°C")