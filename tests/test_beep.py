import pytest

from qdesktop.beep import DEFAULT_DEVICE, Beep


@pytest.fixture
def device(tmp_path):
    path = tmp_path / "brightness"
    path.write_bytes(b"")
    return path


def test_acquire_opens_and_release_closes(device):
    beep = Beep(str(device))
    assert beep.is_open() is False
    beep.acquire()
    assert beep.is_open() is True
    beep.release()
    assert beep.is_open() is False


def test_set_state_writes_one_and_zero(device):
    beep = Beep(str(device))
    beep.acquire()
    assert beep.set_state(True) is True
    assert beep.set_state(False) is True
    beep.release()
    assert device.read_bytes() == b"10"


def test_set_state_without_device_fails(device):
    beep = Beep(str(device))
    assert beep.set_state(True) is False
    assert device.read_bytes() == b""


def test_reference_counting_keeps_device_open(device):
    beep = Beep(str(device))
    beep.acquire()
    beep.acquire()
    beep.release()
    assert beep.is_open() is True
    assert beep.set_state(True) is True
    beep.release()
    assert beep.is_open() is False


def test_release_without_acquire_raises(device):
    beep = Beep(str(device))
    with pytest.raises(RuntimeError):
        beep.release()


def test_missing_device_is_not_opened(tmp_path):
    beep = Beep(str(tmp_path / "missing" / "brightness"))
    beep.acquire()
    assert beep.is_open() is False
    assert beep.set_state(True) is False
    beep.release()
    assert beep.is_open() is False


def test_context_manager_pairs_acquire_and_release(device):
    beep = Beep(str(device))
    with beep as held:
        assert held is beep
        assert beep.is_open() is True
        held.set_state(True)
    assert beep.is_open() is False
    assert device.read_bytes() == b"1"


def test_instance_is_shared_and_uses_default_device():
    first = Beep.instance()
    assert first is Beep.instance()
    assert first.device_path == DEFAULT_DEVICE