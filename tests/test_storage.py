import json

import pytest

from alarms.errors import PersistenceReadError, PersistenceWriteError
from alarms.storage import DEFAULT_STATE, AlarmState, ensure_state_file, load_state, save_state


def test_round_trip(tmp_path):
    path = tmp_path / "alarm.json"
    state = AlarmState(enabled=True, time="08:30:00")
    save_state(path, state)
    assert load_state(path) == state
    assert json.loads(path.read_text(encoding="utf-8")) == {"enabled": True, "time": "08:30:00"}


def test_missing_file_loads_default(tmp_path):
    assert load_state(tmp_path / "nope.json") == DEFAULT_STATE


def test_ensure_state_file_creates_default_once(tmp_path):
    path = tmp_path / "sub" / "alarm.json"
    assert ensure_state_file(path) is True
    assert json.loads(path.read_text(encoding="utf-8")) == {"enabled": False, "time": None}
    save_state(path, AlarmState(time="07:00:00"))
    assert ensure_state_file(path) is False
    assert load_state(path).time == "07:00:00"


def test_malformed_json_raises_read_error(tmp_path):
    path = tmp_path / "alarm.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(PersistenceReadError):
        load_state(path)


def test_wrong_shape_raises_read_error(tmp_path):
    path = tmp_path / "alarm.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(PersistenceReadError):
        load_state(path)


def test_armed_state_without_valid_time_is_disarmed():
    assert AlarmState.from_dict({"enabled": True, "time": None}) == AlarmState(False, None)
    assert AlarmState.from_dict({"enabled": True, "time": "25:00:00"}) == AlarmState(False, None)
    assert AlarmState.from_dict({"enabled": "yes", "time": "06:00:00"}) == AlarmState(False, "06:00:00")


def test_write_failure_raises_write_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(PersistenceWriteError):
        save_state(blocker / "alarm.json", DEFAULT_STATE)


def test_non_utf8_file_raises_read_error(tmp_path):
    path = tmp_path / "alarm.json"
    path.write_bytes(b"\xff\xfe{")
    with pytest.raises(PersistenceReadError):
        load_state(path)
