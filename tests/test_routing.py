import json
from datetime import datetime, timedelta, timezone

import pytest

from peril.routing import GameLog, PlayingState


def test_playing_state_to_dict_uses_wire_key():
    assert PlayingState(is_paused=True).to_dict() == {"IsPaused": True}


@pytest.mark.parametrize("paused", [True, False])
def test_playing_state_round_trip(paused):
    state = PlayingState(is_paused=paused)
    assert PlayingState.from_dict(json.loads(json.dumps(state.to_dict()))) == state


def test_playing_state_missing_field_defaults_to_running():
    assert PlayingState.from_dict({}).is_paused is False


def test_game_log_utc_time_uses_z_suffix():
    log = GameLog(
        current_time=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        message="hello",
        username="alice",
    )
    data = log.to_dict()
    assert data["CurrentTime"] == "2024-01-02T03:04:05Z"
    assert data["Message"] == "hello"
    assert data["Username"] == "alice"


def test_game_log_fraction_trailing_zeros_dropped():
    log = GameLog(current_time=datetime(2024, 1, 2, 3, 4, 5, 500000, tzinfo=timezone.utc))
    assert log.to_dict()["CurrentTime"] == "2024-01-02T03:04:05.5Z"


@pytest.mark.parametrize(
    "moment",
    [
        datetime(2024, 6, 30, 23, 59, 59, 123456, tzinfo=timezone.utc),
        datetime(2020, 2, 29, 12, 0, 0, tzinfo=timezone(timedelta(hours=2))),
        datetime(1999, 12, 31, 1, 2, 3, 7, tzinfo=timezone(timedelta(hours=-5, minutes=-30))),
    ],
)
def test_game_log_round_trip(moment):
    log = GameLog(current_time=moment, message="war is hell", username="bob")
    restored = GameLog.from_dict(json.loads(json.dumps(log.to_dict())))
    assert restored == log
    assert restored.current_time.utcoffset() == moment.utcoffset()


def test_game_log_parses_nanosecond_precision():
    log = GameLog.from_dict(
        {"CurrentTime": "2024-01-02T03:04:05.123456789Z", "Message": "m", "Username": "u"}
    )
    assert log.current_time.microsecond == 123456
    assert log.current_time.tzinfo is not None


def test_game_log_missing_time_is_zero_time():
    log = GameLog.from_dict({"Message": "m"})
    assert log.current_time.year == 1
    assert log.username == ""


def test_game_log_invalid_time_raises():
    with pytest.raises(ValueError):
        GameLog.from_dict({"CurrentTime": "yesterday"})