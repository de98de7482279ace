from datetime import datetime, timedelta, timezone
from unittest import mock

import pytest

from peril.logs import format_log_line, write_log
from peril.routing import GameLog


def _log(message="All warfare is based on deception.", username="alice", **time_kwargs):
    tz = time_kwargs.pop("tzinfo", timezone.utc)
    return GameLog(
        current_time=datetime(2024, 1, 2, 3, 4, 5, 999999, tzinfo=tz),
        message=message,
        username=username,
    )


def test_format_log_line_utc():
    line = format_log_line(_log())
    assert line == "2024-01-02T03:04:05Z alice: All warfare is based on deception.\n"


def test_format_log_line_with_offset_keeps_offset():
    line = format_log_line(_log(tzinfo=timezone(timedelta(hours=2))))
    assert line.startswith("2024-01-02T03:04:05+02:00 ")


def test_format_log_line_has_single_trailing_newline():
    line = format_log_line(_log(message="m", username="u"))
    assert line.endswith(" u: m\n")
    assert line.count("\n") == 1


def test_write_log_appends_lines(tmp_path):
    path = tmp_path / "game.log"
    first = _log(message="first")
    second = _log(message="second", username="bob")
    write_log(first, path=path, delay=0)
    write_log(second, path=path, delay=0)
    assert path.read_text(encoding="utf-8") == format_log_line(first) + format_log_line(second)


def test_write_log_waits_for_delay(tmp_path):
    path = tmp_path / "game.log"
    with mock.patch("peril.logs.time.sleep") as sleep:
        write_log(_log(), path=path, delay=0.25)
    sleep.assert_called_once_with(0.25)
    assert path.read_text(encoding="utf-8") == format_log_line(_log())


def test_write_log_unopenable_path_raises(tmp_path):
    with pytest.raises(OSError, match="could not open logs file"):
        write_log(_log(), path=tmp_path, delay=0)