"""Appending received game logs to the log file on disk."""

from __future__ import annotations

import logging
import os
import time
from datetime import timezone
from typing import Union

from peril.routing import GameLog

LOGS_FILE = "game.log"
WRITE_TO_DISK_DELAY = 1.0

_log = logging.getLogger(__name__)


def format_log_line(game_log: GameLog) -> str:
    """Render a game log as one line of the log file, newline included."""
    moment = game_log.current_time
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    stamp = moment.isoformat(timespec="seconds").replace("+00:00", "Z")
    return f"{stamp} {game_log.username}: {game_log.message}\n"


def write_log(game_log: GameLog, path: Union[str, os.PathLike] = LOGS_FILE,
              delay: float = WRITE_TO_DISK_DELAY) -> None:
    """Wait for the simulated disk delay, then append the log line to *path*."""
    _log.info("received game log...")
    time.sleep(delay)
    try:
        handle = open(path, "a", encoding="utf-8")
    except OSError as exc:
        raise OSError(f"could not open logs file: {exc}") from exc
    with handle:
        try:
            handle.write(format_log_line(game_log))
        except OSError as exc:
            raise OSError(f"could not write to logs file: {exc}") from exc