"""Exchange names, routing keys and the messages exchanged through them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

ARMY_MOVES_PREFIX = "army_moves"
WAR_RECOGNITIONS_PREFIX = "war"
PAUSE_KEY = "pause"
GAME_LOG_SLUG = "game_logs"

EXCHANGE_PERIL_DIRECT = "peril_direct"
EXCHANGE_PERIL_TOPIC = "peril_topic"

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_TIMESTAMP = re.compile(r"(\S{10})[Tt](\S{8})(?:\.(\d+))?(?:[Zz]|([+-]\d{2}:\d{2}))")


def _format_timestamp(moment: datetime) -> str:
    """RFC 3339 with the fraction's trailing zeros dropped."""
    text = (moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)).isoformat()
    text = re.sub(r"\.?0*(?=[+-]\d{2}:\d{2}$)", "", text) if moment.microsecond else text
    return text[:-6] + "Z" if text.endswith("+00:00") else text


def _parse_timestamp(text: str) -> datetime:
    match = _TIMESTAMP.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {text!r}")
    day, clock, fraction, zone = match.groups()
    fraction = (fraction or "").ljust(6, "0")[:6]
    return datetime.fromisoformat(f"{day}T{clock}.{fraction}{zone or '+00:00'}")


@dataclass(frozen=True)
class PlayingState:
    """Whether the game is paused."""

    is_paused: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"IsPaused": self.is_paused}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayingState:
        return cls(is_paused=bool(data.get("IsPaused", False)))


@dataclass(frozen=True)
class GameLog:
    """A line of game history sent by a player."""

    current_time: datetime = _ZERO_TIME
    message: str = ""
    username: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "CurrentTime": _format_timestamp(self.current_time),
            "Message": self.message,
            "Username": self.username,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameLog:
        raw_time = data.get("CurrentTime")
        return cls(
            current_time=_ZERO_TIME if raw_time is None else _parse_timestamp(raw_time),
            message=data.get("Message") or "",
            username=data.get("Username") or "",
        )