"""Players, units and the messages describing their movements and wars."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class UnitRank(str, Enum):
    """The kinds of unit a player can spawn."""

    INFANTRY = "infantry"
    CAVALRY = "cavalry"
    ARTILLERY = "artillery"

    def __str__(self) -> str:
        return self.value


Location = str
Rank = Union[UnitRank, str]

_LOCATIONS = frozenset({"americas", "europe", "africa", "asia", "australia", "antarctica"})


def all_ranks() -> frozenset[UnitRank]:
    """Every valid unit rank."""
    return frozenset(UnitRank)


def all_locations() -> frozenset[str]:
    """Every valid location on the map."""
    return _LOCATIONS


def _coerce_rank(value: Any) -> Rank:
    text = "" if value is None else str(value)
    try:
        return UnitRank(text)
    except ValueError:
        return text


@dataclass(frozen=True)
class Unit:
    """A single unit owned by a player."""

    id: int
    rank: Rank
    location: Location

    def to_dict(self) -> dict[str, Any]:
        return {"ID": self.id, "Rank": str(self.rank), "Location": self.location}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Unit:
        return cls(int(data.get("ID") or 0), _coerce_rank(data.get("Rank")),
                   data.get("Location") or "")


@dataclass
class Player:
    """A player and the units they own, keyed by unit id."""

    username: str
    units: dict[int, Unit] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"Username": self.username,
                "Units": {str(key): unit.to_dict() for key, unit in self.units.items()}}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Player:
        units = data.get("Units") or {}
        return cls(data.get("Username") or "",
                   {int(key): Unit.from_dict(value) for key, value in units.items()})


@dataclass
class ArmyMove:
    """A player moving some of their units to a location."""

    player: Player
    units: list[Unit]
    to_location: Location

    def to_dict(self) -> dict[str, Any]:
        return {"Player": self.player.to_dict(),
                "Units": [unit.to_dict() for unit in self.units],
                "ToLocation": self.to_location}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ArmyMove:
        return cls(Player.from_dict(data.get("Player") or {}),
                   [Unit.from_dict(item) for item in data.get("Units") or []],
                   data.get("ToLocation") or "")


@dataclass
class RecognitionOfWar:
    """A declaration of war between two players."""

    attacker: Player
    defender: Player

    def to_dict(self) -> dict[str, Any]:
        return {"Attacker": self.attacker.to_dict(), "Defender": self.defender.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RecognitionOfWar:
        return cls(Player.from_dict(data.get("Attacker") or {}),
                   Player.from_dict(data.get("Defender") or {}))