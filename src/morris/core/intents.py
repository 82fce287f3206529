"""Intent value objects: everything a player (or host) can ask the engine to do.

Positions may be given as keys; they are parsed on construction, so a
malformed key fails fast with :class:`~morris.core.errors.InvalidPositionKey`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from morris.core.enums import Color
from morris.core.types import Position, PositionKey, as_position, position_key


def _normalise(intent: object, *names: str) -> None:
    for name in names:
        object.__setattr__(intent, name, as_position(getattr(intent, name)))


@dataclass(frozen=True, slots=True)
class NewGame:
    """Reset to a fresh game: full trays, empty board, Black to place."""

    def __str__(self) -> str:
        return "new"


@dataclass(frozen=True, slots=True)
class Place:
    """Move a piece from a tray slot onto an empty board point."""

    source: Position | PositionKey
    target: Position | PositionKey

    def __post_init__(self) -> None:
        _normalise(self, "source", "target")

    def __str__(self) -> str:
        return f"{position_key(self.source)}-{position_key(self.target)}"


@dataclass(frozen=True, slots=True)
class Capture:
    """Remove the opponent piece on ``target`` after forming a mill."""

    target: Position | PositionKey

    def __post_init__(self) -> None:
        _normalise(self, "target")

    def __str__(self) -> str:
        return f"x{position_key(self.target)}"


@dataclass(frozen=True, slots=True)
class Move:
    """Slide a piece to an adjacent empty point."""

    source: Position | PositionKey
    target: Position | PositionKey

    def __post_init__(self) -> None:
        _normalise(self, "source", "target")

    def __str__(self) -> str:
        return f"{position_key(self.source)}-{position_key(self.target)}"


@dataclass(frozen=True, slots=True)
class Fly:
    """Jump a piece to any empty point (three pieces left)."""

    source: Position | PositionKey
    target: Position | PositionKey

    def __post_init__(self) -> None:
        _normalise(self, "source", "target")

    def __str__(self) -> str:
        return f"{position_key(self.source)}-{position_key(self.target)}"


@dataclass(frozen=True, slots=True)
class Resign:
    """``color`` concedes; also what a host maps a forfeit on time to."""

    color: Color

    def __str__(self) -> str:
        return f"resign:{self.color}"


Intent: TypeAlias = NewGame | Place | Capture | Move | Fly | Resign
