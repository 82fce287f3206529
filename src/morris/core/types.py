"""Position addressing: board points and tray slots.

Every location a piece can occupy has a canonical string key:

    board points   a1 d1 g1 b2 d2 f2 ... a7 d7 g7   (column letter + 1-based row)
    tray slots     bt0 ... bt8, wt0 ... wt8          (side prefix + 0-based index)

Board layout (columns a-g, rows 1-7)::

    7 a7-----------d7-----------g7
      |            |            |
    6 |   b6-------d6-------f6  |
      |   |        |        |   |
    5 |   |   c5---d5---e5  |   |
      |   |   |         |   |   |
    4 a4--b4--c4        e4--f4--g4
      |   |   |         |   |   |
    3 |   |   c3---d3---e3  |   |
      |   |        |        |   |
    2 |   b2-------d2-------f2  |
      |            |            |
    1 a1-----------d1-----------g1
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, TypeAlias

from morris.core.enums import Color
from morris.core.errors import InvalidPositionKey

BOARD_SIZE: Final = 7
TRAY_SIZE: Final = 9

_COLUMNS: Final = "abcdefg"
_TRAY_PREFIXES: Final[dict[str, Color]] = {"bt": Color.BLACK, "wt": Color.WHITE}
_TRAY_PREFIX_OF: Final[dict[Color, str]] = {v: k for k, v in _TRAY_PREFIXES.items()}
_KEY_RE: Final = re.compile(r"([a-z]*)(0|[1-9][0-9]{0,2})", re.ASCII)


@dataclass(frozen=True, slots=True, order=True)
class BoardPosition:
    """A point on the board, 0-based ``col`` (a-g) and ``row`` (1-7)."""

    col: int
    row: int

    def __str__(self) -> str:
        return board_key(self.col, self.row)


@dataclass(frozen=True, slots=True, order=True)
class TraySlot:
    """One of the nine reserve slots of ``side``."""

    side: Color
    index: int

    def __str__(self) -> str:
        return tray_key(self.side, self.index)


Position: TypeAlias = BoardPosition | TraySlot
PositionKey: TypeAlias = str


# ── Named board points ───────────────────────────────────────────────────────

A1, D1, G1 = BoardPosition(0, 0), BoardPosition(3, 0), BoardPosition(6, 0)
B2, D2, F2 = BoardPosition(1, 1), BoardPosition(3, 1), BoardPosition(5, 1)
C3, D3, E3 = BoardPosition(2, 2), BoardPosition(3, 2), BoardPosition(4, 2)
A4, B4, C4 = BoardPosition(0, 3), BoardPosition(1, 3), BoardPosition(2, 3)
E4, F4, G4 = BoardPosition(4, 3), BoardPosition(5, 3), BoardPosition(6, 3)
C5, D5, E5 = BoardPosition(2, 4), BoardPosition(3, 4), BoardPosition(4, 4)
B6, D6, F6 = BoardPosition(1, 5), BoardPosition(3, 5), BoardPosition(5, 5)
A7, D7, G7 = BoardPosition(0, 6), BoardPosition(3, 6), BoardPosition(6, 6)

# Canonical order: bottom row first, left to right.
BOARD_POINTS: Final[tuple[BoardPosition, ...]] = (
    A1, D1, G1,
    B2, D2, F2,
    C3, D3, E3,
    A4, B4, C4, E4, F4, G4,
    C5, D5, E5,
    B6, D6, F6,
    A7, D7, G7,
)  # fmt: skip

_POINT_SET: Final = frozenset(BOARD_POINTS)


# ── Key helpers ──────────────────────────────────────────────────────────────


def board_key(col: int, row: int) -> PositionKey:
    """Key of a board coordinate, e.g. ``(3, 1)`` → ``'d2'``."""
    return f"{_COLUMNS[col]}{row + 1}"


def tray_key(side: Color, index: int) -> PositionKey:
    """Key of a tray slot, e.g. ``(Color.BLACK, 3)`` → ``'bt3'``."""
    return f"{_TRAY_PREFIX_OF[side]}{index}"


def is_board_point(col: int, row: int) -> bool:
    """Whether ``(col, row)`` is one of the 24 playable points."""
    return BoardPosition(col, row) in _POINT_SET


def parse_position(key: PositionKey) -> Position:
    """Parse a position key, e.g. ``'d2'`` → ``BoardPosition(3, 1)``.

    Raises:
        InvalidPositionKey: unknown prefix, bad number, value out of range,
            or a board coordinate that is not one of the 24 points.
    """
    if not isinstance(key, str):
        raise InvalidPositionKey(key, "not a string")
    match = _KEY_RE.fullmatch(key)
    if match is None:
        raise InvalidPositionKey(key)
    prefix, digits = match.groups()
    number = int(digits)

    side = _TRAY_PREFIXES.get(prefix)
    if side is not None:
        if not 0 <= number < TRAY_SIZE:
            raise InvalidPositionKey(key, "tray index out of range")
        return TraySlot(side, number)

    if len(prefix) != 1 or prefix not in _COLUMNS:
        raise InvalidPositionKey(key, "unknown prefix")
    col, row = _COLUMNS.index(prefix), number - 1
    if not 0 <= row < BOARD_SIZE:
        raise InvalidPositionKey(key, "row out of range")
    if not is_board_point(col, row):
        raise InvalidPositionKey(key, "not a board point")
    return BoardPosition(col, row)


def position_key(position: Position) -> PositionKey:
    """Inverse of :func:`parse_position`."""
    if isinstance(position, TraySlot):
        return tray_key(position.side, position.index)
    return board_key(position.col, position.row)


def as_position(value: Position | PositionKey) -> Position:
    """Accept either a parsed position or its key."""
    if isinstance(value, BoardPosition):
        if value not in _POINT_SET:
            raise InvalidPositionKey(value, "not a board point")
        return value
    if isinstance(value, TraySlot):
        if not 0 <= value.index < TRAY_SIZE:
            raise InvalidPositionKey(value, "tray index out of range")
        return value
    return parse_position(value)


def tray_slots(side: Color) -> tuple[TraySlot, ...]:
    """All nine tray slots of ``side`` in storage order."""
    return tuple(TraySlot(side, i) for i in range(TRAY_SIZE))
