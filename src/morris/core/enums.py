"""Core enumerations for the Nine Men's Morris domain."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Color(IntEnum):
    """Side color. Black always opens the game."""

    BLACK = 0
    WHITE = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def cell(self) -> Cell:
        """Cell value occupied by a piece of this color."""
        return Cell.BLACK if self == Color.BLACK else Cell.WHITE

    def __str__(self) -> str:
        return self.name.lower()


class Cell(StrEnum):
    """Content of a board point or tray slot."""

    EMPTY = "E"
    BLACK = "B"
    WHITE = "W"

    @property
    def color(self) -> Color | None:
        if self == Cell.BLACK:
            return Color.BLACK
        if self == Cell.WHITE:
            return Color.WHITE
        return None


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    BLACK_WINS = 1
    WHITE_WINS = 2
    DRAW = 3

    @classmethod
    def win_for(cls, color: Color) -> GameResult:
        return cls.BLACK_WINS if color == Color.BLACK else cls.WHITE_WINS

    @property
    def winner(self) -> Color | None:
        if self == GameResult.BLACK_WINS:
            return Color.BLACK
        if self == GameResult.WHITE_WINS:
            return Color.WHITE
        return None
