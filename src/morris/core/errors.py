"""Exception taxonomy raised by the rule engine."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from morris.core.intents import Intent


class MorrisError(Exception):
    """Base class for every error raised by :mod:`morris`."""


class InvalidPositionKey(MorrisError, ValueError):
    """A position key could not be parsed. Always a caller bug."""

    def __init__(self, key: object, detail: str = "") -> None:
        self.key = key
        message = f"Invalid position key: {key!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class RejectionReason(StrEnum):
    """Why an intent was refused."""

    WRONG_PHASE = "intent not allowed in the current phase"
    NOT_YOUR_TURN = "it is not this side's turn"
    GAME_OVER = "the game is over"
    NOT_A_TRAY_SLOT = "source must be a tray slot"
    NOT_A_BOARD_POSITION = "position must be a board point"
    EMPTY_SOURCE = "source holds no piece"
    NOT_YOUR_PIECE = "source holds an opponent piece"
    OCCUPIED_TARGET = "target is occupied"
    NOT_ADJACENT = "target is not adjacent to source"
    NOT_AN_OPPONENT_PIECE = "target does not hold an opponent piece"
    PROTECTED_BY_MILL = "target is protected by a mill"


class IllegalIntent(MorrisError):
    """An intent is not legal in the given state.

    The state the intent was applied to is left untouched; the caller may
    simply choose another intent.
    """

    def __init__(self, intent: Intent, reason: RejectionReason) -> None:
        self.intent = intent
        self.reason = reason
        super().__init__(f"{intent}: {reason.value}")


class InconsistentState(MorrisError):
    """A game state invariant does not hold. Indicates an engine defect."""
