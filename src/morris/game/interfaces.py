"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on concrete Player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from morris.core.enums import Color

if TYPE_CHECKING:
    from morris.core.intents import Intent
    from morris.core.machine import PhaseInfo
    from morris.core.state import GameState
    from morris.core.types import PositionKey


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_intent(self, state: GameState) -> None:
        """Begin choosing the next intent for *state*.

        For humans this is a no-op (they interact via UI).
        For AI this kicks off the selection, whose result must reach
        ``GameController.submit`` from the host's event loop.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing selection (AI only, no-op for human)."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(
        self,
        black: IPlayer | None = None,
        white: IPlayer | None = None,
    ) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit(self, intent: Intent) -> bool:
        """Submit an intent. Returns True if legal and applied."""

    @abstractmethod
    def resign(self, color: Color) -> bool:
        """Player of *color* resigns."""

    @abstractmethod
    def legal_destinations(self, source: PositionKey) -> frozenset[PositionKey]:
        """Where the piece at *source* may go this turn."""

    @abstractmethod
    def phase_info(self) -> PhaseInfo:
        """Phase name, side to act and result of the current state."""
