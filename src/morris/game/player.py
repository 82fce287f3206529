"""Concrete player implementations."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Callable

from morris.core.enums import Color
from morris.core.machine import GameMachine
from morris.game.interfaces import IPlayer

if TYPE_CHECKING:
    from morris.core.intents import Intent
    from morris.core.state import GameState


class _Seat(IPlayer):
    """Colour and display name shared by every player kind."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str) -> None:
        self._color = color
        self._name = name

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name


class HumanPlayer(_Seat):
    """Someone at the board. Their places, captures and slides are
    submitted by the UI, so being asked for an intent does nothing.
    """

    __slots__ = ()

    def __init__(self, color: Color, name: str = "") -> None:
        super().__init__(color, name or f"Player ({color})")

    @property
    def is_human(self) -> bool:
        return True

    def request_intent(self, state: GameState) -> None:
        pass

    def cancel(self) -> None:
        pass


class AIPlayer(_Seat):
    """A computer side whose choice is produced elsewhere.

    The controller calls ``on_request_intent`` with the state to act on;
    whatever picks the intent later hands it to ``GameController.submit``.

    Args:
        color: Side to play.
        name: Display name.
        on_request_intent: ``(GameState) -> None``, invoked whenever this
            side must place, capture or move.
        on_cancel: ``() -> None``, invoked when the pending choice is
            abandoned (resignation or a new game).
    """

    __slots__ = ("_on_request_intent", "_on_cancel")

    def __init__(
        self,
        color: Color,
        name: str = "Engine",
        on_request_intent: Callable[[GameState], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(color, name)
        self._on_request_intent = on_request_intent
        self._on_cancel = on_cancel

    @property
    def is_human(self) -> bool:
        return False

    def request_intent(self, state: GameState) -> None:
        if self._on_request_intent is not None:
            self._on_request_intent(state)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()


class RandomPlayer(AIPlayer):
    """Picks uniformly among the legal intents. Handy for playouts.

    The chosen intent is handed to ``on_choice``; wire it to
    ``GameController.submit`` through the host's event queue rather than
    calling it synchronously, or a long game will recurse deeply.
    """

    __slots__ = ("_machine", "_rng", "_on_choice")

    def __init__(
        self,
        color: Color,
        name: str = "Random",
        *,
        machine: GameMachine | None = None,
        rng: random.Random | None = None,
        on_choice: Callable[[Intent], None] | None = None,
    ) -> None:
        super().__init__(color, name, on_request_intent=self._deliver)
        self._machine = machine if machine is not None else GameMachine()
        self._rng = rng if rng is not None else random.Random()
        self._on_choice = on_choice

    def choose(self, state: GameState) -> Intent | None:
        """A random legal intent, or ``None`` when there is nothing to play."""
        if state.turn != self.color:
            return None
        intents = self._machine.legal_intents(state)
        if not intents:
            return None
        return self._rng.choice(intents)

    def _deliver(self, state: GameState) -> None:
        intent = self.choose(state)
        if intent is not None and self._on_choice is not None:
            self._on_choice(intent)
