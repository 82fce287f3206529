"""GameController: the central orchestrator of a Nine Men's Morris game.

Coordinates: Players, GameState, GameMachine.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from morris.core.config import DEFAULT_RULES, RuleSet
from morris.core.enums import Color, GameResult
from morris.core.errors import IllegalIntent
from morris.core.intents import Intent, NewGame, Resign
from morris.core.machine import GameMachine, PhaseInfo
from morris.core.notation import intent_to_text
from morris.core.state import GameState, Phase
from morris.core.types import Position, PositionKey
from morris.game.interfaces import IGameController, IPlayer
from morris.game.player import HumanPlayer

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

IntentCallback = Callable[[Intent, GameState], None]  # intent, state after
RejectedCallback = Callable[[IllegalIntent], None]
PhaseCallback = Callable[[Phase], None]
GameOverCallback = Callable[[GameResult], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_intent: list[IntentCallback] = field(default_factory=list)
    on_rejected: list[RejectedCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class IntentRecord:
    """A single entry in the game record."""

    intent: Intent
    notation: str
    state_after: GameState


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full game: validates intents through the machine,
    switches turns, notifies listeners.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread). A host arbitrating remote players must serialize
    intents per controller.
    """

    __slots__ = (
        "_machine",
        "_state",
        "_players",
        "_history",
        "_last_rejection",
        "events",
    )

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self._machine = GameMachine(rules)
        self._state = GameState.initial()
        self._players: dict[Color, IPlayer] = {}
        self._history: list[IntentRecord] = []
        self._last_rejection: IllegalIntent | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def machine(self) -> GameMachine:
        return self._machine

    @property
    def history(self) -> tuple[IntentRecord, ...]:
        return tuple(self._history)

    @property
    def last_rejection(self) -> IllegalIntent | None:
        """The most recent refused intent, cleared by the next accepted one."""
        return self._last_rejection

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.turn)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        black: IPlayer | None = None,
        white: IPlayer | None = None,
    ) -> None:
        self._cancel_current()
        self._players = {
            Color.BLACK: black if black is not None else HumanPlayer(Color.BLACK),
            Color.WHITE: white if white is not None else HumanPlayer(Color.WHITE),
        }
        self.submit(NewGame())

    def load(self, state: GameState) -> None:
        """Resume from a saved state (e.g. one read by ``state_from_dict``)."""
        self._cancel_current()
        self._state = state.validate()
        self._history.clear()
        self._last_rejection = None
        _LOGGER.debug("Loaded state in phase %s", state.phase)
        self._emit_phase(state.phase)
        if not state.is_terminal:
            self._prompt_current_player()

    def submit(self, intent: Intent) -> bool:
        before = self._state
        try:
            after = self._machine.apply(before, intent)
        except IllegalIntent as exc:
            self._last_rejection = exc
            _LOGGER.info("Rejected %s: %s", exc.intent, exc.reason.value)
            self._emit_rejected(exc)
            return False

        if isinstance(intent, NewGame):
            self._history.clear()
        self._state = after
        self._last_rejection = None
        self._history.append(IntentRecord(intent, intent_to_text(intent), after))
        _LOGGER.debug("Applied %s", intent)

        self._emit_intent(intent)
        if isinstance(intent, NewGame) or after.phase != before.phase:
            self._emit_phase(after.phase)

        if after.is_terminal:
            _LOGGER.info("Game over: %s", after.result.name)
            self._emit_game_over(after.result)
            return True

        self._prompt_current_player()
        return True

    def resign(self, color: Color) -> bool:
        self._cancel_current()
        return self.submit(Resign(color))

    def legal_destinations(
        self, source: Position | PositionKey
    ) -> frozenset[PositionKey]:
        return self._machine.legal_destinations(self._state, source)

    def capture_targets(self) -> frozenset[PositionKey]:
        return self._machine.capture_targets(self._state)

    def phase_info(self) -> PhaseInfo:
        return self._machine.phase_info(self._state)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _prompt_current_player(self) -> None:
        """Ask the side to act for its next intent."""
        cp = self.current_player
        if cp is None:
            return
        cp.request_intent(self._state)

    def _cancel_current(self) -> None:
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()

    def _emit_intent(self, intent: Intent) -> None:
        for cb in self.events.on_intent:
            cb(intent, self._state)

    def _emit_rejected(self, exc: IllegalIntent) -> None:
        for cb in self.events.on_rejected:
            cb(exc)

    def _emit_phase(self, phase: Phase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_game_over(self, result: GameResult) -> None:
        for cb in self.events.on_game_over:
            cb(result)
