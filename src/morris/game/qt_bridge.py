"""Qt bridge exposing a GameController through signals and slots."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from morris.core.enums import Color, GameResult
from morris.core.errors import IllegalIntent, InvalidPositionKey
from morris.core.intents import Capture, Intent
from morris.core.state import GameState, Phase
from morris.core.types import PositionKey
from morris.game.controller import GameController


class GameSession(QObject):
    """Thread-affine wrapper that lets a Qt UI drive a game.

    Rejections are reported through ``intent_rejected`` instead of raising
    into the Qt event loop.
    """

    state_changed = pyqtSignal(object)
    phase_changed = pyqtSignal(str, str)  # phase kind, side to act
    intent_rejected = pyqtSignal(str, str)  # intent notation, reason
    game_over = pyqtSignal(str)  # result name

    __slots__ = ("_controller",)

    def __init__(
        self,
        controller: GameController | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller if controller is not None else GameController()
        events = self._controller.events
        events.on_intent.append(self._on_intent)
        events.on_rejected.append(self._on_rejected)
        events.on_phase_changed.append(self._on_phase_changed)
        events.on_game_over.append(self._on_game_over)

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def state(self) -> GameState:
        return self._controller.state

    def legal_destinations(self, source: PositionKey) -> list[str]:
        """Sorted destination keys for hover/snap highlighting."""
        try:
            return sorted(self._controller.legal_destinations(source))
        except InvalidPositionKey:
            return []

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot()
    def new_game(self) -> None:
        ctrl = self._controller
        ctrl.new_game(ctrl.player(Color.BLACK), ctrl.player(Color.WHITE))

    @pyqtSlot(object)
    def submit_intent(self, intent_obj: object) -> None:
        """Apply an :data:`~morris.core.intents.Intent` built by the UI."""
        if not isinstance(intent_obj, Intent):
            self.intent_rejected.emit(repr(intent_obj), "not an intent")
            return
        self._controller.submit(intent_obj)

    @pyqtSlot(str, str)
    def submit_drag(self, source: str, target: str) -> None:
        """Apply the place/move/fly matching a completed drag gesture."""
        try:
            intent: Intent = self._controller.machine.intent_for(
                self.state, source, target
            )
        except InvalidPositionKey as exc:
            self.intent_rejected.emit(f"{source}-{target}", str(exc))
            return
        except IllegalIntent as exc:
            self.intent_rejected.emit(f"{source}-{target}", exc.reason.value)
            return
        self._controller.submit(intent)

    @pyqtSlot(str)
    def capture(self, target: str) -> None:
        try:
            intent = Capture(target)
        except InvalidPositionKey as exc:
            self.intent_rejected.emit(f"x{target}", str(exc))
            return
        self._controller.submit(intent)

    # ── Controller callbacks ─────────────────────────────────────────────

    def _on_intent(self, _intent: Intent, state: GameState) -> None:
        self.state_changed.emit(state)

    def _on_rejected(self, exc: IllegalIntent) -> None:
        self.intent_rejected.emit(str(exc.intent), exc.reason.value)

    def _on_phase_changed(self, phase: Phase) -> None:
        self.phase_changed.emit(phase.kind, self.state.turn.name)

    def _on_game_over(self, result: GameResult) -> None:
        self.game_over.emit(result.name)
