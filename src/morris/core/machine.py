"""Phase state machine: validates intents and derives the next GameState."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from morris.core.config import DEFAULT_RULES, RuleSet
from morris.core.enums import Cell, Color, GameResult
from morris.core.errors import IllegalIntent, RejectionReason
from morris.core.intents import Capture, Fly, Intent, Move, NewGame, Place, Resign
from morris.core.mills import capturable_positions, formed_new_mill
from morris.core.state import (
    AwaitingCapture,
    Flying,
    GameState,
    Moving,
    Phase,
    Placing,
    Start,
    Terminal,
)
from morris.core.topology import is_adjacent, neighbours
from morris.core.types import (
    BoardPosition,
    Position,
    PositionKey,
    TraySlot,
    as_position,
    position_key,
)

_LOGGER = logging.getLogger(__name__)

_MIN_PIECES = 3


@dataclass(slots=True, frozen=True)
class PhaseInfo:
    """What a UI needs to label the board: phase name, side to act, result."""

    phase: str
    turn: Color
    result: GameResult


class GameMachine:
    """Pure transition function ``(GameState, Intent) -> GameState``.

    The machine holds nothing but its :class:`RuleSet`; a single instance can
    serve any number of games. Illegal intents raise :class:`IllegalIntent`
    and leave the input state untouched.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self._rules = rules

    @property
    def rules(self) -> RuleSet:
        return self._rules

    # ── Transitions ──────────────────────────────────────────────────────

    def new_game(self) -> GameState:
        """Fresh state: full trays, empty board, Black to place."""
        return GameState.initial(Placing(Color.BLACK)).validate()

    def apply(self, state: GameState, intent: Intent) -> GameState:
        """Apply ``intent`` to ``state`` and return the resulting state.

        Raises:
            IllegalIntent: the intent is not legal in ``state``.
            InconsistentState: the result breaks an invariant (engine defect).
        """
        if isinstance(intent, NewGame):
            return self.new_game()
        if isinstance(state.phase, Terminal):
            raise IllegalIntent(intent, RejectionReason.GAME_OVER)
        if isinstance(state.phase, Start):
            raise IllegalIntent(intent, RejectionReason.WRONG_PHASE)

        if isinstance(intent, Place):
            after = self._place(state, intent)
        elif isinstance(intent, Capture):
            after = self._capture(state, intent)
        elif isinstance(intent, Move):
            after = self._slide(state, intent, fly=False)
        elif isinstance(intent, Fly):
            after = self._slide(state, intent, fly=True)
        elif isinstance(intent, Resign):
            after = state.with_phase(
                Terminal(GameResult.win_for(intent.color.opposite), state.turn)
            )
        else:
            raise TypeError(f"Unknown intent: {intent!r}")

        after.validate(previous=state)
        _LOGGER.debug("%s: %s -> %s", intent, state.phase, after.phase)
        return after

    def _place(self, state: GameState, intent: Place) -> GameState:
        phase = state.phase
        if not isinstance(phase, Placing):
            raise IllegalIntent(intent, RejectionReason.WRONG_PHASE)
        source, target = intent.source, intent.target
        if not isinstance(source, TraySlot):
            raise IllegalIntent(intent, RejectionReason.NOT_A_TRAY_SLOT)
        if source.side != phase.turn:
            raise IllegalIntent(intent, RejectionReason.NOT_YOUR_TURN)
        if state.cell(source) == Cell.EMPTY:
            raise IllegalIntent(intent, RejectionReason.EMPTY_SOURCE)
        self._check_target(state, intent, target)

        after = state.with_cells({source: Cell.EMPTY, target: phase.turn.cell})
        return self._resolve(
            state, after, phase.turn, target, quiet_moves=state.quiet_moves
        )

    def _slide(self, state: GameState, intent: Move | Fly, *, fly: bool) -> GameState:
        phase = state.phase
        if not isinstance(phase, Flying if fly else Moving):
            raise IllegalIntent(intent, RejectionReason.WRONG_PHASE)
        source, target = intent.source, intent.target
        if not isinstance(source, BoardPosition):
            raise IllegalIntent(intent, RejectionReason.NOT_A_BOARD_POSITION)
        owner = state.cell(source)
        if owner == Cell.EMPTY:
            raise IllegalIntent(intent, RejectionReason.EMPTY_SOURCE)
        if owner != phase.turn.cell:
            raise IllegalIntent(intent, RejectionReason.NOT_YOUR_PIECE)
        self._check_target(state, intent, target)
        if not fly and not is_adjacent(source, target):
            raise IllegalIntent(intent, RejectionReason.NOT_ADJACENT)

        after = state.with_cells({source: Cell.EMPTY, target: phase.turn.cell})
        return self._resolve(
            state, after, phase.turn, target, quiet_moves=state.quiet_moves + 1
        )

    def _capture(self, state: GameState, intent: Capture) -> GameState:
        phase = state.phase
        if not isinstance(phase, AwaitingCapture):
            raise IllegalIntent(intent, RejectionReason.WRONG_PHASE)
        target = intent.target
        if not isinstance(target, BoardPosition):
            raise IllegalIntent(intent, RejectionReason.NOT_A_BOARD_POSITION)
        victim = phase.turn.opposite
        if state.cell(target) != victim.cell:
            raise IllegalIntent(intent, RejectionReason.NOT_AN_OPPONENT_PIECE)
        allowed = capturable_positions(
            state, victim, protect_mills=self._rules.protect_mills
        )
        if target not in allowed:
            raise IllegalIntent(intent, RejectionReason.PROTECTED_BY_MILL)

        after = state.with_cells({target: Cell.EMPTY})
        return after.with_phase(self._next_phase(after, phase.turn, 0), quiet_moves=0)

    @staticmethod
    def _check_target(state: GameState, intent: Intent, target: Position) -> None:
        if not isinstance(target, BoardPosition):
            raise IllegalIntent(intent, RejectionReason.NOT_A_BOARD_POSITION)
        if state.cell(target) != Cell.EMPTY:
            raise IllegalIntent(intent, RejectionReason.OCCUPIED_TARGET)

    def _resolve(
        self,
        before: GameState,
        after: GameState,
        mover: Color,
        touched: BoardPosition,
        *,
        quiet_moves: int,
    ) -> GameState:
        """Award a capture for a newly closed mill, otherwise pass the turn."""
        if formed_new_mill(before, after, mover, touched) and capturable_positions(
            after, mover.opposite, protect_mills=self._rules.protect_mills
        ):
            return after.with_phase(AwaitingCapture(mover), quiet_moves=quiet_moves)
        return after.with_phase(
            self._next_phase(after, mover, quiet_moves), quiet_moves=quiet_moves
        )

    def _next_phase(self, state: GameState, mover: Color, quiet_moves: int) -> Phase:
        """Phase that hands the turn to the opponent, or ends the game."""
        side = mover.opposite
        if state.piece_count(side) < _MIN_PIECES:
            return Terminal(GameResult.win_for(mover), side)

        # Placing continues until both trays are empty.
        if not state.trays_empty:
            return Placing(side)

        limit = self._rules.quiet_move_limit
        if limit is not None and quiet_moves >= limit:
            return Terminal(GameResult.DRAW, side)
        if self._rules.flying_enabled and state.board_count(side) == _MIN_PIECES:
            return Flying(side)
        if not self.can_slide(state, side):
            return Terminal(GameResult.win_for(mover), side)
        return Moving(side)

    # ── Queries ──────────────────────────────────────────────────────────

    @staticmethod
    def can_slide(state: GameState, color: Color) -> bool:
        """Whether any piece of ``color`` has an empty neighbour."""
        return any(
            state.cell(n) == Cell.EMPTY
            for p in state.points_of(color)
            for n in neighbours(p)
        )

    def legal_destinations(
        self, state: GameState, source: Position | PositionKey
    ) -> frozenset[PositionKey]:
        """Board keys the piece at ``source`` may go to this turn.

        Empty when ``source`` does not hold a piece the side to act may move.
        """
        position = as_position(source)
        phase = state.phase
        if not isinstance(phase, (Placing, Moving, Flying)):
            return frozenset()
        if state.cell(position) != phase.turn.cell:
            return frozenset()

        if isinstance(phase, Placing):
            if not isinstance(position, TraySlot):
                return frozenset()
            targets = state.empty_points()
        elif isinstance(position, TraySlot):
            return frozenset()
        elif isinstance(phase, Flying):
            targets = state.empty_points()
        else:
            targets = [n for n in neighbours(position) if state.cell(n) == Cell.EMPTY]
        return frozenset(position_key(p) for p in targets)

    def capture_targets(self, state: GameState) -> frozenset[PositionKey]:
        """Board keys that may be captured in ``AwaitingCapture``."""
        phase = state.phase
        if not isinstance(phase, AwaitingCapture):
            return frozenset()
        return frozenset(
            position_key(p)
            for p in capturable_positions(
                state, phase.turn.opposite, protect_mills=self._rules.protect_mills
            )
        )

    def legal_intents(self, state: GameState) -> list[Intent]:
        """Every playable intent for the side to act.

        ``NewGame`` and ``Resign`` are always available and not listed. Tray
        pieces are interchangeable, so placements use the first filled slot.
        """
        phase = state.phase
        if isinstance(phase, AwaitingCapture):
            return [Capture(key) for key in sorted(self.capture_targets(state))]
        if isinstance(phase, Placing):
            slots = state.tray_pieces(phase.turn)
            if not slots:
                return []
            return [Place(slots[0], p) for p in state.empty_points()]
        if isinstance(phase, (Moving, Flying)):
            kind = Fly if isinstance(phase, Flying) else Move
            return [
                kind(p, key)
                for p in state.points_of(phase.turn)
                for key in sorted(self.legal_destinations(state, p))
            ]
        return []

    def intent_for(
        self,
        state: GameState,
        source: Position | PositionKey,
        target: Position | PositionKey,
    ) -> Place | Move | Fly:
        """Intent matching a completed drag from ``source`` to ``target``."""
        phase = state.phase
        if isinstance(phase, Placing):
            return Place(source, target)
        if isinstance(phase, Flying):
            return Fly(source, target)
        if isinstance(phase, Moving):
            return Move(source, target)
        raise IllegalIntent(Move(source, target), RejectionReason.WRONG_PHASE)

    @staticmethod
    def phase_info(state: GameState) -> PhaseInfo:
        return PhaseInfo(phase=state.phase.kind, turn=state.turn, result=state.result)
