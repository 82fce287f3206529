"""GameState value object and the closed set of game phases."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from typing import ClassVar, TypeAlias

from morris.core.enums import Cell, Color, GameResult
from morris.core.errors import InconsistentState
from morris.core.topology import BOARD_INDEX
from morris.core.types import (
    BOARD_POINTS,
    TRAY_SIZE,
    BoardPosition,
    Position,
    PositionKey,
    TraySlot,
    position_key,
)

# ── Phases ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Start:
    """Before the first game: only ``NewGame`` is accepted."""

    kind: ClassVar[str] = "START"


@dataclass(frozen=True, slots=True)
class Placing:
    """``turn`` moves a piece from its tray onto the board."""

    turn: Color
    kind: ClassVar[str] = "PLACING"


@dataclass(frozen=True, slots=True)
class AwaitingCapture:
    """``turn`` has just formed a mill and must remove an opponent piece."""

    turn: Color
    kind: ClassVar[str] = "AWAITING_CAPTURE"


@dataclass(frozen=True, slots=True)
class Moving:
    """``turn`` slides a piece to an adjacent empty point."""

    turn: Color
    kind: ClassVar[str] = "MOVING"


@dataclass(frozen=True, slots=True)
class Flying:
    """``turn`` is down to three pieces and may jump to any empty point."""

    turn: Color
    kind: ClassVar[str] = "FLYING"


@dataclass(frozen=True, slots=True)
class Terminal:
    """Game over. ``turn`` is the side that would have moved next."""

    result: GameResult
    turn: Color
    kind: ClassVar[str] = "TERMINAL"


Phase: TypeAlias = Start | Placing | AwaitingCapture | Moving | Flying | Terminal

PHASE_KINDS: tuple[str, ...] = (
    Start.kind,
    Placing.kind,
    AwaitingCapture.kind,
    Moving.kind,
    Flying.kind,
    Terminal.kind,
)


# ── GameState ────────────────────────────────────────────────────────────────


_EMPTY_BOARD: tuple[Cell, ...] = (Cell.EMPTY,) * len(BOARD_POINTS)
_FULL_BLACK_TRAY: tuple[Cell, ...] = (Cell.BLACK,) * TRAY_SIZE
_FULL_WHITE_TRAY: tuple[Cell, ...] = (Cell.WHITE,) * TRAY_SIZE


@dataclass(frozen=True, slots=True)
class GameState:
    """Immutable snapshot of a game.

    ``board`` holds one cell per point in :data:`~morris.core.types.BOARD_POINTS`
    order, so all 24 points are always present. Transitions never mutate a
    state; they derive a new one with :meth:`with_cells` / :meth:`with_phase`.
    """

    board: tuple[Cell, ...] = _EMPTY_BOARD
    black_tray: tuple[Cell, ...] = _FULL_BLACK_TRAY
    white_tray: tuple[Cell, ...] = _FULL_WHITE_TRAY
    phase: Phase = Start()
    quiet_moves: int = 0

    # ── Factory ──────────────────────────────────────────────────────────

    @classmethod
    def initial(cls, phase: Phase | None = None) -> GameState:
        """Empty board, full trays."""
        return cls(phase=Start() if phase is None else phase)

    # ── Element access ───────────────────────────────────────────────────

    def cell(self, position: Position) -> Cell:
        if isinstance(position, TraySlot):
            return self.tray(position.side)[position.index]
        return self.board[BOARD_INDEX[position]]

    def __getitem__(self, position: Position) -> Cell:
        return self.cell(position)

    def tray(self, color: Color) -> tuple[Cell, ...]:
        return self.black_tray if color == Color.BLACK else self.white_tray

    def items(self) -> Iterator[tuple[BoardPosition, Cell]]:
        """``(point, cell)`` pairs in canonical order."""
        return zip(BOARD_POINTS, self.board)

    def board_map(self) -> dict[PositionKey, Cell]:
        """All 24 board keys mapped to their cell value."""
        return {position_key(p): c for p, c in self.items()}

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def turn(self) -> Color:
        """Side to act. Black before the first game starts."""
        if isinstance(self.phase, Start):
            return Color.BLACK
        return self.phase.turn

    @property
    def result(self) -> GameResult:
        if isinstance(self.phase, Terminal):
            return self.phase.result
        return GameResult.IN_PROGRESS

    @property
    def is_terminal(self) -> bool:
        return isinstance(self.phase, Terminal)

    def points_of(self, color: Color) -> list[BoardPosition]:
        """Board points occupied by ``color``."""
        target = color.cell
        return [p for p, c in self.items() if c == target]

    def empty_points(self) -> list[BoardPosition]:
        return [p for p, c in self.items() if c == Cell.EMPTY]

    def tray_pieces(self, color: Color) -> list[TraySlot]:
        """Tray slots of ``color`` still holding a piece."""
        target = color.cell
        return [
            TraySlot(color, i) for i, c in enumerate(self.tray(color)) if c == target
        ]

    def board_count(self, color: Color) -> int:
        return self.board.count(color.cell)

    def tray_count(self, color: Color) -> int:
        return self.tray(color).count(color.cell)

    def piece_count(self, color: Color) -> int:
        """Pieces ``color`` still owns: on the board plus in the tray."""
        return self.board_count(color) + self.tray_count(color)

    @property
    def trays_empty(self) -> bool:
        return self.tray_count(Color.BLACK) == 0 and self.tray_count(Color.WHITE) == 0

    # ── Derivation ───────────────────────────────────────────────────────

    def with_cells(self, changes: Mapping[Position, Cell]) -> GameState:
        """New state with the given board points / tray slots overwritten."""
        board = list(self.board)
        trays = {Color.BLACK: list(self.black_tray), Color.WHITE: list(self.white_tray)}
        for position, value in changes.items():
            if isinstance(position, TraySlot):
                trays[position.side][position.index] = value
            else:
                board[BOARD_INDEX[position]] = value
        return replace(
            self,
            board=tuple(board),
            black_tray=tuple(trays[Color.BLACK]),
            white_tray=tuple(trays[Color.WHITE]),
        )

    def with_phase(self, phase: Phase, *, quiet_moves: int | None = None) -> GameState:
        if quiet_moves is None:
            return replace(self, phase=phase)
        return replace(self, phase=phase, quiet_moves=quiet_moves)

    # ── Invariants ───────────────────────────────────────────────────────

    def validate(self, previous: GameState | None = None) -> GameState:
        """Check structural invariants, returning ``self`` when they hold.

        With ``previous`` given, also checks that no side gained pieces.

        Raises:
            InconsistentState: if any invariant is violated.
        """
        if len(self.board) != len(BOARD_POINTS):
            raise InconsistentState(f"board has {len(self.board)} points, expected 24")
        for color in Color:
            tray = self.tray(color)
            if len(tray) != TRAY_SIZE:
                raise InconsistentState(f"{color} tray has {len(tray)} slots")
            if any(c not in (Cell.EMPTY, color.cell) for c in tray):
                raise InconsistentState(f"{color} tray holds a foreign piece")
            count = self.piece_count(color)
            if count > TRAY_SIZE:
                raise InconsistentState(f"{color} owns {count} pieces")
            if previous is not None and count > previous.piece_count(color):
                raise InconsistentState(f"{color} gained pieces")
        if any(not isinstance(c, Cell) for c in self.board):
            raise InconsistentState("board holds an unknown cell value")
        if self.quiet_moves < 0:
            raise InconsistentState("negative quiet move counter")
        return self

    def __str__(self) -> str:
        cells = self.board_map()
        rows = [
            ("a7", "d7", "g7"),
            ("b6", "d6", "f6"),
            ("c5", "d5", "e5"),
            ("a4", "b4", "c4", "e4", "f4", "g4"),
            ("c3", "d3", "e3"),
            ("b2", "d2", "f2"),
            ("a1", "d1", "g1"),
        ]
        lines = [" ".join(f"{k}={cells[k].value}" for k in row) for row in rows]
        lines.append(f"phase={self.phase}")
        return "\n".join(lines)
