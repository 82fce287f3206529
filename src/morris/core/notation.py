"""Serialization of game states and the textual intent notation.

State documents follow the canonical form hosts use for persistence and
network sync::

    {
      "board": {"a1": "E", "d1": "B", ...},        # all 24 points
      "blackTray": ["B", "E", ...],                 # 9 slots
      "whiteTray": ["W", ...],                      # 9 slots
      "phase": "PLACING",
      "turn": "BLACK",
      "result": null,                               # or BLACK_WINS/WHITE_WINS/DRAW
      "quietMoves": 0                               # optional
    }

Intents are written as ``bt0-d1`` (place), ``d1-d2`` (move or fly),
``xd1`` (capture), ``new`` and ``resign:black``.
"""

from __future__ import annotations

import json
from typing import Any

from morris.core.enums import Cell, Color, GameResult
from morris.core.intents import Capture, Fly, Intent, Move, NewGame, Place, Resign
from morris.core.state import (
    PHASE_KINDS,
    AwaitingCapture,
    Flying,
    GameState,
    Moving,
    Phase,
    Placing,
    Start,
    Terminal,
)
from morris.core.types import (
    BOARD_POINTS,
    TRAY_SIZE,
    TraySlot,
    parse_position,
    position_key,
)

_BOARD_KEYS = tuple(position_key(p) for p in BOARD_POINTS)
_TURNED_PHASES: dict[str, type[Placing | AwaitingCapture | Moving | Flying]] = {
    Placing.kind: Placing,
    AwaitingCapture.kind: AwaitingCapture,
    Moving.kind: Moving,
    Flying.kind: Flying,
}
_RESULT_NAMES: dict[GameResult, str] = {
    GameResult.BLACK_WINS: "BLACK_WINS",
    GameResult.WHITE_WINS: "WHITE_WINS",
    GameResult.DRAW: "DRAW",
}
_RESULTS_BY_NAME: dict[str, GameResult] = {v: k for k, v in _RESULT_NAMES.items()}


# ── GameState documents ──────────────────────────────────────────────────────


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Canonical document for ``state``."""
    result = state.result
    return {
        "board": {key: cell.value for key, cell in state.board_map().items()},
        "blackTray": [cell.value for cell in state.black_tray],
        "whiteTray": [cell.value for cell in state.white_tray],
        "phase": state.phase.kind,
        "turn": state.turn.name,
        "result": _RESULT_NAMES.get(result),
        "quietMoves": state.quiet_moves,
    }


def state_from_dict(data: dict[str, Any]) -> GameState:
    """Parse a canonical document into a :class:`GameState`.

    Raises:
        ValueError: missing fields, unknown values, or piece counts that no
            game could reach.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Invalid state document: {data!r}")
    try:
        board_doc = data["board"]
        black_doc = data["blackTray"]
        white_doc = data["whiteTray"]
        phase_name = data["phase"]
        turn_name = data["turn"]
    except KeyError as exc:
        raise ValueError(f"State document missing field {exc.args[0]!r}") from None

    # 1. Board
    if not isinstance(board_doc, dict) or set(board_doc) != set(_BOARD_KEYS):
        raise ValueError("State board must contain exactly the 24 board points")
    board = tuple(_parse_cell(board_doc[key], key) for key in _BOARD_KEYS)

    # 2. Trays
    black_tray = _parse_tray(black_doc, Color.BLACK)
    white_tray = _parse_tray(white_doc, Color.WHITE)

    # 3. Turn and phase
    try:
        turn = Color[turn_name]
    except (KeyError, TypeError):
        raise ValueError(f"Invalid turn field: {turn_name!r}") from None
    phase = _parse_phase(phase_name, turn, data.get("result"))

    quiet_moves = data.get("quietMoves", 0)
    if type(quiet_moves) is not int or quiet_moves < 0:
        raise ValueError(f"Invalid quietMoves field: {quiet_moves!r}")

    state = GameState(
        board=board,
        black_tray=black_tray,
        white_tray=white_tray,
        phase=phase,
        quiet_moves=quiet_moves,
    )
    for color in Color:
        if state.piece_count(color) > TRAY_SIZE:
            raise ValueError(f"State gives {color} more than {TRAY_SIZE} pieces")
    return state.validate()


def state_to_json(state: GameState, *, indent: int | None = None) -> str:
    return json.dumps(state_to_dict(state), indent=indent)


def state_from_json(text: str) -> GameState:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid state JSON: {exc}") from exc
    return state_from_dict(data)


def _parse_cell(value: object, where: str) -> Cell:
    try:
        return Cell(value)
    except ValueError:
        raise ValueError(f"Invalid cell value {value!r} at {where}") from None


def _parse_tray(values: object, color: Color) -> tuple[Cell, ...]:
    if not isinstance(values, list) or len(values) != TRAY_SIZE:
        raise ValueError(f"{color} tray must be a list of {TRAY_SIZE} cells")
    tray = tuple(_parse_cell(v, f"{color} tray") for v in values)
    if any(c not in (Cell.EMPTY, color.cell) for c in tray):
        raise ValueError(f"{color} tray holds a foreign piece")
    return tray


def _parse_phase(name: object, turn: Color, result_name: object) -> Phase:
    if name not in PHASE_KINDS:
        raise ValueError(f"Invalid phase field: {name!r}")
    if name == Terminal.kind:
        result = (
            _RESULTS_BY_NAME.get(result_name) if isinstance(result_name, str) else None
        )
        if result is None:
            raise ValueError(f"Terminal state needs a result, got {result_name!r}")
        return Terminal(result, turn)
    if result_name is not None:
        raise ValueError(f"Result {result_name!r} given for a {name} state")
    if name == Start.kind:
        return Start()
    return _TURNED_PHASES[name](turn)  # type: ignore[index]


# ── Intent notation ──────────────────────────────────────────────────────────


def intent_to_text(intent: Intent) -> str:
    """Move-list text, e.g. ``bt0-d1`` or ``xd4``."""
    return str(intent)


def parse_intent(text: str, state: GameState | None = None) -> Intent:
    """Parse intent notation.

    ``a-b`` between two board points is a :class:`Fly` when ``state`` is in
    the flying phase and a :class:`Move` otherwise.

    Raises:
        ValueError: unrecognised text (``InvalidPositionKey`` for bad keys).
    """
    token = text.strip()
    if token == "new":
        return NewGame()
    if token.startswith("resign:"):
        name = token.removeprefix("resign:")
        try:
            return Resign(Color[name.upper()])
        except KeyError:
            raise ValueError(f"Invalid resign notation: {text!r}") from None
    if token.startswith("x"):
        return Capture(token[1:])
    source_key, sep, target_key = token.partition("-")
    if not sep:
        raise ValueError(f"Invalid intent notation: {text!r}")
    source = parse_position(source_key)
    if isinstance(source, TraySlot):
        return Place(source, target_key)
    if state is not None and isinstance(state.phase, Flying):
        return Fly(source, target_key)
    return Move(source, target_key)
