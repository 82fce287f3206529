"""Core domain layer: pure Nine Men's Morris rules with zero external dependencies.

Quick start::

    from morris.core import GameMachine, Place

    machine = GameMachine()
    state = machine.new_game()
    state = machine.apply(state, Place("bt0", "d1"))
    print(machine.legal_destinations(state, "wt0"))
"""

from morris.core.config import DEFAULT_RULES, RuleSet
from morris.core.enums import Cell, Color, GameResult
from morris.core.errors import (
    IllegalIntent,
    InconsistentState,
    InvalidPositionKey,
    MorrisError,
    RejectionReason,
)
from morris.core.intents import Capture, Fly, Intent, Move, NewGame, Place, Resign
from morris.core.machine import GameMachine, PhaseInfo
from morris.core.mills import (
    capturable_positions,
    formed_new_mill,
    has_mill,
    is_in_mill,
)
from morris.core.notation import (
    intent_to_text,
    parse_intent,
    state_from_dict,
    state_from_json,
    state_to_dict,
    state_to_json,
)
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
from morris.core.topology import (
    ADJACENCY,
    MILL_LINES,
    is_adjacent,
    mill_lines_through,
    neighbours,
)
from morris.core.types import (
    BOARD_POINTS,
    BoardPosition,
    Position,
    PositionKey,
    TraySlot,
    parse_position,
    position_key,
)

__all__ = [
    # Enums
    "Cell",
    "Color",
    "GameResult",
    # Errors
    "IllegalIntent",
    "InconsistentState",
    "InvalidPositionKey",
    "MorrisError",
    "RejectionReason",
    # Addressing / topology
    "ADJACENCY",
    "BOARD_POINTS",
    "MILL_LINES",
    "BoardPosition",
    "Position",
    "PositionKey",
    "TraySlot",
    "is_adjacent",
    "mill_lines_through",
    "neighbours",
    "parse_position",
    "position_key",
    # Mills
    "capturable_positions",
    "formed_new_mill",
    "has_mill",
    "is_in_mill",
    # State / phases
    "AwaitingCapture",
    "Flying",
    "GameState",
    "Moving",
    "Phase",
    "Placing",
    "Start",
    "Terminal",
    # Intents
    "Capture",
    "Fly",
    "Intent",
    "Move",
    "NewGame",
    "Place",
    "Resign",
    # Machine / config
    "DEFAULT_RULES",
    "GameMachine",
    "PhaseInfo",
    "RuleSet",
    # Notation
    "intent_to_text",
    "parse_intent",
    "state_from_dict",
    "state_from_json",
    "state_to_dict",
    "state_to_json",
]
