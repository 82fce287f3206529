"""Mill detection.

Only the lines through the point that changed are inspected, so every query
costs O(2) line checks instead of a scan over all 16 lines.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from morris.core.enums import Color
from morris.core.topology import MILL_LINES, MillLine, mill_lines_through
from morris.core.types import BoardPosition

if TYPE_CHECKING:
    from morris.core.state import GameState


def is_line_of(state: GameState, line: MillLine, color: Color) -> bool:
    """Whether every point of ``line`` holds ``color``."""
    target = color.cell
    return all(state.cell(p) == target for p in line)


def has_mill(state: GameState, color: Color) -> bool:
    """Whether ``color`` occupies any complete mill line."""
    return any(is_line_of(state, line, color) for line in MILL_LINES)


def mills_through(
    state: GameState, point: BoardPosition, color: Color
) -> list[MillLine]:
    """Lines through ``point`` that are complete mills of ``color``."""
    return [
        line for line in mill_lines_through(point) if is_line_of(state, line, color)
    ]


def formed_new_mill(
    before: GameState,
    after: GameState,
    color: Color,
    touched: BoardPosition,
) -> bool:
    """Whether moving a piece onto ``touched`` closed a mill that was open before.

    A mill that is broken by sliding a piece out and re-formed later by
    sliding it back counts again, because the intermediate state had the
    line open. A line that was already complete in ``before`` does not.
    """
    return any(
        is_line_of(after, line, color) and not is_line_of(before, line, color)
        for line in mill_lines_through(touched)
    )


def is_in_mill(state: GameState, point: BoardPosition) -> bool:
    """Whether the piece on ``point`` is part of a complete mill."""
    color = state.cell(point).color
    if color is None:
        return False
    return bool(mills_through(state, point, color))


def capturable_positions(
    state: GameState,
    color: Color,
    *,
    protect_mills: bool = True,
) -> list[BoardPosition]:
    """Pieces of ``color`` the opponent may remove.

    Pieces inside a mill are protected while ``color`` has any piece outside
    a mill; once every piece is in a mill, all of them are fair game.
    """
    pieces = state.points_of(color)
    if not protect_mills:
        return pieces
    loose = [p for p in pieces if not is_in_mill(state, p)]
    return loose or pieces
