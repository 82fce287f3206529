"""Board topology: the 24 points, the 16 mill lines and adjacency.

The board is three concentric squares joined by four spokes. Mills are
declared as an explicit table; grouping points by column letter or row digit
alone would be wrong (``a4 b4 c4 e4 f4 g4`` share a row but form two lines).
"""

from __future__ import annotations

from typing import Final, TypeAlias

from morris.core.types import (
    A1, A4, A7, B2, B4, B6, BOARD_POINTS, C3, C4, C5, D1, D2, D3, D5, D6, D7,
    E3, E4, E5, F2, F4, F6, G1, G4, G7,
    BoardPosition,
)  # fmt: skip

MillLine: TypeAlias = tuple[BoardPosition, BoardPosition, BoardPosition]

# Points within a line are listed in board order; consecutive points are
# joined by a segment.
MILL_LINES: Final[tuple[MillLine, ...]] = (
    # Horizontal
    (A7, D7, G7),
    (B6, D6, F6),
    (C5, D5, E5),
    (A4, B4, C4),
    (E4, F4, G4),
    (C3, D3, E3),
    (B2, D2, F2),
    (A1, D1, G1),
    # Vertical
    (A1, A4, A7),
    (B2, B4, B6),
    (C3, C4, C5),
    (D5, D6, D7),
    (D1, D2, D3),
    (E3, E4, E5),
    (F2, F4, F6),
    (G1, G4, G7),
)

BOARD_INDEX: Final[dict[BoardPosition, int]] = {
    point: idx for idx, point in enumerate(BOARD_POINTS)
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_lines_through() -> dict[BoardPosition, tuple[MillLine, ...]]:
    through: dict[BoardPosition, list[MillLine]] = {p: [] for p in BOARD_POINTS}
    for line in MILL_LINES:
        for point in line:
            through[point].append(line)
    return {p: tuple(lines) for p, lines in through.items()}


def _build_adjacency() -> dict[BoardPosition, frozenset[BoardPosition]]:
    adjacent: dict[BoardPosition, set[BoardPosition]] = {p: set() for p in BOARD_POINTS}
    for a, b, c in MILL_LINES:
        adjacent[a].add(b)
        adjacent[b].update((a, c))
        adjacent[c].add(b)
    return {p: frozenset(n) for p, n in adjacent.items()}


_LINES_THROUGH: Final = _build_lines_through()
ADJACENCY: Final[dict[BoardPosition, frozenset[BoardPosition]]] = _build_adjacency()


def is_adjacent(a: BoardPosition, b: BoardPosition) -> bool:
    """Whether a piece may slide from ``a`` to ``b`` in one step."""
    return b in ADJACENCY[a]


def neighbours(point: BoardPosition) -> frozenset[BoardPosition]:
    """Points joined to ``point`` by a segment."""
    return ADJACENCY[point]


def mill_lines_through(point: BoardPosition) -> tuple[MillLine, ...]:
    """The (exactly two) mill lines containing ``point``."""
    return _LINES_THROUGH[point]
