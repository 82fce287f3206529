"""Tests for the GameState value object."""

from dataclasses import replace

import pytest

from morris.core.enums import Cell, Color, GameResult
from morris.core.errors import InconsistentState
from morris.core.state import Flying, GameState, Placing, Start, Terminal
from morris.core.types import D1, D2, TraySlot


class TestInitial:
    def test_starts_in_start_phase(self) -> None:
        state = GameState.initial()
        assert isinstance(state.phase, Start)
        assert state.turn == Color.BLACK
        assert state.result == GameResult.IN_PROGRESS

    def test_full_trays_empty_board(self) -> None:
        state = GameState.initial()
        assert state.tray_count(Color.BLACK) == 9
        assert state.tray_count(Color.WHITE) == 9
        assert len(state.empty_points()) == 24
        assert not state.trays_empty

    def test_board_map_has_all_keys(self) -> None:
        cells = GameState.initial().board_map()
        assert len(cells) == 24
        assert set(cells.values()) == {Cell.EMPTY}


class TestDerivation:
    def test_with_cells_returns_new_state(self) -> None:
        state = GameState.initial(Placing(Color.BLACK))
        slot = TraySlot(Color.BLACK, 0)
        after = state.with_cells({slot: Cell.EMPTY, D1: Cell.BLACK})

        assert after is not state
        assert state.cell(D1) == Cell.EMPTY
        assert state.cell(slot) == Cell.BLACK
        assert after[D1] == Cell.BLACK
        assert after[slot] == Cell.EMPTY

    def test_counts(self) -> None:
        state = GameState.initial().with_cells(
            {TraySlot(Color.WHITE, 3): Cell.EMPTY, D2: Cell.WHITE}
        )
        assert state.board_count(Color.WHITE) == 1
        assert state.tray_count(Color.WHITE) == 8
        assert state.piece_count(Color.WHITE) == 9
        assert state.points_of(Color.WHITE) == [D2]
        assert state.tray_pieces(Color.WHITE)[3] == TraySlot(Color.WHITE, 4)

    def test_with_phase(self) -> None:
        state = GameState.initial().with_phase(Flying(Color.WHITE), quiet_moves=4)
        assert state.turn == Color.WHITE
        assert state.quiet_moves == 4

    def test_terminal_result(self) -> None:
        state = GameState.initial(Terminal(GameResult.DRAW, Color.WHITE))
        assert state.is_terminal
        assert state.result == GameResult.DRAW
        assert state.turn == Color.WHITE

    def test_frozen(self) -> None:
        state = GameState.initial()
        with pytest.raises(AttributeError):
            state.quiet_moves = 3  # type: ignore[misc]

    def test_str_draws_board(self) -> None:
        text = str(GameState.initial().with_cells({D1: Cell.BLACK}))
        assert "d1=B" in text
        assert "phase=" in text


class TestValidate:
    def test_initial_is_valid(self) -> None:
        state = GameState.initial()
        assert state.validate() is state

    def test_short_board(self) -> None:
        state = replace(GameState.initial(), board=(Cell.EMPTY,) * 23)
        with pytest.raises(InconsistentState):
            state.validate()

    def test_short_tray(self) -> None:
        state = replace(GameState.initial(), white_tray=(Cell.WHITE,) * 8)
        with pytest.raises(InconsistentState):
            state.validate()

    def test_foreign_piece_in_tray(self) -> None:
        state = replace(GameState.initial(), black_tray=(Cell.WHITE,) * 9)
        with pytest.raises(InconsistentState):
            state.validate()

    def test_too_many_pieces(self) -> None:
        state = GameState.initial().with_cells({D1: Cell.BLACK})
        with pytest.raises(InconsistentState):
            state.validate()

    def test_pieces_never_increase(self) -> None:
        before = GameState.initial().with_cells({TraySlot(Color.BLACK, 0): Cell.EMPTY})
        after = GameState.initial()
        with pytest.raises(InconsistentState):
            after.validate(previous=before)
