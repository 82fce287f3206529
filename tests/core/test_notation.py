"""Tests for state documents and intent notation."""

import json
from typing import Any

import pytest

from morris.core.enums import Cell, Color, GameResult
from morris.core.errors import InvalidPositionKey
from morris.core.intents import Capture, Fly, Intent, Move, NewGame, Place, Resign
from morris.core.machine import GameMachine
from morris.core.notation import (
    intent_to_text,
    parse_intent,
    state_from_dict,
    state_from_json,
    state_to_dict,
    state_to_json,
)
from morris.core.state import Flying, GameState, Placing, Start, Terminal
from morris.core.types import BOARD_POINTS, TraySlot, parse_position


def _new_game_doc() -> dict[str, Any]:
    return state_to_dict(GameMachine().new_game())


class TestStateToDict:
    def test_new_game(self) -> None:
        doc = _new_game_doc()
        assert len(doc["board"]) == 24
        assert set(doc["board"].values()) == {"E"}
        assert doc["blackTray"] == ["B"] * 9
        assert doc["whiteTray"] == ["W"] * 9
        assert doc["phase"] == "PLACING"
        assert doc["turn"] == "BLACK"
        assert doc["result"] is None
        assert doc["quietMoves"] == 0

    def test_board_keys_in_canonical_order(self) -> None:
        doc = _new_game_doc()
        assert list(doc["board"]) == [str(p) for p in BOARD_POINTS]

    def test_start_reports_black(self) -> None:
        doc = state_to_dict(GameState.initial())
        assert doc["phase"] == "START"
        assert doc["turn"] == "BLACK"

    def test_terminal_result(self) -> None:
        machine = GameMachine()
        state = machine.apply(machine.new_game(), Resign(Color.BLACK))
        doc = state_to_dict(state)
        assert doc["phase"] == "TERMINAL"
        assert doc["result"] == "WHITE_WINS"

    def test_json_is_plain(self) -> None:
        text = state_to_json(GameMachine().new_game(), indent=2)
        assert json.loads(text)["phase"] == "PLACING"


class TestStateFromDict:
    def test_round_trip_mid_game(self, machine: GameMachine, play: Any) -> None:
        state = play(
            machine.new_game(), "bt0-d1", "wt0-a7", "bt1-d2", "wt1-g7", "bt2-d3"
        )
        assert state_from_json(state_to_json(state)) == state

    def test_round_trip_terminal(self, machine: GameMachine) -> None:
        state = machine.apply(machine.new_game(), Resign(Color.WHITE))
        restored = state_from_dict(state_to_dict(state))
        assert restored == state
        assert restored.phase == Terminal(GameResult.BLACK_WINS, Color.BLACK)

    def test_quiet_moves_optional(self) -> None:
        doc = _new_game_doc()
        del doc["quietMoves"]
        assert state_from_dict(doc).quiet_moves == 0

    def test_phase_and_turn(self) -> None:
        doc = _new_game_doc()
        doc["phase"] = "FLYING"
        doc["turn"] = "WHITE"
        assert state_from_dict(doc).phase == Flying(Color.WHITE)

    def test_start(self) -> None:
        doc = _new_game_doc()
        doc["phase"] = "START"
        assert state_from_dict(doc).phase == Start()

    def test_cells_and_trays(self) -> None:
        doc = _new_game_doc()
        doc["board"]["d1"] = "B"
        doc["blackTray"][0] = "E"
        state = state_from_dict(doc)
        assert state.cell(parse_position("d1")) == Cell.BLACK
        assert state.cell(TraySlot(Color.BLACK, 0)) == Cell.EMPTY
        assert state.phase == Placing(Color.BLACK)


class TestStateFromDictErrors:
    @pytest.mark.parametrize(
        "field", ["board", "blackTray", "whiteTray", "phase", "turn"]
    )
    def test_missing_field(self, field: str) -> None:
        doc = _new_game_doc()
        del doc[field]
        with pytest.raises(ValueError, match=field):
            state_from_dict(doc)

    def test_missing_board_point(self) -> None:
        doc = _new_game_doc()
        del doc["board"]["d1"]
        with pytest.raises(ValueError):
            state_from_dict(doc)

    def test_extra_board_key(self) -> None:
        doc = _new_game_doc()
        doc["board"]["b1"] = "E"
        with pytest.raises(ValueError):
            state_from_dict(doc)

    def test_bad_cell(self) -> None:
        doc = _new_game_doc()
        doc["board"]["d1"] = "X"
        with pytest.raises(ValueError, match="d1"):
            state_from_dict(doc)

    def test_foreign_tray_piece(self) -> None:
        doc = _new_game_doc()
        doc["blackTray"][3] = "W"
        with pytest.raises(ValueError):
            state_from_dict(doc)

    def test_short_tray(self) -> None:
        doc = _new_game_doc()
        doc["whiteTray"] = ["W"] * 8
        with pytest.raises(ValueError):
            state_from_dict(doc)

    def test_bad_turn(self) -> None:
        doc = _new_game_doc()
        doc["turn"] = "RED"
        with pytest.raises(ValueError):
            state_from_dict(doc)

    def test_bad_phase(self) -> None:
        doc = _new_game_doc()
        doc["phase"] = "SLIDING"
        with pytest.raises(ValueError):
            state_from_dict(doc)

    def test_terminal_needs_result(self) -> None:
        doc = _new_game_doc()
        doc["phase"] = "TERMINAL"
        with pytest.raises(ValueError):
            state_from_dict(doc)

    def test_result_outside_terminal(self) -> None:
        doc = _new_game_doc()
        doc["result"] = "DRAW"
        with pytest.raises(ValueError):
            state_from_dict(doc)

    @pytest.mark.parametrize("value", [-1, "3", True])
    def test_bad_quiet_moves(self, value: object) -> None:
        doc = _new_game_doc()
        doc["quietMoves"] = value
        with pytest.raises(ValueError):
            state_from_dict(doc)

    def test_too_many_pieces(self) -> None:
        doc = _new_game_doc()
        doc["board"]["d1"] = "B"
        with pytest.raises(ValueError):
            state_from_dict(doc)

    def test_not_a_document(self) -> None:
        with pytest.raises(ValueError):
            state_from_dict([])  # type: ignore[arg-type]

    def test_bad_json(self) -> None:
        with pytest.raises(ValueError):
            state_from_json("{board:")


class TestIntentNotation:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("bt0-d1", Place("bt0", "d1")),
            ("wt8-g7", Place("wt8", "g7")),
            ("d1-d2", Move("d1", "d2")),
            ("xd1", Capture("d1")),
            ("new", NewGame()),
            ("resign:black", Resign(Color.BLACK)),
            (" resign:white ", Resign(Color.WHITE)),
        ],
    )
    def test_parse(self, text: str, expected: object) -> None:
        assert parse_intent(text) == expected

    def test_slide_in_flying_is_fly(self, make_state: Any) -> None:
        state = make_state(["a1", "d1", "g1"], ["a7", "b6", "f6"], Flying(Color.BLACK))
        assert parse_intent("a1-c3", state) == Fly("a1", "c3")

    @pytest.mark.parametrize(
        "intent", [Place("bt3", "e4"), Move("a4", "a7"), Capture("f6")]
    )
    def test_text_round_trip(self, intent: Intent) -> None:
        assert parse_intent(intent_to_text(intent)) == intent

    def test_fly_text(self) -> None:
        assert intent_to_text(Fly("c3", "g7")) == "c3-g7"

    def test_resign_text(self) -> None:
        assert intent_to_text(Resign(Color.WHITE)) == "resign:white"

    @pytest.mark.parametrize("text", ["d1", "resign:grey", ""])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_intent(text)

    @pytest.mark.parametrize("text", ["z9-d1", "d01-d2", "xb1", "bt9-d1"])
    def test_invalid_key(self, text: str) -> None:
        with pytest.raises(InvalidPositionKey):
            parse_intent(text)
