"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator

import pytest

from morris.core.machine import GameMachine
from morris.core.notation import parse_intent
from morris.core.state import GameState

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

PlayFn = Callable[..., GameState]


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def machine() -> GameMachine:
    return GameMachine()


@pytest.fixture
def play(machine: GameMachine) -> PlayFn:
    """Apply intents written in notation, e.g. ``play(state, "bt0-d1", "xa1")``."""

    def _play(state: GameState, *notations: str) -> GameState:
        for text in notations:
            state = machine.apply(state, parse_intent(text, state))
        return state

    return _play


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    """Build a state from piece lists, e.g. ``make_state(["a1"], ["d7"])``."""
    from morris.core.enums import Cell, Color
    from morris.core.state import Moving, Phase
    from morris.core.types import TRAY_SIZE, parse_position

    def _make(
        black: list[str] | tuple[str, ...] = (),
        white: list[str] | tuple[str, ...] = (),
        phase: Phase | None = None,
        *,
        black_tray: int = 0,
        white_tray: int = 0,
        quiet_moves: int = 0,
    ) -> GameState:
        changes = {parse_position(k): Cell.BLACK for k in black}
        changes.update({parse_position(k): Cell.WHITE for k in white})
        base = GameState(
            black_tray=(Cell.BLACK,) * black_tray
            + (Cell.EMPTY,) * (TRAY_SIZE - black_tray),
            white_tray=(Cell.WHITE,) * white_tray
            + (Cell.EMPTY,) * (TRAY_SIZE - white_tray),
            phase=phase if phase is not None else Moving(Color.BLACK),
            quiet_moves=quiet_moves,
        )
        return base.with_cells(changes).validate()

    return _make
