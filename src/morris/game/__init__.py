"""Game management layer: controller, players, Qt bridge.

Quick start::

    from morris.core import Color, Place
    from morris.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        black=HumanPlayer(Color.BLACK, "Alice"),
        white=HumanPlayer(Color.WHITE, "Bob"),
    )
    ctrl.submit(Place("bt0", "d1"))
"""

from morris.game.controller import GameController, GameEvents, IntentRecord
from morris.game.interfaces import IGameController, IPlayer
from morris.game.player import AIPlayer, HumanPlayer, RandomPlayer

__all__ = [
    # Interfaces
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "HumanPlayer",
    "IntentRecord",
    "RandomPlayer",
]
