"""Game management layer — session, controller, players.

Quick start::

    from tinychess.core import Color
    from tinychess.game import EnginePlayer, GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=EnginePlayer(Color.BLACK),
    )
    ctrl.submit_move(12, 28)  # e2-e4
    ctrl.engine_move()
"""

from tinychess.game.controller import GameController, GameEvents
from tinychess.game.interfaces import GamePhase, IGameController, IPlayer
from tinychess.game.player import EnginePlayer, HumanPlayer
from tinychess.game.session import GameSession

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Implementations
    "EnginePlayer",
    "GameController",
    "GameEvents",
    "GameSession",
    "HumanPlayer",
]
