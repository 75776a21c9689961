"""Game management layer — session, undo history, controller state machine.

Quick start::

    from rookery.game import GameController
    from rookery.core import parse_square

    ctrl = GameController()
    ctrl.new_game()
    ctrl.submit_move(parse_square("e2"), parse_square("e4"))
"""

from rookery.game.config import GameConfig
from rookery.game.controller import GameController, GameEvents
from rookery.game.history import History, Snapshot
from rookery.game.interfaces import GamePhase, IGameController
from rookery.game.session import GameSession, MoveRecord

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    # Concrete
    "GameConfig",
    "GameController",
    "GameEvents",
    "GameSession",
    "History",
    "MoveRecord",
    "Snapshot",
]
