"""Game management layer: controller, state machine, Qt bridge.

Quick start::

    from chessrules.game import GameController

    ctrl = GameController()
    ctrl.submit_move("e2", "e4")
    ctrl.status()        # StatusReport(turn=Color.BLACK, status=GameStatus.IN_PROGRESS)

The Qt bridge lives in :mod:`chessrules.game.qt_bridge` and is imported
explicitly so the rules engine stays usable without a Qt runtime.
"""

from chessrules.game.controller import GameController, GameEvents
from chessrules.game.interfaces import (
    IGameController,
    MoveOutcome,
    PendingPromotion,
    StatusReport,
)
from chessrules.game.state import GameState

__all__ = [
    # Interfaces
    "IGameController",
    "MoveOutcome",
    "PendingPromotion",
    "StatusReport",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
]
