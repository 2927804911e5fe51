"""Abstract interfaces and result objects for the game layer.

Follows Dependency Inversion: presentation code depends on
:class:`IGameController`, not on the concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, GameStatus, PieceType

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.executor import ExecutedMove
    from chessrules.core.position import Position
    from chessrules.core.types import Square


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn standing on its last rank, waiting for a piece choice."""

    square: Square
    color: Color


@dataclass(frozen=True, slots=True)
class StatusReport:
    """Side to move and the status of its position."""

    turn: Color
    status: GameStatus


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of a successful ``submit_move`` or ``choose_promotion``."""

    move: ExecutedMove
    status: GameStatus
    turn: Color
    promotion_pending: bool = False
    promoted_to: PieceType | None = None

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal


class IGameController(ABC):
    """Interface for the synchronous command/query surface."""

    @abstractmethod
    def new_game(self, position: Position | None = None) -> None:
        """Start a game from the standard setup or from *position*."""

    @abstractmethod
    def submit_move(self, from_sq: object, to_sq: object) -> MoveOutcome:
        """Validate and apply a move. Raises ``EngineError`` on rejection."""

    @abstractmethod
    def choose_promotion(self, piece_type: PieceType) -> MoveOutcome:
        """Resolve the pending promotion. Raises ``EngineError`` on rejection."""

    @abstractmethod
    def snapshot(self) -> Board:
        """Read-only copy of the current piece placement."""

    @abstractmethod
    def status(self) -> StatusReport:
        """Side to move and game status."""
