"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Position, MoveValidator, Rules, parse_square

    pos = Position.initial()
    validator = MoveValidator(pos)
    validator.legal_destinations(parse_square("g1"))   # [f3, h3]
    Rules.classify(pos)                                # GameStatus.IN_PROGRESS
"""

from chessrules.core.board import Board
from chessrules.core.enums import (
    PROMOTION_TYPES,
    Color,
    GameStatus,
    PieceType,
    ValidationMode,
)
from chessrules.core.errors import (
    EngineError,
    GameAlreadyOver,
    InvalidMove,
    InvalidPosition,
    InvalidPromotionChoice,
    NoPendingPromotion,
    OutOfBoundsSquare,
    PromotionPending,
)
from chessrules.core.executor import ExecutedMove, MoveExecutor
from chessrules.core.geometry import path_clear
from chessrules.core.move_validator import MoveValidator
from chessrules.core.piece import Piece
from chessrules.core.position import CastlingFlags, CastlingRights, LastMove, Position
from chessrules.core.rules import Rules
from chessrules.core.types import (
    Square,
    make_square,
    parse_square,
    square_name,
    to_square,
)

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "PROMOTION_TYPES",
    "PieceType",
    "ValidationMode",
    # Errors
    "EngineError",
    "GameAlreadyOver",
    "InvalidMove",
    "InvalidPosition",
    "InvalidPromotionChoice",
    "NoPendingPromotion",
    "OutOfBoundsSquare",
    "PromotionPending",
    # Types / helpers
    "Square",
    "make_square",
    "parse_square",
    "path_clear",
    "square_name",
    "to_square",
    # Domain objects
    "Board",
    "CastlingFlags",
    "CastlingRights",
    "ExecutedMove",
    "LastMove",
    "MoveExecutor",
    "MoveValidator",
    "Piece",
    "Position",
    "Rules",
]
