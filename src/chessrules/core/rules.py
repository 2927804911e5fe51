"""High-level chess rules: check, checkmate, stalemate classification."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, GameStatus, PieceType
from chessrules.core.errors import InvalidPosition
from chessrules.core.move_validator import MoveValidator

if TYPE_CHECKING:
    from chessrules.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def validate(position: Position) -> None:
        """Raise :class:`InvalidPosition` unless *position* is playable.

        Each color needs exactly one king, and the side that just moved
        cannot have left its own king attacked.
        """
        board = position.board
        for color in Color:
            kings = len(board.pieces(color, PieceType.KING))
            if kings != 1:
                raise InvalidPosition(f"{color} has {kings} kings, expected 1")
        waiting = position.turn.opposite
        if MoveValidator(position).is_in_check(waiting):
            raise InvalidPosition(f"{waiting} is in check but it is not their move")

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return MoveValidator(position).is_in_check(position.turn)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.classify(position) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return Rules.classify(position) == GameStatus.STALEMATE

    @staticmethod
    def classify(position: Position) -> GameStatus:
        """Status of the side to move in *position*."""
        validator = MoveValidator(position)
        color = position.turn
        attacked = validator.is_in_check(color)
        has_move = validator.has_any_legal_move(color)

        if attacked:
            return GameStatus.CHECK if has_move else GameStatus.CHECKMATE
        return GameStatus.IN_PROGRESS if has_move else GameStatus.STALEMATE
