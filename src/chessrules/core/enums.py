"""Core enumerations for the rules engine."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class ValidationMode(IntEnum):
    """How much of the legality pipeline :class:`MoveValidator` runs.

    ``FULL`` runs every check including the king-safety simulation.
    ``IGNORE_KING_SAFETY`` stops after shape and occupancy checks.
    ``ATTACK_PROBE`` also skips castling, so attack queries made while
    validating a castle never re-enter castling logic.
    """

    FULL = 0
    IGNORE_KING_SAFETY = 1
    ATTACK_PROBE = 2


class GameStatus(IntEnum):
    """Classification of the position for the side to move."""

    IN_PROGRESS = 0
    CHECK = 1
    CHECKMATE = 2
    STALEMATE = 3

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE)
