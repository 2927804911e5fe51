"""Typed errors raised by the public engine operations.

Every error is recoverable: the engine state is left exactly as it was
before the failing call.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for all rule-engine errors."""


class InvalidMove(EngineError):
    """Geometry fails, own piece on target, or the mover's king would be attacked."""


class GameAlreadyOver(EngineError):
    """A move or promotion was submitted after checkmate or stalemate."""


class NoPendingPromotion(EngineError):
    """``choose_promotion`` was called with no pawn awaiting promotion."""


class InvalidPromotionChoice(EngineError):
    """Promotion piece is not one of queen, rook, bishop or knight."""


class PromotionPending(EngineError):
    """A move was submitted while a promotion choice is still outstanding."""


class OutOfBoundsSquare(EngineError, ValueError):
    """A coordinate outside 0-7 (or a malformed square) reached the boundary."""


class InvalidPosition(EngineError, ValueError):
    """A supplied starting position cannot arise in a legal game."""
