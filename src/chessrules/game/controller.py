"""GameController: the synchronous command/query surface of the engine.

Coordinates: GameState, MoveValidator, MoveExecutor.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessrules.core.board import Board
from chessrules.core.enums import PROMOTION_TYPES, GameStatus, PieceType
from chessrules.core.errors import (
    GameAlreadyOver,
    InvalidMove,
    InvalidPromotionChoice,
    NoPendingPromotion,
    PromotionPending,
)
from chessrules.core.executor import MoveExecutor
from chessrules.core.move_validator import MoveValidator
from chessrules.core.position import Position
from chessrules.core.types import Square, to_square
from chessrules.game.interfaces import (
    IGameController,
    MoveOutcome,
    PendingPromotion,
    StatusReport,
)
from chessrules.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveOutcome], None]
PromotionCallback = Callable[[PendingPromotion], None]
StatusCallback = Callable[[StatusReport], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_pending: list[PromotionCallback] = field(default_factory=list)
    on_status_changed: list[StatusCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Validates and applies moves, resolves promotions, classifies positions.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread). Every call runs to completion before returning,
    and a rejected call leaves the game untouched.
    """

    __slots__ = ("_state", "events")

    def __init__(self, position: Position | None = None) -> None:
        self._state = GameState()
        self.events = GameEvents()
        self._state.setup(position)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def pending_promotion(self) -> PendingPromotion | None:
        return self._state.pending_promotion

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, position: Position | None = None) -> None:
        state = GameState()
        state.setup(position)
        self._state = state
        _LOGGER.debug("New game started, %s to move", self._state.side_to_move)
        self._emit_status()

    def submit_move(self, from_sq: object, to_sq: object) -> MoveOutcome:
        origin = to_square(from_sq)
        target = to_square(to_sq)
        self._ensure_accepting_input()
        if self._state.is_promotion_pending:
            raise PromotionPending("Choose a promotion piece before moving again")

        position = self._state.position
        piece = position.board[origin]
        if piece is None:
            raise self._reject(f"No piece on {origin}")
        if piece.color != position.turn:
            raise self._reject(f"It is {position.turn}'s turn, not {piece.color}'s")
        if not MoveValidator(position).is_legal(piece, origin, target):
            raise self._reject(f"Illegal move {origin}{target} for {piece.name}")

        executed = MoveExecutor(position).apply(origin, target)
        self._state.ply_count += 1
        self._state.last_executed = executed
        _LOGGER.debug("Applied %s%s (%s)", origin, target, piece)

        if executed.promotion_pending:
            pending = PendingPromotion(square=target, color=piece.color)
            self._state.begin_promotion(pending)
            outcome = MoveOutcome(
                move=executed,
                status=self._state.status,
                turn=position.turn,
                promotion_pending=True,
            )
            self._emit_move(outcome)
            self._emit_promotion_pending(pending)
            return outcome

        status = self._state.refresh_status()
        outcome = MoveOutcome(move=executed, status=status, turn=position.turn)
        self._emit_move(outcome)
        self._after_status_change(status)
        return outcome

    def choose_promotion(self, piece_type: PieceType) -> MoveOutcome:
        self._ensure_accepting_input()
        if not self._state.is_promotion_pending:
            raise NoPendingPromotion("No pawn is awaiting promotion")
        if piece_type not in PROMOTION_TYPES:
            raise InvalidPromotionChoice(
                f"Cannot promote to {piece_type!r}; choose Q, R, B or N"
            )

        pending = self._state.end_promotion()
        position = self._state.position
        MoveExecutor(position).promote(pending.square, PieceType(piece_type))
        _LOGGER.debug(
            "Promoted on %s to %s", pending.square, PieceType(piece_type).name
        )

        status = self._state.refresh_status()
        executed = self._state.last_executed
        assert executed is not None
        outcome = MoveOutcome(
            move=executed,
            status=status,
            turn=position.turn,
            promoted_to=PieceType(piece_type),
        )
        self._emit_move(outcome)
        self._after_status_change(status)
        return outcome

    def snapshot(self) -> Board:
        return self._state.position.board.copy()

    def status(self) -> StatusReport:
        return self._state.report()

    # ── Queries for the presentation layer ───────────────────────────────

    def legal_destinations(self, from_sq: object) -> list[Square]:
        """Legal targets of the piece on *from_sq* if it belongs to the side to move."""
        origin = to_square(from_sq)
        position = self._state.position
        piece = position.board[origin]
        if (
            piece is None
            or piece.color != position.turn
            or self._state.is_game_over
            or self._state.is_promotion_pending
        ):
            return []
        return MoveValidator(position).legal_destinations(origin)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _ensure_accepting_input(self) -> None:
        if self._state.is_game_over:
            raise GameAlreadyOver(f"Game is over ({self._state.status.name.lower()})")

    @staticmethod
    def _reject(message: str) -> InvalidMove:
        _LOGGER.debug("Rejected: %s", message)
        return InvalidMove(message)

    def _after_status_change(self, status: GameStatus) -> None:
        if status == GameStatus.CHECKMATE:
            _LOGGER.info("Checkmate, %s wins", self._state.side_to_move.opposite)
        elif status == GameStatus.STALEMATE:
            _LOGGER.info("Stalemate, game drawn")
        self._emit_status()

    def _emit_move(self, outcome: MoveOutcome) -> None:
        for cb in self.events.on_move:
            cb(outcome)

    def _emit_promotion_pending(self, pending: PendingPromotion) -> None:
        for cb in self.events.on_promotion_pending:
            cb(pending)

    def _emit_status(self) -> None:
        report = self._state.report()
        for cb in self.events.on_status_changed:
            cb(report)
