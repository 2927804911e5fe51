"""Game state machine: status classification, gating and pending promotion."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessrules.core.enums import Color, GameStatus
from chessrules.core.executor import ExecutedMove
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.game.interfaces import PendingPromotion, StatusReport


@dataclass
class GameState:
    """Owns the position and everything derived from it between moves.

    This is a pure data/logic class; no threading, no UI.
    """

    position: Position = field(default_factory=Position.initial)
    status: GameStatus = field(default=GameStatus.IN_PROGRESS, init=False)
    pending_promotion: PendingPromotion | None = field(default=None, init=False)
    ply_count: int = field(default=0, init=False)
    last_executed: ExecutedMove | None = field(default=None, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, position: Position | None = None) -> None:
        """Initialise (or reset) the game.

        Raises :class:`InvalidPosition` for an unplayable *position*, in which
        case nothing is changed.
        """
        if position is None:
            position = Position.initial()
        else:
            Rules.validate(position)
        self.position = position
        self.pending_promotion = None
        self.ply_count = 0
        self.last_executed = None
        self.refresh_status()

    # ── Transitions ──────────────────────────────────────────────────────

    def refresh_status(self) -> GameStatus:
        """Re-classify the position for the side now to move."""
        self.status = Rules.classify(self.position)
        return self.status

    def begin_promotion(self, pending: PendingPromotion) -> None:
        self.pending_promotion = pending

    def end_promotion(self) -> PendingPromotion:
        pending = self.pending_promotion
        if pending is None:
            raise ValueError("No promotion in progress")
        self.pending_promotion = None
        return pending

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.turn

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def is_promotion_pending(self) -> bool:
        return self.pending_promotion is not None

    def report(self) -> StatusReport:
        return StatusReport(turn=self.position.turn, status=self.status)
