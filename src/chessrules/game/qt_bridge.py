"""Qt bridge that exposes a GameController through signals and slots."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessrules.core.errors import EngineError
from chessrules.game.controller import GameController
from chessrules.game.interfaces import MoveOutcome, PendingPromotion, StatusReport


class GameBridge(QObject):
    """Main-thread adapter between a Qt presentation layer and the engine.

    Engine errors never cross the signal boundary; they are reported
    through :attr:`move_rejected` with the error message.
    """

    move_applied = pyqtSignal(object)
    promotion_requested = pyqtSignal(object)
    status_changed = pyqtSignal(object)
    move_rejected = pyqtSignal(str)

    def __init__(
        self,
        controller: GameController | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller if controller is not None else GameController()
        self._subscribe()

    @property
    def controller(self) -> GameController:
        return self._controller

    @pyqtSlot(object, object)
    def submit_move(self, from_sq: object, to_sq: object) -> None:
        """Forward a move; the outcome arrives through the signals."""
        try:
            self._controller.submit_move(from_sq, to_sq)
        except EngineError as exc:
            self.move_rejected.emit(str(exc))

    @pyqtSlot(int)
    def choose_promotion(self, piece_type: int) -> None:
        try:
            self._controller.choose_promotion(piece_type)  # type: ignore[arg-type]
        except EngineError as exc:
            self.move_rejected.emit(str(exc))

    @pyqtSlot()
    def new_game(self) -> None:
        self._controller.new_game()

    # ── Controller callbacks ─────────────────────────────────────────────

    def _subscribe(self) -> None:
        events = self._controller.events
        events.on_move.append(self._on_move)
        events.on_promotion_pending.append(self._on_promotion_pending)
        events.on_status_changed.append(self._on_status_changed)

    def _on_move(self, outcome: MoveOutcome) -> None:
        self.move_applied.emit(outcome)

    def _on_promotion_pending(self, pending: PendingPromotion) -> None:
        self.promotion_requested.emit(pending)

    def _on_status_changed(self, report: StatusReport) -> None:
        self.status_changed.emit(report)
