"""GameController — the presentation-facing side of a chess game.

Owns one :class:`GameSession`, tracks the selection state machine and
emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from rookery.core.move import Move
from rookery.core.rules import StatusReport
from rookery.core.types import Square
from rookery.game.config import GameConfig
from rookery.game.interfaces import GamePhase, IGameController
from rookery.game.session import GameSession, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameSession], None]
GameOverCallback = Callable[[StatusReport], None]
PhaseCallback = Callable[[GamePhase], None]
UndoCallback = Callable[[GameSession], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_undo: list[UndoCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Validates move requests, keeps the selection, notifies listeners.

    Thread-safety: all methods must be called from a single thread; the
    session has exactly one writer.
    """

    __slots__ = ("_session", "_phase", "_selected", "_highlighted", "events")

    def __init__(self, config: GameConfig | None = None) -> None:
        self._session = GameSession(config)
        self._phase = GamePhase.NOT_STARTED
        self._selected: Square | None = None
        self._highlighted: list[Move] = []
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def status(self) -> StatusReport:
        return self._session.status

    @property
    def selected(self) -> Square | None:
        return self._selected

    @property
    def highlighted(self) -> list[Move]:
        """Legal moves of the selected piece."""
        return list(self._highlighted)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, placement: str | None = None) -> None:
        self._session.new_game(placement)
        _LOGGER.info("Controller started a new game")
        self._clear_selection()
        self._phase = GamePhase.NOT_STARTED
        self._settle_phase()

    def select(self, sq: Square) -> list[Move]:
        if self._phase in (GamePhase.NOT_STARTED, GamePhase.GAME_OVER):
            return []
        piece = self._session.position.board[sq]
        if piece is None or piece.color != self._session.side_to_move:
            self._clear_selection()
            self._set_phase(GamePhase.AWAITING_SELECTION)
            return []

        self._selected = sq
        self._highlighted = self._session.legal_moves(sq)
        _LOGGER.debug("Selected %s, %d legal move(s)", sq, len(self._highlighted))
        self._set_phase(GamePhase.AWAITING_DESTINATION)
        return list(self._highlighted)

    def click(self, sq: Square) -> bool:
        """Square-click flow. Returns True when the click played a move."""
        if self._phase == GamePhase.AWAITING_DESTINATION and self._selected is not None:
            piece = self._session.position.board[sq]
            if piece is None or piece.color != self._session.side_to_move:
                if any(m.to_sq == sq for m in self._highlighted):
                    return self.submit_move(self._selected, sq)
                self._clear_selection()
                self._set_phase(GamePhase.AWAITING_SELECTION)
                return False
        self.select(sq)
        return False

    def submit_move(self, from_sq: Square, to_sq: Square) -> bool:
        if self._phase in (GamePhase.NOT_STARTED, GamePhase.GAME_OVER):
            return False

        record = self._session.play(from_sq, to_sq)
        self._clear_selection()
        if record is None:
            self._set_phase(GamePhase.AWAITING_SELECTION)
            return False

        for cb in self.events.on_move:
            cb(record, self._session)
        self._settle_phase()
        return True

    def undo(self) -> bool:
        if self._phase == GamePhase.NOT_STARTED:
            return False
        if not self._session.undo():
            return False

        self._clear_selection()
        for cb in self.events.on_undo:
            cb(self._session)
        self._settle_phase()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _clear_selection(self) -> None:
        self._selected = None
        self._highlighted = []

    def _settle_phase(self) -> None:
        """Derive the phase from the freshly computed session status."""
        status = self._session.status
        if status.is_terminal:
            if self._phase != GamePhase.GAME_OVER:
                self._set_phase(GamePhase.GAME_OVER)
                for cb in self.events.on_game_over:
                    cb(status)
            return
        self._set_phase(GamePhase.AWAITING_SELECTION)

    def _set_phase(self, phase: GamePhase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
