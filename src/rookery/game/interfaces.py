"""Abstract interfaces for the game layer.

The presentation collaborator depends on :class:`IGameController`, not on
the concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rookery.core.move import Move
    from rookery.core.types import Square


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_SELECTION = auto()
    AWAITING_DESTINATION = auto()  # a piece is selected, legal set computed
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, placement: str | None = None) -> None:
        """Set up a new game."""

    @abstractmethod
    def select(self, sq: Square) -> list[Move]:
        """Select the piece on *sq*; returns its legal moves."""

    @abstractmethod
    def submit_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def undo(self) -> bool:
        """Undo the last move. Returns True on success."""
