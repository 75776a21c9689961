"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rookery.core.enums import Color, GameStatus
from rookery.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from rookery.core.position import Position


@dataclass(frozen=True, slots=True)
class StatusReport:
    """Status of a position for one side."""

    status: GameStatus
    in_check: bool = False
    winner: Color | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.ONGOING


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Product policy: no draw by repetition, fifty-move rule or material.

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move if color is None else color)

    @staticmethod
    def is_checkmate(position: Position, color: Color | None = None) -> bool:
        return Rules.status(position, color).status == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position, color: Color | None = None) -> bool:
        return Rules.status(position, color).status == GameStatus.STALEMATE

    @staticmethod
    def status(position: Position, color: Color | None = None) -> StatusReport:
        """Classify the position for *color* (default: side to move)."""
        if color is None:
            color = position.side_to_move
        gen = MoveGenerator(position)
        in_check = gen.is_in_check(color)

        if gen.has_legal_move(color):
            return StatusReport(GameStatus.ONGOING, in_check=in_check)
        if in_check:
            return StatusReport(
                GameStatus.CHECKMATE, in_check=True, winner=color.opposite
            )
        return StatusReport(GameStatus.STALEMATE)
