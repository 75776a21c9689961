"""GameSession — the single owner of a game's mutable state."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rookery.core.enums import Color, GameStatus, PieceType
from rookery.core.move import Move
from rookery.core.move_generator import MoveGenerator
from rookery.core.notation import (
    InvalidPosition,
    PlacementError,
    move_to_notation,
    parse_placement,
)
from rookery.core.piece import Piece
from rookery.core.position import Position
from rookery.core.rules import Rules, StatusReport
from rookery.core.types import Square
from rookery.game.config import GameConfig
from rookery.game.history import History, Snapshot

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A committed move with its side effects."""

    move: Move
    notation: str
    captured: Piece | None
    status: StatusReport


class GameSession:
    """Board, turn, en passant window, capture bins, notation log and undo.

    Checkmate and stalemate are terminal: :meth:`commit` refuses moves
    until :meth:`new_game` or :meth:`undo` leaves that state.
    """

    __slots__ = (
        "config",
        "position",
        "captured_by_white",
        "captured_by_black",
        "move_log",
        "history",
        "_status",
    )

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.history = History(self.config.max_undo)
        self.new_game()

    @classmethod
    def from_placement(
        cls, placement: str, config: GameConfig | None = None
    ) -> GameSession:
        session = cls(config)
        session.new_game(placement)
        return session

    # ── Lifecycle ────────────────────────────────────────────────────────

    def new_game(self, placement: str | None = None) -> None:
        """Discard all state and load *placement* (default from config)."""
        text = placement if placement is not None else self.config.starting_placement
        try:
            board = parse_placement(text)
            for color in Color:
                if len(board.pieces(color, PieceType.KING)) != 1:
                    raise InvalidPosition(PlacementError.KING_COUNT, text, color.name)
            if MoveGenerator(Position(board)).is_in_check(Color.BLACK):
                raise InvalidPosition(PlacementError.OPPONENT_IN_CHECK, text)
        except InvalidPosition as exc:
            _LOGGER.warning("Rejected placement: %s", exc)
            raise

        self.position = Position(board)
        self.captured_by_white: list[Piece] = []
        self.captured_by_black: list[Piece] = []
        self.move_log: list[str] = []
        self.history.clear()
        self._status = Rules.status(self.position)
        _LOGGER.info("New game: %s", text)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def status(self) -> StatusReport:
        return self._status

    @property
    def is_game_over(self) -> bool:
        return self._status.is_terminal

    @property
    def can_undo(self) -> bool:
        return bool(self.history)

    def captured_by(self, color: Color) -> list[Piece]:
        """Pieces *color* has taken, in capture order."""
        if color == Color.WHITE:
            return self.captured_by_white
        return self.captured_by_black

    def legal_moves(self, sq: Square) -> list[Move]:
        """Legal moves of the side to move's piece on *sq*."""
        piece = self.position.board[sq]
        if piece is None or piece.color != self.side_to_move:
            return []
        return MoveGenerator(self.position).legal_moves_from(sq)

    def resolve(self, from_sq: Square, to_sq: Square) -> Move | None:
        """The legal move from *from_sq* to *to_sq*, if there is one."""
        for move in self.legal_moves(from_sq):
            if move.to_sq == to_sq:
                return move
        return None

    def numbered_moves(self) -> list[str]:
        """Move log grouped in pairs, e.g. ``["1. e4 e5", "2. Nf3"]``."""
        lines: list[str] = []
        for idx in range(0, len(self.move_log), 2):
            lines.append(f"{idx // 2 + 1}. {' '.join(self.move_log[idx:idx + 2])}")
        return lines

    # ── Move application ─────────────────────────────────────────────────

    def play(self, from_sq: Square, to_sq: Square) -> MoveRecord | None:
        """Handle a move request; None means "not legal" and nothing changed."""
        if self.is_game_over:
            return None
        move = self.resolve(from_sq, to_sq)
        if move is None:
            _LOGGER.debug("Rejected move request %s -> %s", from_sq, to_sq)
            return None
        return self.commit(move)

    def commit(self, move: Move) -> MoveRecord | None:
        """Snapshot, then apply a legal *move*. Illegal moves are rejected."""
        if self.is_game_over or move not in self.legal_moves(move.from_sq):
            _LOGGER.debug("Rejected move %s", move)
            return None

        mover = self.side_to_move
        self.history.push(self.snapshot())
        notation = move_to_notation(self.position, move)
        captured = self.position.make_move(move)
        if captured is not None:
            self.captured_by(mover).append(captured)
        self.move_log.append(notation)

        self._status = Rules.status(self.position)
        _LOGGER.debug("%s played %s (%s)", mover, notation, move)
        if self._status.status == GameStatus.CHECKMATE:
            _LOGGER.info("Checkmate, %s wins", self._status.winner)
        elif self._status.status == GameStatus.STALEMATE:
            _LOGGER.info("Stalemate")

        return MoveRecord(move, notation, captured, self._status)

    # ── Undo ─────────────────────────────────────────────────────────────

    def snapshot(self) -> Snapshot:
        return Snapshot(
            position=self.position.copy(),
            captured_by_white=tuple(self.captured_by_white),
            captured_by_black=tuple(self.captured_by_black),
            move_log=tuple(self.move_log),
        )

    def restore(self, snapshot: Snapshot) -> None:
        self.position = snapshot.position.copy()
        self.captured_by_white = list(snapshot.captured_by_white)
        self.captured_by_black = list(snapshot.captured_by_black)
        self.move_log = list(snapshot.move_log)
        self._status = Rules.status(self.position)

    def undo(self) -> bool:
        """Revert the most recent move. Returns False when there is none."""
        snapshot = self.history.pop()
        if snapshot is None:
            return False
        self.restore(snapshot)
        _LOGGER.debug("Undo, %d snapshot(s) left", len(self.history))
        return True
