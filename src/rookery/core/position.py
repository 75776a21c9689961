"""Position — board + side to move + en passant window, with move application."""

from __future__ import annotations

from dataclasses import dataclass, field

from rookery.core.board import Board
from rookery.core.enums import Color, MoveKind, PieceType
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.types import Square, file_of, make_square, rank_of


@dataclass(frozen=True, slots=True)
class EnPassantTarget:
    """Pawn that just advanced two squares and may be taken en passant."""

    square: Square
    direction: int


# Castle kind -> (rook start file, rook landing file)
_ROOK_FILES: dict[MoveKind, tuple[int, int]] = {
    MoveKind.CASTLE_KINGSIDE: (7, 5),
    MoveKind.CASTLE_QUEENSIDE: (0, 3),
}


@dataclass(slots=True)
class Position:
    """Rules-relevant game state.

    :meth:`make_move` mutates in place; legality probing works on a
    :meth:`copy` so that the position a caller holds is never touched.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    en_passant: EnPassantTarget | None = None

    # ── Core move operation ──────────────────────────────────────────────

    def make_move(self, move: Move, *, simulate: bool = False) -> Piece | None:
        """Apply *move* and return the captured piece, if any.

        With *simulate* set the side to move is left unchanged.
        """
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        captured = board[move.to_sq]
        kind = move.kind

        if kind is MoveKind.EN_PASSANT:
            ep_capture_sq = make_square(file_of(move.to_sq), rank_of(move.from_sq))
            captured = board[ep_capture_sq]
            board[ep_capture_sq] = None

        board[move.from_sq] = None
        placed = piece.moved()
        if kind.is_promotion:
            placed = placed.promoted(PieceType.QUEEN)
        board[move.to_sq] = placed

        if kind.is_castle:
            self._slide_rook(kind, rank_of(move.from_sq))

        if kind is MoveKind.DOUBLE_PAWN_PUSH:
            self.en_passant = EnPassantTarget(move.to_sq, piece.color.forward)
        else:
            self.en_passant = None

        if not simulate:
            self.side_to_move = self.side_to_move.opposite
        return captured

    def _slide_rook(self, kind: MoveKind, rank: int) -> None:
        from_file, to_file = _ROOK_FILES[kind]
        rook_from = make_square(from_file, rank)
        rook = self.board[rook_from]
        if rook is None or rook.piece_type != PieceType.ROOK:
            raise ValueError(f"No rook to castle with on {rook_from}")
        self.board[rook_from] = None
        self.board[make_square(to_file, rank)] = rook.moved()

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent copy; pieces are immutable and shared."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            en_passant=self.en_passant,
        )
