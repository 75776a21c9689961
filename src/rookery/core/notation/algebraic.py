"""Short algebraic move notation as shown in the move list."""

from __future__ import annotations

from typing import assert_never

from rookery.core.enums import MoveKind, PieceType
from rookery.core.move import Move
from rookery.core.position import Position
from rookery.core.types import square_name

_PIECE_LETTER: dict[PieceType, str] = {
    PieceType.PAWN: "",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


def move_to_notation(position: Position, move: Move) -> str:
    """Notation for *move* given the *position* before the move.

    No disambiguation and no check suffix: piece letter, ``x`` on capture,
    destination, ``=Q`` on promotion; ``O-O`` / ``O-O-O`` for castling.
    """
    piece = position.board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(move.from_sq)}")

    dest = square_name(move.to_sq)
    letter = _PIECE_LETTER[piece.piece_type]
    kind = move.kind

    if kind is MoveKind.CASTLE_KINGSIDE:
        return "O-O"
    if kind is MoveKind.CASTLE_QUEENSIDE:
        return "O-O-O"
    if kind is MoveKind.QUIET or kind is MoveKind.DOUBLE_PAWN_PUSH:
        return f"{letter}{dest}"
    if kind is MoveKind.CAPTURE or kind is MoveKind.EN_PASSANT:
        return f"{letter}x{dest}"
    if kind is MoveKind.PROMOTION:
        return f"{dest}=Q"
    if kind is MoveKind.PROMOTION_CAPTURE:
        return f"x{dest}=Q"
    assert_never(kind)
