"""Piece-placement parsing and serialization.

Only the placement field of a FEN string is consumed; side to move,
castling and en passant fields are ignored when present.
"""

from __future__ import annotations

from enum import StrEnum

from rookery.core.board import Board
from rookery.core.piece import Piece
from rookery.core.types import make_square

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


class PlacementError(StrEnum):
    """Why a placement string was rejected."""

    WRONG_RANK_COUNT = "wrong rank count"
    UNKNOWN_PIECE = "unrecognized piece letter"
    RANK_OVERFLOW = "rank longer than 8 squares"
    RANK_UNDERFLOW = "rank shorter than 8 squares"
    KING_COUNT = "each side needs exactly one king"
    OPPONENT_IN_CHECK = "side not to move is in check"


class InvalidPosition(ValueError):
    """Malformed or unplayable initial position."""

    def __init__(self, reason: PlacementError, text: str, detail: str = "") -> None:
        message = f"Invalid placement ({reason.value}): {text!r}"
        if detail:
            message += f" [{detail}]"
        super().__init__(message)
        self.reason = reason
        self.text = text


def parse_placement(text: str) -> Board:
    """Parse a piece-placement string into a :class:`Board`.

    Every piece starts with ``has_moved`` unset.
    """
    fields = text.split()
    placement = fields[0] if fields else ""

    ranks = placement.split("/")
    if len(ranks) != 8:
        raise InvalidPosition(
            PlacementError.WRONG_RANK_COUNT, text, f"got {len(ranks)}"
        )

    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch in "12345678":
                file += int(ch)
            else:
                try:
                    piece = Piece.from_char(ch)
                except ValueError:
                    raise InvalidPosition(
                        PlacementError.UNKNOWN_PIECE, text, repr(ch)
                    ) from None
                if file >= 8:
                    raise InvalidPosition(
                        PlacementError.RANK_OVERFLOW, text, f"rank {rank + 1}"
                    )
                board[make_square(file, rank)] = piece
                file += 1
            if file > 8:
                raise InvalidPosition(
                    PlacementError.RANK_OVERFLOW, text, f"rank {rank + 1}"
                )
        if file != 8:
            raise InvalidPosition(
                PlacementError.RANK_UNDERFLOW, text, f"rank {rank + 1}"
            )
    return board


def placement_of(board: Board) -> str:
    """Serialise the piece placement of *board*."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)
