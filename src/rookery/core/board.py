"""Board - the 64 cells of a game, indexed by :data:`Square`."""

from __future__ import annotations

from collections.abc import Iterator

from rookery.core.enums import Color, PieceType
from rookery.core.piece import Piece
from rookery.core.types import Square, make_square

_BACK_RANK = "rnbqkbnr"


class Board:
    """Cell storage plus a per-color index of where the king stands.

    The index is kept in step by :meth:`__setitem__`, so every write to a
    cell, including captures of a king during move probing, updates it.
    """

    __slots__ = ("_cells", "_kings")

    def __init__(self) -> None:
        self._cells: list[Piece | None] = [None] * 64
        self._kings: dict[Color, Square] = {}

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._cells[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        previous = self._cells[sq]
        if previous is not None and self._kings.get(previous.color) == sq:
            del self._kings[previous.color]
        self._cells[sq] = piece
        if piece is not None and piece.piece_type == PieceType.KING:
            self._kings[piece.color] = sq

    def is_empty(self, sq: Square) -> bool:
        return self._cells[sq] is None

    def occupied(self, color: Color) -> Iterator[tuple[Square, Piece]]:
        """(square, piece) pairs of *color*, a1 to h8."""
        for sq, piece in enumerate(self._cells):
            if piece is not None and piece.color == color:
                yield sq, piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares holding *color*'s pieces of *piece_type*."""
        return [sq for sq, p in self.occupied(color) if p.piece_type == piece_type]

    def all_pieces(self, color: Color) -> list[Square]:
        return [sq for sq, _ in self.occupied(color)]

    def king_square(self, color: Color) -> Square:
        try:
            return self._kings[color]
        except KeyError:
            raise ValueError(f"No {color.name} king on board") from None

    def copy(self) -> Board:
        clone = Board()
        # Piece is frozen, so sharing instances is safe.
        clone._cells = list(self._cells)
        clone._kings = dict(self._kings)
        return clone

    def clear(self) -> None:
        self._cells = [None] * 64
        self._kings = {}

    @classmethod
    def initial(cls) -> Board:
        """Standard opening setup, nothing moved."""
        board = cls()
        for file, letter in enumerate(_BACK_RANK):
            board[make_square(file, Color.WHITE.home_rank)] = Piece.from_char(letter.upper())
            board[make_square(file, Color.WHITE.pawn_rank)] = Piece.from_char("P")
            board[make_square(file, Color.BLACK.pawn_rank)] = Piece.from_char("p")
            board[make_square(file, Color.BLACK.home_rank)] = Piece.from_char(letter)
        return board

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Board):
            return self._cells == other._cells
        return NotImplemented

    def __repr__(self) -> str:
        lines = []
        for rank in reversed(range(8)):
            cells = (self._cells[make_square(file, rank)] for file in range(8))
            lines.append(f"{rank + 1} " + " ".join(str(p) if p else "." for p in cells))
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
