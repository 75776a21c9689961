"""Core enumerations for the chess rules domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank step of this side's pawns."""
        return 1 if self is Color.WHITE else -1

    @property
    def home_rank(self) -> int:
        """Back rank index (0 for white, 7 for black)."""
        return 0 if self is Color.WHITE else 7

    @property
    def pawn_rank(self) -> int:
        """Rank index pawns start from."""
        return 1 if self is Color.WHITE else 6

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveKind(IntEnum):
    """Tagged move classification.

    Promotion always yields a queen; it is combined with either a quiet
    push or a capture.
    """

    QUIET = 0
    CAPTURE = 1
    DOUBLE_PAWN_PUSH = 2
    EN_PASSANT = 3
    CASTLE_KINGSIDE = 4
    CASTLE_QUEENSIDE = 5
    PROMOTION = 6
    PROMOTION_CAPTURE = 7

    @property
    def is_capture(self) -> bool:
        return self in (MoveKind.CAPTURE, MoveKind.EN_PASSANT, MoveKind.PROMOTION_CAPTURE)

    @property
    def is_promotion(self) -> bool:
        return self in (MoveKind.PROMOTION, MoveKind.PROMOTION_CAPTURE)

    @property
    def is_castle(self) -> bool:
        return self in (MoveKind.CASTLE_KINGSIDE, MoveKind.CASTLE_QUEENSIDE)


class GameStatus(IntEnum):
    """Classification of a position for the side to move."""

    ONGOING = 0
    CHECKMATE = 1
    STALEMATE = 2
