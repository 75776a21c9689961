"""Pseudo-legal and legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.enums import Color, MoveKind, PieceType
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.types import Square, file_of, make_square, on_board, rank_of

if TYPE_CHECKING:
    from rookery.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_KING_FILE = 4

# Castle kind, rook file, file step from the king towards the rook.
_CASTLE_SIDES: tuple[tuple[MoveKind, int, int], ...] = (
    (MoveKind.CASTLE_KINGSIDE, 7, 1),
    (MoveKind.CASTLE_QUEENSIDE, 0, -1),
)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if on_board(af, ar):
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while on_board(af, ar):
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
# [color] -> squares a pawn on each square attacks
_PAWN_ATTACKS = (
    _build_targets(((-1, 1), (1, 1))),
    _build_targets(((-1, -1), (1, -1))),
)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _build_rays(BISHOP_DIRS),
    PieceType.ROOK: _build_rays(ROOK_DIRS),
    PieceType.QUEEN: _build_rays(QUEEN_DIRS),
}


class MoveGenerator:
    """Generates moves for a given :class:`Position`.

    Two generation entry points exist.  :meth:`attacking_moves` lists the
    squares a piece attacks and never looks at castling or pawn pushes, so
    attack detection can run without recursing into castling checks.
    :meth:`candidate_moves` is the full pseudo-legal set.  The position is
    never mutated; legality is probed on copies.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Per-square generation ---------------------------------------------

    def attacking_moves(self, sq: Square) -> list[Move]:
        """Moves of the piece on *sq* that attack a square."""
        piece = self._board[sq]
        if piece is None:
            return []
        moves: list[Move] = []
        if piece.piece_type == PieceType.PAWN:
            self._gen_pawn_attacks(sq, piece.color, moves)
        else:
            self._gen_piece(sq, piece, moves)
        return moves

    def candidate_moves(self, sq: Square) -> list[Move]:
        """Pseudo-legal moves of the piece on *sq* (may leave own king in check)."""
        piece = self._board[sq]
        if piece is None:
            return []
        moves: list[Move] = []
        if piece.piece_type == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        else:
            self._gen_piece(sq, piece, moves)
            if piece.piece_type == PieceType.KING:
                self._gen_castling(sq, piece, moves)
        return moves

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Candidate moves of the piece on *sq* that keep its king safe."""
        piece = self._board[sq]
        if piece is None:
            return []
        legal: list[Move] = []
        for move in self.candidate_moves(sq):
            trial = self._pos.copy()
            trial.make_move(move, simulate=True)
            if not MoveGenerator(trial).is_in_check(piece.color):
                legal.append(move)
        return legal

    # -- Whole-side generation ---------------------------------------------

    def generate_pseudo_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All pseudo-legal moves for *color* (default: side to move)."""
        if color is None:
            color = self._pos.side_to_move
        moves: list[Move] = []
        for sq in self._board.all_pieces(color):
            moves.extend(self.candidate_moves(sq))
        return moves

    def generate_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All strictly legal moves for *color* (default: side to move)."""
        if color is None:
            color = self._pos.side_to_move
        legal: list[Move] = []
        for sq in self._board.all_pieces(color):
            legal.extend(self.legal_moves_from(sq))
        return legal

    def has_legal_move(self, color: Color | None = None) -> bool:
        if color is None:
            color = self._pos.side_to_move
        return any(self.legal_moves_from(sq) for sq in self._board.all_pieces(color))

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        for from_sq in self._board.all_pieces(by_color):
            for move in self.attacking_moves(from_sq):
                if move.to_sq == sq:
                    return True
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_piece(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        pt = piece.piece_type
        if pt == PieceType.KNIGHT:
            self._gen_steps(sq, piece.color, _KNIGHT_TARGETS[sq], moves)
        elif pt == PieceType.KING:
            self._gen_steps(sq, piece.color, _KING_TARGETS[sq], moves)
        else:
            self._gen_sliding(sq, piece.color, _SLIDER_RAYS[pt][sq], moves)

    def _gen_pawn_attacks(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        for to_sq in _PAWN_ATTACKS[int(color)][sq]:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq, MoveKind.CAPTURE))

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        step_rank = rank_idx + color.forward
        if not on_board(file_idx, step_rank):
            return
        promotes = step_rank == color.opposite.home_rank

        one_step = make_square(file_idx, step_rank)
        if board.is_empty(one_step):
            moves.append(
                Move(sq, one_step, MoveKind.PROMOTION if promotes else MoveKind.QUIET)
            )
            if rank_idx == color.pawn_rank:
                two_step = make_square(file_idx, step_rank + color.forward)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, MoveKind.DOUBLE_PAWN_PUSH))

        for cap_sq in _PAWN_ATTACKS[int(color)][sq]:
            target = board[cap_sq]
            if target is not None and target.color != color:
                moves.append(
                    Move(
                        sq,
                        cap_sq,
                        MoveKind.PROMOTION_CAPTURE if promotes else MoveKind.CAPTURE,
                    )
                )

        ep = self._pos.en_passant
        if (
            ep is not None
            and rank_of(ep.square) == rank_idx
            and abs(file_of(ep.square) - file_idx) == 1
        ):
            victim = board[ep.square]
            if (
                victim is not None
                and victim.color != color
                and victim.piece_type == PieceType.PAWN
            ):
                moves.append(
                    Move(
                        sq,
                        make_square(file_of(ep.square), step_rank),
                        MoveKind.EN_PASSANT,
                    )
                )

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
            elif target.color != color:
                moves.append(Move(sq, to_sq, MoveKind.CAPTURE))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, MoveKind.CAPTURE))
                break

    def _gen_castling(self, king_sq: Square, king: Piece, moves: list[Move]) -> None:
        color = king.color
        home = color.home_rank
        if king.has_moved or king_sq != make_square(_KING_FILE, home):
            return
        if self.is_in_check(color):
            return

        board = self._board
        opponent = color.opposite
        for kind, rook_file, step in _CASTLE_SIDES:
            rook = board[make_square(rook_file, home)]
            if (
                rook is None
                or rook.color != color
                or rook.piece_type != PieceType.ROOK
                or rook.has_moved
            ):
                continue
            between = range(_KING_FILE + step, rook_file, step)
            if any(not board.is_empty(make_square(f, home)) for f in between):
                continue
            # Start square is covered by the in-check test above.
            path = (
                make_square(_KING_FILE + step, home),
                make_square(_KING_FILE + 2 * step, home),
            )
            if any(self.is_square_attacked(p, opponent) for p in path):
                continue
            moves.append(Move(king_sq, path[1], kind))
