"""Move generator tests: perft counts, per-piece geometry, special moves.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from rookery.core.enums import Color, MoveKind
from rookery.core.move import Move
from rookery.core.move_generator import MoveGenerator
from rookery.core.notation import STARTING_PLACEMENT, parse_placement
from rookery.core.position import EnPassantTarget, Position
from rookery.core.types import (
    A1, A8, C1, D1, D4, D5, E1, E2, E3, E4, E5, E8, F1, F5, F6, G1, H1,
    parse_square,
)


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes at *depth*, applying moves to copies."""
    if depth == 0:
        return 1
    moves = MoveGenerator(position).generate_legal_moves()
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        child = position.copy()
        child.make_move(move)
        nodes += perft(child, depth - 1)
    return nodes


def _pos(placement: str, side: Color = Color.WHITE) -> Position:
    return Position(parse_placement(placement), side_to_move=side)


def _targets(moves: list[Move]) -> set[int]:
    return {m.to_sq for m in moves}


# ── Perft ────────────────────────────────────────────────────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R"
POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8"
POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1"
POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R"


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(_pos(STARTING_PLACEMENT), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(_pos(STARTING_PLACEMENT), 2) == 400

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(_pos(STARTING_PLACEMENT), 3) == 8_902


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(_pos(KIWIPETE), 1) == 48

    @pytest.mark.slow
    def test_depth_2(self) -> None:
        assert perft(_pos(KIWIPETE), 2) == 2_039


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(_pos(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(_pos(POS3), 2) == 191

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(_pos(POS3), 3) == 2_812


class TestPerftPromotionPositions:
    def test_pos4_depth_1(self) -> None:
        assert perft(_pos(POS4), 1) == 6

    def test_pos5_depth_1_auto_queen(self) -> None:
        # 44 with underpromotions; d7xc8 collapses to a single queen move.
        moves = MoveGenerator(_pos(POS5)).generate_legal_moves()
        assert len(moves) == 41
        promotions = [m for m in moves if m.is_promotion]
        assert promotions == [
            Move(parse_square("d7"), parse_square("c8"), MoveKind.PROMOTION_CAPTURE)
        ]


# ── Piece geometry ───────────────────────────────────────────────────────────


class TestPieceGeometry:
    def test_knight_from_start(self) -> None:
        gen = MoveGenerator(_pos(STARTING_PLACEMENT))
        assert _targets(gen.candidate_moves(G1)) == {
            parse_square("f3"),
            parse_square("h3"),
        }

    def test_blocked_rook_has_no_moves(self) -> None:
        gen = MoveGenerator(_pos(STARTING_PLACEMENT))
        assert gen.candidate_moves(A1) == []

    def test_slider_stops_on_enemy_and_captures(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/3p4/8/8/3R4/4K3"))
        moves = gen.candidate_moves(parse_square("d2"))
        up_file = {m.to_sq for m in moves if m.to_sq > parse_square("d2") and m.to_sq % 8 == 3}
        assert up_file == {parse_square("d3"), D4, D5}
        assert Move(parse_square("d2"), D5, MoveKind.CAPTURE) in moves

    def test_slider_stops_before_friend(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/3P4/8/8/3R4/4K3"))
        targets = _targets(gen.candidate_moves(parse_square("d2")))
        assert D4 in targets
        assert D5 not in targets

    def test_empty_square_has_no_moves(self) -> None:
        gen = MoveGenerator(_pos(STARTING_PLACEMENT))
        assert gen.candidate_moves(E4) == []
        assert gen.attacking_moves(E4) == []
        assert gen.legal_moves_from(E4) == []

    def test_pawn_single_and_double_push(self) -> None:
        gen = MoveGenerator(_pos(STARTING_PLACEMENT))
        assert set(gen.candidate_moves(E2)) == {
            Move(E2, E3),
            Move(E2, E4, MoveKind.DOUBLE_PAWN_PUSH),
        }

    def test_pawn_double_push_needs_both_squares_empty(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/8/4n3/8/4P3/4K3"))
        assert gen.candidate_moves(E2) == [Move(E2, E3)]
        gen = MoveGenerator(_pos("4k3/8/8/8/8/4n3/4P3/4K3"))
        assert gen.candidate_moves(E2) == []

    def test_pawn_off_home_rank_single_step_only(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/8/8/4P3/8/4K3"))
        assert gen.candidate_moves(E3) == [Move(E3, E4)]

    def test_black_pawn_moves_down(self) -> None:
        gen = MoveGenerator(_pos(STARTING_PLACEMENT, Color.BLACK))
        assert _targets(gen.candidate_moves(parse_square("e7"))) == {
            parse_square("e6"),
            E5,
        }

    def test_pawn_promotion_kinds(self) -> None:
        gen = MoveGenerator(_pos("1n2k3/P7/8/8/8/8/8/4K3"))
        a7 = parse_square("a7")
        assert set(gen.candidate_moves(a7)) == {
            Move(a7, A8, MoveKind.PROMOTION),
            Move(a7, parse_square("b8"), MoveKind.PROMOTION_CAPTURE),
        }


# ── Attack-only generation ──────────────────────────────────────────────────


class TestAttackingMoves:
    def test_pawn_attacks_diagonals_not_forward(self) -> None:
        gen = MoveGenerator(_pos(STARTING_PLACEMENT))
        assert _targets(gen.attacking_moves(E2)) == {
            parse_square("d3"),
            parse_square("f3"),
        }

    def test_king_attacks_never_castle(self) -> None:
        gen = MoveGenerator(_pos("r3k2r/8/8/8/8/8/8/R3K2R"))
        assert all(not m.kind.is_castle for m in gen.attacking_moves(E1))
        assert any(m.kind.is_castle for m in gen.candidate_moves(E1))

    def test_pawn_attack_covers_empty_square(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/8/8/8/6p1/4K2R"))
        assert gen.is_square_attacked(F1, Color.BLACK)
        assert gen.is_square_attacked(H1, Color.BLACK)
        assert not gen.is_square_attacked(G1, Color.BLACK)

    def test_is_in_check(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/8/8/8/8/r3K3"))
        assert gen.is_in_check(Color.WHITE)
        assert not gen.is_in_check(Color.BLACK)

    def test_is_in_check_without_king_fails_fast(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/8/8/8/8/8"))
        with pytest.raises(ValueError):
            gen.is_in_check(Color.WHITE)


# ── Castling ────────────────────────────────────────────────────────────────

CASTLE_READY = "r3k2r/8/8/8/8/8/8/R3K2R"


class TestCastling:
    def test_both_sides_available(self) -> None:
        gen = MoveGenerator(_pos(CASTLE_READY))
        moves = gen.legal_moves_from(E1)
        assert Move(E1, G1, MoveKind.CASTLE_KINGSIDE) in moves
        assert Move(E1, C1, MoveKind.CASTLE_QUEENSIDE) in moves

    def test_black_castling(self) -> None:
        gen = MoveGenerator(_pos(CASTLE_READY, Color.BLACK))
        moves = gen.legal_moves_from(E8)
        assert Move(E8, parse_square("g8"), MoveKind.CASTLE_KINGSIDE) in moves
        assert Move(E8, parse_square("c8"), MoveKind.CASTLE_QUEENSIDE) in moves

    def test_blocked_by_piece_between(self) -> None:
        gen = MoveGenerator(_pos("r3k2r/8/8/8/8/8/8/RN2K1NR"))
        kinds = {m.kind for m in gen.legal_moves_from(E1)}
        assert MoveKind.CASTLE_KINGSIDE not in kinds
        assert MoveKind.CASTLE_QUEENSIDE not in kinds

    def test_not_while_in_check(self) -> None:
        gen = MoveGenerator(_pos("4r1k1/8/8/8/8/8/8/R3K2R"))
        assert all(not m.kind.is_castle for m in gen.legal_moves_from(E1))

    def test_not_through_attacked_square(self) -> None:
        # Black rook on f8 covers f1.
        gen = MoveGenerator(_pos("5rk1/8/8/8/8/8/8/R3K2R"))
        kinds = {m.kind for m in gen.legal_moves_from(E1)}
        assert MoveKind.CASTLE_KINGSIDE not in kinds
        assert MoveKind.CASTLE_QUEENSIDE in kinds

    def test_not_into_attacked_square(self) -> None:
        gen = MoveGenerator(_pos("2r3k1/8/8/8/8/8/8/R3K2R"))
        kinds = {m.kind for m in gen.legal_moves_from(E1)}
        assert MoveKind.CASTLE_QUEENSIDE not in kinds
        assert MoveKind.CASTLE_KINGSIDE in kinds

    def test_queenside_allowed_when_only_b_file_attacked(self) -> None:
        gen = MoveGenerator(_pos("1r4k1/8/8/8/8/8/8/R3K3"))
        assert Move(E1, C1, MoveKind.CASTLE_QUEENSIDE) in gen.legal_moves_from(E1)

    def test_pawn_guarding_transit_square(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/8/8/8/6p1/4K2R"))
        assert all(not m.kind.is_castle for m in gen.legal_moves_from(E1))

    def test_moved_rook_revokes(self) -> None:
        pos = _pos(CASTLE_READY)
        pos.board[H1] = pos.board[H1].moved()
        kinds = {m.kind for m in MoveGenerator(pos).legal_moves_from(E1)}
        assert MoveKind.CASTLE_KINGSIDE not in kinds
        assert MoveKind.CASTLE_QUEENSIDE in kinds

    def test_moved_king_revokes(self) -> None:
        pos = _pos(CASTLE_READY)
        pos.board[E1] = pos.board[E1].moved()
        assert all(not m.kind.is_castle for m in MoveGenerator(pos).legal_moves_from(E1))

    def test_king_off_home_square(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/8/8/8/8/R2K3R"))
        assert all(not m.kind.is_castle for m in gen.legal_moves_from(D1))

    def test_missing_rook(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/8/8/8/8/4K2R"))
        kinds = {m.kind for m in gen.legal_moves_from(E1)}
        assert MoveKind.CASTLE_QUEENSIDE not in kinds
        assert MoveKind.CASTLE_KINGSIDE in kinds

    def test_enemy_rook_in_corner(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/8/8/8/8/4K2r"))
        assert all(not m.kind.is_castle for m in gen.candidate_moves(E1))


# ── En passant ──────────────────────────────────────────────────────────────


class TestEnPassant:
    def test_capture_generated_beside_target(self) -> None:
        pos = _pos("4k3/8/8/4Pp2/8/8/8/4K3")
        pos.en_passant = EnPassantTarget(F5, Color.BLACK.forward)
        moves = MoveGenerator(pos).legal_moves_from(E5)
        assert Move(E5, F6, MoveKind.EN_PASSANT) in moves

    def test_no_capture_without_target(self) -> None:
        pos = _pos("4k3/8/8/4Pp2/8/8/8/4K3")
        moves = MoveGenerator(pos).legal_moves_from(E5)
        assert all(m.kind != MoveKind.EN_PASSANT for m in moves)

    def test_not_from_non_adjacent_file(self) -> None:
        pos = _pos("4k3/8/8/3P2p1/8/8/8/4K3")
        pos.en_passant = EnPassantTarget(parse_square("g5"), Color.BLACK.forward)
        moves = MoveGenerator(pos).legal_moves_from(D5)
        assert all(m.kind != MoveKind.EN_PASSANT for m in moves)

    def test_not_from_other_rank(self) -> None:
        pos = _pos("4k3/8/8/5p2/4P3/8/8/4K3")
        pos.en_passant = EnPassantTarget(F5, Color.BLACK.forward)
        moves = MoveGenerator(pos).legal_moves_from(E4)
        assert all(m.kind != MoveKind.EN_PASSANT for m in moves)
        assert Move(E4, F5, MoveKind.CAPTURE) in moves

    def test_horizontal_pin_forbids_capture(self) -> None:
        # Removing both pawns would open the fifth rank to the rook.
        pos = _pos("8/8/8/KPp4r/8/8/8/7k")
        b5 = parse_square("b5")
        pos.en_passant = EnPassantTarget(parse_square("c5"), Color.BLACK.forward)
        moves = MoveGenerator(pos).legal_moves_from(b5)
        assert all(m.kind != MoveKind.EN_PASSANT for m in moves)


# ── Legality filter ─────────────────────────────────────────────────────────


class TestLegality:
    def test_pinned_piece_cannot_leave_line(self) -> None:
        gen = MoveGenerator(_pos("4r1k1/8/8/8/8/8/4N3/4K3"))
        assert gen.legal_moves_from(E2) == []

    def test_must_answer_check(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/8/8/8/PPP5/r3K3"))
        legal = gen.generate_legal_moves()
        assert all(m.from_sq == E1 for m in legal)
        assert _targets(legal) == {parse_square("e2"), parse_square("d2"), parse_square("f2")}

    def test_king_cannot_step_into_attack(self) -> None:
        gen = MoveGenerator(_pos("4k3/8/8/8/8/8/3r4/4K3"))
        targets = _targets(gen.legal_moves_from(E1))
        assert parse_square("d2") in targets  # capture
        assert parse_square("d1") not in targets
        assert parse_square("e2") not in targets

    def test_probing_never_mutates_position(self) -> None:
        pos = _pos(KIWIPETE)
        before = pos.copy()
        MoveGenerator(pos).generate_legal_moves()
        assert pos == before

    @pytest.mark.parametrize("placement", [STARTING_PLACEMENT, KIWIPETE, POS3, POS4, POS5])
    def test_no_legal_move_leaves_own_king_attacked(self, placement: str) -> None:
        pos = _pos(placement)
        for move in MoveGenerator(pos).generate_legal_moves():
            child = pos.copy()
            child.make_move(move)
            assert not MoveGenerator(child).is_in_check(Color.WHITE), str(move)

    def test_has_legal_move(self) -> None:
        gen = MoveGenerator(_pos("7k/8/5KQ1/8/8/8/8/8", Color.BLACK))
        assert not gen.has_legal_move()
        assert gen.has_legal_move(Color.WHITE)

    def test_pseudo_legal_includes_suicidal_moves(self) -> None:
        pos = _pos("4r1k1/8/8/8/8/8/4N3/4K3")
        pseudo = MoveGenerator(pos).generate_pseudo_legal_moves()
        assert any(m.from_sq == E2 for m in pseudo)
