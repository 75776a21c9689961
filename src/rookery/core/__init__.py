"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from rookery.core import MoveGenerator, Position, parse_placement, STARTING_PLACEMENT

    pos = Position(parse_placement(STARTING_PLACEMENT))
    gen = MoveGenerator(pos)
    for move in gen.generate_legal_moves():
        print(move)
"""

from rookery.core.board import Board
from rookery.core.enums import Color, GameStatus, MoveKind, PieceType
from rookery.core.move import Move
from rookery.core.move_generator import MoveGenerator
from rookery.core.notation import (
    STARTING_PLACEMENT,
    InvalidPosition,
    PlacementError,
    move_to_notation,
    parse_placement,
    placement_of,
)
from rookery.core.piece import Piece
from rookery.core.position import EnPassantTarget, Position
from rookery.core.rules import Rules, StatusReport
from rookery.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "MoveKind",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "EnPassantTarget",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "StatusReport",
    # Notation
    "STARTING_PLACEMENT",
    "InvalidPosition",
    "PlacementError",
    "move_to_notation",
    "parse_placement",
    "placement_of",
]
