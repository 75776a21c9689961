"""Notation package: piece placement strings and move-list notation."""

from rookery.core.notation.algebraic import move_to_notation
from rookery.core.notation.fen import (
    STARTING_PLACEMENT,
    InvalidPosition,
    PlacementError,
    parse_placement,
    placement_of,
)

__all__ = [
    "STARTING_PLACEMENT",
    "InvalidPosition",
    "PlacementError",
    "move_to_notation",
    "parse_placement",
    "placement_of",
]
