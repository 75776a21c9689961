"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import MoveKind
from rookery.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move."""

    from_sq: Square
    to_sq: Square
    kind: MoveKind = MoveKind.QUIET

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"

    @property
    def is_capture(self) -> bool:
        return self.kind.is_capture

    @property
    def is_promotion(self) -> bool:
        return self.kind.is_promotion
