"""Game configuration."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from rookery.core.notation import STARTING_PLACEMENT

_TOML_TABLE = "rookery"


@dataclass(slots=True, frozen=True)
class GameConfig:
    """Settings applied when a new game starts.

    Args:
        starting_placement: Piece placement loaded by ``new_game``.
        max_undo: Cap on stored undo snapshots; ``None`` keeps all.
    """

    starting_placement: str = STARTING_PLACEMENT
    max_undo: int | None = None

    def __post_init__(self) -> None:
        if self.max_undo is not None and self.max_undo < 0:
            raise ValueError(f"max_undo must be >= 0, got {self.max_undo}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GameConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**dict(data))

    @classmethod
    def from_toml(cls, path: str | Path) -> GameConfig:
        """Load the ``[rookery]`` table of a TOML file (missing table = defaults)."""
        with open(path, "rb") as fh:
            data = tomllib.load(fh)
        return cls.from_mapping(data.get(_TOML_TABLE, {}))
