"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from rookery.core.notation import STARTING_PLACEMENT, parse_placement
from rookery.core.position import Position
from rookery.game.session import GameSession


@pytest.fixture
def start_position() -> Position:
    """Standard initial position, white to move."""
    return Position(parse_placement(STARTING_PLACEMENT))


@pytest.fixture
def session() -> GameSession:
    """Fresh game session from the standard initial position."""
    return GameSession()
