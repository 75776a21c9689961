"""Undo history — a stack of immutable pre-move snapshots."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from rookery.core.piece import Piece
from rookery.core.position import Position


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Everything needed to restore a game session exactly.

    ``position`` is a private copy; restoring copies it again so a stored
    snapshot is never aliased by live state.
    """

    position: Position
    captured_by_white: tuple[Piece, ...]
    captured_by_black: tuple[Piece, ...]
    move_log: tuple[str, ...]


class History:
    """LIFO of snapshots, optionally bounded (oldest entries dropped)."""

    __slots__ = ("_stack",)

    def __init__(self, limit: int | None = None) -> None:
        self._stack: deque[Snapshot] = deque(maxlen=limit)

    def push(self, snapshot: Snapshot) -> None:
        self._stack.append(snapshot)

    def pop(self) -> Snapshot | None:
        """Most recent snapshot, or None when empty."""
        if not self._stack:
            return None
        return self._stack.pop()

    def peek(self) -> Snapshot | None:
        return self._stack[-1] if self._stack else None

    def clear(self) -> None:
        self._stack.clear()

    @property
    def limit(self) -> int | None:
        return self._stack.maxlen

    def __len__(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return bool(self._stack)
