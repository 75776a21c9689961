"""Rookery — a chess rules engine for a single local game."""

__version__ = "0.1.0"
