"""Exceptions raised by the core domain layer."""

from __future__ import annotations


class TinyChessError(Exception):
    """Base class for all library errors."""


class InvalidSquare(TinyChessError, ValueError):
    """A square index or name is outside the 0–63 board."""


class InvalidMove(TinyChessError, ValueError):
    """A (source, destination) pair is not legal in the current position.

    Raised before any mutation, so the position is left untouched.
    """

    def __init__(self, from_sq: int, to_sq: int, reason: str = "") -> None:
        self.from_sq = from_sq
        self.to_sq = to_sq
        self.reason = reason
        msg = f"Illegal move {from_sq} -> {to_sq}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
