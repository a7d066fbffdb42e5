"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color. Value equals ``move_counter % 2`` when that side is to move."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def sign(self) -> int:
        """+1 for white, -1 for black (sign of the piece values on the board)."""
        return 1 - 2 * self.value

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece kinds; the value is the magnitude stored on the board."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntEnum):
    """Move classification returned by ``do_move``."""

    NORMAL = 0
    CAPTURE = 1
    DOUBLE_PAWN = 2
    EN_PASSANT = 3
    CASTLE_KINGSIDE = 4
    CASTLE_QUEENSIDE = 5
    PROMOTION = 6

    @property
    def is_castle(self) -> bool:
        return self in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class SearchState(IntEnum):
    """Terminal-state classification of a position, reported by ``reply``."""

    ONGOING = 0
    CHECK = 1
    CHECKMATE = 2
    DRAWN = 3

    @property
    def is_terminal(self) -> bool:
        return self in (SearchState.CHECKMATE, SearchState.DRAWN)


STATE_ONGOING = SearchState.ONGOING
STATE_CHECK = SearchState.CHECK
STATE_CHECKMATE = SearchState.CHECKMATE
STATE_DRAWN = SearchState.DRAWN
