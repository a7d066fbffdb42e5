"""Signed-integer piece encoding.

A board cell holds ``0`` for empty or ``±kind`` where ``kind`` is a
:class:`PieceType` value; positive is white, negative is black.
"""

from __future__ import annotations

from tinychess.core.enums import Color, PieceType

EMPTY = 0

# FEN character ↔ signed value
_CHAR_MAP: dict[str, int] = {
    "P": 1,
    "N": 2,
    "B": 3,
    "R": 4,
    "Q": 5,
    "K": 6,
    "p": -1,
    "n": -2,
    "b": -3,
    "r": -4,
    "q": -5,
    "k": -6,
}
_FEN_CHARS: dict[int, str] = {v: k for k, v in _CHAR_MAP.items()}

# Indexed by value + 6, matching the figure table the frontends use.
_UNICODE: tuple[str, ...] = (
    "♚", "♛", "♜", "♝", "♞", "♟", "", "♙", "♘", "♗", "♖", "♕", "♔",
)  # fmt: skip


def make_piece(color: Color, piece_type: PieceType) -> int:
    """Signed board value for *color*'s *piece_type*."""
    return int(piece_type) * color.sign


def piece_color(value: int) -> Color:
    """Color of a non-empty board value."""
    if value == EMPTY:
        raise ValueError("Empty square has no color")
    return Color.WHITE if value > 0 else Color.BLACK


def piece_kind(value: int) -> PieceType:
    """Piece type of a non-empty board value."""
    if value == EMPTY:
        raise ValueError("Empty square has no piece type")
    return PieceType(abs(value))


def is_valid_piece(value: object) -> bool:
    return isinstance(value, int) and -6 <= value <= 6


def piece_char(value: int) -> str:
    """FEN character (uppercase = white, lowercase = black)."""
    return _FEN_CHARS[value]


def piece_from_char(char: str) -> int:
    """Board value from FEN character, e.g. 'N' → 2, 'q' → -5."""
    try:
        return _CHAR_MAP[char]
    except KeyError:
        raise ValueError(f"Invalid piece character: {char!r}") from None


def piece_symbol(value: int) -> str:
    """Unicode chess figure, e.g. ♞ for -2; empty string for an empty cell."""
    return _UNICODE[value + 6]
