"""FEN parsing and serialization (position setup only).

Only the first four fields are mandatory; missing clocks default to
``0`` and ``1``.  Anything malformed raises :class:`ValueError`.
"""

from __future__ import annotations

from tinychess.core.board import Board
from tinychess.core.enums import CastlingRights, Color, PieceType
from tinychess.core.piece import EMPTY, piece_char, piece_from_char
from tinychess.core.position import Position
from tinychess.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_SIDES = {"w": Color.WHITE, "b": Color.BLACK}

# Serialization order matters: "KQkq".
_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`."""
    fields = fen.split()
    if len(fields) not in (4, 5, 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    board = _parse_placement(fields[0])
    try:
        side = _SIDES[fields[1]]
    except KeyError:
        raise ValueError(f"Invalid FEN side-to-move field: {fields[1]!r}") from None
    castling = _parse_castling(fields[2])
    en_passant = _parse_en_passant(fields[3], side)
    halfmove = _parse_counter(fields, 4, default=0, minimum=0)
    fullmove = _parse_counter(fields, 5, default=1, minimum=1)

    move_counter = 2 * (fullmove - 1) + side
    return Position(board, move_counter, castling, en_passant, halfmove)


def _parse_placement(placement: str) -> Board:
    rows = placement.split("/")
    if len(rows) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {placement!r}")

    board = Board()
    # FEN lists rank 8 first.
    for rank, row in zip(range(7, -1, -1), rows):
        file = 0
        for ch in row:
            if ch in "12345678":
                file += int(ch)
            elif file < 8:
                board[make_square(file, rank)] = piece_from_char(ch)
                file += 1
            else:
                raise ValueError(f"Invalid FEN rank {row!r}")
        if file != 8:
            raise ValueError(f"Invalid FEN rank {row!r}")

    for king in (PieceType.KING, -PieceType.KING):
        if list(board).count(king) != 1:
            raise ValueError(f"Invalid FEN (need one king per side): {placement!r}")
    return board


def _parse_castling(text: str) -> CastlingRights:
    if text == "-":
        return CastlingRights.NONE
    if len(set(text)) != len(text) or not set(text) <= _CASTLING_CHARS.keys():
        raise ValueError(f"Invalid FEN castling field: {text!r}")
    rights = CastlingRights.NONE
    for ch in text:
        rights |= _CASTLING_CHARS[ch]
    return rights


def _parse_en_passant(text: str, side: Color) -> Square | None:
    if text == "-":
        return None
    sq = parse_square(text)
    # The target sits behind a pawn the opponent just pushed two squares.
    if rank_of(sq) != (5 if side == Color.WHITE else 2):
        raise ValueError(f"Invalid FEN en-passant square for side-to-move: {text!r}")
    return sq


def _parse_counter(fields: list[str], index: int, *, default: int, minimum: int) -> int:
    if len(fields) <= index:
        return default
    value = int(fields[index])
    if value < minimum:
        raise ValueError(f"Invalid FEN move counter: {fields[index]!r}")
    return value


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    rows = []
    for rank in range(7, -1, -1):
        row, gap = [], 0
        for file in range(8):
            value = pos.board[make_square(file, rank)]
            if value == EMPTY:
                gap += 1
                continue
            if gap:
                row.append(str(gap))
                gap = 0
            row.append(piece_char(value))
        if gap:
            row.append(str(gap))
        rows.append("".join(row))

    castling = "".join(c for c, r in _CASTLING_CHARS.items() if pos.castling & r)
    en_passant = "-" if pos.en_passant is None else square_name(pos.en_passant)
    side = "w" if pos.side_to_move == Color.WHITE else "b"
    return " ".join(
        (
            "/".join(rows),
            side,
            castling or "-",
            en_passant,
            str(pos.halfmove_clock),
            str(pos.fullmove_number),
        )
    )
