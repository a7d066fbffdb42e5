"""Board - signed piece values on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator

from tinychess.core.enums import Color, PieceType
from tinychess.core.piece import EMPTY, is_valid_piece, piece_char, piece_from_char
from tinychess.core.types import Square

# Rank 1 through rank 8, files a..h; uppercase is white.
_INITIAL_LAYOUT = "RNBQKBNR" + "P" * 8 + "." * 32 + "p" * 8 + "rnbqkbnr"


class Board:
    """Mutable 64-cell board (index = square, a1 = 0)."""

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: list[int] = [EMPTY] * 64

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        board = cls()
        board._cells = [
            EMPTY if c == "." else piece_from_char(c) for c in _INITIAL_LAYOUT
        ]
        return board

    def __getitem__(self, sq: Square) -> int:
        return self._cells[sq]

    def __setitem__(self, sq: Square, value: int) -> None:
        if not is_valid_piece(value):
            raise ValueError(f"Invalid piece value: {value!r}")
        self._cells[sq] = int(value)

    def __iter__(self) -> Iterator[int]:
        return iter(self._cells)

    def __len__(self) -> int:
        return 64

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Board):
            return self._cells == other._cells
        return NotImplemented

    def is_empty(self, sq: Square) -> bool:
        return self._cells[sq] == EMPTY

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        wanted = piece_type * color.sign
        return [sq for sq, v in enumerate(self._cells) if v == wanted]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        sign = color.sign
        return [sq for sq, v in enumerate(self._cells) if v * sign > 0]

    def has_piece(self, color: Color, piece_type: PieceType) -> bool:
        return piece_type * color.sign in self._cells

    def king_square(self, color: Color) -> Square:
        """Square of *color*'s king; raises ``ValueError`` if there is none."""
        try:
            return self._cells.index(PieceType.KING * color.sign)
        except ValueError:
            raise ValueError(f"No {color.name} king on board") from None

    def snapshot(self) -> tuple[int, ...]:
        """Immutable copy of the 64 cell values, index = square."""
        return tuple(self._cells)

    def copy(self) -> Board:
        clone = Board()
        clone._cells = self._cells.copy()
        return clone

    def clear(self) -> None:
        self._cells = [EMPTY] * 64

    def load(self, other: Board) -> None:
        """Overwrite this board in place with *other*'s contents."""
        self._cells[:] = other._cells

    def __repr__(self) -> str:
        lines = []
        for rank in range(7, -1, -1):
            cells = self._cells[rank * 8 : rank * 8 + 8]
            row = " ".join(piece_char(v) if v else "." for v in cells)
            lines.append(f"{rank + 1} {row}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
