"""Legal and pseudo-legal move generation + attack detection.

Squares are ``0..63`` (a1 = 0, h8 = 63).  Leaper targets and slider rays
are precomputed per square at import time; legality is decided by making
each pseudo-legal move and testing whether the mover's king is attacked.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, NamedTuple

from tinychess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from tinychess.core.move import Move
from tinychess.core.piece import EMPTY
from tinychess.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from tinychess.core.position import Position

Ray = tuple[Square, ...]

_DIAGONALS = ((1, 1), (1, -1), (-1, 1), (-1, -1))
_ORTHOGONALS = ((1, 0), (-1, 0), (0, 1), (0, -1))
_KNIGHT_JUMPS = (
    (1, 2), (2, 1), (2, -1), (1, -2), (-1, -2), (-2, -1), (-2, 1), (-1, 2),
)  # fmt: skip

# Underpromotions follow the queen so ordering sees the strongest first.
_PROMOTIONS = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)


def _walk(sq: Square, df: int, dr: int, limit: int = 7) -> Iterator[Square]:
    f, r = file_of(sq), rank_of(sq)
    for _ in range(limit):
        f, r = f + df, r + dr
        if not (0 <= f < 8 and 0 <= r < 8):
            return
        yield make_square(f, r)


def _leaps(steps: tuple[tuple[int, int], ...]) -> tuple[Ray, ...]:
    return tuple(
        tuple(t for df, dr in steps for t in _walk(sq, df, dr, 1)) for sq in range(64)
    )


def _rays(directions: tuple[tuple[int, int], ...]) -> tuple[tuple[Ray, ...], ...]:
    return tuple(
        tuple(tuple(_walk(sq, df, dr)) for df, dr in directions) for sq in range(64)
    )


_KNIGHT_TARGETS = _leaps(_KNIGHT_JUMPS)
_KING_TARGETS = _leaps(_DIAGONALS + _ORTHOGONALS)
_DIAGONAL_RAYS = _rays(_DIAGONALS)
_ORTHOGONAL_RAYS = _rays(_ORTHOGONALS)

# Squares holding a pawn of the indexed color that would attack the key square:
# a white pawn attacks upwards, so it stands one rank below its target.
_PAWN_SOURCES: tuple[tuple[Ray, ...], tuple[Ray, ...]] = (
    _leaps(((-1, -1), (1, -1))),
    _leaps(((-1, 1), (1, 1))),
)


class _CastleSide(NamedTuple):
    right: CastlingRights
    flag: MoveFlag
    rook_file: int
    king_dest_file: int
    empty_files: tuple[int, ...]
    safe_files: tuple[int, ...]


_CASTLE_SIDES: dict[Color, tuple[_CastleSide, ...]] = {
    Color.WHITE: (
        _CastleSide(CastlingRights.WHITE_KINGSIDE, MoveFlag.CASTLE_KINGSIDE,
                    7, 6, (5, 6), (5, 6)),
        _CastleSide(CastlingRights.WHITE_QUEENSIDE, MoveFlag.CASTLE_QUEENSIDE,
                    0, 2, (1, 2, 3), (2, 3)),
    ),
    Color.BLACK: (
        _CastleSide(CastlingRights.BLACK_KINGSIDE, MoveFlag.CASTLE_KINGSIDE,
                    7, 6, (5, 6), (5, 6)),
        _CastleSide(CastlingRights.BLACK_QUEENSIDE, MoveFlag.CASTLE_QUEENSIDE,
                    0, 2, (1, 2, 3), (2, 3)),
    ),
}  # fmt: skip


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    Legality filtering makes and unmakes moves on the position itself; it is
    always left as it was found.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        return [m for m in self.generate_pseudo_legal_moves() if self._is_legal(m)]

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the side-to-move piece on *sq* (empty if none)."""
        return [m for m in self._piece_moves(sq) if self._is_legal(m)]

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        for sq in self._board.all_pieces(self._pos.side_to_move):
            moves.extend(self._piece_moves(sq))
        return moves

    def has_legal_move(self) -> bool:
        """Whether the side to move has at least one legal move."""
        return any(self._is_legal(m) for m in self.generate_pseudo_legal_moves())

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return self.is_square_attacked(self._board.king_square(color), color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        board = self._board
        sign = by_color.sign

        pawn = PieceType.PAWN * sign
        if any(board[s] == pawn for s in _PAWN_SOURCES[by_color][sq]):
            return True
        knight = PieceType.KNIGHT * sign
        if any(board[s] == knight for s in _KNIGHT_TARGETS[sq]):
            return True
        king = PieceType.KING * sign
        if any(board[s] == king for s in _KING_TARGETS[sq]):
            return True

        queen = PieceType.QUEEN * sign
        sliders = (
            (_DIAGONAL_RAYS[sq], PieceType.BISHOP * sign),
            (_ORTHOGONAL_RAYS[sq], PieceType.ROOK * sign),
        )
        for rays, slider in sliders:
            for ray in rays:
                blocker = self._first_occupied(ray)
                if blocker is not None and board[blocker] in (slider, queen):
                    return True
        return False

    # -- Internals ----------------------------------------------------------

    def _first_occupied(self, ray: Ray) -> Square | None:
        board = self._board
        for s in ray:
            if board[s] != EMPTY:
                return s
        return None

    def _is_legal(self, move: Move) -> bool:
        mover = self._pos.side_to_move
        with self._pos.probe(move):
            return not self.is_in_check(mover)

    def _is_enemy(self, value: int, color: Color) -> bool:
        return value != EMPTY and (value > 0) != (color == Color.WHITE)

    def _piece_moves(self, sq: Square) -> list[Move]:
        value = self._board[sq]
        color = self._pos.side_to_move
        if value == EMPTY or (value > 0) != (color == Color.WHITE):
            return []

        kind = abs(value)
        if kind == PieceType.PAWN:
            return self._pawn_moves(sq, color)
        if kind == PieceType.KNIGHT:
            return self._step_moves(sq, color, _KNIGHT_TARGETS[sq])
        if kind == PieceType.KING:
            return self._step_moves(sq, color, _KING_TARGETS[sq]) + self._castles(
                sq, color
            )

        rays: tuple[Ray, ...] = ()
        if kind in (PieceType.BISHOP, PieceType.QUEEN):
            rays += _DIAGONAL_RAYS[sq]
        if kind in (PieceType.ROOK, PieceType.QUEEN):
            rays += _ORTHOGONAL_RAYS[sq]
        return self._slide_moves(sq, color, rays)

    def _step_moves(self, sq: Square, color: Color, targets: Ray) -> list[Move]:
        moves = []
        for to in targets:
            value = self._board[to]
            if value == EMPTY:
                moves.append(Move(sq, to))
            elif self._is_enemy(value, color):
                moves.append(Move(sq, to, MoveFlag.CAPTURE))
        return moves

    def _slide_moves(
        self, sq: Square, color: Color, rays: tuple[Ray, ...]
    ) -> list[Move]:
        moves = []
        for ray in rays:
            for to in ray:
                value = self._board[to]
                if value == EMPTY:
                    moves.append(Move(sq, to))
                    continue
                if self._is_enemy(value, color):
                    moves.append(Move(sq, to, MoveFlag.CAPTURE))
                break
        return moves

    def _pawn_moves(self, sq: Square, color: Color) -> list[Move]:
        board = self._board
        forward = 1 if color == Color.WHITE else -1
        home_rank = 1 if color == Color.WHITE else 6
        rank = rank_of(sq) + forward
        if not 0 <= rank < 8:
            return []
        promotes = rank in (0, 7)

        def emit(to: Square, flag: MoveFlag) -> list[Move]:
            if promotes:
                return [Move(sq, to, MoveFlag.PROMOTION, pt) for pt in _PROMOTIONS]
            return [Move(sq, to, flag)]

        moves: list[Move] = []
        ahead = make_square(file_of(sq), rank)
        if board[ahead] == EMPTY:
            moves += emit(ahead, MoveFlag.NORMAL)
            if rank_of(sq) == home_rank:
                jump = make_square(file_of(sq), rank + forward)
                if board[jump] == EMPTY:
                    moves.append(Move(sq, jump, MoveFlag.DOUBLE_PAWN))

        for file in (file_of(sq) - 1, file_of(sq) + 1):
            if not 0 <= file < 8:
                continue
            to = make_square(file, rank)
            if self._is_enemy(board[to], color):
                moves += emit(to, MoveFlag.CAPTURE)
            elif to == self._pos.en_passant:
                moves.append(Move(sq, to, MoveFlag.EN_PASSANT))
        return moves

    def _castles(self, king_sq: Square, color: Color) -> list[Move]:
        back_rank = 0 if color == Color.WHITE else 7
        rights = self._pos.castling
        if king_sq != make_square(4, back_rank) or not rights:
            return []

        board = self._board
        rook = PieceType.ROOK * color.sign
        opponent = color.opposite
        moves: list[Move] = []
        in_check: bool | None = None
        for side in _CASTLE_SIDES[color]:
            if not rights & side.right:
                continue
            if board[make_square(side.rook_file, back_rank)] != rook:
                continue
            if any(board[make_square(f, back_rank)] != EMPTY for f in side.empty_files):
                continue
            if in_check is None:
                in_check = self.is_in_check(color)
            if in_check:
                return []
            if any(
                self.is_square_attacked(make_square(f, back_rank), opponent)
                for f in side.safe_files
            ):
                continue
            dest = make_square(side.king_dest_file, back_rank)
            moves.append(Move(king_sq, dest, side.flag))
        return moves
