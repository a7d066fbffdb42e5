"""Static evaluation: material plus piece-square tables.

Tables are written rank 1 first, so a White piece on square ``sq`` reads
entry ``sq`` directly; Black pieces read the vertically mirrored entry.
The king blends a middlegame and an endgame table by remaining material.
"""

from __future__ import annotations

from tinychess.core.board import Board
from tinychess.core.enums import Color, PieceType
from tinychess.core.piece import EMPTY
from tinychess.core.position import Position
from tinychess.core.types import Square

# Indexed by piece kind (1..6); the king carries no material value.
PIECE_VALUES: tuple[int, ...] = (0, 100, 320, 330, 500, 900, 0)

# Game-phase weight per piece kind; 24 = full opening material.
_PHASE_WEIGHTS: tuple[int, ...] = (0, 0, 1, 1, 2, 4, 0)
_MAX_PHASE = 24

# fmt: off
_PAWN_TABLE = (
      0,   0,   0,   0,   0,   0,   0,   0,
      5,  10,  10, -20, -20,  10,  10,   5,
      5,  -5, -10,   0,   0, -10,  -5,   5,
      0,   0,   0,  20,  20,   0,   0,   0,
      5,   5,  10,  25,  25,  10,   5,   5,
     10,  10,  20,  30,  30,  20,  10,  10,
     50,  50,  50,  50,  50,  50,  50,  50,
      0,   0,   0,   0,   0,   0,   0,   0,
)

_KNIGHT_TABLE = (
    -50, -40, -30, -30, -30, -30, -40, -50,
    -40, -20,   0,   5,   5,   0, -20, -40,
    -30,   5,  10,  15,  15,  10,   5, -30,
    -30,   0,  15,  20,  20,  15,   0, -30,
    -30,   5,  15,  20,  20,  15,   5, -30,
    -30,   0,  10,  15,  15,  10,   0, -30,
    -40, -20,   0,   0,   0,   0, -20, -40,
    -50, -40, -30, -30, -30, -30, -40, -50,
)

_BISHOP_TABLE = (
    -20, -10, -10, -10, -10, -10, -10, -20,
    -10,   5,   0,   0,   0,   0,   5, -10,
    -10,  10,  10,  10,  10,  10,  10, -10,
    -10,   0,  10,  10,  10,  10,   0, -10,
    -10,   5,   5,  10,  10,   5,   5, -10,
    -10,   0,   5,  10,  10,   5,   0, -10,
    -10,   0,   0,   0,   0,   0,   0, -10,
    -20, -10, -10, -10, -10, -10, -10, -20,
)

_ROOK_TABLE = (
      0,   0,   0,   5,   5,   0,   0,   0,
     -5,   0,   0,   0,   0,   0,   0,  -5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
      5,  10,  10,  10,  10,  10,  10,   5,
      0,   0,   0,   0,   0,   0,   0,   0,
)

_QUEEN_TABLE = (
    -20, -10, -10,  -5,  -5, -10, -10, -20,
    -10,   0,   5,   0,   0,   0,   0, -10,
    -10,   5,   5,   5,   5,   5,   0, -10,
      0,   0,   5,   5,   5,   5,   0,  -5,
     -5,   0,   5,   5,   5,   5,   0,  -5,
    -10,   0,   5,   5,   5,   5,   0, -10,
    -10,   0,   0,   0,   0,   0,   0, -10,
    -20, -10, -10,  -5,  -5, -10, -10, -20,
)

_KING_MIDDLEGAME_TABLE = (
     20,  30,  10,   0,   0,  10,  30,  20,
     20,  20,   0,   0,   0,   0,  20,  20,
    -10, -20, -20, -20, -20, -20, -20, -10,
    -20, -30, -30, -40, -40, -30, -30, -20,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
)

_KING_ENDGAME_TABLE = (
    -50, -30, -30, -30, -30, -30, -30, -50,
    -30, -30,   0,   0,   0,   0, -30, -30,
    -30, -10,  20,  30,  30,  20, -10, -30,
    -30, -10,  30,  40,  40,  30, -10, -30,
    -30, -10,  30,  40,  40,  30, -10, -30,
    -30, -10,  20,  30,  30,  20, -10, -30,
    -30, -20, -10,   0,   0, -10, -20, -30,
    -50, -40, -30, -20, -20, -30, -40, -50,
)
# fmt: on

_TABLES: tuple[tuple[int, ...], ...] = (
    (),
    _PAWN_TABLE,
    _KNIGHT_TABLE,
    _BISHOP_TABLE,
    _ROOK_TABLE,
    _QUEEN_TABLE,
)


def game_phase(board: Board) -> int:
    """Remaining non-pawn material on a 0 (bare) .. 24 (opening) scale."""
    phase = sum(_PHASE_WEIGHTS[abs(v)] for v in board if v != EMPTY)
    return min(phase, _MAX_PHASE)


def piece_square_bonus(
    kind: int, color: Color, sq: Square, phase: int = _MAX_PHASE
) -> int:
    """Positional bonus for *color*'s *kind* on *sq*."""
    idx = sq if color == Color.WHITE else sq ^ 56
    if kind != PieceType.KING:
        return _TABLES[kind][idx]
    mg = _KING_MIDDLEGAME_TABLE[idx]
    eg = _KING_ENDGAME_TABLE[idx]
    return (mg * phase + eg * (_MAX_PHASE - phase)) // _MAX_PHASE


def evaluate(position: Position) -> int:
    """Material + piece-square score from the side to move's point of view."""
    board = position.board
    phase = game_phase(board)
    score = 0
    for sq, piece in enumerate(board):
        if piece == EMPTY:
            continue
        kind = abs(piece)
        if piece > 0:
            score += PIECE_VALUES[kind] + piece_square_bonus(
                kind, Color.WHITE, sq, phase
            )
        else:
            score -= PIECE_VALUES[kind] + piece_square_bonus(
                kind, Color.BLACK, sq, phase
            )
    return score if position.side_to_move == Color.WHITE else -score
