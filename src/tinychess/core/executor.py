"""Move executor: validated application of (source, destination) moves."""

from __future__ import annotations

from tinychess.core.enums import MoveFlag, PieceType
from tinychess.core.errors import InvalidMove
from tinychess.core.move import Move, MoveRecord
from tinychess.core.move_generator import MoveGenerator
from tinychess.core.notation.san import move_to_san
from tinychess.core.piece import EMPTY
from tinychess.core.position import Position
from tinychess.core.types import Square, check_square, file_of, make_square, rank_of


def legal_destinations(position: Position, from_sq: Square) -> list[Square]:
    """Sorted unique destinations reachable by the side-to-move piece on *from_sq*."""
    check_square(from_sq)
    moves = MoveGenerator(position).legal_moves_from(from_sq)
    return sorted({m.to_sq for m in moves})


def resolve_move(
    position: Position,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceType | None = None,
) -> Move:
    """Find the legal :class:`Move` matching the square pair.

    Promotions default to a queen.  Raises :class:`InvalidMove` if no legal
    move matches.
    """
    check_square(from_sq)
    check_square(to_sq)
    if position.board[from_sq] == EMPTY:
        raise InvalidMove(from_sq, to_sq, "source square is empty")

    candidates = [
        m
        for m in MoveGenerator(position).legal_moves_from(from_sq)
        if m.to_sq == to_sq
    ]
    if not candidates:
        raise InvalidMove(from_sq, to_sq)
    if candidates[0].flag != MoveFlag.PROMOTION:
        return candidates[0]

    wanted = promotion if promotion is not None else PieceType.QUEEN
    for m in candidates:
        if m.promotion == wanted:
            return m
    raise InvalidMove(from_sq, to_sq, f"cannot promote to {wanted.name.lower()}")


def apply_move(position: Position, move: Move) -> MoveRecord:
    """Apply a legal *move* and append its history record.

    Caller is responsible for legality check.
    """
    board = position.board
    piece = board[move.from_sq]
    captured = board[move.to_sq]
    if move.flag == MoveFlag.EN_PASSANT:
        captured = board[make_square(file_of(move.to_sq), rank_of(move.from_sq))]

    san = move_to_san(position, move)
    position.make_move(move)

    record = MoveRecord(move=move, san=san, piece=piece, captured=captured)
    position.history.append(record)
    return record


def execute(
    position: Position,
    from_sq: Square,
    to_sq: Square,
    probe: bool = False,
    promotion: PieceType | None = None,
) -> MoveFlag:
    """Validate and apply a move; return its classification.

    With *probe* the move is applied and undone inside a scoped probe, leaving
    no trace in the position.
    """
    move = resolve_move(position, from_sq, to_sq, promotion)
    if probe:
        with position.probe(move):
            pass
        return move.flag
    apply_move(position, move)
    return move.flag
