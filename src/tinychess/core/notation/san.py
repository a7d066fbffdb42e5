"""SAN (Standard Algebraic Notation) rendering."""

from __future__ import annotations

from tinychess.core.enums import MoveFlag, PieceType
from tinychess.core.move import Move
from tinychess.core.move_generator import MoveGenerator
from tinychess.core.piece import EMPTY
from tinychess.core.position import Position
from tinychess.core.types import file_of, rank_of, square_name

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move.

    The check/mate suffix is computed by probing the move, so *position* is
    unchanged on return.
    """
    board = position.board
    piece = board[move.from_sq]
    if piece == EMPTY:
        raise ValueError(f"No piece on {square_name(move.from_sq)}")
    kind = PieceType(abs(piece))

    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        san = "O-O"
    elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
        san = "O-O-O"
    else:
        san = ""
        is_capture = board[move.to_sq] != EMPTY or move.flag == MoveFlag.EN_PASSANT

        if kind == PieceType.PAWN:
            if is_capture:
                san += chr(ord("a") + file_of(move.from_sq))
        else:
            san += _SAN_PIECE[kind]
            san += _disambiguation(position, move, piece)

        if is_capture:
            san += "x"

        san += square_name(move.to_sq)

        if move.flag == MoveFlag.PROMOTION:
            san += "=" + _SAN_PIECE[move.promotion or PieceType.QUEEN]

    with position.probe(move):
        gen_after = MoveGenerator(position)
        if gen_after.is_in_check(position.side_to_move):
            san += "+" if gen_after.has_legal_move() else "#"

    return san


def _disambiguation(position: Position, move: Move, piece: int) -> str:
    board = position.board
    gen = MoveGenerator(position)
    ambiguous = [
        m
        for m in gen.generate_legal_moves()
        if m.to_sq == move.to_sq
        and m.from_sq != move.from_sq
        and board[m.from_sq] == piece
    ]
    if not ambiguous:
        return ""
    same_file = any(file_of(m.from_sq) == file_of(move.from_sq) for m in ambiguous)
    same_rank = any(rank_of(m.from_sq) == rank_of(move.from_sq) for m in ambiguous)
    if not same_file:
        return chr(ord("a") + file_of(move.from_sq))
    if not same_rank:
        return str(rank_of(move.from_sq) + 1)
    return square_name(move.from_sq)
