"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from tinychess.core import Position, MoveGenerator

    pos = Position()
    gen = MoveGenerator(pos)
    for move in gen.generate_legal_moves():
        print(move)
"""

from tinychess.core.board import Board
from tinychess.core.enums import (
    STATE_CHECK,
    STATE_CHECKMATE,
    STATE_DRAWN,
    STATE_ONGOING,
    CastlingRights,
    Color,
    MoveFlag,
    PieceType,
    SearchState,
)
from tinychess.core.errors import InvalidMove, InvalidSquare, TinyChessError
from tinychess.core.move import Move, MoveRecord
from tinychess.core.move_generator import MoveGenerator
from tinychess.core.notation import (
    STARTING_FEN,
    format_move_list,
    move_to_san,
    position_from_fen,
    position_to_fen,
)
from tinychess.core.position import DEFAULT_SECS_PER_MOVE, Game, Position
from tinychess.core.rules import Rules
from tinychess.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "MoveFlag",
    "PieceType",
    "SearchState",
    "STATE_CHECK",
    "STATE_CHECKMATE",
    "STATE_DRAWN",
    "STATE_ONGOING",
    # Errors
    "InvalidMove",
    "InvalidSquare",
    "TinyChessError",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "DEFAULT_SECS_PER_MOVE",
    "Game",
    "Move",
    "MoveGenerator",
    "MoveRecord",
    "Position",
    "Rules",
    # Notation
    "STARTING_FEN",
    "format_move_list",
    "move_to_san",
    "position_from_fen",
    "position_to_fen",
]
