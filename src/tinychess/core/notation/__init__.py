"""Notation package: FEN setup strings, SAN and move-list rendering."""

from tinychess.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from tinychess.core.notation.movelist import format_move_list
from tinychess.core.notation.san import move_to_san

__all__ = [
    "STARTING_FEN",
    "format_move_list",
    "move_to_san",
    "position_from_fen",
    "position_to_fen",
]
