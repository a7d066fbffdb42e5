"""tinychess — a small chess engine core.

The functional interface mirrors what a simple frontend needs::

    import tinychess

    game = tinychess.new_game()
    flag = tinychess.do_move(game, 12, 28)  # e2-e4
    print(tinychess.move_to_str(game, 12, 28, flag))  # "e4"
    result = tinychess.reply(game)
    if result.state != tinychess.STATE_CHECKMATE:
        tinychess.do_move(game, result.src, result.dst)
"""

from tinychess.api import (
    do_move,
    get_board,
    move_is_valid2,
    move_to_str,
    new_game,
    print_move_list,
    reply,
    reset_game,
    tag,
)
from tinychess.core.enums import (
    STATE_CHECK,
    STATE_CHECKMATE,
    STATE_DRAWN,
    STATE_ONGOING,
    Color,
    MoveFlag,
    PieceType,
    SearchState,
)
from tinychess.core.errors import InvalidMove, InvalidSquare, TinyChessError
from tinychess.core.position import DEFAULT_SECS_PER_MOVE, Game
from tinychess.engine.search import (
    KING_VALUE,
    KING_VALUE_DIV_2,
    Evaluation,
    Reply,
    SearchResult,
)

__all__ = [
    # Operations
    "do_move",
    "get_board",
    "move_is_valid2",
    "move_to_str",
    "new_game",
    "print_move_list",
    "reply",
    "reset_game",
    "tag",
    # Types
    "Color",
    "DEFAULT_SECS_PER_MOVE",
    "Evaluation",
    "Game",
    "MoveFlag",
    "PieceType",
    "Reply",
    "SearchResult",
    "SearchState",
    # Constants
    "KING_VALUE",
    "KING_VALUE_DIV_2",
    "STATE_CHECK",
    "STATE_CHECKMATE",
    "STATE_DRAWN",
    "STATE_ONGOING",
    # Errors
    "InvalidMove",
    "InvalidSquare",
    "TinyChessError",
]
