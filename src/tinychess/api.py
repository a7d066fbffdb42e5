"""Functional engine interface used by frontends.

Every function takes the game position explicitly; there is no module-level
game state.  Callers sharing a game across threads wrap these calls in
:meth:`tinychess.game.session.GameSession.locked`.
"""

from __future__ import annotations

import sys
from typing import TextIO

from tinychess.core.enums import MoveFlag, PieceType
from tinychess.core.executor import execute, legal_destinations
from tinychess.core.notation.movelist import format_move_list
from tinychess.core.position import Game
from tinychess.core.types import Square, check_square
from tinychess.engine import DefaultEngine
from tinychess.engine.search import SearchLimits, SearchResult


def new_game() -> Game:
    """Standard starting position, move counter 0."""
    return Game()


def reset_game(game: Game) -> None:
    """Restore the starting position in place (identity is preserved)."""
    game.reset()


def get_board(game: Game) -> tuple[int, ...]:
    """Snapshot of the 64 signed piece values, index = square."""
    return game.board.snapshot()


def tag(game: Game, source: Square) -> list[Square]:
    """Legal destination squares for the side-to-move piece on *source*."""
    return legal_destinations(game, source)


def move_is_valid2(game: Game, source: Square, dest: Square) -> bool:
    """Whether *dest* is one of ``tag(game, source)``."""
    check_square(dest)
    return dest in tag(game, source)


def do_move(
    game: Game,
    source: Square,
    dest: Square,
    probe: bool = False,
    promotion: PieceType | None = None,
) -> MoveFlag:
    """Apply a legal move and return its classification.

    Raises :class:`~tinychess.core.errors.InvalidMove` (position untouched)
    when the pair is not legal.  With *probe* nothing observable changes.
    """
    return execute(game, source, dest, probe=probe, promotion=promotion)


def move_to_str(game: Game, source: Square, dest: Square, flag: MoveFlag) -> str:
    """SAN text of the move just applied by :func:`do_move`."""
    if not game.history:
        raise ValueError("No move has been played")
    record = game.history[-1]
    move = record.move
    if (move.from_sq, move.to_sq, move.flag) != (source, dest, flag):
        raise ValueError(
            f"Move {source}->{dest} ({flag.name}) is not the last applied move"
        )
    return record.san


def print_move_list(game: Game, file: TextIO | None = None) -> str:
    """Write the numbered move history to *file* (stdout) and return it."""
    first_ply = game.move_counter - len(game.history)
    text = format_move_list([r.san for r in game.history], first_ply=first_ply)
    print(text, file=file if file is not None else sys.stdout)
    return text


def reply(game: Game) -> SearchResult:
    """Search for the side to move within ``game.secs_per_move`` seconds.

    Blocking; the game itself is left unchanged.  Check ``result.state``
    before applying ``result.src``/``result.dst``.
    """
    limits = SearchLimits.from_seconds(game.secs_per_move)
    return DefaultEngine().search(game, limits)
