"""High-level chess rules: checkmate, stalemate, draw detection.

Draw policy: the 50-move rule and threefold repetition only entitle a
player to *claim* a draw; insufficient material, the 75-move rule and
fivefold repetition end the game on their own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tinychess.core.enums import Color, PieceType, SearchState
from tinychess.core.move_generator import MoveGenerator
from tinychess.core.piece import EMPTY
from tinychess.core.types import file_of, rank_of

if TYPE_CHECKING:
    from tinychess.core.position import Position

FIFTY_MOVE_PLIES = 100
SEVENTY_FIVE_MOVE_PLIES = 150


def _square_shade(sq: int) -> int:
    return (file_of(sq) + rank_of(sq)) & 1


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return MoveGenerator(position).is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.game_state(position) == SearchState.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return not gen.is_in_check(position.side_to_move) and not gen.has_legal_move()

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-color bishops)."""
        extras = [
            (sq, v)
            for sq, v in enumerate(position.board)
            if v != EMPTY and abs(v) != PieceType.KING
        ]
        kinds = sorted(abs(v) for _, v in extras)
        if kinds in ([], [PieceType.KNIGHT], [PieceType.BISHOP]):
            return True
        if kinds != [PieceType.BISHOP, PieceType.BISHOP]:
            return False
        (sq_a, a), (sq_b, b) = extras
        # One bishop each, both on the same shade.
        return (a > 0) != (b > 0) and _square_shade(sq_a) == _square_shade(sq_b)

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= FIFTY_MOVE_PLIES

    @staticmethod
    def is_seventy_five_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= SEVENTY_FIVE_MOVE_PLIES

    @staticmethod
    def is_threefold_repetition(position: Position) -> bool:
        return position.repetition_count() >= 3

    @staticmethod
    def is_fivefold_repetition(position: Position) -> bool:
        return position.repetition_count() >= 5

    @staticmethod
    def is_claimable_draw(position: Position) -> bool:
        """Whether the side to move may claim an immediate draw by rule."""
        return Rules.is_fifty_move_rule(position) or Rules.is_threefold_repetition(
            position
        )

    @staticmethod
    def is_automatic_draw(position: Position) -> bool:
        """Whether the position is drawn without any player claim."""
        return (
            Rules.is_insufficient_material(position)
            or Rules.is_seventy_five_move_rule(position)
            or Rules.is_fivefold_repetition(position)
        )

    @staticmethod
    def game_state(position: Position) -> SearchState:
        """Classify the position for the side to move.

        Mate and stalemate take precedence over automatic draws.
        """
        gen = MoveGenerator(position)
        in_check = gen.is_in_check(position.side_to_move)
        if not gen.has_legal_move():
            return SearchState.CHECKMATE if in_check else SearchState.DRAWN
        if Rules.is_automatic_draw(position):
            return SearchState.DRAWN
        return SearchState.CHECK if in_check else SearchState.ONGOING

    @staticmethod
    def winner(position: Position) -> Color | None:
        """The side that delivered mate, or ``None`` if the game is not won."""
        if Rules.is_checkmate(position):
            return position.side_to_move.opposite
        return None
