"""Move ordering for alpha-beta: hash move, MVV-LVA, killers, history."""

from __future__ import annotations

from tinychess.core.enums import Color, MoveFlag, PieceType
from tinychess.core.move import Move
from tinychess.core.piece import EMPTY
from tinychess.core.position import Position
from tinychess.engine.evaluation import PIECE_VALUES, piece_square_bonus

MAX_PLY = 128

_HASH_MOVE_SCORE = 1_000_000
_PROMOTION_SCORE = 200_000
_CAPTURE_SCORE = 100_000
_KILLER_SCORES = (90_000, 80_000)
_HISTORY_CAP = 50_000
_CASTLE_SCORE = 120


class MoveOrdering:
    """Per-search ordering state.

    Killers are remembered per ply (two slots, most recent first); history
    counts quiet cutoffs per ``(side, from, to)`` and is capped below the
    killer scores so a killer always sorts ahead of a history move.
    """

    __slots__ = ("_killers", "_history")

    def __init__(self) -> None:
        self._killers: list[tuple[Move | None, Move | None]] = []
        self._history: list[int] = []
        self.reset()

    def reset(self) -> None:
        self._killers = [(None, None)] * MAX_PLY
        self._history = [0] * (2 * 64 * 64)

    def order(
        self,
        position: Position,
        moves: list[Move],
        hash_move: Move | None = None,
        ply: int = 0,
    ) -> list[Move]:
        # sorted() is stable: equal keys keep generation order.
        return sorted(
            moves,
            key=lambda m: self.score(position, m, hash_move, ply),
            reverse=True,
        )

    def score(
        self,
        position: Position,
        move: Move,
        hash_move: Move | None = None,
        ply: int = 0,
    ) -> int:
        board = position.board
        mover = board[move.from_sq]
        if mover == EMPTY:
            return -_HASH_MOVE_SCORE
        if move == hash_move:
            return _HASH_MOVE_SCORE

        kind = abs(mover)
        score = 0
        if move.flag == MoveFlag.PROMOTION:
            score += _PROMOTION_SCORE + PIECE_VALUES[move.promotion or PieceType.QUEEN]

        victim = board[move.to_sq]
        if move.flag == MoveFlag.EN_PASSANT:
            victim = PieceType.PAWN
        if victim != EMPTY:
            # Most valuable victim first, least valuable attacker breaks ties.
            score += _CAPTURE_SCORE + 10 * PIECE_VALUES[abs(victim)]
            score -= PIECE_VALUES[kind]
        elif move.flag != MoveFlag.PROMOTION:
            score += self.killer_score(move, ply)
            score += self.history_score(position.side_to_move, move)
            if move.flag.is_castle:
                score += _CASTLE_SCORE

        color = Color.WHITE if mover > 0 else Color.BLACK
        score += piece_square_bonus(kind, color, move.to_sq)
        score -= piece_square_bonus(kind, color, move.from_sq)
        return score

    def killer_score(self, move: Move, ply: int) -> int:
        if not 0 <= ply < MAX_PLY:
            return 0
        for slot, killer in enumerate(self._killers[ply]):
            if killer == move:
                return _KILLER_SCORES[slot]
        return 0

    def history_score(self, side: Color, move: Move) -> int:
        return self._history[self._history_index(side, move)]

    def record_cutoff(self, side: Color, move: Move, depth: int, ply: int) -> None:
        """Remember a quiet *move* that caused a beta cutoff."""
        if 0 <= ply < MAX_PLY:
            first, _ = self._killers[ply]
            if first != move:
                self._killers[ply] = (move, first)

        idx = self._history_index(side, move)
        self._history[idx] = min(_HISTORY_CAP, self._history[idx] + depth * depth)

    @staticmethod
    def _history_index(side: Color, move: Move) -> int:
        return (int(side) * 64 + move.from_sq) * 64 + move.to_sq
