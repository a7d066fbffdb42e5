"""Pure-Python chess engine search (negamax + alpha-beta, iterative deepening)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from time import perf_counter, sleep

from tinychess.core.enums import Color, MoveFlag, PieceType, SearchState
from tinychess.core.move import Move
from tinychess.core.move_generator import MoveGenerator
from tinychess.core.piece import EMPTY
from tinychess.core.position import Position
from tinychess.core.rules import Rules
from tinychess.engine.evaluation import evaluate
from tinychess.engine.ordering import MoveOrdering
from tinychess.engine.search import (
    KING_VALUE,
    KING_VALUE_DIV_2,
    IEngine,
    SearchLimits,
    SearchResult,
)

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000
_NULL_MOVE_MIN_DEPTH = 3
_NULL_MOVE_BASE_REDUCTION = 2
_LMR_MIN_DEPTH = 4
_LMR_FIRST_REDUCED_MOVE = 3
_QUIESCENCE_MAX_DEPTH = 16
_YIELD_EVERY_NODES = 4096


class _Bound(IntEnum):
    EXACT = 0
    LOWER = 1
    UPPER = 2


@dataclass(slots=True)
class _TTEntry:
    depth: int
    score: int
    bound: _Bound
    best_move: Move | None


class _SearchTimeout(Exception):
    """Raised inside the tree when the time budget is spent."""


def mate_distance(score: int) -> int:
    """Plies to mate encoded in a sentinel *score*, or 0 for ordinary scores."""
    if abs(score) > KING_VALUE_DIV_2:
        return KING_VALUE - abs(score)
    return 0


def score_to_tt(score: int, ply: int) -> int:
    """Re-anchor a mate score from the root to the node stored at *ply*."""
    if abs(score) <= KING_VALUE_DIV_2:
        return score
    return score + ply if score > 0 else score - ply


def score_from_tt(score: int, ply: int) -> int:
    """Inverse of :func:`score_to_tt`."""
    if abs(score) <= KING_VALUE_DIV_2:
        return score
    return score - ply if score > 0 else score + ply


def _is_quiet(position: Position, move: Move) -> bool:
    if move.flag in (MoveFlag.PROMOTION, MoveFlag.EN_PASSANT):
        return False
    return position.board[move.to_sq] == EMPTY


def _is_noisy(move: Move) -> bool:
    return move.is_capture or move.flag == MoveFlag.PROMOTION


def _has_non_pawn_material(position: Position, side: Color) -> bool:
    board = position.board
    return any(
        abs(board[sq]) not in (PieceType.PAWN, PieceType.KING)
        for sq in board.all_pieces(side)
    )


class PythonSearchEngine(IEngine):
    """Classical chess searcher with iterative deepening and quiescence.

    The search runs on a private copy of the position, so the caller's
    position is never observed in an intermediate state.  Scores inside the
    tree are negamax scores; the returned score is from the root side's
    point of view, with mates encoded as ``±(KING_VALUE - plies)``.
    """

    __slots__ = (
        "_deadline",
        "_nodes",
        "_yield_mark",
        "_tt",
        "_tt_capacity",
        "_ordering",
    )

    def __init__(self, tt_max_entries: int = 200_000) -> None:
        self._deadline: float | None = None
        self._nodes = 0
        self._yield_mark = 0
        self._tt: dict[int, _TTEntry] = {}
        self._tt_capacity = tt_max_entries
        self._ordering = MoveOrdering()

    @property
    def ordering(self) -> MoveOrdering:
        return self._ordering

    def search(self, position: Position, limits: SearchLimits) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")
        self._prepare(limits)

        work = position.copy()
        side = work.side_to_move
        gen = MoveGenerator(work)
        in_check = gen.is_in_check(side)
        candidates = gen.generate_legal_moves()

        if not candidates:
            if in_check:
                return SearchResult(None, -KING_VALUE, 0, SearchState.CHECKMATE, side)
            return SearchResult(None, 0, 0, SearchState.DRAWN, side)
        if Rules.is_automatic_draw(work):
            return SearchResult(None, 0, 0, SearchState.DRAWN, side)

        root_moves = self._ordering.order(work, candidates)
        best_move = root_moves[0]
        best_score = evaluate(work)
        completed = 0

        for depth in range(1, limits.max_depth + 1):
            try:
                score, move = self._search_root(work, root_moves, depth)
            except _SearchTimeout:
                _LOGGER.debug("Depth %d interrupted by time budget", depth)
                break
            if move is None:
                break

            best_move, best_score, completed = move, score, depth
            _LOGGER.debug(
                "depth=%d best=%s score=%d nodes=%d", depth, move, score, self._nodes
            )
            if abs(score) > KING_VALUE_DIV_2:
                # Deeper iterations cannot find a shorter mate.
                break
            root_moves.remove(move)
            root_moves.insert(0, move)

        return SearchResult(
            best_move=best_move,
            score=best_score,
            checkmate_in=mate_distance(best_score),
            state=SearchState.CHECK if in_check else SearchState.ONGOING,
            side=side,
            depth=completed,
            nodes=self._nodes,
        )

    def _prepare(self, limits: SearchLimits) -> None:
        self._nodes = 0
        self._yield_mark = 0
        self._tt.clear()
        self._ordering.reset()
        self._deadline = None
        if limits.time_limit_ms is not None:
            self._deadline = perf_counter() + max(limits.time_limit_ms, 1) / 1000.0

    def _search_root(
        self, position: Position, root_moves: list[Move], depth: int
    ) -> tuple[int, Move | None]:
        alpha = best_score = -_INF_SCORE
        best_move: Move | None = None

        for move in root_moves:
            try:
                with position.probe(move):
                    score = -self._negamax(position, depth - 1, -_INF_SCORE, -alpha, 1)
            except _SearchTimeout:
                # Keep whatever the first iteration managed to look at.
                if depth == 1 and best_move is not None:
                    return best_score, best_move
                raise

            # Ties keep the earlier move.
            if score > best_score:
                best_score, best_move = score, move
                alpha = max(alpha, score)

        return best_score, best_move

    def _negamax(
        self,
        position: Position,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
        allow_null: bool = True,
    ) -> int:
        self._tick()

        key = position.zobrist_hash
        entry = self._tt.get(key)
        hash_move = entry.best_move if entry is not None else None
        if entry is not None and entry.depth >= depth:
            cached = score_from_tt(entry.score, ply)
            if entry.bound == _Bound.EXACT:
                return cached
            if entry.bound == _Bound.LOWER and cached >= beta:
                return cached
            if entry.bound == _Bound.UPPER and cached <= alpha:
                return cached

        if Rules.is_automatic_draw(position):
            return 0
        if depth <= 0:
            return self._quiescence(position, alpha, beta, ply)

        gen = MoveGenerator(position)
        side = position.side_to_move
        in_check = gen.is_in_check(side)

        if self._can_apply_null_move(position, depth, in_check, allow_null):
            if self._null_move_cutoff(position, depth, beta, ply):
                return beta

        moves = gen.generate_legal_moves()
        if not moves:
            return -KING_VALUE + ply if in_check else 0

        alpha_orig = alpha
        best_score = -_INF_SCORE
        best_move: Move | None = None
        ordered = self._ordering.order(position, moves, hash_move, ply)

        for index, move in enumerate(ordered):
            quiet = _is_quiet(position, move)
            reduce = self._can_try_lmr(depth, index, in_check, quiet, move == hash_move)

            with position.probe(move):
                gives_check = reduce and MoveGenerator(position).is_in_check(
                    position.side_to_move
                )
                score = alpha + 1
                if reduce and not gives_check:
                    # Null-window probe at reduced depth; re-search on fail-high.
                    shallow = max(0, depth - 1 - self._lmr_reduction(depth, index))
                    score = -self._negamax(
                        position, shallow, -alpha - 1, -alpha, ply + 1
                    )
                if score > alpha:
                    score = -self._negamax(
                        position, depth - 1, -beta, -alpha, ply + 1
                    )

            if score > best_score:
                best_score, best_move = score, move
            alpha = max(alpha, score)
            if alpha >= beta:
                if quiet:
                    self._ordering.record_cutoff(side, move, depth, ply)
                break

        if best_score >= beta:
            bound = _Bound.LOWER
        elif best_score <= alpha_orig:
            bound = _Bound.UPPER
        else:
            bound = _Bound.EXACT
        self._store(key, depth, score_to_tt(best_score, ply), bound, best_move)
        return best_score

    def _quiescence(
        self,
        position: Position,
        alpha: int,
        beta: int,
        ply: int,
        q_depth: int = 0,
    ) -> int:
        self._tick()

        if Rules.is_automatic_draw(position):
            return 0

        gen = MoveGenerator(position)
        in_check = gen.is_in_check(position.side_to_move)
        moves = gen.generate_legal_moves()
        if not moves:
            return -KING_VALUE + ply if in_check else 0

        if in_check:
            if q_depth >= _QUIESCENCE_MAX_DEPTH:
                return evaluate(position)
            candidates = moves
        else:
            stand_pat = evaluate(position)
            if stand_pat >= beta:
                return beta
            if q_depth >= _QUIESCENCE_MAX_DEPTH:
                return max(alpha, stand_pat)
            alpha = max(alpha, stand_pat)
            candidates = [m for m in moves if _is_noisy(m)]

        for move in self._ordering.order(position, candidates, ply=ply):
            with position.probe(move):
                score = -self._quiescence(position, -beta, -alpha, ply + 1, q_depth + 1)
            if score >= beta:
                return beta
            alpha = max(alpha, score)

        return alpha

    def _tick(self) -> None:
        """Count a node; yield the GIL now and then and enforce the deadline."""
        self._nodes += 1
        if self._nodes - self._yield_mark >= _YIELD_EVERY_NODES:
            self._yield_mark = self._nodes
            sleep(0.001)
        if self._deadline is not None and perf_counter() >= self._deadline:
            raise _SearchTimeout

    def _store(
        self,
        key: int,
        depth: int,
        score: int,
        bound: _Bound,
        best_move: Move | None,
    ) -> None:
        existing = self._tt.get(key)
        if existing is not None and existing.depth > depth:
            return
        if existing is None and len(self._tt) >= self._tt_capacity:
            self._tt.clear()
        self._tt[key] = _TTEntry(depth, score, bound, best_move)

    # ── Pruning / reduction policy ───────────────────────────────────────

    def _can_apply_null_move(
        self,
        position: Position,
        depth: int,
        in_check: bool,
        allow_null: bool,
    ) -> bool:
        # Zugzwang-prone pawn endings are excluded.
        if not allow_null or in_check or depth < _NULL_MOVE_MIN_DEPTH:
            return False
        return _has_non_pawn_material(position, position.side_to_move)

    def _null_move_cutoff(
        self, position: Position, depth: int, beta: int, ply: int
    ) -> bool:
        """Pass the turn; a fail-high for the opponent means this node fails high."""
        reduced = max(0, depth - 1 - _NULL_MOVE_BASE_REDUCTION - depth // 4)
        with position.null_probe():
            score = -self._negamax(
                position, reduced, -beta, -beta + 1, ply + 1, allow_null=False
            )
        return score >= beta and abs(score) < KING_VALUE_DIV_2

    def _can_try_lmr(
        self,
        depth: int,
        move_index: int,
        in_check: bool,
        is_quiet: bool,
        is_hash_move: bool,
    ) -> bool:
        return (
            not in_check
            and is_quiet
            and not is_hash_move
            and depth >= _LMR_MIN_DEPTH
            and move_index >= _LMR_FIRST_REDUCED_MOVE
        )

    def _lmr_reduction(self, depth: int, move_index: int) -> int:
        return 2 if depth >= 8 and move_index >= 8 else 1
