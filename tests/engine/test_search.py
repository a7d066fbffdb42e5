"""Tests for the built-in Python chess engine."""

import pytest

from tinychess.core.enums import Color, SearchState
from tinychess.core.move import Move
from tinychess.core.move_generator import MoveGenerator
from tinychess.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from tinychess.core.position import Position
from tinychess.core.rules import Rules
from tinychess.core.types import parse_square
from tinychess.engine import (
    KING_VALUE,
    KING_VALUE_DIV_2,
    Evaluation,
    PythonSearchEngine,
    SearchLimits,
    mate_distance,
)
from tinychess.engine.python_search import score_from_tt, score_to_tt

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class _NullTrackingEngine(PythonSearchEngine):
    def __init__(self) -> None:
        super().__init__()
        self.null_move_calls = 0

    def _null_move_cutoff(self, position, depth, beta, ply):
        self.null_move_calls += 1
        return super()._null_move_cutoff(position, depth, beta, ply)


class _LmrTrackingEngine(PythonSearchEngine):
    def __init__(self) -> None:
        super().__init__()
        self.lmr_calls = 0

    def _lmr_reduction(self, depth: int, move_index: int) -> int:
        self.lmr_calls += 1
        return super()._lmr_reduction(depth, move_index)

    def _can_apply_null_move(
        self,
        position: Position,
        depth: int,
        in_check: bool,
        allow_null: bool,
    ) -> bool:
        return False


class TestPythonSearchEngine:
    def test_returns_legal_move_from_start(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        engine = PythonSearchEngine()

        result = engine.search(pos, SearchLimits(max_depth=2, time_limit_ms=None))
        legal = MoveGenerator(pos).generate_legal_moves()

        assert result.best_move in legal
        assert result.depth == 2
        assert result.nodes > 0
        assert result.state == SearchState.ONGOING
        assert result.side == Color.WHITE

    def test_does_not_touch_callers_position(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        key = pos.zobrist_hash

        PythonSearchEngine().search(pos, SearchLimits(max_depth=3, time_limit_ms=None))

        assert position_to_fen(pos) == STARTING_FEN
        assert pos.zobrist_hash == key

    def test_finds_mate_in_one(self) -> None:
        pos = position_from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        engine = PythonSearchEngine()

        result = engine.search(pos, SearchLimits(max_depth=3, time_limit_ms=None))
        assert result.best_move is not None
        assert result.checkmate_in == 1
        assert result.is_mate_line

        pos.make_move(result.best_move)
        assert Rules.is_checkmate(pos)

    def test_mate_score_is_from_root_perspective(self) -> None:
        pos = position_from_fen("k7/8/1K6/8/8/8/8/6RR w - - 0 1")
        engine = PythonSearchEngine()

        result = engine.search(pos, SearchLimits(max_depth=4, time_limit_ms=None))

        assert result.score == KING_VALUE - 1
        assert result.dst in (parse_square("g8"), parse_square("h8"))
        assert result.evaluation.winner == Color.WHITE

    def test_losing_side_sees_negative_mate(self) -> None:
        # Black's only move is Kb8, answered by Rh8#.
        pos = position_from_fen("k7/8/1K6/8/8/8/8/7R b - - 0 1")
        engine = PythonSearchEngine()

        result = engine.search(pos, SearchLimits(max_depth=3, time_limit_ms=None))

        assert result.best_move is not None
        assert result.score < -KING_VALUE_DIV_2
        assert result.checkmate_in == 2
        assert result.evaluation.winner == Color.WHITE

    def test_returns_checkmate_for_checkmated_side(self) -> None:
        pos = position_from_fen(FOOLS_MATE)
        engine = PythonSearchEngine()

        result = engine.search(pos, SearchLimits(max_depth=3, time_limit_ms=None))
        assert result.best_move is None
        assert result.state == SearchState.CHECKMATE
        assert result.src == -1 and result.dst == -1
        assert result.score == -KING_VALUE

    def test_returns_drawn_for_insufficient_material(self) -> None:
        pos = position_from_fen("8/8/8/4k3/8/8/8/3NK3 w - - 0 1")
        result = PythonSearchEngine().search(pos, SearchLimits(max_depth=3))
        assert result.state == SearchState.DRAWN
        assert result.best_move is None

    def test_captures_hanging_queen(self) -> None:
        pos = position_from_fen("4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1")
        result = PythonSearchEngine().search(
            pos, SearchLimits(max_depth=2, time_limit_ms=None)
        )
        assert result.best_move is not None
        assert result.dst == parse_square("d5")

    def test_time_budget_still_yields_move(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        result = PythonSearchEngine().search(
            pos, SearchLimits(max_depth=64, time_limit_ms=1)
        )
        legal = MoveGenerator(pos).generate_legal_moves()
        assert result.best_move in legal

    def test_rejects_non_positive_depth(self) -> None:
        with pytest.raises(ValueError):
            PythonSearchEngine().search(Position(), SearchLimits(max_depth=0))

    def test_populates_transposition_table(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        engine = PythonSearchEngine()

        _ = engine.search(pos, SearchLimits(max_depth=3, time_limit_ms=None))

        assert len(engine._tt) > 0

    def test_mate_scores_are_ply_adjusted_in_tt(self) -> None:
        stored = score_to_tt(KING_VALUE - 5, ply=3)
        assert stored == KING_VALUE - 2
        assert score_from_tt(stored, ply=3) == KING_VALUE - 5
        assert score_to_tt(-(KING_VALUE - 5), ply=3) == -(KING_VALUE - 2)
        assert score_to_tt(120, ply=3) == 120

    def test_ordering_state_is_reset_between_searches(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        engine = PythonSearchEngine()
        move = Move(parse_square("g1"), parse_square("f3"))
        engine.ordering.record_cutoff(Color.WHITE, move, depth=4, ply=0)

        engine.search(pos, SearchLimits(max_depth=1, time_limit_ms=None))

        assert engine.ordering.killer_score(move, ply=0) == 0

    def test_uses_null_move_pruning_in_normal_position(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        engine = _NullTrackingEngine()

        _ = engine.search(pos, SearchLimits(max_depth=4, time_limit_ms=None))

        assert engine.null_move_calls > 0

    def test_skips_null_move_pruning_in_pawn_only_endgame(self) -> None:
        pos = position_from_fen("8/3k4/8/8/8/4K3/3P4/8 w - - 0 1")
        engine = _NullTrackingEngine()

        _ = engine.search(pos, SearchLimits(max_depth=4, time_limit_ms=None))

        assert engine.null_move_calls == 0

    @pytest.mark.slow
    def test_uses_lmr_on_late_quiet_moves(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        engine = _LmrTrackingEngine()

        _ = engine.search(pos, SearchLimits(max_depth=5, time_limit_ms=None))

        assert engine.lmr_calls > 0

    def test_lmr_conditions_and_reduction_schedule(self) -> None:
        engine = PythonSearchEngine()

        assert not engine._can_try_lmr(3, 3, False, True, False)
        assert not engine._can_try_lmr(5, 4, True, True, False)
        assert not engine._can_try_lmr(5, 4, False, False, False)
        assert not engine._can_try_lmr(5, 4, False, True, True)
        assert not engine._can_try_lmr(5, 2, False, True, False)
        assert engine._can_try_lmr(5, 4, False, True, False)
        assert engine._lmr_reduction(depth=5, move_index=4) == 1
        assert engine._lmr_reduction(depth=9, move_index=9) == 2


class TestEvaluation:
    def test_centipawn_score(self) -> None:
        ev = Evaluation.from_score(35, Color.WHITE)
        assert not ev.is_mate
        assert ev.cp == 35
        assert ev.to_score(Color.WHITE) == 35

    def test_mate_score_decodes_winner(self) -> None:
        ev = Evaluation.from_score(KING_VALUE - 3, Color.BLACK)
        assert ev.is_mate
        assert ev.mate_plies == 3
        assert ev.mate_in_moves == 2
        assert ev.winner == Color.BLACK

    def test_losing_mate_score(self) -> None:
        ev = Evaluation.from_score(-(KING_VALUE - 2), Color.WHITE)
        assert ev.winner == Color.BLACK
        assert ev.to_score(Color.WHITE) == -(KING_VALUE - 2)
        assert ev.to_score(Color.BLACK) == KING_VALUE - 2

    def test_negative_mate_distance_rejected(self) -> None:
        with pytest.raises(ValueError):
            Evaluation.mate(-1, Color.WHITE)

    def test_mate_distance_helper(self) -> None:
        assert mate_distance(KING_VALUE - 7) == 7
        assert mate_distance(-(KING_VALUE - 4)) == 4
        assert mate_distance(250) == 0


class TestSearchLimits:
    def test_from_seconds(self) -> None:
        limits = SearchLimits.from_seconds(0.05)
        assert limits.time_limit_ms == 50
        assert limits.max_depth == 64

    def test_tiny_budget_is_at_least_one_ms(self) -> None:
        assert SearchLimits.from_seconds(0.0001).time_limit_ms == 1
