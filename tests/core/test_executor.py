"""Tests for validated move execution."""

import pytest

from tinychess.core.enums import MoveFlag, PieceType
from tinychess.core.errors import InvalidMove, InvalidSquare
from tinychess.core.executor import (
    apply_move,
    execute,
    legal_destinations,
    resolve_move,
)
from tinychess.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from tinychess.core.position import Position
from tinychess.core.types import E1, E2, E4, E5, E7, E8, G1, parse_square


class TestLegalDestinations:
    def test_knight_from_start(self) -> None:
        pos = Position()
        assert legal_destinations(pos, G1) == [parse_square("f3"), parse_square("h3")]

    def test_empty_square(self) -> None:
        assert legal_destinations(Position(), E4) == []

    def test_out_of_range(self) -> None:
        with pytest.raises(InvalidSquare):
            legal_destinations(Position(), 64)


class TestResolveMove:
    def test_flag_is_classified(self) -> None:
        move = resolve_move(Position(), E2, E4)
        assert move.flag == MoveFlag.DOUBLE_PAWN

    def test_illegal_pair(self) -> None:
        with pytest.raises(InvalidMove):
            resolve_move(Position(), E2, E5)

    def test_empty_source(self) -> None:
        with pytest.raises(InvalidMove, match="empty"):
            resolve_move(Position(), E4, E5)

    def test_promotion_defaults_to_queen(self) -> None:
        pos = position_from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        move = resolve_move(pos, E7, E8)
        assert move.promotion == PieceType.QUEEN

    def test_underpromotion(self) -> None:
        pos = position_from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        move = resolve_move(pos, E7, E8, PieceType.KNIGHT)
        assert move.promotion == PieceType.KNIGHT

    def test_invalid_move_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            resolve_move(Position(), E1, E2)


class TestExecute:
    def test_records_history(self) -> None:
        pos = Position()
        record = apply_move(pos, resolve_move(pos, E2, E4))
        assert record.san == "e4"
        assert record.piece == PieceType.PAWN
        assert pos.history == [record]

    def test_capture_recorded(self) -> None:
        pos = position_from_fen(
            "rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2"
        )
        flag = execute(pos, E4, parse_square("d5"))
        assert flag == MoveFlag.CAPTURE
        assert pos.history[-1].captured == -PieceType.PAWN

    def test_probe_leaves_no_trace(self) -> None:
        pos = Position()
        flag = execute(pos, E2, E4, probe=True)
        assert flag == MoveFlag.DOUBLE_PAWN
        assert position_to_fen(pos) == STARTING_FEN
        assert pos.history == []

    def test_failed_move_leaves_position(self) -> None:
        pos = Position()
        with pytest.raises(InvalidMove):
            execute(pos, E2, E5)
        assert position_to_fen(pos) == STARTING_FEN
        assert pos.move_counter == 0
