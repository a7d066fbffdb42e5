"""Tests for FEN, SAN and move-list notation."""

import pytest

from tinychess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from tinychess.core.move import Move
from tinychess.core.notation import (
    STARTING_FEN,
    format_move_list,
    move_to_san,
    position_from_fen,
    position_to_fen,
)
from tinychess.core.types import E1, E2, E3, E4, E8, G1, parse_square


class TestFenParsing:
    def test_starting_side(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.side_to_move == Color.WHITE
        assert pos.move_counter == 0

    def test_starting_castling(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.castling == CastlingRights.ALL

    def test_starting_kings(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.board[E1] == PieceType.KING
        assert pos.board[E8] == -PieceType.KING

    def test_black_to_move_counter(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        pos = position_from_fen(fen)
        assert pos.move_counter == 1
        assert pos.en_passant == E3

    def test_partial_castling(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w Kq - 0 1"
        pos = position_from_fen(fen)
        assert pos.castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )

    def test_round_trip(self) -> None:
        fen = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 3 17"
        assert position_to_fen(position_from_fen(fen)) == fen

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8 w - - 0 1",
            "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkqK - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1",
            "8/8/8/8/8/8/8/4K3 w - - 0 1",
        ],
    )
    def test_invalid_fen_raises(self, fen: str) -> None:
        with pytest.raises(ValueError):
            position_from_fen(fen)


class TestSan:
    def test_pawn_push(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert move_to_san(pos, Move(E2, E4, MoveFlag.DOUBLE_PAWN)) == "e4"

    def test_knight_move(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert move_to_san(pos, Move(G1, parse_square("f3"))) == "Nf3"

    def test_castling(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        assert move_to_san(pos, Move(E1, G1, MoveFlag.CASTLE_KINGSIDE)) == "O-O"
        assert (
            move_to_san(pos, Move(E1, parse_square("c1"), MoveFlag.CASTLE_QUEENSIDE))
            == "O-O-O"
        )

    def test_pawn_capture(self) -> None:
        pos = position_from_fen(
            "rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2"
        )
        move = Move(E4, parse_square("d5"), MoveFlag.CAPTURE)
        assert move_to_san(pos, move) == "exd5"

    def test_promotion(self) -> None:
        pos = position_from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        move = Move(parse_square("e7"), E8, MoveFlag.PROMOTION, PieceType.QUEEN)
        assert move_to_san(pos, move) == "e8=Q"

    def test_file_disambiguation(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R4RK1 w - - 0 1")
        move = Move(parse_square("a1"), parse_square("d1"))
        assert move_to_san(pos, move) == "Rad1"

    def test_check_and_mate_suffix(self) -> None:
        pos = position_from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        assert move_to_san(pos, Move(parse_square("a1"), parse_square("a8"))) == "Ra8#"
        pos = position_from_fen("6k1/8/8/8/8/8/8/R5K1 w - - 0 1")
        assert move_to_san(pos, Move(parse_square("a1"), parse_square("a8"))) == "Ra8+"

    def test_san_leaves_position_unchanged(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        move_to_san(pos, Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert position_to_fen(pos) == STARTING_FEN


class TestMoveList:
    def test_pairs(self) -> None:
        text = format_move_list(["e4", "e5", "Nf3"])
        assert text == "1. e4 e5\n2. Nf3"

    def test_black_first(self) -> None:
        text = format_move_list(["e5", "Nf3", "Nc6"], first_ply=1)
        assert text == "1. ... e5\n2. Nf3 Nc6"

    def test_empty(self) -> None:
        assert format_move_list([]) == ""
