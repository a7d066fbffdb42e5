"""Tests for Player implementations."""

from tinychess.core.enums import Color
from tinychess.game.player import EnginePlayer, HumanPlayer
from tinychess.game.session import GameSession


class TestHumanPlayer:
    def test_properties(self) -> None:
        p = HumanPlayer(Color.WHITE, "Alice")
        assert p.color == Color.WHITE
        assert p.name == "Alice"
        assert p.is_human is True

    def test_default_name(self) -> None:
        p = HumanPlayer(Color.BLACK)
        assert "black" in p.name.lower()

    def test_request_move_noop(self) -> None:
        p = HumanPlayer(Color.WHITE)
        p.request_move(GameSession())  # should not raise


class TestEnginePlayer:
    def test_properties(self) -> None:
        p = EnginePlayer(Color.BLACK)
        assert p.color == Color.BLACK
        assert p.name == "Engine"
        assert p.is_human is False

    def test_request_move_calls_callback(self) -> None:
        called_with = []
        p = EnginePlayer(
            Color.BLACK,
            on_request_move=lambda session: called_with.append(session),
        )
        session = GameSession()
        p.request_move(session)
        assert called_with == [session]

    def test_no_callback_no_error(self) -> None:
        p = EnginePlayer(Color.BLACK)
        p.request_move(GameSession())
