"""Tests for GameSession — the locked game owner."""

import threading

import pytest

from tinychess.core.executor import execute
from tinychess.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from tinychess.core.types import E2, E4
from tinychess.game.session import GameSession


def _hold_lock(session: GameSession):
    """Start a thread that holds the session lock until released."""
    acquired = threading.Event()
    release = threading.Event()

    def _worker() -> None:
        with session.locked():
            acquired.set()
            release.wait(timeout=5)

    thread = threading.Thread(target=_worker)
    thread.start()
    assert acquired.wait(timeout=5)
    return thread, release


class TestGameSession:
    def test_default_position(self) -> None:
        session = GameSession()
        with session.locked() as game:
            assert position_to_fen(game) == STARTING_FEN
        assert session.move_counter() == 0

    def test_locked_yields_same_position(self) -> None:
        session = GameSession()
        with session.locked() as first, session.locked() as second:
            assert first is second

    def test_board_snapshot(self) -> None:
        session = GameSession()
        with session.locked() as game:
            execute(game, E2, E4)
        board = session.board()
        assert board[E4] == 1
        assert board[E2] == 0
        assert session.move_counter() == 1

    def test_try_board_while_busy(self) -> None:
        session = GameSession()
        thread, release = _hold_lock(session)
        try:
            assert session.try_board() is None
            with pytest.raises(TimeoutError):
                with session.locked(blocking=False):
                    pass
        finally:
            release.set()
            thread.join()
        assert session.try_board() == session.board()

    def test_set_secs_per_move(self) -> None:
        session = GameSession()
        session.set_secs_per_move(0.5)
        with session.locked() as game:
            assert game.secs_per_move == 0.5
        with pytest.raises(ValueError):
            session.set_secs_per_move(0)

    def test_reset_keeps_identity(self) -> None:
        session = GameSession()
        with session.locked() as game:
            before = game
            execute(game, E2, E4)
        session.reset()
        with session.locked() as game:
            assert game is before
            assert position_to_fen(game) == STARTING_FEN

    def test_setup_from_fen(self) -> None:
        fen = "4k3/8/8/8/8/8/4P3/4K3 b - - 0 9"
        session = GameSession(position_from_fen(STARTING_FEN))
        session.setup(fen)
        with session.locked() as game:
            assert position_to_fen(game) == fen
        session.setup()
        with session.locked() as game:
            assert position_to_fen(game) == STARTING_FEN
