"""GameSession — one game position behind one mutual-exclusion boundary."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from tinychess.core.notation.fen import position_from_fen
from tinychess.core.position import Position


class GameSession:
    """Owns a :class:`Position` and serialises every access to it.

    All mutators (reset, moves, searches) must run inside :meth:`locked`.
    Probing happens inside the same window or on private copies, so a
    concurrent :meth:`board` call only ever sees fully applied positions.
    """

    __slots__ = ("_position", "_lock")

    def __init__(self, position: Position | None = None) -> None:
        self._position = position if position is not None else Position()
        self._lock = threading.RLock()

    @contextmanager
    def locked(self, blocking: bool = True) -> Iterator[Position]:
        """Exclusive access window. Raises ``TimeoutError`` if non-blocking and busy."""
        if not self._lock.acquire(blocking=blocking):
            raise TimeoutError("Game position is busy")
        try:
            yield self._position
        finally:
            self._lock.release()

    def try_board(self) -> tuple[int, ...] | None:
        """Snapshot without waiting; ``None`` while another thread holds the lock."""
        if not self._lock.acquire(blocking=False):
            return None
        try:
            return self._position.board.snapshot()
        finally:
            self._lock.release()

    def board(self) -> tuple[int, ...]:
        with self.locked() as position:
            return position.board.snapshot()

    def move_counter(self) -> int:
        with self.locked() as position:
            return position.move_counter

    def set_secs_per_move(self, secs: float) -> None:
        if secs <= 0:
            raise ValueError(f"secs_per_move must be > 0, got {secs}")
        with self.locked() as position:
            position.secs_per_move = secs

    def reset(self) -> None:
        """Restart the game in place; references to the position stay valid."""
        with self.locked() as position:
            position.reset()

    def setup(self, fen: str | None = None) -> None:
        """Restart from the starting position, or from *fen* if given."""
        if fen is None:
            self.reset()
            return
        loaded = position_from_fen(fen)
        with self.locked() as position:
            position.load(loaded)
