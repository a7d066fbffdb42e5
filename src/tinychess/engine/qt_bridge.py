"""Qt bridge to run engine searches in a worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from tinychess.engine import DefaultEngine
from tinychess.engine.search import SearchLimits
from tinychess.game.session import GameSession

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine replies on demand.

    Move it to a ``QThread`` and trigger :meth:`request_move` through a queued
    signal.  The search itself cannot be interrupted; :meth:`discard` only
    marks the running request stale so its result arrives on
    ``reply_discarded`` instead of ``reply_ready``.
    """

    reply_ready = pyqtSignal(int, object)
    reply_discarded = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_engine", "_max_depth", "_discarded_id", "_current_id")

    def __init__(self, *, max_depth: int = 64) -> None:
        super().__init__()
        self._engine = DefaultEngine()
        self._max_depth = max_depth
        self._current_id: int | None = None
        self._discarded_id: int | None = None

    @pyqtSlot(object, int)
    def request_move(self, session_obj: object, request_id: int) -> None:
        """Search the session's position and emit the result."""
        if not isinstance(session_obj, GameSession):
            self.search_error.emit(request_id, "Engine received invalid session")
            return

        self._current_id = request_id
        try:
            # Search a private copy so the lock is only held for snapshots.
            with session_obj.locked() as position:
                work = position.copy()
                start_key = (position.move_counter, position.zobrist_hash)
            limits = SearchLimits.from_seconds(work.secs_per_move, self._max_depth)
            result = self._engine.search(work, limits)
            with session_obj.locked() as position:
                stale = start_key != (position.move_counter, position.zobrist_hash)
        except Exception as exc:
            _LOGGER.exception("Engine search failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return
        finally:
            self._current_id = None

        if stale or self._discarded_id == request_id:
            _LOGGER.debug("Discarding stale engine reply %d", request_id)
            self.reply_discarded.emit(request_id)
            return

        self.reply_ready.emit(request_id, result)

    def discard(self, request_id: int | None = None) -> None:
        """Mark *request_id* (default: the running request) as stale.

        Plain method rather than a slot: it must take effect while the worker
        thread is busy inside :meth:`request_move`.
        """
        self._discarded_id = request_id if request_id is not None else self._current_id

    @pyqtSlot(int)
    def set_max_depth(self, max_depth: int) -> None:
        """Update the depth cap (takes effect on the next search)."""
        if max_depth <= 0:
            raise ValueError("Search depth must be >= 1")
        self._max_depth = max_depth
