"""Abstract interfaces for the game layer.

The controller depends on these ABCs, not on concrete player types.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from tinychess.core.enums import Color

if TYPE_CHECKING:
    from tinychess.core.types import Square
    from tinychess.engine.search import SearchResult
    from tinychess.game.session import GameSession


# ── Turn FSM states ──────────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for one game.

    AWAITING_TURN_DECISION → {AWAITING_HUMAN_SELECTION | ENGINE_SEARCHING}
    → MOVE_APPLIED → AWAITING_TURN_DECISION, with GAME_OVER absorbing.
    """

    NOT_STARTED = auto()
    AWAITING_TURN_DECISION = auto()
    AWAITING_HUMAN_SELECTION = auto()
    ENGINE_SEARCHING = auto()
    MOVE_APPLIED = auto()
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or engine)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, session: GameSession) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via the frontend).
        For the engine this dispatches a search, typically to a worker.
        """


class IGameController(ABC):
    """Interface for the turn orchestrator."""

    @abstractmethod
    def new_game(
        self, white: IPlayer, black: IPlayer, fen: str | None = None
    ) -> None:
        """Set up a new game, optionally from a FEN position."""

    @abstractmethod
    def select(self, square: Square) -> list[Square]:
        """Legal targets for the human's piece on *square*."""

    @abstractmethod
    def submit_move(self, source: Square, dest: Square) -> bool:
        """Submit a human move. Returns True if legal and applied."""

    @abstractmethod
    def apply_reply(self, result: SearchResult) -> bool:
        """Apply an engine search result. Returns True if a move was applied."""
