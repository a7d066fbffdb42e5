"""Shared engine search models, score convention and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from tinychess.core.enums import Color, SearchState

if TYPE_CHECKING:
    from tinychess.core.move import Move
    from tinychess.core.position import Position

# Sentinel magnitude for mate scores; no material/positional score reaches
# KING_VALUE_DIV_2.
KING_VALUE = 100_000
KING_VALUE_DIV_2 = KING_VALUE // 2


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 64
    time_limit_ms: int | None = 1500

    @classmethod
    def from_seconds(cls, secs: float, max_depth: int = 64) -> SearchLimits:
        return cls(max_depth=max_depth, time_limit_ms=max(1, int(secs * 1000)))


@dataclass(slots=True, frozen=True)
class Evaluation:
    """Tagged evaluation: ordinary centipawns, or a forced mate in N plies.

    ``winner`` is the side delivering mate.
    """

    cp: int = 0
    mate_plies: int | None = None
    winner: Color | None = None

    @classmethod
    def centipawns(cls, value: int) -> Evaluation:
        return cls(cp=value)

    @classmethod
    def mate(cls, plies: int, winner: Color) -> Evaluation:
        if plies < 0:
            raise ValueError(f"Mate distance must be >= 0, got {plies}")
        return cls(mate_plies=plies, winner=winner)

    @classmethod
    def from_score(cls, score: int, perspective: Color) -> Evaluation:
        """Decode a sentinel score taken from *perspective*'s point of view."""
        if abs(score) > KING_VALUE_DIV_2:
            winner = perspective if score > 0 else perspective.opposite
            return cls.mate(KING_VALUE - abs(score), winner)
        return cls.centipawns(score)

    @property
    def is_mate(self) -> bool:
        return self.mate_plies is not None

    @property
    def mate_in_moves(self) -> int | None:
        """Full moves of the mating side until mate (mate in 1 = 1 ply)."""
        if self.mate_plies is None:
            return None
        return (self.mate_plies + 1) // 2

    def to_score(self, perspective: Color) -> int:
        """Encode back to a sentinel score from *perspective*'s point of view."""
        if self.mate_plies is None:
            return self.cp
        magnitude = KING_VALUE - self.mate_plies
        return magnitude if self.winner == perspective else -magnitude


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result of ``reply``: the chosen move and what the search learned.

    ``score`` is from the point of view of the side to move at the root.
    When ``state`` is terminal (checkmate / drawn) there is no move and
    ``src``/``dst`` are ``-1``.
    """

    best_move: Move | None
    score: int
    checkmate_in: int
    state: SearchState
    side: Color
    depth: int = 0
    nodes: int = 0

    @property
    def src(self) -> int:
        return self.best_move.from_sq if self.best_move is not None else -1

    @property
    def dst(self) -> int:
        return self.best_move.to_sq if self.best_move is not None else -1

    @property
    def evaluation(self) -> Evaluation:
        return Evaluation.from_score(self.score, self.side)

    @property
    def is_mate_line(self) -> bool:
        return abs(self.score) > KING_VALUE_DIV_2


Reply = SearchResult


class IEngine(Protocol):
    """Protocol for chess engines used by the game layer."""

    def search(self, position: Position, limits: SearchLimits) -> SearchResult: ...
