"""Move value object (coordinate representation)."""

from __future__ import annotations

from dataclasses import dataclass

from tinychess.core.enums import MoveFlag, PieceType
from tinychess.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move."""

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def is_capture(self) -> bool:
        """Whether the move removes an enemy piece (promotions checked by caller)."""
        return self.flag in (MoveFlag.CAPTURE, MoveFlag.EN_PASSANT)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the applied-move history."""

    move: Move
    san: str
    piece: int
    captured: int = 0

    @property
    def flag(self) -> MoveFlag:
        return self.move.flag
