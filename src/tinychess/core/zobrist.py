"""Zobrist hashing keys for repetition detection and the transposition table.

Keys come from a fixed-seed generator, so hashes are stable across runs.
"""

from __future__ import annotations

import random
from typing import Final

from tinychess.core.enums import CastlingRights
from tinychess.core.types import Square

_rng = random.Random(0x7C3E_91A5)

# Indexed by [value + 6][square]; the empty row (value 0) hashes to zero.
_PIECE_KEYS: Final = tuple(
    tuple(0 if value == 0 else _rng.getrandbits(64) for _ in range(64))
    for value in range(-6, 7)
)
_SIDE_KEY: Final = _rng.getrandbits(64)
_CASTLING_KEYS: Final = tuple(_rng.getrandbits(64) for _ in range(16))
_EN_PASSANT_KEYS: Final = tuple(_rng.getrandbits(64) for _ in range(64))

del _rng


def piece_key(value: int, sq: Square) -> int:
    """Key for a signed piece value on *sq* (0 for an empty cell)."""
    return _PIECE_KEYS[value + 6][sq]


def side_to_move_key() -> int:
    """Toggled whenever the turn passes."""
    return _SIDE_KEY


def castling_key(castling: CastlingRights) -> int:
    return _CASTLING_KEYS[int(castling) & 0xF]


def en_passant_key(ep_square: Square) -> int:
    return _EN_PASSANT_KEYS[ep_square]
