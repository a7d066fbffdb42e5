"""Position — complete game state (board + metadata) with make/unmake."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from tinychess.core import zobrist
from tinychess.core.board import Board
from tinychess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from tinychess.core.move import Move, MoveRecord
from tinychess.core.piece import EMPTY
from tinychess.core.types import Square, file_of, make_square, rank_of

DEFAULT_SECS_PER_MOVE = 1.5

# Castling flag -> (rook origin file, rook destination file).
_CASTLE_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}

# Rights lost when anything leaves or lands on these squares.
_RIGHTS_BY_SQUARE: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(4, 0): CastlingRights.WHITE_BOTH,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(4, 7): CastlingRights.BLACK_BOTH,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}


@dataclass(slots=True)
class _Undo:
    """Irreversible state saved before a move (or null move)."""

    castling: CastlingRights
    en_passant: Square | None
    ep_key: int
    halfmove_clock: int
    captured: int = EMPTY


def _capture_square(move: Move) -> Square:
    """Where the captured piece stands; differs from ``to_sq`` for en passant."""
    if move.flag == MoveFlag.EN_PASSANT:
        return make_square(file_of(move.to_sq), rank_of(move.from_sq))
    return move.to_sq


def _en_passant_hash(board: Board, ep_square: Square | None) -> int:
    """Key for the en-passant target, or 0 when no enemy pawn could take."""
    if ep_square is None:
        return 0
    # The capturer stands beside the pawn that just made the double step.
    if rank_of(ep_square) == 2:
        pawn_rank, capturer = 3, -int(PieceType.PAWN)
    else:
        pawn_rank, capturer = 4, int(PieceType.PAWN)
    file = file_of(ep_square)
    for f in (file - 1, file + 1):
        if 0 <= f < 8 and board[make_square(f, pawn_rank)] == capturer:
            return zobrist.en_passant_key(ep_square)
    return 0


def _rook_squares(move: Move) -> tuple[Square, Square]:
    src_file, dst_file = _CASTLE_ROOK_FILES[move.flag]
    rank = rank_of(move.from_sq)
    return make_square(src_file, rank), make_square(dst_file, rank)


class Position:
    """Full chess position: board + move counter + castling + en passant + clocks.

    The side to move is ``move_counter % 2`` (0 = white).  Supports
    :meth:`make_move` / :meth:`unmake_move` via an internal undo stack, and
    :meth:`probe` for scoped speculative moves.  ``history`` holds only the
    moves applied through the executor, never probing moves.

    The Zobrist key is maintained incrementally; ``_key_stack`` keeps the key
    after every ply so repetitions can be counted through ``_key_counts``.
    """

    __slots__ = (
        "board",
        "move_counter",
        "castling",
        "en_passant",
        "halfmove_clock",
        "secs_per_move",
        "history",
        "_hash",
        "_ep_key",
        "_undo",
        "_key_stack",
        "_key_counts",
    )

    def __init__(
        self,
        board: Board | None = None,
        move_counter: int = 0,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        secs_per_move: float = DEFAULT_SECS_PER_MOVE,
    ) -> None:
        if move_counter < 0:
            raise ValueError(f"move_counter must be >= 0, got {move_counter}")
        self.board = board if board is not None else Board.initial()
        self.move_counter = move_counter
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.secs_per_move = secs_per_move
        self.history: list[MoveRecord] = []
        self._undo: list[_Undo] = []
        self._rehash()

    @property
    def side_to_move(self) -> Color:
        return Color(self.move_counter % 2)

    @property
    def fullmove_number(self) -> int:
        return self.move_counter // 2 + 1

    @property
    def zobrist_hash(self) -> int:
        """Current Zobrist key for the full position."""
        return self._key_stack[-1]

    def repetition_count(self) -> int:
        """How many times the current position occurred in the game so far."""
        return self._key_counts.get(self._key_stack[-1], 0)

    # ── Make / unmake ────────────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Apply *move*, pushing undo state onto the undo stack.

        No legality check is performed here.
        """
        mover = self.board[move.from_sq]
        if mover == EMPTY:
            raise ValueError(f"No piece on {move.from_sq}")

        capture_sq = _capture_square(move)
        captured = self.board[capture_sq]
        self._undo.append(
            _Undo(
                self.castling,
                self.en_passant,
                self._ep_key,
                self.halfmove_clock,
                captured,
            )
        )

        self._lift(move.from_sq)
        if captured != EMPTY:
            self._lift(capture_sq)
        landed = mover
        if move.flag == MoveFlag.PROMOTION:
            landed = (move.promotion or PieceType.QUEEN) * (1 if mover > 0 else -1)
        self._place(move.to_sq, landed)

        if move.flag.is_castle:
            rook_from, rook_to = _rook_squares(move)
            rook = self._lift(rook_from)
            if abs(rook) != PieceType.ROOK:
                raise ValueError(f"No rook on {rook_from} to castle with")
            self._place(rook_to, rook)

        if move.flag == MoveFlag.DOUBLE_PAWN:
            self._set_en_passant((move.from_sq + move.to_sq) // 2)
        else:
            self._set_en_passant(None)

        lost = _RIGHTS_BY_SQUARE.get(move.from_sq, CastlingRights.NONE)
        lost |= _RIGHTS_BY_SQUARE.get(move.to_sq, CastlingRights.NONE)
        self._set_castling(self.castling & ~lost)

        if abs(mover) == PieceType.PAWN or captured != EMPTY:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        self._advance_turn()

    def unmake_move(self, move: Move) -> None:
        """Undo the last :meth:`make_move` (the same *move* must be passed)."""
        undo = self._undo.pop()
        self._retreat_turn()
        board = self.board

        moved = board[move.to_sq]
        if move.flag == MoveFlag.PROMOTION:
            moved = int(PieceType.PAWN) if moved > 0 else -int(PieceType.PAWN)
        board[move.to_sq] = EMPTY
        board[move.from_sq] = moved
        board[_capture_square(move)] = undo.captured

        if move.flag.is_castle:
            rook_from, rook_to = _rook_squares(move)
            board[rook_from], board[rook_to] = board[rook_to], EMPTY

        self._restore(undo)

    def make_null_move(self) -> None:
        """Hand the turn to the opponent without moving (search pruning only)."""
        self._undo.append(
            _Undo(self.castling, self.en_passant, self._ep_key, self.halfmove_clock)
        )
        self._set_en_passant(None)
        self.halfmove_clock += 1
        self._advance_turn()

    def unmake_null_move(self) -> None:
        undo = self._undo.pop()
        self._retreat_turn()
        self._restore(undo)

    @contextmanager
    def probe(self, move: Move) -> Iterator[Position]:
        """Temporarily apply *move*; the position is restored on every exit path."""
        self.make_move(move)
        try:
            yield self
        finally:
            self.unmake_move(move)

    @contextmanager
    def null_probe(self) -> Iterator[Position]:
        """Temporarily pass the turn; restored like :meth:`probe`."""
        self.make_null_move()
        try:
            yield self
        finally:
            self.unmake_null_move()

    # ── Incremental bookkeeping ──────────────────────────────────────────

    def _lift(self, sq: Square) -> int:
        piece = self.board[sq]
        self._hash ^= zobrist.piece_key(piece, sq)
        self.board[sq] = EMPTY
        return piece

    def _place(self, sq: Square, piece: int) -> None:
        self.board[sq] = piece
        self._hash ^= zobrist.piece_key(piece, sq)

    def _set_castling(self, castling: CastlingRights) -> None:
        if castling != self.castling:
            self._hash ^= zobrist.castling_key(self.castling)
            self._hash ^= zobrist.castling_key(castling)
            self.castling = castling

    def _set_en_passant(self, en_passant: Square | None) -> None:
        # Only a capturable target is part of the key.
        ep_key = _en_passant_hash(self.board, en_passant)
        self._hash ^= self._ep_key ^ ep_key
        self._ep_key = ep_key
        self.en_passant = en_passant

    def _restore(self, undo: _Undo) -> None:
        # The hash itself was already rewound from the key stack.
        self.castling = undo.castling
        self.en_passant = undo.en_passant
        self._ep_key = undo.ep_key
        self.halfmove_clock = undo.halfmove_clock

    def _advance_turn(self) -> None:
        self.move_counter += 1
        self._hash ^= zobrist.side_to_move_key()
        self._key_stack.append(self._hash)
        self._key_counts[self._hash] = self._key_counts.get(self._hash, 0) + 1

    def _retreat_turn(self) -> None:
        key = self._key_stack.pop()
        if self._key_counts[key] == 1:
            del self._key_counts[key]
        else:
            self._key_counts[key] -= 1
        self.move_counter -= 1
        self._hash = self._key_stack[-1]

    def _rehash(self) -> None:
        """Recompute the key from scratch and restart repetition tracking."""
        key = zobrist.castling_key(self.castling)
        if self.side_to_move == Color.BLACK:
            key ^= zobrist.side_to_move_key()
        self._ep_key = _en_passant_hash(self.board, self.en_passant)
        key ^= self._ep_key
        for sq, piece in enumerate(self.board):
            if piece != EMPTY:
                key ^= zobrist.piece_key(piece, sq)
        self._hash = key
        self._key_stack: list[int] = [key]
        self._key_counts: dict[int, int] = {key: 1}

    # ── Lifecycle ────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Reinitialise to the starting layout in place, keeping identity."""
        self.board.load(Board.initial())
        self.move_counter = 0
        self.castling = CastlingRights.ALL
        self.en_passant = None
        self.halfmove_clock = 0
        self.history.clear()
        self._undo.clear()
        self._rehash()

    def load(self, other: Position) -> None:
        """Take over *other*'s game state in place (``secs_per_move`` is kept)."""
        self.board.load(other.board)
        self.move_counter = other.move_counter
        self.castling = other.castling
        self.en_passant = other.en_passant
        self.halfmove_clock = other.halfmove_clock
        self.history = other.history.copy()
        self._undo.clear()
        self._copy_keys_from(other)

    def copy(self) -> Position:
        """Deep copy without the undo stack."""
        pos = Position(
            board=self.board.copy(),
            move_counter=self.move_counter,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            secs_per_move=self.secs_per_move,
        )
        pos.history = self.history.copy()
        pos._copy_keys_from(self)
        return pos

    def _copy_keys_from(self, other: Position) -> None:
        self._hash = other._hash
        self._ep_key = other._ep_key
        self._key_stack = other._key_stack.copy()
        self._key_counts = other._key_counts.copy()


# The public API calls a position a game: it carries the clock setting and
# the played-move history as well as the board.
Game = Position
