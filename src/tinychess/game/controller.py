"""GameController — turn orchestration for one game.

Coordinates: Players, GameSession, Rules and the engine reply.
Emits events via simple callbacks so a frontend / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from tinychess import api
from tinychess.core.enums import Color, PieceType, SearchState
from tinychess.core.errors import InvalidMove, InvalidSquare
from tinychess.core.executor import apply_move, resolve_move
from tinychess.core.move import MoveRecord
from tinychess.core.rules import Rules
from tinychess.core.types import Square
from tinychess.engine.search import SearchResult
from tinychess.game.interfaces import GamePhase, IGameController, IPlayer
from tinychess.game.session import GameSession

_LOGGER = logging.getLogger(__name__)

INVALID_MOVE_MESSAGE = "invalid move, ignored."
CHECKMATE_MESSAGE = "Checkmate, game terminated!"
DRAW_MESSAGE = "Draw, game terminated!"

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord], None]
GameOverCallback = Callable[[SearchState, "Color | None"], None]  # state, winner
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Drives the turn FSM: prompts players, validates and applies moves,
    detects the end of the game and keeps a status message for display.

    Thread-safety: methods are meant to be called from one thread (the
    frontend's).  Worker replies are handed back through :meth:`apply_reply`
    on that thread; every position access goes through the session lock.
    """

    __slots__ = ("_session", "_players", "_phase", "_message", "events")

    def __init__(self, session: GameSession | None = None) -> None:
        self._session = session if session is not None else GameSession()
        self._players: dict[Color, IPlayer] = {}
        self._phase = GamePhase.NOT_STARTED
        self._message = ""
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def message(self) -> str:
        """Latest status line for the frontend."""
        return self._message

    @property
    def is_game_over(self) -> bool:
        return self._phase == GamePhase.GAME_OVER

    @property
    def side_to_move(self) -> Color:
        return Color(self._session.move_counter() % 2)

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        fen: str | None = None,
    ) -> None:
        if white.color != Color.WHITE or black.color != Color.BLACK:
            raise ValueError("Players must be given as (white, black)")
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._session.setup(fen)
        self._message = ""
        self._decide_turn()

    def select(self, square: Square) -> list[Square]:
        if self._phase != GamePhase.AWAITING_HUMAN_SELECTION:
            return []
        with self._session.locked() as game:
            return api.tag(game, square)

    def submit_move(
        self,
        source: Square,
        dest: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        if self._phase != GamePhase.AWAITING_HUMAN_SELECTION:
            return False

        try:
            with self._session.locked() as game:
                api.do_move(game, source, dest, promotion=promotion)
                record = game.history[-1]
        except (InvalidMove, InvalidSquare) as exc:
            _LOGGER.info("Ignoring human move: %s", exc)
            self._message = INVALID_MOVE_MESSAGE
            return False

        self._message = record.san
        self._after_move(record)
        return True

    def engine_move(self) -> bool:
        """Compute and apply the engine's reply synchronously."""
        if self._phase != GamePhase.ENGINE_SEARCHING:
            return False
        with self._session.locked() as game:
            result = api.reply(game)
        return self.apply_reply(result)

    def apply_reply(self, result: SearchResult) -> bool:
        if self._phase != GamePhase.ENGINE_SEARCHING:
            _LOGGER.debug("Dropping engine reply outside ENGINE_SEARCHING")
            return False

        if result.state.is_terminal or result.best_move is None:
            self._finish(result.state)
            return False

        with self._session.locked() as game:
            move = resolve_move(
                game, result.src, result.dst, result.best_move.promotion
            )
            record = apply_move(game, move)

        self._message = record.san
        if result.is_mate_line:
            # The reply itself is one of the counted plies.
            self._message += f" Checkmate in {result.checkmate_in // 2}"
        self._after_move(record)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _after_move(self, record: MoveRecord) -> None:
        _LOGGER.debug("Applied %s", record.san)
        self._set_phase(GamePhase.MOVE_APPLIED)
        self._emit_move(record)
        self._decide_turn()

    def _decide_turn(self) -> None:
        """End the game on a terminal position, otherwise prompt the mover."""
        self._set_phase(GamePhase.AWAITING_TURN_DECISION)
        with self._session.locked() as game:
            state = Rules.game_state(game)
        if state.is_terminal:
            self._finish(state)
            return
        self._prompt_current_player()

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._set_phase(GamePhase.AWAITING_HUMAN_SELECTION)
        else:
            self._set_phase(GamePhase.ENGINE_SEARCHING)
            cp.request_move(self._session)

    def _finish(self, state: SearchState) -> None:
        with self._session.locked() as game:
            winner = Rules.winner(game)
        if state == SearchState.CHECKMATE:
            self._message = CHECKMATE_MESSAGE
        else:
            self._message = DRAW_MESSAGE
        _LOGGER.info("Game over: %s (winner: %s)", state.name, winner)
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(state, winner)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
