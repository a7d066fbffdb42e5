"""Concrete player implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from tinychess.core.enums import Color
from tinychess.game.interfaces import IPlayer

if TYPE_CHECKING:
    from tinychess.game.session import GameSession


class HumanPlayer(IPlayer):
    """A human participant — moves come from the frontend.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, session: GameSession) -> None:
        pass  # Human moves arrive via controller.submit_move()


class EnginePlayer(IPlayer):
    """An engine participant that delegates the search to a callback.

    In an interactive frontend the callback dispatches the request to an
    ``EngineWorker`` running in a ``QThread``; the result comes back through
    ``GameController.apply_reply``.  Without a callback the frontend drives
    the search itself via ``GameController.engine_move``.

    Args:
        color: Side the engine plays.
        name: Display name.
        on_request_move: ``(GameSession) -> None`` — called when the
            controller asks the engine to start thinking.
    """

    __slots__ = ("_color", "_name", "_on_request_move")

    def __init__(
        self,
        color: Color,
        name: str = "Engine",
        on_request_move: Callable[[GameSession], None] | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._on_request_move = on_request_move

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, session: GameSession) -> None:
        if self._on_request_move is not None:
            self._on_request_move(session)
