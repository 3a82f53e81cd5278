"""Notification interface between the simulation core and its presenters."""

from __future__ import annotations

import contextlib
from typing import Iterable, List

from .entities import Position, Ship


class GameListener:
    """Receives every notification raised by a game.

    All methods are no-ops so presenters only override what they render.
    Notifications are delivered synchronously, in the same tick as the
    mutation that caused them.
    """

    def on_entity_added(self, ship: Ship) -> None:
        pass

    def on_entity_position_changed(self, ship: Ship, position: Position, transition_ms: float) -> None:
        pass

    def on_entity_removed(self) -> None:
        pass

    def on_win(self) -> None:
        pass


class EventHub(GameListener):
    """Fans every notification out to the subscribed listeners in order."""

    def __init__(self, listeners: Iterable[GameListener] = ()) -> None:
        self._listeners: List[GameListener] = []
        for listener in listeners:
            self.subscribe(listener)

    def subscribe(self, listener: GameListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: GameListener) -> None:
        with contextlib.suppress(ValueError):
            self._listeners.remove(listener)

    def __len__(self) -> int:
        return len(self._listeners)

    def on_entity_added(self, ship: Ship) -> None:
        for listener in list(self._listeners):
            listener.on_entity_added(ship)

    def on_entity_position_changed(self, ship: Ship, position: Position, transition_ms: float) -> None:
        for listener in list(self._listeners):
            listener.on_entity_position_changed(ship, position, transition_ms)

    def on_entity_removed(self) -> None:
        for listener in list(self._listeners):
            listener.on_entity_removed()

    def on_win(self) -> None:
        for listener in list(self._listeners):
            listener.on_win()


__all__ = ["EventHub", "GameListener"]
