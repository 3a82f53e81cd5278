"""Shared fixtures: a hand-cranked clock and a listener that records events."""

from __future__ import annotations

import heapq
import itertools
import random
import sys
from pathlib import Path
from typing import Any, Callable, List, Tuple

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from armada import GameListener, Position, Ship


class ManualHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock:
    """Stands in for the asyncio loop; time only moves on ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, ManualHandle, Callable[..., Any], tuple]] = []
        self._order = itertools.count()

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ManualHandle:
        handle = ManualHandle()
        heapq.heappush(self._queue, (self.now + delay, next(self._order), handle, callback, args))
        return handle

    def advance(self, ms: float) -> None:
        deadline = self.now + ms / 1000.0
        while self._queue and self._queue[0][0] <= deadline + 1e-9:
            when, _, handle, callback, args = heapq.heappop(self._queue)
            self.now = when
            if not handle.cancelled:
                callback(*args)
        self.now = deadline

    @property
    def pending(self) -> int:
        return sum(1 for entry in self._queue if not entry[2].cancelled)


class RecordingListener(GameListener):
    def __init__(self) -> None:
        self.events: List[Tuple[str, Any]] = []

    def on_entity_added(self, ship: Ship) -> None:
        self.events.append(("added", ship))

    def on_entity_position_changed(self, ship: Ship, position: Position, transition_ms: float) -> None:
        self.events.append(("moved", (ship, position, transition_ms)))

    def on_entity_removed(self) -> None:
        self.events.append(("removed", None))

    def on_win(self) -> None:
        self.events.append(("win", None))

    def of(self, kind: str) -> List[Any]:
        return [payload for name, payload in self.events if name == kind]


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(42)
