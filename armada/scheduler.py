"""Explicitly owned repeating timers.

Each periodic process of a game (spawning, movement) holds its own
:class:`PeriodicTask`.  Ticks are ``call_later`` callbacks on a single event
loop, so two ticks never overlap and every tick runs to completion.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Protocol

from loguru import logger


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    """The part of :class:`asyncio.AbstractEventLoop` a task relies on."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class PeriodicTask:
    """Run ``callback`` every ``interval_ms`` until stopped."""

    def __init__(
        self,
        callback: Callable[[], None],
        interval_ms: float,
        *,
        name: str = "task",
        loop: Optional[Clock] = None,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.callback = callback
        self.interval_ms = interval_ms
        self.name = name
        self.ticks = 0
        self._loop = loop
        self._handle: Optional[TimerHandle] = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """Arm the first tick; calling it on a running task is a no-op."""

        if self._handle is not None:
            return
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._schedule()
        logger.debug("{} started, every {}ms", self.name, self.interval_ms)

    def stop(self) -> None:
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        logger.debug("{} stopped after {} ticks", self.name, self.ticks)

    def _schedule(self) -> None:
        assert self._loop is not None
        self._handle = self._loop.call_later(self.interval_ms / 1000.0, self._fire)

    def _fire(self) -> None:
        # The next tick is armed first so a callback can cancel it.
        self._schedule()
        self.ticks += 1
        try:
            self.callback()
        except Exception:
            logger.exception("{} tick {} failed", self.name, self.ticks)


__all__ = ["Clock", "PeriodicTask"]
