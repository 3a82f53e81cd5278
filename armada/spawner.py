"""Spawner: seeds the fleet and keeps adding ships on a timer."""

from __future__ import annotations

from typing import List, Optional

from loguru import logger

from .config import ShipConfig
from .entities import Ship
from .fleet import Fleet
from .scheduler import Clock, PeriodicTask


class Spawner:
    """
    Creates ships with the configured defaults and hands them to a fleet.

    Notes
    - ``spawn_now`` is synchronous: every ship is added, and every add
      notification delivered, before any timer tick can run.
    - The periodic task is owned here and cancelled by ``stop``.
    """

    def __init__(self, fleet: Fleet, ship_config: Optional[ShipConfig] = None, *, loop: Optional[Clock] = None) -> None:
        self.fleet = fleet
        self.ship_config = ship_config or ShipConfig()
        self.quantity_per_tick = 1
        self._loop = loop
        self._task: Optional[PeriodicTask] = None

    @property
    def running(self) -> bool:
        return self._task is not None and self._task.running

    def spawn_now(self, quantity: int = 1) -> List[Ship]:
        """
        Create ``quantity`` ships immediately.

        Parameters
        ----------
        quantity : int
            Number of ships to add; zero is a no-op.

        Returns
        -------
        list[Ship]
            The new ships, in the order they joined the fleet.
        """
        if quantity < 0:
            raise ValueError("quantity cannot be negative")
        spawned = []
        for _ in range(quantity):
            ship = Ship.create(self.ship_config.default_position, self.ship_config.default_speed)
            spawned.append(self.fleet.add(ship))
        if spawned:
            logger.debug("Spawned {} ship(s), fleet size {}", len(spawned), len(self.fleet))
        return spawned

    def start(self, interval_ms: float, quantity_per_tick: int = 1) -> None:
        """
        Spawn ``quantity_per_tick`` ships every ``interval_ms``.

        Restarts the timer when already running.
        """
        if quantity_per_tick < 1:
            raise ValueError("quantity_per_tick must be at least 1")
        self.stop()
        self.quantity_per_tick = quantity_per_tick
        self._task = PeriodicTask(self._tick, interval_ms, name="spawner", loop=self._loop)
        self._task.start()

    def stop(self) -> None:
        if self._task is not None:
            self._task.stop()

    def _tick(self) -> None:
        self.spawn_now(self.quantity_per_tick)


__all__ = ["Spawner"]
