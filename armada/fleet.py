"""The fleet: the owned collection of live ships and their movement process."""

from __future__ import annotations

import itertools
import math
import random
from typing import Callable, Dict, Iterator, List, Optional, Union

from loguru import logger

from .entities import Position, Ship
from .events import GameListener
from .scheduler import Clock, PeriodicTask


class Fleet:
    """Insertion-ordered set of live ships.

    The fleet is the only component that mutates its ship mapping; spawners
    and eliminate actions go through :meth:`add` and :meth:`remove`.  Its
    size is the game's win signal.
    """

    def __init__(
        self,
        listener: Optional[GameListener] = None,
        *,
        rng: Optional[random.Random] = None,
        loop: Optional[Clock] = None,
    ) -> None:
        self.listener = listener if listener is not None else GameListener()
        # Owner hook, run after the listener even when the listener raises.
        self.on_removed: Optional[Callable[[], None]] = None
        self.random = rng or random.Random()
        self.board_width: float = 0.0
        self.board_height: float = 0.0
        self._ships: Dict[int, Ship] = {}
        self._ids = itertools.count(1)
        self._loop = loop
        self._movement: Optional[PeriodicTask] = None

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------
    def add(self, ship: Ship) -> Ship:
        if ship.id is not None:
            raise ValueError(f"Ship {ship.id} already belongs to a fleet")
        ship.id = next(self._ids)
        ship.on_move = self._ship_moved
        self._ships[ship.id] = ship
        logger.debug("Ship {} joined the fleet at {}", ship.id, ship.position)
        self.listener.on_entity_added(ship)
        return ship

    def remove(self, ship: Union[Ship, int]) -> bool:
        """Remove a ship by identity; absent ships are ignored."""

        ship_id = ship.id if isinstance(ship, Ship) else ship
        removed = self._ships.pop(ship_id, None) if ship_id is not None else None
        if removed is None:
            return False
        removed.on_move = None
        logger.debug("Ship {} eliminated, {} left", ship_id, len(self._ships))
        try:
            self.listener.on_entity_removed()
        finally:
            if self.on_removed is not None:
                self.on_removed()
        return True

    def get(self, ship_id: int) -> Optional[Ship]:
        return self._ships.get(ship_id)

    def size(self) -> int:
        return len(self._ships)

    def __len__(self) -> int:
        return len(self._ships)

    def __contains__(self, ship: object) -> bool:
        if isinstance(ship, Ship):
            return self._ships.get(ship.id) is ship
        return ship in self._ships

    def __iter__(self) -> Iterator[Ship]:
        return iter(list(self._ships.values()))

    def ships(self) -> List[Ship]:
        return list(self._ships.values())

    # ------------------------------------------------------------------
    # Movement process
    # ------------------------------------------------------------------
    @property
    def movement_running(self) -> bool:
        return self._movement is not None and self._movement.running

    def start_movement_process(self, interval_ms: float, board_width: float, board_height: float) -> None:
        if board_width <= 0 or board_height <= 0:
            raise ValueError("Board dimensions must be positive")
        self.stop_movement_process()
        self.board_width = board_width
        self.board_height = board_height
        self._movement = PeriodicTask(self.move_members, interval_ms, name="movement", loop=self._loop)
        self._movement.start()

    def stop_movement_process(self) -> None:
        if self._movement is not None:
            self._movement.stop()

    def move_members(self) -> None:
        """Send every ship present at the start of the tick to a random point."""

        for ship in list(self._ships.values()):
            if ship.id not in self._ships:
                continue
            ship.relocate(self._coordinate(self.board_width), self._coordinate(self.board_height))

    def _coordinate(self, limit: float) -> float:
        # random() * limit can round up to limit itself for some floats.
        return min(self.random.random() * limit, math.nextafter(limit, 0.0))

    def _ship_moved(self, ship: Ship, position: Position) -> None:
        self.listener.on_entity_position_changed(ship, position, ship.speed)


__all__ = ["Fleet"]
