"""Game controller: seeds the board, runs the timers and detects the win."""

from __future__ import annotations

import asyncio
import random
from enum import Enum
from typing import Iterable, List, Optional

from loguru import logger

from .config import GameConfig
from .entities import Ship
from .events import EventHub, GameListener
from .fleet import Fleet
from .scheduler import Clock
from .spawner import Spawner


class GameState(Enum):
    RUNNING = "running"
    WON = "won"


class Game:
    """Encapsulates one game session from seeding to the win.

    Construction starts the session: the initial ships are seeded, then the
    spawn and movement timers are armed.  Unless ``loop`` is given the timers
    use the running asyncio loop, so a game must be created from inside one;
    without a loop construction fails before any listener hears about it.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        listeners: Iterable[GameListener] = (),
        *,
        loop: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.config.validate()
        if loop is None:
            loop = asyncio.get_running_loop()
        self.state = GameState.RUNNING
        self.events = EventHub(listeners)
        self.fleet = Fleet(self.events, rng=rng, loop=loop)
        self.fleet.on_removed = self.check_score
        self.spawner = Spawner(self.fleet, self.config.ship, loop=loop)
        self._won: Optional[asyncio.Event] = None

        board = self.config.board
        logger.info(
            "Starting game on a {}x{} board with {} ships", board.width, board.height, board.initial_enemies
        )
        self.spawner.spawn_now(board.initial_enemies)
        if not self.fleet:
            # Nothing to eliminate: the board starts cleared.
            self._win()
            return
        self.spawner.start(board.spawn_interval_ms)
        self.fleet.start_movement_process(self.config.ship.movement_interval_ms, board.width, board.height)
        if self.config.move_on_start:
            self.fleet.move_members()

    # ------------------------------------------------------------------
    # Inbound actions
    # ------------------------------------------------------------------
    def eliminate(self, ship_id: int) -> bool:
        """Remove a ship; eliminating an absent ship does nothing."""

        return self.fleet.remove(ship_id)

    def subscribe(self, listener: GameListener) -> None:
        self.events.subscribe(listener)

    def unsubscribe(self, listener: GameListener) -> None:
        self.events.unsubscribe(listener)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def is_won(self) -> bool:
        return self.state is GameState.WON

    @property
    def ship_count(self) -> int:
        return len(self.fleet)

    def ships(self) -> List[Ship]:
        return self.fleet.ships()

    def check_score(self) -> None:
        if self.state is GameState.RUNNING and len(self.fleet) == 0:
            self._win()

    def _win(self) -> None:
        self.state = GameState.WON
        self.spawner.stop()
        if self.config.stop_movement_on_win:
            self.fleet.stop_movement_process()
        logger.info("Board cleared, game won")
        if self._won is not None:
            self._won.set()
        self.events.on_win()

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------
    def stop(self) -> None:
        """Cancel both timers without winning."""

        self.spawner.stop()
        self.fleet.stop_movement_process()

    async def wait_until_won(self) -> None:
        if self.is_won:
            return
        if self._won is None:
            self._won = asyncio.Event()
        await self._won.wait()


__all__ = ["Game", "GameState"]
