"""Core package for the armada arcade game.

Ships spawn on a board at fixed intervals, wander to random points, and the
game is won once the player has eliminated every one of them.  The package
holds the simulation core only; presenters plug in through
:class:`GameListener` and can be unit tested without any graphical
dependencies.
"""

from .config import BoardConfig, GameConfig, ShipConfig
from .entities import Position, Ship
from .errors import InvalidConfig
from .events import EventHub, GameListener
from .fleet import Fleet
from .game import Game, GameState
from .scheduler import PeriodicTask
from .spawner import Spawner

__all__ = [
    "BoardConfig",
    "EventHub",
    "Fleet",
    "Game",
    "GameConfig",
    "GameListener",
    "GameState",
    "InvalidConfig",
    "PeriodicTask",
    "Position",
    "Ship",
    "ShipConfig",
    "Spawner",
]
