"""Configuration objects for a game session.

Every recognised option is enumerated here with its type and default.
Client-style nested options are merged over the defaults by
:meth:`GameConfig.from_mapping`, and the result is validated before anything
is created.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from .entities import Position
from .errors import InvalidConfig


@dataclass(frozen=True)
class BoardConfig:
    """Static description of the board.

    Attributes
    ----------
    width, height:
        Board dimensions in board units.  Ship positions always satisfy
        ``0 <= x < width`` and ``0 <= y < height`` after a relocation.
    initial_enemies:
        Number of ships seeded when the game starts.  Zero is accepted and
        produces a game that is won on construction.
    spawn_interval_ms:
        Delay between two periodic spawn ticks.
    """

    width: float = 500
    height: float = 500
    initial_enemies: int = 5
    spawn_interval_ms: int = 5000

    def validate(self) -> None:
        if not (_finite(self.width) and _finite(self.height)):
            raise InvalidConfig("Board dimensions must be finite")
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfig("Board dimensions must be positive")
        if self.initial_enemies < 0:
            raise InvalidConfig("initial_enemies cannot be negative")
        if not _finite(self.spawn_interval_ms) or self.spawn_interval_ms <= 0:
            raise InvalidConfig("spawn_interval_ms must be positive")


@dataclass(frozen=True)
class ShipConfig:
    """Defaults applied to every spawned ship.

    Attributes
    ----------
    movement_interval_ms:
        Delay between two relocation ticks of the whole fleet.
    default_position:
        Where a freshly spawned ship appears before its first relocation.
    default_speed:
        Duration in milliseconds of a single relocation transition.  The core
        only forwards it to listeners as an animation hint.
    """

    movement_interval_ms: int = 1000
    default_position: Position = field(default_factory=lambda: Position(0.0, 0.0))
    default_speed: float = 500

    def validate(self) -> None:
        if not _finite(self.movement_interval_ms) or self.movement_interval_ms <= 0:
            raise InvalidConfig("movement_interval_ms must be positive")
        if not _finite(self.default_speed) or self.default_speed <= 0:
            raise InvalidConfig("default_speed must be a positive finite number")
        position = self.default_position
        if not (_finite(position.x) and _finite(position.y)):
            raise InvalidConfig("default_position must be finite")


@dataclass(frozen=True)
class GameConfig:
    """Complete configuration of a game session."""

    board: BoardConfig = field(default_factory=BoardConfig)
    ship: ShipConfig = field(default_factory=ShipConfig)
    stop_movement_on_win: bool = True
    move_on_start: bool = True

    def validate(self) -> None:
        self.board.validate()
        self.ship.validate()
        position = self.ship.default_position
        if not (0 <= position.x < self.board.width and 0 <= position.y < self.board.height):
            raise InvalidConfig(f"default_position {position} lies outside the board")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None = None) -> "GameConfig":
        """Build a validated config from nested options.

        Accepts the camelCase option names used by clients, e.g.::

            {"board": {"dimensions": {"width": 100, "height": 100},
                       "initialEnemies": 3, "spawnIntervalMs": 5000},
             "ship": {"movementIntervalMs": 1000,
                      "defaultPosition": {"x": 0, "y": 0},
                      "defaultSpeed": 500}}
        """

        data = dict(data or {})
        board_data = _section(data.pop("board", None), "board")
        ship_data = _section(data.pop("ship", None), "ship")
        stop_movement_on_win = _flag(data.pop("stopMovementOnWin", True), "stopMovementOnWin")
        move_on_start = _flag(data.pop("moveOnStart", True), "moveOnStart")
        if data:
            raise InvalidConfig(f"Unknown options: {', '.join(sorted(data))}")

        defaults = BoardConfig()
        dimensions = _section(board_data.pop("dimensions", None), "board.dimensions")
        board = BoardConfig(
            width=_number(dimensions.pop("width", defaults.width), "board.dimensions.width"),
            height=_number(dimensions.pop("height", defaults.height), "board.dimensions.height"),
            initial_enemies=_integer(
                board_data.pop("initialEnemies", defaults.initial_enemies), "board.initialEnemies"
            ),
            spawn_interval_ms=_integer(
                board_data.pop("spawnIntervalMs", defaults.spawn_interval_ms), "board.spawnIntervalMs"
            ),
        )
        _reject_leftovers(dimensions, "board.dimensions")
        _reject_leftovers(board_data, "board")

        ship_defaults = ShipConfig()
        position_data = ship_data.pop("defaultPosition", None)
        if position_data is None:
            position = ship_defaults.default_position
        else:
            position_data = _section(position_data, "ship.defaultPosition")
            position = Position(
                _number(position_data.pop("x", 0.0), "ship.defaultPosition.x"),
                _number(position_data.pop("y", 0.0), "ship.defaultPosition.y"),
            )
            _reject_leftovers(position_data, "ship.defaultPosition")
        ship = ShipConfig(
            movement_interval_ms=_integer(
                ship_data.pop("movementIntervalMs", ship_defaults.movement_interval_ms),
                "ship.movementIntervalMs",
            ),
            default_position=position,
            default_speed=_number(ship_data.pop("defaultSpeed", ship_defaults.default_speed), "ship.defaultSpeed"),
        )
        _reject_leftovers(ship_data, "ship")

        config = cls(board=board, ship=ship, stop_movement_on_win=stop_movement_on_win, move_on_start=move_on_start)
        config.validate()
        return config


def _finite(value: Any) -> bool:
    # NaN fails every comparison, so plain range checks let it through.
    return math.isfinite(value)


def _section(value: Any, name: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidConfig(f"{name} must be a mapping")
    return dict(value)


def _reject_leftovers(data: Mapping[str, Any], name: str) -> None:
    if data:
        raise InvalidConfig(f"Unknown options in {name}: {', '.join(sorted(data))}")


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfig(f"{name} must be a number, got {value!r}")
    return value


def _integer(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfig(f"{name} must be an integer, got {value!r}")
    return value


def _flag(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise InvalidConfig(f"{name} must be a boolean, got {value!r}")
    return value
