"""Entry point: play in a pygame window or watch a headless autopilot."""

from __future__ import annotations

import argparse
import asyncio
import random
import sys
from typing import List, Optional

from loguru import logger

from armada import (
    BoardConfig,
    Game,
    GameConfig,
    GameListener,
    InvalidConfig,
    PeriodicTask,
    Position,
    Ship,
    ShipConfig,
)


class TranscriptListener(GameListener):
    """Logs every notification a game raises."""

    def on_entity_added(self, ship: Ship) -> None:
        logger.info("[Spawn] ship {} appeared at ({:.0f}, {:.0f})", ship.id, ship.position.x, ship.position.y)

    def on_entity_position_changed(self, ship: Ship, position: Position, transition_ms: float) -> None:
        logger.debug("[Move] ship {} -> ({:.0f}, {:.0f}) in {}ms", ship.id, position.x, position.y, transition_ms)

    def on_entity_removed(self) -> None:
        logger.info("[Kill] a ship went down")

    def on_win(self) -> None:
        logger.success("[Win] the board is clear")


class Autopilot:
    """Eliminates a random ship on a fixed cadence."""

    def __init__(self, game: Game, interval_ms: float, rng: random.Random) -> None:
        self.game = game
        self.random = rng
        self.kills = 0
        self.task = PeriodicTask(self.fire, interval_ms, name="autopilot")

    def fire(self) -> None:
        ships = self.game.ships()
        if not ships:
            return
        target = self.random.choice(ships)
        if self.game.eliminate(target.id):
            self.kills += 1


def _build_config(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        board=BoardConfig(
            width=args.width,
            height=args.height,
            initial_enemies=args.enemies,
            spawn_interval_ms=args.spawn_interval,
        ),
        ship=ShipConfig(movement_interval_ms=args.movement_interval),
    )


async def run_headless(config: GameConfig, kill_interval_ms: float, seed: Optional[int]) -> Game:
    rng = random.Random(seed)
    # The game gets its own stream, derived from the autopilot seed.
    game = Game(config, listeners=[TranscriptListener()], rng=random.Random(rng.getrandbits(64)))
    autopilot = Autopilot(game, kill_interval_ms, rng)
    if not game.is_won:
        autopilot.task.start()
    try:
        await game.wait_until_won()
    finally:
        autopilot.task.stop()
        game.stop()
    logger.info("[Debrief] {} ships eliminated", autopilot.kills)
    return game


async def run_window(config: GameConfig, seed: Optional[int]) -> Game:
    from armada.viewer import BoardView

    view = BoardView(config.board)
    view.open()
    game = Game(config, listeners=[view, TranscriptListener()], rng=random.Random(seed))
    view.attach(game.eliminate)
    try:
        await view.run()
    finally:
        game.stop()
    return game


def build_parser() -> argparse.ArgumentParser:
    defaults = GameConfig()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--headless", action="store_true", help="let the autopilot play without a window")
    parser.add_argument("--enemies", type=int, default=defaults.board.initial_enemies)
    parser.add_argument("--width", type=float, default=defaults.board.width)
    parser.add_argument("--height", type=float, default=defaults.board.height)
    parser.add_argument("--spawn-interval", type=int, default=defaults.board.spawn_interval_ms, metavar="MS")
    parser.add_argument("--movement-interval", type=int, default=defaults.ship.movement_interval_ms, metavar="MS")
    parser.add_argument("--kill-interval", type=int, default=700, metavar="MS")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="INFO")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())
    config = _build_config(args)
    try:
        config.validate()
    except InvalidConfig as exc:
        parser.error(str(exc))
    if args.headless:
        asyncio.run(run_headless(config, args.kill_interval, args.seed))
    else:
        asyncio.run(run_window(config, args.seed))


if __name__ == "__main__":
    main()
