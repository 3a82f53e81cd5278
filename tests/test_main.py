"""Smoke tests for the command line driver."""
from __future__ import annotations

import asyncio
import sys

import pytest
from loguru import logger

from armada import BoardConfig, GameConfig, ShipConfig

import main


def test_parse_args_defaults_follow_game_config() -> None:
    args = main.parse_args(["--headless", "--enemies", "2"])
    config = main._build_config(args)
    assert args.headless
    assert config.board.initial_enemies == 2
    assert config.board.spawn_interval_ms == GameConfig().board.spawn_interval_ms
    assert config.ship.movement_interval_ms == GameConfig().ship.movement_interval_ms


def test_headless_autopilot_clears_the_board() -> None:
    config = GameConfig(
        board=BoardConfig(width=50, height=50, initial_enemies=3, spawn_interval_ms=10_000),
        ship=ShipConfig(movement_interval_ms=20),
    )
    game = asyncio.run(asyncio.wait_for(main.run_headless(config, kill_interval_ms=5, seed=11), timeout=5))
    assert game.is_won
    assert game.ship_count == 0
    assert not game.spawner.running


def test_headless_with_no_enemies_returns_at_once() -> None:
    config = GameConfig(board=BoardConfig(initial_enemies=0))
    game = asyncio.run(main.run_headless(config, kill_interval_ms=5, seed=None))
    assert game.is_won


def test_bad_cli_values_are_reported_as_usage_errors(capsys) -> None:
    try:
        with pytest.raises(SystemExit) as excinfo:
            main.main(["--headless", "--width", "-5"])
    finally:
        # main() swaps the loguru sinks; put back the default one.
        logger.remove()
        logger.add(sys.stderr)
    assert excinfo.value.code == 2
    assert "Board dimensions must be positive" in capsys.readouterr().err


def test_headless_runs_are_repeatable_with_a_seed() -> None:
    config = GameConfig(
        board=BoardConfig(width=50, height=50, initial_enemies=3, spawn_interval_ms=10_000),
        ship=ShipConfig(movement_interval_ms=1000),
    )
    first = asyncio.run(main.run_headless(config, kill_interval_ms=5, seed=4))
    second = asyncio.run(main.run_headless(config, kill_interval_ms=5, seed=4))
    assert first.is_won and second.is_won
    assert first.fleet.random.getstate() == second.fleet.random.getstate()
