"""Tests for the pygame presenter's bookkeeping; nothing is drawn."""
from __future__ import annotations

import random

import pytest

pytest.importorskip("pygame")

from armada import BoardConfig, Game, GameConfig, Position
from armada.viewer import BoardView, ShipSprite


class FakeTicks:
    def __init__(self) -> None:
        self.now = 0

    def __call__(self) -> int:
        return self.now


def test_sprite_eases_towards_target() -> None:
    sprite = ShipSprite(1, Position(0, 0), now_ms=0)
    sprite.fly(Position(100, 50), now_ms=0, duration_ms=500)
    assert sprite.position_at(0) == (0, 0)
    assert sprite.position_at(250) == (50, 25)
    assert sprite.position_at(500) == (100, 50)
    assert sprite.position_at(9000) == (100, 50)


def test_interrupted_flight_starts_from_current_point() -> None:
    sprite = ShipSprite(1, Position(0, 0), now_ms=0)
    sprite.fly(Position(100, 0), now_ms=0, duration_ms=1000)
    sprite.fly(Position(0, 0), now_ms=500, duration_ms=1000)
    assert sprite.start == (50, 0)
    assert sprite.position_at(1000) == (25, 0)


def test_click_eliminates_the_ship_under_the_cursor(listener, clock) -> None:
    ticks = FakeTicks()
    config = GameConfig(board=BoardConfig(width=200, height=200, initial_enemies=2), move_on_start=False)
    view = BoardView(config.board, clock=ticks)
    game = Game(config, listeners=[view, listener], loop=clock, rng=random.Random(1))
    view.attach(game.eliminate)
    assert set(view.sprites) == {1, 2}

    first, second = game.ships()
    first.relocate(150, 150)
    ticks.now = 10_000

    assert view.click((5, 190)) is False
    assert view.click((150, 150)) is True
    assert first not in game.fleet
    assert set(view.sprites) == {second.id}

    assert view.click((0, 0)) is True
    assert game.is_won
    assert view.won
    assert view.sprites == {}


def test_click_without_attached_game_does_nothing() -> None:
    view = BoardView(BoardConfig(), clock=FakeTicks())
    view.sprites[1] = ShipSprite(1, Position(10, 10), now_ms=0)
    assert view.click((10, 10)) is False
    assert 1 in view.sprites
