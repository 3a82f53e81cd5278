from __future__ import annotations

import pytest

from armada import InvalidConfig, Position, Ship


def test_create_keeps_attributes_and_has_no_id() -> None:
    ship = Ship.create(Position(3, 4), speed=250)
    assert ship.position == Position(3, 4)
    assert ship.speed == 250
    assert ship.id is None


@pytest.mark.parametrize("speed", [0, -1, -0.5])
def test_create_rejects_non_positive_speed(speed: float) -> None:
    with pytest.raises(InvalidConfig):
        Ship.create(Position(0, 0), speed=speed)


def test_relocate_updates_position_and_calls_hook() -> None:
    seen = []
    ship = Ship.create(Position(0, 0), speed=500)
    ship.on_move = lambda moved, position: seen.append((moved, position))
    ship.relocate(12.5, 7.0)
    assert ship.position == Position(12.5, 7.0)
    assert seen == [(ship, Position(12.5, 7.0))]


def test_relocate_without_hook_does_not_check_bounds() -> None:
    ship = Ship.create(Position(0, 0), speed=500)
    ship.relocate(-50, 10_000)
    assert ship.position == Position(-50, 10_000)


def test_serialise_exposes_wire_friendly_fields() -> None:
    ship = Ship.create(Position(1, 2), speed=500)
    ship.id = 7
    assert ship.serialise() == {"id": 7, "x": 1, "y": 2, "speed": 500}
    assert ship.position.to_dict() == {"x": 1, "y": 2}
