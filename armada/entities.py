"""Domain entities used by the armada simulation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from .errors import InvalidConfig


@dataclass(frozen=True, slots=True)
class Position:
    """Board-relative coordinates of a ship."""

    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


MoveHook = Callable[["Ship", Position], None]


@dataclass(slots=True, eq=False)
class Ship:
    """A mobile enemy that the player has to eliminate.

    ``id`` stays ``None`` until the ship joins a :class:`~armada.fleet.Fleet`.
    ``speed`` is the duration in milliseconds of one relocation transition.
    """

    position: Position
    speed: float
    id: Optional[int] = None
    on_move: Optional[MoveHook] = field(default=None, repr=False)

    @classmethod
    def create(cls, position: Position, speed: float) -> "Ship":
        if speed <= 0:
            raise InvalidConfig(f"Ship speed must be positive, got {speed!r}")
        return cls(position=position, speed=speed)

    def relocate(self, x: float, y: float) -> None:
        """Move to ``(x, y)``; bounds are the caller's responsibility."""

        self.position = Position(x, y)
        if self.on_move is not None:
            self.on_move(self, self.position)

    def serialise(self) -> Dict[str, object]:
        return {"id": self.id, "x": self.position.x, "y": self.position.y, "speed": self.speed}
