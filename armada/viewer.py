"""pygame presenter: draws the fleet, turns clicks into eliminations."""

from __future__ import annotations

import asyncio
from typing import Callable, Dict, Optional, Tuple

import pygame
from loguru import logger

from .config import BoardConfig
from .entities import Position, Ship
from .events import GameListener

FPS = 60
SHIP_RADIUS = 14
BACKGROUND = (12, 16, 32)
HULL_COLOR = (220, 70, 70)
COCKPIT_COLOR = (250, 220, 120)
TEXT_COLOR = (240, 240, 240)
WIN_MESSAGE = "You win <3!"


class ShipSprite:
    """Screen-side twin of a ship, easing towards the last reported position."""

    def __init__(self, ship_id: int, position: Position, now_ms: int) -> None:
        self.ship_id = ship_id
        self.start = (position.x, position.y)
        self.target = self.start
        self.started_at = now_ms
        self.duration_ms = 0.0

    def fly(self, position: Position, now_ms: int, duration_ms: float) -> None:
        # Like an interrupted animation: the new flight starts wherever the
        # sprite currently is, not where the previous flight was heading.
        self.start = self.position_at(now_ms)
        self.target = (position.x, position.y)
        self.started_at = now_ms
        self.duration_ms = duration_ms

    def position_at(self, now_ms: int) -> Tuple[float, float]:
        if self.duration_ms <= 0:
            return self.target
        progress = min(1.0, max(0.0, (now_ms - self.started_at) / self.duration_ms))
        sx, sy = self.start
        tx, ty = self.target
        return (sx + (tx - sx) * progress, sy + (ty - sy) * progress)

    def rect_at(self, now_ms: int) -> pygame.Rect:
        x, y = self.position_at(now_ms)
        return pygame.Rect(int(x) - SHIP_RADIUS, int(y) - SHIP_RADIUS, SHIP_RADIUS * 2, SHIP_RADIUS * 2)


class BoardView(GameListener):
    """Listens to a game and renders it in a pygame window.

    Create the view before the game so it receives the initial ships, then
    hand the game's ``eliminate`` to :meth:`attach`.
    """

    def __init__(self, board: BoardConfig, clock: Optional[Callable[[], int]] = None) -> None:
        self.board = board
        self.sprites: Dict[int, ShipSprite] = {}
        self.won = False
        self._clock = clock or pygame.time.get_ticks
        self._eliminate: Optional[Callable[[int], bool]] = None
        self._screen: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None

    def attach(self, eliminate: Callable[[int], bool]) -> None:
        self._eliminate = eliminate

    # ------------------------------------------------------------------
    # Game notifications
    # ------------------------------------------------------------------
    def on_entity_added(self, ship: Ship) -> None:
        self.sprites[ship.id] = ShipSprite(ship.id, ship.position, self._clock())

    def on_entity_position_changed(self, ship: Ship, position: Position, transition_ms: float) -> None:
        sprite = self.sprites.get(ship.id)
        if sprite is not None:
            sprite.fly(position, self._clock(), transition_ms)

    def on_win(self) -> None:
        self.won = True

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def sprite_at(self, point: Tuple[int, int]) -> Optional[ShipSprite]:
        now = self._clock()
        # Topmost sprite first: the last one drawn.
        for sprite in reversed(list(self.sprites.values())):
            if sprite.rect_at(now).collidepoint(point):
                return sprite
        return None

    def click(self, point: Tuple[int, int]) -> bool:
        sprite = self.sprite_at(point)
        if sprite is None or self._eliminate is None:
            return False
        # The view tears itself down first, the game only reports a count.
        del self.sprites[sprite.ship_id]
        return self._eliminate(sprite.ship_id)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def open(self) -> None:
        pygame.init()
        size = (int(self.board.width) + SHIP_RADIUS, int(self.board.height) + SHIP_RADIUS)
        self._screen = pygame.display.set_mode(size)
        pygame.display.set_caption("Armada")
        self._font = pygame.font.Font(None, 48)

    def render(self) -> None:
        assert self._screen is not None and self._font is not None
        self._screen.fill(BACKGROUND)
        now = self._clock()
        for sprite in self.sprites.values():
            x, y = sprite.position_at(now)
            center = (int(x), int(y))
            pygame.draw.circle(self._screen, HULL_COLOR, center, SHIP_RADIUS)
            pygame.draw.circle(self._screen, COCKPIT_COLOR, center, SHIP_RADIUS // 3)
        if self.won:
            label = self._font.render(WIN_MESSAGE, True, TEXT_COLOR)
            self._screen.blit(label, label.get_rect(center=self._screen.get_rect().center))
        pygame.display.flip()

    async def run(self) -> None:
        """Pump pygame events on the asyncio loop until the window closes."""

        if self._screen is None:
            self.open()
        try:
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                        if self.click(event.pos):
                            logger.debug("Clicked ship down at {}", event.pos)
                self.render()
                await asyncio.sleep(1 / FPS)
        finally:
            pygame.quit()


__all__ = ["BoardView", "ShipSprite"]
