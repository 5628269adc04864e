"""Scrolling, flickering star field drawn behind the game."""

from __future__ import annotations

from typing import List

import pygame
from pygame.math import Vector2

from .animation import Sprite
from .graphics import Graphics

STAR_SIZE = 4
STAR_COLORS = 4


class Star(Sprite):
    """A single star that flickers and, while scrolling, drifts down the screen."""

    def __init__(self, texture: pygame.Surface, layer: int, rng) -> None:
        if layer < 1:
            raise ValueError("layer must be at least 1")
        super().__init__(texture, (0, 0, STAR_SIZE, STAR_SIZE))
        self._rng = rng
        self.source_rect.x = (rng.random_int() % STAR_COLORS) * STAR_SIZE
        x = rng.random_int() % Graphics.SCREEN_WIDTH
        y = rng.random_int() % Graphics.SCREEN_HEIGHT
        self.position = (float(x), float(y))
        self.visible = True
        self.scrolling = False
        self._flicker_time = 0.0
        self.flicker_speed = rng.random_range(0.15, 1.0)
        self.scale = Vector2(1.0, 1.0) * (1.0 / layer)
        self.scroll_speed = 4.0 / layer

    def _scroll_star(self) -> None:
        self.translate(Vector2(0.0, 1.0) * self.scroll_speed)
        pos = self.local_position
        if pos.y > Graphics.SCREEN_HEIGHT:
            pos.y = 0.0
            pos.x = float(self._rng.random_int() % Graphics.SCREEN_WIDTH)
            self.local_position = pos

    def update(self, dt: float) -> None:
        """Toggle visibility when the flicker delay passes and scroll if enabled."""
        self._flicker_time += dt
        if self._flicker_time >= self.flicker_speed:
            self.visible = not self.visible
            self._flicker_time = 0.0
        if self.scrolling:
            self._scroll_star()

    def render(self, graphics) -> None:
        """Draw the star while it is visible."""
        if self.visible:
            super().render(graphics)


class StarLayer:
    """A fixed number of stars sharing one depth."""

    STAR_COUNT = 150

    def __init__(self, texture: pygame.Surface, layer: int, rng) -> None:
        self.stars: List[Star] = [Star(texture, layer, rng) for _ in range(self.STAR_COUNT)]

    @property
    def scrolling(self) -> bool:
        """Whether the stars of this layer scroll."""
        return any(star.scrolling for star in self.stars)

    @scrolling.setter
    def scrolling(self, enabled: bool) -> None:
        for star in self.stars:
            star.scrolling = enabled

    def update(self, dt: float) -> None:
        """Update every star."""
        for star in self.stars:
            star.update(dt)

    def render(self, graphics) -> None:
        """Draw every star."""
        for star in self.stars:
            star.render(graphics)


class BackgroundStars:
    """Several star layers at different depths."""

    LAYER_COUNT = 3
    TEXTURE_FILE = "Stars.png"

    def __init__(self, assets, rng) -> None:
        texture = assets.get_texture(self.TEXTURE_FILE)
        self.layers: List[StarLayer] = [
            StarLayer(texture, depth, rng) for depth in range(1, self.LAYER_COUNT + 1)
        ]

    def scroll(self, enabled: bool) -> None:
        """Start or stop the stars drifting."""
        for layer in self.layers:
            layer.scrolling = enabled

    def update(self, dt: float) -> None:
        """Update every layer."""
        for layer in self.layers:
            layer.update(dt)

    def render(self, graphics) -> None:
        """Draw every layer."""
        for layer in self.layers:
            layer.render(graphics)