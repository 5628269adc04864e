"""The player's ship: movement, firing and the death animation."""

from __future__ import annotations

from typing import Tuple

import pygame
from pygame.math import Vector2

from .animation import AnimatedTexture, AnimDirection, Sprite, WrapMode
from .bullet import Bullet
from .entity import Space
from .physics import BoxCollider, CollisionLayer, PhysEntity


class Player(PhysEntity):
    """The ship the player steers along the bottom of the screen."""

    MAX_BULLETS = 20
    MOVE_SPEED = 250.0
    MOVE_BOUNDS = (0.0, 800.0)
    START_LIVES = 3

    def __init__(self, assets, audio, input_manager, physics) -> None:
        super().__init__()
        self._audio = audio
        self._input = input_manager

        self._visible = False
        self._animating = False
        self._was_hit = False
        self._score = 0
        self._lives = self.START_LIVES
        self.move_speed = self.MOVE_SPEED
        self.move_bounds = self.MOVE_BOUNDS

        self._ship = Sprite(assets.get_texture("PlayerShips.png"), (0, 0, 60, 64))
        self._ship.parent = self
        self._ship.position = (0.0, 0.0)

        self._death_animation = AnimatedTexture(
            assets.get_texture("PlayerExplosion.png"),
            0, 0, 128, 128, 4, 1.0, AnimDirection.HORIZONTAL,
        )
        self._death_animation.parent = self
        self._death_animation.position = (0.0, 0.0)
        self._death_animation.wrap_mode = WrapMode.ONCE

        self.add_collider(BoxCollider((16.0, 67.0)))
        self.add_collider(BoxCollider((20.0, 37.0)), (18.0, 10.0))
        self.add_collider(BoxCollider((20.0, 37.0)), (-18.0, 10.0))

        physics.register_entity(self, CollisionLayer.FRIENDLY)

        self.bullets: Tuple[Bullet, ...] = tuple(
            Bullet(assets, physics, True) for _ in range(self.MAX_BULLETS)
        )

    # -- state ----------------------------------------------------------
    @property
    def visible(self) -> bool:
        """Whether the ship is drawn."""
        return self._visible

    @visible.setter
    def visible(self, value: bool) -> None:
        self._visible = value

    def is_animating(self) -> bool:
        """True while the death animation plays."""
        return self._animating

    @property
    def score(self) -> int:
        """Points earned so far."""
        return self._score

    @property
    def lives(self) -> int:
        """Lives remaining."""
        return self._lives

    @property
    def was_hit(self) -> bool:
        """True from a hit until the next update."""
        return self._was_hit

    def add_score(self, change: int) -> None:
        """Add ``change`` points."""
        self._score += change

    # -- collisions -----------------------------------------------------
    def ignore_collisions(self) -> bool:
        return not self._visible or self._animating or not self.active

    def hit(self, other) -> None:
        self._lives -= 1
        self._animating = True
        self._death_animation.reset_animation()
        self._was_hit = True
        self._audio.play_sfx("SFX/PlayerExplosion.wav")

    # -- frame ----------------------------------------------------------
    def _handle_movement(self, dt: float) -> None:
        step = Vector2(1.0, 0.0) * (self.move_speed * dt)
        if self._input.key_down(pygame.K_RIGHT) or self._input.key_down(pygame.K_d):
            self.translate(step, Space.WORLD)
        elif self._input.key_down(pygame.K_LEFT) or self._input.key_down(pygame.K_a):
            self.translate(-step, Space.WORLD)
        pos = self.local_position
        low, high = self.move_bounds
        if pos.x < low:
            pos.x = low
        elif pos.x > high:
            pos.x = high
        self.local_position = pos

    def _handle_firing(self) -> None:
        if self._input.key_pressed(pygame.K_SPACE):
            bullet = next((b for b in self.bullets if not b.active), None)
            if bullet is not None:
                bullet.fire(self.position)
                self._audio.play_sfx("SFX/Fire.wav")

    def update(self, dt: float) -> None:
        """Play the death animation, or move and fire; then move the bullets."""
        if self._animating:
            self._was_hit = False
            self._death_animation.update(dt)
            self._animating = self._death_animation.is_animating()
        elif self.active:
            self._handle_movement(dt)
            self._handle_firing()
        for bullet in self.bullets:
            bullet.update(dt)

    def render(self, graphics) -> None:
        """Draw the ship or its explosion, then the bullets."""
        if self._visible:
            if self._animating:
                self._death_animation.render(graphics)
            else:
                self._ship.render(graphics)
            super().render(graphics)
        for bullet in self.bullets:
            bullet.render(graphics)