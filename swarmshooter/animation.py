"""Sprites cut from textures and sprite-sheet animations."""

from __future__ import annotations

import enum
from typing import Optional, Sequence

import pygame
from pygame.math import Vector2

from .entity import GameEntity


class Sprite(GameEntity):
    """A texture, or a clipped region of one, drawn centred on the entity."""

    def __init__(self, texture: pygame.Surface, clip: Optional[Sequence[int]] = None) -> None:
        super().__init__()
        self.texture = texture
        if clip is None:
            self.width, self.height = texture.get_size()
            self.source_rect = pygame.Rect(0, 0, self.width, self.height)
            self.clipped = False
        else:
            self.source_rect = pygame.Rect(clip)
            self.width, self.height = self.source_rect.size
            self.clipped = True
        self.destination_rect = pygame.Rect(0, 0, 0, 0)

    def scaled_dimensions(self) -> Vector2:
        """Size of the sprite after the world scale is applied."""
        scale = self.scale
        return Vector2(self.width * scale.x, self.height * scale.y)

    def set_source_rect(self, rect: Sequence[int]) -> None:
        """Use ``rect`` as the region of the texture to draw."""
        self.source_rect = pygame.Rect(rect)

    def render(self, graphics) -> None:
        """Draw the sprite centred on its world position."""
        pos = self.position
        scale = self.scale
        width = self.width * scale.x
        height = self.height * scale.y
        self.destination_rect = pygame.Rect(
            int(pos.x - width * 0.5),
            int(pos.y - height * 0.5),
            int(width),
            int(height),
        )
        graphics.draw_texture(
            self.texture,
            pygame.Rect(self.source_rect) if self.clipped else None,
            pygame.Rect(self.destination_rect),
            self.rotation,
        )


class WrapMode(enum.Enum):
    """What an animation does after its last frame."""

    ONCE = 0
    LOOP = 1


class AnimDirection(enum.Enum):
    """The direction in which frames are laid out on the sheet."""

    HORIZONTAL = 0
    VERTICAL = 1


class AnimatedTexture(Sprite):
    """A sprite that steps through equally sized frames of a sheet."""

    def __init__(
        self,
        texture: pygame.Surface,
        x: int,
        y: int,
        width: int,
        height: int,
        frame_count: int,
        animation_speed: float,
        direction: AnimDirection = AnimDirection.HORIZONTAL,
    ) -> None:
        if frame_count < 1:
            raise ValueError("frame_count must be at least 1")
        if animation_speed <= 0:
            raise ValueError("animation_speed must be positive")
        super().__init__(texture, (x, y, width, height))
        self._start_x = x
        self._start_y = y
        self.frame_count = frame_count
        self.animation_speed = float(animation_speed)
        self._time_per_frame = self.animation_speed / frame_count
        self._animation_timer = 0.0
        self.wrap_mode = WrapMode.LOOP
        self.direction = direction
        self._animation_done = False

    def is_animating(self) -> bool:
        """False once a run-once animation has reached its last frame."""
        return not self._animation_done

    def reset_animation(self) -> None:
        """Restart from the first frame."""
        self._animation_timer = 0.0
        self._animation_done = False

    def update(self, dt: float) -> None:
        """Advance the animation by ``dt`` seconds."""
        self._run_animation(dt)

    def _run_animation(self, dt: float) -> None:
        if self._animation_done:
            return
        self._animation_timer += dt
        if self._animation_timer >= self.animation_speed:
            if self.wrap_mode is WrapMode.LOOP:
                self._animation_timer -= self.animation_speed
            else:
                self._animation_done = True
                self._animation_timer = self.animation_speed - self._time_per_frame
        frame = int(self._animation_timer / self._time_per_frame)
        if self.direction is AnimDirection.HORIZONTAL:
            self.source_rect.x = self._start_x + frame * self.width
        else:
            self.source_rect.y = self._start_y + frame * self.height