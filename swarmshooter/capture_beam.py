"""The boss's tractor beam that grows, holds and shrinks."""

from __future__ import annotations

import logging

import pygame

from .animation import AnimatedTexture, AnimDirection
from .physics import BoxCollider, CollisionLayer, PhysEntity

_log = logging.getLogger(__name__)


class _BeamAnimation(AnimatedTexture):
    """Looping beam frames whose visible height follows the capture time."""

    def __init__(self, texture: pygame.Surface, total_capture_time: float) -> None:
        super().__init__(texture, 0, 0, 184, 320, 3, 0.5, AnimDirection.HORIZONTAL)
        self.total_capture_time = total_capture_time
        self.capture_timer = 0.0
        self.reset_animation()

    def reset_animation(self) -> None:
        super().reset_animation()
        self.capture_timer = 0.0
        self.source_rect.h = 0

    def _run_animation(self, dt: float) -> None:
        self.capture_timer += dt
        if self.capture_timer >= self.total_capture_time:
            self._animation_done = True
            return
        self._animation_timer += dt
        if self._animation_timer >= self.animation_speed:
            self._animation_timer -= self.animation_speed
        self.source_rect.x = int(self._animation_timer / self._time_per_frame) * self.width
        if self.capture_timer < 2.0:
            steps = int(self.capture_timer * 3.5)
            self.source_rect.h = int(steps / 7.0 * self.height)
        elif self.capture_timer > self.total_capture_time - 2.0:
            steps = int((self.total_capture_time - self.capture_timer) * 3.5)
            self.source_rect.h = int(steps / 7.0 * self.height)
        else:
            self.source_rect.h = self.height

    def render(self, graphics) -> None:
        pos = self.position
        scale = self.scale
        self.destination_rect = pygame.Rect(
            int(pos.x - self.width * scale.x * 0.5),
            int(pos.y - self.height * scale.y * 0.5),
            int(self.width * scale.x),
            self.source_rect.h,
        )
        graphics.draw_texture(
            self.texture,
            pygame.Rect(self.source_rect) if self.clipped else None,
            pygame.Rect(self.destination_rect),
            self.rotation,
        )


class CaptureBeam(PhysEntity):
    """A hostile beam that can only catch the player while fully extended."""

    TOTAL_CAPTURE_TIME = 6.0

    def __init__(self, assets, physics) -> None:
        super().__init__()
        self.sprite = _BeamAnimation(
            assets.get_texture("CaptureBeam.png"), self.TOTAL_CAPTURE_TIME
        )
        self.sprite.parent = self
        self.sprite.position = (0.0, 0.0)
        self.add_collider(BoxCollider((160.0, 60.0)), (0.0, -140.0))
        self.last_hit = None
        physics.register_entity(self, CollisionLayer.HOSTILE_PROJECTILE)

    @property
    def capture_timer(self) -> float:
        """Seconds since the beam started."""
        return self.sprite.capture_timer

    def reset_animation(self) -> None:
        """Start the beam again from nothing."""
        self.sprite.reset_animation()

    def is_animating(self) -> bool:
        """True until the full capture time has passed."""
        return self.sprite.is_animating()

    def update(self, dt: float) -> None:
        """Advance the beam by ``dt`` seconds."""
        self.sprite.update(dt)

    def render(self, graphics) -> None:
        """Draw the visible part of the beam."""
        self.sprite.render(graphics)
        super().render(graphics)

    def hit(self, other) -> None:
        self.last_hit = other
        _log.info("Capture Beam Hit")

    def ignore_collisions(self) -> bool:
        return (
            self.capture_timer <= 2.1
            or self.capture_timer >= self.TOTAL_CAPTURE_TIME - 2.0
        )