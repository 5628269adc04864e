"""Projectiles fired straight up the screen."""

from __future__ import annotations

from pygame.math import Vector2

from .animation import Sprite
from .physics import BoxCollider, CollisionLayer, PhysEntity


class Bullet(PhysEntity):
    """A pooled projectile that is inactive until fired."""

    OFFSCREEN_BUFFER = 10
    SPEED = 500.0

    def __init__(self, assets, physics, friendly: bool) -> None:
        super().__init__()
        self._sprite = Sprite(assets.get_texture("Bullet.png"))
        self._sprite.parent = self
        self._sprite.position = (0.0, 0.0)
        self.speed = self.SPEED
        self.reload()
        self.add_collider(BoxCollider(self._sprite.scaled_dimensions()))
        layer = CollisionLayer.FRIENDLY_PROJECTILE if friendly else CollisionLayer.HOSTILE_PROJECTILE
        physics.register_entity(self, layer)

    def fire(self, pos) -> None:
        """Place the bullet at ``pos`` and set it moving."""
        self.position = pos
        self.active = True

    def reload(self) -> None:
        """Return the bullet to the pool."""
        self.active = False

    def hit(self, other) -> None:
        self.reload()

    def ignore_collisions(self) -> bool:
        return not self.active

    def update(self, dt: float) -> None:
        """Move up; leave play once off the top of the screen."""
        if self.active:
            self.translate(Vector2(0.0, -1.0) * (self.speed * dt))
            if self.position.y < -self.OFFSCREEN_BUFFER:
                self.reload()

    def render(self, graphics) -> None:
        """Draw the bullet while it is in flight."""
        if self.active:
            self._sprite.render(graphics)
            super().render(graphics)