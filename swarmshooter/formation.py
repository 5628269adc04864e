"""The grid the enemies fly into, with its sway and pulse animations."""

from __future__ import annotations

from pygame.math import Vector2

from .entity import GameEntity, Space


class Formation(GameEntity):
    """Sways side to side while filling, then pulses once locked."""

    def __init__(self) -> None:
        super().__init__()
        self._offset_amount = 10.0
        self._offset_delay = 0.4
        self._offset_timer = 0.0
        self._offset_direction = 1
        self._offset_counter = 4

        self._spread_timer = 0.0
        self._spread_delay = 0.6
        self._spread_counter = 0
        self._spread_direction = 1

        self._locked = False
        self._grid_size = Vector2(32.0, 64.0)

    def grid_size(self) -> Vector2:
        """Spacing between formation slots."""
        return Vector2(self._grid_size)

    def tick(self) -> int:
        """Current animation step, used to pick the enemies' frame."""
        if not self._locked or self._offset_counter != 4:
            return self._offset_counter
        return self._spread_counter

    def lock(self) -> None:
        """Ask the formation to stop swaying once it is centred."""
        self._locked = True

    def locked(self) -> bool:
        """True once locked and centred."""
        return self._locked and self._offset_counter == 4

    def update(self, dt: float) -> None:
        """Advance the sway or pulse animation by ``dt`` seconds."""
        if not self._locked or self._offset_counter != 4:
            self._offset_timer += dt
            if self._offset_timer >= self._offset_delay:
                self._offset_counter += 1
                self.translate(
                    Vector2(1.0, 0.0) * (self._offset_direction * self._offset_amount),
                    Space.WORLD,
                )
                if self._offset_counter == 8:
                    self._offset_counter = 0
                    self._offset_direction *= -1
                self._offset_timer = 0.0
        else:
            self._spread_timer += dt
            if self._spread_timer >= self._spread_delay:
                self._spread_counter += self._spread_direction
                step = 1 if self._spread_counter % 2 else 2
                self._grid_size.x += self._spread_direction * step
                if self._spread_counter in (0, 4):
                    self._spread_direction *= -1
                self._spread_timer = 0.0