"""The butterfly enemy and its dive patterns."""

from __future__ import annotations

import logging
from typing import List, Sequence

from pygame.math import Vector2

from .animation import Sprite
from .enemy import Enemy, EnemyState, EnemyType, Segment, build_path
from .physics import BoxCollider

_log = logging.getLogger(__name__)

_SWOOP: Sequence[Segment] = (
    (((0.0, 0.0), (0.0, -45.0), (-60.0, -45.0), (-60.0, 0.0)), 15),
    (((-60.0, 0.0), (-60.0, 80.0), (200.0, 125.0), (200.0, 200.0)), 15),
    (((200.0, 200.0), (200.0, 275.0), (175.0, 250.0), (175.0, 325.0)), 15),
    (((175.0, 325.0), (175.0, 425.0), (375.0, 425.0), (375.0, 525.0)), 15),
    (((375.0, 525.0), (375.0, 575.0), (300.0, 625.0), (300.0, 775.0)), 15),
)

_ESCORT: Sequence[Segment] = (
    (((0.0, 0.0), (0.0, -60.0), (-90.0, -60.0), (-90.0, 0.0)), 15),
    (((-90.0, 0.0), (-90.0, 60.0), (-100.0, 272.0), (-15.0, 275.0)), 15),
    (((-15.0, 275.0), (85.0, 275.0), (85.0, 125.0), (-15.0, 125.0)), 15),
    (((-15.0, 125.0), (-175.0, 125.0), (0.0, 450.0), (125.0, 450.0)), 25),
    (((120.0, 450.0), (160.0, 450.0), (200.0, 500.0), (200.0, 550.0)), 15),
    (((200.0, 550.0), (200.0, 540.0), (200.0, 810.0), (200.0, 800.0)), 15),
)


def _mirrored(segments: Sequence[Segment]) -> List[Segment]:
    return [
        (tuple((-x, y) for x, y in points), samples)
        for points, samples in segments
    ]


class Butterfly(Enemy):
    """Sits in the middle rows; dives alone or as a boss's escort."""

    ENEMY_TYPE = EnemyType.BUTTERFLY
    dive_paths: List[List[Vector2]] = []

    @classmethod
    def create_dive_paths(cls) -> None:
        """Build the four dive paths: two solo swoops and two escort runs."""
        Butterfly.dive_paths = [
            build_path(_SWOOP),
            build_path(_mirrored(_SWOOP)),
            build_path(_ESCORT),
            build_path(_mirrored(_ESCORT)),
        ]

    def __init__(self, assets, audio, physics, path: int, index: int, challenge: bool = False) -> None:
        super().__init__(assets, audio, physics, path, index, challenge)
        texture = assets.get_texture("AnimatedEnemies.png")
        self._textures = [
            Sprite(texture, (0, 0, 52, 40)),
            Sprite(texture, (52, 0, 52, 40)),
        ]
        for sprite in self._textures:
            sprite.parent = self
            sprite.position = (0.0, 0.0)
        self._escort = False
        self.add_collider(BoxCollider(self._textures[1].scaled_dimensions()))

    def local_formation_position(self) -> Vector2:
        grid = self._formation.grid_size()
        direction = -1.0 if self._index % 2 == 0 else 1.0
        return Vector2(
            (grid.x + grid.x * 2 * (self._index // 4)) * direction,
            grid.y * ((self._index % 4) // 2),
        )

    def dive(self, kind: int = 0) -> None:
        """Dive alone (``kind`` 0) or as an escort (any other value)."""
        self._escort = kind != 0
        super().dive()

    def hit(self, other) -> None:
        self._audio.play_sfx("SFX/ButterflyDestroyed.wav", 0, 3)
        self._player.add_score(80 if self._state is EnemyState.IN_FORMATION else 160)
        super().hit(other)
        _log.info("Butterfly Hit")

    def _dive_path(self) -> List[Vector2]:
        return Butterfly.dive_paths[self._index % 2 + (2 if self._escort else 0)]

    def _handle_dive_state(self, dt: float) -> None:
        path = self._dive_path()
        player = self._player
        if (
            self._current_waypoint < len(path)
            and not player.is_animating()
            and player.visible
        ):
            target = self._dive_start + path[self._current_waypoint]
            self._move_toward(target, dt)
            if (target - self.position).length_squared() < self._arrival_threshold:
                self._current_waypoint += 1
        else:
            dist = self._move_toward(self.world_formation_position(), dt, face=player.visible)
            if dist.length_squared() < self._arrival_threshold:
                self._join_formation()

    def _render_dive_state(self, graphics) -> None:
        self._textures[0].render(graphics)
        final_pos = self.world_formation_position()
        path_end = self._dive_start + self._dive_path()[-1]
        graphics.draw_line(path_end.x, path_end.y, final_pos.x, final_pos.y)