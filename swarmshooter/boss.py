"""The boss enemy: takes two hits, dives with escorts or with its capture beam."""

from __future__ import annotations

import logging
from typing import List, Sequence

from pygame.math import Vector2

from .animation import Sprite
from .capture_beam import CaptureBeam
from .enemy import Enemy, EnemyState, EnemyType, Segment, build_path
from .entity import Space
from .physics import BoxCollider

_log = logging.getLogger(__name__)

_ESCORT_DIVE: Sequence[Segment] = (
    (((0.0, 0.0), (0.0, -60.0), (-90.0, -60.0), (-90.0, 0.0)), 15),
    (((-90.0, 0.0), (-90.0, 60.0), (-100.0, 272.0), (-15.0, 275.0)), 15),
    (((-15.0, 275.0), (85.0, 275.0), (85.0, 125.0), (-15.0, 125.0)), 15),
    (((-15.0, 125.0), (-175.0, 125.0), (0.0, 450.0), (125.0, 450.0)), 25),
    (((120.0, 450.0), (160.0, 450.0), (200.0, 500.0), (200.0, 550.0)), 15),
    (((200.0, 550.0), (200.0, 540.0), (200.0, 810.0), (200.0, 800.0)), 15),
)

_CAPTURE_DIVE: Sequence[Segment] = (
    (((0.0, 0.0), (0.0, -60.0), (-90.0, -60.0), (-90.0, 0.0)), 15),
    (((-90.0, 0.0), (-90.0, 60.0), (100.0, 340.0), (100.0, 400.0)), 15),
)


def _mirrored(segments: Sequence[Segment]) -> List[Segment]:
    return [
        (tuple((-x, y) for x, y in points), samples)
        for points, samples in segments
    ]


class Boss(Enemy):
    """Sits on the top row; the first hit only injures it."""

    ENEMY_TYPE = EnemyType.BOSS
    BEAM_OFFSET = (0.0, -190.0)
    CAPTURE_EXIT_Y = 910.0
    dive_paths: List[List[Vector2]] = []

    @classmethod
    def create_dive_paths(cls) -> None:
        """Build the four dive paths: two escorted runs and two capture runs."""
        Boss.dive_paths = [
            build_path(_ESCORT_DIVE),
            build_path(_mirrored(_ESCORT_DIVE)),
            build_path(_CAPTURE_DIVE),
            build_path(_mirrored(_CAPTURE_DIVE)),
        ]

    def __init__(self, assets, audio, physics, rng, path: int, index: int, challenge: bool = False) -> None:
        super().__init__(assets, audio, physics, path, index, challenge)
        self._rng = rng
        texture = assets.get_texture("Bosses.png")
        self._textures = [
            Sprite(texture, (0, 0, 64, 64)),
            Sprite(texture, (64, 0, 64, 64)),
        ]
        for sprite in self._textures:
            sprite.parent = self
            sprite.position = (0.0, 0.0)

        self._capture_dive = False
        self._dive_path_index = 0
        self._capturing = False
        self._was_hit = False

        self.capture_beam = CaptureBeam(assets, physics)
        self.capture_beam.parent = self
        self.capture_beam.position = self.BEAM_OFFSET
        self.capture_beam.rotation = 180.0

        self.add_collider(BoxCollider(self._textures[1].scaled_dimensions()))

    # -- queries --------------------------------------------------------
    @property
    def capture_dive(self) -> bool:
        """True when the current dive ends with the capture beam."""
        return self._capture_dive

    @property
    def capturing(self) -> bool:
        """True while the boss hovers with its beam out."""
        return self._capturing

    @property
    def injured(self) -> bool:
        """True once the boss has taken its first hit."""
        return self._was_hit

    def local_formation_position(self) -> Vector2:
        grid = self._formation.grid_size()
        direction = -1.0 if self._index % 2 == 0 else 1.0
        return Vector2(
            (grid.x + grid.x * 2 * (self._index // 2)) * direction,
            -grid.y,
        )

    # -- actions --------------------------------------------------------
    def dive(self, kind: int = 0) -> None:
        """Dive with escorts (``kind`` 0) or to use the capture beam (any other value)."""
        self._capture_dive = kind != 0
        super().dive()
        if self._capture_dive:
            self._capturing = False
            self._dive_path_index = 2 + self._rng.random_range(0, 1)
            self.capture_beam.reset_animation()
        else:
            self._dive_path_index = self._index % 2

    def hit(self, other) -> None:
        if self._was_hit:
            super().hit(other)
            _log.info("Boss Hit")
            self._audio.play_sfx("SFX/BossDestroyed.wav", 0, 2)
            if self._state is EnemyState.IN_FORMATION:
                points = 150
            elif self._capture_dive:
                points = 400
            else:
                points = 800
            self._player.add_score(points)
        else:
            self._was_hit = True
            self._textures[0].set_source_rect((0, 64, 60, 64))
            self._textures[1].set_source_rect((66, 68, 60, 64))
            self._audio.play_sfx("SFX/BossInjured.wav", 0, 2)

    # -- state handlers -------------------------------------------------
    def _handle_dive_state(self, dt: float) -> None:
        path = Boss.dive_paths[self._dive_path_index]
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
            if self._current_waypoint == len(path):
                if self._capture_dive:
                    self._capturing = True
                    self.rotation = 180.0
                else:
                    self.position = (self.world_formation_position().x, 20.0)
        elif not self._capture_dive or not self._capturing:
            dist = self.world_formation_position() - self.position
            if dist.length_squared() < self._arrival_threshold and not player.visible:
                return
            self._move_toward(self.world_formation_position(), dt, face=player.visible)
            if dist.length_squared() < self._arrival_threshold:
                self._join_formation()
        else:
            self._handle_capture_beam(dt)

    def _handle_capture_beam(self, dt: float) -> None:
        self.capture_beam.update(dt)
        if not self.capture_beam.is_animating():
            self.translate(Vector2(0.0, 1.0) * (self.speed * dt), Space.WORLD)
            if self.position.y >= self.CAPTURE_EXIT_Y:
                self.position = (self.world_formation_position().x, -20.0)
                self._capturing = False

    def _render_dive_state(self, graphics) -> None:
        self._textures[0].render(graphics)
        if self._capturing and self.capture_beam.is_animating():
            self.capture_beam.render(graphics)