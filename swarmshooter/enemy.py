"""Base behaviour shared by every enemy: fly-in, formation, dive and death."""

from __future__ import annotations

import abc
import enum
import math
from typing import List, Optional, Sequence, Tuple

from pygame.math import Vector2

from .animation import AnimatedTexture, AnimDirection, Sprite, WrapMode
from .bezier import BezierCurve, BezierPath
from .entity import Space
from .graphics import Graphics
from .physics import CollisionLayer, PhysEntity

Point = Tuple[float, float]
Segment = Tuple[Tuple[Point, Point, Point, Point], int]


class EnemyState(enum.Enum):
    """What an enemy is currently doing."""

    FLY_IN = 0
    IN_FORMATION = 1
    DIVING = 2
    DEAD = 3


class EnemyType(enum.Enum):
    """The kinds of enemy."""

    BUTTERFLY = 0
    WASP = 1
    BOSS = 2


def build_path(segments: Sequence[Segment]) -> List[Vector2]:
    """Sample a chain of cubic curves given as (control points, samples) pairs."""
    path = BezierPath()
    for points, samples in segments:
        path.add_curve(BezierCurve(*(Vector2(p) for p in points)), samples)
    return path.sample()


def heading(direction: Vector2) -> float:
    """Rotation in degrees that makes a sprite face along ``direction``."""
    return math.degrees(math.atan2(direction.y, direction.x)) + 90.0


def _unit(vec: Vector2) -> Vector2:
    if vec.length_squared() == 0:
        return Vector2(0.0, 0.0)
    return vec.normalize()


class Enemy(PhysEntity, abc.ABC):
    """An enemy that flies in along a path, joins the formation and dives."""

    EPSILON = 50.0
    SPEED = 450.0
    ENEMY_TYPE: Optional[EnemyType] = None

    paths: List[List[Vector2]] = []
    _formation = None
    _player = None

    # -- shared setup ---------------------------------------------------
    @classmethod
    def create_paths(cls, screen_width: int = Graphics.SCREEN_WIDTH) -> None:
        """Build the fly-in paths for a screen ``screen_width`` pixels wide."""
        mid = int(screen_width * 0.4)
        full = mid * 2
        temp = mid - 100.0
        temp_r = mid + 60.0
        temp2 = full - 40.0
        Enemy.paths = [
            build_path([
                (((mid + 50.0, -10.0), (mid + 50.0, -20.0),
                  (mid + 50.0, 30.0), (mid + 50.0, 20.0)), 1),
                (((mid + 50.0, 20.0), (mid + 50.0, 100.0),
                  (75.0, 325.0), (75.0, 425.0)), 25),
                (((75.0, 425.0), (75.0, 650.0), (350.0, 650.0), (350.0, 425.0)), 25),
            ]),
            build_path([
                (((mid - 50.0, -10.0), (mid - 50.0, -20.0),
                  (mid - 50.0, 30.0), (mid - 50.0, 20.0)), 1),
                (((mid - 50.0, 20.0), (mid - 50.0, 100.0),
                  (full - 75.0, 325.0), (full - 75.0, 425.0)), 25),
                (((full - 75.0, 425.0), (full - 75.0, 650.0),
                  (full - 350.0, 650.0), (full - 350.0, 425.0)), 25),
            ]),
            build_path([
                (((-40.0, 720.0), (-50.0, 720.0), (10.0, 720.0), (0.0, 720.0)), 1),
                (((0.0, 720.0), (200.0, 720.0), (temp, 500.0), (temp, 400.0)), 15),
                (((temp, 400.0), (temp, 200.0), (40.0, 200.0), (40.0, 400.0)), 15),
                (((40.0, 400.0), (40.0, 500.0),
                  (temp - 120.0, 600.0), (temp - 40.0, 440.0)), 15),
            ]),
            build_path([
                (((temp2 + 40.0, 720.0), (temp2 + 50.0, 720.0),
                  (temp2 + 10.0, 720.0), (temp2, 720.0)), 1),
                (((temp2, 720.0), (temp2 - 200.0, 720.0),
                  (temp_r, 500.0), (temp_r, 400.0)), 15),
                (((temp_r, 400.0), (temp_r, 200.0),
                  (temp2 - 40.0, 200.0), (temp2 - 40.0, 400.0)), 15),
                (((temp2 - 40.0, 400.0), (temp2 - 40.0, 500.0),
                  (temp_r + 120.0, 600.0), (temp_r + 40.0, 440.0)), 15),
            ]),
        ]

    @classmethod
    def set_formation(cls, formation) -> None:
        """Use ``formation`` as the grid every enemy flies into."""
        Enemy._formation = formation

    @classmethod
    def set_player(cls, player) -> None:
        """Use ``player`` as the ship the enemies attack."""
        Enemy._player = player

    # -- construction ---------------------------------------------------
    def __init__(self, assets, audio, physics, path: int, index: int, challenge: bool = False) -> None:
        super().__init__()
        if not 0 <= path < len(Enemy.paths):
            raise ValueError(f"no fly-in path {path}; call Enemy.create_paths() first")
        self._assets = assets
        self._audio = audio
        self._current_path = path
        self._index = index
        self._challenge = challenge
        self._state = EnemyState.FLY_IN
        self._current_waypoint = 1
        self._dive_start = Vector2(0.0, 0.0)
        self.speed = self.SPEED
        self.position = Enemy.paths[path][0]
        self._textures: List[Optional[Sprite]] = [None, None]

        physics.register_entity(self, CollisionLayer.HOSTILE)

        self._death_animation = AnimatedTexture(
            assets.get_texture("EnemyExplosion.png"),
            0, 0, 128, 128, 5, 1.0, AnimDirection.HORIZONTAL,
        )
        self._death_animation.parent = self
        self._death_animation.position = (0.0, 0.0)
        self._death_animation.wrap_mode = WrapMode.ONCE

    # -- queries --------------------------------------------------------
    @property
    def state(self) -> EnemyState:
        """The current behaviour state."""
        return self._state

    @property
    def type(self) -> Optional[EnemyType]:
        """The kind of enemy."""
        return self.ENEMY_TYPE

    @property
    def index(self) -> int:
        """The enemy's slot number within its kind."""
        return self._index

    def in_death_animation(self) -> bool:
        """True while the explosion is still playing."""
        return self._death_animation.is_animating()

    def world_formation_position(self) -> Vector2:
        """Where this enemy's formation slot is in the world."""
        return self._formation.position + self.local_formation_position()

    @abc.abstractmethod
    def local_formation_position(self) -> Vector2:
        """This enemy's slot relative to the formation."""

    # -- actions --------------------------------------------------------
    def dive(self, kind: int = 0) -> None:
        """Leave the formation and start a dive."""
        self.parent = None
        self._state = EnemyState.DIVING
        self._dive_start = self.position
        self._current_waypoint = 1

    def hit(self, other) -> None:
        if self._state is EnemyState.IN_FORMATION:
            self.parent = None
        self._state = EnemyState.DEAD

    def ignore_collisions(self) -> bool:
        return self._state is EnemyState.DEAD

    # -- movement helpers -----------------------------------------------
    @property
    def _arrival_threshold(self) -> float:
        return self.EPSILON * self.speed / 25.0

    def _move_toward(self, target: Vector2, dt: float, face: bool = True) -> Vector2:
        """Step toward ``target``; return the offset measured before the step."""
        dist = target - self.position
        self.translate(_unit(dist) * (self.speed * dt), Space.WORLD)
        if face:
            self.rotation = heading(dist)
        return dist

    def _path_complete(self) -> None:
        if self._challenge:
            self._state = EnemyState.DEAD

    def _fly_in_complete(self) -> None:
        if self._challenge:
            self._state = EnemyState.DEAD
        else:
            self._join_formation()

    def _join_formation(self) -> None:
        self.position = self.world_formation_position()
        self.rotation = 0.0
        self.parent = self._formation
        self._state = EnemyState.IN_FORMATION

    # -- state handlers -------------------------------------------------
    def _handle_fly_in_state(self, dt: float) -> None:
        path = Enemy.paths[self._current_path]
        if self._current_waypoint < len(path):
            target = path[self._current_waypoint]
            self._move_toward(target, dt)
            if (target - self.position).length_squared() < self._arrival_threshold:
                self._current_waypoint += 1
            if self._current_waypoint >= len(path):
                self._path_complete()
        else:
            dist = self._move_toward(self.world_formation_position(), dt)
            if dist.length_squared() < self._arrival_threshold:
                self._fly_in_complete()

    def _handle_in_formation_state(self, dt: float) -> None:
        self.local_position = self.local_formation_position()
        rotation = self.rotation
        if rotation != 0.0:
            if rotation > 5.0:
                direction = 1.0 if rotation >= 180 else -1.0
                self.rotate(direction * dt * 200.0)
            else:
                self.rotation = 0.0

    @abc.abstractmethod
    def _handle_dive_state(self, dt: float) -> None:
        """Advance the dive."""

    def _handle_dead_state(self, dt: float) -> None:
        if self._death_animation.is_animating():
            self._death_animation.update(dt)

    def _render_fly_in_state(self, graphics) -> None:
        self._textures[0].render(graphics)

    def _render_in_formation_state(self, graphics) -> None:
        self._textures[self._formation.tick() % 2].render(graphics)

    @abc.abstractmethod
    def _render_dive_state(self, graphics) -> None:
        """Draw the enemy while diving."""

    def _render_dead_state(self, graphics) -> None:
        if self._death_animation.is_animating():
            self._death_animation.render(graphics)

    # -- frame ----------------------------------------------------------
    def update(self, dt: float) -> None:
        """Run the current state's behaviour for ``dt`` seconds."""
        if not self.active:
            return
        handlers = {
            EnemyState.FLY_IN: self._handle_fly_in_state,
            EnemyState.IN_FORMATION: self._handle_in_formation_state,
            EnemyState.DIVING: self._handle_dive_state,
            EnemyState.DEAD: self._handle_dead_state,
        }
        handlers[self._state](dt)

    def render(self, graphics) -> None:
        """Draw the enemy as its current state requires."""
        if not self.active:
            return
        renderers = {
            EnemyState.FLY_IN: self._render_fly_in_state,
            EnemyState.IN_FORMATION: self._render_in_formation_state,
            EnemyState.DIVING: self._render_dive_state,
            EnemyState.DEAD: self._render_dead_state,
        }
        renderers[self._state](graphics)
        super().render(graphics)