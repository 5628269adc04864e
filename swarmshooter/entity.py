"""Scene-graph entities with position, rotation, scale and an optional parent."""

from __future__ import annotations

import enum
import math
from typing import Optional, Sequence, Union

from pygame.math import Vector2

VectorLike = Union[Vector2, Sequence[float]]


class Space(enum.Enum):
    """Coordinate space used when reading or moving an entity."""

    LOCAL = 0
    WORLD = 1


def rotate_vector(vec: VectorLike, angle: float) -> Vector2:
    """Rotate ``vec`` by ``angle`` degrees."""
    rad = math.radians(angle)
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    x, y = vec[0], vec[1]
    return Vector2(x * cos_a - y * sin_a, x * sin_a + y * cos_a)


class GameEntity:
    """An object placed in the world, optionally relative to a parent entity.

    Reading ``position``, ``rotation`` and ``scale`` gives world values;
    assigning to them sets the values relative to the parent.
    """

    def __init__(self, x: Union[float, VectorLike] = 0.0, y: float = 0.0) -> None:
        if isinstance(x, (Vector2, tuple, list)):
            self._position = Vector2(x)
        else:
            self._position = Vector2(float(x), float(y))
        self._rotation = 0.0
        self._scale = Vector2(1.0, 1.0)
        self._parent: Optional[GameEntity] = None
        self.active = True

    # -- position -------------------------------------------------------
    @property
    def position(self) -> Vector2:
        """World position; assigning sets the position relative to the parent."""
        if self._parent is None:
            return Vector2(self._position)
        parent_scale = self._parent.scale
        rotated = rotate_vector(self._position, self._parent.local_rotation)
        return self._parent.position + Vector2(
            rotated.x * parent_scale.x, rotated.y * parent_scale.y
        )

    @position.setter
    def position(self, value: VectorLike) -> None:
        self._position = Vector2(value[0], value[1])

    @property
    def local_position(self) -> Vector2:
        """Position relative to the parent."""
        return Vector2(self._position)

    @local_position.setter
    def local_position(self, value: VectorLike) -> None:
        self._position = Vector2(value[0], value[1])

    # -- rotation -------------------------------------------------------
    @property
    def rotation(self) -> float:
        """World rotation in degrees; assigning sets a wrapped local rotation."""
        if self._parent is None:
            return self._rotation
        return self._parent.rotation + self._rotation

    @rotation.setter
    def rotation(self, value: float) -> None:
        rot = float(value)
        while rot > 360.0:
            rot -= 360.0
        while rot < 0.0:
            rot += 360.0
        self._rotation = rot

    @property
    def local_rotation(self) -> float:
        """Rotation relative to the parent, in degrees."""
        return self._rotation

    @local_rotation.setter
    def local_rotation(self, value: float) -> None:
        self.rotation = value

    # -- scale ----------------------------------------------------------
    @property
    def scale(self) -> Vector2:
        """World scale; assigning sets the scale relative to the parent."""
        if self._parent is None:
            return Vector2(self._scale)
        parent_scale = self._parent.scale
        return Vector2(parent_scale.x * self._scale.x, parent_scale.y * self._scale.y)

    @scale.setter
    def scale(self, value: VectorLike) -> None:
        self._scale = Vector2(value[0], value[1])

    @property
    def local_scale(self) -> Vector2:
        """Scale relative to the parent."""
        return Vector2(self._scale)

    @local_scale.setter
    def local_scale(self, value: VectorLike) -> None:
        self._scale = Vector2(value[0], value[1])

    # -- hierarchy ------------------------------------------------------
    @property
    def parent(self) -> Optional["GameEntity"]:
        """The parent entity; reassigning keeps the world transform."""
        return self._parent

    @parent.setter
    def parent(self, parent: Optional["GameEntity"]) -> None:
        if parent is None:
            self._position = self.position
            self._rotation = self.rotation
            self._scale = self.scale
        else:
            if self._parent is not None:
                self.parent = None
            parent_scale = parent.scale
            offset = rotate_vector(self.position - parent.position, -parent.rotation)
            self._position = Vector2(offset.x / parent_scale.x, offset.y / parent_scale.y)
            self._rotation -= parent.rotation
            self._scale = Vector2(
                self._scale.x / parent_scale.x, self._scale.y / parent_scale.y
            )
        self._parent = parent

    # -- movement -------------------------------------------------------
    def translate(self, vec: VectorLike, space: Space = Space.LOCAL) -> None:
        """Move by ``vec``; in local space the vector follows the rotation."""
        if space is Space.WORLD:
            self._position += Vector2(vec[0], vec[1])
        else:
            self._position += rotate_vector(vec, self.rotation)

    def rotate(self, amount: float) -> None:
        """Add ``amount`` degrees to the local rotation, without wrapping."""
        self._rotation += amount

    def update(self, dt: float) -> None:
        """Advance the entity by ``dt`` seconds."""

    def render(self, graphics) -> None:
        """Draw the entity."""