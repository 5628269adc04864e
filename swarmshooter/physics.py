"""Colliders, physical entities and layered collision dispatch."""

from __future__ import annotations

import abc
import enum
from typing import Dict, List, Optional, Sequence

from pygame.math import Vector2

from .entity import GameEntity


class ColliderType(enum.Enum):
    """Shape of a collider."""

    BOX = 0
    CIRCLE = 1


class Collider(GameEntity, abc.ABC):
    """A collision shape attached to an entity."""

    def __init__(self, collider_type: ColliderType) -> None:
        super().__init__()
        self.type = collider_type
        self.debug_sprite = None

    @abc.abstractmethod
    def furthest_point(self) -> Vector2:
        """The point of the shape furthest from the owner's origin."""

    def render(self, graphics) -> None:
        """Draw the debug outline, if one is set."""
        if self.debug_sprite is not None:
            self.debug_sprite.render(graphics)


class BoxCollider(Collider):
    """A rectangle described by four corner vertices."""

    def __init__(self, size: Sequence[float]) -> None:
        super().__init__(ColliderType.BOX)
        half_x = 0.5 * size[0]
        half_y = 0.5 * size[1]
        self._verts: List[GameEntity] = []
        for offset in ((-half_x, -half_y), (half_x, -half_y), (-half_x, half_y), (half_x, half_y)):
            vert = GameEntity()
            vert.parent = self
            vert.position = offset
            self._verts.append(vert)

    def furthest_point(self) -> Vector2:
        local = self.local_position
        return max((local + vert.local_position for vert in self._verts), key=Vector2.length)

    def vertex_position(self, index: int) -> Vector2:
        """World position of corner ``index`` (0..3)."""
        return self._verts[index].position


class CircleCollider(Collider):
    """A circle of fixed radius."""

    def __init__(self, radius: float, broad_phase: bool = False) -> None:
        super().__init__(ColliderType.CIRCLE)
        self._radius = float(radius)
        self.broad_phase = broad_phase

    def furthest_point(self) -> Vector2:
        return Vector2(self._radius + self.local_position.length(), 0.0)

    def radius(self) -> float:
        """The circle's radius."""
        return self._radius


def _circle_vs_circle(a: CircleCollider, b: CircleCollider) -> bool:
    reach = a.radius() + b.radius()
    return (a.position - b.position).length_squared() < reach * reach


def _box_vs_circle(box: BoxCollider, circle: CircleCollider) -> bool:
    corners = [box.vertex_position(i) for i in range(4)]
    origin = corners[0]
    center = circle.position
    closest = Vector2(origin)
    for edge in (corners[1] - origin, corners[2] - origin):
        length = edge.length()
        if length == 0:
            continue
        axis = edge / length
        along = (center - origin).dot(axis)
        closest += axis * min(max(along, 0.0), length)
    return (center - closest).length_squared() < circle.radius() ** 2


def _box_vs_box(a: BoxCollider, b: BoxCollider) -> bool:
    corners_a = [a.vertex_position(i) for i in range(4)]
    corners_b = [b.vertex_position(i) for i in range(4)]
    for corners in (corners_a, corners_b):
        for edge in (corners[1] - corners[0], corners[2] - corners[0]):
            if edge.length_squared() == 0:
                continue
            proj_a = [p.dot(edge) for p in corners_a]
            proj_b = [p.dot(edge) for p in corners_b]
            if max(proj_a) <= min(proj_b) or max(proj_b) <= min(proj_a):
                return False
    return True


def colliders_overlap(a: Collider, b: Collider) -> bool:
    """True when the two shapes intersect in world space."""
    if a.type is ColliderType.CIRCLE and b.type is ColliderType.CIRCLE:
        return _circle_vs_circle(a, b)
    if a.type is ColliderType.BOX and b.type is ColliderType.CIRCLE:
        return _box_vs_circle(a, b)
    if a.type is ColliderType.CIRCLE and b.type is ColliderType.BOX:
        return _box_vs_circle(b, a)
    return _box_vs_box(a, b)


class CollisionLayer(enum.Enum):
    """Layers an entity can be registered on."""

    FRIENDLY = 0
    FRIENDLY_PROJECTILE = 1
    HOSTILE = 2
    HOSTILE_PROJECTILE = 3


class CollisionFlags(enum.IntFlag):
    """Bit set of layers, one bit per layer."""

    NONE = 0x00
    FRIENDLY = 0x01
    FRIENDLY_PROJECTILE = 0x02
    HOSTILE = 0x04
    HOSTILE_PROJECTILE = 0x08


def _layer_flag(layer: CollisionLayer) -> int:
    return 1 << layer.value


class PhysEntity(GameEntity):
    """An entity with colliders and a broad-phase bounding circle."""

    def __init__(self) -> None:
        super().__init__()
        self.id = 0
        self.tag = ""
        self._colliders: List[Collider] = []
        self._broad_phase: Optional[CircleCollider] = None

    def add_collider(self, collider: Collider, local_pos: Sequence[float] = (0.0, 0.0)) -> None:
        """Attach ``collider`` at ``local_pos`` and refresh the bounding circle."""
        collider.parent = self
        collider.position = local_pos
        self._colliders.append(collider)
        if len(self._colliders) > 1 or self._colliders[0].type is not ColliderType.CIRCLE:
            furthest = max(c.furthest_point().length() for c in self._colliders)
            broad = CircleCollider(furthest, True)
            broad.parent = self
            broad.position = (0.0, 0.0)
            self._broad_phase = broad

    def ignore_collisions(self) -> bool:
        """True while the entity should not collide."""
        return False

    def hit(self, other: "PhysEntity") -> None:
        """Called when this entity collides with ``other``."""

    def check_collision(self, other: "PhysEntity") -> bool:
        """True when any collider of this entity touches one of ``other``'s."""
        if self.ignore_collisions() or other.ignore_collisions():
            return False
        if self._broad_phase is None or other._broad_phase is None:
            return False
        if not colliders_overlap(self._broad_phase, other._broad_phase):
            return False
        return any(
            colliders_overlap(mine, theirs)
            for mine in self._colliders
            for theirs in other._colliders
        )

    def render(self, graphics) -> None:
        """Draw the colliders' debug outlines."""
        for collider in self._colliders:
            collider.render(graphics)
        if self._broad_phase is not None:
            self._broad_phase.render(graphics)


class PhysicsManager:
    """Tests registered entities against each other by layer."""

    def __init__(self) -> None:
        self._layers: Dict[CollisionLayer, List[PhysEntity]] = {
            layer: [] for layer in CollisionLayer
        }
        self._masks: Dict[CollisionLayer, int] = {layer: 0 for layer in CollisionLayer}
        self._last_id = 0

    def set_layer_collision_mask(self, layer: CollisionLayer, flags: CollisionFlags) -> None:
        """Set which layers ``layer`` collides with."""
        self._masks[layer] = int(flags)

    def register_entity(self, entity: PhysEntity, layer: CollisionLayer) -> int:
        """Add ``entity`` to ``layer``; its new id is stored on it and returned."""
        self._layers[layer].append(entity)
        self._last_id += 1
        entity.id = self._last_id
        return self._last_id

    def unregister_entity(self, entity_id: int) -> None:
        """Remove the entity with ``entity_id``, if registered."""
        for entities in self._layers.values():
            for entity in entities:
                if entity.id == entity_id:
                    entities.remove(entity)
                    return

    def update(self) -> None:
        """Check every allowed layer pair and notify both sides of each hit."""
        for first in CollisionLayer:
            mask = self._masks[first]
            for second in CollisionLayer:
                if second.value < first.value or not mask & _layer_flag(second):
                    continue
                for a in list(self._layers[first]):
                    for b in list(self._layers[second]):
                        if a.check_collision(b):
                            a.hit(b)
                            b.hit(a)