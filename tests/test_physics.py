from pygame.math import Vector2

from swarmshooter.entity import GameEntity
from swarmshooter.physics import (
    BoxCollider,
    CircleCollider,
    ColliderType,
    CollisionFlags,
    CollisionLayer,
    PhysEntity,
    PhysicsManager,
    colliders_overlap,
)


class Recorder(PhysEntity):
    def __init__(self, pos=(0, 0), ignore=False):
        super().__init__()
        self.position = pos
        self.hits = []
        self._ignore = ignore

    def hit(self, other):
        self.hits.append(other)

    def ignore_collisions(self):
        return self._ignore


def box_entity(pos, size=(10, 10), ignore=False):
    entity = Recorder(pos, ignore)
    entity.add_collider(BoxCollider(size))
    return entity


def circle_at(radius, pos):
    circle = CircleCollider(radius)
    circle.position = pos
    return circle


def box_at(size, pos, rotation=0.0):
    box = BoxCollider(size)
    box.position = pos
    box.rotation = rotation
    return box


def test_circle_types():
    assert CircleCollider(1.0).type is ColliderType.CIRCLE
    assert BoxCollider((2, 2)).type is ColliderType.BOX


def test_circles_overlap_and_separate():
    assert colliders_overlap(circle_at(3, (0, 0)), circle_at(3, (5, 0)))
    assert not colliders_overlap(circle_at(3, (0, 0)), circle_at(3, (10, 0)))


def test_boxes_overlap_and_separate():
    assert colliders_overlap(box_at((10, 10), (0, 0)), box_at((10, 10), (8, 0)))
    assert not colliders_overlap(box_at((10, 10), (0, 0)), box_at((10, 10), (12, 0)))


def test_rotated_box_reaches_further():
    assert not colliders_overlap(box_at((10, 10), (0, 0)), box_at((10, 10), (12, 0)))
    assert colliders_overlap(box_at((10, 10), (0, 0)), box_at((10, 10), (12, 0), 45.0))


def test_box_vs_circle_both_orders():
    box = box_at((10, 10), (0, 0))
    near = circle_at(2, (6, 0))
    far = circle_at(2, (8, 0))
    corner = circle_at(2, (6.5, 6.5))
    assert colliders_overlap(box, near)
    assert colliders_overlap(near, box)
    assert not colliders_overlap(box, far)
    assert not colliders_overlap(corner, box)


def test_box_furthest_point_is_first_corner():
    size = Vector2(4, 2)
    assert BoxCollider(size).furthest_point() == -size / 2


def test_circle_furthest_point():
    circle = circle_at(1.0, (3, 4))
    assert circle.furthest_point() == Vector2(6, 0)


def test_vertex_position_follows_parent():
    owner = GameEntity(100, 50)
    box = BoxCollider((10, 20))
    box.parent = owner
    box.position = (0, 0)
    assert box.vertex_position(3) == Vector2(100, 50) + Vector2(10, 20) / 2
    assert box.vertex_position(0) == Vector2(100, 50) - Vector2(10, 20) / 2


def test_check_collision_with_boxes():
    a = box_entity((0, 0))
    assert a.check_collision(box_entity((8, 0)))
    assert not a.check_collision(box_entity((12, 0)))


def test_check_collision_respects_ignore():
    a = box_entity((0, 0))
    b = box_entity((0, 0), ignore=True)
    assert not a.check_collision(b)
    assert not b.check_collision(a)


def test_single_circle_has_no_broad_phase():
    a = Recorder((0, 0))
    a.add_collider(CircleCollider(5))
    b = Recorder((1, 0))
    b.add_collider(CircleCollider(5))
    assert not a.check_collision(b)


def test_collider_attached_at_local_offset():
    owner = Recorder((50, 50))
    box = BoxCollider((4, 4))
    owner.add_collider(box, (10, 0))
    assert box.position == Vector2(60, 50)
    assert box.local_position == Vector2(10, 0)


def test_register_assigns_increasing_ids():
    manager = PhysicsManager()
    a, b = box_entity((0, 0)), box_entity((0, 0))
    first = manager.register_entity(a, CollisionLayer.FRIENDLY)
    second = manager.register_entity(b, CollisionLayer.HOSTILE)
    assert first == 1
    assert second == first + 1
    assert (a.id, b.id) == (first, second)


def test_update_notifies_both_sides():
    manager = PhysicsManager()
    manager.set_layer_collision_mask(
        CollisionLayer.FRIENDLY, CollisionFlags.HOSTILE | CollisionFlags.HOSTILE_PROJECTILE
    )
    player = box_entity((0, 0))
    enemy = box_entity((4, 0))
    shot = box_entity((0, 4))
    manager.register_entity(player, CollisionLayer.FRIENDLY)
    manager.register_entity(enemy, CollisionLayer.HOSTILE)
    manager.register_entity(shot, CollisionLayer.HOSTILE_PROJECTILE)
    manager.update()
    assert player.hits == [enemy, shot]
    assert enemy.hits == [player]
    assert shot.hits == [player]


def test_only_lower_layer_mask_checks():
    manager = PhysicsManager()
    manager.set_layer_collision_mask(CollisionLayer.HOSTILE, CollisionFlags.FRIENDLY)
    player, enemy = box_entity((0, 0)), box_entity((0, 0))
    manager.register_entity(player, CollisionLayer.FRIENDLY)
    manager.register_entity(enemy, CollisionLayer.HOSTILE)
    manager.update()
    assert player.hits == [] and enemy.hits == []


def test_unregistered_entity_is_skipped():
    manager = PhysicsManager()
    manager.set_layer_collision_mask(CollisionLayer.FRIENDLY, CollisionFlags.HOSTILE)
    player, enemy = box_entity((0, 0)), box_entity((0, 0))
    manager.register_entity(player, CollisionLayer.FRIENDLY)
    enemy_id = manager.register_entity(enemy, CollisionLayer.HOSTILE)
    manager.unregister_entity(enemy_id)
    manager.update()
    assert player.hits == []