import pygame
import pytest
from pygame.math import Vector2

from swarmshooter.butterfly import Butterfly
from swarmshooter.enemy import Enemy, EnemyState, EnemyType
from swarmshooter.formation import Formation
from swarmshooter.physics import PhysicsManager


class FakeAssets:
    def get_texture(self, filename, managed=True):
        return pygame.Surface((256, 128))


class FakeAudio:
    def __init__(self):
        self.calls = []

    def play_sfx(self, sfx, loops=0, channel=-1):
        self.calls.append((sfx, loops, channel))


class FakePlayer:
    def __init__(self):
        self.visible = True
        self.animating = False
        self.score = 0

    def is_animating(self):
        return self.animating

    def add_score(self, change):
        self.score += change


class FakeGraphics:
    def __init__(self):
        self.textures = []
        self.lines = []

    def draw_texture(self, texture, src_rect=None, dst_rect=None, angle=0.0, flip=(False, False)):
        self.textures.append((src_rect, dst_rect, angle))

    def draw_line(self, sx, sy, ex, ey):
        self.lines.append((sx, sy, ex, ey))


@pytest.fixture
def world():
    Enemy.create_paths(1024)
    Butterfly.create_dive_paths()
    formation = Formation()
    formation.position = (400.0, 150.0)
    Enemy.set_formation(formation)
    player = FakePlayer()
    Enemy.set_player(player)
    return formation, player


def make(index=0, path=2, audio=None):
    return Butterfly(FakeAssets(), audio or FakeAudio(), PhysicsManager(), path, index, False)


def run_until(enemy, condition, dt=0.01, limit=20000, track=None):
    for _ in range(limit):
        if condition():
            return True
        enemy.update(dt)
        if track is not None:
            track.append(enemy.position)
    return condition()


def test_dive_paths_are_mirrored_pairs(world):
    Butterfly.create_dive_paths()
    paths = Butterfly.dive_paths
    assert len(paths) == 4
    for a, b in ((paths[0], paths[1]), (paths[2], paths[3])):
        assert len(a) == len(b)
        for p, q in zip(a, b):
            assert p.x == pytest.approx(-q.x)
            assert p.y == pytest.approx(q.y)

    left, right = make(0), make(1)
    left.position = (300.0, 200.0)
    right.position = (500.0, 200.0)
    left.dive()
    right.dive()
    for _ in range(50):
        left.update(0.01)
        right.update(0.01)
    assert left.position.x + right.position.x == pytest.approx(800.0, abs=1e-3)
    assert left.position.y == pytest.approx(right.position.y, abs=1e-3)


def test_dive_paths_start_at_origin(world):
    Butterfly.create_dive_paths()
    for path in Butterfly.dive_paths:
        assert path[0] == Vector2(0.0, 0.0)

    enemy = make(0)
    enemy.position = (300.0, 200.0)
    enemy.dive()
    assert enemy.position == Vector2(300.0, 200.0)
    enemy.update(0.01)
    assert enemy.position.y < 200.0


def test_type_is_butterfly(world):
    assert make().type is EnemyType.BUTTERFLY


def test_formation_slots(world):
    formation, _ = world
    grid = formation.grid_size()
    first, second = make(0), make(1)
    assert first.local_formation_position() == Vector2(-grid.x, 0.0)
    assert second.local_formation_position() == Vector2(grid.x, 0.0)
    assert make(2).local_formation_position().y == grid.y
    far = make(4).local_formation_position()
    assert abs(far.x) > abs(first.local_formation_position().x)
    assert far.y == 0.0


def test_world_formation_position_adds_formation(world):
    formation, _ = world
    enemy = make(1)
    expected = formation.position + enemy.local_formation_position()
    assert enemy.world_formation_position() == expected


def test_hit_while_flying_scores_and_plays_sound(world):
    _, player = world
    audio = FakeAudio()
    enemy = make(audio=audio)
    enemy.hit(None)
    assert audio.calls == [("SFX/ButterflyDestroyed.wav", 0, 3)]
    assert player.score == 160
    assert enemy.state is EnemyState.DEAD


def test_hit_in_formation_scores_less(world):
    _, player = world
    enemy = make()
    assert run_until(enemy, lambda: enemy.state is EnemyState.IN_FORMATION)
    enemy.hit(None)
    assert player.score == 80


def test_escort_dive_follows_long_path_and_returns(world):
    enemy = make(0)
    run_until(enemy, lambda: enemy.state is EnemyState.IN_FORMATION)
    start_y = enemy.position.y
    enemy.dive(1)
    assert enemy.state is EnemyState.DIVING
    trail = []
    assert run_until(enemy, lambda: enemy.state is EnemyState.IN_FORMATION, track=trail)
    assert max(p.y for p in trail) > start_y + 750.0
    assert enemy.parent is world[0]


def test_dive_with_hidden_player_returns_at_once(world):
    _, player = world
    enemy = make(0)
    run_until(enemy, lambda: enemy.state is EnemyState.IN_FORMATION)
    player.visible = False
    enemy.dive()
    enemy.update(0.01)
    assert enemy.state is EnemyState.IN_FORMATION
    assert enemy.rotation == 0.0


def test_render_dive_draws_line_to_formation(world):
    enemy = make(0)
    run_until(enemy, lambda: enemy.state is EnemyState.IN_FORMATION)
    enemy.dive()
    graphics = FakeGraphics()
    enemy.render(graphics)
    assert len(graphics.textures) == 1
    assert len(graphics.lines) == 1
    target = enemy.world_formation_position()
    assert graphics.lines[0][2] == pytest.approx(target.x)
    assert graphics.lines[0][3] == pytest.approx(target.y)


def test_collider_blocks_after_death(world):
    enemy = make()
    assert not enemy.ignore_collisions()
    enemy.hit(None)
    assert enemy.ignore_collisions()