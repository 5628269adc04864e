import pygame
import pytest

from swarmshooter.capture_beam import CaptureBeam
from swarmshooter.physics import PhysicsManager


class FakeAssets:
    def get_texture(self, filename, managed=True):
        return pygame.Surface((552, 320))


class FakeGraphics:
    def __init__(self):
        self.draws = []

    def draw_texture(self, texture, src_rect=None, dst_rect=None, angle=0.0, flip=(False, False)):
        self.draws.append((src_rect, dst_rect, angle))


@pytest.fixture
def beam():
    return CaptureBeam(FakeAssets(), PhysicsManager())


def advance(beam, seconds, step=0.05):
    for _ in range(round(seconds / step)):
        beam.update(step)


def test_starts_collapsed(beam):
    assert beam.sprite.source_rect.h == 0
    assert beam.capture_timer == 0.0
    assert beam.is_animating()
    assert beam.ignore_collisions()
    assert beam.id == 1


def test_grows_while_starting(beam):
    advance(beam, 1.0)
    assert 0 < beam.sprite.source_rect.h < 320
    assert beam.ignore_collisions()


def test_full_height_in_middle(beam):
    advance(beam, 3.0)
    assert beam.sprite.source_rect.h == 320
    assert not beam.ignore_collisions()
    assert beam.sprite.source_rect.x in (0, 184, 368)


def test_shrinks_near_end(beam):
    advance(beam, 3.0)
    full = beam.sprite.source_rect.h
    advance(beam, 2.5)
    assert beam.sprite.source_rect.h < full
    assert beam.ignore_collisions()


def test_finishes_after_total_time(beam):
    advance(beam, 6.5)
    assert not beam.is_animating()


def test_reset(beam):
    advance(beam, 6.5)
    beam.reset_animation()
    assert beam.is_animating()
    assert beam.capture_timer == 0.0
    assert beam.sprite.source_rect.h == 0


def test_render_uses_current_height(beam):
    advance(beam, 3.0)
    graphics = FakeGraphics()
    beam.render(graphics)
    assert len(graphics.draws) == 1
    src, dst, _ = graphics.draws[0]
    assert dst.height == beam.sprite.source_rect.h
    assert dst.width == 184


def test_hit_records_other(beam):
    marker = object()
    beam.hit(marker)
    assert beam.last_hit is marker