import pygame
import pytest

from swarmshooter.graphics import Graphics
from swarmshooter.rng import Random
from swarmshooter.stars import BackgroundStars, Star, StarLayer


class FakeAssets:
    def __init__(self):
        self.requests = []

    def get_texture(self, filename, managed=True):
        self.requests.append(filename)
        return pygame.Surface((16, 4))


class FakeGraphics:
    def __init__(self):
        self.draws = []

    def draw_texture(self, texture, src_rect=None, dst_rect=None, angle=0.0, flip=(False, False)):
        self.draws.append((src_rect, dst_rect, angle))


@pytest.fixture
def texture():
    return pygame.Surface((16, 4))


def test_star_starts_on_screen(texture):
    rng = Random(7)
    for layer in (1, 2, 3):
        star = Star(texture, layer, rng)
        pos = star.position
        assert 0 <= pos.x < Graphics.SCREEN_WIDTH
        assert 0 <= pos.y < Graphics.SCREEN_HEIGHT
        assert star.source_rect.x in (0, 4, 8, 12)
        assert star.local_scale.x == pytest.approx(1.0 / layer)
        assert 0.15 <= star.flicker_speed <= 1.0


def test_star_rejects_layer_zero(texture):
    with pytest.raises(ValueError):
        Star(texture, 0, Random(1))


def test_same_seed_gives_same_star(texture):
    a = Star(texture, 2, Random(42))
    b = Star(texture, 2, Random(42))
    assert a.position == b.position
    assert a.source_rect == b.source_rect


def test_scrolling_moves_star_down(texture):
    star = Star(texture, 2, Random(3))
    star.local_position = (10.0, 100.0)
    star.scrolling = True
    star.update(0.0)
    assert star.local_position.y == pytest.approx(100.0 + star.scroll_speed)
    assert star.local_position.x == pytest.approx(10.0)


def test_not_scrolling_keeps_position(texture):
    star = Star(texture, 1, Random(3))
    before = star.local_position
    star.update(0.0)
    assert star.local_position == before


def test_star_wraps_to_top(texture):
    star = Star(texture, 1, Random(5))
    star.local_position = (10.0, float(Graphics.SCREEN_HEIGHT))
    star.scrolling = True
    star.update(0.0)
    assert star.local_position.y == 0.0
    assert 0 <= star.local_position.x < Graphics.SCREEN_WIDTH


def test_flicker_hides_and_render_skips(texture):
    star = Star(texture, 1, Random(9))
    assert star.visible
    star.update(1.0)
    assert not star.visible
    graphics = FakeGraphics()
    star.render(graphics)
    assert graphics.draws == []
    star.update(1.0)
    star.render(graphics)
    assert len(graphics.draws) == 1


def test_star_layer_scrolling_flag(texture):
    layer = StarLayer(texture, 2, Random(1))
    assert len(layer.stars) == StarLayer.STAR_COUNT
    assert not layer.scrolling
    layer.scrolling = True
    assert all(star.scrolling for star in layer.stars)


def test_background_stars_layers_and_render():
    assets = FakeAssets()
    stars = BackgroundStars(assets, Random(11))
    assert assets.requests == ["Stars.png"]
    assert len(stars.layers) == BackgroundStars.LAYER_COUNT
    graphics = FakeGraphics()
    stars.render(graphics)
    assert len(graphics.draws) == BackgroundStars.LAYER_COUNT * StarLayer.STAR_COUNT


def test_background_scroll_toggles_all_layers():
    stars = BackgroundStars(FakeAssets(), Random(2))
    stars.scroll(True)
    assert all(layer.scrolling for layer in stars.layers)
    stars.scroll(False)
    assert not any(layer.scrolling for layer in stars.layers)