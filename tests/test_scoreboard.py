import pygame

from swarmshooter.scoreboard import Scoreboard


class FakeAssets:
    def __init__(self):
        self.requests = []
        self.destroyed = []

    def get_text(self, text, filename, size, color, managed=True):
        self.requests.append((text, filename, size, color))
        return pygame.Surface((32, 32))

    def destroy_texture(self, texture):
        self.destroyed.append(texture)


class FakeGraphics:
    def __init__(self):
        self.rects = []

    def draw_texture(self, texture, src_rect=None, dst_rect=None, angle=0.0, flip=(False, False)):
        self.rects.append(dst_rect)


def test_new_board_shows_two_zeros():
    assets = FakeAssets()
    board = Scoreboard(assets)
    graphics = FakeGraphics()
    board.render(graphics)
    assert board.score == 0
    assert [r[0] for r in assets.requests] == ["0", "0"]
    assert len(graphics.rects) == 2


def test_digits_requested_in_order_with_font():
    assets = FakeAssets()
    board = Scoreboard(assets, (75, 75, 200))
    assets.requests.clear()
    board.score = 645987
    assert board.score == 645987
    assert [r[0] for r in assets.requests] == list("645987")
    assert {r[1:] for r in assets.requests} == {("emulogic.ttf", 32, (75, 75, 200))}


def test_digits_right_aligned_on_position():
    assets = FakeAssets()
    board = Scoreboard(assets)
    board.position = (200, 100)
    board.score = 1234
    graphics = FakeGraphics()
    board.render(graphics)
    centers = [r.centerx for r in graphics.rects]
    assert centers[-1] == 200
    assert [b - a for a, b in zip(centers, centers[1:])] == [32, 32, 32]
    assert all(r.centery == 100 for r in graphics.rects)


def test_rescoring_releases_previous_digits():
    assets = FakeAssets()
    board = Scoreboard(assets)
    board.score = 987
    assert len(assets.destroyed) == 2
    board.score = 5
    assert len(assets.destroyed) == 2 + len("987")
    graphics = FakeGraphics()
    board.render(graphics)
    assert len(graphics.rects) == 1