import pytest
from pygame.math import Vector2

from swarmshooter.bezier import BezierCurve, BezierPath


def make_curve():
    return BezierCurve(Vector2(0, 0), Vector2(0, -60), Vector2(-90, -60), Vector2(-90, 0))


def test_curve_endpoints():
    c = make_curve()
    assert c.point_at(0.0) == c.p0
    assert c.point_at(1.0) == c.p3


def test_curve_accepts_tuples():
    c = BezierCurve((1, 2), (3, 4), (5, 6), (7, 8))
    assert c.p0 == Vector2(1, 2)
    assert c.point_at(1.0) == Vector2(7, 8)


def test_straight_line_midpoint():
    c = BezierCurve((0, 0), (1, 0), (2, 0), (3, 0))
    mid = c.point_at(0.5)
    assert mid.x == pytest.approx(1.5)
    assert mid.y == pytest.approx(0.0)


def test_symmetric_curve_midpoint_on_axis():
    c = make_curve()
    mid = c.point_at(0.5)
    assert mid.x == pytest.approx(-45.0)


def test_path_sample_counts_and_ends():
    path = BezierPath()
    first = make_curve()
    second = BezierCurve((-90, 0), (-90, 60), (100, 340), (100, 400))
    path.add_curve(first, 15)
    path.add_curve(second, 1)
    points = path.sample()
    assert len(points) == (15 + 1) + (1 + 1)
    assert points[0] == first.p0
    assert points[15] == first.p3
    assert points[-1] == second.p3


def test_empty_path_samples_nothing():
    assert BezierPath().sample() == []


def test_invalid_sample_count():
    with pytest.raises(ValueError):
        BezierPath().add_curve(make_curve(), 0)