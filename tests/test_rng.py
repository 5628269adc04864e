import pytest

from swarmshooter.rng import Random


def test_same_seed_same_sequence():
    a = Random(42)
    b = Random(42)
    assert [a.random_int() for _ in range(10)] == [b.random_int() for _ in range(10)]


def test_random_int_is_32_bit():
    r = Random(1)
    values = [r.random_int() for _ in range(200)]
    assert all(0 <= v < 2**32 for v in values)


def test_random_float_unit_interval():
    r = Random(2)
    assert all(0.0 <= r.random_float() < 1.0 for _ in range(200))


def test_int_range_inclusive():
    r = Random(3)
    values = {r.random_range(0, 1) for _ in range(200)}
    assert values == {0, 1}


def test_float_range_bounds():
    r = Random(4)
    values = [r.random_range(0.15, 1.0) for _ in range(200)]
    assert all(0.15 <= v <= 1.0 for v in values)
    assert all(isinstance(v, float) for v in values)


def test_reversed_range_raises():
    r = Random(5)
    with pytest.raises(ValueError):
        r.random_range(5, 1)
    with pytest.raises(ValueError):
        r.random_range(2.0, 1.0)


def test_unseeded_generators_work():
    r = Random()
    assert 0 <= r.random_range(0, 3) <= 3