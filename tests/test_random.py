import math

import pytest

from comfykit import random as rnd
from comfykit.math2d import Vec2


def test_seed_makes_sequence_repeatable():
    rnd.srand(42)
    first = [rnd.rand() for _ in range(10)]
    rnd.srand(42)
    second = [rnd.rand() for _ in range(10)]
    assert first == second


def test_different_seeds_differ():
    rnd.srand(1)
    a = [rnd.rand() for _ in range(5)]
    rnd.srand(2)
    b = [rnd.rand() for _ in range(5)]
    assert a != b


def test_rand_is_u32():
    rnd.srand(7)
    values = [rnd.rand() for _ in range(500)]
    assert all(0 <= v < 2**32 for v in values)


def test_negative_seed_rejected():
    with pytest.raises(ValueError):
        rnd.srand(-1)


def test_gen_range_int_bounds():
    rnd.srand(3)
    values = [rnd.gen_range(5, 15) for _ in range(1000)]
    assert all(isinstance(v, int) and 5 <= v <= 15 for v in values)
    assert len(set(values)) > 5


def test_gen_range_float_bounds():
    rnd.srand(4)
    values = [rnd.gen_range(-2.0, 3.0) for _ in range(1000)]
    assert all(isinstance(v, float) and -2.0 <= v <= 3.0 for v in values)


def test_shuffle_is_permutation():
    rnd.srand(5)
    data = list(range(50))
    rnd.shuffle(data)
    assert sorted(data) == list(range(50))


def test_fisher_yates_two_elements_always_swap():
    shuffler = rnd.FisherYates()
    for seed in range(10):
        rnd.srand(seed)
        data = ["a", "b"]
        shuffler.shuffle(data)
        assert data == ["b", "a"]


def test_choose_from_empty_is_none():
    assert rnd.choose([]) is None


def test_choose_returns_member():
    rnd.srand(9)
    items = ["x", "y", "z"]
    for _ in range(50):
        assert rnd.choose(items) in items


def test_choose_multiple_distinct():
    rnd.srand(11)
    items = list(range(10))
    picked = list(rnd.choose_multiple(items, 4))
    assert len(picked) == 4
    assert len(set(picked)) == 4


def test_choose_multiple_pads_with_first():
    rnd.srand(12)
    items = ["a", "b", "c"]
    picked = list(rnd.choose_multiple(items, 5))
    assert sorted(picked[:3]) == items
    assert picked[3:] == ["a", "a"]


def test_coin_extremes():
    rnd.srand(13)
    assert not any(rnd.toss_coin(0.0) for _ in range(100))
    assert all(rnd.flip_coin(1.5) for _ in range(100))
    assert all(rnd.coin_toss(2.0) for _ in range(100))


def test_random_dir_is_unit():
    rnd.srand(14)
    for _ in range(50):
        assert rnd.random_dir().length() == pytest.approx(1.0, abs=1e-9)


def test_random_vec_and_offset_lengths():
    rnd.srand(15)
    for _ in range(50):
        assert 2.0 <= rnd.random_vec(2.0, 4.0).length() <= 4.0 + 1e-9
        assert rnd.random_offset(3.0).length() <= 3.0 + 1e-9
        assert rnd.random_circle(1.0).length() <= 1.0 + 1e-9


def test_random_box_within_bounds():
    rnd.srand(16)
    center = Vec2(10.0, -5.0)
    size = Vec2(4.0, 2.0)
    for _ in range(100):
        p = rnd.random_box(center, size)
        assert abs(p.x - center.x) <= size.x / 2
        assert abs(p.y - center.y) <= size.y / 2


def test_random_around_distance():
    rnd.srand(17)
    origin = Vec2(1.0, 1.0)
    for _ in range(50):
        d = rnd.random_around(origin, 1.0, 2.0).distance(origin)
        assert 1.0 - 1e-9 <= d <= 2.0 + 1e-9


def test_scalar_helpers_ranges():
    rnd.srand(18)
    for _ in range(100):
        assert 0.0 <= rnd.random() <= 1.0
        assert 0.0 <= rnd.random_angle() <= 2 * math.pi
        assert -1.0 <= rnd.random_range(-1.0, 1.0) <= 1.0
        assert -3 <= rnd.random_i32(-3, 3) <= 3
        assert 0 <= rnd.random_usize(0, 8) <= 8


def test_random_usize_rejects_negative():
    with pytest.raises(ValueError):
        rnd.random_usize(-1, 3)