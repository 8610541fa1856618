import pytest

from lutro.retro_math import (
    clamp_value,
    convert_rgb_to_yxy,
    convert_yxy_to_rgb,
    dot_product,
    next_pow2,
    prev_pow2,
    saturate_value,
)


def _is_pow2(v):
    return v > 0 and v & (v - 1) == 0


@pytest.mark.parametrize("v", [3, 5, 7, 100, 1000, 65537, 123456])
def test_next_pow2_bounds(v):
    p = next_pow2(v)
    assert _is_pow2(p)
    assert p >= v
    assert p // 2 < v


@pytest.mark.parametrize("v", [1, 2, 4, 64, 1024, 1 << 20])
def test_pow2_fixed_points(v):
    assert next_pow2(v) == v
    assert prev_pow2(v) == v


@pytest.mark.parametrize("v", [3, 5, 7, 100, 1000, 65537, 123456])
def test_prev_pow2_bounds(v):
    p = prev_pow2(v)
    assert _is_pow2(p)
    assert p <= v
    assert p * 2 > v


def test_next_pow2_zero_wraps():
    assert next_pow2(0) == 0


def test_prev_pow2_zero():
    assert prev_pow2(0) == 0


def test_clamp_value():
    assert clamp_value(-5.0, -1.0, 2.0) == -1.0
    assert clamp_value(5.0, -1.0, 2.0) == 2.0
    assert clamp_value(0.25, -1.0, 2.0) == 0.25


def test_saturate_value():
    assert saturate_value(3.5) == 1.0
    assert saturate_value(-3.5) == 0.0
    assert saturate_value(0.75) == 0.75


def test_dot_product_symmetry_and_unit():
    a = [1.5, -2.0, 4.0]
    b = [0.5, 3.0, -1.0]
    assert dot_product(a, b) == dot_product(b, a)
    assert dot_product(a, [0.0, 1.0, 0.0]) == a[1]


def test_dot_product_ignores_extra_components():
    assert dot_product([1.0, 2.0, 3.0, 99.0], [1.0, 1.0, 1.0, 99.0]) == dot_product(
        [1.0, 2.0, 3.0], [1.0, 1.0, 1.0]
    )


@pytest.mark.parametrize(
    "rgb",
    [(0.2, 0.4, 0.6), (1.0, 1.0, 1.0), (0.9, 0.1, 0.3), (0.05, 0.7, 0.2)],
)
def test_rgb_yxy_round_trip(rgb):
    back = convert_yxy_to_rgb(convert_rgb_to_yxy(rgb))
    assert back == pytest.approx(rgb, abs=1e-5)


def test_yxy_luminance_is_second_xyz_row():
    rgb = (0.3, 0.6, 0.9)
    yxy = convert_rgb_to_yxy(rgb)
    assert yxy[0] == pytest.approx(dot_product((0.2126729, 0.7151522, 0.0721750), rgb))
    assert 0.0 < yxy[1] < 1.0
    assert 0.0 < yxy[2] < 1.0