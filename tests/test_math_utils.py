import numpy as np

from tinytracer.math_utils import (
    normalize, dot, cross, length, reflect, refract, offset_origin, SURFACE_EPSILON
)


def test_normalize_unit_length():
    v = normalize(np.array([3.0, 4.0, 12.0]))
    assert np.isclose(length(v), 1.0)
    assert np.allclose(v, [3 / 13, 4 / 13, 12 / 13])


def test_normalize_zero_vector():
    """Нулевой вектор не вызывает ошибку, а остаётся нулевым."""
    assert np.array_equal(normalize(np.zeros(3)), np.zeros(3))


def test_dot_and_cross():
    x = np.array([1.0, 0.0, 0.0])
    y = np.array([0.0, 1.0, 0.0])
    assert dot(x, y) == 0.0
    assert np.allclose(cross(x, y), [0.0, 0.0, 1.0])


def test_reflect_grazing_ray_unchanged():
    d = np.array([1.0, 0.0, 0.0])
    n = np.array([0.0, 1.0, 0.0])
    assert np.allclose(reflect(d, n), d)


def test_reflect_anti_parallel_ray_reversed():
    n = np.array([0.0, 0.0, 1.0])
    d = -n
    assert np.allclose(reflect(d, n), -d)


def test_refract_equal_indices_does_not_bend():
    d = normalize(np.array([0.3, -0.8, -0.2]))
    n = np.array([0.0, 1.0, 0.0])
    assert np.allclose(refract(d, n, 1.0), d)


def test_refract_bends_towards_normal():
    """Луч входит в стекло и приближается к нормали."""
    d = normalize(np.array([1.0, -1.0, 0.0]))
    n = np.array([0.0, 1.0, 0.0])
    out = normalize(refract(d, n, 1.5))
    assert out[1] < 0
    assert 0 < out[0] < d[0]


def test_refract_from_inside_swaps_media():
    """Выход из стекла: луч отклоняется от нормали."""
    d = normalize(np.array([0.3, 1.0, 0.0]))
    n = np.array([0.0, 1.0, 0.0])
    out = normalize(refract(d, n, 1.5))
    assert out[1] > 0
    assert out[0] > d[0]


def test_refract_total_internal_reflection_returns_sentinel():
    d = normalize(np.array([1.0, 0.1, 0.0]))
    n = np.array([0.0, 1.0, 0.0])
    assert np.allclose(refract(d, n, 1.5), [1.0, 0.0, 0.0])


def test_refract_zero_normal_terminates():
    d = normalize(np.array([0.0, -1.0, -1.0]))
    out = refract(d, np.zeros(3), 1.5)
    assert np.all(np.isfinite(out))
    assert np.allclose(out, d / 1.5)


def test_offset_origin_follows_direction_side():
    p = np.array([0.0, 0.0, 0.0])
    n = np.array([0.0, 1.0, 0.0])
    up = offset_origin(p, n, np.array([0.0, 1.0, 0.0]))
    down = offset_origin(p, n, np.array([0.0, -1.0, 0.0]))
    assert np.allclose(up, [0.0, SURFACE_EPSILON, 0.0])
    assert np.allclose(down, [0.0, -SURFACE_EPSILON, 0.0])
