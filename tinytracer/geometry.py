"""
Геометрические примитивы: пересечение луча со сферой,
треугольником и горизонтальной плоскостью.

Все функции возвращают расстояние t вдоль луча или -1.0 при промахе.
"""

import numpy as np
from numba import njit
from .math_utils import dot, cross, normalize

# Порог для детерминанта и расстояния в тесте треугольника
TRIANGLE_EPSILON = 1e-7

# Лучи с |dir.y| не больше этого считаются параллельными плоскости
PLANE_EPSILON = 1e-3


@njit(cache=True)
def ray_sphere_intersect(ray_origin, ray_dir, center, radius):
    """
    Аналитическое пересечение луча со сферой.

    Возвращает ближайший корень t >= 0. Если начало луча внутри
    сферы, это дальний корень.
    """
    to_center = center - ray_origin
    tca = dot(to_center, ray_dir)
    d2 = dot(to_center, to_center) - tca * tca
    r2 = radius * radius
    if d2 > r2:
        return -1.0

    thc = np.sqrt(r2 - d2)
    t = tca - thc
    if t < 0.0:
        t = tca + thc
    if t < 0.0:
        return -1.0
    return t


@njit(cache=True)
def ray_triangle_intersect(ray_origin, ray_dir, v0, v1, v2):
    """
    Пересечение луча с треугольником (Мёллер-Трумбор), двустороннее.

    Отбрасываются лучи, параллельные плоскости треугольника,
    вырожденные треугольники и пересечения ближе TRIANGLE_EPSILON.
    """
    edge1 = v1 - v0
    edge2 = v2 - v0

    pvec = cross(ray_dir, edge2)
    det = dot(edge1, pvec)
    if abs(det) < TRIANGLE_EPSILON:
        return -1.0
    inv_det = 1.0 / det

    # Барицентрические координаты u, v
    tvec = ray_origin - v0
    u = dot(tvec, pvec) * inv_det
    if u < 0.0 or u > 1.0:
        return -1.0

    qvec = cross(tvec, edge1)
    v = dot(ray_dir, qvec) * inv_det
    if v < 0.0 or u + v > 1.0:
        return -1.0

    t = dot(edge2, qvec) * inv_det
    if t < TRIANGLE_EPSILON:
        return -1.0
    return t


@njit(cache=True)
def compute_triangle_normal(v0, v1, v2):
    """Нормаль по правилу правой руки для обхода v0 -> v1 -> v2."""
    return normalize(cross(v1 - v0, v2 - v0))


@njit(cache=True)
def ray_plane_intersect(ray_origin, ray_dir, plane_y):
    """Пересечение луча с плоскостью y = plane_y; касательные лучи не считаются."""
    if abs(ray_dir[1]) <= PLANE_EPSILON:
        return -1.0
    t = (plane_y - ray_origin[1]) / ray_dir[1]
    if t <= 0.0:
        return -1.0
    return t
