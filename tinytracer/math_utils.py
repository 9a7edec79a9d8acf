"""
Векторная математика для трассировщика: длины, произведения,
отражение и преломление. Все функции компилируются numba.
"""

import numpy as np
from numba import njit

# Смещение точки от поверхности для вторичных лучей
SURFACE_EPSILON = 1e-3

# Векторы короче этого считаются нулевыми
ZERO_LENGTH = 1e-10


@njit(cache=True)
def dot(a, b):
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


@njit(cache=True)
def cross(a, b):
    return np.array([
        a[1]*b[2] - a[2]*b[1],
        a[2]*b[0] - a[0]*b[2],
        a[0]*b[1] - a[1]*b[0]
    ])


@njit(cache=True)
def length(v):
    return np.sqrt(dot(v, v))


@njit(cache=True)
def normalize(v):
    """Единичный вектор того же направления; для нулевого вектора - нули."""
    n = length(v)
    if n < ZERO_LENGTH:
        return np.zeros(3)
    return v / n


@njit(cache=True)
def reflect(direction, normal):
    """Зеркальное отражение direction относительно нормали: I - 2(I·N)N."""
    return direction - normal * (2.0 * dot(direction, normal))


@njit(cache=True)
def refract(direction, normal, eta_t, eta_i=1.0):
    """
    Преломление по закону Снеллиуса.

    Параметры:
        direction: направление падающего луча (нормализованное)
        normal: нормаль поверхности
        eta_t: показатель преломления среды за поверхностью
        eta_i: показатель преломления среды, из которой идёт луч

    Если луч выходит изнутри объекта, среды меняются местами (ровно один раз).
    При полном внутреннем отражении возвращается условное направление (1, 0, 0).
    """
    cosi = -max(-1.0, min(1.0, dot(direction, normal)))
    n = normal
    if cosi < 0.0:
        # Луч идёт изнутри объекта: разворачиваем нормаль и меняем среды
        cosi = -cosi
        n = -normal
        eta_i, eta_t = eta_t, eta_i

    eta = eta_i / eta_t
    k = 1.0 - eta * eta * (1.0 - cosi * cosi)
    if k < 0.0:
        return np.array([1.0, 0.0, 0.0])
    return direction * eta + n * (eta * cosi - np.sqrt(k))


@njit(cache=True)
def offset_origin(point, normal, direction):
    """
    Сдвигает начало вторичного луча от поверхности в ту сторону,
    куда смотрит direction (защита от самопересечения).
    """
    if dot(direction, normal) < 0.0:
        return point - normal * SURFACE_EPSILON
    return point + normal * SURFACE_EPSILON
