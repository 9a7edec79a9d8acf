"""
Карта окружения: загрузка равнопромежуточной (equirectangular) панорамы
и выборка цвета по направлению луча.
"""

import numpy as np
from numba import njit
from PIL import Image


class EnvironmentMapError(RuntimeError):
    """Карту окружения не удалось загрузить."""


def load_environment_map(filename) -> np.ndarray:
    """
    Загружает карту окружения из файла (обычно JPEG).

    Возвращает массив shape (height, width, 3) со значениями в [0, 1].
    Файл должен существовать и содержать ровно 3 канала (RGB).
    """
    try:
        with Image.open(filename) as img:
            pixels = np.asarray(img)
    except OSError as exc:
        raise EnvironmentMapError(
            f"не удалось загрузить карту окружения {filename}: {exc}"
        ) from exc

    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise EnvironmentMapError(
            f"карта окружения {filename} должна быть RGB, получено shape={pixels.shape}"
        )

    return np.ascontiguousarray(pixels, dtype=np.float64) / 255.0


@njit(cache=True)
def sample_environment(direction, envmap):
    """
    Цвет карты окружения для направления direction (без фильтрации).

    theta - угол от оси Y, phi - азимут в плоскости XZ.
    Индексы текселя ограничиваются размерами карты.
    """
    height = envmap.shape[0]
    width = envmap.shape[1]

    y = max(-1.0, min(1.0, direction[1]))
    theta = np.arccos(y)
    phi = np.arctan2(direction[2], direction[0])

    longitude = int((phi + np.pi) / (2.0 * np.pi) * (width - 1))
    latitude = int(theta / np.pi * (height - 1))

    longitude = min(max(longitude, 0), width - 1)
    latitude = min(max(latitude, 0), height - 1)

    return envmap[latitude, longitude].copy()
