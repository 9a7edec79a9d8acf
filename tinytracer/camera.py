"""
Точечная (pinhole) камера для рендеринга.
"""

import numpy as np
from numba import njit


class Camera:
    """
    Точечная камера, смотрящая вдоль оси -Z.

    Параметры:
        position: позиция камеры в пространстве
        fov: угол обзора по вертикали в градусах
        width, height: размер изображения в пикселях
    """

    def __init__(self, position, fov, width, height):
        if width <= 0 or height <= 0:
            raise ValueError(f"неверный размер изображения: {width}x{height}")
        if not 0 < fov < 180:
            raise ValueError(f"угол обзора должен быть в (0, 180): {fov}")

        self.position = np.array(position, dtype=np.float64)
        self.fov = fov
        self.width = width
        self.height = height

        # Расстояние до плоскости изображения (в пикселях)
        self.image_distance = height / (2.0 * np.tan(np.radians(fov) / 2.0))


@njit(cache=True)
def get_ray(x, y, width, height, image_distance):
    """
    Направление луча через центр пикселя (x, y).

    Ось Y изображения направлена вниз, поэтому dir_y берётся с обратным знаком.
    """
    dir_x = (x + 0.5) - width / 2.0
    dir_y = -(y + 0.5) + height / 2.0
    dir_z = -image_distance

    norm = np.sqrt(dir_x**2 + dir_y**2 + dir_z**2)
    return np.array([dir_x / norm, dir_y / norm, dir_z / norm])
