"""
Треугольная сетка и загрузка моделей из файлов Wavefront OBJ.
"""

import numpy as np
import pywavefront
from pywavefront.exceptions import PywavefrontException


class Mesh:
    """
    Треугольная сетка.

    Хранит:
        - вершины: shape (n_vertices, 3)
        - грани: shape (n_faces, 3) - индексы вершин
        - смещение, которое добавляется ко всем вершинам
    """

    def __init__(self, vertices, faces):
        self.vertices = np.array(vertices, dtype=np.float64).reshape(-1, 3)
        self.faces = np.array(faces, dtype=np.int64).reshape(-1, 3)
        self.offset = np.zeros(3, dtype=np.float64)

        if len(self.faces) > 0:
            if self.faces.min() < 0 or self.faces.max() >= len(self.vertices):
                raise ValueError("индекс вершины грани выходит за пределы сетки")

    def face_count(self) -> int:
        return len(self.faces)

    def vertex_index(self, face: int, corner: int) -> int:
        """Индекс вершины для угла corner (0..2) грани face."""
        return int(self.faces[face, corner])

    def vertex_position(self, vertex_id: int) -> np.ndarray:
        """Положение вершины с учётом смещения."""
        return self.vertices[vertex_id] + self.offset

    def translate(self, dx: float, dy: float, dz: float):
        """Сдвигает всю сетку."""
        self.offset = self.offset + np.array([dx, dy, dz], dtype=np.float64)

    def triangles(self) -> np.ndarray:
        """Вершины всех треугольников, shape (n_faces, 3, 3)."""
        if len(self.faces) == 0:
            return np.zeros((0, 3, 3), dtype=np.float64)
        return self.vertices[self.faces] + self.offset


def load_obj(filename) -> Mesh:
    """
    Загружает модель из файла OBJ через pywavefront.

    Многоугольники pywavefront разбивает на треугольники веером,
    индексы граней (в том числе отрицательные) приводятся к 0-базе.
    Грани всех объектов файла собираются в одну сетку.

    Исключения:
        OSError: файл не найден или не читается
        ValueError: файл повреждён (короткая запись v, индекс вне диапазона)
    """
    try:
        scene = pywavefront.Wavefront(str(filename), collect_faces=True,
                                      create_materials=True)
    except (IndexError, ValueError, PywavefrontException) as exc:
        raise ValueError(f"некорректный файл модели {filename}: {exc}") from exc

    vertices = [v[:3] for v in scene.vertices]
    faces = []
    for obj in scene.mesh_list:
        faces.extend(obj.faces)

    print(f"Модель {filename}: {len(vertices)} вершин, {len(faces)} граней")
    return Mesh(vertices, faces)
