"""
Сцена: хранение геометрии, материалов и источников света,
поиск ближайшего пересечения луча со сценой.
"""

from typing import NamedTuple

import numpy as np
from numba import njit
from .geometry import (ray_sphere_intersect, ray_triangle_intersect,
                       ray_plane_intersect, compute_triangle_normal)
from .math_utils import normalize

# Дальше этого расстояния луч считается ушедшим в окружение
MAX_DISTANCE = 1000.0


class Material(NamedTuple):
    """
    Материал поверхности.

    albedo - веса вкладов: (диффузный, зеркальный блик, отражение, преломление).
    """
    refractive_index: float = 1.0
    albedo: tuple = (1.0, 0.0, 0.0, 0.0)
    diffuse_color: tuple = (0.0, 0.0, 0.0)
    specular_exponent: float = 0.0


class Light(NamedTuple):
    position: tuple
    intensity: float


class Sphere(NamedTuple):
    center: tuple
    radius: float
    material_id: int


class SceneData(NamedTuple):
    """Неизменяемые массивы сцены, которые передаются в numba-функции."""
    sphere_centers: np.ndarray          # (n_spheres, 3)
    sphere_radii: np.ndarray            # (n_spheres,)
    sphere_materials: np.ndarray        # (n_spheres,)
    triangles: np.ndarray               # (n_triangles, 3, 3)
    triangle_normals: np.ndarray        # (n_triangles, 3)
    triangle_materials: np.ndarray      # (n_triangles,)
    has_plane: bool                     # есть ли шахматная плоскость
    plane_y: float
    plane_x_limit: float
    plane_z_min: float
    plane_z_max: float
    plane_materials: np.ndarray         # (2,) - чётные и нечётные клетки
    light_positions: np.ndarray         # (n_lights, 3)
    light_intensities: np.ndarray       # (n_lights,)
    refractive_index: np.ndarray        # (n_materials,)
    albedo: np.ndarray                  # (n_materials, 4)
    diffuse_color: np.ndarray           # (n_materials, 3)
    specular_exponent: np.ndarray       # (n_materials,)
    envmap: np.ndarray                  # (height, width, 3)


class Scene:
    """
    Контейнер для 3D сцены.

    Хранит:
        - Сферы, треугольные сетки и шахматную плоскость
        - Материалы
        - Точечные источники света
        - Карту окружения

    После добавления всех объектов нужно вызвать compile(),
    который упаковывает сцену в неизменяемый SceneData.
    """

    def __init__(self):
        self._materials = []
        self._spheres = []
        self._meshes = []        # (mesh, material_id)
        self._lights = []
        self._plane = None
        self.environment = None
        self.data = None

    def add_material(self, refractive_index=1.0, albedo=(1.0, 0.0, 0.0, 0.0),
                     diffuse_color=(0.0, 0.0, 0.0), specular_exponent=0.0):
        """
        Добавляет материал.

        Параметры:
            refractive_index: показатель преломления (>= 1)
            albedo: веса (диффузный, блик, отражение, преломление)
            diffuse_color: цвет диффузного отражения
            specular_exponent: показатель блеска по Фонгу (>= 0)

        Возвращает индекс материала.
        """
        if refractive_index < 1.0:
            raise ValueError(f"показатель преломления должен быть >= 1: {refractive_index}")
        if specular_exponent < 0.0:
            raise ValueError(f"показатель блеска должен быть >= 0: {specular_exponent}")
        if len(albedo) != 4:
            raise ValueError(f"albedo должно содержать 4 компоненты: {albedo}")

        self._materials.append(Material(
            float(refractive_index), tuple(albedo), tuple(diffuse_color),
            float(specular_exponent)
        ))
        return len(self._materials) - 1

    def _check_material(self, material_id):
        if not 0 <= material_id < len(self._materials):
            raise ValueError(f"неизвестный материал: {material_id}")

    def add_sphere(self, center, radius, material_id):
        """Добавляет сферу с заданным материалом."""
        if radius <= 0:
            raise ValueError(f"радиус сферы должен быть > 0: {radius}")
        self._check_material(material_id)
        self._spheres.append(Sphere(tuple(center), float(radius), material_id))

    def add_mesh(self, mesh, material_id):
        """Добавляет треугольную сетку; все её грани используют один материал."""
        self._check_material(material_id)
        self._meshes.append((mesh, material_id))

    def add_light(self, position, intensity):
        """Добавляет точечный источник света."""
        if intensity <= 0:
            raise ValueError(f"интенсивность источника должна быть > 0: {intensity}")
        self._lights.append(Light(tuple(position), float(intensity)))

    def add_checkerboard(self, even_material_id, odd_material_id, y=-4.0,
                         x_limit=40.0, z_min=-50.0, z_max=30.0):
        """
        Добавляет шахматную плоскость y = const, ограниченную
        прямоугольником |x| <= x_limit, z_min < z < z_max.
        """
        self._check_material(even_material_id)
        self._check_material(odd_material_id)
        self._plane = (float(y), float(x_limit), float(z_min), float(z_max),
                       even_material_id, odd_material_id)

    def set_environment(self, envmap):
        """Задаёт карту окружения shape (height, width, 3)."""
        envmap = np.ascontiguousarray(envmap, dtype=np.float64)
        if envmap.ndim != 3 or envmap.shape[2] != 3:
            raise ValueError(f"карта окружения должна иметь shape (h, w, 3): {envmap.shape}")
        self.environment = envmap

    def compile(self) -> SceneData:
        """
        Компилирует сцену в numpy массивы для быстрого доступа.
        Вызывать после добавления всей геометрии.
        """
        if self.environment is None:
            raise ValueError("карта окружения не задана")

        n_spheres = len(self._spheres)
        n_mats = len(self._materials)

        # Сферы
        sphere_centers = np.zeros((n_spheres, 3), dtype=np.float64)
        sphere_radii = np.zeros(n_spheres, dtype=np.float64)
        sphere_materials = np.zeros(n_spheres, dtype=np.int64)
        for i, sphere in enumerate(self._spheres):
            sphere_centers[i] = sphere.center
            sphere_radii[i] = sphere.radius
            sphere_materials[i] = sphere.material_id

        # Треугольники всех сеток (уже со смещением)
        triangle_chunks = [np.zeros((0, 3, 3), dtype=np.float64)]
        material_chunks = [np.zeros(0, dtype=np.int64)]
        for mesh, material_id in self._meshes:
            tris = mesh.triangles()
            triangle_chunks.append(tris)
            material_chunks.append(np.full(len(tris), material_id, dtype=np.int64))
        triangles = np.ascontiguousarray(np.concatenate(triangle_chunks))
        triangle_materials = np.concatenate(material_chunks)

        # Предвычисляем нормали
        n_tris = len(triangles)
        triangle_normals = np.zeros((n_tris, 3), dtype=np.float64)
        for i in range(n_tris):
            triangle_normals[i] = compute_triangle_normal(
                triangles[i, 0], triangles[i, 1], triangles[i, 2]
            )

        # Материалы
        refractive_index = np.zeros(n_mats, dtype=np.float64)
        albedo = np.zeros((n_mats, 4), dtype=np.float64)
        diffuse_color = np.zeros((n_mats, 3), dtype=np.float64)
        specular_exponent = np.zeros(n_mats, dtype=np.float64)
        for i, mat in enumerate(self._materials):
            refractive_index[i] = mat.refractive_index
            albedo[i] = mat.albedo
            diffuse_color[i] = mat.diffuse_color
            specular_exponent[i] = mat.specular_exponent

        # Источники света
        light_positions = np.zeros((len(self._lights), 3), dtype=np.float64)
        light_intensities = np.zeros(len(self._lights), dtype=np.float64)
        for i, light in enumerate(self._lights):
            light_positions[i] = light.position
            light_intensities[i] = light.intensity

        # Шахматная плоскость
        if self._plane is not None:
            plane_y, x_limit, z_min, z_max, even_id, odd_id = self._plane
            has_plane = True
        else:
            plane_y, x_limit, z_min, z_max, even_id, odd_id = 0.0, 0.0, 0.0, 0.0, -1, -1
            has_plane = False

        self.data = SceneData(
            sphere_centers, sphere_radii, sphere_materials,
            triangles, triangle_normals, triangle_materials,
            has_plane, plane_y, x_limit, z_min, z_max,
            np.array([even_id, odd_id], dtype=np.int64),
            light_positions, light_intensities,
            refractive_index, albedo, diffuse_color, specular_exponent,
            self.environment,
        )

        print(f"Сцена: {n_spheres} сфер, {n_tris} треугольников, "
              f"{n_mats} материалов, {len(self._lights)} источников света")
        return self.data


@njit(cache=True)
def intersect_scene(ray_origin, ray_dir, scene):
    """
    Поиск ближайшего пересечения луча со сценой.

    Перебирает все сферы, все треугольники и шахматную плоскость.

    Возвращает: (hit, hit_point, normal, material_id, distance)
        hit: True, если ближайшее пересечение ближе MAX_DISTANCE
        hit_point: точка пересечения
        normal: нормаль в точке пересечения
        material_id: индекс материала (-1 если нет пересечения)
        distance: расстояние до точки пересечения
    """
    hit_point = np.zeros(3)
    normal = np.zeros(3)
    material_id = -1

    # Сферы
    spheres_dist = np.inf
    for i in range(scene.sphere_centers.shape[0]):
        t = ray_sphere_intersect(
            ray_origin, ray_dir, scene.sphere_centers[i], scene.sphere_radii[i]
        )
        if t >= 0.0 and t < spheres_dist:
            spheres_dist = t
            hit_point = ray_origin + ray_dir * t
            normal = normalize(hit_point - scene.sphere_centers[i])
            material_id = scene.sphere_materials[i]

    # Треугольники сеток
    mesh_dist = np.inf
    for i in range(scene.triangles.shape[0]):
        t = ray_triangle_intersect(
            ray_origin, ray_dir,
            scene.triangles[i, 0], scene.triangles[i, 1], scene.triangles[i, 2]
        )
        if t > 0.0 and t < mesh_dist and t < spheres_dist:
            mesh_dist = t
            hit_point = ray_origin + ray_dir * t
            normal = scene.triangle_normals[i].copy()
            material_id = scene.triangle_materials[i]

    # Шахматная плоскость y = plane_y
    plane_dist = np.inf
    d = -1.0
    if scene.has_plane:
        d = ray_plane_intersect(ray_origin, ray_dir, scene.plane_y)
    if d > 0.0:
        pt = ray_origin + ray_dir * d
        if (abs(pt[0]) <= scene.plane_x_limit
                and pt[2] > scene.plane_z_min and pt[2] < scene.plane_z_max
                and d < spheres_dist and d < mesh_dist):
            plane_dist = d
            hit_point = pt
            normal = np.array([0.0, 1.0, 0.0])
            parity = int(np.floor(0.5 * pt[0]) + np.floor(0.5 * pt[2])) & 1
            material_id = scene.plane_materials[parity]

    distance = min(spheres_dist, min(mesh_dist, plane_dist))
    return distance < MAX_DISTANCE, hit_point, normal, material_id, distance
