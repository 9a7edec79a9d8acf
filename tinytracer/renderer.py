"""
Ядро рендеринга методом обратной трассировки лучей (Whitted).
"""

import numpy as np
from numba import njit, prange
from .math_utils import dot, normalize, reflect, refract, offset_origin, length
from .scene import intersect_scene
from .environment import sample_environment
from .camera import get_ray

# Максимальная глубина рекурсии отражений/преломлений
MAX_DEPTH = 4

# Глубина обхода не больше MAX_DEPTH + 1, на каждом уровне в стеке
# остаётся не больше одного отложенного луча
STACK_SIZE = 2 * (MAX_DEPTH + 2)


@njit(cache=True)
def direct_lighting(point, normal, ray_dir, specular_exponent, scene):
    """
    Прямое освещение точки от всех точечных источников.

    Для каждого источника выпускается теневой луч; если он упирается
    в геометрию ближе источника, вклад источника пропускается целиком.

    Возвращает: (diffuse_intensity, specular_intensity)
    """
    diffuse_intensity = 0.0
    specular_intensity = 0.0

    for i in range(scene.light_positions.shape[0]):
        to_light = scene.light_positions[i] - point
        light_distance = length(to_light)
        light_dir = normalize(to_light)
        intensity = scene.light_intensities[i]

        # Теневой луч
        shadow_origin = offset_origin(point, normal, light_dir)
        shadow_hit, shadow_point, shadow_normal, shadow_mat, shadow_dist = intersect_scene(
            shadow_origin, light_dir, scene
        )
        if shadow_hit and shadow_dist < light_distance:
            continue

        diffuse_intensity += intensity * max(0.0, dot(light_dir, normal))
        highlight = max(0.0, -dot(reflect(-light_dir, normal), ray_dir))
        specular_intensity += highlight ** specular_exponent * intensity

    return diffuse_intensity, specular_intensity


@njit(cache=True)
def cast_ray(ray_origin, ray_dir, depth, scene):
    """
    Цвет вдоль луча.

    Алгоритм:
    1. Находим ближайшее пересечение со сценой
    2. Если пересечения нет или глубина больше MAX_DEPTH - берём цвет карты окружения
    3. Иначе считаем прямое освещение (диффузное + блик) с тенями
    4. Добавляем отражённый и преломлённый лучи с весами albedo[2] и albedo[3]

    Вместо рекурсии используется явный стек: итоговый цвет линеен по цветам
    вторичных лучей, поэтому каждый луч несёт свой вес (как throughput
    в трассировке путей).
    """
    color = np.zeros(3)

    stack_origin = np.zeros((STACK_SIZE, 3))
    stack_dir = np.zeros((STACK_SIZE, 3))
    stack_weight = np.zeros(STACK_SIZE)
    stack_depth = np.zeros(STACK_SIZE, dtype=np.int64)

    stack_origin[0] = ray_origin
    stack_dir[0] = ray_dir
    stack_weight[0] = 1.0
    # отрицательная глубина считается нулевой, иначе стек может переполниться
    stack_depth[0] = max(depth, 0)
    top = 1

    while top > 0:
        top -= 1
        origin = stack_origin[top].copy()
        direction = stack_dir[top].copy()
        weight = stack_weight[top]
        current_depth = stack_depth[top]

        if current_depth > MAX_DEPTH:
            color = color + sample_environment(direction, scene.envmap) * weight
            continue

        hit, point, normal, mat_id, distance = intersect_scene(origin, direction, scene)

        # Луч ушёл в окружение
        if not hit:
            color = color + sample_environment(direction, scene.envmap) * weight
            continue

        albedo = scene.albedo[mat_id]

        diffuse_intensity, specular_intensity = direct_lighting(
            point, normal, direction, scene.specular_exponent[mat_id], scene
        )
        local = (scene.diffuse_color[mat_id] * (diffuse_intensity * albedo[0])
                 + np.ones(3) * (specular_intensity * albedo[1]))
        color = color + local * weight

        # Отражённый луч
        if albedo[2] != 0.0:
            reflect_dir = normalize(reflect(direction, normal))
            stack_origin[top] = offset_origin(point, normal, reflect_dir)
            stack_dir[top] = reflect_dir
            stack_weight[top] = weight * albedo[2]
            stack_depth[top] = current_depth + 1
            top += 1

        # Преломлённый луч
        if albedo[3] != 0.0:
            refract_dir = normalize(refract(direction, normal, scene.refractive_index[mat_id]))
            stack_origin[top] = offset_origin(point, normal, refract_dir)
            stack_dir[top] = refract_dir
            stack_weight[top] = weight * albedo[3]
            stack_depth[top] = current_depth + 1
            top += 1

    return color


@njit(parallel=True, cache=True)
def render_image(width, height, image_distance, cam_position, scene):
    """
    Рендеринг изображения.

    Для каждого пикселя выпускается один луч из камеры.
    Строки обрабатываются параллельно: каждая задача пишет только в свою строку.
    """
    image = np.zeros((height, width, 3))

    # Параллельный цикл по строкам
    for y in prange(height):
        for x in range(width):
            direction = get_ray(x, y, width, height, image_distance)
            image[y, x] = cast_ray(cam_position, direction, 0, scene)

    return image
