"""
Ray Tracer - синтез изображений методом обратной трассировки лучей.

Сцена: снеговик на шахматной плоскости, сферы, модели из OBJ-файлов
и карта окружения. Отражения, преломления и жёсткие тени.

Запуск: python main.py
"""

import sys
import time

import numba

from tinytracer.camera import Camera
from tinytracer.environment import load_environment_map, EnvironmentMapError
from tinytracer.snowman import (
    create_snowman_scene, DEFAULT_MATERIALS, DEFAULT_SPHERES, DEFAULT_MESHES, DEFAULT_LIGHTS
)
from tinytracer.renderer import render_image
from tinytracer.postprocess import tonemap, save_image


# ==================== КОНФИГУРАЦИЯ ====================

CONFIG = {
    # --- Параметры рендеринга ---
    'width': 1024,              # ширина изображения
    'height': 768,              # высота изображения
    'threads': None,            # число потоков numba (None = все ядра)

    # --- Камера ---
    'camera_position': [0, 0, 0],  # камера смотрит вдоль -Z
    'camera_fov': 60,              # угол обзора по вертикали (градусы)

    # --- Файлы ---
    'envmap': 'envmap.jpg',     # карта окружения (обязательна)
    'output': 'out.jpg',
    'jpeg_quality': 100,

    # --- Сцена ---
    'materials': DEFAULT_MATERIALS,
    'spheres': DEFAULT_SPHERES,
    'meshes': DEFAULT_MESHES,
    'lights': DEFAULT_LIGHTS,
    'checkerboard': {
        'enabled': True,
        'y': -4.0,
        'even_color': [0.3, 0.3, 0.3],
        'odd_color': [0.3, 0.2, 0.1],
    },
}


def main():
    """Основная функция рендеринга. Возвращает код завершения."""

    print("=" * 60)
    print("Ray Tracer - Трассировка лучей")
    print("=" * 60)

    if CONFIG['threads']:
        numba.set_num_threads(CONFIG['threads'])

    # 1. Загружаем карту окружения
    print("\n[1/4] Загрузка карты окружения...")
    try:
        envmap = load_environment_map(CONFIG['envmap'])
    except EnvironmentMapError as exc:
        print(f"Ошибка: {exc}", file=sys.stderr)
        return 1

    # 2. Создаём сцену
    print("[2/4] Создание сцены...")
    scene = create_snowman_scene(CONFIG, envmap)
    camera = Camera(
        position=CONFIG['camera_position'],
        fov=CONFIG['camera_fov'],
        width=CONFIG['width'],
        height=CONFIG['height']
    )

    # 3. Рендеринг
    print(f"[3/4] Рендеринг {CONFIG['width']}x{CONFIG['height']}...")

    start_time = time.time()

    framebuffer = render_image(
        camera.width, camera.height, camera.image_distance,
        camera.position, scene.data
    )

    elapsed = time.time() - start_time
    print(f"      Завершено за {elapsed:.1f} секунд")

    # 4. Постобработка и сохранение
    print("[4/4] Постобработка и сохранение...")
    pixels = tonemap(framebuffer)
    save_image(CONFIG['output'], pixels, quality=CONFIG['jpeg_quality'])

    print("\n" + "=" * 60)
    print("Готово!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
