"""
Создание сцены со снеговиком.
"""

from .scene import Scene
from .mesh import load_obj

# Материалы по умолчанию: (показатель преломления, albedo, цвет, блеск)
DEFAULT_MATERIALS = {
    'ivory': dict(refractive_index=1.0, albedo=(0.6, 0.3, 0.1, 0.0),
                  diffuse_color=(0.0, 0.0, 0.0), specular_exponent=50.0),
    'glass': dict(refractive_index=1.5, albedo=(0.0, 0.5, 0.1, 0.8),
                  diffuse_color=(0.6, 0.7, 0.8), specular_exponent=125.0),
    'red_rubber': dict(refractive_index=1.0, albedo=(0.9, 0.1, 0.0, 0.0),
                       diffuse_color=(0.3, 0.1, 0.1), specular_exponent=10.0),
    'snow': dict(refractive_index=1.0, albedo=(0.9, 0.1, 0.0, 0.0),
                 diffuse_color=(1.0, 1.0, 1.0), specular_exponent=10.0),
    'mirror': dict(refractive_index=1.0, albedo=(0.0, 10.0, 0.8, 0.0),
                   diffuse_color=(1.0, 1.0, 1.0), specular_exponent=1425.0),
    # Материал пуговиц-моделей
    'mesh': dict(refractive_index=1.0, albedo=(1.0, 0.0, 0.0, 0.0),
                 diffuse_color=(0.3, 0.1, 0.1), specular_exponent=0.0),
}

# Снеговик: два снежных шара, глаза и пуговицы из слоновой кости
DEFAULT_SPHERES = [
    {'center': (-1.0, -1.5, -22.0), 'radius': 3.0, 'material': 'snow'},
    {'center': (-1.0, 2.0, -21.0), 'radius': 2.0, 'material': 'snow'},
    {'center': (-1.3, 2.5, -19.1), 'radius': 0.2, 'material': 'ivory'},
    {'center': (-0.3, 2.5, -19.1), 'radius': 0.2, 'material': 'ivory'},
    {'center': (-1.8, 1.4, -19.2), 'radius': 0.2, 'material': 'ivory'},
    {'center': (-1.2, 1.2, -19.2), 'radius': 0.2, 'material': 'ivory'},
    {'center': (-0.5, 1.2, -19.2), 'radius': 0.2, 'material': 'ivory'},
    {'center': (0.1, 1.4, -19.2), 'radius': 0.2, 'material': 'ivory'},
]

DEFAULT_MESHES = [
    {'path': 'boutonF.obj', 'translate': (-0.7, -2.0, -17.5), 'material': 'mesh'},
    {'path': 'boutonF.obj', 'translate': (-0.7, -1.0, -17.0), 'material': 'mesh'},
    {'path': 'boutonF.obj', 'translate': (-0.7, -0.2, -16.5), 'material': 'mesh'},
]

DEFAULT_LIGHTS = [
    {'position': (30.0, 20.0, 30.0), 'intensity': 1.7},
]


def create_snowman_scene(config: dict, envmap) -> Scene:
    """
    Создаёт сцену со снеговиком на шахматной плоскости.
    Параметры настраиваются через словарь config.

    Отсутствующие или повреждённые файлы моделей пропускаются с предупреждением.
    """
    scene = Scene()
    scene.set_environment(envmap)

    # Создаём материалы
    materials = {}
    for name, params in config.get('materials', DEFAULT_MATERIALS).items():
        materials[name] = scene.add_material(**params)

    # Сферы
    for sphere in config.get('spheres', DEFAULT_SPHERES):
        scene.add_sphere(sphere['center'], sphere['radius'], materials[sphere['material']])

    # Модели
    for item in config.get('meshes', DEFAULT_MESHES):
        try:
            mesh = load_obj(item['path'])
        except (OSError, ValueError) as exc:
            print(f"Предупреждение: модель {item['path']} пропущена ({exc})")
            continue
        mesh.translate(*item.get('translate', (0.0, 0.0, 0.0)))
        scene.add_mesh(mesh, materials[item['material']])

    # Источники света
    for light in config.get('lights', DEFAULT_LIGHTS):
        scene.add_light(light['position'], light['intensity'])

    # Шахматная плоскость
    board = config.get('checkerboard')
    if board is None or board.get('enabled', True):
        board = board or {}
        even = scene.add_material(diffuse_color=board.get('even_color', (0.3, 0.3, 0.3)))
        odd = scene.add_material(diffuse_color=board.get('odd_color', (0.3, 0.2, 0.1)))
        scene.add_checkerboard(even, odd, y=board.get('y', -4.0))

    scene.compile()
    return scene
