"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tinytracer.scene import Scene  # noqa: E402

SKY = (0.1, 0.2, 0.9)


@pytest.fixture
def constant_envmap():
    """Карта окружения одного цвета."""
    envmap = np.zeros((8, 16, 3))
    envmap[:, :] = SKY
    return envmap


@pytest.fixture
def gradient_envmap():
    """Карта окружения, где каждый тексель имеет свой цвет: (строка, столбец, 0) / 100."""
    rows, cols = np.meshgrid(np.arange(8), np.arange(16), indexing='ij')
    envmap = np.zeros((8, 16, 3))
    envmap[..., 0] = rows / 100.0
    envmap[..., 1] = cols / 100.0
    return envmap


@pytest.fixture
def sphere_scene(constant_envmap):
    """Одна красная сфера радиуса 2 в (0, 0, -10) и один источник света."""
    scene = Scene()
    scene.set_environment(constant_envmap)
    red = scene.add_material(albedo=(0.9, 0.1, 0.0, 0.0),
                             diffuse_color=(0.3, 0.1, 0.1), specular_exponent=10.0)
    scene.add_sphere((0.0, 0.0, -10.0), 2.0, red)
    scene.add_light((10.0, 10.0, 10.0), 1.5)
    scene.compile()
    return scene
