import numpy as np

from tinytracer.renderer import cast_ray
from tinytracer.snowman import create_snowman_scene, DEFAULT_SPHERES


def _button_obj(tmp_path):
    path = tmp_path / "button.obj"
    path.write_text(
        "v -0.2 -0.2 0\n"
        "v 0.2 -0.2 0\n"
        "v 0.2 0.2 0\n"
        "v -0.2 0.2 0\n"
        "f 1 2 3 4\n"
    )
    return path


def test_default_scene_skips_missing_meshes(tmp_path, monkeypatch, constant_envmap, capsys):
    monkeypatch.chdir(tmp_path)
    scene = create_snowman_scene({}, constant_envmap)
    data = scene.data

    assert len(data.sphere_centers) == len(DEFAULT_SPHERES)
    assert len(data.triangles) == 0
    assert data.has_plane
    assert len(data.light_positions) == 1
    assert "boutonF.obj" in capsys.readouterr().out


def test_meshes_are_loaded_and_translated(tmp_path, constant_envmap):
    config = {
        'meshes': [
            {'path': str(_button_obj(tmp_path)), 'translate': (-0.7, -2.0, -17.5), 'material': 'mesh'},
        ],
    }
    data = create_snowman_scene(config, constant_envmap).data

    assert data.triangles.shape == (2, 3, 3)
    assert np.allclose(data.triangles[:, :, 2], -17.5)
    assert np.allclose(data.diffuse_color[data.triangle_materials[0]], [0.3, 0.1, 0.1])


def test_malformed_mesh_is_skipped(tmp_path, constant_envmap, capsys):
    broken = tmp_path / "broken.obj"
    broken.write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 0 1 2\n")
    config = {
        'meshes': [
            {'path': str(broken), 'material': 'mesh'},
            {'path': str(_button_obj(tmp_path)), 'translate': (0.0, 0.0, -5.0), 'material': 'mesh'},
        ],
    }
    data = create_snowman_scene(config, constant_envmap).data

    assert data.triangles.shape == (2, 3, 3)
    assert "broken.obj" in capsys.readouterr().out


def test_checkerboard_can_be_disabled(constant_envmap):
    data = create_snowman_scene({'checkerboard': {'enabled': False}, 'meshes': []},
                                constant_envmap).data
    assert not data.has_plane


def test_snowman_is_visible(constant_envmap):
    data = create_snowman_scene({'meshes': []}, constant_envmap).data
    # луч в центр нижнего снежного шара
    direction = np.array([-1.0, -1.5, -22.0])
    direction /= np.linalg.norm(direction)
    color = cast_ray(np.zeros(3), direction, 0, data)
    assert not np.allclose(color, constant_envmap[0, 0])
