import numpy as np
from PIL import Image

import main


def test_missing_environment_map_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.setitem(main.CONFIG, 'envmap', str(tmp_path / "missing.jpg"))
    monkeypatch.setitem(main.CONFIG, 'output', str(tmp_path / "out.jpg"))

    assert main.main() == 1
    assert "missing.jpg" in capsys.readouterr().err
    assert not (tmp_path / "out.jpg").exists()


def test_small_render(tmp_path, monkeypatch):
    envmap = np.full((16, 32, 3), 120, dtype=np.uint8)
    Image.fromarray(envmap).save(tmp_path / "envmap.png")

    monkeypatch.chdir(tmp_path)
    monkeypatch.setitem(main.CONFIG, 'envmap', "envmap.png")
    monkeypatch.setitem(main.CONFIG, 'output', "out.jpg")
    monkeypatch.setitem(main.CONFIG, 'width', 32)
    monkeypatch.setitem(main.CONFIG, 'height', 24)

    assert main.main() == 0
    with Image.open(tmp_path / "out.jpg") as img:
        assert img.size == (32, 24)
