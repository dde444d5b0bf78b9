import numpy as np
from PIL import Image

from palette_theme.image_io import is_image_file, load_pixel_buffer


def _write_png(path, arr):
    Image.fromarray(arr).save(path)
    return path


def test_rgba_png_round_trip(tmp_path):
    arr = np.zeros((3, 4, 4), dtype=np.uint8)
    arr[..., 0] = 200
    arr[..., 3] = 255
    arr[0, 0, 3] = 0
    buf = load_pixel_buffer(_write_png(tmp_path / "a.png", arr))
    assert (buf.width, buf.height) == (4, 3)
    assert buf.rgba[1, 1].tolist() == [200, 0, 0, 255]
    assert buf.rgba[0, 0, 3] == 0


def test_rgb_png_becomes_opaque(tmp_path):
    arr = np.full((2, 2, 3), 77, dtype=np.uint8)
    buf = load_pixel_buffer(_write_png(tmp_path / "b.png", arr))
    assert np.all(buf.alpha == 255)
    assert np.all(buf.rgb == 77)


def test_max_height_resizes(tmp_path):
    arr = np.full((40, 20, 3), 10, dtype=np.uint8)
    path = _write_png(tmp_path / "c.png", arr)
    buf = load_pixel_buffer(path, max_height=10)
    assert (buf.width, buf.height) == (5, 10)
    assert load_pixel_buffer(path, max_height=100).height == 40


def test_is_image_file(tmp_path):
    good = _write_png(tmp_path / "d.png", np.zeros((1, 1, 3), dtype=np.uint8))
    bad = tmp_path / "e.png"
    bad.write_text("not an image")
    assert is_image_file(good)
    assert not is_image_file(bad)
