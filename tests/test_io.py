import numpy as np
import pytest
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QImage

from triadpicker.model.io import load_rgba, qimage_to_rgba
from triadpicker.model.vertex_locator import locate_vertices


def make_image(width: int = 21, height: int = 11) -> QImage:
    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(Qt.GlobalColor.transparent)
    # apex, base-left and base-right of a small triangle
    image.setPixelColor(10, 0, QColor(255, 0, 0, 255))
    for x in range(0, width):
        image.setPixelColor(x, height - 1, QColor(0, 0, 255, 200))
    return image


def test_qimage_to_rgba():
    rgba = qimage_to_rgba(make_image())
    assert rgba.shape == (11, 21, 4)
    assert rgba.dtype == np.uint8
    assert list(rgba[0, 10]) == [255, 0, 0, 255]
    assert list(rgba[10, 3]) == [0, 0, 255, 200]
    assert rgba[5, 5, 3] == 0


def test_decoded_image_feeds_locator():
    rgba = qimage_to_rgba(make_image())
    triangle = locate_vertices(rgba, 21, 11)
    assert (triangle.top.x, triangle.top.y) == (10, 0)
    assert (triangle.left.x, triangle.left.y) == (0, 10)
    assert (triangle.right.x, triangle.right.y) == (17, 10)


def test_load_rgba_from_png(tmp_path):
    path = tmp_path / "triangle.png"
    assert make_image().save(str(path))

    rgba = load_rgba(str(path))
    assert rgba.shape == (11, 21, 4)
    assert rgba[0, 10, 3] == 255

    scaled = load_rgba(str(path), 42, 22)
    assert scaled.shape == (22, 42, 4)


def test_load_rgba_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rgba(str(tmp_path / "missing.png"))

    not_an_image = tmp_path / "notes.png"
    not_an_image.write_text("not an image", encoding="utf-8")
    with pytest.raises(ValueError, match="Could not decode"):
        load_rgba(str(not_an_image))

    path = tmp_path / "triangle.png"
    make_image().save(str(path))
    with pytest.raises(ValueError):
        load_rgba(str(path), width=10)
