import numpy as np
import pytest
from PySide6.QtCore import QCoreApplication


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """Signals and QImage need a Qt application object; no GUI is required."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


def make_triangle_alpha(size: int = 101, alpha: int = 255) -> np.ndarray:
    """Alpha plane of an isosceles triangle: apex at (size//2, 0), base on the last row."""
    half = size // 2
    ys, xs = np.mgrid[0:size, 0:size]
    mask = np.abs(xs - half) <= ys / 2.0
    return np.where(mask, alpha, 0).astype(np.uint8)


@pytest.fixture
def triangle_rgba():
    alpha = make_triangle_alpha()
    h, w = alpha.shape
    rgba = np.zeros((h, w, 4), dtype=np.uint8)
    rgba[..., 0] = 200
    rgba[..., 3] = alpha
    return rgba, w, h
