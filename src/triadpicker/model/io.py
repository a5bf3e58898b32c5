"""
Image Input
Decodes the triangle image into the RGBA buffer the vertex locator scans.
"""
import logging
import os
from typing import Optional

import numpy as np
import numpy.typing as npt
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage

logger = logging.getLogger(__name__)


def qimage_to_rgba(image: QImage) -> npt.NDArray[np.uint8]:
    """
    Copy a QImage into a (height, width, 4) uint8 RGBA array.

    Rows are cut out of the padded scanlines, so any width works.
    """
    rgba = image.convertToFormat(QImage.Format.Format_RGBA8888)
    w, h = rgba.width(), rgba.height()
    stride = rgba.bytesPerLine()

    buffer = np.frombuffer(rgba.constBits(), dtype=np.uint8, count=stride * h)
    return buffer.reshape(h, stride)[:, :w * 4].reshape(h, w, 4).copy()


def load_rgba(
    filepath: str,
    width: Optional[int] = None,
    height: Optional[int] = None
) -> npt.NDArray[np.uint8]:
    """
    Load an image file, optionally scaled to its displayed size.

    The vertex locator works in the coordinates of the displayed image, so pass
    the size the image is drawn at (see `triadpicker.model.layout`).

    Args:
        filepath: Path to a raster image with an alpha channel (e.g. PNG).
        width: Displayed width; requires `height` as well.
        height: Displayed height; requires `width` as well.

    Returns:
        (height, width, 4) uint8 RGBA array.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be decoded or only one dimension is given.
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Image file not found: {filepath}")
    if (width is None) != (height is None):
        raise ValueError("Pass both width and height, or neither.")

    image = QImage(filepath)
    if image.isNull():
        raise ValueError(f"Could not decode image: {filepath}")

    if not image.hasAlphaChannel():
        logger.warning(f"Image '{filepath}' has no alpha channel; every pixel counts as visible.")

    if width is not None and (width, height) != (image.width(), image.height()):
        image = image.scaled(
            width, height,
            Qt.AspectRatioMode.IgnoreAspectRatio,
            Qt.TransformationMode.SmoothTransformation
        )

    logger.info(f"Loaded image '{filepath}' at {image.width()}x{image.height()}.")
    return qimage_to_rgba(image)
