"""
Vertex Locator
==============
Finds the three corners of the triangular glyph in a raster image by scanning
its alpha channel.

A single extremal pixel is noisy against anti-aliased or jagged edges, so each
corner is picked from a narrow band around the extremal row/column:

- top: the topmost band, the pixel whose x is closest to the band's mean x.
- left: the leftmost band, its lowest pixel.
- right: the rightmost band, its lowest pixel.

The locator never fails on image contents. A fully transparent image yields a
canonical triangle spanning the image bounds, so a broken asset only shifts
the triangle instead of crashing the picker.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

from triadpicker.config import LocatorSettings
from triadpicker.model.geometry_primitives import Point2D, Role, Triangle

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def fallback_triangle(width: int, height: int) -> Triangle:
    """Top-center, bottom-left and bottom-right corners of a ``width`` x ``height`` image."""
    return Triangle(
        top=Point2D(width / 2.0, 0.0),
        left=Point2D(0.0, float(height - 1)),
        right=Point2D(float(width - 1), float(height - 1)),
    )


def alpha_channel(pixels: npt.ArrayLike, width: int, height: int) -> npt.NDArray:
    """
    Extract the alpha plane of a pixel buffer as a (height, width) array.

    Args:
        pixels: An (H, W, 4) RGBA array, an (H, W) alpha array, or a flat RGBA
            byte buffer of length ``W * H * 4`` (row-major, as canvas image data).
        width: Displayed width in pixels.
        height: Displayed height in pixels.

    Raises:
        ValueError: If the buffer does not match the given size.
    """
    arr = np.asarray(pixels)

    if arr.ndim == 1:
        if arr.size != width * height * 4:
            raise ValueError(f"Flat RGBA buffer of {width}x{height} needs {width * height * 4} values, got {arr.size}.")
        arr = arr.reshape(height, width, 4)

    if arr.ndim == 3:
        if arr.shape[2] != 4:
            raise ValueError(f"Expected 4 channels (RGBA), got {arr.shape[2]}.")
        arr = arr[..., 3]

    if arr.shape != (height, width):
        raise ValueError(f"Expected alpha plane of shape {(height, width)}, got {arr.shape}.")

    return arr


def _closest_to(values: npt.NDArray, target: float, xs: npt.NDArray, ys: npt.NDArray) -> Point2D:
    i = int(np.argmin(np.abs(values - target)))
    return Point2D(float(xs[i]), float(ys[i]))


def _find_top(xs: npt.NDArray, ys: npt.NDArray, band: float) -> Optional[Point2D]:
    if ys.size == 0:
        return None

    extreme = ys.min()
    in_band = np.abs(ys - extreme) <= band
    if not in_band.any():
        return _closest_to(ys, extreme, xs, ys)

    bx, by = xs[in_band], ys[in_band]
    i = int(np.argmin(np.abs(bx - bx.mean())))
    return Point2D(float(bx[i]), float(by[i]))


def _find_side(xs: npt.NDArray, ys: npt.NDArray, band: float, leftmost: bool) -> Optional[Point2D]:
    if xs.size == 0:
        return None

    extreme = xs.min() if leftmost else xs.max()
    in_band = np.abs(xs - extreme) <= band
    if not in_band.any():
        return _closest_to(xs, extreme, xs, ys)

    # argmax returns the first hit in row-major scan order on ties
    bx, by = xs[in_band], ys[in_band]
    i = int(np.argmax(by))
    return Point2D(float(bx[i]), float(by[i]))


def locate_vertices(
    pixels: npt.ArrayLike,
    width: int,
    height: int,
    settings: Optional[LocatorSettings] = None
) -> Triangle:
    """
    Locate the triangle corners in image-local coordinates.

    Args:
        pixels: Decoded image at its displayed size (see `alpha_channel`).
        width: Displayed width in pixels.
        height: Displayed height in pixels.
        settings: Alpha threshold and band width; defaults from `triadpicker.config`.

    Returns:
        The located triangle, or `fallback_triangle` when no pixel is visible.
        The result may be degenerate for a line-shaped glyph; callers that map
        points through it should check `Triangle.is_degenerate`.
    """
    settings = settings or LocatorSettings()
    alpha = alpha_channel(pixels, width, height)

    ys, xs = np.nonzero(alpha >= settings.alpha_threshold)
    logger.debug(f"Vertex scan {width}x{height}: {xs.size} visible pixels (alpha >= {settings.alpha_threshold}).")

    fallback = fallback_triangle(width, height)
    if xs.size == 0:
        logger.warning("No visible pixels in triangle image, using the image bounds.")
        return fallback

    corners = {
        Role.TOP: _find_top(xs, ys, settings.band),
        Role.LEFT: _find_side(xs, ys, settings.band, leftmost=True),
        Role.RIGHT: _find_side(xs, ys, settings.band, leftmost=False),
    }
    for role, corner in corners.items():
        if corner is None:
            logger.warning(f"No candidate for the {role} corner, using the image bounds.")
            corners[role] = fallback.vertex(role)

    triangle = Triangle(top=corners[Role.TOP], left=corners[Role.LEFT], right=corners[Role.RIGHT])

    if triangle.is_degenerate():
        logger.warning(f"Located triangle is degenerate: {triangle}")
    else:
        logger.debug(f"Located triangle: {triangle}")
    return triangle
