"""Placement of the triangle image inside a canvas."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from triadpicker.config import CanvasLayout
from triadpicker.model.geometry_primitives import Point2D


@dataclass(frozen=True)
class ImageRect:
    """Where (and how large) the image is drawn on the canvas."""
    x: int
    y: int
    width: int
    height: int

    @property
    def origin(self) -> Point2D:
        return Point2D(float(self.x), float(self.y))

    def to_canvas(self, point: Point2D) -> Point2D:
        return point + self.origin

    def to_image(self, point: Point2D) -> Point2D:
        return point - self.origin


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def fit_image_rect(
    canvas_width: float,
    canvas_height: float,
    image_width: float,
    image_height: float,
    layout: Optional[CanvasLayout] = None
) -> ImageRect:
    """
    Scale the image into the canvas, keeping its aspect ratio.

    The image fills ``layout.fill`` of the largest size that fits between the
    margins, centered horizontally and vertically between the paddings.

    Raises:
        ValueError: If the image has no area or the margins leave no room.
    """
    layout = layout or CanvasLayout()
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Image size must be positive, got {image_width}x{image_height}.")

    max_w = canvas_width - layout.margin_x
    max_h = canvas_height - layout.pad_top - layout.pad_bottom
    if max_w <= 0 or max_h <= 0:
        raise ValueError(f"Canvas {canvas_width}x{canvas_height} leaves no room for the image.")

    scale = min(max_w / image_width, max_h / image_height) * layout.fill
    w = _round_half_up(image_width * scale)
    h = _round_half_up(image_height * scale)
    x = math.floor((canvas_width - w) / 2)
    y = int(layout.pad_top) + math.floor((canvas_height - layout.pad_top - layout.pad_bottom - h) * 0.5)
    return ImageRect(x=x, y=y, width=w, height=h)
