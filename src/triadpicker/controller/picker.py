"""
Picker Session (Presentation Adapter Facade)
============================================
This module is the surface a widget talks to.

Why is this file needed?
------------------------
1. Ownership: It keeps the located triangle, the channel map and the weight
   state of one picker together, so the widget only forwards raw input.
2. Coordinates: The triangle is located in image-local coordinates and then
   moved to canvas coordinates once, using the image rect the widget draws at.
3. Gestures: A drag only starts when the press lands inside the triangle.

Classes:
    PickerSession: One picker instance (one image, one selection).
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, TYPE_CHECKING

from triadpicker.config import PickerConfig
from triadpicker.model.geometry_primitives import (
    BarycentricWeights, Channel, ChannelMap, Point2D, Triangle, WeightVector
)
from triadpicker.model.geometry_utils import (
    channels_to_bary, from_barycentric, is_inside, to_barycentric
)
from triadpicker.model.layout import ImageRect, fit_image_rect
from triadpicker.model.state import ConfirmSubscription, WeightState
from triadpicker.model.vertex_locator import locate_vertices

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class PickerSession:
    def __init__(self, config: Optional[PickerConfig] = None, state: Optional[WeightState] = None) -> None:
        self.config = config or PickerConfig()
        self.channel_map = ChannelMap.from_sequence(self.config.channel_order)
        self.state = state or WeightState()

        self.image_rect: Optional[ImageRect] = None
        self.image_triangle: Optional[Triangle] = None  # image-local
        self.triangle: Optional[Triangle] = None  # canvas
        self._dragging = False

    # ---- setup ----

    def layout_image(self, canvas_width: float, canvas_height: float, image_width: float, image_height: float) -> ImageRect:
        """
        Compute and store where the image is drawn on the canvas.

        An already located triangle is moved along, so a resize never leaves
        pointer input mapped through the old canvas position.
        """
        self.image_rect = fit_image_rect(canvas_width, canvas_height, image_width, image_height, self.config.layout)
        logger.debug(f"Image placed at {self.image_rect}.")
        if self.image_triangle is not None:
            self.set_image_triangle(self.image_triangle)
        return self.image_rect

    def locate_vertices(self, pixels: npt.ArrayLike, width: int, height: int) -> Triangle:
        """
        Locate the triangle in the decoded image and adopt it.

        Returns:
            The triangle in image-local coordinates.

        Raises:
            ValueError: If the located triangle is degenerate.
        """
        triangle = locate_vertices(pixels, width, height, self.config.locator)
        self.set_image_triangle(triangle)
        return triangle

    def set_image_triangle(self, triangle: Triangle) -> None:
        """Adopt an image-local triangle, e.g. one delivered by a background worker."""
        origin = self.image_rect.origin if self.image_rect else Point2D(0.0, 0.0)
        self.set_triangle(triangle.translated(origin.x, origin.y))
        self.image_triangle = triangle

    def set_triangle(self, triangle: Triangle) -> None:
        """
        Adopt a triangle in canvas coordinates.

        Raises:
            ValueError: If the triangle is degenerate; no point could be mapped through it.
        """
        if triangle.is_degenerate():
            raise ValueError(f"Cannot use a degenerate triangle: {triangle}")
        self.triangle = triangle
        self._dragging = False
        logger.info(f"Picker triangle set: {triangle}")

    def _require_triangle(self) -> Triangle:
        if self.triangle is None:
            raise ValueError("Triangle not located yet.")
        return self.triangle

    # ---- queries ----

    def point_in_triangle(self, point: Point2D) -> tuple[BarycentricWeights, bool]:
        weights = to_barycentric(point, self._require_triangle())
        return weights, is_inside(weights, self.config.inside_tolerance)

    def current_weights(self) -> WeightVector:
        return self.state.current_weights()

    def marker_position(self) -> Point2D:
        """Canvas point that represents the current weights."""
        weights = channels_to_bary(self.state.current_weights(), self.channel_map)
        return from_barycentric(weights, self._require_triangle())

    def summary_text(self) -> str:
        """Confirmation message listing the three percentages."""
        w = self.state.current_weights()
        labels = self.config.channel_labels
        return (
            "Your selection priorities:\n\n"
            f"{w.r:.2f}% for {labels[Channel.R]},\n"
            f"{w.g:.2f}% for {labels[Channel.G]} and\n"
            f"{w.b:.2f}% for {labels[Channel.B]}."
        )

    # ---- updates ----

    def update_from_point(self, point: Point2D) -> Optional[WeightVector]:
        """New weights for a click, or None when the click missed the triangle."""
        return self.state.set_from_point(
            point, self._require_triangle(), self.channel_map, self.config.inside_tolerance
        )

    def update_from_field_edit(self, channel: Channel | str, value: float | str) -> WeightVector:
        return self.state.set_from_field_edit(channel, value)

    def reset(self) -> WeightVector:
        self._dragging = False
        return self.state.reset()

    # ---- drag gesture ----

    @property
    def dragging(self) -> bool:
        return self._dragging

    def press(self, point: Point2D) -> bool:
        """Pointer down; starts a drag only when the point is inside."""
        self._dragging = self.update_from_point(point) is not None
        return self._dragging

    def move(self, point: Point2D) -> Optional[WeightVector]:
        """Pointer move; ignored unless a drag is in progress."""
        if not self._dragging:
            return None
        return self.update_from_point(point)

    def release(self) -> None:
        self._dragging = False

    # ---- confirmation ----

    def on_confirm(self, callback: Callable[[dict], None]) -> ConfirmSubscription:
        return self.state.on_confirm(callback)

    def confirm(self) -> dict[str, float]:
        return self.state.confirm()
