"""
Weight State (Data Model)
=========================
This module holds the single source of truth for the current selection.

Why is this file needed?
------------------------
1. State Management: The canvas marker and the three percentage fields are two
   views of one WeightVector. Both input paths mutate it through this class
   and both views re-render from the ``weights_changed`` signal, so they can
   never drift apart.
2. Invariants: Every published vector is non-negative and sums to 100.
3. Confirmation: Observers attach through `WeightState.on_confirm` and get a
   subscription they can detach, instead of a free-floating callback slot.

Classes:
    WeightState: The mutable weight vector with its two update paths.
    ConfirmSubscription: Handle returned by `WeightState.on_confirm`.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from triadpicker.config import INSIDE_TOLERANCE, PERCENT_TOTAL, SUM_TOLERANCE, ZERO_SUM_EPS
from triadpicker.model.geometry_primitives import (
    CHANNELS, Channel, ChannelMap, Point2D, Triangle, WeightVector
)
from triadpicker.model.geometry_utils import (
    bary_to_channels, clamp_percent, is_inside, normalize_to_percent, to_barycentric
)

__all__ = ["WeightState", "WeightVector", "ConfirmSubscription"]

logger = logging.getLogger(__name__)


def _parse_percent(value: float | str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


class ConfirmSubscription:
    """A confirmation observer attached to a `WeightState`."""

    def __init__(self, state: WeightState, callback: Callable[[dict], None]) -> None:
        self._state = state
        self._callback = callback
        self._state.confirmed.connect(self._callback)
        self._attached = True

    @property
    def attached(self) -> bool:
        return self._attached

    def detach(self) -> None:
        """Stop receiving confirmations. Safe to call more than once."""
        if not self._attached:
            return
        self._state.confirmed.disconnect(self._callback)
        self._attached = False


class WeightState(QObject):
    """Current percentage vector with the pointer and field-edit update paths."""
    weights_changed = Signal(object)
    confirmed = Signal(object)

    def __init__(self, initial: Optional[WeightVector] = None) -> None:
        super().__init__()
        self._weights = self._sanitize(initial) if initial is not None else WeightVector.uniform()

    def current_weights(self) -> WeightVector:
        return self._weights

    def reset(self) -> WeightVector:
        """Back to the uniform split."""
        logger.debug("Weights reset to uniform split.")
        return self._publish(WeightVector.uniform())

    def set_from_point(
        self,
        point: Point2D,
        triangle: Triangle,
        channel_map: ChannelMap,
        tolerance: float = INSIDE_TOLERANCE
    ) -> Optional[WeightVector]:
        """
        Set the weights from a pointer position.

        Args:
            point: Pointer position, in the triangle's coordinate space.
            triangle: The picker triangle.
            channel_map: Role -> channel assignment.
            tolerance: Inside test tolerance; edge points count as inside.

        Returns:
            The new vector, or None when the point misses the triangle (the
            state is left unchanged).

        Raises:
            ValueError: If the triangle is degenerate.
        """
        weights = to_barycentric(point, triangle)
        if not is_inside(weights, tolerance):
            logger.debug(f"Point ({point.x:.1f}, {point.y:.1f}) is outside the triangle.")
            return None
        return self._publish(bary_to_channels(weights, channel_map))

    def set_from_field_edit(self, channel: Channel | str, new_value: float | str) -> WeightVector:
        """
        Set one channel directly; the other two absorb the change in proportion
        to their current ratio.

        Raw field text is accepted; anything that does not parse as a number
        (an empty field while typing, NaN) counts as 0.
        The edited channel ends up exactly at ``clamp(new_value, 0, 100)``.
        When both other channels are zero they split the remainder equally.
        Any floating residual is pushed onto the two other channels only.
        """
        focus = Channel(channel)
        new_value = clamp_percent(_parse_percent(new_value))

        values = dict(zip(CHANNELS, normalize_to_percent(*self._weights)))
        others = [c for c in CHANNELS if c != focus]
        remaining = PERCENT_TOTAL - new_value

        rem = sum(values[c] for c in others)
        if rem > 0:
            k = remaining / rem
            for c in others:
                values[c] *= k
        else:
            for c in others:
                values[c] = remaining * 0.5
        values[focus] = new_value

        total = sum(values.values())
        if abs(total - PERCENT_TOTAL) > SUM_TOLERANCE:
            residual = PERCENT_TOTAL - total
            rest = sum(values[c] for c in others)
            for c in others:
                share = values[c] / rest if rest > 0 else 0.5
                values[c] = max(values[c] + residual * share, 0.0)
            logger.debug(f"Rebalance residual {residual:.6f} redistributed over {[str(c) for c in others]}.")

        return self._publish(WeightVector(r=values[Channel.R], g=values[Channel.G], b=values[Channel.B]))

    def on_confirm(self, callback: Callable[[dict], None]) -> ConfirmSubscription:
        """Attach a confirmation observer; detach it through the returned handle."""
        return ConfirmSubscription(self, callback)

    def confirm(self) -> dict[str, float]:
        """
        Hand the current selection to every attached observer, once.

        Returns:
            The ``{"r", "g", "b"}`` fractions that were emitted.
        """
        payload = self._weights.as_fractions()
        logger.info(
            f"Selection confirmed: R={self._weights.r:.2f}%, G={self._weights.g:.2f}%, B={self._weights.b:.2f}%"
        )
        self.confirmed.emit(payload)
        return payload

    @staticmethod
    def _sanitize(vector: WeightVector) -> WeightVector:
        """Drop negative and non-finite entries, rescale to 100; an all-zero vector becomes the uniform split."""
        values = [v if v > 0 and math.isfinite(v) else 0.0 for v in vector]
        if sum(values) <= ZERO_SUM_EPS:
            logger.warning(f"Initial weights {vector} carry no weight, using the uniform split.")
            return WeightVector.uniform()
        sanitized = WeightVector(*normalize_to_percent(*values))
        if sanitized != vector:
            logger.debug(f"Initial weights {vector} normalized to {sanitized}.")
        return sanitized

    def _publish(self, vector: WeightVector) -> WeightVector:
        self._weights = vector
        self.weights_changed.emit(vector)
        return vector
