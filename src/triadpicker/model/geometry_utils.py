from __future__ import annotations

import numpy as np

from triadpicker.config import DEGENERATE_AREA_EPS, INSIDE_TOLERANCE, PERCENT_TOTAL, ZERO_SUM_EPS
from triadpicker.model.geometry_primitives import (
    BarycentricWeights, Channel, ChannelMap, Point2D, Triangle, WeightVector, ROLES
)


def signed_area(a: Point2D, b: Point2D, c: Point2D) -> float:
    """
    Twice the signed area of the triangle ``abc``.

    Positive for one winding, negative for the other, zero when the points are
    collinear.
    """
    return (b.x - a.x) * (c.y - a.y) - (c.x - a.x) * (b.y - a.y)


def to_barycentric(point: Point2D, triangle: Triangle) -> BarycentricWeights:
    """
    Barycentric coordinates of `point` with respect to `triangle`.

    Args:
        point: The query point, in the same coordinate space as the triangle.
        triangle: The reference triangle.

    Returns:
        Weights ``(top, left, right)``. Exact for any point; outside the
        triangle at least one weight is negative. The last weight is
        ``1 - w1 - w2`` so the sum is 1 by construction.

    Raises:
        ValueError: If the triangle is degenerate (collinear corners).
    """
    d = signed_area(triangle.top, triangle.left, triangle.right)
    if abs(d) <= DEGENERATE_AREA_EPS:
        raise ValueError(f"Degenerate triangle (signed area {d:.3g}): {triangle}.")

    w1 = signed_area(point, triangle.left, triangle.right) / d
    w2 = signed_area(point, triangle.right, triangle.top) / d
    return BarycentricWeights(w1, w2, 1.0 - w1 - w2)


def from_barycentric(weights: BarycentricWeights, triangle: Triangle) -> Point2D:
    """Point with the given barycentric coordinates (inverse of `to_barycentric`)."""
    w = np.asarray(weights, dtype=np.float64)
    x, y = w @ triangle.as_array()
    return Point2D(float(x), float(y))


def is_inside(weights: BarycentricWeights, tolerance: float = INSIDE_TOLERANCE) -> bool:
    """True when no weight is below ``-tolerance``; edge points count as inside."""
    return all(w >= -tolerance for w in weights)


def normalize_to_percent(r: float, g: float, b: float) -> tuple[float, float, float]:
    """
    Rescale three non-negative values to sum to 100.

    A zero sum is replaced by a tiny epsilon, so all-zero input yields zeros
    instead of NaN.
    """
    s = max(r + g + b, ZERO_SUM_EPS)
    return r / s * PERCENT_TOTAL, g / s * PERCENT_TOTAL, b / s * PERCENT_TOTAL


def clamp_percent(v: float) -> float:
    return max(0.0, min(PERCENT_TOTAL, v))


def bary_to_channels(weights: BarycentricWeights, channel_map: ChannelMap) -> WeightVector:
    """
    Relabel role weights into channel percentages.

    Weights inside the inside-tolerance may be very slightly negative; they are
    clipped to zero before normalizing so the result stays non-negative.
    """
    out = {channel: 0.0 for channel in Channel}
    for role, w in zip(ROLES, weights):
        out[channel_map.channel_for(role)] = max(w, 0.0)
    return WeightVector(*normalize_to_percent(out[Channel.R], out[Channel.G], out[Channel.B]))


def channels_to_bary(vector: WeightVector, channel_map: ChannelMap) -> BarycentricWeights:
    """Inverse of `bary_to_channels`: channel percentages as role weights summing to 1."""
    values = [max(vector[channel_map.channel_for(role)], 0.0) for role in ROLES]
    s = max(sum(values), ZERO_SUM_EPS)
    return BarycentricWeights(*(v / s for v in values))
