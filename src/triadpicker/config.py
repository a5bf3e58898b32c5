"""
Configuration & Tuning Constants
================================
This module serves as the central registry for the numeric constants and
default settings of the picker.

Why is this file needed?
------------------------
1. Abstraction: The alpha threshold and band width were tuned for one
   particular triangle asset. Keeping them here (and behind the settings
   dataclasses below) lets an embedding application retune them without
   touching the algorithms.
2. Consistency: Tolerances shared by the geometry kernel and the weight state
   must agree, so they are defined once.

Exports:
    ALPHA_THRESHOLD (int): Minimum alpha (0-255) of a pixel that belongs to the glyph.
    EXTREMAL_BAND_PX (float): Half-width of the band used when picking corners.
    LocatorSettings, CanvasLayout, PickerConfig: Overridable settings.
"""
from __future__ import annotations

from dataclasses import dataclass, field

# Vertex locator
ALPHA_THRESHOLD: int = 30
EXTREMAL_BAND_PX: float = 3.0

# Geometry kernel
INSIDE_TOLERANCE: float = 1e-6
DEGENERATE_AREA_EPS: float = 1e-9
ZERO_SUM_EPS: float = 1e-12

# Weight state
PERCENT_TOTAL: float = 100.0
SUM_TOLERANCE: float = 1e-3

# [top, left, right] -> channel
DEFAULT_CHANNEL_ORDER: tuple[str, str, str] = ("B", "R", "G")
DEFAULT_CHANNEL_LABELS: dict[str, str] = {
    "R": "annual cost",
    "G": "quality (fit to your requirements)",
    "B": "deadline",
}


@dataclass(frozen=True)
class LocatorSettings:
    """Tuning of the alpha-channel vertex locator."""
    alpha_threshold: int = ALPHA_THRESHOLD
    band: float = EXTREMAL_BAND_PX

    def __post_init__(self) -> None:
        if not 0 <= self.alpha_threshold <= 255:
            raise ValueError(f"alpha_threshold must be within [0, 255], got {self.alpha_threshold}.")
        if self.band < 0:
            raise ValueError(f"band must be non-negative, got {self.band}.")


@dataclass(frozen=True)
class CanvasLayout:
    """
    Placement of the triangle image inside its canvas.

    The image is scaled to fit the canvas minus the margins, shrunk by
    ``fill`` and centered in the remaining space.
    """
    margin_x: float = 40.0
    pad_top: float = 30.0
    pad_bottom: float = 30.0
    fill: float = 0.7


@dataclass(frozen=True)
class PickerConfig:
    """Everything a picker session needs that is fixed for its lifetime."""
    channel_order: tuple[str, str, str] = DEFAULT_CHANNEL_ORDER
    channel_labels: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CHANNEL_LABELS))
    locator: LocatorSettings = field(default_factory=LocatorSettings)
    layout: CanvasLayout = field(default_factory=CanvasLayout)
    inside_tolerance: float = INSIDE_TOLERANCE
