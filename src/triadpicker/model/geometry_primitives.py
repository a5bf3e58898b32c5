"""
Geometric Primitives for the Triangle Picker.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable, NamedTuple, TYPE_CHECKING
import numpy as np

from triadpicker.config import DEFAULT_CHANNEL_ORDER, DEGENERATE_AREA_EPS

if TYPE_CHECKING:
    import numpy.typing as npt


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class Role(StrEnum):
    """Geometric role of a triangle corner."""
    TOP = "top"
    LEFT = "left"
    RIGHT = "right"

class Channel(StrEnum):
    """Semantic channel of a weight (R: cost, G: quality, B: deadline by default)."""
    R = "R"
    G = "G"
    B = "B"

    @classmethod
    def _missing_(cls, value):
        # field ids and config files often spell channels in lower case
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None

ROLES: tuple[Role, Role, Role] = (Role.TOP, Role.LEFT, Role.RIGHT)
CHANNELS: tuple[Channel, Channel, Channel] = (Channel.R, Channel.G, Channel.B)


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Point2D:
    """A point in a single 2D coordinate space (image-local or screen)."""
    x: float
    y: float

    def __add__(self, other: Point2D) -> Point2D:
        return Point2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point2D) -> Point2D:
        return Point2D(self.x - other.x, self.y - other.y)


class BarycentricWeights(NamedTuple):
    """Position of a point relative to the corners ``(top, left, right)``."""
    top: float
    left: float
    right: float


@dataclass(frozen=True)
class Triangle:
    """
    The three corners of the picker triangle, tagged by role.

    Construction never fails; a collinear triangle is representable so that the
    vertex locator can always return a value. Use ``is_degenerate`` (or let the
    geometry kernel raise) before mapping points through it.
    """
    top: Point2D
    left: Point2D
    right: Point2D

    @property
    def vertices(self) -> tuple[Point2D, Point2D, Point2D]:
        return self.top, self.left, self.right

    def vertex(self, role: Role) -> Point2D:
        return getattr(self, str(role))

    @property
    def signed_area(self) -> float:
        """Twice the signed area; the sign encodes the winding."""
        a, b, c = self.vertices
        return (b.x - a.x) * (c.y - a.y) - (c.x - a.x) * (b.y - a.y)

    def is_degenerate(self, eps: float = DEGENERATE_AREA_EPS) -> bool:
        return abs(self.signed_area) <= eps

    @property
    def centroid(self) -> Point2D:
        return Point2D(
            (self.top.x + self.left.x + self.right.x) / 3.0,
            (self.top.y + self.left.y + self.right.y) / 3.0,
        )

    def translated(self, dx: float, dy: float) -> Triangle:
        """Shift all corners, e.g. from image-local to canvas coordinates."""
        offset = Point2D(dx, dy)
        return Triangle(top=self.top + offset, left=self.left + offset, right=self.right + offset)

    def as_array(self) -> npt.NDArray[np.float64]:
        """Corners as a (3, 2) array in ``top, left, right`` order."""
        return np.array([[p.x, p.y] for p in self.vertices], dtype=np.float64)


@dataclass(frozen=True)
class ChannelMap:
    """
    Bijection between the triangle roles and the semantic channels.

    ``order[i]`` is the channel driven by ``ROLES[i]``; the default
    ``(B, R, G)`` means top -> deadline, left -> cost, right -> quality.
    """
    order: tuple[Channel, Channel, Channel] = tuple(Channel(c) for c in DEFAULT_CHANNEL_ORDER)

    def __post_init__(self) -> None:
        if len(self.order) != 3 or set(self.order) != set(CHANNELS):
            raise ValueError(
                f"Channel map must assign each of {[str(c) for c in CHANNELS]} exactly once, "
                f"got {[str(c) for c in self.order]}."
            )

    @classmethod
    def from_sequence(cls, channels: Iterable[str]) -> ChannelMap:
        """Build from names such as ``["B", "R", "G"]``."""
        names = [str(c) for c in channels]
        try:
            order = tuple(Channel(name) for name in names)
        except ValueError as e:
            raise ValueError(f"Unknown channel in {names!r}: {e}") from e
        return cls(order=order)

    def channel_for(self, role: Role) -> Channel:
        return self.order[ROLES.index(role)]

    def role_for(self, channel: Channel) -> Role:
        return ROLES[self.order.index(Channel(channel))]


@dataclass(frozen=True)
class WeightVector:
    """
    Percentages per semantic channel. Valid instances are non-negative and sum
    to 100 within ``SUM_TOLERANCE``; the weight state never publishes others.
    """
    r: float
    g: float
    b: float

    def __getitem__(self, channel: Channel | str) -> float:
        return getattr(self, str(Channel(channel)).lower())

    def __iter__(self):
        return iter((self.r, self.g, self.b))

    @property
    def total(self) -> float:
        return self.r + self.g + self.b

    def replace(self, channel: Channel | str, value: float) -> WeightVector:
        values = self.as_dict()
        values[Channel(channel)] = value
        return WeightVector(r=values[Channel.R], g=values[Channel.G], b=values[Channel.B])

    def as_dict(self) -> dict[Channel, float]:
        return {Channel.R: self.r, Channel.G: self.g, Channel.B: self.b}

    def as_fractions(self) -> dict[str, float]:
        """Plain ``{"r", "g", "b"}`` record in [0, 1], as handed to the embedding application."""
        return {"r": self.r / 100.0, "g": self.g / 100.0, "b": self.b / 100.0}

    @classmethod
    def uniform(cls) -> WeightVector:
        third = 100.0 / 3.0
        return cls(third, third, third)
