"""Three-way weighting picker: triangle location, barycentric mapping and rebalancing."""
from importlib.metadata import version, PackageNotFoundError

from triadpicker.model.geometry_primitives import (
    BarycentricWeights, Channel, ChannelMap, Point2D, Role, Triangle, WeightVector
)
from triadpicker.model.state import WeightState
from triadpicker.model.vertex_locator import locate_vertices
from triadpicker.controller.picker import PickerSession

try:
    __version__ = version("triadpicker")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
