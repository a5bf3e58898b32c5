"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for work that should not block the GUI.

Why is this file needed?
------------------------
1. Responsiveness: The vertex scan touches every pixel of the image. For large
   images it is pushed off the GUI thread.
2. Signals: The result (or the error) comes back through Qt signals, which
   are delivered safely to the GUI thread.

Classes:
    VertexLocatorWorker: Runs `locate_vertices` once.
"""
import logging
from typing import Optional

import numpy.typing as npt
from PySide6.QtCore import QThread, Signal

from triadpicker.config import LocatorSettings
from triadpicker.model.vertex_locator import locate_vertices

logger = logging.getLogger(__name__)


class VertexLocatorWorker(QThread):
    located = Signal(object)  # Triangle, image-local
    error_occurred = Signal(str)

    def __init__(
        self,
        pixels: npt.ArrayLike,
        width: int,
        height: int,
        settings: Optional[LocatorSettings] = None
    ) -> None:
        super().__init__()
        self.pixels = pixels
        self.width = width
        self.height = height
        self.settings = settings

    def run(self) -> None:
        try:
            logger.info(f"Locating triangle vertices in background ({self.width}x{self.height})...")
            triangle = locate_vertices(self.pixels, self.width, self.height, self.settings)
            self.located.emit(triangle)
        except Exception as e:
            logger.error(f"Error in VertexLocatorWorker: {e}")
            self.error_occurred.emit(str(e))
