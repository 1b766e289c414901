"""
DisplaySurface - explicit handle for an OpenCV HighGUI window.

HighGUI addresses windows by name through process-wide state. DisplaySurface
wraps one name so its owner creates, renders into and destroys exactly the
window it owns.

Note: on macOS HighGUI calls must run on the main thread. The surface does not
enforce this; run the owning handler from the main thread there.

Example:
    with DisplaySurface('Preview') as surface:
        surface.create()
        surface.show(frame_bgr)
        key = surface.poll(1)
"""

import logging

import cv2
import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


class DisplaySurface:
    """
    One named on-screen window.

    Attributes:
        name: Window name (also the window title)
        flags: cv2.namedWindow flags
        created_count: Number of create() calls that reached HighGUI
        destroyed_count: Number of destroy() calls that reached HighGUI
    """

    def __init__(self, name: str, flags: int = cv2.WINDOW_GUI_EXPANDED):
        """
        Initialize surface (no window is created yet).

        Args:
            name: Window name
            flags: cv2.namedWindow flags (default: cv2.WINDOW_GUI_EXPANDED)
        """
        self.name = name
        self.flags = flags
        self.created_count = 0
        self.destroyed_count = 0
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def create(self) -> None:
        """
        Create the window, or re-apply its settings if it already exists.

        HighGUI keeps an existing window of the same name, so calling this
        again never produces a second window.
        """
        cv2.namedWindow(self.name, self.flags)
        self.created_count += 1
        if not self._open:
            logger.info(f"Created display window '{self.name}'")
        self._open = True

    def show(self, image: NDArray[np.generic]) -> None:
        """
        Render an image (BGR, BGRA or single channel) into the window.

        Raises:
            RuntimeError: If the surface has not been created or was destroyed
        """
        if not self._open:
            raise RuntimeError(f"Display window '{self.name}' is not open")
        cv2.imshow(self.name, image)

    def poll(self, wait_ms: int = 1) -> int:
        """
        Let HighGUI service its event queue.

        Args:
            wait_ms: Maximum time to wait in milliseconds (must be > 0, 0 blocks forever)

        Returns:
            Code of the key pressed, or -1 if none
        """
        return cv2.waitKey(wait_ms)

    def destroy(self) -> None:
        """Destroy the window. Does nothing if it is not open."""
        if not self._open:
            return
        cv2.destroyWindow(self.name)
        self.destroyed_count += 1
        self._open = False
        logger.info(f"Destroyed display window '{self.name}'")

    def __enter__(self) -> 'DisplaySurface':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.destroy()
        return False

    def __repr__(self) -> str:
        state = 'open' if self._open else 'closed'
        return f"DisplaySurface(name='{self.name}', {state})"
