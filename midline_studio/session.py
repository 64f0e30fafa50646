"""
Single-patient analysis session.

Owns the armed flag, the marker placement machine, the derived measurement,
the loaded photo and the size of the visual surface markers are placed on.
All mutation happens from the UI event loop, one event at a time.
"""

import logging
import mimetypes
import os

import cv2

from .errors import ImageLoadError, PlacementRefused
from .measurement import compute_measurement
from .placement import MarkerPlacement

logger = logging.getLogger(__name__)


class AnalysisSession:
    def __init__(self):
        self.armed = False
        self.placement = MarkerPlacement()
        self.measurement = None
        # Original photo (OpenCV BGR) and its source path.
        self.image_bgr = None
        self.image_path = None
        # (width, height) of the surface markers are placed on, in pixels.
        self.surface_size = None

    # ------------------------------
    # Armed / disarmed
    # ------------------------------
    def start(self):
        self.armed = True

    def stop(self):
        self.armed = False

    def toggle_armed(self):
        self.armed = not self.armed
        return self.armed

    # ------------------------------
    # Placement
    # ------------------------------
    @property
    def current_target(self):
        return self.placement.current_target

    @property
    def placed(self):
        return self.placement.placed

    def place_marker(self, x, y):
        """
        Record a surface-local click for the current target landmark.
        Coordinates are accepted as-is, without clamping to the surface;
        NaN or infinite coordinates are refused.
        When the last landmark is placed the measurement is computed.
        """
        if not self.armed:
            raise PlacementRefused("Placement is stopped. Press Start to place markers.")

        landmark = self.placement.place(x, y)
        if self.placement.is_complete:
            self.measurement = compute_measurement(self.placement.placed)
        return landmark

    def prompt(self):
        """Hint for the next tap, or None when nothing is awaited."""
        target = self.current_target
        if not self.armed or target is None:
            return None
        return f"Tap on: {target.display_name}"

    def reset(self):
        """Clear markers, measurement and the loaded photo. Armed flag is kept."""
        self.placement.reset()
        self.measurement = None
        self.image_bgr = None
        self.image_path = None
        logger.info("Session reset")

    # ------------------------------
    # Image and surface
    # ------------------------------
    def load_image(self, path):
        """Load a photo from disk. Existing markers are kept."""
        # Unknown extensions are left to the decoder below.
        mime_type, _ = mimetypes.guess_type(os.fspath(path))
        if mime_type is not None and not mime_type.startswith("image/"):
            raise ImageLoadError(f"Not an image file: {path}")

        bgr = cv2.imread(os.fspath(path))
        if bgr is None:
            raise ImageLoadError(f"Failed to decode image: {path}")

        self.image_bgr = bgr
        self.image_path = os.fspath(path)
        logger.info("Loaded image %s (%dx%d)", self.image_path, bgr.shape[1], bgr.shape[0])
        return bgr

    def set_surface_size(self, width, height):
        self.surface_size = (int(width), int(height))
