"""Midline deviation from the central incisor lines."""

import logging
from dataclasses import dataclass

from .errors import MissingLandmarks
from .geometry import angle_degrees
from .landmarks import REQUIRED_LANDMARKS, LandmarkId
from .settings import SIGNIFICANT_DEVIATION_DEG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Measurement:
    upper_angle_deg: float
    lower_angle_deg: float
    midline_deviation_deg: float

    @property
    def is_significant(self):
        """Deviation above the fixed clinical threshold."""
        return self.midline_deviation_deg > SIGNIFICANT_DEVIATION_DEG


def format_degrees(value):
    return f"{value:.1f}°"


def compute_measurement(placed) -> Measurement:
    """
    Compute upper/lower central incisor line angles and their difference.

    `placed` maps LandmarkId to Marker. Lateral incisors are ignored.
    Deviation is the plain absolute difference rounded to one decimal, without
    wraparound correction at the +/-180 degree seam.
    """
    missing = [landmark for landmark in REQUIRED_LANDMARKS if landmark not in placed]
    if missing:
        raise MissingLandmarks(missing)

    upper_angle = angle_degrees(
        placed[LandmarkId.UPPER_LEFT_CENTRAL].point,
        placed[LandmarkId.UPPER_RIGHT_CENTRAL].point,
    )
    lower_angle = angle_degrees(
        placed[LandmarkId.LOWER_LEFT_CENTRAL].point,
        placed[LandmarkId.LOWER_RIGHT_CENTRAL].point,
    )
    raw_difference = abs(upper_angle - lower_angle)
    if raw_difference > 180.0:
        logger.warning(
            "Upper (%.1f) and lower (%.1f) angles straddle the 180 degree seam; "
            "deviation %.1f is not wrapped",
            upper_angle,
            lower_angle,
            raw_difference,
        )

    measurement = Measurement(
        upper_angle_deg=upper_angle,
        lower_angle_deg=lower_angle,
        midline_deviation_deg=round(raw_difference, 1),
    )
    logger.info(
        "Midline deviation %.1f (upper %.1f, lower %.1f)",
        measurement.midline_deviation_deg,
        upper_angle,
        lower_angle,
    )
    return measurement
