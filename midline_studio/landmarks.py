"""Fixed catalogue of incisor landmarks in placement order."""

import enum

from .settings import LOWER_ARCH_COLOR, UPPER_ARCH_COLOR


class LandmarkId(enum.Enum):
    UPPER_LEFT_CENTRAL = "upper_left_central"
    UPPER_LEFT_LATERAL = "upper_left_lateral"
    UPPER_RIGHT_CENTRAL = "upper_right_central"
    UPPER_RIGHT_LATERAL = "upper_right_lateral"
    LOWER_LEFT_CENTRAL = "lower_left_central"
    LOWER_LEFT_LATERAL = "lower_left_lateral"
    LOWER_RIGHT_CENTRAL = "lower_right_central"
    LOWER_RIGHT_LATERAL = "lower_right_lateral"

    @property
    def display_name(self):
        """Human readable name, e.g. 'Upper Left Central Incisor'."""
        return " ".join(word.title() for word in self.value.split("_")) + " Incisor"

    @property
    def short_label(self):
        """Initials drawn next to the marker, e.g. 'ULC'."""
        return "".join(word[0] for word in self.value.split("_")).upper()

    @property
    def color(self):
        return UPPER_ARCH_COLOR if self.is_upper else LOWER_ARCH_COLOR

    @property
    def is_upper(self):
        return self.value.startswith("upper_")


# Enum definition order is the placement order.
LANDMARK_SEQUENCE = tuple(LandmarkId)

# Only the central incisors feed the measurement; laterals drive the visual guide.
REQUIRED_LANDMARKS = (
    LandmarkId.UPPER_LEFT_CENTRAL,
    LandmarkId.UPPER_RIGHT_CENTRAL,
    LandmarkId.LOWER_LEFT_CENTRAL,
    LandmarkId.LOWER_RIGHT_CENTRAL,
)
