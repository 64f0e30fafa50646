"""
Ordered marker placement.

The machine has two states: AwaitingInput(target) and Complete. Each accepted
placement records a marker for the current target and moves to the next
landmark in LANDMARK_SEQUENCE, so landmarks can only ever be placed in order.
"""

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from .errors import PlacementRefused
from .landmarks import LANDMARK_SEQUENCE, LandmarkId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Marker:
    x: float
    y: float
    placed: bool = True

    @property
    def point(self):
        return (self.x, self.y)


@dataclass(frozen=True)
class AwaitingInput:
    target: LandmarkId


@dataclass(frozen=True)
class Complete:
    pass


COMPLETE = Complete()
INITIAL_STATE = AwaitingInput(LANDMARK_SEQUENCE[0])

# Precomputed transition table: target -> state after that target is placed.
_NEXT_STATE = {
    landmark: (
        AwaitingInput(LANDMARK_SEQUENCE[i + 1]) if i + 1 < len(LANDMARK_SEQUENCE) else COMPLETE
    )
    for i, landmark in enumerate(LANDMARK_SEQUENCE)
}


def advance(state):
    """Return the state that follows a placement in `state`."""
    if isinstance(state, Complete):
        return COMPLETE
    return _NEXT_STATE[state.target]


class MarkerPlacement:
    """Placed markers plus the explicit placement state."""

    def __init__(self):
        self.state = INITIAL_STATE
        self._placed = {}

    @property
    def current_target(self) -> Optional[LandmarkId]:
        if isinstance(self.state, AwaitingInput):
            return self.state.target
        return None

    @property
    def is_complete(self):
        return isinstance(self.state, Complete)

    @property
    def placed(self):
        """Read-only view of placed markers keyed by LandmarkId."""
        return MappingProxyType(self._placed)

    def place(self, x: float, y: float) -> LandmarkId:
        """
        Record a marker for the current target and advance.
        Returns the landmark that was placed.
        """
        if not isinstance(self.state, AwaitingInput):
            raise PlacementRefused("All landmarks are already placed. Reset to start over.")

        if not (math.isfinite(x) and math.isfinite(y)):
            raise PlacementRefused(f"Marker position must be finite, got ({x}, {y}).")

        target = self.state.target
        self._placed[target] = Marker(float(x), float(y), True)
        self.state = advance(self.state)
        logger.debug("Placed %s at (%.1f, %.1f)", target.value, x, y)
        return target

    def reset(self):
        """Drop every marker and return to the first landmark."""
        self._placed = {}
        self.state = INITIAL_STATE

    def progress(self):
        """
        Per-landmark status in sequence order.
        Returns a list of (LandmarkId, status) where status is
        'placed', 'current' or 'pending'.
        """
        current = self.current_target
        rows = []
        for landmark in LANDMARK_SEQUENCE:
            if landmark in self._placed:
                status = "placed"
            elif landmark == current:
                status = "current"
            else:
                status = "pending"
            rows.append((landmark, status))
        return rows
