"""
Hit-testing of the rotated axes x' and y' under the pointer.

All positions are in device pixels, where y grows downwards; the rotated
x' axis therefore has the screen direction angle -theta.
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Optional

from conicexplorer.config import HOVER_THRESHOLD_PX

logger = logging.getLogger(__name__)


class HoverAxis(Enum):
    NONE = "none"
    X = "x'"
    Y = "y'"


def axis_distances(
    pointer: tuple[float, float],
    origin: tuple[float, float],
    theta: float
) -> tuple[float, float]:
    """
    Perpendicular distances of the pointer to the x' and y' axis lines.

    Args:
        pointer: (x, y) pointer position in pixels.
        origin: (x, y) of the rotated origin O' in pixels.
        theta: Rotation angle of the primed frame (model orientation).

    Returns:
        (distance to x', distance to y').
    """
    dx = pointer[0] - origin[0]
    dy = pointer[1] - origin[1]

    angle_x = -theta
    dist_x = abs(dx * -math.sin(angle_x) + dy * math.cos(angle_x))

    angle_y = angle_x + math.pi / 2
    dist_y = abs(dx * -math.sin(angle_y) + dy * math.cos(angle_y))

    return dist_x, dist_y


def hit_test_axes(
    pointer: tuple[float, float],
    origin: Optional[tuple[float, float]],
    theta: float,
    threshold: float = HOVER_THRESHOLD_PX
) -> HoverAxis:
    """Closest rotated axis within `threshold` pixels; x' wins ties."""
    if origin is None or not all(math.isfinite(v) for v in origin):
        return HoverAxis.NONE

    dist_x, dist_y = axis_distances(pointer, origin, theta)
    if dist_x < threshold and dist_x <= dist_y:
        return HoverAxis.X
    if dist_y < threshold:
        return HoverAxis.Y
    return HoverAxis.NONE


class HoverState:
    """
    Hover state machine with the states NONE, X and Y.

    Only pointer moves and pointer leaves drive transitions.
    """
    def __init__(self) -> None:
        self.axis = HoverAxis.NONE

    def pointer_moved(
        self,
        pointer: tuple[float, float],
        origin: Optional[tuple[float, float]],
        theta: float,
        threshold: float = HOVER_THRESHOLD_PX
    ) -> bool:
        """Re-run the hit test; return True if the hovered axis changed."""
        return self._set(hit_test_axes(pointer, origin, theta, threshold))

    def pointer_left(self) -> bool:
        return self._set(HoverAxis.NONE)

    def _set(self, axis: HoverAxis) -> bool:
        if axis is self.axis:
            return False
        logger.debug("Hover %s -> %s", self.axis.value, axis.value)
        self.axis = axis
        return True
