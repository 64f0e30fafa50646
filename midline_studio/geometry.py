"""
Plane geometry helpers for landmark lines.

All coordinates are surface-local pixels with +y pointing down, so a positive
angle means the line tilts downwards from left to right.
"""

import math


def midpoint(p1, p2):
    """Return the midpoint of segment p1-p2."""
    return ((p1[0] + p2[0]) / 2.0, (p1[1] + p2[1]) / 2.0)


def angle_degrees(p1, p2):
    """
    Direction of the p1 -> p2 vector in degrees, in the range (-180, 180].

    Coincident points give 0.0 (atan2(0, 0)); callers get a defined value
    rather than an error. Non-finite coordinates raise ValueError.
    """
    if not all(math.isfinite(v) for v in (*p1, *p2)):
        raise ValueError(f"Points must be finite: {p1}, {p2}")
    deg = math.degrees(math.atan2(p2[1] - p1[1], p2[0] - p1[0]))
    # atan2 returns -180 for (-0.0, negative x); fold it onto +180.
    if deg <= -180.0:
        deg += 360.0
    return deg


def perpendicular_bisector(p1, p2, half_length):
    """
    Segment centered on the midpoint of p1-p2 and rotated 90 degrees from the
    p1 -> p2 direction, extending half_length to each side.

    Returns ((x1, y1), (x2, y2)). A degenerate input (p1 == p2) collapses to a
    zero-length segment at the midpoint.
    """
    mx, my = midpoint(p1, p2)
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    norm = math.hypot(dx, dy)
    if norm == 0.0:
        return ((mx, my), (mx, my))

    # Unit normal (-dy, dx) rotated from the segment direction.
    nx = -dy / norm
    ny = dx / norm
    return (
        (mx - half_length * nx, my - half_length * ny),
        (mx + half_length * nx, my + half_length * ny),
    )
