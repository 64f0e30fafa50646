"""
Platform-neutral description of the visual surface.

A Scene is a flat list of drawable elements in surface-local pixel
coordinates. The desktop canvas and the report rasterizer both draw from the
same description, so neither depends on the other's styling.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .geometry import midpoint, perpendicular_bisector
from .landmarks import LandmarkId
from .settings import (
    CENTRAL_LINE_WIDTH,
    LATERAL_LINE_COLOR,
    LATERAL_LINE_DASH,
    LOWER_ARCH_COLOR,
    MARKER_INNER_COLOR,
    MARKER_INNER_RADIUS,
    MARKER_LABEL_COLOR,
    MARKER_LABEL_OFFSET,
    MARKER_LABEL_SIZE,
    MARKER_OUTER_RADIUS,
    MIDLINE_GUIDE_COLOR,
    MIDLINE_GUIDE_DASH,
    MIDLINE_GUIDE_HALF_LENGTH,
    SURFACE_BG,
    UPPER_ARCH_COLOR,
)

PROMPT_BANNER_HEIGHT = 28
PROMPT_BANNER_MARGIN = 8
PROMPT_BANNER_FILL = "#dbeafe"
PROMPT_TEXT_COLOR = "#1e40af"
PROMPT_TEXT_SIZE = 12


@dataclass(frozen=True)
class RectElement:
    x: float
    y: float
    width: float
    height: float
    fill: str


@dataclass(frozen=True)
class ImageElement:
    x: float
    y: float
    width: float
    height: float
    # OpenCV BGR array; always a private copy of the session photo.
    pixels: object = field(repr=False, compare=False)


@dataclass(frozen=True)
class LineElement:
    start: Tuple[float, float]
    end: Tuple[float, float]
    color: str
    width: float = 1
    dash: Optional[Tuple[int, int]] = None


@dataclass(frozen=True)
class CircleElement:
    center: Tuple[float, float]
    radius: float
    fill: str


@dataclass(frozen=True)
class TextElement:
    position: Tuple[float, float]
    text: str
    color: str
    size: int


@dataclass(frozen=True)
class Scene:
    width: int
    height: int
    background: str
    elements: tuple


def contain_rect(img_w, img_h, surface_w, surface_h):
    """Largest aspect-preserving rect of the image centered in the surface."""
    scale = min(surface_w / img_w, surface_h / img_h)
    w = img_w * scale
    h = img_h * scale
    return ((surface_w - w) / 2.0, (surface_h - h) / 2.0, w, h)


def overlay_elements(placed, measurement, prompt=None, surface_size=None):
    """
    Vector overlays for placed markers: central incisor lines once measured,
    marker dots with labels, the upper lateral reference line with its
    perpendicular midline guide, and the placement prompt banner.
    """
    elements = []

    if measurement is not None:
        for left, right, color in (
            (LandmarkId.UPPER_LEFT_CENTRAL, LandmarkId.UPPER_RIGHT_CENTRAL, UPPER_ARCH_COLOR),
            (LandmarkId.LOWER_LEFT_CENTRAL, LandmarkId.LOWER_RIGHT_CENTRAL, LOWER_ARCH_COLOR),
        ):
            if left in placed and right in placed:
                elements.append(
                    LineElement(placed[left].point, placed[right].point, color, CENTRAL_LINE_WIDTH)
                )

    for landmark, marker in placed.items():
        elements.append(CircleElement(marker.point, MARKER_OUTER_RADIUS, landmark.color))
        elements.append(CircleElement(marker.point, MARKER_INNER_RADIUS, MARKER_INNER_COLOR))
        elements.append(
            TextElement(
                (marker.x, marker.y - MARKER_LABEL_OFFSET),
                landmark.short_label,
                MARKER_LABEL_COLOR,
                MARKER_LABEL_SIZE,
            )
        )

    left_lateral = placed.get(LandmarkId.UPPER_LEFT_LATERAL)
    right_lateral = placed.get(LandmarkId.UPPER_RIGHT_LATERAL)
    if left_lateral is not None and right_lateral is not None:
        elements.append(
            LineElement(left_lateral.point, right_lateral.point, LATERAL_LINE_COLOR, 1, LATERAL_LINE_DASH)
        )
        start, end = perpendicular_bisector(
            left_lateral.point, right_lateral.point, MIDLINE_GUIDE_HALF_LENGTH
        )
        if start != end:
            elements.append(LineElement(start, end, MIDLINE_GUIDE_COLOR, 1, MIDLINE_GUIDE_DASH))

    if prompt and surface_size is not None:
        surface_w, surface_h = surface_size
        top = surface_h - PROMPT_BANNER_MARGIN - PROMPT_BANNER_HEIGHT
        width = max(0, surface_w - 2 * PROMPT_BANNER_MARGIN)
        elements.append(
            RectElement(PROMPT_BANNER_MARGIN, top, width, PROMPT_BANNER_HEIGHT, PROMPT_BANNER_FILL)
        )
        elements.append(
            TextElement(
                midpoint((PROMPT_BANNER_MARGIN, top), (PROMPT_BANNER_MARGIN + width, top + PROMPT_BANNER_HEIGHT)),
                prompt,
                PROMPT_TEXT_COLOR,
                PROMPT_TEXT_SIZE,
            )
        )

    return elements


def build_scene(session, background=SURFACE_BG):
    """
    Capture the session's visual surface as a detached Scene.
    The photo is copied, so later session edits never reach the scene.
    """
    if session.surface_size is None:
        raise ValueError("Visual surface size is not known yet.")

    surface_w, surface_h = session.surface_size
    elements = [RectElement(0, 0, surface_w, surface_h, background)]

    if session.image_bgr is not None:
        img_h, img_w = session.image_bgr.shape[:2]
        x, y, w, h = contain_rect(img_w, img_h, surface_w, surface_h)
        elements.append(ImageElement(x, y, w, h, session.image_bgr.copy()))

    elements.extend(
        overlay_elements(
            dict(session.placed),
            session.measurement,
            prompt=session.prompt(),
            surface_size=session.surface_size,
        )
    )
    return Scene(surface_w, surface_h, background, tuple(elements))
