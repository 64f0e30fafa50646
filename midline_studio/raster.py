"""
Draw a Scene into an OpenCV BGR raster.

Colors are resolved on a detached copy of the scene first: any color string
that is not plain #RRGGBB falls back to a light gray background or black
foreground instead of being silently dropped.
"""

import dataclasses
import logging
import math
import re

import cv2
import numpy as np

from .scene import CircleElement, ImageElement, LineElement, RectElement, Scene, TextElement
from .settings import FALLBACK_BACKGROUND_COLOR, FALLBACK_FOREGROUND_COLOR, RASTER_SCALE

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")

# Hershey simplex glyph height at fontScale=1.0, in pixels.
_HERSHEY_BASE_HEIGHT = 22.0


def is_supported_color(value):
    return isinstance(value, str) and _HEX_COLOR.match(value) is not None


def hex_to_bgr(color_hex):
    """Convert #RRGGBB color string to OpenCV BGR tuple."""
    color_hex = color_hex.lstrip("#")
    r = int(color_hex[0:2], 16)
    g = int(color_hex[2:4], 16)
    b = int(color_hex[4:6], 16)
    return (b, g, r)


def _resolve(value, fallback):
    if is_supported_color(value):
        return value
    logger.warning("Unsupported color %r replaced with %s", value, fallback)
    return fallback


def resolve_scene_colors(scene):
    """
    Return a copy of `scene` whose colors are all #RRGGBB.
    Fills of rectangles (and the scene background) use the background
    fallback; strokes, dots and text use the foreground fallback.
    """
    resolved = []
    for element in scene.elements:
        if isinstance(element, RectElement):
            element = dataclasses.replace(element, fill=_resolve(element.fill, FALLBACK_BACKGROUND_COLOR))
        elif isinstance(element, CircleElement):
            element = dataclasses.replace(element, fill=_resolve(element.fill, FALLBACK_FOREGROUND_COLOR))
        elif isinstance(element, (LineElement, TextElement)):
            element = dataclasses.replace(element, color=_resolve(element.color, FALLBACK_FOREGROUND_COLOR))
        resolved.append(element)

    return Scene(
        scene.width,
        scene.height,
        _resolve(scene.background, FALLBACK_BACKGROUND_COLOR),
        tuple(resolved),
    )


def _pt(point, scale):
    return (int(round(point[0] * scale)), int(round(point[1] * scale)))


def _draw_dashed_line(img, start, end, color, thickness, dash):
    """OpenCV has no dash pattern, so stroke the on-segments one by one."""
    x1, y1 = start
    x2, y2 = end
    length = math.hypot(x2 - x1, y2 - y1)
    if length == 0.0:
        return
    on_len, off_len = dash
    period = float(on_len + off_len)
    ux = (x2 - x1) / length
    uy = (y2 - y1) / length
    pos = 0.0
    while pos < length:
        seg_end = min(pos + on_len, length)
        p1 = (int(round(x1 + ux * pos)), int(round(y1 + uy * pos)))
        p2 = (int(round(x1 + ux * seg_end)), int(round(y1 + uy * seg_end)))
        cv2.line(img, p1, p2, color, thickness, cv2.LINE_AA)
        pos += period


def _draw_image(img, element, scale):
    x0, y0 = _pt((element.x, element.y), scale)
    w = max(1, int(round(element.width * scale)))
    h = max(1, int(round(element.height * scale)))
    resized = cv2.resize(element.pixels, (w, h), interpolation=cv2.INTER_AREA)

    # Clip to raster bounds.
    canvas_h, canvas_w = img.shape[:2]
    dst_x0, dst_y0 = max(0, x0), max(0, y0)
    dst_x1, dst_y1 = min(canvas_w, x0 + w), min(canvas_h, y0 + h)
    if dst_x1 <= dst_x0 or dst_y1 <= dst_y0:
        return
    img[dst_y0:dst_y1, dst_x0:dst_x1] = resized[dst_y0 - y0:dst_y1 - y0, dst_x0 - x0:dst_x1 - x0]


def _draw_text(img, element, scale):
    font_scale = (element.size * scale) / _HERSHEY_BASE_HEIGHT
    thickness = max(1, int(round(scale)))
    (text_w, text_h), _ = cv2.getTextSize(element.text, cv2.FONT_HERSHEY_SIMPLEX, font_scale, thickness)
    cx, cy = _pt(element.position, scale)
    # Text is anchored on its center, like the on-screen canvas.
    origin = (cx - text_w // 2, cy + text_h // 2)
    cv2.putText(
        img,
        element.text,
        origin,
        cv2.FONT_HERSHEY_SIMPLEX,
        font_scale,
        hex_to_bgr(element.color),
        thickness,
        cv2.LINE_AA,
    )


def rasterize(scene, scale=RASTER_SCALE):
    """Render `scene` at `scale` and return a BGR uint8 array."""
    scene = resolve_scene_colors(scene)
    width = max(1, int(round(scene.width * scale)))
    height = max(1, int(round(scene.height * scale)))
    img = np.empty((height, width, 3), dtype=np.uint8)
    img[:, :] = hex_to_bgr(scene.background)

    for element in scene.elements:
        if isinstance(element, RectElement):
            p1 = _pt((element.x, element.y), scale)
            p2 = _pt((element.x + element.width, element.y + element.height), scale)
            cv2.rectangle(img, p1, p2, hex_to_bgr(element.fill), -1)
        elif isinstance(element, ImageElement):
            _draw_image(img, element, scale)
        elif isinstance(element, LineElement):
            thickness = max(1, int(round(element.width * scale)))
            start = _pt(element.start, scale)
            end = _pt(element.end, scale)
            if element.dash:
                dash = (element.dash[0] * scale, element.dash[1] * scale)
                _draw_dashed_line(img, start, end, hex_to_bgr(element.color), thickness, dash)
            else:
                cv2.line(img, start, end, hex_to_bgr(element.color), thickness, cv2.LINE_AA)
        elif isinstance(element, CircleElement):
            radius = max(1, int(round(element.radius * scale)))
            cv2.circle(img, _pt(element.center, scale), radius, hex_to_bgr(element.fill), -1, cv2.LINE_AA)
        elif isinstance(element, TextElement):
            _draw_text(img, element, scale)
        else:
            raise TypeError(f"Unknown scene element: {type(element).__name__}")

    return img
