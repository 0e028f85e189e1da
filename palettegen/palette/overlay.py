from __future__ import annotations
from typing import Iterable, Optional
import numpy as np
import cv2

from ..config import MARKER_RADIUS
from .colors import hex_to_rgb
from .engine import Marker

def draw_markers(
    img_rgb: np.ndarray,
    markers: Iterable[Marker],
    selected: Optional[str] = None,
    radius: int = MARKER_RADIUS,
) -> np.ndarray:
    """
    Draw each marker as a disc filled with its palette color.
    Outline is white; the selected color gets a thicker black outline plus an
    outer white ring.
    """
    out_bgr = cv2.cvtColor(img_rgb, cv2.COLOR_RGB2BGR).copy()
    white, black = (255, 255, 255), (0, 0, 0)
    for m in markers:
        r, g, b = hex_to_rgb(m.color)
        center = (int(m.x), int(m.y))
        cv2.circle(out_bgr, center, radius, (b, g, r), -1, cv2.LINE_AA)
        if m.color == selected:
            cv2.circle(out_bgr, center, radius, black, 3, cv2.LINE_AA)
            cv2.circle(out_bgr, center, radius + 5, white, 2, cv2.LINE_AA)
        else:
            cv2.circle(out_bgr, center, radius, white, 2, cv2.LINE_AA)
    return cv2.cvtColor(out_bgr, cv2.COLOR_BGR2RGB)

def marker_radius_for(h: int, w: int, base: int = MARKER_RADIUS) -> int:
    """Scale the marker radius with the image so it stays visible on large inputs."""
    return max(2, int(round(base * max(h, w) / 800)))
