from __future__ import annotations
import re
from typing import Sequence, Tuple
import numpy as np

RGBTuple = Tuple[int, int, int]

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

def rgb_to_hex(rgb: Sequence[float]) -> str:
    """'#rrggbb', lowercase, each channel rounded half-up and clamped to 0..255."""
    r, g, b = (int(np.clip(np.floor(float(c) + 0.5), 0, 255)) for c in rgb[:3])
    return f"#{r:02x}{g:02x}{b:02x}"

def hex_to_rgb(hex_color: str) -> RGBTuple:
    """Parse '#rrggbb' (leading '#' optional). Anything else maps to black."""
    m = _HEX_RE.match(hex_color.strip())
    if not m:
        return (0, 0, 0)
    return (int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16))

def complementary_color(hex_color: str) -> str:
    r, g, b = hex_to_rgb(hex_color)
    return rgb_to_hex((255 - r, 255 - g, 255 - b))

def relative_luminance(rgb: Sequence[float]) -> float:
    """WCAG 2.x relative luminance of an sRGB color in 0..255."""
    v = np.asarray(rgb[:3], dtype=np.float64) / 255.0
    lin = np.where(v <= 0.03928, v / 12.92, ((v + 0.055) / 1.055) ** 2.4)
    return float(0.2126 * lin[0] + 0.7152 * lin[1] + 0.0722 * lin[2])

def contrast_ratio(color_a: str, color_b: str) -> float:
    """WCAG contrast ratio between two hex colors, in [1, 21]."""
    la = relative_luminance(hex_to_rgb(color_a))
    lb = relative_luminance(hex_to_rgb(color_b))
    return (max(la, lb) + 0.05) / (min(la, lb) + 0.05)

def wcag_level(contrast: float) -> str:
    if contrast >= 7:
        return "AAA"
    if contrast >= 4.5:
        return "AA"
    if contrast >= 3:
        return "AA Large"
    return "Fail"
