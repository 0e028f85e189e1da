from typing import Tuple
import numpy as np
import cv2

from ..config import MAX_DIMENSION

def working_scale(h: int, w: int, max_dimension: int = MAX_DIMENSION) -> float:
    """
    Factor that maps the longer side of an (h, w) image onto max_dimension.
    Small images are enlarged so that every source color covers enough pixels
    to survive the cube count threshold. The threshold then counts working
    pixels, not source pixels: at 16x enlargement a single stray source pixel
    fills 256 working pixels and passes it.
    """
    return max_dimension / max(h, w, 1)

def resize_to_working(
    img_rgb: np.ndarray,
    max_dimension: int = MAX_DIMENSION,
) -> Tuple[np.ndarray, float]:
    """
    Resize with aspect preserved so the longer side is max_dimension.
    Returns (working image, scale). Shrinking uses area averaging; enlarging
    uses nearest neighbour so no blended colors appear.
    """
    h, w = img_rgb.shape[:2]
    scale = working_scale(h, w, max_dimension)
    if scale == 1.0:
        return img_rgb, scale
    new_w = max(1, int(round(w * scale)))
    new_h = max(1, int(round(h * scale)))
    interpolation = cv2.INTER_AREA if scale < 1.0 else cv2.INTER_NEAREST
    resized = cv2.resize(img_rgb, (new_w, new_h), interpolation=interpolation)
    return resized, scale
