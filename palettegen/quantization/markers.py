from __future__ import annotations
from typing import List, Sequence, Tuple
import numpy as np

from .matchers import nearest_pixel

def to_original_coords(
    x: float,
    y: float,
    scale_x: float,
    scale_y: float,
    orig_w: int,
    orig_h: int,
) -> Tuple[int, int]:
    """Map working-buffer coordinates back to a pixel of the original image."""
    ox = int(np.floor(x / scale_x))
    oy = int(np.floor(y / scale_y))
    return min(max(ox, 0), orig_w - 1), min(max(oy, 0), orig_h - 1)

def locate_markers(
    centroids: np.ndarray,        # (K, 3)
    working_img: np.ndarray,      # (h, w, 3) uint8
    orig_size: Tuple[int, int],   # (H, W) of the original image
    base_position: Sequence[int],
) -> List[Tuple[int, int]]:
    """
    One (x, y) per centroid, in original-image pixels.
    Entry 0 is the caller's base position and is not searched. Every other
    entry is the first pixel of the working image (row-major) with the smallest
    distance to the centroid, divided back by the working scale.
    """
    if centroids.shape[0] == 0:
        return []
    orig_h, orig_w = orig_size
    h, w = working_img.shape[:2]
    # rounded working size, so use the realised per-axis scale
    scale_x = w / orig_w
    scale_y = h / orig_h
    pixels = working_img.reshape(h * w, -1)[:, :3]

    coords = [(int(base_position[0]), int(base_position[1]))]
    for centroid in centroids[1:]:
        idx = nearest_pixel(pixels, centroid)
        coords.append(to_original_coords(idx % w, idx // w, scale_x, scale_y, orig_w, orig_h))
    return coords
