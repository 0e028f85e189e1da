from typing import Sequence, Union
import numpy as np

from ..palette.colors import hex_to_rgb
from ..quantization.matchers import assign_nearest

PaletteLike = Union[Sequence[str], np.ndarray]

def palette_to_array(palette: PaletteLike) -> np.ndarray:
    """Hex strings or an (K,3) array -> (K,3) uint8."""
    if isinstance(palette, np.ndarray):
        return np.clip(palette, 0, 255).astype(np.uint8).reshape(-1, 3)
    return np.array([hex_to_rgb(c) for c in palette], dtype=np.uint8).reshape(-1, 3)

def quantize(img_rgb: np.ndarray, palette: PaletteLike) -> np.ndarray:
    """
    Recolor every pixel with its nearest palette color (Euclidean RGB).
    An empty palette leaves the image untouched.
    """
    colors = palette_to_array(palette)
    if colors.shape[0] == 0:
        return img_rgb
    h, w = img_rgb.shape[:2]
    labels, _ = assign_nearest(img_rgb.reshape(h * w, -1)[:, :3], colors)
    return colors[labels].reshape(h, w, 3)
