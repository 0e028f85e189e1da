from __future__ import annotations
from typing import Dict, Sequence
import numpy as np

from ..metrics.similarity import mse, ssim_rgb
from ..preprocessing.color_quantization import quantize

def palette_report(img_rgb: np.ndarray, palette: Sequence[str]) -> Dict[str, object]:
    """
    How well the palette alone reproduces the image: recolor with the nearest
    palette entry and compare to the input.
    """
    recolored = quantize(img_rgb, palette)
    used = np.unique(recolored.reshape(-1, 3), axis=0).shape[0] if len(palette) else 0
    return {
        "colors": len(palette),
        "unique_colors_used": int(used),
        "mse": mse(img_rgb, recolored),
        "ssim": ssim_rgb(img_rgb, recolored),
    }
