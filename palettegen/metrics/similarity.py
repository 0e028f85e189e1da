# palettegen/metrics/similarity.py
from __future__ import annotations
from typing import Sequence, Union
import numpy as np
from skimage.metrics import structural_similarity as ssim

ColorLike = Union[Sequence[float], np.ndarray]

def euclidean(a: ColorLike, b: ColorLike) -> float:
    """Euclidean distance between two RGB colors."""
    d = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return float(np.sqrt((d * d).sum()))

def pairwise_distances(
    pixels: np.ndarray,     # (N, 3)
    centroids: np.ndarray,  # (K, 3)
) -> np.ndarray:
    """
    Euclidean distance from every pixel to every centroid, shape (N, K).
    """
    # (N,1,3) - (1,K,3) -> (N,K,3)
    diff = pixels[:, None, :].astype(np.float64) - centroids[None, :, :].astype(np.float64)
    return np.sqrt((diff * diff).sum(axis=2))

def mse(a: np.ndarray, b: np.ndarray) -> float:
    a32 = a.astype(np.float32)
    b32 = b.astype(np.float32)
    return float(np.mean((a32 - b32) ** 2))

def ssim_rgb(a: np.ndarray, b: np.ndarray) -> float:
    # skimage >= 0.19 uses channel_axis instead of multichannel
    a_f = (a.astype(np.float32) / 255.0).clip(0, 1)
    b_f = (b.astype(np.float32) / 255.0).clip(0, 1)
    # default 7x7 window needs both sides >= 7
    win = min(7, a.shape[0], a.shape[1])
    if win % 2 == 0:
        win -= 1
    if win < 3:
        return 1.0 if np.array_equal(a, b) else float("nan")
    val = ssim(a_f, b_f, channel_axis=2, data_range=1.0, win_size=win)
    return float(val)
