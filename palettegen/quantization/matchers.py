from __future__ import annotations
from typing import Tuple
import numpy as np

from ..metrics.similarity import pairwise_distances

def assign_nearest(
    pixels: np.ndarray,     # (N, 3)
    centroids: np.ndarray,  # (K, 3)
    chunk: int = 65536,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Returns (labels, distances): index of the nearest centroid per pixel and the
    Euclidean distance to it. Exact ties go to the lowest centroid index.
    Chunked over pixels to bound the (n, K, 3) intermediate.
    """
    N = pixels.shape[0]
    labels = np.empty((N,), dtype=np.int32)
    dists = np.empty((N,), dtype=np.float64)
    for s in range(0, N, chunk):
        e = min(s + chunk, N)
        d = pairwise_distances(pixels[s:e], centroids)  # (n, K)
        best = np.argmin(d, axis=1)                     # first minimum
        labels[s:e] = best
        dists[s:e] = d[np.arange(e - s), best]
    return labels, dists

def nearest_pixel(pixels: np.ndarray, color: np.ndarray) -> int:
    """
    Index of the first pixel (in buffer order) closest to color.
    """
    d = pairwise_distances(pixels, np.asarray(color, dtype=np.float64).reshape(1, 3))
    return int(np.argmin(d[:, 0]))
