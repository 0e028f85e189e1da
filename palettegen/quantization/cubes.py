# palettegen/quantization/cubes.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence
import logging
import numpy as np

from ..config import CUBE_BANDS, CUBE_COUNT_THRESHOLD
from ..metrics.similarity import pairwise_distances

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ColorCubes:
    """Populated cubes that passed the count threshold."""
    index: np.ndarray   # (M,) int32 cube id, r*bands^2 + g*bands + b
    count: np.ndarray   # (M,) int64 pixels per cube
    mean: np.ndarray    # (M, 3) float64 mean color per cube

    def __len__(self) -> int:
        return int(self.index.size)

def cube_indices(pixels: np.ndarray, bands: int = CUBE_BANDS) -> np.ndarray:
    """
    Cube id per pixel: each channel is cut into `bands` equal-width bands.
    pixels: (N,3) uint8 -> (N,) int32
    """
    width = 256 // bands
    q = pixels.astype(np.int32) // width
    return (q[:, 0] * (bands * bands) + q[:, 1] * bands + q[:, 2]).astype(np.int32)

def build_color_cubes(
    pixels: np.ndarray,
    bands: int = CUBE_BANDS,
    count_threshold: int = CUBE_COUNT_THRESHOLD,
) -> ColorCubes:
    """
    Bin all pixels into bands^3 cubes and keep the ones holding at least
    `count_threshold` pixels, with their pixel count and mean color.
    """
    n_cubes = bands ** 3
    if pixels.shape[0] == 0:
        return ColorCubes(
            index=np.empty((0,), dtype=np.int32),
            count=np.empty((0,), dtype=np.int64),
            mean=np.empty((0, 3), dtype=np.float64),
        )

    idx = cube_indices(pixels, bands)
    counts = np.bincount(idx, minlength=n_cubes)
    sums = np.stack(
        [np.bincount(idx, weights=pixels[:, c].astype(np.float64), minlength=n_cubes) for c in range(3)],
        axis=1,
    )  # (n_cubes, 3)

    keep = np.nonzero(counts >= count_threshold)[0]
    mean = sums[keep] / counts[keep, None]
    logger.debug(
        "%d populated cubes, %d at or above threshold %d",
        int(np.count_nonzero(counts)), keep.size, count_threshold,
    )
    return ColorCubes(index=keep.astype(np.int32), count=counts[keep].astype(np.int64), mean=mean)

def select_initial_colors(
    cubes: ColorCubes,
    k: int,
    base_color: Sequence[float],
) -> List[np.ndarray]:
    """
    Density-weighted farthest-point selection over cube means.
    The base color is always first. Each round picks the unused cube that
    maximizes min-distance-to-chosen * sqrt(count); stops at k colors or when
    no cube is left (or only duplicates of chosen colors), so fewer than k
    colors may come back.
    """
    chosen = [np.asarray(base_color, dtype=np.float64)]
    if len(cubes) == 0 or k <= 1:
        return chosen

    weight = np.sqrt(cubes.count.astype(np.float64))  # (M,)
    # running min distance from each cube mean to any chosen color
    min_dist = pairwise_distances(cubes.mean, chosen[0][None, :])[:, 0]  # (M,)
    available = np.ones((len(cubes),), dtype=bool)

    while len(chosen) < k:
        score = np.where(available, min_dist * weight, -1.0)
        best = int(np.argmax(score))
        # zero score: the cube mean duplicates a chosen color
        if score[best] <= 0.0:
            break
        color = cubes.mean[best].copy()
        chosen.append(color)
        available[best] = False
        min_dist = np.minimum(min_dist, pairwise_distances(cubes.mean, color[None, :])[:, 0])

    return chosen

def initial_palette(
    pixels: np.ndarray,
    k: int,
    base_color: Sequence[float],
    bands: int = CUBE_BANDS,
    count_threshold: int = CUBE_COUNT_THRESHOLD,
) -> np.ndarray:
    """
    Initial centroids (up to k, base color first) as a (k', 3) float64 array.
    """
    cubes = build_color_cubes(pixels, bands=bands, count_threshold=count_threshold)
    colors = select_initial_colors(cubes, k, base_color)
    if len(colors) < k:
        logger.info("Only %d of %d initial colors available", len(colors), k)
    return np.stack(colors, axis=0)
