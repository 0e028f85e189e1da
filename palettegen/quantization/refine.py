# palettegen/quantization/refine.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Literal
import logging
import numpy as np

from ..config import DEFAULT_SAMPLING_RATE, MAX_ITERATIONS
from .matchers import assign_nearest

logger = logging.getLogger(__name__)

StopReason = Literal["no_improvement", "empty_sample", "max_iterations"]

@dataclass
class RefinementResult:
    centroids: np.ndarray                  # (K, 3) float64, rounded
    errors: List[float] = field(default_factory=list)  # accepted mean errors, strictly decreasing
    iterations: int = 0                    # iterations run, including the rejected one
    stop_reason: StopReason = "max_iterations"

def round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)

def update_centroids(
    pixels: np.ndarray,     # (n, 3)
    labels: np.ndarray,     # (n,)
    centroids: np.ndarray,  # (K, 3)
) -> np.ndarray:
    """
    Per-channel rounded mean of the pixels assigned to each centroid.
    Centroids without members keep their previous value.
    """
    K = centroids.shape[0]
    counts = np.bincount(labels, minlength=K)
    sums = np.stack(
        [np.bincount(labels, weights=pixels[:, c].astype(np.float64), minlength=K) for c in range(3)],
        axis=1,
    )  # (K, 3)
    out = centroids.astype(np.float64).copy()
    filled = counts > 0
    out[filled] = round_half_up(sums[filled] / counts[filled, None])
    return np.clip(out, 0.0, 255.0)

def refine_centroids(
    centroids: np.ndarray,
    pixels: np.ndarray,
    rng: np.random.Generator,
    sampling_rate: float = DEFAULT_SAMPLING_RATE,
    max_iterations: int = MAX_ITERATIONS,
) -> RefinementResult:
    """
    Sampled, early-stopping k-means.

    Every iteration keeps each pixel with probability `sampling_rate`, assigns
    the sample to the nearest centroid and measures the mean Euclidean distance
    ("mean error"). If that error is not strictly below the previous one the
    loop stops and the current centroids are returned unchanged; otherwise the
    centroids move to their cluster means. An empty sample also stops the loop.
    """
    current = np.clip(centroids.astype(np.float64), 0.0, 255.0)
    result = RefinementResult(centroids=current)
    previous_error = float("inf")

    for it in range(max_iterations):
        result.iterations = it + 1
        keep = rng.random(pixels.shape[0]) < sampling_rate
        sample = pixels[keep]
        if sample.shape[0] == 0:
            logger.debug("Iteration %d: empty sample, stopping", it + 1)
            result.stop_reason = "empty_sample"
            break

        labels, dists = assign_nearest(sample, current)
        error = float(dists.mean())
        logger.debug("Iteration %d: %d sampled, mean error %.4f", it + 1, sample.shape[0], error)
        if error >= previous_error:
            result.stop_reason = "no_improvement"
            break

        current = update_centroids(sample, labels, current)
        previous_error = error
        result.errors.append(error)
    else:
        result.stop_reason = "max_iterations"

    result.centroids = current
    return result
