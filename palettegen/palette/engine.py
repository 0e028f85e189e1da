# palettegen/palette/engine.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union
import logging
import numpy as np

from ..config import (
    CUBE_BANDS, CUBE_COUNT_THRESHOLD, DEFAULT_BASE_COLOR, DEFAULT_BASE_POSITION,
    DEFAULT_K, DEFAULT_SAMPLING_RATE, MAX_DIMENSION, MAX_ITERATIONS,
)
from ..io_utils import ImageInput, to_rgb_array
from ..preprocessing.resize import resize_to_working
from ..quantization.cubes import initial_palette
from ..quantization.markers import locate_markers
from ..quantization.refine import refine_centroids
from .colors import RGBTuple, rgb_to_hex

logger = logging.getLogger(__name__)

SeedLike = Union[None, int, np.random.Generator]

@dataclass(frozen=True)
class Marker:
    x: int
    y: int
    color: str  # "#rrggbb"

    def to_dict(self) -> Dict[str, Union[int, str]]:
        return {"x": self.x, "y": self.y, "color": self.color}

@dataclass
class PaletteResult:
    palette: List[str] = field(default_factory=list)
    markers: List[Marker] = field(default_factory=list)
    mean_errors: List[float] = field(default_factory=list)  # accepted refinement errors
    iterations: int = 0

    def __len__(self) -> int:
        return len(self.palette)

    def to_dict(self) -> Dict[str, object]:
        return {
            "palette": list(self.palette),
            "markers": [m.to_dict() for m in self.markers],
            "mean_errors": [float(e) for e in self.mean_errors],
            "iterations": int(self.iterations),
        }

def _validate(
    k: int,
    base_color: Sequence[int],
    base_position: Sequence[float],
    sampling_rate: float,
) -> None:
    if int(k) != k or k < 1:
        raise ValueError(f"k must be an integer >= 1, got {k!r}")
    if not (0.0 < float(sampling_rate) <= 1.0):
        raise ValueError(f"sampling_rate must be in (0, 1], got {sampling_rate!r}")
    if len(base_color) != 3 or any(not (0 <= float(c) <= 255) for c in base_color):
        raise ValueError(f"base_color must be three channels in 0..255, got {base_color!r}")
    if len(base_position) != 2 or not all(
        isinstance(v, (int, float, np.integer, np.floating)) and not isinstance(v, bool) and np.isfinite(v)
        for v in base_position
    ):
        raise ValueError(f"base_position must be two finite numbers (x, y), got {base_position!r}")

def _clamp_position(position: Sequence[float], h: int, w: int) -> Tuple[int, int]:
    x, y = int(position[0]), int(position[1])
    cx, cy = min(max(x, 0), w - 1), min(max(y, 0), h - 1)
    if (cx, cy) != (x, y):
        logger.warning("Base position (%d, %d) outside %dx%d image, clamped to (%d, %d)", x, y, w, h, cx, cy)
    return cx, cy

def color_at(image: ImageInput, position: Sequence[float]) -> Optional[RGBTuple]:
    """RGB of the pixel under position (x, y), clamped to the image. None if undecodable."""
    img = to_rgb_array(image)
    if img is None or img.size == 0:
        return None
    h, w = img.shape[:2]
    x, y = _clamp_position(position, h, w)
    r, g, b = img[y, x]
    return int(r), int(g), int(b)

def extract_palette(
    image: ImageInput,
    k: int = DEFAULT_K,
    base_color: Sequence[int] = DEFAULT_BASE_COLOR,
    base_position: Sequence[float] = DEFAULT_BASE_POSITION,
    sampling_rate: float = DEFAULT_SAMPLING_RATE,
    rng: SeedLike = None,
    max_dimension: int = MAX_DIMENSION,
    max_iterations: int = MAX_ITERATIONS,
    cube_bands: int = CUBE_BANDS,
    cube_count_threshold: int = CUBE_COUNT_THRESHOLD,
) -> PaletteResult:
    """
    Build a palette of up to k colors for the image, base color first, and one
    marker per palette entry in original-image pixel coordinates.

    - image: path, encoded bytes, PIL image or (H, W[, C]) array. Undecodable
      or zero-size input gives an empty result.
    - rng: seed or numpy Generator; the same seed gives the same result.
    The palette may be shorter than k when the image has fewer populated cubes.
    """
    _validate(k, base_color, base_position, sampling_rate)
    gen = np.random.default_rng(rng)

    img_rgb = to_rgb_array(image)
    if img_rgb is None or img_rgb.shape[0] == 0 or img_rgb.shape[1] == 0:
        logger.warning("No decodable image data; returning an empty palette")
        return PaletteResult()

    orig_h, orig_w = img_rgb.shape[:2]
    base_xy = _clamp_position(base_position, orig_h, orig_w)

    # 1) working buffer
    working, scale = resize_to_working(img_rgb, max_dimension=max_dimension)
    h, w = working.shape[:2]
    pixels = working.reshape(h * w, 3)

    # 2) initial centroids from color cubes
    initial = initial_palette(
        pixels, int(k), base_color, bands=cube_bands, count_threshold=cube_count_threshold,
    )

    # 3) sampled refinement
    refined = refine_centroids(
        initial, pixels, gen, sampling_rate=float(sampling_rate), max_iterations=max_iterations,
    )

    # 4) markers, back in original coordinates
    coords = locate_markers(refined.centroids, working, (orig_h, orig_w), base_xy)

    # 5) hex output
    palette = [rgb_to_hex(c) for c in refined.centroids]
    markers = [Marker(x=x, y=y, color=color) for (x, y), color in zip(coords, palette)]
    logger.info(
        "Palette of %d/%d colors from %dx%d image (working %dx%d, scale %.3f) after %d iteration(s), stop: %s",
        len(palette), k, orig_w, orig_h, w, h, scale, refined.iterations, refined.stop_reason,
    )
    return PaletteResult(
        palette=palette,
        markers=markers,
        mean_errors=list(refined.errors),
        iterations=refined.iterations,
    )
