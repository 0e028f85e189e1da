from pathlib import Path
from typing import Optional, Union
import logging
import cv2
import numpy as np
from PIL import Image

from .config import DEFAULT_JPEG_QUALITY

logger = logging.getLogger(__name__)

ImageInput = Union[str, Path, bytes, bytearray, Image.Image, np.ndarray, None]

# cv2 loads BGR; convert to RGB to keep consistency across the codebase.
def load_image(path: Union[str, Path]) -> np.ndarray:
    path = Path(path)
    img_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img_bgr is None:
        raise FileNotFoundError(f"Could not read image: {path}")
    img_rgb = cv2.cvtColor(img_bgr, cv2.COLOR_BGR2RGB)
    return img_rgb

def decode_image(data: Union[bytes, bytearray]) -> Optional[np.ndarray]:
    """Decode an encoded image (PNG/JPEG/...) to RGB, or None if it is not one."""
    buf = np.frombuffer(bytes(data), dtype=np.uint8)
    if buf.size == 0:
        return None
    img_bgr = cv2.imdecode(buf, cv2.IMREAD_COLOR)
    if img_bgr is None:
        return None
    return cv2.cvtColor(img_bgr, cv2.COLOR_BGR2RGB)

def _array_to_rgb(arr: np.ndarray) -> Optional[np.ndarray]:
    if arr.ndim == 2:
        arr = np.repeat(arr[..., None], 3, axis=2)
    if arr.ndim != 3 or arr.shape[2] < 3:
        return None
    arr = arr[..., :3]  # alpha is ignored
    if arr.dtype != np.uint8:
        arr = np.clip(arr, 0, 255).astype(np.uint8)
    return np.ascontiguousarray(arr)

def to_rgb_array(image: ImageInput) -> Optional[np.ndarray]:
    """
    Normalize any supported image input to an (H, W, 3) uint8 RGB array.
    Returns None when the input cannot be decoded.
    """
    if image is None:
        return None
    if isinstance(image, np.ndarray):
        return _array_to_rgb(image)
    if isinstance(image, Image.Image):
        return np.array(image.convert("RGB"))
    if isinstance(image, (bytes, bytearray)):
        return decode_image(image)
    try:
        return load_image(image)
    except FileNotFoundError as e:
        logger.warning("%s", e)
        return None

def save_image_rgb(path: Union[str, Path], img_rgb: np.ndarray, quality: int = DEFAULT_JPEG_QUALITY) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    ext = path.suffix.lower()
    img_bgr = cv2.cvtColor(img_rgb, cv2.COLOR_RGB2BGR)
    if ext in [".jpg", ".jpeg"]:
        cv2.imwrite(str(path), img_bgr, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
    elif ext == ".png":
        cv2.imwrite(str(path), img_bgr)  # use default compression
    else:
        # fallback to PNG
        path = path.with_suffix(".png")
        cv2.imwrite(str(path), img_bgr)
    return path

def list_images(folder: Union[str, Path]) -> list[Path]:
    folder = Path(folder)
    exts = (".jpg", ".jpeg", ".png", ".bmp", ".webp")
    return sorted([p for p in folder.iterdir() if p.suffix.lower() in exts])
