import inspect
import numpy as np
from palettegen.config import DEFAULT_JPEG_QUALITY
from palettegen.io_utils import load_image, save_image_rgb

def test_jpeg_quality_default_from_config():
    assert inspect.signature(save_image_rgb).parameters["quality"].default == DEFAULT_JPEG_QUALITY

def test_save_and_load_png(tmp_path):
    img = (np.random.rand(16, 24, 3) * 255).astype("uint8")
    out = save_image_rgb(tmp_path / "a.png", img)
    assert np.array_equal(load_image(out), img)

def test_save_jpeg_with_default_quality(tmp_path):
    img = np.full((16, 16, 3), 128, dtype=np.uint8)
    out = save_image_rgb(tmp_path / "a.jpg", img)
    back = load_image(out)
    assert back.shape == img.shape
    assert np.abs(back.astype(int) - 128).max() <= 2
