import numpy as np
import pytest
from palettegen.palette.colors import (
    complementary_color, contrast_ratio, hex_to_rgb, rgb_to_hex, wcag_level,
)
from palettegen.palette.engine import Marker
from palettegen.palette.overlay import draw_markers

def test_hex_format():
    assert rgb_to_hex((0, 15, 255)) == "#000fff"
    assert rgb_to_hex((10.5, 0.4, 300)) == "#0b00ff"
    assert hex_to_rgb("#0A0b0C") == (10, 11, 12)
    assert hex_to_rgb("nope") == (0, 0, 0)

def test_complementary_and_contrast():
    assert complementary_color("#ff0000") == "#00ffff"
    assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)
    assert contrast_ratio("#777777", "#777777") == pytest.approx(1.0)

@pytest.mark.parametrize("ratio,level", [(21, "AAA"), (5, "AA"), (3.5, "AA Large"), (1.2, "Fail")])
def test_wcag_levels(ratio, level):
    assert wcag_level(ratio) == level

def test_draw_markers_keeps_shape():
    img = np.zeros((50, 60, 3), dtype=np.uint8)
    out = draw_markers(img, [Marker(10, 20, "#ff0000"), Marker(40, 30, "#00ff00")], selected="#00ff00", radius=4)
    assert out.shape == img.shape and out.dtype == np.uint8
    assert tuple(out[20, 10]) == (255, 0, 0)
    assert tuple(out[30, 40]) == (0, 255, 0)
