import io
import numpy as np
import pytest
from PIL import Image

from palettegen.palette.engine import color_at, extract_palette

def _photo(h=120, w=160, seed=0):
    # smooth gradient plus a few flat blocks, enough populated cubes for k=5
    rng = np.random.default_rng(seed)
    yy, xx = np.mgrid[0:h, 0:w]
    img = np.stack([xx * 255 // w, yy * 255 // h, np.full_like(xx, 90)], axis=2).astype(np.uint8)
    img[:30, :40] = (250, 240, 20)
    img[-30:, -40:] = (20, 30, 200)
    noise = rng.integers(-3, 4, size=img.shape)
    return np.clip(img.astype(np.int32) + noise, 0, 255).astype(np.uint8)

def test_seeded_runs_are_identical():
    img = _photo()
    a = extract_palette(img, k=5, base_color=(0, 0, 0), base_position=(3, 4), rng=7)
    b = extract_palette(img, k=5, base_color=(0, 0, 0), base_position=(3, 4), rng=7)
    assert a.palette == b.palette
    assert a.markers == b.markers

def test_contract_on_photo():
    img = _photo()
    h, w = img.shape[:2]
    res = extract_palette(img, k=5, base_color=color_at(img, (50, 60)), base_position=(50, 60),
                          rng=np.random.default_rng(1))
    assert len(res.palette) == len(res.markers) <= 5
    assert (res.markers[0].x, res.markers[0].y) == (50, 60)
    for color, m in zip(res.palette, res.markers):
        assert m.color == color
        assert len(color) == 7 and color == color.lower() and color.startswith("#")
        assert 0 <= m.x < w and 0 <= m.y < h
    assert 1 <= res.iterations <= 20
    assert all(b < a for a, b in zip(res.mean_errors, res.mean_errors[1:]))

def test_solid_image():
    img = np.full((10, 10, 3), (12, 200, 99), dtype=np.uint8)
    res = extract_palette(img, k=3, base_color=(12, 200, 99), rng=0)
    assert 1 <= len(res.palette) <= 3
    assert all(c == "#0cc863" for c in res.palette)
    for m in res.markers:
        assert 0 <= m.x < 10 and 0 <= m.y < 10

def test_four_corner_colors():
    img = np.array(
        [[[255, 0, 0], [0, 255, 0]],
         [[0, 0, 255], [255, 255, 255]]], dtype=np.uint8)
    res = extract_palette(img, k=4, base_color=(255, 0, 0), base_position=(0, 0), rng=3)
    assert res.palette[0] == "#ff0000"
    assert (res.markers[0].x, res.markers[0].y) == (0, 0)
    expected = {"#00ff00": (1, 0), "#0000ff": (0, 1), "#ffffff": (1, 1)}
    assert sorted(res.palette[1:]) == sorted(expected)
    for m in res.markers[1:]:
        assert (m.x, m.y) == expected[m.color]

def test_two_colors_cap_palette():
    img = np.zeros((40, 40, 3), dtype=np.uint8)
    img[:, 20:] = (200, 120, 40)
    res = extract_palette(img, k=5, base_color=(0, 0, 0), rng=0)
    assert len(res.palette) <= 2
    assert len(res.markers) == len(res.palette)

def test_accepts_pil_and_encoded_bytes():
    img = _photo(40, 60)
    pil = Image.fromarray(img).convert("RGBA")
    buf = io.BytesIO()
    Image.fromarray(img).save(buf, format="PNG")
    a = extract_palette(pil, k=3, rng=2)
    b = extract_palette(buf.getvalue(), k=3, rng=2)
    assert a.palette == b.palette

@pytest.mark.parametrize("image", [None, b"not an image", np.zeros((0, 5, 3), dtype=np.uint8), "/no/such/file.png"])
def test_undecodable_gives_empty_result(image):
    res = extract_palette(image, k=5)
    assert res.palette == [] and res.markers == []

@pytest.mark.parametrize("kwargs", [
    {"k": 0},
    {"k": -2},
    {"sampling_rate": 0.0},
    {"sampling_rate": 1.5},
    {"base_color": (0, 0)},
    {"base_color": (0, 0, 300)},
    {"base_position": (1,)},
    {"base_position": (float("inf"), 0)},
    {"base_position": (0, float("nan"))},
    {"base_position": ("a", 0)},
])
def test_invalid_arguments(kwargs):
    img = _photo(20, 20)
    with pytest.raises(ValueError):
        extract_palette(img, **kwargs)

def test_base_position_clamped_into_image():
    img = _photo(20, 30)
    res = extract_palette(img, k=2, base_position=(100, -5), rng=0)
    assert (res.markers[0].x, res.markers[0].y) == (29, 0)

def test_to_dict_is_json_ready():
    res = extract_palette(_photo(30, 30), k=3, rng=4)
    d = res.to_dict()
    assert d["palette"] == res.palette
    assert d["markers"][0] == {"x": 0, "y": 0, "color": res.palette[0]}
