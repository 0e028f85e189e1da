# app/app.py
import sys
from pathlib import Path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

import logging
import math
import time
import numpy as np
import gradio as gr

from palettegen.config import DEFAULT_K, DEFAULT_SAMPLING_RATE, LOG_FORMAT
from palettegen.palette.colors import complementary_color, contrast_ratio, hex_to_rgb, wcag_level
from palettegen.palette.engine import Marker, color_at, extract_palette
from palettegen.palette.overlay import draw_markers, marker_radius_for
from palettegen.palette.report import palette_report
from palettegen.preprocessing.resize import resize_to_working

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger("app")

# --------- helpers ----------
def swatches_html(palette: list, selected: str | None) -> str:
    """Palette strip: each swatch labelled in its complementary color with contrast and WCAG grade."""
    if not palette:
        return "<p>No palette yet.</p>"
    cells = []
    for color in palette:
        comp = complementary_color(color)
        contrast = contrast_ratio(color, comp)
        r, g, b = hex_to_rgb(color)
        border = "white" if color == selected else color
        cells.append(
            f"""
            <div style="flex:1;display:flex;flex-direction:column;border:4px solid {border};">
              <div style="background:{color};color:{comp};padding:12px;min-height:140px;">
                <div style="font-size:12px">{color}<br>rgb({r}, {g}, {b})</div>
                <div style="text-align:center;font-size:28px;font-weight:bold">Aa</div>
                <div style="font-size:12px">Contrast: {contrast:.2f}<br>WCAG: {wcag_level(contrast)}</div>
              </div>
              <div style="background:{comp};color:{color};padding:6px;font-size:12px;text-align:center">
                Complementary: {comp}
              </div>
            </div>"""
        )
    return f'<div style="display:flex;gap:0">{"".join(cells)}</div>'

def hit_marker(markers: list, x: float, y: float, radius: int) -> Marker | None:
    for m in markers:
        if math.hypot(x - m.x, y - m.y) <= radius:
            return m
    return None

def _render(image: np.ndarray, state: dict):
    h, w = image.shape[:2]
    overlay = draw_markers(image, state["markers"], selected=state["selected"], radius=marker_radius_for(h, w))
    return overlay, swatches_html(state["palette"], state["selected"])

# --------- core handlers ----------
def generate(image: np.ndarray, x: int, y: int, k: int, sampling_rate: float, seed):
    base_color = color_at(image, (x, y))
    t0 = time.perf_counter()
    result = extract_palette(
        image,
        k=int(k),
        base_color=base_color,
        base_position=(x, y),
        sampling_rate=float(sampling_rate),
        rng=None if seed in (None, "", -1) else int(seed),
    )
    runtime_ms = (time.perf_counter() - t0) * 1000.0

    working, _ = resize_to_working(image)
    metrics = {
        "base_position": [int(x), int(y)],
        "base_color": list(base_color),
        "iterations": result.iterations,
        "mean_errors": [round(e, 3) for e in result.mean_errors],
        "palette_runtime_ms": round(runtime_ms, 2),
        **palette_report(working, result.palette),
    }
    state = {
        "palette": result.palette,
        "markers": result.markers,
        "selected": result.palette[0] if result.palette else None,
    }
    return state, metrics

def on_upload(image: np.ndarray, k: int, sampling_rate: float, seed):
    if image is None:
        return None, None, "<p>No palette yet.</p>", {}, None
    h, w = image.shape[:2]
    # random starting point, like a first click somewhere on the image
    rng = np.random.default_rng()
    x, y = int(rng.integers(0, w)), int(rng.integers(0, h))
    state, metrics = generate(image, x, y, k, sampling_rate, seed)
    overlay, html = _render(image, state)
    return image, overlay, html, metrics, state

def on_click(image: np.ndarray, state: dict, k: int, sampling_rate: float, seed, evt: gr.SelectData):
    if image is None:
        return gr.update(), gr.update(), gr.update(), state
    x, y = int(evt.index[0]), int(evt.index[1])
    h, w = image.shape[:2]
    if state:
        hit = hit_marker(state["markers"], x, y, marker_radius_for(h, w))
        if hit is not None:
            # clicking a marker toggles selection instead of regenerating
            state = {**state, "selected": None if state["selected"] == hit.color else hit.color}
            overlay, html = _render(image, state)
            return overlay, html, gr.update(), state
    state, metrics = generate(image, x, y, k, sampling_rate, seed)
    overlay, html = _render(image, state)
    return overlay, html, metrics, state

# --------- UI ----------
with gr.Blocks(title="Palette Picker") as demo:
    gr.Markdown("## Palette Picker\nUpload an image, then click anywhere on it to build a palette around that color.")

    original = gr.State(None)
    palette_state = gr.State(None)

    with gr.Row():
        with gr.Column(scale=1, min_width=320):
            gr.Markdown("### Inputs")
            in_img = gr.Image(type="numpy", label="Upload image")
            gr.Markdown("### Controls")
            k = gr.Slider(1, 12, value=DEFAULT_K, step=1, label="Palette size (K)")
            sampling_rate = gr.Slider(0.01, 1.0, value=DEFAULT_SAMPLING_RATE, step=0.005, label="Sampling rate",
                                      info="Fraction of pixels used per refinement iteration")
            seed = gr.Number(value=-1, precision=0, label="Seed", info="-1 for a fresh random palette each time")
            with gr.Accordion("How the palette is built", open=False):
                gr.Markdown(
                    """
                    - The clicked color is always the first palette entry.
                    - Remaining colors start from well-populated, mutually distant regions of an RGB color cube.
                    - A sampled k-means pass refines them until the mean error stops improving (max 20 rounds).
                    - Each marker points at the pixel closest to its palette color; click a marker to select it.
                    """
                )
        with gr.Column(scale=2):
            gr.Markdown("### Outputs")
            overlay_img = gr.Image(type="numpy", label="Markers (click to regenerate)", interactive=False)
            swatches = gr.HTML("<p>No palette yet.</p>")
            metrics_json = gr.JSON(label="Palette metrics (MSE, SSIM, runtime)")

    in_img.upload(
        fn=on_upload,
        inputs=[in_img, k, sampling_rate, seed],
        outputs=[original, overlay_img, swatches, metrics_json, palette_state],
    )
    overlay_img.select(
        fn=on_click,
        inputs=[original, palette_state, k, sampling_rate, seed],
        outputs=[overlay_img, swatches, metrics_json, palette_state],
    )

if __name__ == "__main__":
    demo.launch(server_name="0.0.0.0", server_port=7860)
