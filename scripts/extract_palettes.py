import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from palettegen.config import (
    EXAMPLES_DIR, OUTPUTS_DIR, DEFAULT_K, DEFAULT_SAMPLING_RATE, MAX_DIMENSION, LOG_FORMAT
)
from palettegen.io_utils import list_images, load_image, save_image_rgb
from palettegen.palette.engine import color_at, extract_palette
from palettegen.palette.overlay import draw_markers, marker_radius_for

logger = logging.getLogger("extract_palettes")

def main():
    parser = argparse.ArgumentParser(description="Extract color palettes and markers for a folder of images.")
    parser.add_argument("--images", type=str, default=str(EXAMPLES_DIR), help="Folder with input images")
    parser.add_argument("--out", type=str, default=str(OUTPUTS_DIR / "palettes"), help="Output folder")
    parser.add_argument("--k", type=int, default=DEFAULT_K, help="Palette size")
    parser.add_argument("--sampling-rate", type=float, default=DEFAULT_SAMPLING_RATE,
                        help="Fraction of pixels sampled per refinement iteration")
    parser.add_argument("--max-dimension", type=int, default=MAX_DIMENSION,
                        help="Longer side of the working image")
    parser.add_argument("--base-x", type=int, default=0, help="Base position x (original pixels)")
    parser.add_argument("--base-y", type=int, default=0, help="Base position y (original pixels)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible palettes")
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    done = 0
    for img_path in list_images(args.images):
        try:
            img = load_image(img_path)
        except FileNotFoundError as e:
            logger.error("Skipping %s: %s", img_path.name, e)
            continue

        base_position = (args.base_x, args.base_y)
        base_color = color_at(img, base_position)
        result = extract_palette(
            img,
            k=args.k,
            base_color=base_color,
            base_position=base_position,
            sampling_rate=args.sampling_rate,
            rng=args.seed,
            max_dimension=args.max_dimension,
        )

        stem = img_path.stem
        with open(out_dir / f"{stem}_palette.json", "w", encoding="utf-8") as f:
            json.dump({"image": img_path.name, **result.to_dict()}, f, indent=2)

        h, w = img.shape[:2]
        overlay = draw_markers(img, result.markers, selected=result.palette[0] if result.palette else None,
                               radius=marker_radius_for(h, w))
        save_image_rgb(out_dir / f"{stem}_markers.png", overlay)
        print(f"✓ {img_path.name} -> {' '.join(result.palette)}")
        done += 1

    print(f"Wrote palettes for {done} image(s) to {out_dir}")


if __name__ == "__main__":
    main()
