#!/usr/bin/env python3
"""Write augmented variants of handwritten-digit images to disk.

Each input image is converted to grayscale, optionally resized to the
canvas size, then augmented ``--copies`` times.  Useful for eyeballing the
augmentation ranges before a training run.

Usage::

    python scripts/augment_digits.py digits/7.png --copies 16 --output-dir out/
    python scripts/augment_digits.py digits/*.png --max-rotation 10 --seed 0
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger
from PIL import Image

# Add project root to path so we can import digit_augmentation
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from digit_augmentation.config import (  # noqa: E402
    CANVAS_SIZE,
    MAX_ROTATION_DEGREES,
    MAX_SHEAR,
    MAX_SHIFT_PIXELS,
    MAX_ZOOM,
    MIN_ZOOM,
    AugmentationConfig,
    AxisRange,
    ShiftRange,
)
from digit_augmentation.pipeline import AugmentationPipeline  # noqa: E402
from digit_augmentation.transforms.conversion import (  # noqa: E402
    pil_to_unit_tensor,
    unit_tensor_to_pil,
)


def build_config(args: argparse.Namespace) -> AugmentationConfig:
    """Translate CLI magnitudes into an ``AugmentationConfig``."""
    return AugmentationConfig(
        rotation_range=AxisRange.symmetric(args.max_rotation),
        shift_range=ShiftRange.symmetric(args.max_shift, args.max_shift),
        zoom_range=AxisRange(min=args.min_zoom, max=args.max_zoom),
        shear_range=AxisRange.symmetric(args.max_shear),
    )


def augment_file(
    path: Path,
    pipeline: AugmentationPipeline,
    copies: int,
    output_dir: Path,
    size: int = CANVAS_SIZE,
) -> list[Path]:
    """Augment one image file ``copies`` times and save the results as PNG.

    Returns:
        Paths of the written images.
    """
    img = Image.open(path).convert("L")
    if img.size != (size, size):
        img = img.resize((size, size), Image.BILINEAR)

    variants = pipeline.expand(pil_to_unit_tensor(img), copies)
    written: list[Path] = []
    for i, variant in enumerate(variants):
        out_path = output_dir / f"{path.stem}_aug_{i:03d}.png"
        unit_tensor_to_pil(variant).save(out_path)
        written.append(out_path)
    return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Write augmented variants of digit images"
    )
    parser.add_argument("images", type=Path, nargs="+", help="Input image files")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("outputs/augmented"),
        help="Directory to write augmented images (default: outputs/augmented)",
    )
    parser.add_argument("--copies", type=int, default=8, help="Variants per image")
    parser.add_argument("--size", type=int, default=CANVAS_SIZE, help="Canvas size")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--max-rotation", type=float, default=MAX_ROTATION_DEGREES)
    parser.add_argument("--max-shift", type=int, default=MAX_SHIFT_PIXELS)
    parser.add_argument("--min-zoom", type=float, default=MIN_ZOOM)
    parser.add_argument("--max-zoom", type=float, default=MAX_ZOOM)
    parser.add_argument("--max-shear", type=float, default=MAX_SHEAR)
    parser.add_argument("--log-level", type=str, default="INFO")
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    try:
        config = build_config(args)
    except ValueError as e:
        logger.error(f"Invalid augmentation ranges: {e}")
        return 1

    missing = [p for p in args.images if not p.exists()]
    if missing:
        logger.error(f"Input not found: {', '.join(str(p) for p in missing)}")
        return 1

    output_dir: Path = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)
    pipeline = AugmentationPipeline(config, seed=args.seed)

    total = 0
    for path in args.images:
        written = augment_file(path, pipeline, args.copies, output_dir, args.size)
        logger.info(f"{path.name}: wrote {len(written)} variants")
        total += len(written)

    logger.info(f"Wrote {total} augmented images to {output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
