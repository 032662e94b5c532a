"""Image loading, saving, output naming and comparison-sheet generation."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import IO

import numpy as np
from PIL import Image, ImageDraw, ImageFont


def compute_target_size(
    original_width: int,
    original_height: int,
    max_side: int,
) -> tuple[int, int]:
    """Compute downscaled (w, h) preserving aspect ratio.

    The longest side becomes *max_side*; the other is scaled
    proportionally (rounded to the nearest integer, minimum 1).
    """
    if original_width >= original_height:
        w = max_side
        h = max(1, round(original_height * max_side / original_width))
    else:
        h = max_side
        w = max(1, round(original_width * max_side / original_height))
    return w, h


def load_grayscale(path: str | Path | IO[bytes], max_side: int | None = None) -> np.ndarray:
    """Decode any supported image to a single-channel 8-bit buffer.

    Colour inputs are converted to luminance.  When *max_side* is given and
    the image is larger, it is shrunk so its longest side equals *max_side*;
    smaller images are never enlarged.

    Returns:
        (H, W) uint8 array, writeable.
    """
    img = Image.open(path).convert("L")
    if max_side is not None and max(img.width, img.height) > max_side:
        w, h = compute_target_size(img.width, img.height, max_side)
        img = img.resize((w, h), Image.LANCZOS)
    return np.array(img, dtype=np.uint8)


def derive_output_path(
    input_path: str | Path,
    output_dir: str | Path | None = None,
    suffix: str = "dithered",
    kernel: str | None = None,
    fmt: str = "png",
) -> Path:
    """Build ``<stem>_<suffix>[_<kernel>].<fmt>`` beside the input or in *output_dir*."""
    src = Path(input_path)
    parts = [src.stem]
    if suffix:
        parts.append(suffix)
    if kernel:
        parts.append(kernel)
    folder = Path(output_dir) if output_dir is not None else src.parent
    return folder / f"{'_'.join(parts)}.{fmt.lstrip('.')}"


def save_image(
    array: np.ndarray,
    path: str | Path,
    pixel_upscale: int = 1,
) -> None:
    """Save a grayscale array, optionally nearest-neighbour upscaled."""
    img = Image.fromarray(array.astype(np.uint8))
    if pixel_upscale > 1:
        h, w = array.shape[:2]
        img = img.resize((w * pixel_upscale, h * pixel_upscale), Image.NEAREST)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    img.save(path)


def mean_intensity_error(original: np.ndarray, dithered: np.ndarray) -> float:
    """Absolute difference between the mean tones of two buffers."""
    return float(abs(
        original.astype(np.float64).mean() - dithered.astype(np.float64).mean()
    ))


def make_comparison_grid(
    panels: Sequence[np.ndarray],
    labels: Sequence[str],
    output_path: str | Path,
    pixel_upscale: int = 1,
) -> None:
    """Lay grayscale panels out side by side with a caption above each.

    All panels must share the same (H, W) shape.
    """
    if len(panels) != len(labels):
        raise ValueError("Need exactly one label per panel")
    if not panels:
        raise ValueError("Nothing to compare")

    ph, pw = panels[0].shape[:2]
    panel_w = pw * pixel_upscale
    panel_h = ph * pixel_upscale
    label_height = 36

    gap = 8
    total_w = len(panels) * panel_w + (len(panels) - 1) * gap
    total_h = panel_h + label_height

    canvas = Image.new("L", (total_w, total_h), 30)
    draw = ImageDraw.Draw(canvas)

    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 18,
        )
    except OSError:
        font = ImageFont.load_default()

    for i, (panel, label) in enumerate(zip(panels, labels, strict=True)):
        if panel.shape[:2] != (ph, pw):
            raise ValueError(
                f"Panel '{label}' has shape {panel.shape[:2]}, expected {(ph, pw)}"
            )
        x = i * (panel_w + gap)
        img = Image.fromarray(panel.astype(np.uint8)).resize(
            (panel_w, panel_h), Image.NEAREST,
        )
        canvas.paste(img, (x, label_height))

        bbox = draw.textbbox((0, 0), label, font=font)
        text_w = bbox[2] - bbox[0]
        tx = x + (panel_w - text_w) // 2
        draw.text((tx, 6), label, fill=220, font=font)

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    canvas.save(output_path)
