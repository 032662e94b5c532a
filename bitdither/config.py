"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class DitherConfig:
    """All tuneable parameters for a dithering run.

    Attributes:
        kernel:          Diffusion kernel name (see kernels.KERNEL_NAMES).
        threshold:       Intensities >= threshold quantize to white.
        boundary:        "full" (every pixel) or "legacy" (skip last row/column).
        seed:            Seed for the random kernel (None = non-deterministic).
        max_side:        Downscale so the longest side is at most this (None = keep size).
        pixel_upscale:   Each output pixel becomes n x n in the saved image.
        output_format:   Image format for saved files.
        output_suffix:   Appended to the input stem when deriving output names.
        save_comparison: Also write a source | dithered comparison sheet.
        input_dir:       Folder to scan for source images.
        output_dir:      Folder for results.
    """

    # Algorithm
    kernel: str = "floyd-steinberg"
    threshold: int = 128
    boundary: str = "full"  # "full" | "legacy"
    seed: int | None = None

    # Image scaling
    max_side: int | None = None
    pixel_upscale: int = 1

    # Output
    output_format: str = "png"
    output_suffix: str = "dithered"
    save_comparison: bool = False

    # Paths
    input_dir: Path = field(default_factory=lambda: Path("images"))
    output_dir: Path = field(default_factory=lambda: Path("output"))

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp", ".jfif", ".gif"}
    )
