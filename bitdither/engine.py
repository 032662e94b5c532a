"""Generic error-diffusion traversal.

Pixels are visited in row-major order (top-to-bottom, left-to-right).
Each one is quantized, and its error is pushed to the not-yet-visited
neighbours named by the active kernel.  The buffer is mutated in place
and no image-sized scratch state is allocated, so every read of a pixel
already sees the error diffused into it by earlier pixels.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import numpy as np

from bitdither.kernels import Kernel, get_kernel
from bitdither.pixel_utils import coerce_to_u8, scale_error
from bitdither.quantizer import (
    DEFAULT_THRESHOLD,
    Quantizer,
    RandomSource,
    make_quantizer,
)

logger = logging.getLogger(__name__)

# "full" visits every pixel; "legacy" skips the last row and last column,
# matching the historical [0, h-1) x [0, w-1) ranges.
BOUNDARY_POLICIES = ("full", "legacy")
DEFAULT_BOUNDARY = "full"


def traversal(
    width: int,
    height: int,
    boundary: str = DEFAULT_BOUNDARY,
) -> Iterator[tuple[int, int]]:
    """Yield ``(x, y)`` coordinates in processing order."""
    if boundary == "full":
        rows, cols = height, width
    elif boundary == "legacy":
        rows, cols = max(height - 1, 0), max(width - 1, 0)
    else:
        raise ValueError(
            f"Unknown boundary policy '{boundary}'. "
            f"Choose from: {', '.join(BOUNDARY_POLICIES)}"
        )
    for y in range(rows):
        for x in range(cols):
            yield x, y


def diffuse(
    image: np.ndarray,
    x: int,
    y: int,
    err: int,
    kernel: Kernel,
) -> int:
    """Spread *err* from ``(x, y)`` to the kernel's in-bounds neighbours.

    Returns the number of neighbours written.  Targets outside the image
    are skipped; there is no wraparound.
    """
    if err == 0:
        return 0
    h, w = image.shape
    written = 0
    for entry in kernel.entries:
        nx, ny = x + entry.dx, y + entry.dy
        if not (0 <= nx < w and 0 <= ny < h):
            continue
        share = scale_error(err, entry.numerator, entry.denominator)
        image[ny, nx] = coerce_to_u8(int(image[ny, nx]) + share)
        written += 1
    return written


def _check_buffer(image: np.ndarray) -> None:
    if not isinstance(image, np.ndarray):
        raise ValueError(f"Expected a numpy array, got {type(image).__name__}")
    if image.ndim != 2:
        raise ValueError(f"Expected a 2-D grayscale buffer, got shape {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected dtype uint8, got {image.dtype}")
    if not image.flags.writeable:
        raise ValueError("Image buffer is read-only")


def dither(
    image: np.ndarray,
    kernel: Kernel | str,
    quantizer: Quantizer | None = None,
    *,
    threshold: int = DEFAULT_THRESHOLD,
    rng: RandomSource | None = None,
    boundary: str = DEFAULT_BOUNDARY,
) -> int:
    """Dither a grayscale buffer in place.

    The caller hands over exclusive access to *image* for the duration of
    the pass; nothing else may read or write it until this returns.

    Args:
        image:     (H, W) uint8 - mutated in place.
        kernel:    A :class:`Kernel` or a catalog name.
        quantizer: Override the quantizer chosen by :func:`make_quantizer`.
        threshold: Cut-off for the deterministic quantizer.
        rng:       Random source for randomized kernels.
        boundary:  ``"full"`` or ``"legacy"`` (see :data:`BOUNDARY_POLICIES`).

    Returns:
        Number of pixels quantized.
    """
    _check_buffer(image)
    if isinstance(kernel, str):
        kernel = get_kernel(kernel)
    if quantizer is None:
        quantizer = make_quantizer(kernel, threshold=threshold, rng=rng)

    h, w = image.shape
    logger.debug(
        "Dithering %dx%d with %s (boundary=%s)", w, h, kernel.name, boundary,
    )

    processed = 0
    for x, y in traversal(w, h, boundary):
        err = quantizer(image, x, y)
        diffuse(image, x, y, err, kernel)
        processed += 1

    logger.debug("Quantized %d pixels", processed)
    return processed


def dither_copy(
    image: np.ndarray,
    kernel: Kernel | str,
    **kwargs,
) -> np.ndarray:
    """Dither a copy of *image* and return it; the input is left untouched."""
    result = np.array(image, copy=True)
    dither(result, kernel, **kwargs)
    return result
