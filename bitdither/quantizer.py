"""Per-pixel quantization to black (0) or white (255)."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

import numpy as np

from bitdither.kernels import Kernel

DEFAULT_THRESHOLD = 128

# (image, x, y) -> quantization error (old - new)
Quantizer = Callable[[np.ndarray, int, int], int]


class RandomSource(Protocol):
    def integers(self, low: int, high: int) -> int: ...


def quantize_threshold(
    image: np.ndarray,
    x: int,
    y: int,
    threshold: int = DEFAULT_THRESHOLD,
) -> int:
    """Threshold one pixel in place and return its quantization error.

    Intensities ``>= threshold`` become 255, everything else 0.  The error
    is ``old - new``: positive when rounding down, negative when rounding up.
    """
    old = int(image[y, x])
    new = 255 if old >= threshold else 0
    image[y, x] = new
    return old - new


def quantize_random(
    image: np.ndarray,
    x: int,
    y: int,
    rng: RandomSource,
) -> int:
    """Quantize one pixel against a uniform draw from ``[0, 255)``.

    A draw above the intensity gives black, so brighter pixels are more
    likely to turn white.  Consumes exactly one value from *rng*.
    """
    old = int(image[y, x])
    draw = int(rng.integers(0, 255))
    new = 0 if draw > old else 255
    image[y, x] = new
    return old - new


def make_quantizer(
    kernel: Kernel,
    threshold: int = DEFAULT_THRESHOLD,
    rng: RandomSource | None = None,
) -> Quantizer:
    """Return the quantizer a kernel runs with.

    Args:
        kernel:    Randomized kernels get :func:`quantize_random`, all others
                   :func:`quantize_threshold`.
        threshold: Cut-off for the deterministic path, in ``[0, 256]``.
        rng:       Random source for the randomized path.  A fresh
                   ``np.random.default_rng()`` is used when omitted.
    """
    if kernel.randomized:
        source = rng if rng is not None else np.random.default_rng()

        def _random(image: np.ndarray, x: int, y: int) -> int:
            return quantize_random(image, x, y, source)

        return _random

    if not 0 <= threshold <= 256:
        raise ValueError(f"Threshold must be within [0, 256], got {threshold}")

    def _threshold(image: np.ndarray, x: int, y: int) -> int:
        return quantize_threshold(image, x, y, threshold)

    return _threshold
