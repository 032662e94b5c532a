"""Integer helpers shared by the quantizer and the diffusion engine."""

from __future__ import annotations

U8_MIN = 0
U8_MAX = 255


def coerce_to_u8(value: int) -> int:
    """Clamp a signed accumulator value into the 8-bit intensity range."""
    if value > U8_MAX:
        return U8_MAX
    if value < U8_MIN:
        return U8_MIN
    return int(value)


def scale_error(err: int, numerator: int, denominator: int) -> int:
    """Weighted share of a quantization error, truncated toward zero.

    Classic integer implementations multiply first and divide second, and
    the division rounds toward zero for negative errors as well
    (``-70 / 16 -> -4``).  Python's ``//`` floors, so the magnitude is
    divided and the sign restored afterwards.
    """
    if denominator == 0:
        raise ValueError("Diffusion weight denominator must be non-zero")
    product = err * numerator
    share = abs(product) // abs(denominator)
    if (product < 0) != (denominator < 0):
        return -share
    return share
