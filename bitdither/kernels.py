"""Catalog of error-diffusion kernels.

Each kernel is a fixed list of ``(dx, dy, numerator / denominator)``
entries.  Every target lies strictly ahead of the current pixel in
row-major order, so a pixel is never revisited once quantized.

The catalog is closed: kernels are looked up by name with
:func:`get_kernel` and there is no way to register new ones at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from types import MappingProxyType


@dataclass(frozen=True)
class DiffusionEntry:
    """One neighbour of a diffusion matrix and its share of the error."""

    dx: int
    dy: int
    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        if self.dy < 0 or (self.dy == 0 and self.dx <= 0):
            raise ValueError(
                f"Offset ({self.dx}, {self.dy}) does not lie ahead "
                "in row-major traversal order"
            )
        if self.denominator <= 0:
            raise ValueError(f"Denominator must be positive, got {self.denominator}")
        if self.numerator < 0:
            raise ValueError(f"Numerator must be non-negative, got {self.numerator}")

    @property
    def weight(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)


@dataclass(frozen=True)
class Kernel:
    """A named diffusion matrix.

    Attributes:
        name:        Catalog key, e.g. ``"floyd-steinberg"``.
        entries:     Ordered diffusion targets.
        randomized:  Quantize with a random draw instead of a threshold.
        description: One-line human readable summary.
    """

    name: str
    entries: tuple[DiffusionEntry, ...] = field(default_factory=tuple)
    randomized: bool = False
    description: str = ""

    @property
    def weight_total(self) -> Fraction:
        return sum((e.weight for e in self.entries), Fraction(0))

    @property
    def conserves_error(self) -> bool:
        return self.weight_total == 1

    @property
    def is_diffusing(self) -> bool:
        return len(self.entries) > 0


def _kernel(
    name: str,
    denominator: int,
    matrix: list[tuple[int, int, int]],
    description: str,
) -> Kernel:
    """Build a kernel from ``(dx, dy, numerator)`` rows sharing a denominator."""
    entries = tuple(
        DiffusionEntry(dx, dy, num, denominator) for dx, dy, num in matrix
    )
    return Kernel(name=name, entries=entries, description=description)


_CATALOG: list[Kernel] = [
    _kernel("naive-1d", 1, [(1, 0, 1)], "All error to the right neighbour"),
    _kernel(
        "naive-2d", 2,
        [(1, 0, 1), (0, 1, 1)],
        "Half right, half below",
    ),
    _kernel(
        "floyd-steinberg", 16,
        [(1, 0, 7), (-1, 1, 3), (0, 1, 5), (1, 1, 1)],
        "Floyd & Steinberg (1976)",
    ),
    _kernel(
        "false-floyd-steinberg", 8,
        [(1, 0, 3), (0, 1, 3), (1, 1, 2)],
        "Three-neighbour Floyd-Steinberg approximation",
    ),
    _kernel(
        "jarvis-judice-ninke", 48,
        [
            (1, 0, 7), (2, 0, 5),
            (-2, 1, 3), (-1, 1, 5), (0, 1, 7), (1, 1, 5), (2, 1, 3),
            (-2, 2, 1), (-1, 2, 3), (0, 2, 5), (1, 2, 3), (2, 2, 1),
        ],
        "Jarvis, Judice & Ninke (1976)",
    ),
    _kernel(
        "stucki", 42,
        [
            (1, 0, 8), (2, 0, 4),
            (-2, 1, 2), (-1, 1, 4), (0, 1, 8), (1, 1, 4), (2, 1, 2),
            (-2, 2, 1), (-1, 2, 2), (0, 2, 4), (1, 2, 2), (2, 2, 1),
        ],
        "Stucki (1981)",
    ),
    _kernel(
        "atkinson", 8,
        [(1, 0, 1), (2, 0, 1), (-1, 1, 1), (0, 1, 1), (1, 1, 1), (0, 2, 1)],
        "Atkinson, diffuses only 6/8 of the error",
    ),
    _kernel(
        "burkes", 32,
        [
            (1, 0, 8), (2, 0, 4),
            (-2, 1, 2), (-1, 1, 4), (0, 1, 8), (1, 1, 4), (2, 1, 2),
        ],
        "Burkes (1988)",
    ),
    _kernel(
        "sierra", 32,
        [
            (1, 0, 5), (2, 0, 3),
            (-2, 1, 2), (-1, 1, 4), (0, 1, 5), (1, 1, 4), (2, 1, 2),
            (-1, 2, 2), (0, 2, 3), (1, 2, 2),
        ],
        "Sierra (1989), three rows",
    ),
    _kernel(
        "two-row-sierra", 16,
        [
            (1, 0, 4), (2, 0, 3),
            (-2, 1, 1), (-1, 1, 2), (0, 1, 3), (1, 1, 2), (2, 1, 1),
        ],
        "Sierra (1990), two rows",
    ),
    _kernel(
        "sierra-lite", 4,
        [(1, 0, 2), (-1, 1, 1), (0, 1, 1)],
        "Sierra filter lite",
    ),
    Kernel(
        name="quantization",
        description="Plain thresholding, error discarded",
    ),
    Kernel(
        name="random",
        randomized=True,
        description="Random threshold per pixel, no diffusion",
    ),
]

KERNELS: MappingProxyType[str, Kernel] = MappingProxyType(
    {k.name: k for k in _CATALOG}
)
KERNEL_NAMES: list[str] = [k.name for k in _CATALOG]


def get_kernel(name: str) -> Kernel:
    """Look up a kernel by name (case-insensitive, ``_`` accepted for ``-``)."""
    key = name.strip().lower().replace("_", "-")
    try:
        return KERNELS[key]
    except KeyError:
        raise ValueError(
            f"Unknown kernel '{name}'. Choose from: {', '.join(KERNEL_NAMES)}"
        ) from None
