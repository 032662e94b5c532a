"""
bitdither
=========

Convert grayscale images to 1-bit black and white with error-diffusion
dithering. One generic traversal drives a closed catalog of kernels:

- **Classic diffusion**: Floyd-Steinberg, Jarvis-Judice-Ninke, Stucki,
  Atkinson, Burkes and the Sierra family
- **Naive**: 1-D and 2-D single-neighbour diffusion
- **Pseudo-kernels**: plain ``quantization`` and ``random`` thresholding
"""

__version__ = "1.0.0"

from bitdither.config import DitherConfig
from bitdither.engine import BOUNDARY_POLICIES, diffuse, dither, dither_copy, traversal
from bitdither.image_io import (
    compute_target_size,
    derive_output_path,
    load_grayscale,
    make_comparison_grid,
    save_image,
)
from bitdither.kernels import KERNEL_NAMES, KERNELS, DiffusionEntry, Kernel, get_kernel
from bitdither.pixel_utils import coerce_to_u8, scale_error
from bitdither.quantizer import (
    DEFAULT_THRESHOLD,
    make_quantizer,
    quantize_random,
    quantize_threshold,
)

__all__ = [
    "BOUNDARY_POLICIES",
    "DEFAULT_THRESHOLD",
    "KERNELS",
    "KERNEL_NAMES",
    "DiffusionEntry",
    "DitherConfig",
    "Kernel",
    "coerce_to_u8",
    "compute_target_size",
    "derive_output_path",
    "diffuse",
    "dither",
    "dither_copy",
    "get_kernel",
    "load_grayscale",
    "make_comparison_grid",
    "make_quantizer",
    "quantize_random",
    "quantize_threshold",
    "save_image",
    "scale_error",
    "traversal",
]
