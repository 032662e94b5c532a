#!/usr/bin/env python3
"""
main.py: quick-start entry point.

Drop images into ``images/`` and run:

    python main.py batch

Or dither a single file:

    python -m bitdither.cli single my_photo.jpg --kernel atkinson
    python -m bitdither.cli kernels
"""

from bitdither.cli import app

if __name__ == "__main__":
    app()
