"""
Image editing data models for Fairplay.

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
    Kernel: Square matrix of convolution weights
"""

from typing import Sequence, Tuple

RgbaColor = Tuple[int, int, int, int]
Kernel = Sequence[Sequence[float]]
