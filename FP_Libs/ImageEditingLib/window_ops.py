"""
Neighborhood operations used by the filter kernels.

Two boundary policies live here side by side:

- convolve() clamps out-of-range coordinates to the nearest edge pixel
  along each axis (scipy ``mode="nearest"``).
- window_sums() and window_medians() drop out-of-range samples and shrink
  the sample count near the edges.

Kernels pick the policy of their family; the two are not interchangeable.

Functions:
    convolve: Edge-clamped correlation of an odd square kernel
    window_sums: Exact in-bounds sums and counts over a square window
    window_medians: In-bounds per-channel medians over a square window
"""

from typing import Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from scipy import ndimage

from FP_Libs.ImageEditingLib.image_models import Kernel
from FP_Libs.ImageEditingLib.numeric_ops import median


def _validate_window(size: int) -> int:
    if size < 1 or size % 2 == 0:
        raise ValueError(f"Window size must be a positive odd number, got {size}")
    return size // 2


def convolve(channels: np.ndarray, kernel: Kernel) -> np.ndarray:
    """
    Apply a square kernel to every channel with edge clamping.

    For each output pixel the result is
    ``sum(kernel[j][i] * src[clamp(y + j - k//2), clamp(x + i - k//2)])``.
    The kernel is not flipped.

    Args:
        channels: (height, width, channels) array
        kernel: Odd-sized square matrix of weights

    Returns:
        float64 array of unrounded, unclamped sums
    """
    weights = np.asarray(kernel, dtype=np.float64)
    if weights.ndim != 2 or weights.shape[0] != weights.shape[1]:
        raise ValueError(f"Kernel must be square, got shape {weights.shape}")
    _validate_window(weights.shape[0])

    source = np.asarray(channels, dtype=np.float64)
    return ndimage.correlate(source, weights[:, :, np.newaxis], mode="nearest")


def _in_bounds_counts(length: int, radius: int) -> np.ndarray:
    positions = np.arange(length)
    low = np.maximum(positions - radius, 0)
    high = np.minimum(positions + radius, length - 1)
    return high - low + 1


def window_sums(channels: np.ndarray, size: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sum every channel over a centered size x size window.

    Samples outside the image are excluded. Sums are computed exactly with
    an integral image, so averages derived from them round deterministically.

    Args:
        channels: (height, width, channels) integer array
        size: Odd window side length

    Returns:
        Tuple of (sums, counts): int64 sums shaped like channels, and an
        int64 (height, width, 1) array of in-bounds sample counts
    """
    radius = _validate_window(size)
    height, width = channels.shape[:2]

    padded = np.pad(
        channels.astype(np.int64),
        ((radius, radius), (radius, radius), (0, 0)),
        mode="constant",
    )
    integral = np.zeros(
        (padded.shape[0] + 1, padded.shape[1] + 1, padded.shape[2]), dtype=np.int64
    )
    integral[1:, 1:] = padded.cumsum(axis=0).cumsum(axis=1)

    sums = (
        integral[size:size + height, size:size + width]
        - integral[0:height, size:size + width]
        - integral[size:size + height, 0:width]
        + integral[0:height, 0:width]
    )

    counts = np.outer(
        _in_bounds_counts(height, radius), _in_bounds_counts(width, radius)
    ).astype(np.int64)
    return sums, counts[:, :, np.newaxis]


def window_medians(channels: np.ndarray, size: int) -> np.ndarray:
    """
    Per-channel median over a centered size x size window.

    Samples outside the image are excluded. Rows are processed one at a time
    to bound memory at width * channels * size^2 samples.

    Args:
        channels: (height, width, channels) integer array
        size: Odd window side length

    Returns:
        float64 array of floored medians shaped like channels
    """
    radius = _validate_window(size)
    height, width, depth = channels.shape
    if height == 0 or width == 0:
        return np.empty((height, width, depth), dtype=np.float64)

    padded = np.pad(
        channels.astype(np.float64),
        ((radius, radius), (radius, radius), (0, 0)),
        mode="constant",
        constant_values=np.nan,
    )
    windows = sliding_window_view(padded, (size, size), axis=(0, 1))

    result = np.empty((height, width, depth), dtype=np.float64)
    for y in range(height):
        row = windows[y].reshape(width, depth, size * size)
        result[y] = median(row, axis=-1)
    return result
