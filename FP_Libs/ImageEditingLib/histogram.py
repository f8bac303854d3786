"""
Histogram aggregation over a PixelBuffer.

Each of red, green and blue is counted into 32 buckets of width 8; lightness
buckets the mean of R, G and B the same way. Alpha is ignored.
"""

from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

from FP_Libs.constants import HISTOGRAM_BUCKETS, HISTOGRAM_BUCKET_WIDTH, RGB_CHANNELS
from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer


@dataclass
class Histogram:
    """Bucket counts for lightness and each color channel."""
    lightness: List[int] = field(default_factory=lambda: [0] * HISTOGRAM_BUCKETS)
    red: List[int] = field(default_factory=lambda: [0] * HISTOGRAM_BUCKETS)
    green: List[int] = field(default_factory=lambda: [0] * HISTOGRAM_BUCKETS)
    blue: List[int] = field(default_factory=lambda: [0] * HISTOGRAM_BUCKETS)

    def to_dict(self) -> Dict[str, List[int]]:
        """Convert to dictionary."""
        return {
            "lightness": list(self.lightness),
            "red": list(self.red),
            "green": list(self.green),
            "blue": list(self.blue),
        }


def _bucket_counts(buckets: np.ndarray) -> List[int]:
    counts = np.bincount(buckets.ravel(), minlength=HISTOGRAM_BUCKETS)
    return [int(count) for count in counts[:HISTOGRAM_BUCKETS]]


def histogram(buffer: PixelBuffer) -> Histogram:
    """
    Count channel values of a buffer into 32 buckets.

    Args:
        buffer: The pixel buffer to aggregate

    Returns:
        Histogram whose every channel sums to width * height

    Raises:
        TypeError: If buffer is not a PixelBuffer
    """
    if not isinstance(buffer, PixelBuffer):
        raise TypeError(f"Expected PixelBuffer, got {type(buffer)}")

    rgb = buffer.pixels[:, :, :RGB_CHANNELS].astype(np.int64)
    channel_buckets = rgb // HISTOGRAM_BUCKET_WIDTH
    lightness_buckets = rgb.sum(axis=2) // (RGB_CHANNELS * HISTOGRAM_BUCKET_WIDTH)

    return Histogram(
        lightness=_bucket_counts(lightness_buckets),
        red=_bucket_counts(channel_buckets[:, :, 0]),
        green=_bucket_counts(channel_buckets[:, :, 1]),
        blue=_bucket_counts(channel_buckets[:, :, 2]),
    )
