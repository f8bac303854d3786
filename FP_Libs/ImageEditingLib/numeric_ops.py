"""
Numeric helpers shared by the filter kernels.

All kernels round half away from zero and clamp into the 8-bit range before
storing a channel. These helpers work on scalars and numpy arrays alike.

Functions:
    round_half_away: Round half away from zero
    clamp_to_u8: Round and clamp floating values into uint8
    median: Median that floors the mean of the two middle values
    magnitude: Rounded Euclidean length of (x, y)
"""

from typing import Any, Optional

import numpy as np

from FP_Libs.constants import MAX_CHANNEL_VALUE


def round_half_away(values: Any) -> Any:
    """
    Round half away from zero (2.5 -> 3, -2.5 -> -3).

    numpy's own rounding is half-to-even, which would bias kernel outputs.
    """
    values = np.asarray(values, dtype=np.float64)
    rounded = np.copysign(np.floor(np.abs(values) + 0.5), values)
    if rounded.ndim == 0:
        return float(rounded)
    return rounded


def clamp_to_u8(values: Any) -> np.ndarray:
    """
    Round and clamp values into [0, 255].

    Args:
        values: Array of floating or integer intermediates

    Returns:
        uint8 array with the same shape
    """
    rounded = round_half_away(np.asarray(values, dtype=np.float64))
    return np.clip(rounded, 0, MAX_CHANNEL_VALUE).astype(np.uint8)


def median(values: Any, axis: Optional[int] = None) -> Any:
    """
    Median of integer samples.

    For an even number of samples the two middle values are averaged and the
    result floored. NaN entries are ignored, which lets windowed callers mark
    out-of-bounds samples.

    Args:
        values: Samples (sequence or array)
        axis: Axis to reduce; None reduces all samples

    Returns:
        An int for a full reduction, otherwise a float array of floored medians

    Raises:
        ValueError: If there are no samples
    """
    array = np.asarray(values, dtype=np.float64)
    if array.size == 0:
        raise ValueError("median requires at least one sample")

    result = np.floor(np.nanmedian(array, axis=axis))
    if axis is None:
        return int(result)
    return result


def magnitude(x: Any, y: Any) -> Any:
    """Return round(sqrt(x^2 + y^2)) for scalars or arrays."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    result = round_half_away(np.sqrt(x * x + y * y))
    if isinstance(result, float):
        return int(result)
    return result
