"""
Filter kernels for Fairplay modifiers.

Every function here maps one PixelBuffer (plus its own parameters) to a new
PixelBuffer. Inputs are never modified. Unless noted otherwise the alpha
channel is copied from the input and only R, G and B are transformed.

Rounding is half away from zero and every result is clamped into [0, 255]
before it is stored.

Example:
    >>> buffer = PixelBuffer.solid(2, 2, (255, 0, 0, 255))
    >>> gray = apply_grayscale(buffer)
    >>> gray.get_pixel(0, 0)
    (72, 72, 72, 255)
"""

import math
from typing import Any

import numpy as np

from FP_Libs.constants import (
    ALPHA_INDEX,
    CHANNEL_WEIGHT_SCALE,
    DEFAULT_CHANNEL_WEIGHT,
    DEFAULT_GRAYSCALE_WEIGHTS,
    DEFAULT_LIGHTNESS_EXPONENT,
    DEFAULT_THRESHOLD,
    DEFAULT_WINDOW_SIZE,
    GAUSSIAN_SIGMA_DIVISOR,
    LIGHTNESS_EXPONENT_SCALE,
    MAX_CHANNEL_VALUE,
    RGB_CHANNELS,
)
from FP_Libs.ImageEditingLib.image_models import Kernel
from FP_Libs.ImageEditingLib.numeric_ops import clamp_to_u8, magnitude
from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer
from FP_Libs.ImageEditingLib.window_ops import convolve, window_medians, window_sums


SOBEL_HORIZONTAL = (
    (-1, 0, 1),
    (-2, 0, 2),
    (-1, 0, 1),
)

SOBEL_VERTICAL = (
    (-1, -2, -1),
    (0, 0, 0),
    (1, 2, 1),
)

LAPLACE_KERNEL = (
    (1, 1, 1),
    (1, -8, 1),
    (1, 1, 1),
)


# ============================================================================
# Helpers
# ============================================================================

def _require_buffer(buffer: Any) -> PixelBuffer:
    if not isinstance(buffer, PixelBuffer):
        raise TypeError(f"Expected PixelBuffer, got {type(buffer)}")
    return buffer


def _rgb(buffer: PixelBuffer) -> np.ndarray:
    return buffer.pixels[:, :, :RGB_CHANNELS]


def _with_rgb(buffer: PixelBuffer, rgb: np.ndarray) -> PixelBuffer:
    """Combine new RGB channels with the alpha channel of buffer."""
    output = np.empty_like(buffer.pixels)
    output[:, :, :RGB_CHANNELS] = rgb
    output[:, :, ALPHA_INDEX] = buffer.pixels[:, :, ALPHA_INDEX]
    return PixelBuffer.from_array(output, copy=False)


# ============================================================================
# Per-pixel kernels
# ============================================================================

def apply_grayscale(
    buffer: PixelBuffer,
    red_weight: int = DEFAULT_GRAYSCALE_WEIGHTS[0],
    green_weight: int = DEFAULT_GRAYSCALE_WEIGHTS[1],
    blue_weight: int = DEFAULT_GRAYSCALE_WEIGHTS[2],
) -> PixelBuffer:
    """
    Replace R, G and B with their weighted mean.

    value = round((Rw*R + Gw*G + Bw*B) / (Rw + Gw + Bw))

    When all weights are zero the buffer is returned unchanged.
    """
    _require_buffer(buffer)
    total = red_weight + green_weight + blue_weight
    if total == 0:
        return buffer

    rgb = _rgb(buffer).astype(np.float64)
    luma = (
        red_weight * rgb[:, :, 0]
        + green_weight * rgb[:, :, 1]
        + blue_weight * rgb[:, :, 2]
    ) / total
    gray = clamp_to_u8(luma)
    return _with_rgb(buffer, np.repeat(gray[:, :, np.newaxis], RGB_CHANNELS, axis=2))


def apply_negative(buffer: PixelBuffer, grayscale: bool = False) -> PixelBuffer:
    """Invert R, G and B, optionally converting to grayscale first."""
    _require_buffer(buffer)
    if grayscale:
        buffer = apply_grayscale(buffer)
    return _with_rgb(buffer, MAX_CHANNEL_VALUE - _rgb(buffer))


def apply_thresholding(
    buffer: PixelBuffer,
    threshold: int = DEFAULT_THRESHOLD,
    grayscale: bool = False,
) -> PixelBuffer:
    """Set each channel to 0 when it is below threshold, otherwise to 255."""
    _require_buffer(buffer)
    if grayscale:
        buffer = apply_grayscale(buffer)
    rgb = _rgb(buffer)
    binary = np.where(rgb < threshold, 0, MAX_CHANNEL_VALUE).astype(np.uint8)
    return _with_rgb(buffer, binary)


def apply_channels(
    buffer: PixelBuffer,
    red_enabled: bool = True,
    red_weight: int = DEFAULT_CHANNEL_WEIGHT,
    green_enabled: bool = True,
    green_weight: int = DEFAULT_CHANNEL_WEIGHT,
    blue_enabled: bool = True,
    blue_weight: int = DEFAULT_CHANNEL_WEIGHT,
) -> PixelBuffer:
    """
    Scale each channel by weight percent; disabled channels become 0.

    Weights are percentages (100 keeps the channel unchanged).
    """
    _require_buffer(buffer)
    settings = (
        (red_enabled, red_weight),
        (green_enabled, green_weight),
        (blue_enabled, blue_weight),
    )
    factors = np.array(
        [weight / CHANNEL_WEIGHT_SCALE if enabled else 0.0 for enabled, weight in settings],
        dtype=np.float64,
    )
    scaled = _rgb(buffer).astype(np.float64) * factors
    return _with_rgb(buffer, clamp_to_u8(scaled))


def apply_lightness_correction(
    buffer: PixelBuffer,
    exponent: int = DEFAULT_LIGHTNESS_EXPONENT,
) -> PixelBuffer:
    """Raise every channel value to the power exponent / 127.5."""
    _require_buffer(buffer)
    power = exponent / LIGHTNESS_EXPONENT_SCALE
    corrected = np.power(_rgb(buffer).astype(np.float64), power)
    return _with_rgb(buffer, clamp_to_u8(corrected))


# ============================================================================
# Window kernels (out-of-bounds samples excluded)
# ============================================================================

def apply_box_blur(buffer: PixelBuffer, size: int = DEFAULT_WINDOW_SIZE) -> PixelBuffer:
    """
    Average every pixel with its in-bounds neighbors in a size x size window.

    Near the edges the average is taken over fewer samples; nothing is padded.
    """
    _require_buffer(buffer)
    sums, counts = window_sums(_rgb(buffer), size)
    return _with_rgb(buffer, clamp_to_u8(sums / counts))


def apply_median_blur(buffer: PixelBuffer, size: int = DEFAULT_WINDOW_SIZE) -> PixelBuffer:
    """
    Per-channel median of the in-bounds size x size neighborhood.

    Alpha is taken from the center pixel rather than from a median.
    """
    _require_buffer(buffer)
    medians = window_medians(_rgb(buffer), size)
    return _with_rgb(buffer, clamp_to_u8(medians))


# ============================================================================
# Convolution kernels (edge-clamped)
# ============================================================================

def gaussian_kernel(size: int) -> np.ndarray:
    """
    Build a size x size Gaussian kernel with sigma = size / 6.

    Each weight is the closed-form 2D Gaussian density at its offset from
    the center. The weights are not rescaled to sum to 1.
    """
    if size < 1 or size % 2 == 0:
        raise ValueError(f"Kernel size must be a positive odd number, got {size}")

    sigma = size / GAUSSIAN_SIGMA_DIVISOR
    radius = size // 2
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    dx, dy = np.meshgrid(offsets, offsets)
    two_sigma_sq = 2.0 * sigma * sigma
    return np.exp(-(dx * dx + dy * dy) / two_sigma_sq) / (math.pi * two_sigma_sq)


def apply_convolution(buffer: PixelBuffer, kernel: Kernel) -> PixelBuffer:
    """Convolve R, G and B with an odd square kernel, clamping the result."""
    _require_buffer(buffer)
    return _with_rgb(buffer, clamp_to_u8(convolve(_rgb(buffer), kernel)))


def apply_gaussian_blur(buffer: PixelBuffer, size: int = DEFAULT_WINDOW_SIZE) -> PixelBuffer:
    """Convolve with an unnormalized Gaussian kernel of the given size."""
    return apply_convolution(buffer, gaussian_kernel(size))


def apply_sobel(
    buffer: PixelBuffer,
    horizontal: bool = True,
    vertical: bool = True,
) -> PixelBuffer:
    """
    Sobel edge detection.

    With both directions enabled each channel becomes round(sqrt(h^2 + v^2));
    with one direction its signed response is clamped; with none the buffer
    is returned unchanged.
    """
    _require_buffer(buffer)
    if horizontal and vertical:
        rgb = _rgb(buffer)
        h = convolve(rgb, SOBEL_HORIZONTAL)
        v = convolve(rgb, SOBEL_VERTICAL)
        return _with_rgb(buffer, clamp_to_u8(magnitude(h, v)))
    if horizontal:
        return apply_convolution(buffer, SOBEL_HORIZONTAL)
    if vertical:
        return apply_convolution(buffer, SOBEL_VERTICAL)
    return buffer


def apply_laplace(buffer: PixelBuffer) -> PixelBuffer:
    """Convolve with the 8-neighbor Laplace kernel."""
    return apply_convolution(buffer, LAPLACE_KERNEL)


def apply_sharpening(buffer: PixelBuffer) -> PixelBuffer:
    """Subtract the (clamped) Laplace response from the original."""
    _require_buffer(buffer)
    laplace = _rgb(apply_laplace(buffer)).astype(np.int16)
    sharpened = _rgb(buffer).astype(np.int16) - laplace
    return _with_rgb(buffer, clamp_to_u8(sharpened))


def apply_unsharp_masking(
    buffer: PixelBuffer,
    blur_size: int = DEFAULT_WINDOW_SIZE,
) -> PixelBuffer:
    """Compute 2 * original - box_blur(original)."""
    _require_buffer(buffer)
    blurred = _rgb(apply_box_blur(buffer, blur_size)).astype(np.int16)
    masked = 2 * _rgb(buffer).astype(np.int16) - blurred
    return _with_rgb(buffer, clamp_to_u8(masked))
