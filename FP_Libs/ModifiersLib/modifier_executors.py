"""
Modifier executors.

Each executor unpacks one modifier variant's parameters and calls the
matching filter kernel. Executors share the signature
``(buffer: PixelBuffer, modifier) -> PixelBuffer`` so the registry and the
pipeline engine can treat them uniformly.
"""

from FP_Libs.ImageEditingLib.filter_kernels import (
    apply_box_blur,
    apply_channels,
    apply_gaussian_blur,
    apply_grayscale,
    apply_laplace,
    apply_lightness_correction,
    apply_median_blur,
    apply_negative,
    apply_sharpening,
    apply_sobel,
    apply_thresholding,
    apply_unsharp_masking,
)
from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer
from FP_Libs.ModifiersLib.modifier_models import (
    BoxBlur,
    Channels,
    GaussianBlur,
    Grayscale,
    Laplace,
    LightnessCorrection,
    MedianBlur,
    Negative,
    Sharpening,
    Sobel,
    Thresholding,
    UnsharpMasking,
)


def execute_negative(buffer: PixelBuffer, modifier: Negative) -> PixelBuffer:
    return apply_negative(buffer, grayscale=modifier.grayscale)


def execute_thresholding(buffer: PixelBuffer, modifier: Thresholding) -> PixelBuffer:
    return apply_thresholding(
        buffer,
        threshold=modifier.threshold,
        grayscale=modifier.grayscale,
    )


def execute_grayscale(buffer: PixelBuffer, modifier: Grayscale) -> PixelBuffer:
    return apply_grayscale(
        buffer,
        red_weight=modifier.red_weight,
        green_weight=modifier.green_weight,
        blue_weight=modifier.blue_weight,
    )


def execute_channels(buffer: PixelBuffer, modifier: Channels) -> PixelBuffer:
    return apply_channels(
        buffer,
        red_enabled=modifier.red_enabled,
        red_weight=modifier.red_weight,
        green_enabled=modifier.green_enabled,
        green_weight=modifier.green_weight,
        blue_enabled=modifier.blue_enabled,
        blue_weight=modifier.blue_weight,
    )


def execute_lightness_correction(buffer: PixelBuffer, modifier: LightnessCorrection) -> PixelBuffer:
    return apply_lightness_correction(buffer, exponent=modifier.exponent)


def execute_box_blur(buffer: PixelBuffer, modifier: BoxBlur) -> PixelBuffer:
    return apply_box_blur(buffer, size=modifier.size)


def execute_gaussian_blur(buffer: PixelBuffer, modifier: GaussianBlur) -> PixelBuffer:
    return apply_gaussian_blur(buffer, size=modifier.size)


def execute_median_blur(buffer: PixelBuffer, modifier: MedianBlur) -> PixelBuffer:
    return apply_median_blur(buffer, size=modifier.size)


def execute_sobel(buffer: PixelBuffer, modifier: Sobel) -> PixelBuffer:
    return apply_sobel(buffer, horizontal=modifier.horizontal, vertical=modifier.vertical)


def execute_laplace(buffer: PixelBuffer, modifier: Laplace) -> PixelBuffer:
    return apply_laplace(buffer)


def execute_sharpening(buffer: PixelBuffer, modifier: Sharpening) -> PixelBuffer:
    return apply_sharpening(buffer)


def execute_unsharp_masking(buffer: PixelBuffer, modifier: UnsharpMasking) -> PixelBuffer:
    return apply_unsharp_masking(buffer, blur_size=modifier.blur_size)
