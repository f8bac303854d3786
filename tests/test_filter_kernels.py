"""
Unit tests for the filter kernels.

Tests cover:
- Per-pixel color kernels (grayscale, negative, thresholding, channels, lightness)
- Window kernels (box and median blur)
- Convolution kernels (gaussian, sobel, laplace, sharpening, unsharp masking)
- Alpha pass-through and input immutability
"""

import unittest

import numpy as np

from FP_Libs.ImageEditingLib.filter_kernels import (
    LAPLACE_KERNEL,
    SOBEL_HORIZONTAL,
    SOBEL_VERTICAL,
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
    gaussian_kernel,
)
from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer


def _gray_image(rows, alpha=255):
    """Build a buffer whose R, G and B all equal the given 2D values."""
    values = np.asarray(rows, dtype=np.uint8)
    array = np.empty(values.shape + (4,), dtype=np.uint8)
    array[:, :, 0] = values
    array[:, :, 1] = values
    array[:, :, 2] = values
    array[:, :, 3] = alpha
    return PixelBuffer.from_array(array)


def _red_channel(buffer):
    return buffer.pixels[:, :, 0].tolist()


class TestColorKernels(unittest.TestCase):
    """Test per-pixel kernels."""

    def test_grayscale_default_weights(self):
        buffer = PixelBuffer.solid(2, 2, (255, 0, 0, 255))

        result = apply_grayscale(buffer)

        self.assertEqual(result.get_pixel(1, 1), (72, 72, 72, 255))

    def test_grayscale_custom_weights(self):
        buffer = PixelBuffer.solid(1, 1, (100, 200, 0, 9))

        result = apply_grayscale(buffer, 1, 1, 0)

        self.assertEqual(result.get_pixel(0, 0), (150, 150, 150, 9))

    def test_grayscale_zero_weights_unchanged(self):
        buffer = PixelBuffer.solid(2, 2, (10, 20, 30, 40))

        self.assertIs(apply_grayscale(buffer, 0, 0, 0), buffer)

    def test_negative(self):
        buffer = PixelBuffer.solid(1, 1, (0, 100, 255, 7))

        result = apply_negative(buffer)

        self.assertEqual(result.get_pixel(0, 0), (255, 155, 0, 7))

    def test_negative_is_involution(self):
        rng = np.random.default_rng(0)
        buffer = PixelBuffer.from_array(rng.integers(0, 256, size=(4, 6, 4), dtype=np.uint8))

        self.assertEqual(apply_negative(apply_negative(buffer)), buffer)

    def test_negative_grayscale(self):
        buffer = PixelBuffer.solid(1, 1, (255, 0, 0, 255))

        result = apply_negative(buffer, grayscale=True)

        self.assertEqual(result.get_pixel(0, 0), (183, 183, 183, 255))

    def test_thresholding_boundary(self):
        buffer = PixelBuffer.solid(1, 1, (127, 128, 0, 255))

        result = apply_thresholding(buffer, threshold=128)

        self.assertEqual(result.get_pixel(0, 0), (0, 255, 0, 255))

    def test_thresholding_output_is_binary(self):
        rng = np.random.default_rng(3)
        buffer = PixelBuffer.from_array(rng.integers(0, 256, size=(5, 5, 4), dtype=np.uint8))

        rgb = apply_thresholding(buffer, threshold=90).pixels[:, :, :3]

        self.assertTrue(np.isin(rgb, [0, 255]).all())

    def test_channels_weights_and_clamp(self):
        buffer = PixelBuffer.solid(1, 1, (200, 101, 50, 255))

        result = apply_channels(
            buffer,
            red_weight=150,
            green_weight=50,
            blue_enabled=False,
        )

        self.assertEqual(result.get_pixel(0, 0), (255, 51, 0, 255))

    def test_channels_identity(self):
        buffer = PixelBuffer.solid(2, 1, (1, 2, 3, 4))

        self.assertEqual(apply_channels(buffer), buffer)

    def test_lightness_square(self):
        buffer = _gray_image([[10, 16]])

        result = apply_lightness_correction(buffer, exponent=255)

        self.assertEqual(_red_channel(result), [[100, 255]])

    def test_lightness_zero_exponent(self):
        buffer = _gray_image([[0, 10, 255]])

        result = apply_lightness_correction(buffer, exponent=0)

        self.assertEqual(_red_channel(result), [[1, 1, 1]])


class TestWindowKernels(unittest.TestCase):
    """Test box and median blur."""

    def test_box_blur_uniform(self):
        buffer = PixelBuffer.solid(4, 3, (50, 60, 70, 80))

        self.assertEqual(apply_box_blur(buffer, 5), buffer)

    def test_box_blur_excludes_out_of_bounds(self):
        buffer = _gray_image([[0, 30, 90]])

        result = apply_box_blur(buffer, 3)

        self.assertEqual(_red_channel(result), [[15, 40, 60]])

    def test_median_blur_removes_outlier(self):
        values = np.full((5, 5), 10)
        values[2, 2] = 250
        buffer = _gray_image(values, alpha=200)

        result = apply_median_blur(buffer, 3)

        self.assertTrue((result.pixels[:, :, :3] == 10).all())
        self.assertTrue((result.pixels[:, :, 3] == 200).all())

    def test_median_blur_even_samples(self):
        buffer = _gray_image([[10, 20]])

        result = apply_median_blur(buffer, 3)

        self.assertEqual(_red_channel(result), [[15, 15]])

    def test_median_blur_empty_image(self):
        for shape in ((0, 0, 4), (3, 0, 4), (0, 5, 4)):
            with self.subTest(shape=shape):
                buffer = PixelBuffer.from_array(np.zeros(shape, dtype=np.uint8))

                result = apply_median_blur(buffer, 3)

                self.assertEqual(result.size, buffer.size)
                self.assertEqual(result, buffer)


class TestConvolutionKernels(unittest.TestCase):
    """Test convolution-based kernels."""

    def test_kernel_constants(self):
        self.assertEqual(SOBEL_VERTICAL, tuple(zip(*SOBEL_HORIZONTAL)))
        self.assertEqual(sum(sum(row) for row in LAPLACE_KERNEL), 0)

    def test_gaussian_kernel_shape(self):
        kernel = gaussian_kernel(5)

        self.assertEqual(kernel.shape, (5, 5))
        self.assertEqual(kernel.argmax(), 12)
        np.testing.assert_allclose(kernel, kernel.T)

    def test_gaussian_kernel_rejects_even(self):
        with self.assertRaises(ValueError):
            gaussian_kernel(4)

    def test_gaussian_blur_is_not_normalized(self):
        """Size 3 weights sum to about 1.028, which shows on flat images."""
        buffer = PixelBuffer.solid(3, 3, (100, 100, 100, 255))

        result = apply_gaussian_blur(buffer, 3)

        self.assertEqual(result.get_pixel(1, 1), (103, 103, 103, 255))

    def test_sobel_horizontal_edge(self):
        buffer = _gray_image([[0, 0, 10]] * 3)

        self.assertEqual(
            _red_channel(apply_sobel(buffer, horizontal=True, vertical=False)),
            [[0, 40, 40]] * 3,
        )
        self.assertEqual(
            _red_channel(apply_sobel(buffer, horizontal=False, vertical=True)),
            [[0, 0, 0]] * 3,
        )
        self.assertEqual(
            _red_channel(apply_sobel(buffer)),
            [[0, 40, 40]] * 3,
        )

    def test_sobel_negative_response_clamps(self):
        buffer = _gray_image([[10, 0, 0]] * 3)

        result = apply_sobel(buffer, horizontal=True, vertical=False)

        self.assertEqual(_red_channel(result), [[0, 0, 0]] * 3)

    def test_sobel_no_direction_unchanged(self):
        buffer = _gray_image([[1, 2, 3]])

        self.assertIs(apply_sobel(buffer, horizontal=False, vertical=False), buffer)

    def test_laplace_and_sharpening(self):
        buffer = _gray_image([[0, 0, 0], [0, 10, 0], [0, 0, 0]])

        self.assertEqual(
            _red_channel(apply_laplace(buffer)),
            [[10, 10, 10], [10, 0, 10], [10, 10, 10]],
        )
        self.assertEqual(
            _red_channel(apply_sharpening(buffer)),
            [[0, 0, 0], [0, 10, 0], [0, 0, 0]],
        )

    def test_unsharp_masking_uniform(self):
        buffer = PixelBuffer.solid(3, 3, (90, 120, 30, 255))

        self.assertEqual(apply_unsharp_masking(buffer, 3), buffer)

    def test_unsharp_masking_boosts_contrast(self):
        buffer = _gray_image([[0, 30, 90]])

        result = apply_unsharp_masking(buffer, 3)

        # 2 * original - [15, 40, 60]
        self.assertEqual(_red_channel(result), [[0, 20, 120]])


class TestKernelContract(unittest.TestCase):
    """Properties shared by every kernel."""

    def setUp(self):
        rng = np.random.default_rng(42)
        self.buffer = PixelBuffer.from_array(
            rng.integers(0, 256, size=(6, 5, 4), dtype=np.uint8)
        )
        self.snapshot = self.buffer.to_bytes()
        self.kernels = [
            apply_grayscale,
            apply_negative,
            apply_thresholding,
            apply_channels,
            apply_lightness_correction,
            apply_box_blur,
            apply_median_blur,
            apply_gaussian_blur,
            apply_sobel,
            apply_laplace,
            apply_sharpening,
            apply_unsharp_masking,
        ]

    def test_alpha_preserved_and_size_kept(self):
        for kernel in self.kernels:
            with self.subTest(kernel=kernel.__name__):
                result = kernel(self.buffer)
                self.assertEqual(result.size, self.buffer.size)
                np.testing.assert_array_equal(
                    result.pixels[:, :, 3], self.buffer.pixels[:, :, 3]
                )

    def test_input_not_modified(self):
        for kernel in self.kernels:
            kernel(self.buffer)
        self.assertEqual(self.buffer.to_bytes(), self.snapshot)

    def test_rejects_non_buffer(self):
        for kernel in self.kernels:
            with self.subTest(kernel=kernel.__name__):
                with self.assertRaises(TypeError):
                    kernel("not a buffer")
