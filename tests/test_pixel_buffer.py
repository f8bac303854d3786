"""
Unit tests for the PixelBuffer value type.
"""

import unittest

import numpy as np
from PIL import Image

from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer


class TestPixelBufferConstruction(unittest.TestCase):
    """Tests for building buffers."""

    def test_from_bytes(self):
        """Should lay out bytes row-major, four channels per pixel."""
        data = bytes(range(16))
        buffer = PixelBuffer.from_bytes(2, 2, data)

        self.assertEqual(buffer.size, (2, 2))
        self.assertEqual(buffer.get_pixel(1, 0), (4, 5, 6, 7))
        self.assertEqual(buffer.get_pixel(0, 1), (8, 9, 10, 11))
        self.assertEqual(buffer.to_bytes(), data)

    def test_from_bytes_wrong_length(self):
        """Should reject data whose length is not width*height*4."""
        with self.assertRaises(ValueError):
            PixelBuffer.from_bytes(2, 2, bytes(15))

    def test_solid(self):
        buffer = PixelBuffer.solid(3, 2, (1, 2, 3, 4))

        self.assertEqual(buffer.width, 3)
        self.assertEqual(buffer.height, 2)
        self.assertEqual(buffer.get_pixel(2, 1), (1, 2, 3, 4))

    def test_shape_mismatch(self):
        """Should reject arrays that disagree with width/height."""
        with self.assertRaises(ValueError):
            PixelBuffer(width=3, height=2, pixels=np.zeros((3, 2, 4), dtype=np.uint8))

    def test_wrong_dtype(self):
        with self.assertRaises(TypeError):
            PixelBuffer(width=1, height=1, pixels=np.zeros((1, 1, 4), dtype=np.int32))

    def test_from_image_converts_to_rgba(self):
        """Should convert RGB images to RGBA with opaque alpha."""
        image = Image.new("RGB", (4, 3), (10, 20, 30))
        buffer = PixelBuffer.from_image(image)

        self.assertEqual(buffer.size, (4, 3))
        self.assertEqual(buffer.get_pixel(3, 2), (10, 20, 30, 255))

    def test_to_image(self):
        buffer = PixelBuffer.solid(2, 2, (5, 6, 7, 8))
        image = buffer.to_image()

        self.assertEqual(image.mode, "RGBA")
        self.assertEqual(image.size, (2, 2))
        self.assertEqual(image.getpixel((1, 1)), (5, 6, 7, 8))


class TestPixelBufferImmutability(unittest.TestCase):
    """Tests for value semantics."""

    def test_pixels_read_only(self):
        buffer = PixelBuffer.solid(2, 2, (0, 0, 0, 255))

        with self.assertRaises(ValueError):
            buffer.pixels[0, 0, 0] = 1

    def test_from_array_copies_by_default(self):
        """Should not be affected by later writes to the source array."""
        array = np.zeros((1, 1, 4), dtype=np.uint8)
        buffer = PixelBuffer.from_array(array)
        array[0, 0, 0] = 99

        self.assertEqual(buffer.get_pixel(0, 0), (0, 0, 0, 0))

    def test_equality_is_structural(self):
        first = PixelBuffer.solid(2, 2, (1, 2, 3, 4))
        second = PixelBuffer.from_bytes(2, 2, bytes([1, 2, 3, 4] * 4))
        third = PixelBuffer.solid(2, 2, (1, 2, 3, 5))

        self.assertEqual(first, second)
        self.assertNotEqual(first, third)
