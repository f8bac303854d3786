"""
Tests for numeric helpers and neighborhood operations.

Tests cover:
- Half-away-from-zero rounding and clamping
- Median flooring and magnitude rounding
- Edge-clamped convolution
- In-bounds window sums and medians
"""

import numpy as np
import pytest

from FP_Libs.ImageEditingLib.numeric_ops import (
    clamp_to_u8,
    magnitude,
    median,
    round_half_away,
)
from FP_Libs.ImageEditingLib.window_ops import convolve, window_medians, window_sums


class TestRounding:
    """Test round_half_away and clamp_to_u8."""

    def test_halves_round_away_from_zero(self):
        assert round_half_away(2.5) == 3.0
        assert round_half_away(-2.5) == -3.0
        assert round_half_away(0.5) == 1.0
        assert round_half_away(2.4) == 2.0

    def test_array_input(self):
        result = round_half_away(np.array([0.5, 1.5, -1.5]))
        assert list(result) == [1.0, 2.0, -2.0]

    def test_clamp_to_u8(self):
        result = clamp_to_u8(np.array([-10.0, 0.4, 127.5, 300.0]))
        assert result.dtype == np.uint8
        assert list(result) == [0, 0, 128, 255]


class TestMedian:
    """Test median()."""

    def test_odd_count(self):
        assert median([7, 1, 3]) == 3

    def test_even_count_floors_mean(self):
        assert median([1, 2]) == 1
        assert median([10, 20]) == 15
        assert median([3, 4, 8, 9]) == 6

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            median([])

    def test_ignores_nan(self):
        assert median([np.nan, 4, 6]) == 5


class TestMagnitude:
    """Test magnitude()."""

    def test_scalar(self):
        assert magnitude(3, 4) == 5
        assert magnitude(1, 1) == 1

    def test_array(self):
        result = magnitude(np.array([3.0, 0.0]), np.array([4.0, 40.0]))
        assert list(result) == [5.0, 40.0]


class TestConvolve:
    """Test edge-clamped convolution."""

    def test_identity_kernel(self):
        channels = np.arange(12, dtype=np.uint8).reshape(2, 2, 3)
        identity = ((0, 0, 0), (0, 1, 0), (0, 0, 0))

        result = convolve(channels, identity)

        np.testing.assert_array_equal(result, channels.astype(np.float64))

    def test_edges_are_clamped(self):
        """A 1x1 image sees its own pixel at every kernel position."""
        channels = np.full((1, 1, 1), 10, dtype=np.uint8)
        ones = ((1, 1, 1), (1, 1, 1), (1, 1, 1))

        assert convolve(channels, ones)[0, 0, 0] == 90.0

    def test_kernel_is_not_flipped(self):
        channels = np.array([[[0], [10]]], dtype=np.uint8)
        right_minus_left = ((0, 0, 0), (-1, 0, 1), (0, 0, 0))

        result = convolve(channels, right_minus_left)

        assert result[0, 0, 0] == 10.0
        assert result[0, 1, 0] == 10.0

    def test_rejects_even_kernel(self):
        with pytest.raises(ValueError):
            convolve(np.zeros((2, 2, 3)), ((1, 1), (1, 1)))


class TestWindowSums:
    """Test in-bounds window sums."""

    def test_counts_shrink_at_edges(self):
        channels = np.ones((3, 3, 1), dtype=np.uint8)

        sums, counts = window_sums(channels, 3)

        assert counts[0, 0, 0] == 4
        assert counts[0, 1, 0] == 6
        assert counts[1, 1, 0] == 9
        np.testing.assert_array_equal(sums, counts)

    def test_row_sums(self):
        channels = np.array([[[0], [30], [90]]], dtype=np.uint8)

        sums, counts = window_sums(channels, 3)

        assert list(sums[0, :, 0]) == [30, 120, 120]
        assert list(counts[0, :, 0]) == [2, 3, 2]

    def test_window_larger_than_image(self):
        channels = np.array([[[1], [2]], [[3], [4]]], dtype=np.uint8)

        sums, counts = window_sums(channels, 25)

        assert (sums == 10).all()
        assert (counts == 4).all()


class TestWindowMedians:
    """Test in-bounds window medians."""

    def test_outlier_removed(self):
        channels = np.full((3, 3, 1), 10, dtype=np.uint8)
        channels[1, 1, 0] = 250

        result = window_medians(channels, 3)

        assert (result == 10).all()

    def test_even_sample_count_at_edges(self):
        channels = np.array([[[10], [20]]], dtype=np.uint8)

        result = window_medians(channels, 3)

        assert list(result[0, :, 0]) == [15.0, 15.0]
