"""
Tests for the centered rolling-window helpers and spline resampling.

Validates:
    1. detect_peak flags, null edges, both modes, even windows
    2. rolling_mean_extended preserves length and linear trends
    3. spline_resample spans [min(x), max(x)] and averages ties
"""

import numpy as np
import polars as pl
import pytest

from trajsim import detect_peak, rolling_mean_extended, spline_resample
from trajsim.core.rolling import centered_windows
from trajsim.validation import InvalidArgument


class TestDetectPeak:

    def test_single_peak_max(self):
        assert detect_peak([0, 1, 0], window=3).to_list() == [None, True, None]

    def test_single_peak_min(self):
        assert detect_peak([0, 1, 0], window=3, mode='min').to_list() == [None, False, None]

    def test_returns_boolean_series(self):
        out = detect_peak(np.sin(np.linspace(0, 10, 50)), window=5)
        assert isinstance(out, pl.Series)
        assert out.dtype == pl.Boolean
        assert len(out) == 50

    def test_edges_are_null(self):
        out = detect_peak(np.arange(20, dtype=float), window=5)
        assert out.null_count() == 4
        assert out[:2].to_list() == [None, None]
        assert out[-2:].to_list() == [None, None]

    def test_sine_peaks(self):
        t = np.linspace(0, 4 * np.pi, 400)
        out = detect_peak(np.sin(t), window=21)
        peaks = np.flatnonzero(out.fill_null(False).to_numpy())
        assert np.allclose(t[peaks], [np.pi / 2, 5 * np.pi / 2], atol=0.05)

    def test_sine_troughs(self):
        t = np.linspace(0, 4 * np.pi, 400)
        out = detect_peak(np.sin(t), window=21, mode='min')
        troughs = np.flatnonzero(out.fill_null(False).to_numpy())
        assert np.allclose(t[troughs], [3 * np.pi / 2, 7 * np.pi / 2], atol=0.05)

    def test_even_window(self):
        # Width 4 around i covers [i - 1, i + 2]; edges are 2 on each side
        out = detect_peak([0, 3, 1, 2, 0, 0], window=4)
        assert out.to_list() == [None, None, False, True, None, None]

    def test_window_one_is_all_true(self):
        assert detect_peak([3, 1, 2], window=1).to_list() == [True, True, True]

    def test_plateau_counts_every_point(self):
        assert detect_peak([0, 2, 2, 0], window=3).to_list() == [None, True, True, None]

    def test_short_input_all_null(self):
        assert detect_peak([1, 2], window=5).to_list() == [None, None]

    def test_bad_mode(self):
        with pytest.raises(InvalidArgument):
            detect_peak([0, 1, 0], window=3, mode='median')

    def test_bad_window(self):
        with pytest.raises(InvalidArgument):
            detect_peak([0, 1, 0], window=0)


class TestCenteredWindows:

    def test_centers_odd(self):
        centers, windows = centered_windows(np.arange(5.0), 3)
        assert centers.tolist() == [1, 2, 3]
        assert windows[0].tolist() == [0.0, 1.0, 2.0]

    def test_centers_even(self):
        centers, _ = centered_windows(np.arange(5.0), 4)
        assert centers.tolist() == [1, 2]


class TestRollingMeanExtended:

    def test_length_preserved(self):
        x = np.random.default_rng(0).normal(size=37)
        for k in (1, 2, 3, 5, 8):
            assert len(rolling_mean_extended(x, k)) == 37

    def test_constant(self):
        assert np.allclose(rolling_mean_extended(np.full(10, 2.5), 5), 2.5)

    def test_linear_is_preserved(self):
        x = 3.0 * np.arange(12) - 4.0
        assert np.allclose(rolling_mean_extended(x, 5), x)

    def test_even_window_shifts_half_step(self):
        x = np.arange(10, dtype=float)
        assert np.allclose(rolling_mean_extended(x, 4), x + 0.5)

    def test_interior_is_plain_mean(self):
        x = np.array([1.0, 4.0, 2.0, 8.0, 5.0, 7.0])
        out = rolling_mean_extended(x, 3)
        assert np.allclose(out[1:5], [7 / 3, 14 / 3, 5.0, 20 / 3])

    def test_edges_extrapolated(self):
        x = np.array([1.0, 4.0, 2.0, 8.0, 5.0, 7.0])
        out = rolling_mean_extended(x, 3)
        assert out[0] == pytest.approx(7 / 3 - (14 / 3 - 7 / 3))
        assert out[5] == pytest.approx(20 / 3 + (20 / 3 - 5.0))

    def test_window_one_is_copy(self):
        x = np.array([1.0, 2.0, 3.0])
        out = rolling_mean_extended(x, 1)
        assert out.tolist() == x.tolist()
        assert out is not x

    def test_single_interior_mean_extends_flat(self):
        out = rolling_mean_extended([1.0, 2.0, 6.0], 3)
        assert out.tolist() == [3.0, 3.0, 3.0]

        out = rolling_mean_extended([0.0, 1.0, 2.0, 3.0, 9.0], 4)
        # Only window centered on index 2 covers [1, 4]
        assert np.allclose(out, 3.75)

    def test_shorter_than_window_uses_overall_mean(self):
        out = rolling_mean_extended([1.0, 2.0, 6.0], 5)
        assert out.tolist() == [3.0, 3.0, 3.0]
        assert np.allclose(rolling_mean_extended(np.arange(4.0), 4), 1.5)

    def test_short_constant_input(self):
        assert rolling_mean_extended([2.0, 2.0, 2.0], 3).tolist() == [2.0, 2.0, 2.0]
        assert rolling_mean_extended([2.0, 2.0], 7).tolist() == [2.0, 2.0]

    def test_empty_input(self):
        assert len(rolling_mean_extended([], 3)) == 0

    def test_bad_window(self):
        with pytest.raises(InvalidArgument):
            rolling_mean_extended([1.0, 2.0, 3.0], 0)

    def test_minimum_length(self):
        assert len(rolling_mean_extended(np.arange(4.0), 3)) == 4
        assert len(rolling_mean_extended(np.arange(6.0), 4)) == 6


class TestSplineResample:

    def test_n_points_spanning_range(self):
        x = np.array([0.0, 1.0, 2.0, 3.0])
        xs, ys = spline_resample(x, x ** 2, 7)
        assert len(xs) == len(ys) == 7
        assert xs[0] == 0.0
        assert xs[-1] == 3.0
        assert ys[0] == pytest.approx(0.0)
        assert ys[-1] == pytest.approx(9.0)

    def test_cubic_reproduced(self):
        x = np.linspace(-2, 2, 9)
        xs, ys = spline_resample(x, x ** 3, 50)
        assert np.allclose(ys, xs ** 3)

    def test_unsorted_input(self):
        xs_a, ys_a = spline_resample([2.0, 0.0, 1.0, 3.0], [4.0, 0.0, 1.0, 9.0], 10)
        xs_b, ys_b = spline_resample([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 4.0, 9.0], 10)
        assert np.allclose(xs_a, xs_b)
        assert np.allclose(ys_a, ys_b)

    def test_ties_are_averaged(self):
        xs, ys = spline_resample([0.0, 1.0, 1.0, 2.0], [0.0, 1.0, 3.0, 4.0], 5)
        assert np.allclose(ys, 2.0 * xs)

    def test_length_mismatch(self):
        with pytest.raises(InvalidArgument):
            spline_resample([0.0, 1.0], [0.0], 5)

    def test_single_distinct_x(self):
        with pytest.raises(InvalidArgument):
            spline_resample([1.0, 1.0], [0.0, 2.0], 5)

    def test_non_finite(self):
        with pytest.raises(InvalidArgument):
            spline_resample([0.0, 1.0, np.nan], [0.0, 1.0, 2.0], 5)
