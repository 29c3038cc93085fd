"""
Tests for the lagged-stimulation exponential decay generator (edls).

Validates:
    1. Values stay in [0, 1]
    2. Exactly 1 at stimulation indices, non-increasing in between
    3. Decay factor exp(-lambda * freq) between two grid points
    4. Lags only delay stimulations; late stimulations are dropped
"""

import numpy as np
import pytest

from trajsim.core.generators import (
    decay_from_stimulations,
    sim_expodecay_lagged_stim,
    simulate_expodecay_lagged_stim,
    stimulation_mask,
)
from trajsim.validation import InvalidArgument


def _stim_rows(column: np.ndarray) -> np.ndarray:
    return np.flatnonzero(column == 1.0)


class TestNoiseFree:
    """Without lag, stimulations land on the nominal times."""

    def test_stimulations_on_nominal_grid_points(self):
        tvec, values = simulate_expodecay_lagged_stim(2, 0.0, interval_stim=5, freq=0.5, end=30)
        stim_idx = _stim_rows(values[:, 0])
        assert tvec[stim_idx].tolist() == [5.0, 10.0, 15.0, 20.0, 25.0]
        assert np.array_equal(values[:, 0], values[:, 1])

    def test_zero_before_first_stimulation(self):
        tvec, values = simulate_expodecay_lagged_stim(1, 0.0, interval_stim=5, freq=0.5, end=30)
        assert (values[tvec < 5, 0] == 0).all()

    def test_decay_factor(self):
        lam, freq = 0.3, 0.25
        tvec, values = simulate_expodecay_lagged_stim(1, 0.0, interval_stim=4, lambda_=lam, freq=freq, end=20)
        start = int(np.flatnonzero(tvec == 4.0)[0])
        segment = values[start:start + 10, 0]
        expected = np.exp(-lam * freq) ** np.arange(10)
        assert np.allclose(segment, expected)

    def test_zero_lambda_holds_level(self):
        tvec, values = simulate_expodecay_lagged_stim(1, 0.0, interval_stim=5, lambda_=0.0, freq=0.5, end=20)
        assert (values[tvec >= 5, 0] == 1.0).all()


class TestWithLag:
    """Random lags perturb stimulation times."""

    @pytest.fixture
    def lagged(self):
        return simulate_expodecay_lagged_stim(20, 1.5, interval_stim=5, lambda_=0.2, freq=0.2, end=50, rng=3)

    def test_values_in_unit_interval(self, lagged):
        _, values = lagged
        assert values.min() >= 0.0
        assert values.max() <= 1.0

    def test_non_increasing_between_stimulations(self, lagged):
        _, values = lagged
        for col in range(values.shape[1]):
            column = values[:, col]
            diffs = np.diff(column)
            rises = np.flatnonzero(diffs > 0) + 1
            # Any increase must land exactly on a stimulation (value 1)
            assert (column[rises] == 1.0).all()

    def test_lag_never_advances_stimulation(self, lagged):
        tvec, values = lagged
        for col in range(values.shape[1]):
            first = tvec[_stim_rows(values[:, col])[0]]
            assert first >= 5.0

    def test_reproducible(self):
        a = sim_expodecay_lagged_stim(5, 1.0, rng=10)
        b = sim_expodecay_lagged_stim(5, 1.0, rng=10)
        assert a.equals(b)

    def test_table_shape(self):
        df = sim_expodecay_lagged_stim(4, 0.5, freq=0.5, end=30, rng=0)
        assert df.height == 4 * 60


class TestStimulationMask:
    """Index placement rules."""

    def test_first_grid_point_at_or_after(self):
        tvec = np.arange(10) * 1.0
        mask = stimulation_mask(tvec, np.array([[2.0], [4.3]]))
        assert np.flatnonzero(mask[:, 0]).tolist() == [2, 5]

    def test_collisions_share_an_index(self):
        tvec = np.arange(10) * 1.0
        mask = stimulation_mask(tvec, np.array([[3.2], [3.9]]))
        assert np.flatnonzero(mask[:, 0]).tolist() == [4]

    def test_past_end_is_dropped(self):
        tvec = np.arange(10) * 1.0
        mask = stimulation_mask(tvec, np.array([[9.5], [12.0]]))
        assert not mask.any()

    def test_decay_recurrence(self):
        mask = np.array([[False], [True], [False], [False], [True], [False]])
        values = decay_from_stimulations(mask, 0.5)
        assert values[:, 0].tolist() == [0.0, 1.0, 0.5, 0.25, 1.0, 0.5]


class TestArguments:

    def test_interval_must_be_positive(self):
        with pytest.raises(InvalidArgument):
            sim_expodecay_lagged_stim(3, 0.5, interval_stim=0)

    def test_lambda_must_be_non_negative(self):
        with pytest.raises(InvalidArgument):
            sim_expodecay_lagged_stim(3, 0.5, lambda_=-0.1)

    def test_no_stimulation_before_end(self):
        _, values = simulate_expodecay_lagged_stim(2, 0.0, interval_stim=100, end=10)
        assert (values == 0).all()
