"""Tests for the out-of-time hit veto."""

import numpy as np
import pytest

from cosmictag.cosmic import TimingGate, is_out_of_time
from cosmictag.cosmic.timing import first_out_of_time, hit_time_bounds
from cosmictag.data import Hit


class TestHitTimeBounds:
    """Test the conversion of hits to time interval arrays."""

    def test_bounds(self):
        """Test that the bounds are extracted in order."""
        hits = [
            Hit(time_lower=1.0, time_upper=3.0),
            Hit(time_lower=5.0, time_upper=9.0),
        ]
        lower, upper = hit_time_bounds(hits)

        np.testing.assert_array_equal(lower, [1.0, 5.0])
        np.testing.assert_array_equal(upper, [3.0, 9.0])

    def test_empty(self):
        """Test that no hit produces empty arrays."""
        lower, upper = hit_time_bounds([])

        assert lower.shape == (0,) and upper.shape == (0,)
        assert lower.dtype == np.float64


class TestOutOfTime:
    """Test the drift window check."""

    def test_lower_bound_before_window(self):
        """A hit starting before W is out of time, even if it ends in time."""
        hits = [Hit(time_lower=10.0, time_upper=50.0)]

        assert is_out_of_time(hits, 30)

    def test_upper_bound_after_window(self):
        """A hit ending after 2W is out of time."""
        hits = [Hit(time_lower=40.0, time_upper=61.0)]

        assert is_out_of_time(hits, 30)

    @pytest.mark.parametrize(
        "lower, upper", [(30.0, 60.0), (30.0, 30.0), (45.0, 50.0)]
    )
    def test_in_time(self, lower, upper):
        """Hits within [W, 2W], bounds included, are in time."""
        hits = [Hit(time_lower=lower, time_upper=upper)]

        assert not is_out_of_time(hits, 30)

    def test_no_hits(self):
        """Trajectories without hits are never vetoed."""
        assert not is_out_of_time([], 30)

    def test_nan_bounds(self):
        """Undefined time bounds never trigger the veto."""
        hits = [Hit(time_lower=np.nan, time_upper=np.nan)]

        assert not is_out_of_time(hits, 30)

    def test_first_offending_hit(self):
        """The index of the first out-of-time hit is reported."""
        lower = np.array([35.0, 40.0, 5.0, 1.0])
        upper = np.array([40.0, 45.0, 10.0, 2.0])

        assert first_out_of_time(lower, upper, 30.0) == 2
        assert first_out_of_time(lower[:2], upper[:2], 30.0) == -1

    def test_from_rms(self):
        """Hits built from their RMS are checked on peak time -/+ RMS."""
        assert is_out_of_time([Hit.from_rms(31.0, 2.0)], 30)
        assert not is_out_of_time([Hit.from_rms(33.0, 2.0)], 30)


class TestTimingGate:
    """Test the timing gate wrapper."""

    def test_gate(self):
        """Test that the gate applies the stored window."""
        gate = TimingGate(30)
        assert gate.window == 30.0
        assert gate([Hit(time_lower=10.0, time_upper=50.0)])
        assert not gate([Hit(time_lower=35.0, time_upper=50.0)])

    def test_invalid_window(self):
        """Test that a non-positive window is rejected."""
        with pytest.raises(AssertionError):
            TimingGate(0)
