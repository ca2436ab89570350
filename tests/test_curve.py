"""Tests for HeatingCurve."""
import numpy as np
import pytest

from laserflash.curve import HeatingCurve
from laserflash.errors import DegenerateRescaleError


@pytest.fixture
def ramp():
    curve = HeatingCurve(num_points=3, name="ramp")
    for t, v in [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)]:
        curve.add_point(t, v)
    return curve


class TestHeatingCurve:

    def test_add_point_tracks_maximum(self, ramp):
        assert len(ramp) == 3
        assert ramp.max_value == 2.0
        np.testing.assert_array_equal(ramp.values, [0.0, 1.0, 2.0])

    def test_decreasing_time_rejected(self, ramp):
        with pytest.raises(ValueError):
            ramp.add_point(1.5, 3.0)

    def test_rescale_hits_target(self, ramp):
        factor = ramp.rescale_to(5.0)
        assert factor == pytest.approx(2.5)
        assert ramp.max_value == pytest.approx(5.0)
        np.testing.assert_allclose(ramp.values, [0.0, 2.5, 5.0])

    def test_rescale_of_zero_curve(self):
        curve = HeatingCurve(num_points=2)
        curve.add_point(0.0, 0.0)
        curve.add_point(1.0, 0.0)
        with pytest.raises(DegenerateRescaleError) as excinfo:
            curve.rescale_to(1.0)
        assert excinfo.value.observed_maximum == 0.0
        assert isinstance(excinfo.value, ArithmeticError)

    def test_time_shift_applies_to_reported_times(self, ramp):
        ramp.time_shift = 0.5
        np.testing.assert_allclose(ramp.times, [0.5, 1.5, 2.5])

    def test_half_rise_time(self, ramp):
        assert ramp.half_rise_time() == pytest.approx(1.0)

    def test_interpolation_passes_through_samples(self, ramp):
        spline = ramp.interpolation()
        assert spline(1.0) == pytest.approx(1.0)

    def test_dict_round_trip(self, ramp):
        restored = HeatingCurve.from_dict(ramp.to_dict())
        assert restored.name == "ramp"
        np.testing.assert_array_equal(restored.times, ramp.times)
        np.testing.assert_array_equal(restored.values, ramp.values)
        assert restored.max_value == ramp.max_value
