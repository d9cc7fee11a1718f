"""
Unit tests for skydome angle utilities.

Tests wrapping into [0, 360), continuous angle accumulation, and DMS formatting.
"""

import math

import pytest

from skydome.angles import advance_angle, degrees_to_dms, format_dms, normalize_degrees

SAMPLE_ANGLES = [0.0, 0.5, 45.0, 179.999, 180.0, 359.5, 360.0, 405.0, 1e6 + 0.25,
                 -0.5, -45.0, -360.0, -720.5, -1e6, 2.0**52, 1e16, 1e20, -1e20, 1e300]


class TestNormalizeDegrees:
    """Tests for normalize_degrees."""

    @pytest.mark.parametrize(
        "angle,expected",
        [
            (0.0, 0.0),
            (90.0, 90.0),
            (360.0, 0.0),
            (720.0, 0.0),
            (405.0, 45.0),
            (-45.0, 315.0),
            (-360.0, 0.0),
            (-720.5, 359.5),
        ],
    )
    def test_known_values(self, angle, expected):
        """Test wrapping of representative angles."""
        assert normalize_degrees(angle) == pytest.approx(expected)

    @pytest.mark.parametrize("angle", SAMPLE_ANGLES)
    def test_result_in_range(self, angle):
        """Test the result always lands in [0, 360)."""
        result = normalize_degrees(angle)
        assert 0.0 <= result < 360.0

    @pytest.mark.parametrize("angle", SAMPLE_ANGLES)
    def test_idempotent(self, angle):
        """Test normalizing twice changes nothing."""
        once = normalize_degrees(angle)
        assert normalize_degrees(once) == once

    @pytest.mark.parametrize("angle", [0.0, 12.5, 45.0, 200.25, 359.5])
    @pytest.mark.parametrize("turns", [-3, -1, 1, 2, 5])
    def test_periodic(self, angle, turns):
        """Test whole turns added to an angle are removed."""
        assert normalize_degrees(angle + 360.0 * turns) == pytest.approx(
            normalize_degrees(angle), abs=1e-9
        )

    @pytest.mark.parametrize(
        "angle",
        [-1.0, -123.456, 1234.5, 98765.4321, -98765.4321,
         2.0**52 + 2.0, 1e16, 1e20, -1e20, 3.0e200, -7.5e250],
    )
    def test_matches_true_modulo(self, angle):
        """Test agreement with a floating modulo for ordinary inputs."""
        assert normalize_degrees(angle) == pytest.approx(angle % 360.0, abs=1e-9)

    def test_huge_values_exact(self):
        """Test very large magnitudes keep their remainder."""
        assert normalize_degrees(1e20) == 160.0
        assert normalize_degrees(-1e20) == 200.0

    def test_tiny_negative_stays_below_360(self):
        """Test a negative remainder that rounds up to 360 folds back to 0."""
        assert normalize_degrees(-1e-20) == 0.0

    @pytest.mark.parametrize("angle", [math.inf, -math.inf, math.nan])
    def test_non_finite_returns_nan(self, angle):
        """Test non-finite input gives NaN instead of raising."""
        assert math.isnan(normalize_degrees(angle))


class TestAdvanceAngle:
    """Tests for advance_angle."""

    def test_wraps_past_360(self):
        """Test the sum wraps at 360."""
        assert advance_angle(350.0, 20.0) == pytest.approx(10.0)

    @pytest.mark.parametrize("angle", SAMPLE_ANGLES)
    def test_zero_increment_is_normalize(self, angle):
        """Test a zero step only normalizes the current value."""
        assert advance_angle(angle, 0.0) == normalize_degrees(angle)

    def test_negative_increment_is_normalized_first(self):
        """Test a negative step is taken as its positive equivalent."""
        assert advance_angle(10.0, -20.0) == pytest.approx(350.0)

    def test_large_increment(self):
        """Test increments of several turns."""
        assert advance_angle(0.0, 720.0) == pytest.approx(0.0)
        assert advance_angle(30.0, 750.0) == pytest.approx(60.0)

    def test_repeated_steps_wrap_once(self):
        """Test a full revolution in small steps increases smoothly and wraps once."""
        angle = 0.0
        values = []
        for _ in range(72):
            angle = advance_angle(angle, 7.5)
            values.append(angle)

        drops = [b for a, b in zip(values, values[1:]) if b < a]
        assert len(drops) == 1
        for a, b in zip(values, values[1:]):
            assert (b - a) % 360.0 == pytest.approx(7.5)
        assert values[-1] == pytest.approx(180.0)

    def test_caller_threads_state(self):
        """Test the function holds no memory between calls."""
        assert advance_angle(100.0, 5.0) == advance_angle(100.0, 5.0)


class TestDms:
    """Tests for degrees_to_dms and format_dms."""

    def test_split(self):
        """Test splitting decimal degrees."""
        whole, minutes, seconds = degrees_to_dms(20.926361)
        assert whole == 20
        assert minutes == 55
        assert seconds == pytest.approx(34.9, abs=0.01)

    def test_format(self):
        """Test the display string."""
        assert format_dms(20.926361) == "20°55'34.9\""
        assert format_dms(10.0) == "10°00'00.0\""

    def test_negative(self):
        """Test the sign is kept on the degrees field."""
        assert degrees_to_dms(-20.5)[0] == -20
        assert format_dms(-20.5) == "-20°30'00.0\""

    def test_negative_below_one_degree(self):
        """Test the sign survives when the degrees field is zero."""
        assert degrees_to_dms(-0.5)[:2] == (0, 30)
        assert format_dms(-0.5) == "-0°30'00.0\""

    def test_rounding_carry(self):
        """Test seconds that would print as 60.0 carry into the minutes and degrees."""
        assert format_dms(29.999999) == "30°00'00.0\""
