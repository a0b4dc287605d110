"""Tests for argument guards."""

import pytest
import numpy as np

from chaosmaps import build_map, bifurcation, lyapunov_exponent, trajectory
from chaosmaps.validation import validate_count, validate_range


class TestValidateCount:

    def test_accepts_integral_values(self):
        assert validate_count(5, "n_iter") == 5
        assert validate_count(5.0, "n_iter") == 5
        assert validate_count(np.int64(3), "n_iter", minimum=1) == 3

    @pytest.mark.parametrize("value", [float("inf"), -float("inf"), float("nan"), np.inf])
    def test_non_finite_is_value_error(self, value):
        with pytest.raises(ValueError, match="n_iter must be a finite integer"):
            validate_count(value, "n_iter")

    def test_fractional_rejected(self):
        with pytest.raises(ValueError, match="must be an integer"):
            validate_count(2.5, "steps")

    def test_below_minimum_rejected(self):
        with pytest.raises(ValueError, match="steps must be >= 1, got 0"):
            validate_count(0, "steps", minimum=1)

    def test_infinite_counts_through_public_calls(self):
        with pytest.raises(ValueError, match="n_iter"):
            lyapunov_exponent(build_map("logistic"), float("inf"))
        with pytest.raises(ValueError, match="n_transient"):
            trajectory(build_map("henon"), 10, n_transient=float("inf"))
        with pytest.raises(ValueError, match="steps"):
            bifurcation(build_map("logistic"), 3.0, 4.0, float("inf"))


class TestValidateRange:

    def test_ordered(self):
        assert validate_range(1, 2, "lo", "hi") == (1.0, 2.0)
        assert validate_range(2, 2, "lo", "hi") == (2.0, 2.0)

    def test_reversed_rejected(self):
        with pytest.raises(ValueError, match="p_min must be <= p_max"):
            validate_range(4.0, 3.0, "p_min", "p_max")
