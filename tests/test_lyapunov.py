"""Tests for Lyapunov exponent estimation."""

import math

import pytest
import numpy as np

from chaosmaps import build_map, lyapunov_exponent, stability_transition, stability_values


class TestLogisticLyapunov:

    def test_stable_fixed_point_is_negative(self):
        lam = lyapunov_exponent(build_map("logistic"), 1000, x0=0.5, r=2.0)
        assert lam < 0.0

    def test_superstable_point_gives_minus_infinity(self):
        # f'(0.5) = 0 exactly, log(0) is not floored
        lam = lyapunov_exponent(build_map("logistic"), 1000, x0=0.5, r=2.0)
        assert lam == -math.inf

    def test_chaotic_regime_is_positive(self):
        lam = lyapunov_exponent(build_map("logistic"), 1000, x0=0.5, r=3.9)
        assert lam > 0.0

    def test_period_two_is_negative(self):
        lam = lyapunov_exponent(build_map("logistic"), 1000, x0=0.3, r=3.2)
        assert lam < 0.0

    def test_fully_chaotic_close_to_log2(self):
        lam = lyapunov_exponent(build_map("logistic"), 5000, x0=0.3, r=4.0)
        assert lam == pytest.approx(math.log(2.0), abs=0.1)

    def test_matches_direct_average(self):
        cfg = build_map("logistic")
        r = 3.7
        x = 0.5
        for _ in range(100):
            x = r * x * (1.0 - x)
        acc = 0.0
        for _ in range(200):
            acc += math.log(abs(r * (1.0 - 2.0 * x)))
            x = r * x * (1.0 - x)
        assert lyapunov_exponent(cfg, 200, x0=0.5, r=r) == pytest.approx(acc / 200, rel=1e-9)

    def test_zero_iterations_raise(self):
        with pytest.raises(ValueError, match="n_iter"):
            lyapunov_exponent(build_map("logistic"), 0)


class TestHenonLyapunov:

    def test_classical_parameters_finite(self):
        lam = lyapunov_exponent(build_map("henon"), 1000)
        assert np.isfinite(lam)

    @staticmethod
    def reference(a, b, x, y, n_iter, n_transient=100):
        for _ in range(n_transient):
            x, y = 1.0 - a * x * x + y, b * x
        acc = 0.0
        for _ in range(n_iter):
            x, y = 1.0 - a * x * x + y, b * x
            acc += math.log(abs(-2.0 * a * x))
        return acc / n_iter

    def test_partial_taken_after_step(self):
        cfg = build_map("henon")
        expected = self.reference(1.4, 0.3, 0.1, 0.1, 300)
        assert lyapunov_exponent(cfg, 300) == pytest.approx(expected, rel=1e-6)

    def test_short_run_after_step(self):
        cfg = build_map("henon")
        expected = self.reference(1.4, 0.3, 0.1, 0.1, 5)
        assert lyapunov_exponent(cfg, 5) == pytest.approx(expected, rel=1e-9)
        assert lyapunov_exponent(cfg, 5) == pytest.approx(0.432653, abs=1e-5)

    def test_sweep_matches_pointwise(self):
        cfg = build_map("henon")
        out = stability_transition(cfg, 1.2, 1.4, 3, param="a", n_iter=50)
        expected = [self.reference(a, 0.3, 0.1, 0.1, 50) for a in out[:, 0]]
        np.testing.assert_allclose(out[:, 1], expected, rtol=1e-9)


class TestStandardLyapunov:

    def test_integrable_case_near_zero(self):
        lam = lyapunov_exponent(build_map("standard"), 1000, k=0.0)
        assert abs(lam) < 0.02

    def test_strong_kick_is_chaotic(self):
        lam = lyapunov_exponent(build_map("standard"), 1000, k=5.0)
        assert lam > 0.5


class TestStabilityTransition:

    def test_values(self):
        np.testing.assert_allclose(stability_values(0.0, 5.0, 6), [0, 1, 2, 3, 4, 5])
        np.testing.assert_allclose(stability_values(1.5, 3.0, 1), [1.5])

    def test_zero_values_raise(self):
        with pytest.raises(ValueError, match="n_values"):
            stability_values(0.0, 1.0, 0)

    def test_standard_map_onset(self):
        out = stability_transition(build_map("standard"), 0.0, 5.0, 11)
        assert out.shape == (11, 2)
        np.testing.assert_allclose(out[:, 0], np.linspace(0.0, 5.0, 11))
        assert out[-1, 1] > out[0, 1]
        assert out[-1, 1] > 0.5

    def test_matches_pointwise_estimates(self):
        cfg = build_map("logistic")
        out = stability_transition(cfg, 3.0, 4.0, 5, n_iter=500)
        expected = [lyapunov_exponent(cfg, 500, r=r) for r in out[:, 0]]
        np.testing.assert_allclose(out[:, 1], expected, rtol=1e-12)

    def test_reference_initial_condition(self):
        cfg = build_map("standard")
        out = stability_transition(cfg, 2.0, 2.0, 1)
        assert out[0, 1] == pytest.approx(lyapunov_exponent(cfg, 1000, x0=np.pi, y0=0.5, k=2.0))

    def test_henon_sweep(self):
        out = stability_transition(build_map("henon"), 1.0, 1.4, 3, param="a", n_iter=200)
        assert out.shape == (3, 2)
        assert np.all(np.isfinite(out))

    def test_unknown_param_raises(self):
        with pytest.raises(KeyError):
            stability_transition(build_map("standard"), 0.0, 1.0, 3, param="r")
