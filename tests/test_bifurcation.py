"""Tests for bifurcation diagrams."""

import pytest
import numpy as np

from chaosmaps import build_map, bifurcation, sweep_values


class TestSweepValues:

    def test_inclusive(self):
        v = sweep_values(2.5, 4.0, 3)
        np.testing.assert_allclose(v, [2.5, 3.0, 3.5, 4.0])

    def test_zero_steps_raise(self):
        with pytest.raises(ValueError, match="steps"):
            sweep_values(2.5, 4.0, 0)

    def test_reversed_range_raises(self):
        with pytest.raises(ValueError, match="p_min"):
            sweep_values(4.0, 2.5, 10)


class TestBifurcation:

    def test_cardinality(self):
        pts = bifurcation(build_map("logistic"), 2.5, 4.0, steps=500, n_transient=100, n_iter=100)
        assert pts.shape == (50100, 2)

    def test_ordering(self):
        pts = bifurcation(build_map("logistic"), 2.5, 4.0, steps=10, n_iter=25)
        params = pts[:, 0]
        assert np.all(np.diff(params) >= 0.0)
        np.testing.assert_array_equal(params[:25], 2.5)
        assert params[-1] == pytest.approx(4.0)

    def test_fixed_point_branch(self):
        r = 2.8
        pts = bifurcation(build_map("logistic"), r, r, steps=1, n_iter=50)
        np.testing.assert_array_equal(pts[:, 0], r)
        np.testing.assert_allclose(pts[:, 1], 1.0 - 1.0 / r, atol=1e-8)

    def test_period_two_branch(self):
        pts = bifurcation(build_map("logistic"), 3.2, 3.2, steps=1, n_transient=1000, n_iter=40)
        values = np.unique(np.round(pts[:, 1], 6))
        assert values.size == 2

    def test_restarts_each_parameter(self):
        cfg = build_map("logistic")
        wide = bifurcation(cfg, 3.0, 4.0, steps=4, n_iter=10)
        single = bifurcation(cfg, 3.5, 3.5, steps=1, n_iter=10)
        np.testing.assert_array_equal(wide[20:30, 1], single[:10, 1])

    def test_matches_trajectory(self):
        from chaosmaps import trajectory
        cfg = build_map("logistic")
        pts = bifurcation(cfg, 3.7, 3.7, steps=1, n_transient=100, n_iter=30)
        orbit = trajectory(cfg, 30, x0=0.5, n_transient=101, r=3.7)
        np.testing.assert_array_equal(pts[:30, 1], orbit)

    def test_henon_y_coordinate(self):
        pts = bifurcation(build_map("henon"), 1.0, 1.4, steps=5, param="a", n_iter=20, coord=1)
        assert pts.shape == (120, 2)
        assert np.all(np.isfinite(pts))

    def test_negative_iterations_raise(self):
        with pytest.raises(ValueError, match="n_iter"):
            bifurcation(build_map("logistic"), 2.5, 4.0, steps=10, n_iter=-1)

    def test_unknown_param_raises(self):
        with pytest.raises(KeyError):
            bifurcation(build_map("logistic"), 2.5, 4.0, steps=10, param="a")

    def test_bad_coord_raises(self):
        with pytest.raises(ValueError, match="coord"):
            bifurcation(build_map("henon"), 1.0, 1.4, steps=10, coord=2)
