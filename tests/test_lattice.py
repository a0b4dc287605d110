"""Tests for coupled map lattices."""

import pytest
import numpy as np

from chaosmaps import (
    TOPOLOGIES,
    lattice_step,
    diffusive_step,
    global_step,
    directional_step,
    random_lattice,
    evolve_lattice,
    lattice_statistics,
)


def logistic(x, r):
    return r * x * (1.0 - x)


@pytest.fixture
def state():
    return np.random.default_rng(3).random(16)


class TestLatticeStep:

    @pytest.mark.parametrize("topology", sorted(TOPOLOGIES))
    def test_uncoupled_is_site_map(self, state, topology):
        out = lattice_step(state, topology, r=3.7, epsilon=0.0)
        np.testing.assert_allclose(out, logistic(state, 3.7), rtol=1e-12)

    def test_full_global_coupling_is_mean_field(self, state):
        out = global_step(state, r=3.7, epsilon=1.0)
        np.testing.assert_allclose(out, np.full_like(state, logistic(state, 3.7).mean()))

    @pytest.mark.parametrize("epsilon", [0.0, 0.3, 0.5, 1.0])
    @pytest.mark.parametrize("topology", ["diffusive", "global"])
    def test_symmetric_coupling_preserves_total(self, state, topology, epsilon):
        fx = logistic(state, 2.5)
        out = lattice_step(state, topology, r=2.5, epsilon=epsilon)
        assert out.sum() == pytest.approx(fx.sum(), rel=1e-12)

    def test_diffusive_formula(self, state):
        eps = 0.4
        fx = logistic(state, 3.9)
        expected = (1 - eps) * fx + eps / 2 * (np.roll(fx, 1) + np.roll(fx, -1))
        np.testing.assert_allclose(diffusive_step(state, 3.9, eps), expected, rtol=1e-12)

    def test_directional_formula(self, state):
        eps = 0.25
        fx = logistic(state, 3.9)
        expected = (1 - eps) * fx + eps * np.roll(fx, -1)
        np.testing.assert_allclose(directional_step(state, 3.9, eps), expected, rtol=1e-12)

    def test_clamped_above(self):
        out = lattice_step([0.5, 0.5, 0.5], "diffusive", r=4.5, epsilon=0.2)
        np.testing.assert_array_equal(out, [1.0, 1.0, 1.0])

    def test_clamped_below(self):
        out = lattice_step([0.2, 0.4, 0.6], "global", r=-1.0, epsilon=0.5)
        np.testing.assert_array_equal(out, [0.0, 0.0, 0.0])

    @pytest.mark.parametrize("topology", sorted(TOPOLOGIES))
    def test_single_site_neighbours_itself(self, topology):
        out = lattice_step([0.3], topology, r=3.0, epsilon=0.6)
        assert out[0] == pytest.approx(logistic(0.3, 3.0))

    def test_input_not_modified(self, state):
        before = state.copy()
        lattice_step(state, "directional", r=3.9, epsilon=0.5)
        np.testing.assert_array_equal(state, before)

    def test_topology_name_normalized(self, state):
        np.testing.assert_array_equal(
            lattice_step(state, " Global ", 3.9, 0.3),
            lattice_step(state, "global", 3.9, 0.3),
        )

    def test_unknown_topology_raises(self, state):
        with pytest.raises(ValueError, match="Unknown topology"):
            lattice_step(state, "ring", 3.9, 0.3)

    def test_empty_lattice_raises(self):
        with pytest.raises(ValueError, match="at least one site"):
            lattice_step([], "diffusive", 3.9, 0.3)

    def test_planar_site_map_rejected(self, state):
        with pytest.raises(ValueError, match="scalar"):
            lattice_step(state, "diffusive", 1.4, 0.3, map_name="henon")


class TestEvolveLattice:

    def test_shape_and_bounds(self):
        history = evolve_lattice("diffusive", 3.9, 0.4, n=32, time_steps=50, rng=1)
        assert history.shape == (50, 32)
        assert np.all((history >= 0.0) & (history <= 1.0))

    def test_first_row_is_initial_state(self):
        history = evolve_lattice("global", 3.9, 0.4, n=10, time_steps=5, rng=42)
        np.testing.assert_array_equal(history[0], random_lattice(10, 42))

    def test_rows_follow_lattice_step(self):
        history = evolve_lattice("directional", 3.8, 0.2, n=12, time_steps=4, rng=5)
        for t in range(1, 4):
            np.testing.assert_allclose(history[t], lattice_step(history[t - 1], "directional", 3.8, 0.2))

    def test_seed_is_deterministic(self):
        a = evolve_lattice("diffusive", 3.9, 0.4, n=20, time_steps=30, rng=7)
        b = evolve_lattice("diffusive", 3.9, 0.4, n=20, time_steps=30, rng=7)
        np.testing.assert_array_equal(a, b)

    def test_generator_passthrough(self):
        a = evolve_lattice("global", 3.9, 0.4, n=8, time_steps=3, rng=np.random.default_rng(11))
        b = evolve_lattice("global", 3.9, 0.4, n=8, time_steps=3, rng=11)
        np.testing.assert_array_equal(a, b)

    def test_single_time_step(self):
        history = evolve_lattice("diffusive", n=6, time_steps=1, rng=0)
        assert history.shape == (1, 6)

    def test_strong_global_coupling_synchronizes(self):
        history = evolve_lattice("global", 3.9, 1.0, n=16, time_steps=3, rng=2)
        assert np.ptp(history[1]) == pytest.approx(0.0, abs=1e-15)

    @pytest.mark.parametrize("kwargs", [dict(n=0), dict(time_steps=0), dict(n=-3)])
    def test_bad_sizes_raise(self, kwargs):
        with pytest.raises(ValueError):
            evolve_lattice("diffusive", **kwargs)

    def test_unknown_topology_raises(self):
        with pytest.raises(ValueError, match="Unknown topology"):
            evolve_lattice("mesh", n=4, time_steps=2)


class TestLatticeStatistics:

    def test_mean_and_variance(self):
        history = np.array([[0.0, 1.0], [0.5, 0.5]])
        stats = lattice_statistics(history)
        np.testing.assert_allclose(stats["mean"], [0.5, 0.5])
        np.testing.assert_allclose(stats["variance"], [0.25, 0.0])

    def test_rejects_1d(self):
        with pytest.raises(ValueError, match="2D"):
            lattice_statistics([0.1, 0.2])
