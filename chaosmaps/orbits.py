"""
Orbit generation: trajectories, attractor samples, cobweb pairs and
phase portraits.

Orbits are never reset or clamped; a divergent orbit shows up as inf/nan
in the returned array.
"""

import math
import numpy as np
from numba import njit, prange

from .defaults import DEFAULT_TRANS
from .functions import TWO_PI
from .map_functions import params_for
from .validation import validate_count, validate_kind


# ---------------------------------------------------------------------------
# Orbit computation
# ---------------------------------------------------------------------------

@njit
def compute_orbit_1d(step, x0, params, n_transient, n_iter, xs):
    x = x0
    for n in range(n_transient):
        x = step(x, params)
    for n in range(n_iter):
        xs[n] = x
        x = step(x, params)
    return


@njit
def compute_orbit_2d(step2, x0, y0, params, n_transient, n_iter, xys):
    x = x0
    y = y0
    for n in range(n_transient):
        x, y = step2(x, y, params)
    for n in range(n_iter):
        xys[n, 0] = x
        xys[n, 1] = y
        x, y = step2(x, y, params)
    return


@njit
def compute_cobweb(step, x0, params, n_iter, out):
    x = x0
    for n in range(n_iter):
        x_next = step(x, params)
        out[n, 0] = x
        out[n, 1] = x_next
        x = x_next
    return


@njit(cache=False, fastmath=False, parallel=True)
def phase_portrait_2d(step2, x0s, y0s, params, n_iter, out):
    for t in prange(x0s.size):
        x = x0s[t]
        y = y0s[t]
        out[t, 0, 0] = x
        out[t, 0, 1] = y
        for n in range(n_iter):
            x, y = step2(x, y, params)
            out[t, n + 1, 0] = x
            out[t, n + 1, 1] = y
    return


@njit
def rotation_number_2d(step2, x0, y0, params, n_transient, n_iter):
    x = x0
    y = y0
    for n in range(n_transient):
        x, y = step2(x, y, params)
    acc = 0.0
    for n in range(n_iter):
        x, y = step2(x, y, params)
        acc += y / TWO_PI
    return acc / float(n_iter)


# ---------------------------------------------------------------------------
# dict-based interfaces to numba functions
# ---------------------------------------------------------------------------

def _initial(map_cfg, x0, y0):
    x0 = float(map_cfg["x0"] if x0 is None else x0)
    if map_cfg["type"] == "scalar":
        return x0, 0.0
    y0 = float(map_cfg["y0"] if y0 is None else y0)
    return x0, y0


def trajectory(map_cfg, n_iter, x0=None, y0=None, n_transient=0, params=None, **overrides):
    """
    Iterate a map and collect the state before every step.

    The first row is the initial condition (after ``n_transient``
    discarded steps, if any). Scalar maps return shape (n_iter,), planar
    and torus maps return (n_iter, 2).

    Extra keyword arguments override map parameters by name, e.g.
    ``trajectory(build_map("logistic"), 100, r=3.5)``.
    """
    n_iter = validate_count(n_iter, "n_iter")
    n_transient = validate_count(n_transient, "n_transient")
    p = params_for(map_cfg, params, **overrides)
    x, y = _initial(map_cfg, x0, y0)

    if map_cfg["type"] == "scalar":
        xs = np.empty(n_iter, dtype=np.float64)
        compute_orbit_1d(map_cfg["step"], x, p, n_transient, n_iter, xs)
        return xs

    xys = np.empty((n_iter, 2), dtype=np.float64)
    compute_orbit_2d(map_cfg["step2"], x, y, p, n_transient, n_iter, xys)
    return xys


def attractor(map_cfg, n_iter, x0=None, y0=None, params=None, n_transient=DEFAULT_TRANS, **overrides):
    """Trajectory sampled after the transient has decayed."""
    return trajectory(map_cfg, n_iter, x0=x0, y0=y0, n_transient=n_transient, params=params, **overrides)


def cobweb(map_cfg, n_iter, x0=None, params=None, **overrides):
    """Rows (x_i, f(x_i)) for a cobweb plot of a scalar map."""
    validate_kind(map_cfg, ("scalar",), "cobweb")
    n_iter = validate_count(n_iter, "n_iter")
    p = params_for(map_cfg, params, **overrides)
    x, _ = _initial(map_cfg, x0, None)
    out = np.empty((n_iter, 2), dtype=np.float64)
    compute_cobweb(map_cfg["step"], x, p, n_iter, out)
    return out


def phase_space_grid(n_trajectories):
    """
    Initial conditions spread over [0, 2pi)^2.

    Trajectory i starts at column i mod s, row floor(i / s) of an s x s
    grid, s = sqrt(n_trajectories).
    """
    n_trajectories = validate_count(n_trajectories, "n_trajectories", minimum=1)
    side = math.sqrt(n_trajectories)
    idx = np.arange(n_trajectories, dtype=np.float64)
    x0s = np.mod(idx, side) * TWO_PI / side
    y0s = np.floor(idx / side) * TWO_PI / side
    return x0s, y0s


def phase_portrait(map_cfg, n_trajectories, n_iter, params=None, **overrides):
    """
    Many orbits of a 2D map from a grid of initial conditions.

    Returns shape (n_trajectories, n_iter + 1, 2); index 0 along the
    second axis is each initial point.
    """
    validate_kind(map_cfg, ("planar", "torus"), "phase_portrait")
    n_iter = validate_count(n_iter, "n_iter")
    p = params_for(map_cfg, params, **overrides)
    x0s, y0s = phase_space_grid(n_trajectories)
    out = np.empty((x0s.size, n_iter + 1, 2), dtype=np.float64)
    phase_portrait_2d(map_cfg["step2"], x0s, y0s, p, n_iter, out)
    return out


def rotation_number(map_cfg, n_iter, x0=None, y0=None, params=None, n_transient=DEFAULT_TRANS, **overrides):
    """Mean of p / 2pi over n_iter post-transient steps of a torus map."""
    validate_kind(map_cfg, ("torus",), "rotation_number")
    n_iter = validate_count(n_iter, "n_iter", minimum=1)
    n_transient = validate_count(n_transient, "n_transient")
    p = params_for(map_cfg, params, **overrides)
    x, y = _initial(map_cfg, x0, y0)
    return float(rotation_number_2d(map_cfg["step2"], x, y, p, n_transient, n_iter))
