"""
Leading Lyapunov exponent estimation.

Three methods, chosen by the map's ``lyap`` entry:

- "deriv":   mean of log|f'(x)| along the orbit (scalar maps)
- "partial": mean of log|dX/dx| along the orbit, the dominant entry of
             the Jacobian only (planar maps; an approximation, not the
             full spectrum)
- "tangent": a tangent vector is pushed through the Jacobian and
             renormalized every step; log of the stretch is averaged
             (torus maps)

The scalar derivative and the torus Jacobian are evaluated at the state
before each step; the planar partial is taken at the state after it.
No floor is applied: a zero derivative gives -inf, a divergent orbit
gives nan.
"""

import logging
import math

import numpy as np
from numba import njit, prange

from .defaults import DEFAULT_TRANS, DEFAULT_LYAP_ITER
from .map_functions import params_for
from .validation import validate_count, validate_range

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Kernels
# ---------------------------------------------------------------------------

@njit
def lyapunov_1d(step, deriv, x0, params, n_transient, n_iter):
    x = x0
    for n in range(n_transient):
        x = step(x, params)
    acc = 0.0
    for n in range(n_iter):
        acc += math.log(abs(deriv(x, params)))
        x = step(x, params)
    return acc / float(n_iter)


@njit
def lyapunov_2d_partial(step2, jac2, x0, y0, params, n_transient, n_iter):
    x = x0
    y = y0
    for n in range(n_transient):
        x, y = step2(x, y, params)
    acc = 0.0
    for n in range(n_iter):
        x, y = step2(x, y, params)
        dXdx, dXdy, dYdx, dYdy = jac2(x, y, params)
        acc += math.log(abs(dXdx))
    return acc / float(n_iter)


@njit
def lyapunov_2d_tangent(step2, jac2, x0, y0, params, n_transient, n_iter):
    x = x0
    y = y0
    for n in range(n_transient):
        x, y = step2(x, y, params)

    vx = 1.0
    vy = 0.0
    acc = 0.0
    for n in range(n_iter):
        dXdx, dXdy, dYdx, dYdy = jac2(x, y, params)

        vx_new = dXdx * vx + dXdy * vy
        vy_new = dYdx * vx + dYdy * vy

        norm = math.sqrt(vx_new * vx_new + vy_new * vy_new)
        acc += math.log(norm)

        vx = vx_new / norm
        vy = vy_new / norm

        x, y = step2(x, y, params)
    return acc / float(n_iter)


@njit(cache=False, fastmath=False, parallel=True)
def lyapunov_sweep_1d(step, deriv, x0, params, pindex, pvalues, n_transient, n_iter, out):
    for j in prange(pvalues.size):
        p = params.copy()
        p[pindex] = pvalues[j]
        out[j, 0] = pvalues[j]
        out[j, 1] = lyapunov_1d(step, deriv, x0, p, n_transient, n_iter)
    return


@njit(cache=False, fastmath=False, parallel=True)
def lyapunov_sweep_2d(step2, jac2, tangent, x0, y0, params, pindex, pvalues, n_transient, n_iter, out):
    for j in prange(pvalues.size):
        p = params.copy()
        p[pindex] = pvalues[j]
        out[j, 0] = pvalues[j]
        if tangent:
            out[j, 1] = lyapunov_2d_tangent(step2, jac2, x0, y0, p, n_transient, n_iter)
        else:
            out[j, 1] = lyapunov_2d_partial(step2, jac2, x0, y0, p, n_transient, n_iter)
    return


# ---------------------------------------------------------------------------
# dict-based interfaces to numba functions
# ---------------------------------------------------------------------------

def _initial(map_cfg, x0, y0):
    x = float(map_cfg["x0"] if x0 is None else x0)
    y = float(map_cfg.get("y0", 0.0) if y0 is None else y0)
    return x, y


def lyapunov_exponent(
    map_cfg,
    n_iter=DEFAULT_LYAP_ITER,
    x0=None,
    y0=None,
    params=None,
    n_transient=DEFAULT_TRANS,
    **overrides,
) -> float:
    """
    Estimate the leading Lyapunov exponent of a map at one parameter point.

    Returns a float in natural-log units per iteration; negative means a
    stable orbit, positive means chaos. May be -inf or nan for degenerate
    orbits.
    """
    n_iter = validate_count(n_iter, "n_iter", minimum=1)
    n_transient = validate_count(n_transient, "n_transient")
    p = params_for(map_cfg, params, **overrides)
    x, y = _initial(map_cfg, x0, y0)

    method = map_cfg["lyap"]
    if method == "deriv":
        return float(lyapunov_1d(map_cfg["step"], map_cfg["deriv"], x, p, n_transient, n_iter))
    if method == "partial":
        return float(lyapunov_2d_partial(map_cfg["step2"], map_cfg["jac2"], x, y, p, n_transient, n_iter))
    if method == "tangent":
        return float(lyapunov_2d_tangent(map_cfg["step2"], map_cfg["jac2"], x, y, p, n_transient, n_iter))
    raise ValueError(f"Unsupported lyap={method} for map '{map_cfg['name']}'")


def stability_values(v_min, v_max, n_values) -> np.ndarray:
    """n_values evenly spaced values, both ends included."""
    n_values = validate_count(n_values, "n_values", minimum=1)
    v_min, v_max = validate_range(v_min, v_max, "v_min", "v_max")
    if n_values == 1:
        return np.array([v_min], dtype=np.float64)
    return v_min + np.arange(n_values, dtype=np.float64) * (v_max - v_min) / (n_values - 1)


def stability_transition(
    map_cfg,
    v_min,
    v_max,
    n_values,
    param=None,
    x0=None,
    y0=None,
    n_iter=DEFAULT_LYAP_ITER,
    n_transient=DEFAULT_TRANS,
    params=None,
):
    """
    Lyapunov exponent as a function of one parameter.

    Every value starts from the same reference initial condition (the
    map's x0/y0, theta0=pi, p0=0.5 for the standard map). Values are
    evaluated in parallel.

    Returns:
        (n_values, 2) array of (parameter, exponent) rows
    """
    pvalues = stability_values(v_min, v_max, n_values)
    n_iter = validate_count(n_iter, "n_iter", minimum=1)
    n_transient = validate_count(n_transient, "n_transient")
    names = map_cfg["param_names"]
    param = names[0] if param is None else param
    if param not in names:
        raise KeyError(f"Unknown parameter '{param}' for map '{map_cfg['name']}'")

    p = params_for(map_cfg, params)
    pindex = names.index(param)
    x, y = _initial(map_cfg, x0, y0)
    out = np.empty((pvalues.size, 2), dtype=np.float64)
    logger.debug(
        f"Stability transition of '{map_cfg['name']}' over {param} in "
        f"[{v_min}, {v_max}]: {pvalues.size} values x {n_iter} iterations"
    )

    method = map_cfg["lyap"]
    if method == "deriv":
        lyapunov_sweep_1d(map_cfg["step"], map_cfg["deriv"], x, p, pindex, pvalues, n_transient, n_iter, out)
    elif method in ("partial", "tangent"):
        lyapunov_sweep_2d(
            map_cfg["step2"], map_cfg["jac2"], method == "tangent",
            x, y, p, pindex, pvalues, n_transient, n_iter, out,
        )
    else:
        raise ValueError(f"Unsupported lyap={method} for map '{map_cfg['name']}'")
    return out
