"""
Bifurcation diagrams: attractor samples against a swept parameter.
"""

import logging

import numpy as np
from numba import njit, prange

from .defaults import DEFAULT_TRANS, DEFAULT_ITER
from .map_functions import params_for
from .validation import validate_count, validate_range

logger = logging.getLogger(__name__)


@njit(cache=False, fastmath=False, parallel=True)
def bifurcation_1d(step, x0, params, pindex, pvalues, n_transient, n_iter, out):
    for j in prange(pvalues.size):
        p = params.copy()
        p[pindex] = pvalues[j]
        x = x0
        for n in range(n_transient):
            x = step(x, p)
        base = j * n_iter
        for n in range(n_iter):
            x = step(x, p)
            out[base + n, 0] = pvalues[j]
            out[base + n, 1] = x
    return


@njit(cache=False, fastmath=False, parallel=True)
def bifurcation_2d(step2, x0, y0, params, pindex, pvalues, n_transient, n_iter, coord, out):
    for j in prange(pvalues.size):
        p = params.copy()
        p[pindex] = pvalues[j]
        x = x0
        y = y0
        for n in range(n_transient):
            x, y = step2(x, y, p)
        base = j * n_iter
        for n in range(n_iter):
            x, y = step2(x, y, p)
            out[base + n, 0] = pvalues[j]
            out[base + n, 1] = x if coord == 0 else y
    return


def sweep_values(p_min, p_max, steps) -> np.ndarray:
    """steps + 1 equally spaced values, both ends included."""
    steps = validate_count(steps, "steps", minimum=1)
    p_min, p_max = validate_range(p_min, p_max, "p_min", "p_max")
    p_step = (p_max - p_min) / steps
    return p_min + np.arange(steps + 1, dtype=np.float64) * p_step


def bifurcation(
    map_cfg,
    p_min,
    p_max,
    steps,
    param=None,
    n_transient=DEFAULT_TRANS,
    n_iter=DEFAULT_ITER,
    coord=0,
    x0=None,
    y0=None,
    params=None,
):
    """
    Sweep one map parameter and sample the attractor at each value.

    For each of the steps + 1 values the state restarts from the map's
    reference initial condition, n_transient steps are discarded and the
    next n_iter states are recorded.

    Args:
        map_cfg: built map configuration
        p_min, p_max: sweep range, p_min <= p_max
        steps: number of increments (>= 1)
        param: parameter name, defaults to the map's first parameter
        coord: 0 records x, 1 records y (2D maps only)

    Returns:
        ((steps + 1) * n_iter, 2) array of (parameter, value) rows ordered
        by parameter, then by iteration
    """
    pvalues = sweep_values(p_min, p_max, steps)
    n_transient = validate_count(n_transient, "n_transient")
    n_iter = validate_count(n_iter, "n_iter")
    names = map_cfg["param_names"]
    param = names[0] if param is None else param
    if param not in names:
        raise KeyError(f"Unknown parameter '{param}' for map '{map_cfg['name']}'")
    if coord not in (0, 1):
        raise ValueError(f"coord must be 0 (x) or 1 (y), got {coord!r}")

    p = params_for(map_cfg, params)
    pindex = names.index(param)
    x = float(map_cfg["x0"] if x0 is None else x0)
    out = np.empty((pvalues.size * n_iter, 2), dtype=np.float64)
    logger.debug(
        f"Bifurcation of '{map_cfg['name']}' over {param} in [{p_min}, {p_max}]: "
        f"{pvalues.size} values x {n_iter} samples"
    )

    if map_cfg["type"] == "scalar":
        bifurcation_1d(map_cfg["step"], x, p, pindex, pvalues, n_transient, n_iter, out)
    else:
        y = float(map_cfg["y0"] if y0 is None else y0)
        bifurcation_2d(map_cfg["step2"], x, y, p, pindex, pvalues, n_transient, n_iter, int(coord), out)
    return out
