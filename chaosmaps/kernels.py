"""
Single-step kernels for the built-in maps.

Thin wrappers over the compiled template functions; no parameter
validation is done, out-of-range inputs are simply evaluated.
"""

import numpy as np

from .defaults import DEFAULT_R, DEFAULT_HENON_A, DEFAULT_HENON_B, DEFAULT_K
from .templates import build_map


def _params(*values) -> np.ndarray:
    return np.array(values, dtype=np.float64)


def step_logistic(x: float, r: float = DEFAULT_R) -> float:
    """r * x * (1 - x)"""
    return float(build_map("logistic")["step"](float(x), _params(r)))


def logistic_deriv(x: float, r: float = DEFAULT_R) -> float:
    return float(build_map("logistic")["deriv"](float(x), _params(r)))


def step_henon(x: float, y: float, a: float = DEFAULT_HENON_A, b: float = DEFAULT_HENON_B) -> tuple[float, float]:
    """(1 - a x^2 + y, b x)"""
    x_next, y_next = build_map("henon")["step2"](float(x), float(y), _params(a, b))
    return float(x_next), float(y_next)


def step_standard(theta: float, p: float, k: float = DEFAULT_K) -> tuple[float, float]:
    """
    One step of the standard map.

    p is kicked first with the old theta, then theta advances by the new
    p; both are wrapped into [0, 2pi).
    """
    theta_next, p_next = build_map("standard")["step2"](float(theta), float(p), _params(k))
    return float(theta_next), float(p_next)


def standard_jacobian(theta: float, k: float = DEFAULT_K) -> np.ndarray:
    """
    Jacobian d(theta', p')/d(theta, p) of the standard map at the
    pre-step theta. Independent of p; the determinant is 1.
    """
    dxdx, dxdy, dydx, dydy = build_map("standard")["jac2"](float(theta), 0.0, _params(k))
    return np.array([[dxdx, dxdy], [dydx, dydy]], dtype=np.float64)
