"""
Map building functions and JIT compilation utilities.

This module contains:
- Symbolic derivative helpers (sympy)
- Function text generation for step/deriv/jacobian
- JIT compilation wrappers
- build_map() - the main map configuration builder
- params_for() - named parameter overrides
"""

import logging

import sympy as sp
import numpy as np
from numba import njit, types

from . import functions

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Symbolic derivative helper (x derivative of map expression)
# ---------------------------------------------------------------------------

x, y = sp.symbols("x y")

locs = {
    "x": x,
    "y": y,
    "sin": sp.sin,
    "cos": sp.cos,
    "exp": sp.exp,
    "sign": sp.sign,
    "abs": sp.Abs,
    "Abs": sp.Abs,
    "pow": sp.Pow,
    "Mod": sp.Mod,
    "pi": sp.pi,
}


def sympy_deriv(expr_str: str) -> str:
    expr = sp.sympify(expr_str, locals=locs)
    expr_der = sp.diff(expr, x)
    return sp.sstr(expr_der)


def sympy_jacobian_2d(expr_x: str, expr_y: str):
    fx = sp.sympify(expr_x, locals=locs)
    fy = sp.sympify(expr_y, locals=locs)
    dfx_dx = sp.diff(fx, x)
    dfx_dy = sp.diff(fx, y)
    dfy_dx = sp.diff(fy, x)
    dfy_dy = sp.diff(fy, y)
    return tuple(sp.sstr(e) for e in (dfx_dx, dfx_dy, dfy_dx, dfy_dy))


# ---------------------------------------------------------------------------
# Build python function text
# ---------------------------------------------------------------------------

def _param_lines(param_names) -> list[str]:
    lines = []
    for i, key in enumerate(param_names):
        if not isinstance(key, str):
            raise TypeError(f"Only str keys supported, got {type(key)!r}")
        if not key.isidentifier():
            raise ValueError(f"Key {key!r} is not a valid Python identifier")
        lines.append(f"    {key} = params[{i}]")
    return lines


def funtext_1d(name: str, expr: str, param_names) -> str:
    lines = [f"def {name}(x, params):"]
    lines.extend(_param_lines(param_names))
    lines.extend([
        f"    x_next = {expr}",
        f"    return x_next",
    ])
    return "\n".join(lines)


def funtext_2d_step(name: str, expr_x: str, expr_y: str, param_names) -> str:
    lines = [f"def {name}(x, y, params):"]
    lines.extend(_param_lines(param_names))
    lines.extend([
        f"    x_next = {expr_x}",
        f"    y_next = {expr_y}",
        f"    return x_next, y_next",
    ])
    return "\n".join(lines)


def funtext_2d_jac(
    name: str, dXdx: str, dXdy: str, dYdx: str, dYdy: str, param_names
) -> str:
    lines = [f"def {name}(x, y, params):"]
    lines.extend(_param_lines(param_names))
    lines.extend([
        f"    dxdx = {dXdx}",
        f"    dxdy = {dXdy}",
        f"    dydx = {dYdx}",
        f"    dydy = {dYdy}",
        f"    return dxdx, dxdy, dydx, dydy",
    ])
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Build python functions from text
# ---------------------------------------------------------------------------

def _exec_source(src: str, fname: str):
    ns = functions.NS.copy()
    exec(src, ns, ns)
    return ns[fname]


# 1D step, also used for the 1D derivative
def funpy_1d(expr: str, param_names, fname: str = "impl"):
    return _exec_source(funtext_1d(fname, expr, param_names), fname)


# 2D step
def funpy_2d_step(expr_x: str, expr_y: str, param_names):
    return _exec_source(funtext_2d_step("impl2_step", expr_x, expr_y, param_names), "impl2_step")


# 2D jacobian
def funpy_2d_jac(dXdx, dXdy, dYdx, dYdy, param_names):
    return _exec_source(
        funtext_2d_jac("impl2_jac", dXdx, dXdy, dYdx, dYdy, param_names), "impl2_jac"
    )


# ---------------------------------------------------------------------------
# JIT function signatures
# ---------------------------------------------------------------------------

STEP_SIG = types.float64(
    types.float64,   # x, the mapped variable
    types.Array(types.float64, 1, 'C'),  # params
)

DERIV_SIG = types.float64(
    types.float64,   # x
    types.Array(types.float64, 1, 'C'),  # params
)

STEP2_SIG = types.UniTuple(types.float64, 2)(
    types.float64,  # x
    types.float64,  # y
    types.Array(types.float64, 1, 'C'),  # params
)

JAC2_SIG = types.UniTuple(types.float64, 4)(
    types.float64,  # x
    types.float64,  # y
    types.Array(types.float64, 1, 'C'),  # params
)


# ---------------------------------------------------------------------------
# JIT compilation wrappers
# ---------------------------------------------------------------------------

def funjit_1d(expr: str, param_names):
    fun = funpy_1d(expr, param_names)
    return njit(STEP_SIG, cache=False, fastmath=False)(fun)


def funjit_1d_deriv(expr: str, param_names):
    fun = funpy_1d(expr, param_names, fname="impl_deriv")
    return njit(DERIV_SIG, cache=False, fastmath=False)(fun)


def funjit_2d_step(xexpr: str, yexpr: str, param_names):
    fun = funpy_2d_step(xexpr, yexpr, param_names)
    return njit(STEP2_SIG, cache=False, fastmath=False)(fun)


def funjit_2d_jac(dxdx: str, dxdy: str, dydx: str, dydy: str, param_names):
    fun = funpy_2d_jac(dxdx, dxdy, dydx, dydy, param_names)
    return njit(JAC2_SIG, cache=False, fastmath=False)(fun)


def substitute_common(x, d):
    if d is None:
        return x
    x = x.format(**d)
    return x


# ---------------------------------------------------------------------------
# build_map - main map configuration builder
# ---------------------------------------------------------------------------

LYAP_METHODS = {
    "scalar": "deriv",
    "planar": "partial",
    "torus": "tangent",
}


def build_map(name: str, MAP_TEMPLATES: dict) -> dict:
    """
    Build a map configuration from a template.

    Args:
        name: Map name from MAP_TEMPLATES
        MAP_TEMPLATES: The combined map templates dictionary

    Returns:
        dict with compiled step/deriv (scalar) or step2/jac2 (planar, torus)
        functions and the template defaults
    """
    if name not in MAP_TEMPLATES:
        raise KeyError(f"Unknown map '{name}'")

    cfg = MAP_TEMPLATES[name]
    type = cfg.get("type", "scalar")
    if type not in LYAP_METHODS:
        raise ValueError(f"Unsupported type={type} for map '{name}'")

    pardict = cfg.get("params", dict())
    param_names = tuple(pardict.keys())
    common = cfg.get("expr_common")

    new_cfg = dict(cfg)
    new_cfg["name"] = name
    new_cfg["type"] = type
    new_cfg["param_names"] = param_names
    new_cfg["params"] = np.asarray([float(v) for v in pardict.values()], dtype=np.float64)
    new_cfg["domain"] = np.asarray(cfg.get("domain", [0.0, 1.0]), dtype=np.float64)
    new_cfg["lyap"] = cfg.get("lyap", LYAP_METHODS[type])

    if type == "scalar":
        expr = substitute_common(cfg["expr"], common)
        new_cfg["step"] = funjit_1d(expr, param_names)
        if "deriv_expr" in cfg:
            deriv_expr = substitute_common(cfg["deriv_expr"], common)
        else:
            deriv_expr = sympy_deriv(expr)
        new_cfg["deriv_expr"] = deriv_expr
        new_cfg["deriv"] = funjit_1d_deriv(deriv_expr, param_names)
        logger.debug(f"Built scalar map '{name}': f={expr}, f'={deriv_expr}")
        return new_cfg

    expr_x = substitute_common(cfg["expr_x"], common)
    expr_y = substitute_common(cfg["expr_y"], common)
    new_cfg["step2"] = funjit_2d_step(expr_x, expr_y, param_names)
    if "jac_exprs" in cfg:
        jac_exprs = tuple(substitute_common(e, common) for e in cfg["jac_exprs"])
    else:
        jac_exprs = sympy_jacobian_2d(expr_x, expr_y)
    new_cfg["jac_exprs"] = jac_exprs
    new_cfg["jac2"] = funjit_2d_jac(*jac_exprs, param_names)
    new_cfg.setdefault("y0", 0.0)
    logger.debug(f"Built {type} map '{name}': jacobian={jac_exprs}")
    return new_cfg


def params_for(map_cfg: dict, params=None, **overrides) -> np.ndarray:
    """
    Return a fresh params array for map_cfg.

    ``params`` replaces the defaults wholesale (array-like, same order as
    ``param_names``); keyword overrides are applied by name on top.
    """
    names = map_cfg["param_names"]
    if params is None:
        out = np.array(map_cfg["params"], dtype=np.float64)
    else:
        out = np.array(params, dtype=np.float64).reshape(-1)
        if out.size != len(names):
            raise ValueError(
                f"map '{map_cfg['name']}' takes {len(names)} params {names}, got {out.size}"
            )
    for key, value in overrides.items():
        if value is None:
            continue
        if key not in names:
            raise KeyError(f"Unknown parameter '{key}' for map '{map_cfg['name']}'")
        out[names.index(key)] = float(value)
    return np.ascontiguousarray(out)
