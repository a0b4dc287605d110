import math
import numpy as np
from numba import njit, types

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PI = math.pi
TWO_PI = 2.0 * PI

# ---------------------------------------------------------------------------
# Tiny Numba helpers used inside map expressions
# ---------------------------------------------------------------------------

@njit(types.float64(types.float64), cache=True, fastmath=False)
def wrap_angle(v):
    # v mod 2pi in [0, 2pi); a tiny negative v rounds up to 2pi, fold it back
    w = v % TWO_PI
    if w < 0.0:
        w += TWO_PI
    if w >= TWO_PI:
        w -= TWO_PI
    return w


@njit(types.float64(types.float64), cache=True, fastmath=False)
def clamp01(x):
    if x < 0.0:
        return 0.0
    if x > 1.0:
        return 1.0
    return x


@njit(types.float64(types.float64, types.float64), cache=True, fastmath=False)
def Mod(x, v):
    return x % v


@njit(types.float64(types.float64), cache=True, fastmath=False)
def sign(x):
    return 1.0 if x > 0.0 else -1.0


@njit(types.float64(types.float64), cache=True, fastmath=False)
def Abs(x):
    return np.abs(x)


NS = {
    "sign": sign,
    "Abs": Abs,
    "abs": Abs,
    "sin": np.sin,
    "cos": np.cos,
    "exp": np.exp,
    "pow": np.power,
    "log": np.log,
    "Mod": Mod,
    "wrap_angle": wrap_angle,
    "clamp01": clamp01,
    "pi": np.pi,
    "np": np,
    "math": math,
}
