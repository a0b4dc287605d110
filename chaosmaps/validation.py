"""
Input validation: count and lattice guards.

Numerical degeneracies (divergence, overflow, log of zero) are not errors
and are never checked here; only caller bugs are.
"""

import math

import numpy as np


def validate_count(value, name: str, minimum: int = 0) -> int:
    """Return value as int, raising ValueError if it is below minimum.

    Args:
        value: iteration, transient or step count
        name: argument name, for the error message
        minimum: smallest accepted value

    Raises:
        ValueError: if value is not finite, not integral or below minimum
    """
    if isinstance(value, (float, np.floating)) and not math.isfinite(value):
        raise ValueError(f"{name} must be a finite integer, got {value!r}")
    ivalue = int(value)
    if ivalue != value:
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if ivalue < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {ivalue}")
    return ivalue


def validate_range(lo: float, hi: float, lo_name: str, hi_name: str) -> tuple[float, float]:
    lo = float(lo)
    hi = float(hi)
    if lo > hi:
        raise ValueError(f"{lo_name} must be <= {hi_name}, got {lo_name}={lo}, {hi_name}={hi}")
    return lo, hi


def validate_lattice(lattice) -> np.ndarray:
    """Return a fresh contiguous float64 copy of a 1D lattice state.

    Raises:
        ValueError: if the lattice is not 1D or has no sites
    """
    arr = np.array(lattice, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"lattice must be 1D, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError("lattice must have at least one site, got 0")
    return np.ascontiguousarray(arr)


def validate_history(history) -> np.ndarray:
    arr = np.array(history, dtype=np.float64)
    if arr.ndim != 2:
        raise ValueError(f"lattice history must be 2D (time, site), got shape {arr.shape}")
    if arr.shape[1] == 0:
        raise ValueError("lattice history must have at least one site, got 0")
    return np.ascontiguousarray(arr)


def validate_kind(map_cfg: dict, kinds: tuple, operation: str) -> None:
    if map_cfg["type"] not in kinds:
        raise ValueError(
            f"{operation} requires a {' or '.join(kinds)} map, "
            f"got '{map_cfg['name']}' ({map_cfg['type']})"
        )
