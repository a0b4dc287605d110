"""
Spatial power spectrum of lattice snapshots by direct summation.

O(n^2) per snapshot; fine for lattices of tens to a few hundred sites.
"""

import math
import numpy as np
from numba import njit, prange

from .functions import PI
from .validation import validate_lattice, validate_history


@njit
def power_spectrum_inplace(lattice, out):
    n = lattice.size
    for k in range(n // 2):
        real = 0.0
        imag = 0.0
        for j in range(n):
            angle = 2.0 * PI * k * j / n
            real += lattice[j] * math.cos(angle)
            imag += lattice[j] * math.sin(angle)
        out[k] = (real * real + imag * imag) / n
    return


@njit(cache=False, fastmath=False, parallel=True)
def power_spectrum_rows(history, out):
    for t in prange(history.shape[0]):
        power_spectrum_inplace(history[t], out[t])
    return


def spatial_power_spectrum(lattice) -> np.ndarray:
    """
    Power spectrum of one lattice state.

    Returns an array of length n // 2; entry k is
    (|sum_j x_j cos(2 pi k j / n)|^2 + |sum_j x_j sin(2 pi k j / n)|^2) / n.
    """
    x = validate_lattice(lattice)
    out = np.empty(x.size // 2, dtype=np.float64)
    power_spectrum_inplace(x, out)
    return out


def spectrum_history(history) -> np.ndarray:
    """Power spectrum of every row of a (time_steps, n) lattice history."""
    h = validate_history(history)
    out = np.empty((h.shape[0], h.shape[1] // 2), dtype=np.float64)
    power_spectrum_rows(h, out)
    return out
