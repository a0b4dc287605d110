"""
chaosmaps - trajectories and diagnostics of low-dimensional chaotic maps.

This package organizes map templates by type:
- maps_scalar: 1D maps (logistic)
- maps_planar: 2D maps (Henon)
- maps_torus: 2D maps on the torus (standard map)

And provides build/compile utilities in map_functions, plus the analyzers:
- orbits: trajectories, attractors, cobwebs, phase portraits
- bifurcation: parameter sweeps of attractor samples
- lyapunov: Lyapunov exponents and stability-transition sweeps
- lattice: coupled map lattices (diffusive, global, directional)
- spectrum: spatial power spectra of lattice states
"""

from .defaults import (
    DEFAULT_MAP_NAME,
    DEFAULT_TRANS,
    DEFAULT_ITER,
    DEFAULT_LYAP_ITER,
    DEFAULT_X0,
    DEFAULT_R,
    DEFAULT_HENON_A,
    DEFAULT_HENON_B,
    DEFAULT_K,
    DEFAULT_THETA0,
    DEFAULT_P0,
    DEFAULT_EPSILON,
    DEFAULT_LATTICE_SIZE,
    DEFAULT_TIME_STEPS,
)

from .maps_scalar import MAPS_SCALAR
from .maps_planar import MAPS_PLANAR
from .maps_torus import MAPS_TORUS
from .templates import MAP_TEMPLATES, build_map

from .map_functions import (
    # Symbolic helpers
    sympy_deriv,
    sympy_jacobian_2d,
    # Function text generators
    funtext_1d,
    funtext_2d_step,
    funtext_2d_jac,
    # JIT compilation
    funjit_1d,
    funjit_1d_deriv,
    funjit_2d_step,
    funjit_2d_jac,
    # Type signatures
    STEP_SIG,
    DERIV_SIG,
    STEP2_SIG,
    JAC2_SIG,
    substitute_common,
    params_for,
)

from .kernels import (
    step_logistic,
    logistic_deriv,
    step_henon,
    step_standard,
    standard_jacobian,
)
from .orbits import (
    trajectory,
    attractor,
    cobweb,
    phase_space_grid,
    phase_portrait,
    rotation_number,
)
from .bifurcation import bifurcation, sweep_values
from .lyapunov import lyapunov_exponent, stability_transition, stability_values
from .lattice import (
    TOPOLOGIES,
    lattice_step,
    diffusive_step,
    global_step,
    directional_step,
    random_lattice,
    evolve_lattice,
    lattice_statistics,
)
from .spectrum import spatial_power_spectrum, spectrum_history
from .logging_config import setup_logging

__all__ = [
    # Defaults
    "DEFAULT_MAP_NAME",
    "DEFAULT_TRANS",
    "DEFAULT_ITER",
    "DEFAULT_LYAP_ITER",
    "DEFAULT_X0",
    "DEFAULT_R",
    "DEFAULT_HENON_A",
    "DEFAULT_HENON_B",
    "DEFAULT_K",
    "DEFAULT_THETA0",
    "DEFAULT_P0",
    "DEFAULT_EPSILON",
    "DEFAULT_LATTICE_SIZE",
    "DEFAULT_TIME_STEPS",
    # Template dicts
    "MAPS_SCALAR",
    "MAPS_PLANAR",
    "MAPS_TORUS",
    "MAP_TEMPLATES",
    # Build functions
    "sympy_deriv",
    "sympy_jacobian_2d",
    "funtext_1d",
    "funtext_2d_step",
    "funtext_2d_jac",
    "funjit_1d",
    "funjit_1d_deriv",
    "funjit_2d_step",
    "funjit_2d_jac",
    "STEP_SIG",
    "DERIV_SIG",
    "STEP2_SIG",
    "JAC2_SIG",
    "build_map",
    "substitute_common",
    "params_for",
    # Kernels
    "step_logistic",
    "logistic_deriv",
    "step_henon",
    "step_standard",
    "standard_jacobian",
    # Orbits
    "trajectory",
    "attractor",
    "cobweb",
    "phase_space_grid",
    "phase_portrait",
    "rotation_number",
    # Bifurcation
    "bifurcation",
    "sweep_values",
    # Lyapunov
    "lyapunov_exponent",
    "stability_transition",
    "stability_values",
    # Lattices
    "TOPOLOGIES",
    "lattice_step",
    "diffusive_step",
    "global_step",
    "directional_step",
    "random_lattice",
    "evolve_lattice",
    "lattice_statistics",
    # Spectra
    "spatial_power_spectrum",
    "spectrum_history",
    # Logging
    "setup_logging",
]
