"""
Default values for map templates, analyzers and lattices.
"""

import math

DEFAULT_MAP_NAME = "logistic"
DEFAULT_TRANS = 100
DEFAULT_ITER = 100
DEFAULT_LYAP_ITER = 1000
DEFAULT_X0 = 0.5

# logistic
DEFAULT_R = 3.9
DEFAULT_R_MIN = 2.5
DEFAULT_R_MAX = 4.0
DEFAULT_R_STEPS = 500

# henon
DEFAULT_HENON_A = 1.4
DEFAULT_HENON_B = 0.3
DEFAULT_HENON_X0 = 0.1
DEFAULT_HENON_Y0 = 0.1
DEFAULT_HENON_ITER = 1000

# standard map, reference initial condition for stability sweeps
DEFAULT_K = 1.0
DEFAULT_THETA0 = math.pi
DEFAULT_P0 = 0.5

# coupled map lattice
DEFAULT_TOPOLOGY = "diffusive"
DEFAULT_EPSILON = 0.4
DEFAULT_LATTICE_SIZE = 100
DEFAULT_TIME_STEPS = 100
