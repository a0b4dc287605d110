"""
2D map templates (type="planar").

State is (x, y). Jacobians are derived with sympy unless ``jac_exprs``
is given. The Lyapunov estimate for planar maps uses only dX/dx.
"""

from .defaults import (
    DEFAULT_TRANS,
    DEFAULT_HENON_A,
    DEFAULT_HENON_B,
    DEFAULT_HENON_X0,
    DEFAULT_HENON_Y0,
    DEFAULT_HENON_ITER,
)

MAPS_PLANAR: dict[str, dict] = {

    "henon": dict(
        type="planar",
        expr_x="1.0 - a * x * x + y",
        expr_y="b * x",
        params=dict(
            a=DEFAULT_HENON_A,
            b=DEFAULT_HENON_B,
        ),
        domain=[1.0, 1.4],
        x0=DEFAULT_HENON_X0,
        y0=DEFAULT_HENON_Y0,
        trans=DEFAULT_TRANS,
        iter=DEFAULT_HENON_ITER,
    ),

}
