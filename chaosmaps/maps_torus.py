"""
2D map templates on the torus (type="torus").

State is (theta, p), both wrapped into [0, 2pi) after every step.
x is theta and y is p in the expression strings.
"""

from .defaults import DEFAULT_TRANS, DEFAULT_LYAP_ITER, DEFAULT_K, DEFAULT_THETA0, DEFAULT_P0

MAPS_TORUS: dict[str, dict] = {

    "standard": dict(  # Chirikov standard map, p first then theta with the new p
        type="torus",
        expr_common=dict(
            p1="wrap_angle(y + k * sin(x))",
        ),
        expr_x="wrap_angle(x + {p1})",
        expr_y="{p1}",
        # d(theta', p')/d(theta, p) at the pre-step theta
        jac_exprs=(
            "1.0 + k * cos(x)",  # dXdx
            "1.0",               # dXdy
            "k * cos(x)",        # dYdx
            "1.0",               # dYdy
        ),
        params=dict(k=DEFAULT_K),
        domain=[0.0, 5.0],
        x0=DEFAULT_THETA0,
        y0=DEFAULT_P0,
        trans=DEFAULT_TRANS,
        iter=DEFAULT_LYAP_ITER,
    ),

}
