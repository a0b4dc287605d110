"""
1D map templates (type="scalar").

State is a single float x; parameters are read from the params array in
the order given by ``params``.
"""

from .defaults import DEFAULT_TRANS, DEFAULT_ITER, DEFAULT_X0, DEFAULT_R

MAPS_SCALAR: dict[str, dict] = {

    "logistic": dict(  # Classic logistic
        type="scalar",
        expr="r * x * (1.0 - x)",
        deriv_expr="r * (1.0 - 2.0 * x)",
        params=dict(r=DEFAULT_R),
        domain=[2.5, 4.0],
        x0=DEFAULT_X0,
        trans=DEFAULT_TRANS,
        iter=DEFAULT_ITER,
    ),

}
