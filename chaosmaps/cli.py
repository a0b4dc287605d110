#!/usr/bin/env python
"""
chaosmaps command line front end.

Every subcommand computes one array and writes it as CSV to --out (or
stdout). Map parameters are overridden with repeatable --param NAME=VALUE,
e.g.

    chaosmaps trajectory logistic --iter 50 --param r=3.7
    chaosmaps bifurcation logistic --min 2.5 --max 4.0 --steps 500
    chaosmaps sweep standard --min 0 --max 5 --values 101
    chaosmaps lattice global --eps 0.3 --n 64 --steps 200 --seed 7
"""

import sys
import time
import logging
import argparse

import numpy as np

from .defaults import (
    DEFAULT_ITER,
    DEFAULT_LYAP_ITER,
    DEFAULT_TRANS,
    DEFAULT_R,
    DEFAULT_R_MIN,
    DEFAULT_R_MAX,
    DEFAULT_R_STEPS,
    DEFAULT_TOPOLOGY,
    DEFAULT_EPSILON,
    DEFAULT_LATTICE_SIZE,
    DEFAULT_TIME_STEPS,
)
from .templates import MAP_TEMPLATES, build_map
from .map_functions import params_for
from .orbits import trajectory, cobweb
from .bifurcation import bifurcation
from .lyapunov import lyapunov_exponent, stability_transition
from .lattice import TOPOLOGIES, evolve_lattice
from .spectrum import spatial_power_spectrum, spectrum_history
from .logging_config import setup_logging

logger = logging.getLogger("chaosmaps.cli")


def parse_param(kv: str) -> tuple[str, float]:
    if "=" not in kv:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{kv}'")
    k, v = kv.split("=", 1)
    try:
        return k.strip(), float(v)
    except ValueError:
        raise argparse.ArgumentTypeError(f"value for '{k}' is not a number: '{v}'") from None


def _map_params(map_cfg, pairs) -> np.ndarray:
    return params_for(map_cfg, **dict(pairs))


def _write(arr, out, header=""):
    arr = np.atleast_1d(np.asarray(arr, dtype=np.float64))
    if out is None:
        np.savetxt(sys.stdout, arr, delimiter=",", header=header, comments="")
    else:
        np.savetxt(out, arr, delimiter=",", header=header, comments="")
        logger.info(f"saved: {out}")


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def cmd_maps(args):
    for name, tpl in MAP_TEMPLATES.items():
        params = ", ".join(f"{k}={v}" for k, v in tpl.get("params", {}).items())
        print(f"{name}\t{tpl.get('type', 'scalar')}\t{params}")


def cmd_trajectory(args):
    map_cfg = build_map(args.map)
    p = _map_params(map_cfg, args.param)
    if args.cobweb:
        arr = cobweb(map_cfg, args.iter, x0=args.x0, params=p)
        header = "x,f(x)"
    else:
        arr = trajectory(map_cfg, args.iter, x0=args.x0, y0=args.y0, n_transient=args.trans, params=p)
        header = "x" if map_cfg["type"] == "scalar" else "x,y"
    _write(arr, args.out, header)


def cmd_bifurcation(args):
    map_cfg = build_map(args.map)
    p = _map_params(map_cfg, args.param)
    arr = bifurcation(
        map_cfg, args.min, args.max, args.steps,
        param=args.sweep, n_transient=args.trans, n_iter=args.iter,
        coord=args.coord, params=p,
    )
    _write(arr, args.out, f"{args.sweep or map_cfg['param_names'][0]},value")


def cmd_lyapunov(args):
    map_cfg = build_map(args.map)
    p = _map_params(map_cfg, args.param)
    lam = lyapunov_exponent(map_cfg, args.iter, x0=args.x0, y0=args.y0, params=p, n_transient=args.trans)
    _write([lam], args.out, "lyapunov")


def cmd_sweep(args):
    map_cfg = build_map(args.map)
    p = _map_params(map_cfg, args.param)
    arr = stability_transition(
        map_cfg, args.min, args.max, args.values,
        param=args.sweep, x0=args.x0, y0=args.y0,
        n_iter=args.iter, n_transient=args.trans, params=p,
    )
    _write(arr, args.out, f"{args.sweep or map_cfg['param_names'][0]},lyapunov")


def cmd_lattice(args):
    history = evolve_lattice(args.topology, args.r, args.eps, args.n, args.steps, rng=args.seed)
    _write(history, args.out)


def cmd_spectrum(args):
    history = evolve_lattice(args.topology, args.r, args.eps, args.n, args.steps, rng=args.seed)
    if args.all:
        _write(spectrum_history(history), args.out)
    else:
        _write(spatial_power_spectrum(history[-1]), args.out, "power")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _add_map_args(sp, iter_default):
    sp.add_argument("map", choices=sorted(MAP_TEMPLATES), help="Map template name.")
    sp.add_argument(
        "--param",
        type=parse_param,
        action="append",
        default=[],
        help="Override a map parameter NAME=VALUE. Repeatable.",
    )
    sp.add_argument("--iter", type=int, default=iter_default, help="Recorded iterations.")
    sp.add_argument("--trans", type=int, default=DEFAULT_TRANS, help="Discarded transient steps.")


def _add_lattice_args(sp):
    sp.add_argument("topology", nargs="?", default=DEFAULT_TOPOLOGY, choices=sorted(TOPOLOGIES))
    sp.add_argument("--r", type=float, default=DEFAULT_R, help="Logistic rate at every site.")
    sp.add_argument("--eps", type=float, default=DEFAULT_EPSILON, help="Coupling strength.")
    sp.add_argument("--n", type=int, default=DEFAULT_LATTICE_SIZE, help="Lattice size.")
    sp.add_argument("--steps", type=int, default=DEFAULT_TIME_STEPS, help="Time steps (rows).")
    sp.add_argument("--seed", type=int, default=None, help="Random seed for the initial state.")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        "chaosmaps",
        description=(
            "Trajectories, bifurcation diagrams, Lyapunov exponents and\n"
            "coupled map lattices for low-dimensional chaotic maps."
        ),
    )
    p.add_argument("--out", type=str, default=None, help="Output CSV path (stdout if omitted).")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    sub = p.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("maps", help="List map templates.")
    sp.set_defaults(func=cmd_maps)

    sp = sub.add_parser("trajectory", help="Orbit of a map.")
    _add_map_args(sp, DEFAULT_ITER)
    sp.set_defaults(trans=0)
    sp.add_argument("--x0", type=float, default=None)
    sp.add_argument("--y0", type=float, default=None)
    sp.add_argument("--cobweb", action="store_true", help="Emit (x, f(x)) pairs (scalar maps).")
    sp.set_defaults(func=cmd_trajectory)

    sp = sub.add_parser("bifurcation", help="Bifurcation diagram.")
    _add_map_args(sp, DEFAULT_ITER)
    sp.add_argument("--sweep", type=str, default=None, help="Swept parameter (first by default).")
    sp.add_argument("--min", type=float, default=DEFAULT_R_MIN)
    sp.add_argument("--max", type=float, default=DEFAULT_R_MAX)
    sp.add_argument("--steps", type=int, default=DEFAULT_R_STEPS)
    sp.add_argument("--coord", type=int, default=0, choices=(0, 1), help="0 records x, 1 records y.")
    sp.set_defaults(func=cmd_bifurcation)

    sp = sub.add_parser("lyapunov", help="Lyapunov exponent at one parameter point.")
    _add_map_args(sp, DEFAULT_LYAP_ITER)
    sp.add_argument("--x0", type=float, default=None)
    sp.add_argument("--y0", type=float, default=None)
    sp.set_defaults(func=cmd_lyapunov)

    sp = sub.add_parser("sweep", help="Lyapunov exponent against one parameter.")
    _add_map_args(sp, DEFAULT_LYAP_ITER)
    sp.add_argument("--sweep", type=str, default=None, help="Swept parameter (first by default).")
    sp.add_argument("--min", type=float, required=True)
    sp.add_argument("--max", type=float, required=True)
    sp.add_argument("--values", type=int, default=50)
    sp.add_argument("--x0", type=float, default=None)
    sp.add_argument("--y0", type=float, default=None)
    sp.set_defaults(func=cmd_sweep)

    sp = sub.add_parser("lattice", help="Coupled map lattice history.")
    _add_lattice_args(sp)
    sp.set_defaults(func=cmd_lattice)

    sp = sub.add_parser("spectrum", help="Spatial power spectrum of a lattice.")
    _add_lattice_args(sp)
    sp.add_argument("--all", action="store_true", help="Spectrum of every row, not just the last.")
    sp.set_defaults(func=cmd_spectrum)

    return p


def main(argv=None) -> None:
    p = build_parser()
    args = p.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, stream=sys.stderr)

    t0 = time.perf_counter()
    try:
        args.func(args)
    except (ValueError, KeyError) as e:
        raise SystemExit(f"chaosmaps {args.command}: {e}") from e
    logger.info(f"{args.command} time: {time.perf_counter() - t0:.3f}s")


if __name__ == "__main__":
    main()
