"""
Run the Sod shock tube and plot the result against the exact Riemann solution.

Each frame is n_steps_per_frame two-stage time steps; one density/pressure
snapshot is kept per frame.

Run from the repository root:
    python -m shocktube.scripts.run_shock_tube --frames 20 -v
"""

import argparse
import json
import logging
import sys
import time

import numpy as np
import matplotlib.pyplot as plt

from shocktube import (
    Mesh1D, SchemeConfig, Solver1D, SolverConfig, sod_initial_state
)
from shocktube.test_cases import riemann_exact

logger = logging.getLogger("shocktube")


def configure_logging(verbose: bool, very_verbose: bool):
    if very_verbose:
        logger.setLevel(logging.DEBUG)
        ch = logging.StreamHandler(stream=sys.stdout)
        ch.setLevel(logging.DEBUG)
    elif verbose:
        logger.setLevel(logging.INFO)
        ch = logging.StreamHandler(stream=sys.stdout)
        ch.setLevel(logging.INFO)
    else:
        logger.setLevel(logging.WARNING)
        ch = logging.StreamHandler(stream=sys.stderr)
        ch.setLevel(logging.WARNING)

    # Create formatter for message output
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    ch.setFormatter(formatter)
    logger.addHandler(ch)


def build_configs(args):
    """SchemeConfig and SolverConfig from an optional JSON file, overridden by flags."""
    scheme_data, solver_data = {}, {}
    if args.config:
        with open(args.config) as f:
            data = json.load(f)
        scheme_data = data.get("scheme", {})
        solver_data = data.get("solver", {})

    if args.gamma is not None:
        scheme_data["gas"] = {"gamma": args.gamma}
    if args.steps_per_frame is not None:
        solver_data["n_steps_per_frame"] = args.steps_per_frame
    if args.frames is not None:
        solver_data["n_frames"] = args.frames
    if args.boundary is not None:
        solver_data["boundary"] = args.boundary
    if args.first_order:
        solver_data["use_first_order"] = True

    return SchemeConfig(**scheme_data), SolverConfig(**solver_data)


def plot_comparison(solver, exact, filename):
    """Density, velocity and pressure against the exact solution."""
    state = solver.get_state()
    x = solver.mesh.x_cells

    fig, axes = plt.subplots(1, 3, figsize=(15, 4))
    fig.suptitle(f'Sod Shock Tube: t = {solver.time:.3f}', fontsize=14, fontweight='bold')

    for ax, key, values, label in zip(axes, ('rho', 'u', 'p'), (state.rho, state.u, state.p),
                                      ('Density', 'Velocity', 'Pressure')):
        ax.plot(x, values, 'b-', linewidth=2, label='FV')
        ax.plot(x, exact[key], 'r--', linewidth=2, label='Exact')
        ax.axvline(x=0.0, color='gray', linestyle=':', alpha=0.5)
        ax.set_xlabel('x')
        ax.set_ylabel(label)
        ax.set_title(label)
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()
    fig.savefig(filename, dpi=150, bbox_inches='tight')
    logger.info("Saved comparison plot to %s", filename)
    return fig


def main(args):
    configure_logging(args.verbose, args.very_verbose)

    scheme, config = build_configs(args)
    mesh = Mesh1D.centered(args.n_cells, scheme.dx)

    solver = Solver1D(mesh, scheme, config)
    solver.set_initial_condition(sod_initial_state(mesh.x_cells, scheme.gas))

    t0 = time.time()
    info = solver.solve()
    logger.info("Finished %d steps (t = %.3f) in %.2f seconds",
                info['iterations'], info['time'], time.time() - t0)

    exact = riemann_exact(mesh.x_cells, solver.time, gamma=scheme.gamma)
    state = solver.get_state()
    for key, values in (('rho', state.rho), ('u', state.u), ('p', state.p)):
        error = np.abs(values - exact[key])
        print(f"{key:>3s}: L1 = {np.mean(error):.4e}, Linf = {np.max(error):.4e}")

    if args.output:
        plot_comparison(solver, exact, args.output)
        if config.record_history and config.n_frames > 1:
            history_file = args.output.rsplit('.', 1)[0] + '_history.png'
            solver.plot_solution(history_file)

    return info


def cli():
    parser = argparse.ArgumentParser("Run the 1D Sod shock tube with the two-stage finite-volume scheme.")
    parser.add_argument("-n", "--n-cells", type=int, default=2000, help="number of cells")
    parser.add_argument("-s", "--steps-per-frame", type=int, default=None,
                        help="time steps per recorded frame (default 50)")
    parser.add_argument("-f", "--frames", type=int, default=None, help="number of frames (default 1)")
    parser.add_argument("-b", "--boundary", choices=("transmissive", "clamped", "periodic", "wall"),
                        default=None, help="boundary condition on both ends")
    parser.add_argument("--gamma", type=float, default=None, help="ratio of specific heats")
    parser.add_argument("--first-order", action="store_true", help="disable the limited reconstruction")
    parser.add_argument("-c", "--config", default=None,
                        help="JSON file with optional 'scheme' and 'solver' sections")
    parser.add_argument("-o", "--output", default=None, help="write comparison plot to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable verbose output")
    parser.add_argument("-vv", "--very-verbose", action="store_true", help="enable very verbose output")

    main(parser.parse_args())


if __name__ == "__main__":
    cli()
