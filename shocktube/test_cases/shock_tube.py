"""
Sod's shock tube test case - classic validation for compressible flow solvers.

The shock tube problem (Sod, 1978) is a Riemann problem. In this setup the
high-pressure gas sits on the right (x > 0):
- Left state:  rho = 0.125, u = 0, p = 0.1
- Right state: rho = 1.0,   u = 0, p = 1.0
- Initial discontinuity at x = 0

The exact solution consists of:
1. Left state (undisturbed)
2. Shock wave moving left
3. Contact discontinuity moving left
4. Rarefaction fan moving right
5. Right state (undisturbed)

The exact solver below handles any Riemann problem without vacuum, with a
shock or a rarefaction on either side.
"""

import logging

import numpy as np
from typing import Tuple

from shocktube import (
    Mesh1D, SchemeConfig, Solver1D, SolverConfig, sod_initial_state
)
from shocktube.src.initial import SOD_LEFT, SOD_RIGHT, Primitive

logger = logging.getLogger(__name__)


def _wave_function(p: float, rho_k: float, p_k: float, a_k: float,
                   gamma: float) -> Tuple[float, float]:
    """Pressure function f_K(p) and its derivative for one side of the problem."""
    gm1 = gamma - 1
    gp1 = gamma + 1

    if p > p_k:
        # Shock
        A_k = 2 / (gp1 * rho_k)
        B_k = gm1 / gp1 * p_k
        root = np.sqrt(A_k / (p + B_k))
        f = (p - p_k) * root
        df = root * (1 - 0.5 * (p - p_k) / (p + B_k))
    else:
        # Rarefaction
        p_rat = p / p_k
        f = 2 * a_k / gm1 * (p_rat**(gm1 / (2 * gamma)) - 1)
        df = 1 / (rho_k * a_k) * p_rat**(-gp1 / (2 * gamma))

    return f, df


def star_region(left: Primitive, right: Primitive,
                gamma: float = 1.4, tol: float = 1e-10) -> Tuple[float, float]:
    """
    Pressure and velocity between the two non-linear waves.

    Newton iteration on f_L(p) + f_R(p) + (u_R - u_L) = 0.
    """
    rho_L, u_L, p_L = left
    rho_R, u_R, p_R = right
    a_L = np.sqrt(gamma * p_L / rho_L)
    a_R = np.sqrt(gamma * p_R / rho_R)

    if 2 * (a_L + a_R) / (gamma - 1) <= u_R - u_L:
        raise ValueError("Initial states generate vacuum")

    p_star = max(tol, 0.5 * (p_L + p_R))
    for _ in range(100):
        f_L, df_L = _wave_function(p_star, rho_L, p_L, a_L, gamma)
        f_R, df_R = _wave_function(p_star, rho_R, p_R, a_R, gamma)

        p_new = p_star - (f_L + f_R + (u_R - u_L)) / (df_L + df_R)
        p_new = max(tol, p_new)  # Ensure positive

        converged = abs(p_new - p_star) / (0.5 * (p_new + p_star)) < tol
        p_star = p_new
        if converged:
            break

    f_L, _ = _wave_function(p_star, rho_L, p_L, a_L, gamma)
    f_R, _ = _wave_function(p_star, rho_R, p_R, a_R, gamma)
    u_star = 0.5 * (u_L + u_R) + 0.5 * (f_R - f_L)

    return p_star, u_star


def riemann_exact(x: np.ndarray, t: float, left: Primitive = SOD_LEFT,
                  right: Primitive = SOD_RIGHT, gamma: float = 1.4,
                  x0: float = 0.0) -> dict:
    """
    Exact solution of a 1D Riemann problem.

    Args:
        x: Position array
        t: Time
        left, right: Primitive states (rho, u, p)
        gamma: Specific heat ratio
        x0: Position of the initial discontinuity

    Returns:
        Dictionary with exact solution: rho, u, p, e and the star-region
        pressure/velocity
    """
    rho_L, u_L, p_L = left
    rho_R, u_R, p_R = right
    a_L = np.sqrt(gamma * p_L / rho_L)
    a_R = np.sqrt(gamma * p_R / rho_R)

    gm1 = gamma - 1
    gp1 = gamma + 1

    p_star, u_star = star_region(left, right, gamma)

    x = np.asarray(x, dtype=float)
    rho = np.zeros_like(x)
    u = np.zeros_like(x)
    p = np.zeros_like(x)

    for i, xi in enumerate(x):
        if t > 0:
            s = (xi - x0) / t
        else:
            s = -np.inf if xi <= x0 else np.inf

        if s <= u_star:
            # Left of the contact
            if p_star > p_L:
                S_L = u_L - a_L * np.sqrt(gp1 / (2 * gamma) * p_star / p_L + gm1 / (2 * gamma))
                if s <= S_L:
                    rho[i], u[i], p[i] = rho_L, u_L, p_L
                else:
                    p_rat = p_star / p_L
                    rho[i] = rho_L * (p_rat + gm1 / gp1) / (gm1 / gp1 * p_rat + 1)
                    u[i], p[i] = u_star, p_star
            else:
                head = u_L - a_L
                tail = u_star - a_L * (p_star / p_L)**(gm1 / (2 * gamma))
                if s <= head:
                    rho[i], u[i], p[i] = rho_L, u_L, p_L
                elif s >= tail:
                    rho[i] = rho_L * (p_star / p_L)**(1 / gamma)
                    u[i], p[i] = u_star, p_star
                else:
                    u[i] = 2 / gp1 * (a_L + 0.5 * gm1 * u_L + s)
                    c = 2 / gp1 * (a_L + 0.5 * gm1 * (u_L - s))
                    rho[i] = rho_L * (c / a_L)**(2 / gm1)
                    p[i] = p_L * (c / a_L)**(2 * gamma / gm1)
        else:
            # Right of the contact
            if p_star > p_R:
                S_R = u_R + a_R * np.sqrt(gp1 / (2 * gamma) * p_star / p_R + gm1 / (2 * gamma))
                if s >= S_R:
                    rho[i], u[i], p[i] = rho_R, u_R, p_R
                else:
                    p_rat = p_star / p_R
                    rho[i] = rho_R * (p_rat + gm1 / gp1) / (gm1 / gp1 * p_rat + 1)
                    u[i], p[i] = u_star, p_star
            else:
                head = u_R + a_R
                tail = u_star + a_R * (p_star / p_R)**(gm1 / (2 * gamma))
                if s >= head:
                    rho[i], u[i], p[i] = rho_R, u_R, p_R
                elif s <= tail:
                    rho[i] = rho_R * (p_star / p_R)**(1 / gamma)
                    u[i], p[i] = u_star, p_star
                else:
                    u[i] = 2 / gp1 * (-a_R + 0.5 * gm1 * u_R + s)
                    c = 2 / gp1 * (a_R - 0.5 * gm1 * (u_R - s))
                    rho[i] = rho_R * (c / a_R)**(2 / gm1)
                    p[i] = p_R * (c / a_R)**(2 * gamma / gm1)

    # Compute internal energy
    e = p / (gm1 * rho)

    return {
        'rho': rho,
        'u': u,
        'p': p,
        'e': e,
        'p_star': p_star,
        'u_star': u_star,
    }


def run_shock_tube_test(n_cells: int = 2000, n_steps: int = 50,
                        scheme: SchemeConfig = None, boundary: str = 'transmissive',
                        use_first_order: bool = False):
    """
    Run the Sod shock tube for n_steps time steps and compare with the exact solution.

    Args:
        n_cells: Number of cells (domain symmetric about x = 0)
        n_steps: Number of two-stage time steps
        scheme: Scheme constants (defaults: gamma = 1.4, dt = 0.02, dx = 0.5)
        boundary: Boundary condition name
        use_first_order: Use first-order reconstruction

    Returns:
        solver: Solver after the run
        exact: Exact solution at the final time
    """
    scheme = scheme if scheme is not None else SchemeConfig()
    mesh = Mesh1D.centered(n_cells, scheme.dx)
    config = SolverConfig(n_steps_per_frame=n_steps, n_frames=1, boundary=boundary,
                          use_first_order=use_first_order)

    solver = Solver1D(mesh, scheme, config)
    solver.set_initial_condition(sod_initial_state(mesh.x_cells, scheme.gas))
    solver.solve()

    exact = riemann_exact(mesh.x_cells, solver.time, gamma=scheme.gamma)
    rho_error_l1 = np.mean(np.abs(solver.get_state().rho - exact['rho']))
    logger.info("Sod shock tube: %d cells, t = %.3f, density L1 error = %.3e",
                n_cells, solver.time, rho_error_l1)

    return solver, exact
