"""
Stages of the two-stage explicit time integration.

One full timestep is

    ratio stage -> update stage (scale 0.5) -> ratio stage -> update stage (scale 1.0)

Both update stages advance the state held at the start of the step; the
corrector evaluates its fluxes on the predicted half-step state. Each stage
reads a complete previous generation and returns a new array.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from .config import SchemeConfig
from .gas import GasProperties
from .flux import FluxScheme, RoeAveragedFlux
from .boundary import BoundaryCondition, add_ghosts, add_ratio_ghosts
from .reconstruction import reconstruct_faces, reconstruct_first_order
from . import eos

HALF_STEP = 0.5
FULL_STEP = 1.0


@dataclass
class RatioBundle:
    """Conserved state passed through together with its smoothness ratio."""
    U: np.ndarray       # Conservative variables (3, n_cells)
    r: np.ndarray       # Smoothness ratio (n_cells,)


def pressure_ratio(U: np.ndarray, gas: GasProperties) -> np.ndarray:
    """
    Pressure-gradient ratio r = (pR - p) / (p - pL) for every interior cell.

    A flat neighbourhood gives inf or nan; this is left to the limiter.

    Args:
        U: Conservative variables with ghost cells (3, n_cells + 2)
        gas: Gas properties

    Returns:
        r: (n_cells,)
    """
    p = eos.pressure(U[0], U[1], U[2], gas.gamma)
    with np.errstate(divide='ignore', invalid='ignore'):
        return (p[2:] - p[1:-1]) / (p[1:-1] - p[:-2])


def pressure_ratio_stage(U: np.ndarray, bc_left: BoundaryCondition,
                         bc_right: BoundaryCondition,
                         gas: GasProperties) -> RatioBundle:
    """Ratio stage: bundle a copy of U with its smoothness ratio."""
    U_ghost = add_ghosts(U, bc_left, bc_right)
    return RatioBundle(U=U_ghost[:, 1:-1].copy(), r=pressure_ratio(U_ghost, gas))


def compute_face_fluxes(bundle: RatioBundle, gas: GasProperties,
                        bc_left: BoundaryCondition, bc_right: BoundaryCondition,
                        flux_scheme: Optional[FluxScheme] = None,
                        use_first_order: bool = False) -> np.ndarray:
    """
    Numerical flux at every face of the domain, boundary faces included.

    Returns:
        F: (3, n_cells + 1); face i is the left face of cell i
    """
    if flux_scheme is None:
        flux_scheme = RoeAveragedFlux()

    U_ghost = add_ghosts(bundle.U, bc_left, bc_right)

    if use_first_order:
        UL, UR = reconstruct_first_order(U_ghost)
    else:
        r_ghost = add_ratio_ghosts(bundle.r, bc_left, bc_right)
        UL, UR = reconstruct_faces(U_ghost, r_ghost)

    return flux_scheme.compute_flux_vectorized(UL, UR, gas)


def update_stage(U_base: np.ndarray, bundle: RatioBundle, scale: float,
                 scheme: SchemeConfig, bc_left: BoundaryCondition,
                 bc_right: BoundaryCondition,
                 flux_scheme: Optional[FluxScheme] = None,
                 use_first_order: bool = False) -> np.ndarray:
    """
    Conservative update of U_base with fluxes evaluated on the bundle:

        U_new = U_base - scale * dt/dx * (F_right - F_left)

    Args:
        U_base: State being advanced (3, n_cells)
        bundle: State and ratio the fluxes are evaluated on
        scale: HALF_STEP for the predictor, FULL_STEP for the corrector
        scheme: Scheme constants
        bc_left, bc_right: Boundary conditions
        flux_scheme: Numerical flux (RoeAveragedFlux by default)
        use_first_order: Skip the limited reconstruction

    Returns:
        U_new: (3, n_cells)
    """
    F = compute_face_fluxes(bundle, scheme.gas, bc_left, bc_right,
                            flux_scheme, use_first_order)
    return U_base - scale * scheme.dt_over_dx * (F[:, 1:] - F[:, :-1])


def two_stage_step(U: np.ndarray, scheme: SchemeConfig,
                   bc_left: BoundaryCondition, bc_right: BoundaryCondition,
                   flux_scheme: Optional[FluxScheme] = None,
                   use_first_order: bool = False) -> np.ndarray:
    """
    Advance U by one full timestep dt (predictor/corrector).

    Args:
        U: Conservative variables (interior cells only, 3 x n_cells)
        scheme: Scheme constants
        bc_left, bc_right: Boundary conditions
        flux_scheme: Numerical flux (RoeAveragedFlux by default)
        use_first_order: Use first-order reconstruction

    Returns:
        U_new: Updated conservative variables
    """
    if flux_scheme is None:
        flux_scheme = RoeAveragedFlux()
    gas = scheme.gas

    bundle = pressure_ratio_stage(U, bc_left, bc_right, gas)
    U_half = update_stage(U, bundle, HALF_STEP, scheme, bc_left, bc_right,
                          flux_scheme, use_first_order)

    bundle_half = pressure_ratio_stage(U_half, bc_left, bc_right, gas)
    return update_stage(U, bundle_half, FULL_STEP, scheme, bc_left, bc_right,
                        flux_scheme, use_first_order)
