"""
Runtime diagnostics: physical-state checks, CFL number and domain totals.

The numerical stages never raise; a breakdown shows up as nan/inf or as a
non-positive density or negative pressure. check_physical turns that into
an explicit error.
"""

import numpy as np
from typing import Optional

from .config import SchemeConfig
from .gas import GasProperties
from . import eos


class NonPhysicalStateError(ValueError):
    """Raised when the conserved state no longer describes a physical gas."""

    def __init__(self, message: str, step: Optional[int] = None,
                 indices: Optional[np.ndarray] = None,
                 min_density: float = np.nan, min_pressure: float = np.nan):
        if step is not None:
            message = f"step {step}: {message}"
        super().__init__(message)
        self.step = step
        self.indices = np.array([], dtype=int) if indices is None else indices
        self.min_density = min_density
        self.min_pressure = min_pressure


def find_nonphysical(U: np.ndarray, gas: GasProperties) -> np.ndarray:
    """Indices of cells with non-finite values, rho <= 0 or p < 0."""
    with np.errstate(divide='ignore', invalid='ignore'):
        p = eos.pressure(U[0], U[1], U[2], gas.gamma)
        bad = ~np.all(np.isfinite(U), axis=0) | ~np.isfinite(p) | (U[0] <= 0) | (p < 0)
    return np.flatnonzero(bad)


def check_physical(U: np.ndarray, gas: GasProperties, step: Optional[int] = None):
    """
    Raise NonPhysicalStateError if any cell is non-physical.

    Args:
        U: Conservative variables (3, n_cells)
        gas: Gas properties
        step: Timestep number, reported in the error
    """
    bad = find_nonphysical(U, gas)
    if len(bad) == 0:
        return

    with np.errstate(divide='ignore', invalid='ignore'):
        p = eos.pressure(U[0], U[1], U[2], gas.gamma)
    raise NonPhysicalStateError(
        f"{len(bad)} non-physical cell(s), first at index {bad[0]} "
        f"(rho = {U[0, bad[0]]:.4g}, p = {p[bad[0]]:.4g})",
        step=step, indices=bad,
        min_density=float(np.nanmin(U[0])) if np.any(np.isfinite(U[0])) else np.nan,
        min_pressure=float(np.nanmin(p)) if np.any(np.isfinite(p)) else np.nan,
    )


def cfl_number(U: np.ndarray, scheme: SchemeConfig) -> float:
    """
    Courant number max(|u| + a) * dt / dx of the current state.

    The scheme assumes this stays below 1; nothing enforces it.
    """
    rho = U[0]
    u = U[1] / rho
    p = eos.pressure(U[0], U[1], U[2], scheme.gamma)
    wave_speed = np.abs(u) + eos.sound_speed(rho, p, scheme.gamma)
    return float(np.max(wave_speed) * scheme.dt_over_dx)


def conserved_totals(U: np.ndarray, dx: float) -> np.ndarray:
    """Total mass, momentum and energy in the domain: sum(U) * dx."""
    return np.sum(U, axis=1) * dx
