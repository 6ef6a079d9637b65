"""
Numerical flux for the 1D Euler equations.

The flux is the central average of the physical fluxes plus a scalar
artificial dissipation scaled by the Roe-averaged spectral radius. It is an
approximate Riemann flux, not an exact solver.
"""

import numpy as np
from abc import ABC, abstractmethod

from .gas import GasProperties
from . import eos


def physical_flux(U: np.ndarray, gas: GasProperties) -> np.ndarray:
    """
    Exact Euler flux [rho*u, rho*u² + p, rho*u*E + u*p].

    Args:
        U: Conservative variables, shape (3,) or (3, n)
        gas: Gas properties

    Returns:
        Flux with the shape of U
    """
    rho = U[0]
    u = U[1] / rho
    E = U[2] / rho
    p = eos.pressure(U[0], U[1], U[2], gas.gamma)
    return np.array([rho * u,
                     rho * u * u + p,
                     rho * u * E + u * p])


def euler_flux(w_minus: np.ndarray, w_plus: np.ndarray,
               gas: GasProperties) -> np.ndarray:
    """
    Roe-averaged dissipative flux at a face.

    Args:
        w_minus: Reconstructed state from the left of the face, (3,) or (3, n_faces)
        w_plus: Reconstructed state from the right of the face, same shape
        gas: Gas properties

    Returns:
        Numerical flux, same shape as the inputs
    """
    w_minus = np.asarray(w_minus, dtype=float)
    w_plus = np.asarray(w_plus, dtype=float)
    gamma = gas.gamma

    rho_minus, rho_plus = w_minus[0], w_plus[0]
    u_minus, u_plus = w_minus[1] / rho_minus, w_plus[1] / rho_plus
    E_minus, E_plus = w_minus[2] / rho_minus, w_plus[2] / rho_plus

    # Central part
    F = 0.5 * (physical_flux(w_plus, gas) + physical_flux(w_minus, gas))

    # Roe averages (sqrt(rho) weighted)
    sqrt_rho_minus = np.sqrt(rho_minus)
    sqrt_rho_plus = np.sqrt(rho_plus)
    denom_inv = 1.0 / (sqrt_rho_minus + sqrt_rho_plus)

    rho = sqrt_rho_minus * sqrt_rho_plus
    u = (sqrt_rho_minus * u_minus + sqrt_rho_plus * u_plus) * denom_inv
    E = (sqrt_rho_minus * E_minus + sqrt_rho_plus * E_plus) * denom_inv
    p = eos.pressure(rho, rho * u, rho * E, gamma)

    spectral_radius = eos.sound_speed(rho, p, gamma) + np.abs(u)

    # Dissipation
    F += 0.5 * spectral_radius * (w_minus - w_plus)

    return F


class FluxScheme(ABC):
    """Abstract base class for numerical flux schemes."""

    @abstractmethod
    def compute_flux_vectorized(self, UL: np.ndarray, UR: np.ndarray,
                                gas: GasProperties) -> np.ndarray:
        """
        Compute numerical fluxes at all faces (vectorized).

        Args:
            UL: Left states (3, n_faces)
            UR: Right states (3, n_faces)
            gas: Gas properties

        Returns:
            Fluxes at all faces (3, n_faces)
        """
        pass

    def compute_flux(self, UL: np.ndarray, UR: np.ndarray,
                     gas: GasProperties) -> np.ndarray:
        """Single-face flux computation."""
        UL_2d = np.asarray(UL, dtype=float).reshape(-1, 1)
        UR_2d = np.asarray(UR, dtype=float).reshape(-1, 1)
        F_2d = self.compute_flux_vectorized(UL_2d, UR_2d, gas)
        return F_2d[:, 0]


class RoeAveragedFlux(FluxScheme):
    """
    Central flux with Roe-averaged spectral-radius dissipation.

    Robust at shocks; smears contact discontinuities over a few cells.
    """

    def compute_flux_vectorized(self, UL: np.ndarray, UR: np.ndarray,
                                gas: GasProperties) -> np.ndarray:
        return euler_flux(UL, UR, gas)
