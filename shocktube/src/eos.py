"""
Ideal-gas equation of state.

Pressure is never stored; it is always recomputed from (rho, rhoU, rhoE).
Inputs may be scalars or numpy arrays of matching shape.
"""

import numpy as np

GAMMA = 1.4


def pressure(rho, rhoU, rhoE, gamma: float = GAMMA):
    """
    Pressure from conservative variables.

        p = (gamma - 1) * (rhoE - 0.5 * rhoU² / rho)

    rho must be non-zero; no check is made.
    """
    kinetic = 0.5 * rhoU * rhoU / rho
    return (gamma - 1) * (rhoE - kinetic)


def sound_speed(rho, p, gamma: float = GAMMA):
    """Speed of sound sqrt(gamma * p / rho)."""
    return np.sqrt(gamma * p / rho)


def total_energy(rho, u, p, gamma: float = GAMMA):
    """Total energy per volume from primitive variables."""
    return p / (gamma - 1) + 0.5 * rho * u**2
